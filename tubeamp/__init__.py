"""
Operating point design of vacuum tube amplifier stages.

Tube characteristic models, circuit load lines, and an engine that keeps a
stage's bias, quiescent point and cathode resistor consistent as any one of
them is edited.
"""

from .amp import Amp, analysis  # noqa: F401
from .models import create_tube, ScreenContext, KorenParams, AyumiParams  # noqa: F401
from .tube import TubeInfo, TubeDefaults, TubeLimits  # noqa: F401
from .database import TUBES, find_tube  # noqa: F401
from .config import BisectionConfig  # noqa: F401
from .errors import TubeAmpError, RootNotFound, UnsupportedModel  # noqa: F401
from . import models  # noqa: F401
from . import loadlines  # noqa: F401
from . import solver  # noqa: F401

__all__ = [
    "Amp",
    "analysis",
    "create_tube",
    "ScreenContext",
    "KorenParams",
    "AyumiParams",
    "TubeInfo",
    "TubeDefaults",
    "TubeLimits",
    "TUBES",
    "find_tube",
    "BisectionConfig",
    "TubeAmpError",
    "RootNotFound",
    "UnsupportedModel",
    "models",
    "loadlines",
    "solver",
]
