"""
Operating point engine and the analyses built on it.
"""

from .engine import Amp, RECALCULATION_PIPELINES, BIAS_METHODS  # noqa: F401
from . import analysis  # noqa: F401
from .analysis import CharacteristicCurve, OutputSample  # noqa: F401

__all__ = [
    "Amp",
    "RECALCULATION_PIPELINES",
    "BIAS_METHODS",
    "analysis",
    "CharacteristicCurve",
    "OutputSample",
]
