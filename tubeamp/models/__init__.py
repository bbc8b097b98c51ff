"""
Tube characteristic models and the factory that selects them.
"""

from .base import TubeModel, Triode, Pentode, ScreenContext, MODES  # noqa: F401
from .params import KorenParams, AyumiParams, ModelParams, params_from_dict  # noqa: F401
from .triode import KorenTriode, AyumiTriode  # noqa: F401
from .pentode import KorenPentode  # noqa: F401
from .factory import create_tube, MODEL_TABLE, CATEGORIES  # noqa: F401

__all__ = [
    "TubeModel",
    "Triode",
    "Pentode",
    "ScreenContext",
    "MODES",
    "KorenParams",
    "AyumiParams",
    "ModelParams",
    "params_from_dict",
    "KorenTriode",
    "AyumiTriode",
    "KorenPentode",
    "create_tube",
    "MODEL_TABLE",
    "CATEGORIES",
]
