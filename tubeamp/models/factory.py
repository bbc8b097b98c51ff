from __future__ import annotations
from typing import Dict, Mapping, Tuple, Type

from ..errors import UnsupportedModel
from ..logging import logger
from .base import TubeModel
from .params import ModelParams, params_from_dict
from .triode import KorenTriode, AyumiTriode
from .pentode import KorenPentode

CATEGORIES = ("triode", "tetrode", "pentode")

# (device category, parameter record type) -> implementation
MODEL_TABLE: Dict[Tuple[str, str], Type[TubeModel]] = {
    ("triode", "koren"): KorenTriode,
    ("triode", "ayumi"): AyumiTriode,
    ("pentode", "koren"): KorenPentode,
    ("tetrode", "koren"): KorenPentode,
}


def create_tube(category: str, params: ModelParams | Mapping) -> TubeModel:
    """
    Build the tube model for a device category and a parameter record.

    Args:
        category: 'triode', 'tetrode' or 'pentode'.
        params: Parameter record, or a mapping carrying a ``type`` tag.

    Returns:
        A new, immutable TubeModel.

    Raises:
        UnsupportedModel: No model implements this (category, type) pair.
    """
    model_type = params.get("type") if isinstance(params, Mapping) else params.type
    cls = MODEL_TABLE.get((category, model_type))
    if cls is None:
        raise UnsupportedModel(category, str(model_type))
    if isinstance(params, Mapping):
        params = params_from_dict(params)
    logger.debug(f"creating {cls.__name__} for {category}/{model_type}")
    return cls(params)
