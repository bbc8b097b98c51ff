from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Union, Mapping

from .models.params import ModelParams


@dataclass(frozen=True)
class TubeLimits:
    """
    Ratings of a physical tube; every clamp in the amp engine reads these.

    Attributes:
        max_pp: Maximum plate dissipation (W).
        max_vp: Maximum plate voltage in operation (V).
        max_vp0: Maximum plate voltage at cutoff (V).
        max_ip: Maximum plate current (A).
        min_vg: Most negative grid voltage of interest (V).
        max_vg: Most positive grid voltage allowed (V).
        grid_step: Spacing of the plotted grid voltage curves (V).
        max_vg2: Maximum screen voltage (V), multi-grid tubes only.
    """
    max_pp: float
    max_vp: float
    max_vp0: float
    max_ip: float
    min_vg: float
    max_vg: float
    grid_step: float
    max_vg2: float | None = None


@dataclass(frozen=True)
class TubeDefaults:
    """Starting point of a new design."""
    Bplus: float
    Rp: float
    Iq: float
    Vg2: float | None = None


@dataclass(frozen=True)
class TubeInfo:
    """
    Database record of a physical tube.

    Attributes:
        name: Tube designation.
        type: Device category: 'triode', 'tetrode' or 'pentode'.
        defaults: Starting point of a new design.
        limits: Ratings.
        models: Parameter records of the published models of this tube.
        datasheet: Link to the manufacturer's data.
    """
    name: str
    type: str
    defaults: TubeDefaults
    limits: TubeLimits
    models: Tuple[Union[ModelParams, Mapping], ...] = field(default_factory=tuple)
    datasheet: str | None = None
