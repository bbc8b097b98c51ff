"""
Load lines: circuit constraints between plate voltage and plate current.
"""

from .base import LoadLine, CharacteristicPoint  # noqa: F401
from .dc import (  # noqa: F401
    DCResistiveLoadLine,
    DCSingleEndedReactiveLoadLine,
    DCPushPullReactiveLoadLine,
    DCChokeLoadLine,
    create_dc_load_line,
    TOPOLOGIES,
    LOAD_TYPES,
)
from .cathode import CathodeLoadLine  # noqa: F401
from .ac import ACLoadLine  # noqa: F401
from .intersect import (  # noqa: F401
    intersect_characteristic_with_load_line_v,
    intersect_load_lines,
    grid_voltage_for_current,
    grid_voltage_for_plate_voltage,
)

__all__ = [
    "LoadLine",
    "CharacteristicPoint",
    "DCResistiveLoadLine",
    "DCSingleEndedReactiveLoadLine",
    "DCPushPullReactiveLoadLine",
    "DCChokeLoadLine",
    "create_dc_load_line",
    "TOPOLOGIES",
    "LOAD_TYPES",
    "CathodeLoadLine",
    "ACLoadLine",
    "intersect_characteristic_with_load_line_v",
    "intersect_load_lines",
    "grid_voltage_for_current",
    "grid_voltage_for_plate_voltage",
]
