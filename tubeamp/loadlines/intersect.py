from __future__ import annotations
from typing import Callable
import numpy as np

from ..config import BisectionConfig, PLATE_VOLTAGE_BRACKET, SELF_BIAS_GRID_BRACKET
from ..models import TubeModel, ScreenContext
from ..solver import bisect
from .base import LoadLine
from .cathode import CathodeLoadLine

# Grid voltage -> load line valid at that grid voltage
LineAt = Callable[[float], LoadLine]


def intersect_characteristic_with_load_line_v(model: TubeModel, Vg: float, load_line: LoadLine,
                                              screen: ScreenContext | None = None,
                                              cfg: BisectionConfig | None = None) -> float:
    """
    Plate voltage where the characteristic at grid voltage Vg crosses a load line.
    """
    lo, hi = PLATE_VOLTAGE_BRACKET
    return bisect(lambda Vp: model.Ip(Vg, Vp, screen) - load_line.I(Vp), lo, hi, cfg)


def intersect_load_lines(dc_load_line: LoadLine, cathode_load_line: CathodeLoadLine, model: TubeModel,
                         screen: ScreenContext | None = None,
                         cfg: BisectionConfig | None = None) -> float:
    """
    Self-consistent grid voltage of a cathode biased stage.

    At the returned Vg the cathode current -Vg/Rk puts the plate at the same
    voltage on the DC load line as the tube itself needs to draw that current.
    """
    def mismatch(Vg: float) -> float:
        Ip = cathode_load_line.I(Vg)
        return dc_load_line.V(Ip) - model.Vp(Vg, Ip, screen, cfg)

    lo, hi = SELF_BIAS_GRID_BRACKET
    return bisect(mismatch, lo, hi, cfg)


def grid_voltage_for_current(model: TubeModel, Ip: float, line_at: LineAt,
                             screen: ScreenContext | None = None,
                             cfg: BisectionConfig | None = None) -> float:
    """
    Grid voltage at which the tube draws Ip on a load line that itself moves
    with the grid voltage (cathode bias).
    """
    lo, hi = SELF_BIAS_GRID_BRACKET
    return bisect(lambda Vg: model.Ip(Vg, line_at(Vg).V(Ip), screen) - Ip, lo, hi, cfg)


def grid_voltage_for_plate_voltage(model: TubeModel, Vp: float, line_at: LineAt,
                                   screen: ScreenContext | None = None,
                                   cfg: BisectionConfig | None = None,
                                   samples: int = 81) -> float:
    """
    Grid voltage that puts the plate at Vp on a load line that moves with the
    grid voltage (cathode bias).

    The mismatch between tube current and line current also vanishes at the
    cutoff end of the bracket, where both are zero, so the bracket is first
    scanned for the conducting crossing before bisecting.
    """
    def mismatch(Vg: float) -> float:
        return model.Ip(Vg, Vp, screen) - line_at(Vg).I(Vp)

    lo, hi = SELF_BIAS_GRID_BRACKET
    grid = np.linspace(lo, hi, samples)
    values = np.array([mismatch(Vg) for Vg in grid])
    negative = np.flatnonzero(values < 0)
    if negative.size == 0:
        return lo
    k = negative[-1]
    if k == grid.size - 1:
        return hi
    return bisect(mismatch, float(grid[k]), float(grid[k + 1]), cfg)
