from __future__ import annotations
from dataclasses import dataclass
from typing import List
import math

from ..config import CATHODE_SAMPLE_DIVISOR, LINE_SIMPLIFY_TOLERANCE
from ..models import TubeModel, ScreenContext
from ..utils import frange, simplify
from .base import LoadLine, CharacteristicPoint, format_resistance


@dataclass(frozen=True)
class CathodeLoadLine(LoadLine):
    """
    Cathode self-bias constraint: the grid sits at -I*Rk below the cathode.

    Unlike the plate load lines its independent variable is the grid voltage,
    I(Vg) = -Vg / Rk_eff, while V(I) goes through the tube model to find the
    plate voltage at which the tube draws I with that bias.

    Attributes:
        model: Tube model the line is read through.
        Rk: Cathode resistor.
        topology: 'pp' doubles the effective resistance (both tubes share Rk).
        Vg: Current grid voltage, used by rk().
        Iq: Current quiescent plate current, used by rk().
        screen: Screen wiring passed to the model.
        min_vg, max_vg, grid_step: Grid range sampled by get_line().
    """
    model: TubeModel
    Rk: float = 0.0
    topology: str = "se"
    Vg: float | None = None
    Iq: float = 0.0
    screen: ScreenContext | None = None
    min_vg: float = -10.0
    max_vg: float = 0.0
    grid_step: float = 1.0

    @property
    def factor(self) -> float:
        return 2.0 if self.topology == "pp" else 1.0

    @property
    def Rk_eff(self) -> float:
        return self.Rk * self.factor

    def I(self, Vg: float) -> float:
        if self.Rk_eff > 0:
            return -Vg / self.Rk_eff
        return math.inf if Vg < 0 else 0.0

    def grid_voltage(self, I: float) -> float:
        return -I * self.Rk_eff

    def V(self, I: float) -> float:
        return self.model.Vp(self.grid_voltage(I), I, self.screen)

    def rk(self) -> float:
        """
        Cathode resistor that produces the current grid voltage at the current
        quiescent current, independent of the stored Rk. Without a grid voltage
        or without current the stored Rk is returned.
        """
        if self.Vg is None or self.Iq == 0:
            return self.Rk
        return max(0.0, -self.Vg / self.Iq) / self.factor

    def get_line(self) -> List[CharacteristicPoint]:
        points = []
        for Vg in frange(self.min_vg, self.max_vg, self.grid_step / CATHODE_SAMPLE_DIVISOR):
            I = self.I(Vg)
            if math.isinf(I):
                continue
            points.append(CharacteristicPoint(self.model.Vp(Vg, I, self.screen), I, float(Vg)))
        return simplify(points, LINE_SIMPLIFY_TOLERANCE)

    def info(self) -> str:
        return f"Cathode: {format_resistance(self.Rk)}"

    def vq(self) -> float:
        return self.V(self.Iq)

    def iq(self) -> float:
        return self.Iq
