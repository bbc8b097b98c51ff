from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .base import LoadLine, CharacteristicPoint, format_resistance, current_through


@dataclass(frozen=True)
class ACLoadLine(LoadLine):
    """
    Signal load seen by the plate: the plate load (plus an unbypassed cathode
    resistor) in parallel with the next stage's input impedance, pivoting on
    the quiescent point.

    Attributes:
        Rp: Plate load.
        Rk: Cathode resistor (0 under fixed bias).
        Znext: Input impedance of the next stage, None or 0 when unloaded.
        Vq: Quiescent plate voltage.
        Iq: Quiescent plate current.
        cathode_bypass: Whether Rk is decoupled for signal.
    """
    Rp: float
    Rk: float = 0.0
    Znext: float | None = None
    Vq: float = 0.0
    Iq: float = 0.0
    cathode_bypass: bool = True

    @property
    def R(self) -> float:
        return self.Rp if self.cathode_bypass else self.Rp + self.Rk

    @property
    def Z(self) -> float:
        if not self.Znext or self.R + self.Znext == 0:
            return self.R
        return self.R * self.Znext / (self.R + self.Znext)

    def I(self, V: float) -> float:
        return current_through(self.Vq - V, self.Z) + self.Iq

    def V(self, I: float) -> float:
        return self.Vq + self.Z * (self.Iq - I)

    def get_line(self) -> List[CharacteristicPoint]:
        return [CharacteristicPoint(0.0, self.I(0.0)), CharacteristicPoint(self.V(0.0), 0.0)]

    def info(self) -> str:
        if not self.Znext:
            return f"AC load: {format_resistance(self.Z)}"
        return f"AC load: {format_resistance(self.Z)} ({format_resistance(self.R)} || {format_resistance(self.Znext)})"

    def vq(self) -> float:
        return self.Vq

    def iq(self) -> float:
        return self.Iq
