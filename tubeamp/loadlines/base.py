from __future__ import annotations
from dataclasses import dataclass
from abc import ABC, abstractmethod
from typing import List
import math


@dataclass(frozen=True)
class CharacteristicPoint:
    """
    Vertex of a plotted curve: x is plate voltage (V), y is plate current (A),
    Vg the grid voltage the point belongs to when it is known.
    """
    x: float
    y: float
    Vg: float | None = None


def format_resistance(r: float) -> str:
    if math.isinf(r):
        return "∞ Ω"
    if abs(r) >= 1e6:
        return f"{r / 1e6:.3g} MΩ"
    if abs(r) >= 1e3:
        return f"{r / 1e3:.3g} kΩ"
    return f"{r:.3g} Ω"


def current_through(dv: float, r: float) -> float:
    """
    Current dv/r through a resistance; a zero resistance passes unlimited
    current in the direction of the voltage drop.
    """
    if r > 0:
        return dv / r
    if dv == 0:
        return 0.0
    return math.copysign(math.inf, dv)


class LoadLine(ABC):
    """
    Circuit constraint relating plate voltage and plate current.

    Load lines are immutable values; the engine builds a fresh one from the
    current circuit state whenever it needs one.
    """

    @abstractmethod
    def I(self, V: float) -> float:
        """Plate current at plate voltage V."""

    @abstractmethod
    def V(self, I: float) -> float:
        """Plate voltage at plate current I."""

    @abstractmethod
    def get_line(self) -> List[CharacteristicPoint]:
        """Ordered vertices sufficient to draw the line."""

    @abstractmethod
    def info(self) -> str:
        """Human readable summary of the load."""

    @abstractmethod
    def vq(self) -> float:
        """Quiescent plate voltage implied by the line alone."""

    @abstractmethod
    def iq(self) -> float:
        """Quiescent plate current implied by the line alone."""
