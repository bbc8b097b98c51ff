from __future__ import annotations
from dataclasses import dataclass
from abc import ABC, abstractmethod
import numpy as np

from ..config import BisectionConfig, GRID_VOLTAGE_BRACKET, PLATE_VOLTAGE_BRACKET
from ..solver import bisect

Array = np.ndarray

MODES = ("triode", "pentode", "ultralinear")


@dataclass(frozen=True)
class ScreenContext:
    """
    Screen-grid wiring of a multi-grid tube.

    Attributes:
        mode: 'triode' (screen strapped to plate), 'pentode' (screen held at Vg2),
            'ultralinear' (screen on a transformer tap) or None for plain triodes.
        Vg2: Screen supply voltage.
        ultralinear_tap: Tap position in percent of the primary (0-100).
    """
    mode: str | None = None
    Vg2: float | None = None
    ultralinear_tap: float = 0.0

    def screen_voltage(self, Vp):
        """
        Effective screen voltage for a given plate voltage.
        """
        if self.mode == "triode":
            return Vp
        if self.Vg2 is None:
            raise ValueError(f"Screen voltage Vg2 is required in '{self.mode}' mode.")
        if self.mode == "ultralinear":
            t = self.ultralinear_tap / 100.0
            return self.Vg2 * (1.0 - t) + Vp * t
        return self.Vg2


def softplus(x):
    return np.logaddexp(0.0, x)


def as_output(x):
    return float(x) if np.ndim(x) == 0 else x


class TubeModel(ABC):
    """
    Base class for tube characteristic models.

    Subclasses implement the closed-form plate current; the inverse queries
    (grid voltage or plate voltage for a target current) are solved by
    bisection on top of it.
    """

    category: str = ""

    def __init__(self, params) -> None:
        self.params = params

    @property
    def type(self) -> str:
        return self.params.type

    @abstractmethod
    def Ip(self, Vg, Vp, screen: ScreenContext | None = None):
        """
        Plate current (A) at grid voltage Vg and plate voltage Vp.
        Accepts scalars or numpy arrays; never negative.
        """

    def Vg(self, Vp: float, Ip: float, screen: ScreenContext | None = None,
           cfg: BisectionConfig | None = None) -> float:
        lo, hi = GRID_VOLTAGE_BRACKET
        return bisect(lambda vg: self.Ip(vg, Vp, screen) - Ip, lo, hi, cfg)

    def Vp(self, Vg: float, Ip: float, screen: ScreenContext | None = None,
           cfg: BisectionConfig | None = None) -> float:
        lo, hi = PLATE_VOLTAGE_BRACKET
        return bisect(lambda vp: self.Ip(Vg, vp, screen) - Ip, lo, hi, cfg)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params!r})"


class Triode(TubeModel):
    category = "triode"


class Pentode(TubeModel):
    category = "pentode"
