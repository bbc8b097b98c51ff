from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Tuple

from .base import LoadLine, CharacteristicPoint, format_resistance, current_through

TOPOLOGIES = ("se", "pp")
LOAD_TYPES = ("resistive", "reactive")


@dataclass(frozen=True)
class DCResistiveLoadLine(LoadLine):
    """
    Plate resistor fed from the supply: I(V) = (Bplus - V) / (Rp + Rk).

    Attributes:
        Bplus: Supply voltage.
        Rp: Effective plate resistance.
        Rk: Effective cathode resistance in series with the plate circuit.
        Iq: Quiescent current the line is read at by vq().
    """
    Bplus: float
    Rp: float
    Rk: float = 0.0
    Iq: float = 0.0

    @property
    def R(self) -> float:
        return self.Rp + self.Rk

    def I(self, V: float) -> float:
        return current_through(self.Bplus - V, self.R)

    def V(self, I: float) -> float:
        return self.Bplus - I * self.R

    def get_line(self) -> List[CharacteristicPoint]:
        return [CharacteristicPoint(0.0, self.I(0.0)), CharacteristicPoint(self.Bplus, 0.0)]

    def info(self) -> str:
        return f"DC load: {format_resistance(self.R)} resistive from B+ {self.Bplus:.0f} V"

    def vq(self) -> float:
        return self.V(self.Iq)

    def iq(self) -> float:
        return self.Iq

    def self_biased(self, Vg: float) -> DCResistiveLoadLine:
        """
        Equivalent line when the cathode drop equals -Vg (cathode bias). The
        plate-to-cathode voltage is then Bplus + Vg - I*Rp.
        """
        return replace(self, Bplus=self.Bplus + Vg, Rk=0.0)


@dataclass(frozen=True)
class DCSingleEndedReactiveLoadLine(LoadLine):
    """
    Transformer or choke load of a single-ended stage. The line pivots on the
    quiescent point: I(V) = (Vq - V) / R + Iq.
    """
    Vq: float
    Iq: float
    R: float

    def I(self, V: float) -> float:
        return current_through(self.Vq - V, self.R) + self.Iq

    def V(self, I: float) -> float:
        return self.Vq + self.R * (self.Iq - I)

    def get_line(self) -> List[CharacteristicPoint]:
        return [CharacteristicPoint(0.0, self.I(0.0)), CharacteristicPoint(self.V(0.0), 0.0)]

    def info(self) -> str:
        return f"DC load: {format_resistance(self.R)} reactive, single ended"

    def vq(self) -> float:
        return self.Vq

    def iq(self) -> float:
        return self.Iq


@dataclass(frozen=True)
class DCPushPullReactiveLoadLine(LoadLine):
    """
    Output transformer of a push-pull pair, R being the plate-to-plate load.

    Above the knee both tubes conduct (class A) and each sees R/2. Below it
    one tube is cut off and the other sees R/4 (class B).
    """
    Vq: float
    Iq: float
    R: float

    @property
    def Zpa(self) -> float:
        return self.R / 2.0

    @property
    def Zpb(self) -> float:
        return self.R / 4.0

    @property
    def knee(self) -> Tuple[float, float]:
        return self.Vq - self.Iq * self.Zpa, 2.0 * self.Iq

    def I(self, V: float) -> float:
        Vlim, _ = self.knee
        if V <= Vlim:
            return current_through(self.Vq - V, self.Zpb)
        return current_through(self.Vq - V, self.Zpa) + self.Iq

    def V(self, I: float) -> float:
        _, Ilim = self.knee
        if I >= Ilim:
            return self.Vq - self.Zpb * I
        return self.Vq - self.Zpa * (I - self.Iq)

    def get_line(self) -> List[CharacteristicPoint]:
        Vlim, Ilim = self.knee
        return [
            CharacteristicPoint(0.0, self.I(0.0)),
            CharacteristicPoint(Vlim, Ilim),
            CharacteristicPoint(self.V(0.0), 0.0),
        ]

    def info(self) -> str:
        return (f"DC load: {format_resistance(self.R)} plate to plate, "
                f"{format_resistance(self.Zpa)} class A / {format_resistance(self.Zpb)} class B per tube")

    def vq(self) -> float:
        return self.Vq

    def iq(self) -> float:
        return self.Iq


@dataclass(frozen=True)
class DCChokeLoadLine(LoadLine):
    """
    DC path of a reactive load: the winding has no DC drop, so the plate sits
    at Vq whatever the current.
    """
    Vq: float
    Iq: float

    def I(self, V: float) -> float:
        return current_through(self.Vq - V, 0.0) + self.Iq

    def V(self, I: float) -> float:
        return self.Vq

    def get_line(self) -> List[CharacteristicPoint]:
        return [CharacteristicPoint(self.Vq, 0.0), CharacteristicPoint(self.Vq, 2.0 * self.Iq)]

    def info(self) -> str:
        return f"DC load: choke at {self.Vq:.0f} V"

    def vq(self) -> float:
        return self.Vq

    def iq(self) -> float:
        return self.Iq


def _resistive_se(Bplus, Rp, Rk, Vq, Iq):
    return DCResistiveLoadLine(Bplus, Rp, Rk, Iq)


def _resistive_pp(Bplus, Rp, Rk, Vq, Iq):
    # each tube sees half the plate load and carries half the shared cathode current
    return DCResistiveLoadLine(Bplus, Rp / 2.0, 2.0 * Rk, Iq)


def _reactive_se(Bplus, Rp, Rk, Vq, Iq):
    return DCSingleEndedReactiveLoadLine(Vq, Iq, Rp + Rk)


def _reactive_pp(Bplus, Rp, Rk, Vq, Iq):
    return DCPushPullReactiveLoadLine(Vq, Iq, Rp + Rk)


DC_LOAD_LINES: Dict[Tuple[str, str], Callable[..., LoadLine]] = {
    ("se", "resistive"): _resistive_se,
    ("pp", "resistive"): _resistive_pp,
    ("se", "reactive"): _reactive_se,
    ("pp", "reactive"): _reactive_pp,
}


def create_dc_load_line(topology: str, load_type: str, Bplus: float, Rp: float,
                        Rk: float = 0.0, Vq: float = 0.0, Iq: float = 0.0) -> LoadLine:
    """
    Build the DC load line for a stage shape.

    Args:
        topology: 'se' (single ended) or 'pp' (push-pull).
        load_type: 'resistive' or 'reactive'.
        Bplus: Supply voltage.
        Rp: Plate load (plate to plate for push-pull).
        Rk: Cathode resistance in the plate circuit, 0 for fixed bias.
        Vq: Quiescent plate voltage (pivot of reactive lines).
        Iq: Quiescent plate current.
    """
    builder = DC_LOAD_LINES.get((topology, load_type))
    if builder is None:
        raise ValueError(f"Unknown stage shape: topology '{topology}', load type '{load_type}'.")
    return builder(Bplus, Rp, Rk, Vq, Iq)
