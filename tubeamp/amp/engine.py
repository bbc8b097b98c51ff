from __future__ import annotations
from typing import Dict, Tuple
import math

from ..config import DEFAULT_ULTRALINEAR_TAP
from ..logging import logger
from ..models import TubeModel, ScreenContext, MODES, CATEGORIES, create_tube
from ..loadlines import (
    LoadLine,
    DCResistiveLoadLine,
    DCChokeLoadLine,
    CathodeLoadLine,
    ACLoadLine,
    create_dc_load_line,
    intersect_characteristic_with_load_line_v,
    intersect_load_lines,
    grid_voltage_for_current,
    grid_voltage_for_plate_voltage,
    TOPOLOGIES,
    LOAD_TYPES,
)
from ..tube import TubeDefaults, TubeLimits, TubeInfo
from ..utils import clamp

BIAS_METHODS = ("fixed", "cathode")

# Ordered recompute steps, named after the quantity they derive and the one
# they start from. Each step reads what the previous ones wrote.
GRID_HELD = ("vq_at_vg", "iq_at_vg", "rk")
CURRENT_HELD = ("vg_for_iq", "vq_at_vg", "iq_at_vg", "rk")
PLATE_HELD = ("vg_for_vq", "vq_at_vg", "iq_at_vg", "rk")
RESISTOR_HELD = ("vg_from_rk", "vq_at_vg", "iq_at_vg", "rk")


def _both(steps: Tuple[str, ...]) -> Dict[str, Tuple[str, ...]]:
    return {bias: steps for bias in BIAS_METHODS}


def _circuit_changed() -> Dict[str, Tuple[str, ...]]:
    # fixed bias keeps the grid voltage, cathode bias keeps the current and
    # re-derives the resistor
    return {"fixed": GRID_HELD, "cathode": CURRENT_HELD}


# field -> bias method -> pipeline
RECALCULATION_PIPELINES: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "Vg": _both(GRID_HELD),
    "Iq": _both(CURRENT_HELD),
    "Vq": _both(PLATE_HELD),
    "model": _both(CURRENT_HELD),
    "mode": _both(CURRENT_HELD),
    "ultralinear_tap": _both(CURRENT_HELD),
    "Rk": {"fixed": (), "cathode": RESISTOR_HELD},
    "Bplus": _circuit_changed(),
    "Rp": _circuit_changed(),
    "Vg2": _circuit_changed(),
    "topology": _circuit_changed(),
    "load_type": _circuit_changed(),
    "bias_method": _circuit_changed(),
}


class Amp:
    """
    Operating point of one tube amplifier stage, kept self-consistent.

    Every public field write is clamped into the tube's ratings. When the
    stored value actually changes, the fixed sequence of recompute steps
    registered for that field (and the current bias method) in
    RECALCULATION_PIPELINES brings the remaining fields back in line:

    - (Vq, Iq) lies on the DC load line;
    - Iq is the tube current at (Vg, Vq);
    - under cathode bias Rk = -Vg/Iq (halved for push-pull), kept as it was
      while no current flows;
    - in triode mode the screen follows the plate (Vg2 reads Bplus).

    Recompute steps that need a tube model do nothing while none is set.
    Load lines are built on demand from the current state and never stored.

    Attributes:
        name: Tube designation.
        category: 'triode', 'tetrode' or 'pentode'.
        defaults: Design defaults used by reset().
        limits: Ratings used by every clamp.
        input_headroom: Peak grid swing used by the signal analyses (V).
    """

    def __init__(self, name: str, category: str, defaults: TubeDefaults, limits: TubeLimits,
                 model: TubeModel | None = None) -> None:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown tube category '{category}'.")
        self.name = name
        self.category = category
        self.defaults = defaults
        self.limits = limits
        self.input_headroom: float | None = None
        self._model = model
        self.reset()

    @classmethod
    def from_tube(cls, tube: TubeInfo, model_index: int = 0) -> Amp:
        """
        Build a stage for a database record, using one of its published models.
        """
        model = create_tube(tube.type, tube.models[model_index])
        return cls(tube.name, tube.type, tube.defaults, tube.limits, model)

    def reset(self) -> None:
        """
        Return to the tube's design defaults: a resistance coupled cathode
        biased single-ended stage for triodes, a fixed bias push-pull output
        stage for multi-grid tubes.
        """
        triode = self.category == "triode"
        self._topology = "se" if triode else "pp"
        self._mode = None if triode else "pentode"
        self._ultralinear_tap = DEFAULT_ULTRALINEAR_TAP
        self._Bplus = self.defaults.Bplus
        self._Iq = self.defaults.Iq
        self._Vg2 = self.defaults.Vg2
        self._bias_method = "cathode" if triode else "fixed"
        self._load_type = "resistive" if triode else "reactive"
        self._Rp = self.defaults.Rp
        self._Rk: float | None = None
        self._Znext: float | None = None
        self._cathode_bypass = True
        self._Vq = 0.0
        self._Vg: float | None = None

        if self._model is not None:
            self._run_steps(CURRENT_HELD)
        else:
            self._set_vq(self.dc_load_line.vq())
        logger.debug(f"{self.name}: reset to Vq={self.Vq:.2f} Iq={self.Iq:.6f} Vg={self.Vg}")

    # --- recompute machinery ---

    def _run(self, field: str) -> None:
        steps = RECALCULATION_PIPELINES[field][self._bias_method]
        logger.debug(f"{self.name}: {field} changed, recompute {' -> '.join(steps) or 'nothing'}")
        self._run_steps(steps)

    def _run_steps(self, steps: Tuple[str, ...]) -> None:
        for step in steps:
            getattr(self, f"_recalculate_{step}")()

    def _store(self, attr: str, value) -> bool:
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        return True

    # --- clamping setters, return whether the stored value changed ---

    def _set_vq(self, Vq: float) -> bool:
        if self._load_type != "resistive":
            return False
        return self._store("_Vq", clamp(float(Vq), 0.0, self.limits.max_vp0))

    def _set_iq(self, Iq: float) -> bool:
        upper = self.limits.max_ip
        if self._load_type == "resistive":
            # at zero bias the cathode drops nothing, the plate resistor alone bounds Iq
            upper = min(self._fixed_dc_load_line().I(0.0), upper)
        return self._store("_Iq", clamp(float(Iq), 0.0, upper))

    def _set_vg(self, Vg: float) -> bool:
        return self._store("_Vg", clamp(float(Vg), self.limits.min_vg, self.limits.max_vg))

    def _set_vg2(self, Vg2: float) -> bool:
        return self._store("_Vg2", clamp(float(Vg2), 0.0, self.limits.max_vg2))

    def _set_bplus(self, Bplus: float) -> bool:
        return self._store("_Bplus", max(0.0, float(Bplus)))

    def _set_rp(self, Rp: float) -> bool:
        return self._store("_Rp", max(0.0, float(Rp)))

    def _set_rk(self, Rk: float) -> bool:
        return self._store("_Rk", max(0.0, float(Rk)))

    # --- recompute steps ---

    @property
    def _self_biased(self) -> bool:
        # the cathode drop shifts the plate load line only for resistive loads
        return self._bias_method == "cathode" and self._load_type == "resistive"

    def _line_for(self, Vg: float | None) -> LoadLine:
        """DC load line the plate moves on while the grid sits at Vg."""
        if self._self_biased and Vg is not None:
            return self._fixed_dc_load_line().self_biased(Vg)
        return self.dc_load_line

    def _fixed_dc_load_line(self) -> DCResistiveLoadLine:
        return create_dc_load_line(self._topology, "resistive", self._Bplus, self._Rp, 0.0, self.Vq, self._Iq)

    def _bias_path_line(self) -> LoadLine:
        if self._load_type == "resistive":
            return self.dc_load_line
        return DCChokeLoadLine(self.Vq, self._Iq)

    def _recalculate_vq_at_vg(self) -> None:
        if self._load_type != "resistive":
            return
        if self._model is None or self._Vg is None:
            self._set_vq(self.dc_load_line.vq())
            return
        line = self._line_for(self._Vg)
        if line.I(0.0) <= 0.0:
            # nothing can flow, the plate sits at the supply
            self._set_vq(self.dc_load_line.V(0.0))
            return
        self._set_vq(intersect_characteristic_with_load_line_v(self._model, self._Vg, line, self.screen))

    def _recalculate_iq_at_vg(self) -> None:
        if self._model is None or self._Vg is None:
            self._set_iq(self.dc_load_line.iq())
        elif self._load_type == "resistive":
            line = self._line_for(self._Vg)
            if line.R > 0:
                self._set_iq(line.I(self.Vq))
            else:
                # plate tied to the rail: only the tube limits the current
                self._set_iq(self._model.Ip(self._Vg, self.Vq, self.screen))
            if self._Iq == 0.0:
                # cut off, no drop across either resistor
                self._set_vq(self.dc_load_line.V(0.0))
        else:
            self._set_iq(self._model.Ip(self._Vg, self.Vq, self.screen))

    def _recalculate_vg_for_iq(self) -> None:
        if self._model is None:
            return
        if self._self_biased:
            Vg = grid_voltage_for_current(self._model, self._Iq, self._line_for, self.screen)
        elif self._load_type == "resistive":
            Vg = self._model.Vg(self.dc_load_line.V(self._Iq), self._Iq, self.screen)
        else:
            Vg = self._model.Vg(self.Vq, self._Iq, self.screen)
        self._set_vg(Vg)

    def _recalculate_vg_for_vq(self) -> None:
        if self._model is None:
            return
        if self._self_biased:
            Vg = grid_voltage_for_plate_voltage(self._model, self._Vq, self._line_for, self.screen)
        else:
            line = self.dc_load_line
            Vg = self._model.Vg(self.Vq, max(0.0, line.I(self.Vq)), self.screen)
        self._set_vg(Vg)

    def _recalculate_vg_from_rk(self) -> None:
        if self._model is None or self._bias_method != "cathode" or self._Rk is None:
            return
        self._set_vg(intersect_load_lines(self._bias_path_line(), self.cathode_load_line,
                                          self._model, self.screen))

    def _recalculate_rk(self) -> None:
        # no current leaves the resistor undetermined, keep the stored one
        if self._model is None or self._Vg is None or self._Iq == 0.0:
            return
        Rk = self.cathode_load_line.rk()
        if math.isfinite(Rk):
            self._set_rk(Rk)

    # --- derived views ---

    @property
    def screen(self) -> ScreenContext:
        return ScreenContext(self._mode, self.Vg2, self.ultralinear_tap)

    @property
    def dc_load_line(self) -> LoadLine:
        Rk = self._Rk if self._bias_method == "cathode" and self._Rk is not None else 0.0
        return create_dc_load_line(self._topology, self._load_type, self._Bplus, self._Rp,
                                   Rk, self.Vq, self._Iq)

    @property
    def ac_load_line(self) -> ACLoadLine:
        Rk = self._Rk if self._bias_method == "cathode" and self._Rk is not None else 0.0
        return ACLoadLine(self._Rp, Rk, self.Znext, self.Vq, self._Iq, self._cathode_bypass)

    @property
    def cathode_load_line(self) -> CathodeLoadLine:
        if self._model is None:
            raise RuntimeError("The cathode load line needs a tube model.")
        return CathodeLoadLine(self._model, self._Rk or 0.0, self._topology, self._Vg, self._Iq,
                               self.screen, self.limits.min_vg, self.limits.max_vg, self.limits.grid_step)

    @property
    def signal_load_line(self) -> LoadLine:
        """
        Line the plate follows for signal: the AC line of a loaded
        single-ended stage, otherwise the DC line at the quiescent bias.
        """
        if self.Znext and self._topology == "se":
            return self.ac_load_line
        return self._line_for(self._Vg)

    def dc_load_line_info(self) -> str:
        return self.dc_load_line.info()

    def ac_load_line_info(self) -> str:
        return self.ac_load_line.info()

    # --- public fields ---

    @property
    def model(self) -> TubeModel | None:
        return self._model

    @model.setter
    def model(self, model: TubeModel | None) -> None:
        if model is self._model:
            return
        self._model = model
        if model is not None:
            self._run("model")

    @property
    def topology(self) -> str:
        return self._topology

    @topology.setter
    def topology(self, topology: str) -> None:
        if topology not in TOPOLOGIES:
            raise ValueError(f"Unknown topology '{topology}'.")
        if self._store("_topology", topology):
            self._run("topology")

    @property
    def mode(self) -> str | None:
        return self._mode

    @mode.setter
    def mode(self, mode: str) -> None:
        if self.category == "triode":
            raise ValueError("Operating modes apply to multi-grid tubes only.")
        if mode not in MODES:
            raise ValueError(f"Unknown mode '{mode}'.")
        if self._store("_mode", mode):
            self._run("mode")

    @property
    def Bplus(self) -> float:
        return self._Bplus

    @Bplus.setter
    def Bplus(self, Bplus: float) -> None:
        if self._set_bplus(Bplus):
            self._run("Bplus")

    @property
    def Vq(self) -> float:
        # a transformer or choke primary has no DC drop
        if self._load_type == "resistive":
            return self._Vq
        return self._Bplus

    @Vq.setter
    def Vq(self, Vq: float) -> None:
        if self._set_vq(Vq):
            self._run("Vq")

    @property
    def Iq(self) -> float:
        return self._Iq

    @Iq.setter
    def Iq(self, Iq: float) -> None:
        if self._set_iq(Iq):
            self._run("Iq")

    @property
    def Vg(self) -> float | None:
        return self._Vg

    @Vg.setter
    def Vg(self, Vg: float | None) -> None:
        if Vg is None or self._model is None:
            return
        if self._set_vg(Vg):
            self._run("Vg")

    @property
    def Vg2(self) -> float | None:
        if self._mode == "triode":
            return self._Bplus
        return self._Vg2

    @Vg2.setter
    def Vg2(self, Vg2: float | None) -> None:
        if Vg2 is None:
            return
        if self._set_vg2(Vg2) and self._mode != "triode":
            self._run("Vg2")

    @property
    def bias_method(self) -> str:
        return self._bias_method

    @bias_method.setter
    def bias_method(self, bias_method: str) -> None:
        if bias_method not in BIAS_METHODS:
            raise ValueError(f"Unknown bias method '{bias_method}'.")
        if self._store("_bias_method", bias_method):
            self._run("bias_method")

    @property
    def load_type(self) -> str:
        return self._load_type

    @load_type.setter
    def load_type(self, load_type: str) -> None:
        if load_type not in LOAD_TYPES:
            raise ValueError(f"Unknown load type '{load_type}'.")
        if self._store("_load_type", load_type):
            self._run("load_type")

    @property
    def Rp(self) -> float:
        return self._Rp

    @Rp.setter
    def Rp(self, Rp: float) -> None:
        if self._set_rp(Rp):
            self._run("Rp")

    @property
    def Rk(self) -> float | None:
        return self._Rk if self._bias_method == "cathode" else None

    @Rk.setter
    def Rk(self, Rk: float | None) -> None:
        if Rk is None:
            return
        if self._set_rk(Rk):
            self._run("Rk")

    @property
    def cathode_bypass(self) -> bool:
        return self._cathode_bypass

    @cathode_bypass.setter
    def cathode_bypass(self, bypass: bool) -> None:
        self._cathode_bypass = bool(bypass)

    @property
    def Znext(self) -> float | None:
        return self._Znext if self._load_type == "resistive" else None

    @Znext.setter
    def Znext(self, Znext: float | None) -> None:
        self._Znext = None if Znext is None else max(0.0, float(Znext))

    @property
    def ultralinear_tap(self) -> float:
        if self._mode == "ultralinear":
            return self._ultralinear_tap
        if self._mode == "triode":
            return 100.0
        return 0.0

    @ultralinear_tap.setter
    def ultralinear_tap(self, tap: float) -> None:
        if self._store("_ultralinear_tap", clamp(float(tap), 0.0, 100.0)) and self._mode == "ultralinear":
            self._run("ultralinear_tap")

    def __repr__(self) -> str:
        return (f"Amp({self.name!r}, topology={self._topology}, bias={self._bias_method}, "
                f"load={self._load_type}, Vq={self.Vq:.2f}, Iq={self._Iq:.6f}, Vg={self._Vg}, Rk={self.Rk})")
