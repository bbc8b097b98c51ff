"""Numeric constants and solver configuration shared across tubeamp."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BisectionConfig:
    """
    Configuration parameters for the bisection solver.

    Attributes:
        max_iter: Maximum number of bisection steps before giving up (default: 1000).
        tol: Stop when the half-width of the bracket falls below this value (default: 1e-9).
        eps: Stop when |f(mid)| falls below this value (default: 1e-10).
        check_bracket: Verify that f changes sign over the initial bracket and
            fail immediately if it does not (default: False).
    """
    max_iter: int = 1000
    tol: float = 1e-9
    eps: float = 1e-10
    check_bracket: bool = False


DEFAULT_BISECTION = BisectionConfig()

# Search brackets (volts)
PLATE_VOLTAGE_BRACKET: Tuple[float, float] = (0.0, 5000.0)
GRID_VOLTAGE_BRACKET: Tuple[float, float] = (-500.0, 50.0)
SELF_BIAS_GRID_BRACKET: Tuple[float, float] = (-200.0, 0.0)

# Curve sampling
PLATE_SAMPLE_STEP = 1.0           # V, Ip-Vp curves and dissipation hyperbola
CATHODE_SAMPLE_DIVISOR = 10       # cathode line sampled at grid_step / 10
SINE_SAMPLES = 91                 # 0..2pi inclusive

# Display simplification tolerances (A)
CURVE_SIMPLIFY_TOLERANCE = 5e-6
LINE_SIMPLIFY_TOLERANCE = 1e-5

DEFAULT_ULTRALINEAR_TAP = 40.0
