from __future__ import annotations
from typing import Callable
import numpy as np

from ..config import BisectionConfig, DEFAULT_BISECTION
from ..errors import RootNotFound
from ..logging import logger


def bisect(f: Callable[[float], float], lo: float, hi: float, cfg: BisectionConfig | None = None) -> float:
    """
    Find a zero of a scalar function by bracket halving.

    The midpoint's sign is compared with the sign at the current lower end and
    the bracket is narrowed accordingly. The bracket itself is trusted: when f
    does not change sign over [lo, hi] the search still terminates, but it
    converges towards one of the ends rather than a root. Set
    ``cfg.check_bracket`` to reject such brackets up front.

    Args:
        f: Scalar function, assumed monotonic on the bracket.
        lo: Lower end of the bracket.
        hi: Upper end of the bracket.
        cfg: BisectionConfig with iteration budget and tolerances
            (default: DEFAULT_BISECTION).

    Returns:
        The midpoint at which |f| < eps or the half-width dropped below tol.

    Raises:
        RootNotFound: The iteration budget was exhausted, or ``check_bracket``
            is set and f(lo), f(hi) have the same strict sign.
    """
    cfg = cfg or DEFAULT_BISECTION
    a, b = float(lo), float(hi)
    fa = f(a)

    if cfg.check_bracket:
        fb = f(b)
        if np.sign(fa) == np.sign(fb) and fa != 0:
            raise RootNotFound(f"f does not change sign on [{a}, {b}].", a, b, 0)

    for _ in range(cfg.max_iter):
        c = 0.5 * (a + b)
        fc = f(c)
        if abs(fc) < cfg.eps or 0.5 * (b - a) < cfg.tol:
            return c
        if np.sign(fc) == np.sign(fa):
            a, fa = c, fc
        else:
            b = c

    logger.warning(f"bisection did not converge on [{lo}, {hi}] after {cfg.max_iter} iterations")
    raise RootNotFound(f"Intersection failed after {cfg.max_iter} iterations.", a, b, cfg.max_iter)
