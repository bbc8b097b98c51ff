from __future__ import annotations
import numpy as np

from .base import Pentode, ScreenContext, softplus, as_output
from .params import KorenParams
from .triode import koren_triode_current


class KorenPentode(Pentode):
    """
    Norman Koren's pentode model, also used for beam tetrodes.

    In triode mode the screen is strapped to the plate and the triode form of
    the model applies. Otherwise the screen voltage comes from the
    ScreenContext (fixed Vg2, or a blend of Vg2 and Vp for ultralinear).

    References:
        https://www.normankoren.com/Audio/Tubemodspice_article_2.html
    """

    def __init__(self, params: KorenParams) -> None:
        super().__init__(params)

    def Ip(self, Vg, Vp, screen: ScreenContext | None = None):
        p = self.params
        Vg = np.asarray(Vg, dtype=float)
        Vp = np.maximum(np.asarray(Vp, dtype=float), 0.0)

        if screen is None:
            raise ValueError("KorenPentode requires a ScreenContext.")
        if screen.mode == "triode":
            return as_output(koren_triode_current(Vg, Vp, p))

        Vg2 = np.asarray(screen.screen_voltage(Vp), dtype=float)
        with np.errstate(divide="ignore", invalid="ignore"):
            E1 = Vg2 * softplus((1.0 / p.mu + Vg / Vg2) * p.Kp) / p.Kp
            Ip = (np.power(E1, p.ex) + np.sign(E1) * np.power(E1, p.ex)) * np.arctan(Vp / p.Kvb) / p.Kg1
        Ip = np.where(Vg2 > 0, Ip, 0.0)
        return as_output(Ip)

    def Ig2(self, Vg, Vp, screen: ScreenContext):
        """
        Screen current: Ig2 = (Vg + Vg2/mu)^ex / Kg2.
        """
        p = self.params
        if p.Kg2 is None:
            raise ValueError("Screen current needs the Kg2 coefficient.")
        Vg = np.asarray(Vg, dtype=float)
        Vp = np.maximum(np.asarray(Vp, dtype=float), 0.0)
        Vg2 = np.asarray(screen.screen_voltage(Vp), dtype=float)
        base = np.maximum(Vg + Vg2 / p.mu, 0.0)
        return as_output(np.power(base, p.ex) / p.Kg2)
