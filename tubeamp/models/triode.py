from __future__ import annotations
import math
import numpy as np

from .base import Triode, ScreenContext, softplus, as_output
from .params import KorenParams, AyumiParams


def koren_triode_current(Vg, Vp, p: KorenParams):
    """
    Koren triode plate current.

    E1 = Vp/Kp * ln(1 + exp(Kp*(1/mu + (Vg+Vct)/sqrt(Kvb + Vp^2))))
    Ip = E1^ex * (1 + sgn(E1)) / Kg1

    Vp is expected to be non-negative.
    """
    x = p.Kp * (1.0 / p.mu + (Vg + p.Vct) / np.sqrt(p.Kvb + Vp * Vp))
    E1 = Vp * softplus(x) / p.Kp
    return np.power(E1, p.ex) * (1.0 + np.sign(E1)) / p.Kg1


class KorenTriode(Triode):
    """
    Norman Koren's triode model.

    References:
        https://www.normankoren.com/Audio/Tubemodspice_article.html
    """

    def __init__(self, params: KorenParams) -> None:
        super().__init__(params)

    def Ip(self, Vg, Vp, screen: ScreenContext | None = None):
        Vg = np.asarray(Vg, dtype=float)
        Vp = np.maximum(np.asarray(Vp, dtype=float), 0.0)
        return as_output(koren_triode_current(Vg, Vp, self.params))


class AyumiTriode(Triode):
    """
    Ayumi Nakabayashi's triode model with grid current and plate current limit.

    Attributes:
        a, b, c: Exponent transforms of alpha (B.24-B.26).
        Gp: Perveance in the positive grid region (B.27).
        mum: Amplification factor in the positive grid region (B.6).
        Glim, Xg: Plate current limit and grid current split, derived when
            not supplied (B.21, B.20).

    References:
        https://ayumi.cava.jp/audio/appendix/node11.html
    """

    def __init__(self, params: AyumiParams) -> None:
        super().__init__(params)
        self.G = params.G
        self.muc = params.muc
        self.Vgo = params.Vgo

        self.a = math.inf if params.alpha == 1 else 1.0 / (1.0 - params.alpha)
        self.b = 1.5 - self.a
        self.c = 3.0 * params.alpha - 1.0
        self.Gp = params.G * math.pow(self.c * self.a / 3.0, self.b)
        self.mum = self.a / 1.5 * params.muc

        self.Glim = params.Glim if params.Glim is not None else self.Gp * math.pow(1.0 + 1.0 / self.mum, 1.5)
        self.Xg = params.Xg if params.Xg is not None else 0.5 / math.pow(1.0 + 1.0 / self.mum, 1.5)

    def Ip(self, Vg, Vp, screen: ScreenContext | None = None):
        Vg = np.asarray(Vg, dtype=float)
        Vp = np.maximum(np.asarray(Vp, dtype=float), 0.0)
        Vgg = Vg + self.Vgo

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            # cathode current, B.28
            estm = np.maximum(Vgg + Vp / self.muc, 0.0)
            ik_cutoff = self.G * np.power(self.c / 2.0 / self.muc * Vp, self.b) * np.power(1.5 / self.a * estm, self.a)
            ik_cutoff = np.where(Vp > 0, ik_cutoff, 0.0)
            estp = np.maximum(Vgg + Vp / self.mum, 0.0)
            ik_positive = self.Gp * np.power(estp, 1.5)
            Ik = np.where(Vgg <= 0, ik_cutoff, ik_positive)

            # grid current, B.29
            vg_pos = np.maximum(Vg, 0.0)
            Ig = self.Xg * self.Glim * np.power(vg_pos, 1.5) * (1.2 * vg_pos / (Vp + vg_pos) + 0.4)
            Ig = np.where(Vg > 0, Ig, 0.0)

            Iplim = (1.0 - self.Xg) * self.Glim * np.power(Vp, 1.5)  # B.30
            Ip = np.maximum(np.minimum(Ik - Ig, Iplim), 0.0)          # B.31

        return as_output(Ip)
