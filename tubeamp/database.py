"""
Presets of common tubes: ratings, design defaults and published model fits.
"""

from __future__ import annotations
from typing import Dict, Tuple

from .models.params import KorenParams, AyumiParams
from .tube import TubeInfo, TubeDefaults, TubeLimits

TUBES: Tuple[TubeInfo, ...] = (
    TubeInfo(
        name="12AX7",
        type="triode",
        datasheet="https://frank.pocnet.net/sheets/049/1/12AX7A.pdf",
        defaults=TubeDefaults(Bplus=300, Rp=220000, Iq=0.0006),
        limits=TubeLimits(max_pp=1.2, max_vp=330, max_vp0=500, max_ip=0.005,
                          min_vg=-6, max_vg=0, grid_step=0.5),
        models=(
            KorenParams(mu=100, ex=1.658, Kg1=2354.4, Kp=771.4, Kvb=63.48, Vct=0.7102,
                        attribution="koonw",
                        source="https://www.diyaudio.com/community/threads/vacuum-tube-spice-models.243950/post-6217829"),
            KorenParams(mu=100, ex=1.4, Kg1=1060, Kp=600, Kvb=300, Vct=0.0,
                        attribution="koren",
                        source="https://www.normankoren.com/Audio/Tubemodspice_article.html"),
            AyumiParams(G=0.00071212, muc=88.41380, alpha=0.43455, Vgo=0.59837,
                        attribution="ayumi",
                        source="https://ayumi.cava.jp/audio/appendix/node11.html"),
        ),
    ),
    TubeInfo(
        name="12AY7",
        type="triode",
        datasheet="https://tube-data.com/sheets/049/1/12AY7.pdf",
        defaults=TubeDefaults(Bplus=250, Rp=100000, Iq=0.003),
        limits=TubeLimits(max_pp=1.5, max_vp=300, max_vp0=500, max_ip=0.01,
                          min_vg=-10, max_vg=0, grid_step=0.5),
        models=(
            AyumiParams(G=0.00054133951, muc=33.263226783199315, alpha=0.5420483594367906,
                        Vgo=0.71171435, Glim=0.00095518541, Xg=0.484901962646184),
        ),
    ),
    TubeInfo(
        name="7025",
        type="triode",
        datasheet="https://frank.pocnet.net/sheets/168/7/7025.pdf",
        defaults=TubeDefaults(Bplus=300, Rp=220000, Iq=0.0006),
        limits=TubeLimits(max_pp=1, max_vp=330, max_vp0=500, max_ip=0.004,
                          min_vg=-5, max_vg=0, grid_step=0.5),
        models=(
            KorenParams(mu=103.44, ex=1.245, Kg1=1515.4, Kp=903.23, Kvb=99.2, Vct=0.5),
        ),
    ),
    TubeInfo(
        name="6L6GC",
        type="pentode",
        datasheet="https://frank.pocnet.net/sheets/127/6/6L6GC.pdf",
        defaults=TubeDefaults(Bplus=360, Rp=7600, Iq=0.06, Vg2=250),
        limits=TubeLimits(max_pp=30, max_vp=500, max_vp0=700, max_ip=0.4,
                          min_vg=-80, max_vg=0, grid_step=5, max_vg2=450),
        models=(
            KorenParams(mu=8.7, ex=1.35, Kg1=1460, Kp=48, Kvb=12, Vct=0.0, Kg2=4500),
        ),
    ),
    TubeInfo(
        name="6V6",
        type="tetrode",
        datasheet="https://frank.pocnet.net/sheets/127/6/6V6.pdf",
        defaults=TubeDefaults(Bplus=285, Rp=8000, Iq=0.035, Vg2=250),
        limits=TubeLimits(max_pp=14, max_vp=450, max_vp0=550, max_ip=0.2,
                          min_vg=-60, max_vg=0, grid_step=5, max_vg2=450),
        models=(
            KorenParams(mu=12.67, ex=1.198, Kg1=915.0, Kp=38.07, Kvb=30.2, Vct=0.0, Kg2=4500),
            # no tetrode form of this model exists yet
            AyumiParams(G=0.00060166202, muc=7.0192317, alpha=0.559517723002632,
                        Vgo=0.99999998, Glim=0.00112921, Xg=0.45544727730005935),
        ),
    ),
)

_BY_NAME: Dict[str, TubeInfo] = {tube.name: tube for tube in TUBES}


def find_tube(name: str) -> TubeInfo:
    """
    Look up a preset by designation.

    Raises:
        KeyError: No preset with that name.
    """
    try:
        return _BY_NAME[name]
    except KeyError as exc:
        raise KeyError(f"Unknown tube '{name}'.") from exc


def tube_names() -> Tuple[str, ...]:
    return tuple(_BY_NAME)
