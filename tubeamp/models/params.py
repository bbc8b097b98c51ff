from __future__ import annotations
from dataclasses import dataclass, fields
from typing import ClassVar, Dict, Mapping, Type, Union


@dataclass(frozen=True)
class KorenParams:
    """
    Coefficients of Norman Koren's triode and pentode models.

    Attributes:
        mu: Amplification factor.
        ex: Exponent of the 3/2-power law (nominally 1.5).
        Kg1: Plate current scale.
        Kp: Shape of the transition to cutoff.
        Kvb: Knee voltage term.
        Vct: Contact potential added to the grid voltage (triode form only).
        Kg2: Screen current scale (pentode form only, optional).
        attribution: Who fitted the coefficients.
        source: Where the coefficients were published.
    """
    type: ClassVar[str] = "koren"

    mu: float
    ex: float
    Kg1: float
    Kp: float
    Kvb: float
    Vct: float = 0.0
    Kg2: float | None = None
    attribution: str | None = None
    source: str | None = None


@dataclass(frozen=True)
class AyumiParams:
    """
    Coefficients of Ayumi Nakabayashi's triode model.

    ``Glim`` and ``Xg`` may be omitted; the model derives them from the
    other coefficients.
    """
    type: ClassVar[str] = "ayumi"

    G: float
    muc: float
    alpha: float
    Vgo: float
    Glim: float | None = None
    Xg: float | None = None
    attribution: str | None = None
    source: str | None = None


ModelParams = Union[KorenParams, AyumiParams]

PARAM_TYPES: Dict[str, Type] = {
    KorenParams.type: KorenParams,
    AyumiParams.type: AyumiParams,
}


def params_from_dict(data: Mapping) -> ModelParams:
    """
    Build a parameter record from a mapping tagged by ``type``.

    Keys that are not coefficients of the selected record are ignored, so
    database entries may carry extra metadata.
    """
    kind = data.get("type")
    cls = PARAM_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown model parameter type '{kind}'.")
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in names})
