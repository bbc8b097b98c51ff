"""
Curves and figures of merit derived from an Amp's operating point.

Nothing here mutates the amp. Every function returns an empty result (or
0 / None) while the amp lacks what it needs, e.g. a tube model or an input
headroom.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List
import math
import numpy as np

from ..config import (
    PLATE_SAMPLE_STEP,
    SINE_SAMPLES,
    CURVE_SIMPLIFY_TOLERANCE,
    LINE_SIMPLIFY_TOLERANCE,
)
from ..loadlines import CharacteristicPoint, intersect_characteristic_with_load_line_v
from ..utils import frange, simplify
from .engine import Amp


@dataclass(frozen=True)
class CharacteristicCurve:
    """Ip-Vp curve at one grid voltage."""
    Vg: float
    VpIp: List[CharacteristicPoint]


@dataclass(frozen=True)
class OutputSample:
    """
    One phase sample of the amplified sine wave.

    Attributes:
        x: Phase (rad).
        y: Output voltage swing (V), plate to plate for push-pull.
        Ip, Vp: Plate current and voltage of the (first) tube.
        Ip_inv, Vp_inv: Same for the opposite tube of a push-pull pair.
    """
    x: float
    y: float
    Ip: float
    Vp: float
    Ip_inv: float | None = None
    Vp_inv: float | None = None


def _has_signal(amp: Amp) -> bool:
    return amp.model is not None and amp.Vg is not None and amp.input_headroom is not None


def _plate_voltage_at(amp: Amp, Vg: float) -> float:
    return intersect_characteristic_with_load_line_v(amp.model, Vg, amp.signal_load_line, amp.screen)


def graph_dc_load_line(amp: Amp) -> List[CharacteristicPoint]:
    return amp.dc_load_line.get_line()


def graph_ac_load_line(amp: Amp) -> List[CharacteristicPoint]:
    return amp.ac_load_line.get_line()


def graph_cathode_load_line(amp: Amp) -> List[CharacteristicPoint]:
    if amp.model is None or amp.Rk is None:
        return []
    return amp.cathode_load_line.get_line()


def graph_vp_ip(amp: Amp, Vg: float) -> List[CharacteristicPoint]:
    """
    Characteristic curve at grid voltage Vg, from 0 V to the cutoff rating.
    """
    if amp.model is None:
        return []
    Vp = frange(0.0, amp.limits.max_vp0, PLATE_SAMPLE_STEP)
    Ip = np.broadcast_to(amp.model.Ip(Vg, Vp, amp.screen), Vp.shape)
    points = [CharacteristicPoint(float(v), float(i)) for v, i in zip(Vp, Ip)]
    return simplify(points, CURVE_SIMPLIFY_TOLERANCE)


def graph_vg_vp_ip(amp: Amp) -> List[CharacteristicCurve]:
    """
    Characteristic family, one curve per grid step across the tube's grid range.
    """
    return [CharacteristicCurve(float(Vg), graph_vp_ip(amp, float(Vg)))
            for Vg in frange(amp.limits.min_vg, amp.limits.max_vg, amp.limits.grid_step)]


def graph_pp(amp: Amp) -> List[CharacteristicPoint]:
    """
    Maximum plate dissipation hyperbola Ip = Pmax / Vp.
    """
    Vp = frange(PLATE_SAMPLE_STEP, amp.limits.max_vp0, PLATE_SAMPLE_STEP)
    points = [CharacteristicPoint(float(v), amp.limits.max_pp / float(v)) for v in Vp]
    return simplify(points, LINE_SIMPLIFY_TOLERANCE)


def graph_operating_point(amp: Amp) -> List[CharacteristicPoint]:
    return [CharacteristicPoint(amp.Vq, amp.Iq, amp.Vg)]


def graph_headroom(amp: Amp) -> List[CharacteristicPoint]:
    """
    Stretch of the signal load line swept by a grid swing of +-input_headroom,
    including any bend of the line inside it.
    """
    if not _has_signal(amp):
        return []
    min_vg = amp.Vg - amp.input_headroom
    max_vg = amp.Vg + amp.input_headroom
    line = amp.signal_load_line
    max_vp = _plate_voltage_at(amp, min_vg)
    min_vp = _plate_voltage_at(amp, max_vg)

    data = [CharacteristicPoint(min_vp, line.I(min_vp), max_vg)]
    for point in line.get_line():
        if min_vp < point.x < max_vp:
            data.append(CharacteristicPoint(point.x, point.y, amp.model.Vg(point.x, point.y, amp.screen)))
    data.append(CharacteristicPoint(max_vp, line.I(max_vp), min_vg))
    return data


def graph_amplified_sine_wave(amp: Amp) -> List[OutputSample]:
    """
    Plate response to Vg = Vg0 + headroom*sin(t) over one period. A push-pull
    pair is driven in antiphase and its output taken plate to plate.
    """
    if not _has_signal(amp):
        return []
    samples = []
    for t in np.linspace(0.0, 2.0 * np.pi, SINE_SAMPLES):
        t = float(t)
        Vg = amp.Vg + amp.input_headroom * math.sin(t)
        Vp = _plate_voltage_at(amp, Vg)
        Ip = amp.model.Ip(Vg, Vp, amp.screen)
        if amp.topology == "pp":
            Vg_inv = amp.Vg - amp.input_headroom * math.sin(t)
            Vp_inv = _plate_voltage_at(amp, Vg_inv)
            Ip_inv = amp.model.Ip(Vg_inv, Vp_inv, amp.screen)
            samples.append(OutputSample(t, Vp - Vp_inv, Ip, Vp, Ip_inv, Vp_inv))
        else:
            samples.append(OutputSample(t, Vp - amp.Vq, Ip, Vp))
    return samples


def output_headroom(amp: Amp) -> List[float]:
    """
    Output swing [negative, positive] around the quiescent plate voltage for
    the input headroom; plate to plate for push-pull.
    """
    if not _has_signal(amp):
        return []
    max_vp = _plate_voltage_at(amp, amp.Vg - amp.input_headroom) - amp.Vq
    min_vp = _plate_voltage_at(amp, amp.Vg + amp.input_headroom) - amp.Vq
    if amp.topology == "pp":
        return [min_vp - max_vp, max_vp - min_vp]
    return [min_vp, max_vp]


def output_voltage_rms(amp: Amp) -> float:
    wave = graph_amplified_sine_wave(amp)
    if not wave:
        return 0.0
    y = np.array([s.y for s in wave])
    return float(np.sqrt(np.mean(y * y)))


def average_output_power_rms(amp: Amp) -> float:
    """
    RMS of the instantaneous plate power over the sine sweep, both tubes
    for push-pull.
    """
    wave = graph_amplified_sine_wave(amp)
    if not wave:
        return 0.0
    p = np.array([abs(s.Vp) * s.Ip for s in wave])
    if amp.topology == "pp":
        p = p + np.array([abs(s.Vp_inv) * s.Ip_inv for s in wave])
    return float(np.sqrt(np.mean(p * p)))


def max_output_power_rms(amp: Amp) -> float | None:
    """
    Sine power available when the grid is driven up to 0 V.
    """
    if amp.model is None:
        return None
    min_vp = _plate_voltage_at(amp, 0.0)
    max_ip = amp.model.Ip(0.0, min_vp, amp.screen)
    return (amp.Vq - min_vp) * max_ip / (2.0 * math.sqrt(2.0))


def effective_amplification_factor(amp: Amp) -> float:
    """
    Large-signal gain: plate swing over grid swing across the input headroom.
    """
    if not _has_signal(amp) or amp.input_headroom == 0:
        return 0.0
    min_vp = _plate_voltage_at(amp, amp.Vg + amp.input_headroom)
    max_vp = _plate_voltage_at(amp, amp.Vg - amp.input_headroom)
    return (max_vp - min_vp) / (2.0 * amp.input_headroom)
