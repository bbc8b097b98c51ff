"""Shared fixtures for tubeamp tests.

Uses the 12AX7 and 6L6GC presets from the tube database; the 12AX7 Koren
fit by koonw is the reference model for the operating point scenarios.
"""

import math

import pytest
from pytest import approx

from tubeamp import Amp, find_tube, create_tube
from tubeamp.models import KorenParams, ScreenContext

KOONW_12AX7 = KorenParams(mu=100, ex=1.658, Kg1=2354.4, Kp=771.4, Kvb=63.48, Vct=0.7102)


@pytest.fixture
def koren_12ax7():
    return create_tube("triode", KOONW_12AX7)


@pytest.fixture
def ayumi_12ax7():
    return create_tube("triode", find_tube("12AX7").models[2])


@pytest.fixture
def koren_6l6():
    return create_tube("pentode", find_tube("6L6GC").models[0])


@pytest.fixture
def pentode_screen():
    return ScreenContext("pentode", 250.0)


@pytest.fixture
def amp_12ax7():
    """Default 12AX7 stage: cathode biased, resistive, single ended."""
    return Amp.from_tube(find_tube("12AX7"))


@pytest.fixture
def amp_6l6():
    """Default 6L6GC stage: fixed bias push-pull into a transformer."""
    return Amp.from_tube(find_tube("6L6GC"))


def assert_consistent(amp):
    """Check the operating point invariants of a settled amp."""
    lim = amp.limits
    assert lim.min_vg <= amp.Vg <= lim.max_vg
    assert 0.0 <= amp.Iq <= lim.max_ip
    if amp.load_type == "resistive":
        assert 0.0 <= amp.Vq <= min(lim.max_vp0, amp.Bplus + 1e-6)
        assert amp.Vq == approx(amp.dc_load_line.V(amp.Iq), abs=1e-6)
    else:
        assert amp.Vq == amp.Bplus
    assert amp.Iq == approx(amp.model.Ip(amp.Vg, amp.Vq, amp.screen), rel=1e-6, abs=1e-9)
    if amp.bias_method == "cathode" and amp.Iq > 0.0:
        factor = 2.0 if amp.topology == "pp" else 1.0
        assert amp.Rk == approx(max(0.0, -amp.Vg / amp.Iq) / factor, rel=1e-9)
    elif amp.bias_method == "cathode":
        # no current, the resistor keeps its last value
        assert amp.Rk is None or math.isfinite(amp.Rk)
    else:
        assert amp.Rk is None
    if amp.mode == "triode":
        assert amp.Vg2 == amp.Bplus
