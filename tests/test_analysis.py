"""Tests for the curves and figures of merit derived from an amp."""

import math

import pytest
from pytest import approx

from tubeamp import Amp, analysis, find_tube
from tubeamp.config import SINE_SAMPLES


@pytest.fixture
def driven(amp_12ax7):
    amp_12ax7.Bplus = 350
    amp_12ax7.Rp = 180000
    amp_12ax7.input_headroom = 1.0
    return amp_12ax7


@pytest.fixture
def driven_pp(amp_6l6):
    amp_6l6.input_headroom = 10.0
    return amp_6l6


class TestCurves:

    def test_dc_load_line(self, amp_12ax7):
        points = analysis.graph_dc_load_line(amp_12ax7)
        assert len(points) == 2
        assert points[-1].x == amp_12ax7.Bplus

    def test_ac_load_line(self, amp_12ax7):
        points = analysis.graph_ac_load_line(amp_12ax7)
        assert points[0].x == 0.0
        assert points[-1].y == 0.0

    def test_cathode_load_line_only_under_cathode_bias(self, amp_12ax7):
        assert len(analysis.graph_cathode_load_line(amp_12ax7)) >= 2
        amp_12ax7.bias_method = "fixed"
        assert analysis.graph_cathode_load_line(amp_12ax7) == []

    def test_characteristic_curve(self, amp_12ax7):
        points = analysis.graph_vp_ip(amp_12ax7, -2.0)
        assert points[0].x == 0.0
        assert points[0].y == 0.0
        assert points[-1].x == amp_12ax7.limits.max_vp0
        assert points[-1].y == approx(amp_12ax7.model.Ip(-2.0, amp_12ax7.limits.max_vp0))
        ys = [p.y for p in points]
        assert ys == sorted(ys)

    def test_characteristic_family(self, amp_12ax7):
        curves = analysis.graph_vg_vp_ip(amp_12ax7)
        lim = amp_12ax7.limits
        assert len(curves) == int((lim.max_vg - lim.min_vg) / lim.grid_step) + 1
        assert curves[0].Vg == lim.min_vg
        assert curves[-1].Vg == approx(lim.max_vg)

    def test_pentode_family_uses_screen(self, amp_6l6):
        curves = analysis.graph_vg_vp_ip(amp_6l6)
        assert all(curve.VpIp for curve in curves)

    def test_dissipation_hyperbola(self, amp_12ax7):
        points = analysis.graph_pp(amp_12ax7)
        assert points[0].x == 1.0
        for p in points:
            assert p.x * p.y == approx(amp_12ax7.limits.max_pp)

    def test_operating_point(self, amp_12ax7):
        [point] = analysis.graph_operating_point(amp_12ax7)
        assert (point.x, point.y, point.Vg) == (amp_12ax7.Vq, amp_12ax7.Iq, amp_12ax7.Vg)


class TestWithoutSignal:

    def test_no_headroom(self, amp_12ax7):
        assert amp_12ax7.input_headroom is None
        assert analysis.graph_headroom(amp_12ax7) == []
        assert analysis.graph_amplified_sine_wave(amp_12ax7) == []
        assert analysis.output_headroom(amp_12ax7) == []
        assert analysis.output_voltage_rms(amp_12ax7) == 0.0
        assert analysis.average_output_power_rms(amp_12ax7) == 0.0
        assert analysis.effective_amplification_factor(amp_12ax7) == 0.0

    def test_no_model(self):
        tube = find_tube("12AX7")
        amp = Amp(tube.name, tube.type, tube.defaults, tube.limits)
        amp.input_headroom = 1.0
        assert analysis.graph_vp_ip(amp, -1.0) == []
        assert analysis.graph_cathode_load_line(amp) == []
        assert analysis.graph_amplified_sine_wave(amp) == []
        assert analysis.max_output_power_rms(amp) is None


class TestSingleEndedSignal:

    def test_sine_wave(self, driven):
        wave = analysis.graph_amplified_sine_wave(driven)
        assert len(wave) == SINE_SAMPLES
        assert wave[0].x == 0.0
        assert wave[-1].x == approx(2.0 * math.pi)
        # no swing at zero phase
        assert wave[0].y == approx(0.0, abs=1e-3)
        assert wave[0].Ip == approx(driven.Iq, rel=1e-4)
        # an inverting stage: grid up, plate down
        assert wave[22].y < 0.0
        assert wave[68].y > 0.0
        assert wave[0].Ip_inv is None

    def test_headroom(self, driven):
        low, high = analysis.output_headroom(driven)
        assert low < 0.0 < high

    def test_headroom_segment(self, driven):
        points = analysis.graph_headroom(driven)
        assert points[0].Vg == driven.Vg + 1.0
        assert points[-1].Vg == driven.Vg - 1.0
        assert points[0].x < driven.Vq < points[-1].x

    def test_gain(self, driven):
        gain = analysis.effective_amplification_factor(driven)
        assert 20.0 < gain < 100.0
        rms = analysis.output_voltage_rms(driven)
        assert rms == approx(gain / math.sqrt(2.0), rel=0.2)

    def test_loaded_stage_has_less_gain(self, driven):
        unloaded = analysis.effective_amplification_factor(driven)
        driven.Znext = 180000
        assert analysis.effective_amplification_factor(driven) < unloaded

    def test_power(self, driven):
        assert analysis.average_output_power_rms(driven) > 0.0
        assert analysis.max_output_power_rms(driven) > 0.0


class TestPushPullSignal:

    def test_sine_wave_plate_to_plate(self, driven_pp):
        wave = analysis.graph_amplified_sine_wave(driven_pp)
        assert len(wave) == SINE_SAMPLES
        assert wave[0].y == approx(0.0, abs=1e-3)
        for sample in wave:
            assert sample.Vp_inv is not None
            assert sample.y == approx(sample.Vp - sample.Vp_inv)

    def test_headroom_is_symmetric(self, driven_pp):
        low, high = analysis.output_headroom(driven_pp)
        assert low == approx(-high)
        assert high > 0.0

    def test_power(self, driven_pp):
        assert analysis.average_output_power_rms(driven_pp) > 0.0
        assert analysis.max_output_power_rms(driven_pp) > 0.0
