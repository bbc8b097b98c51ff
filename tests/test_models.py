"""Tests for the tube characteristic models and the model factory."""

import numpy as np
import pytest
from pytest import approx

from tubeamp import create_tube, find_tube
from tubeamp.errors import UnsupportedModel
from tubeamp.models import (
    AyumiParams,
    AyumiTriode,
    KorenParams,
    KorenPentode,
    KorenTriode,
    ScreenContext,
    params_from_dict,
)

from conftest import KOONW_12AX7


TRIODE_POINTS = [(-1.0, 150.0), (-1.0, 250.0), (-2.0, 250.0), (-2.0, 350.0), (-3.0, 350.0)]
PENTODE_POINTS = [(-10.0, 150.0), (-10.0, 300.0), (-20.0, 300.0), (-20.0, 400.0)]


class TestScreenContext:

    def test_pentode_mode_uses_vg2(self):
        assert ScreenContext("pentode", 250.0).screen_voltage(400.0) == 250.0

    def test_triode_mode_follows_plate(self):
        assert ScreenContext("triode", 250.0).screen_voltage(400.0) == 400.0

    def test_ultralinear_blends_by_tap(self):
        screen = ScreenContext("ultralinear", 250.0, ultralinear_tap=40.0)
        assert screen.screen_voltage(400.0) == approx(250.0 * 0.6 + 400.0 * 0.4)

    def test_missing_vg2_raises(self):
        with pytest.raises(ValueError):
            ScreenContext("pentode").screen_voltage(300.0)


class TestKorenTriode:

    def test_zero_plate_voltage_gives_zero_current(self, koren_12ax7):
        assert koren_12ax7.Ip(0.0, 0.0) == 0.0
        assert koren_12ax7.Ip(-2.0, -10.0) == 0.0

    def test_reference_point(self, koren_12ax7):
        assert koren_12ax7.Ip(-3.48, 350.0) == approx(0.00060332, abs=1e-8)

    def test_array_input(self, koren_12ax7):
        Vp = np.linspace(0.0, 500.0, 11)
        Ip = koren_12ax7.Ip(-2.0, Vp)
        assert isinstance(Ip, np.ndarray)
        assert Ip.shape == Vp.shape
        assert Ip[5] == approx(koren_12ax7.Ip(-2.0, 250.0))

    def test_scalar_output_is_float(self, koren_12ax7):
        assert isinstance(koren_12ax7.Ip(-2.0, 250.0), float)

    def test_extreme_inputs_stay_finite(self, koren_12ax7):
        Ip = koren_12ax7.Ip(np.array([-400.0, -100.0, 0.0, 40.0]), 5000.0)
        assert np.all(np.isfinite(Ip))
        assert np.all(Ip >= 0.0)


class TestAyumiTriode:

    def test_derived_coefficients(self, ayumi_12ax7):
        alpha = 0.43455
        a = 1.0 / (1.0 - alpha)
        assert ayumi_12ax7.a == approx(a)
        assert ayumi_12ax7.b == approx(1.5 - a)
        assert ayumi_12ax7.c == approx(3.0 * alpha - 1.0)
        assert ayumi_12ax7.mum == approx(a / 1.5 * 88.41380)

    def test_missing_limits_are_derived(self, ayumi_12ax7):
        m = ayumi_12ax7
        assert m.Glim == approx(m.Gp * (1.0 + 1.0 / m.mum) ** 1.5)
        assert m.Xg == approx(0.5 / (1.0 + 1.0 / m.mum) ** 1.5)

    def test_supplied_limits_are_kept(self):
        model = create_tube("triode", find_tube("12AY7").models[0])
        assert model.Glim == 0.00095518541
        assert model.Xg == 0.484901962646184

    def test_positive_grid_region(self, ayumi_12ax7):
        assert ayumi_12ax7.Ip(1.0, 100.0) > ayumi_12ax7.Ip(0.0, 100.0)

    def test_plate_current_limit(self, ayumi_12ax7):
        m = ayumi_12ax7
        Vp = 5.0
        assert m.Ip(0.0, Vp) <= (1.0 - m.Xg) * m.Glim * Vp ** 1.5 + 1e-15

    def test_cutoff(self, ayumi_12ax7):
        assert ayumi_12ax7.Ip(-50.0, 100.0) == 0.0
        assert ayumi_12ax7.Ip(-1.0, 0.0) == 0.0


class TestKorenPentode:

    def test_requires_screen_context(self, koren_6l6):
        with pytest.raises(ValueError):
            koren_6l6.Ip(-10.0, 300.0)

    def test_triode_mode_matches_triode_form(self, koren_6l6):
        params = find_tube("6L6GC").models[0]
        triode = KorenTriode(params)
        screen = ScreenContext("triode", 250.0)
        for Vg, Vp in PENTODE_POINTS:
            assert koren_6l6.Ip(Vg, Vp, screen) == approx(triode.Ip(Vg, Vp))

    def test_pentode_mode_flat_above_knee(self, koren_6l6, pentode_screen):
        # plate voltage has little effect once well above the knee
        i1 = koren_6l6.Ip(-20.0, 300.0, pentode_screen)
        i2 = koren_6l6.Ip(-20.0, 400.0, pentode_screen)
        assert i2 > i1
        assert (i2 - i1) / i1 < 0.02

    def test_ultralinear_between_pentode_and_triode(self, koren_6l6):
        Vg, Vp = -20.0, 300.0
        pentode = koren_6l6.Ip(Vg, Vp, ScreenContext("ultralinear", 250.0, 0.0))
        assert pentode == approx(koren_6l6.Ip(Vg, Vp, ScreenContext("pentode", 250.0)))
        ul = koren_6l6.Ip(Vg, Vp, ScreenContext("ultralinear", 250.0, 40.0))
        assert ul > pentode

    def test_zero_screen_voltage(self, koren_6l6):
        assert koren_6l6.Ip(-10.0, 300.0, ScreenContext("pentode", 0.0)) == 0.0

    def test_screen_current(self, koren_6l6, pentode_screen):
        p = find_tube("6L6GC").models[0]
        expected = (-10.0 + 250.0 / p.mu) ** p.ex / p.Kg2
        assert koren_6l6.Ig2(-10.0, 300.0, pentode_screen) == approx(expected)
        assert koren_6l6.Ig2(-100.0, 300.0, pentode_screen) == 0.0

    def test_screen_current_needs_kg2(self, pentode_screen):
        model = KorenPentode(KorenParams(mu=8.7, ex=1.35, Kg1=1460, Kp=48, Kvb=12))
        with pytest.raises(ValueError):
            model.Ig2(-10.0, 300.0, pentode_screen)


def _models_with_points():
    koren = create_tube("triode", KOONW_12AX7)
    ayumi = create_tube("triode", find_tube("12AX7").models[2])
    pentode = create_tube("pentode", find_tube("6L6GC").models[0])
    return [
        pytest.param(koren, None, TRIODE_POINTS, id="koren-triode"),
        pytest.param(ayumi, None, TRIODE_POINTS, id="ayumi-triode"),
        pytest.param(pentode, ScreenContext("pentode", 250.0), PENTODE_POINTS, id="koren-pentode"),
        pytest.param(pentode, ScreenContext("ultralinear", 250.0, 40.0), PENTODE_POINTS, id="koren-ultralinear"),
        pytest.param(pentode, ScreenContext("triode", 250.0), PENTODE_POINTS, id="koren-pentode-as-triode"),
    ]


@pytest.mark.parametrize("model, screen, points", _models_with_points())
class TestModelContract:

    def test_plate_voltage_round_trip(self, model, screen, points):
        for Vg, Vp in points:
            Ip = model.Ip(Vg, Vp, screen)
            assert model.Vp(Vg, Ip, screen) == approx(Vp, abs=1e-3)

    def test_grid_voltage_round_trip(self, model, screen, points):
        for Vg, Vp in points:
            Ip = model.Ip(Vg, Vp, screen)
            assert model.Vg(Vp, Ip, screen) == approx(Vg, abs=1e-4)

    def test_non_decreasing_in_plate_voltage(self, model, screen, points):
        Vp = np.linspace(0.0, 600.0, 601)
        for Vg in sorted({vg for vg, _ in points}):
            Ip = np.asarray(model.Ip(Vg, Vp, screen))
            assert np.all(np.diff(Ip) >= -1e-15)

    def test_never_negative(self, model, screen, points):
        Vg = np.linspace(-100.0, 0.0, 51)
        for Vp in (0.0, 10.0, 300.0):
            assert np.all(np.asarray(model.Ip(Vg, Vp, screen)) >= 0.0)


class TestFactory:

    def test_triode_models(self):
        assert isinstance(create_tube("triode", KOONW_12AX7), KorenTriode)
        assert isinstance(create_tube("triode", find_tube("12AX7").models[2]), AyumiTriode)

    def test_tetrode_shares_pentode_model(self):
        model = create_tube("tetrode", find_tube("6V6").models[0])
        assert isinstance(model, KorenPentode)
        assert model.category == "pentode"

    def test_mapping_params(self):
        model = create_tube("triode", {"type": "koren", "mu": 100, "ex": 1.4, "Kg1": 1060,
                                       "Kp": 600, "Kvb": 300, "Vct": 0.0, "attribution": "koren"})
        assert isinstance(model, KorenTriode)
        assert model.params.Kg1 == 1060

    def test_pentode_ayumi_is_unsupported(self):
        params = AyumiParams(G=0.00071212, muc=88.4138, alpha=0.43455, Vgo=0.59837)
        with pytest.raises(UnsupportedModel) as info:
            create_tube("pentode", params)
        message = str(info.value)
        assert "pentode" in message
        assert "ayumi" in message
        assert info.value.category == "pentode"
        assert info.value.model_type == "ayumi"

    def test_unsupported_is_value_error(self):
        with pytest.raises(ValueError):
            create_tube("tetrode", find_tube("6V6").models[1])

    def test_unknown_type_tag(self):
        with pytest.raises(UnsupportedModel) as info:
            create_tube("triode", {"type": "immler", "mu": 94.3})
        assert "immler" in str(info.value)

    def test_params_from_dict_ignores_extra_keys(self):
        params = params_from_dict({"type": "ayumi", "G": 1e-3, "muc": 10.0, "alpha": 0.5,
                                   "Vgo": 0.5, "r": 0.05, "Ea": -2000})
        assert isinstance(params, AyumiParams)
        assert params.Glim is None

    def test_params_from_dict_unknown_type(self):
        with pytest.raises(ValueError):
            params_from_dict({"type": "weaver"})
