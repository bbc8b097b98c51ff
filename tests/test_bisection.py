"""Tests for the bisection root finder."""

import pytest
from pytest import approx

from tubeamp.config import BisectionConfig
from tubeamp.errors import RootNotFound, TubeAmpError
from tubeamp.solver import bisect


class TestBisect:

    def test_increasing_function(self):
        assert bisect(lambda x: x - 2.0, 0.0, 5.0) == approx(2.0, abs=1e-8)

    def test_decreasing_function(self):
        assert bisect(lambda x: 3.0 - x, 0.0, 10.0) == approx(3.0, abs=1e-8)

    def test_nonlinear_function(self):
        assert bisect(lambda x: x ** 3 - 8.0, 0.0, 10.0) == approx(2.0, abs=1e-8)

    def test_returns_midpoint_when_residual_below_eps(self):
        calls = []

        def f(x):
            calls.append(x)
            return x - 2.5

        assert bisect(f, 0.0, 5.0) == 2.5
        # f(lo) and the first midpoint
        assert len(calls) == 2

    def test_stops_on_half_width(self):
        cfg = BisectionConfig(tol=1e-3, eps=0.0)
        x = bisect(lambda x: x - 1.0 / 3.0, 0.0, 1.0, cfg)
        assert x == approx(1.0 / 3.0, abs=1e-3)

    def test_exhausted_budget_raises(self):
        cfg = BisectionConfig(max_iter=5, tol=1e-12, eps=1e-15)
        with pytest.raises(RootNotFound) as info:
            bisect(lambda x: x - 1.0 / 3.0, 0.0, 1.0, cfg)
        err = info.value
        assert err.iterations == 5
        assert err.lo <= 1.0 / 3.0 <= err.hi

    def test_root_not_found_is_runtime_error(self):
        cfg = BisectionConfig(max_iter=1, tol=1e-12, eps=1e-15)
        with pytest.raises(RuntimeError):
            bisect(lambda x: x - 0.1, 0.0, 1.0, cfg)
        assert issubclass(RootNotFound, TubeAmpError)

    def test_unbracketed_converges_to_end(self):
        # f > 0 everywhere: the search walks to the upper end without failing
        x = bisect(lambda x: x + 1.0, 0.0, 10.0)
        assert x == approx(10.0, abs=1e-6)

    def test_check_bracket_rejects_unbracketed(self):
        calls = []

        def f(x):
            calls.append(x)
            return x + 1.0

        with pytest.raises(RootNotFound):
            bisect(f, 0.0, 10.0, BisectionConfig(check_bracket=True))
        assert len(calls) == 2

    def test_check_bracket_accepts_bracketed(self):
        x = bisect(lambda x: x - 4.0, 0.0, 10.0, BisectionConfig(check_bracket=True))
        assert x == approx(4.0, abs=1e-8)
