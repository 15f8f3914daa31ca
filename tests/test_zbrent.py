import math

import pytest

from planet_ephem.zbrent import zbrent


def test_cubic_root_default_tolerance():
    root = 2.0945514815423265
    x = zbrent(lambda x: x ** 3 - 2.0 * x - 5.0, 2.0, 3.0)
    assert x is not None
    assert abs(x - root) < 1e-5


def test_tight_tolerance_more_iterations():
    root = 0.7390851332151607
    x = zbrent(lambda x: math.cos(x) - x, 0.0, 1.0, tol=1e-12, itmax=100)
    assert abs(x - root) < 1e-10


def test_pre_evaluated_endpoints_skip_calls():
    calls = []

    def f(x):
        calls.append(x)
        return math.sin(x)

    x = zbrent(f, (3.0, math.sin(3.0)), (3.5, math.sin(3.5)))
    assert abs(x - math.pi) < 1e-5
    assert 3.0 not in calls and 3.5 not in calls


def test_reversed_bracket():
    x = zbrent(lambda x: x - 0.25, 1.0, -1.0)
    assert x == pytest.approx(0.25, abs=1e-5)


def test_no_bracket_returns_none():
    assert zbrent(lambda x: x * x + 1.0, 0.0, 1.0) is None
    assert zbrent(lambda x: x - 5.0, (0.0, -5.0), (1.0, -4.0)) is None


def test_root_at_endpoint():
    assert zbrent(lambda x: x - 1.0, 1.0, 3.0) == 1.0
