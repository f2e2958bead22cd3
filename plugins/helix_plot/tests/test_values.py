import math

import pytest

from plugins.helix_plot.core.values import (
    I,
    Complex,
    Real,
    add,
    describe,
    div,
    from_python,
    magnitude,
    mul,
    power,
    to_python,
    unary,
)


def test_real_division_follows_ieee():
    assert div(Real(1.0), Real(0.0)) == Real(math.inf)
    assert div(Real(-1.0), Real(0.0)) == Real(-math.inf)
    assert math.isnan(div(Real(0.0), Real(0.0)).value)


def test_mixing_promotes_and_never_narrows():
    result = add(Real(1.0), Complex(2.0, 0.0))
    assert result == Complex(3.0, 0.0)
    assert isinstance(result, Complex)
    assert mul(I, I) == Complex(-1.0, 0.0)


def test_complex_division():
    # (1 + 2i) / (3 - 4i) = (-5 + 10i) / 25
    result = div(Complex(1.0, 2.0), Complex(3.0, -4.0))
    assert result.re == pytest.approx(-0.2)
    assert result.im == pytest.approx(0.4)


def test_complex_division_by_zero_is_not_finite():
    result = div(Complex(1.0, 0.0), Complex(0.0, 0.0))
    assert not (math.isfinite(result.re) and math.isfinite(result.im))


def test_power_real_and_complex():
    assert power(Real(2.0), Real(10.0)) == Real(1024.0)
    assert math.isnan(power(Real(-8.0), Real(1 / 3)).value)
    squared = power(I, Real(2.0))
    assert squared.re == pytest.approx(-1.0)
    assert squared.im == pytest.approx(0.0, abs=1e-12)


def test_unary_and_magnitude():
    assert unary("-", Complex(1.0, -2.0)) == Complex(-1.0, 2.0)
    assert unary("+", Real(3.0)) == Real(3.0)
    assert magnitude(Complex(3.0, 4.0)) == pytest.approx(5.0)
    assert magnitude(Real(-2.0)) == 2.0


def test_python_conversions():
    assert from_python(2) == Real(2.0)
    assert from_python(1 + 2j) == Complex(1.0, 2.0)
    assert to_python(Complex(1.0, 2.0)) == 1 + 2j
    assert to_python(Real(0.5)) == 0.5


def test_describe_replaces_non_finite_parts():
    assert describe(Real(math.inf)) == {"type": "real", "re": None, "im": 0.0, "finite": False}
    assert describe(Complex(1.0, 2.0)) == {"type": "complex", "re": 1.0, "im": 2.0, "finite": True}
