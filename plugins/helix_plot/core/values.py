"""Real/complex numeric values and their arithmetic.

A value is either :class:`Real` or :class:`Complex`. Mixing the two promotes
the real operand to ``Complex(x, 0)`` for that operation only; a complex
result is never narrowed back to :class:`Real`, even when its imaginary part
is zero.

Real arithmetic follows IEEE-754 double semantics through numpy, so ``1/0``
is ``inf`` and ``0/0`` is ``nan`` instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from .errors import EvalError


@dataclass(frozen=True, slots=True)
class Real:
    value: float

    @property
    def re(self) -> float:
        return self.value

    @property
    def im(self) -> float:
        return 0.0


@dataclass(frozen=True, slots=True)
class Complex:
    re: float
    im: float


Value = Real | Complex

I = Complex(0.0, 1.0)


@np.errstate(all="ignore")
def ieee(fn: Callable[..., object], *args: float) -> float:
    """Apply a numpy ufunc to plain floats without raising on inf/nan."""

    return float(fn(*args))


def is_complex(value: Value) -> bool:
    return isinstance(value, Complex)


def to_complex(value: Value) -> Complex:
    if isinstance(value, Complex):
        return value
    return Complex(value.value, 0.0)


def is_finite(value: Value) -> bool:
    return math.isfinite(value.re) and math.isfinite(value.im)


def magnitude(value: Value) -> float:
    if isinstance(value, Real):
        return abs(value.value)
    return ieee(np.hypot, value.re, value.im)


def phase(value: Value) -> float:
    return math.atan2(value.im, value.re)


def from_python(number: complex | float | int) -> Value:
    if isinstance(number, complex):
        return Complex(number.real, number.imag)
    return Real(float(number))


def to_python(value: Value) -> complex | float:
    if isinstance(value, Complex):
        return complex(value.re, value.im)
    return value.value


def add(a: Value, b: Value) -> Value:
    if isinstance(a, Real) and isinstance(b, Real):
        return Real(a.value + b.value)
    a, b = to_complex(a), to_complex(b)
    return Complex(a.re + b.re, a.im + b.im)


def sub(a: Value, b: Value) -> Value:
    if isinstance(a, Real) and isinstance(b, Real):
        return Real(a.value - b.value)
    a, b = to_complex(a), to_complex(b)
    return Complex(a.re - b.re, a.im - b.im)


def mul(a: Value, b: Value) -> Value:
    if isinstance(a, Real) and isinstance(b, Real):
        return Real(a.value * b.value)
    # Scaling by a real keeps 0 * inf out of the untouched component.
    if isinstance(a, Real):
        return Complex(a.value * b.re, a.value * b.im)
    if isinstance(b, Real):
        return Complex(a.re * b.value, a.im * b.value)
    a, b = to_complex(a), to_complex(b)
    return Complex(a.re * b.re - a.im * b.im, a.re * b.im + a.im * b.re)


def div(a: Value, b: Value) -> Value:
    if isinstance(a, Real) and isinstance(b, Real):
        return Real(ieee(np.divide, a.value, b.value))
    a, b = to_complex(a), to_complex(b)
    # (a * conj(b)) / |b|^2
    den = b.re * b.re + b.im * b.im
    return Complex(
        ieee(np.divide, a.re * b.re + a.im * b.im, den),
        ieee(np.divide, a.im * b.re - a.re * b.im, den),
    )


def complex_exp(z: Complex) -> Complex:
    scale = ieee(np.exp, z.re)
    return Complex(scale * ieee(np.cos, z.im), scale * ieee(np.sin, z.im))


def complex_log(z: Complex) -> Complex:
    return Complex(ieee(np.log, ieee(np.hypot, z.re, z.im)), math.atan2(z.im, z.re))


def power(base: Value, exponent: Value) -> Value:
    if isinstance(base, Real) and isinstance(exponent, Real):
        return Real(ieee(np.power, base.value, exponent.value))
    # a^b = exp(b * ln(a))
    return complex_exp(to_complex(mul(exponent, complex_log(to_complex(base)))))


def negate(value: Value) -> Value:
    if isinstance(value, Real):
        return Real(-value.value)
    return Complex(-value.re, -value.im)


def identity(value: Value) -> Value:
    return value


_UNARY: dict[str, Callable[[Value], Value]] = {
    "-": negate,
    "+": identity,
}

_BINARY: dict[str, Callable[[Value, Value], Value]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "^": power,
}


def binary(op: str, left: Value, right: Value) -> Value:
    handler = _BINARY.get(op)
    if handler is None:
        raise EvalError(f"Unknown operator '{op}'")
    return handler(left, right)


def unary(op: str, operand: Value) -> Value:
    handler = _UNARY.get(op)
    if handler is not None:
        return handler(operand)
    raise EvalError(f"Unknown unary operator '{op}'")


def _json_float(number: float) -> float | None:
    return number if math.isfinite(number) else None


def describe(value: Value) -> dict[str, object]:
    """JSON friendly view of ``value``; non-finite parts become ``None``."""

    return {
        "type": "complex" if isinstance(value, Complex) else "real",
        "re": _json_float(value.re),
        "im": _json_float(value.im),
        "finite": is_finite(value),
    }


__all__ = [
    "Real",
    "Complex",
    "Value",
    "I",
    "ieee",
    "is_complex",
    "to_complex",
    "is_finite",
    "magnitude",
    "phase",
    "from_python",
    "to_python",
    "add",
    "sub",
    "mul",
    "div",
    "power",
    "negate",
    "identity",
    "complex_exp",
    "complex_log",
    "binary",
    "unary",
    "describe",
]
