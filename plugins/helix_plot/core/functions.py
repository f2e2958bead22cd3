"""Builtin function table for ``Call`` nodes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from .errors import ArityError, DomainError, UnknownFunctionError
from .values import (
    I,
    Complex,
    Real,
    Value,
    add,
    complex_exp,
    complex_log,
    div,
    ieee,
    mul,
    power,
    sub,
    to_complex,
)


@dataclass(frozen=True, slots=True)
class FunctionSpec:
    """A builtin with its accepted arities.

    ``on_complex`` is ``None`` for functions that have no complex meaning;
    calling them with any complex argument is a :class:`DomainError`.
    """

    name: str
    arity: tuple[int, ...]
    on_real: Callable[..., Value]
    on_complex: Callable[..., Value] | None = None


def _real(fn: Callable[..., object]) -> Callable[..., Value]:
    def wrapped(*args: float) -> Value:
        return Real(ieee(fn, *args))

    return wrapped


def _real_sqrt(x: float) -> Value:
    if x < 0:
        return Complex(0.0, math.sqrt(-x))
    return Real(ieee(np.sqrt, x))


def _real_round(x: float) -> Value:
    # Half away from zero, so round(2.5) is 3 and round(-2.5) is -3.
    return Real(ieee(np.copysign, ieee(np.floor, abs(x) + 0.5), x))


def _real_log(x: float, base: float | None = None) -> Value:
    if base is None:
        return Real(ieee(np.log, x))
    return Real(ieee(np.divide, ieee(np.log, x), ieee(np.log, base)))


def _real_clamp(x: float, low: float, high: float) -> Value:
    return Real(ieee(np.minimum, ieee(np.maximum, x, low), high))


def _real_arg(x: float) -> Value:
    if math.isnan(x):
        return Real(math.nan)
    return Real(math.pi if x < 0 else 0.0)


def _polar(radius: float, theta: float) -> Value:
    return Complex(radius * ieee(np.cos, theta), radius * ieee(np.sin, theta))


def _c_sin(z: Complex) -> Value:
    return Complex(
        ieee(np.sin, z.re) * ieee(np.cosh, z.im),
        ieee(np.cos, z.re) * ieee(np.sinh, z.im),
    )


def _c_cos(z: Complex) -> Value:
    return Complex(
        ieee(np.cos, z.re) * ieee(np.cosh, z.im),
        -ieee(np.sin, z.re) * ieee(np.sinh, z.im),
    )


def _c_sinh(z: Complex) -> Value:
    return Complex(
        ieee(np.sinh, z.re) * ieee(np.cos, z.im),
        ieee(np.cosh, z.re) * ieee(np.sin, z.im),
    )


def _c_cosh(z: Complex) -> Value:
    return Complex(
        ieee(np.cosh, z.re) * ieee(np.cos, z.im),
        ieee(np.sinh, z.re) * ieee(np.sin, z.im),
    )


def _c_sqrt(z: Complex) -> Value:
    radius = math.sqrt(ieee(np.hypot, z.re, z.im))
    half_angle = math.atan2(z.im, z.re) / 2
    return Complex(radius * ieee(np.cos, half_angle), radius * ieee(np.sin, half_angle))


def _c_log(z: Complex, base: Complex | None = None) -> Value:
    if base is None:
        return complex_log(z)
    return div(complex_log(z), complex_log(base))


def _c_asin(z: Complex) -> Value:
    # asin(z) = -i * ln(iz + sqrt(1 - z^2))
    root = _c_sqrt(to_complex(sub(Real(1.0), mul(z, z))))
    return mul(Complex(0.0, -1.0), complex_log(to_complex(add(mul(I, z), root))))


def _c_acos(z: Complex) -> Value:
    return sub(Real(math.pi / 2), _c_asin(z))


def _c_atan(z: Complex) -> Value:
    # atan(z) = (i/2) * ln((i + z) / (i - z))
    ratio = to_complex(div(add(I, z), sub(I, z)))
    return mul(Complex(0.0, 0.5), complex_log(ratio))


def _c_sign(z: Complex) -> Value:
    size = ieee(np.hypot, z.re, z.im)
    if size == 0:
        return Complex(0.0, 0.0)
    return Complex(z.re / size, z.im / size)


_LN10 = Real(math.log(10.0))

_SPECS = [
    FunctionSpec("sin", (1,), _real(np.sin), _c_sin),
    FunctionSpec("cos", (1,), _real(np.cos), _c_cos),
    FunctionSpec("tan", (1,), _real(np.tan), lambda z: div(_c_sin(z), _c_cos(z))),
    FunctionSpec("asin", (1,), _real(np.arcsin), _c_asin),
    FunctionSpec("acos", (1,), _real(np.arccos), _c_acos),
    FunctionSpec("atan", (1,), _real(np.arctan), _c_atan),
    FunctionSpec("sinh", (1,), _real(np.sinh), _c_sinh),
    FunctionSpec("cosh", (1,), _real(np.cosh), _c_cosh),
    FunctionSpec("tanh", (1,), _real(np.tanh), lambda z: div(_c_sinh(z), _c_cosh(z))),
    FunctionSpec("exp", (1,), _real(np.exp), complex_exp),
    FunctionSpec("log", (1, 2), _real_log, _c_log),
    FunctionSpec("ln", (1,), _real_log, _c_log),
    FunctionSpec("log10", (1,), _real(np.log10), lambda z: div(complex_log(z), _LN10)),
    FunctionSpec("sqrt", (1,), _real_sqrt, _c_sqrt),
    FunctionSpec("pow", (2,), lambda a, b: power(Real(a), Real(b)), power),
    FunctionSpec("sign", (1,), _real(np.sign), _c_sign),
    FunctionSpec("abs", (1,), _real(np.abs), lambda z: Real(ieee(np.hypot, z.re, z.im))),
    FunctionSpec("re", (1,), Real, lambda z: Real(z.re)),
    FunctionSpec("im", (1,), lambda x: Real(0.0), lambda z: Real(z.im)),
    FunctionSpec("conj", (1,), Real, lambda z: Complex(z.re, -z.im)),
    FunctionSpec("arg", (1,), _real_arg, lambda z: Real(math.atan2(z.im, z.re))),
    FunctionSpec("floor", (1,), _real(np.floor)),
    FunctionSpec("ceil", (1,), _real(np.ceil)),
    FunctionSpec("round", (1,), _real_round),
    FunctionSpec("mod", (2,), _real(np.mod)),
    FunctionSpec("min", (2,), _real(np.minimum)),
    FunctionSpec("max", (2,), _real(np.maximum)),
    FunctionSpec("clamp", (3,), _real_clamp),
    FunctionSpec("atan2", (2,), _real(np.arctan2)),
    FunctionSpec("polar", (2,), _polar),
]

FUNCTIONS: dict[str, FunctionSpec] = {spec.name: spec for spec in _SPECS}


def call_function(name: str, args: list[Value]) -> Value:
    """Apply builtin ``name`` to already evaluated ``args``."""

    if not args:
        raise UnknownFunctionError(f"Function '{name}' called without arguments")
    spec = FUNCTIONS.get(name)
    if spec is None:
        raise UnknownFunctionError(f"Unknown function '{name}'")

    any_complex = any(isinstance(arg, Complex) for arg in args)
    if any_complex and spec.on_complex is None:
        raise DomainError(f"{name} is not defined for complex numbers")
    if len(args) not in spec.arity:
        expected = " or ".join(str(count) for count in spec.arity)
        raise ArityError(f"{name} expects {expected} argument(s), got {len(args)}")

    if any_complex:
        return spec.on_complex(*(to_complex(arg) for arg in args))
    return spec.on_real(*(arg.value for arg in args))


__all__ = ["FUNCTIONS", "FunctionSpec", "call_function"]
