"""Bundled example programs."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .modes import Mode


@dataclass(frozen=True, slots=True)
class Preset:
    key: str
    name: str
    category: str
    code: str
    expected_mode: Mode

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["expected_mode"] = self.expected_mode.value
        return payload


PRESETS: tuple[Preset, ...] = (
    Preset(
        key="complex_lissajous",
        name="Lissajous / Complex Demo",
        category="math",
        code="# Lissajous / Complex Demo\nf(t) = exp(-0.1*t) * (cos(5*t) + i*sin(5*t))\ntmin = 0\ntmax = 10",
        expected_mode=Mode.COMPLEX_CURVE,
    ),
    Preset(
        key="unit_circle",
        name="Circle (Unit)",
        category="math",
        code="f(t) = cos(t) + i*sin(t)\ntmin = 0\ntmax = 2*pi",
        expected_mode=Mode.COMPLEX_CURVE,
    ),
    Preset(
        key="rose_k5",
        name="Rose (k=5)",
        category="math",
        code="f(t) = cos(5*t)*cos(t) + i*(cos(5*t)*sin(t))\ntmin = 0\ntmax = tau",
        expected_mode=Mode.COMPLEX_CURVE,
    ),
    Preset(
        key="logarithmic_spiral",
        name="Logarithmic Spiral",
        category="math",
        code="f(t) = exp((0.05 + i)*t)\ntmin = 0\ntmax = 18*pi",
        expected_mode=Mode.COMPLEX_CURVE,
    ),
    Preset(
        key="helix",
        name="3D Helix",
        category="math",
        code="x(t) = cos(t)\ny(t) = sin(t)\nz(t) = 0.1*t\ntmin = 0\ntmax = 20*pi",
        expected_mode=Mode.PARAM_CURVE,
    ),
    Preset(
        key="vector_helix",
        name="Helix (vector form)",
        category="math",
        code="r(t) = (cos(t), sin(t), t/(2*pi))\ntmin = 0\ntmax = 6*pi",
        expected_mode=Mode.PARAM_CURVE,
    ),
    Preset(
        key="damped_oscillator",
        name="Damped Oscillator",
        category="physics",
        code="# x(t) = A e^(-gamma t) cos(omega t)\nA = 1\ngamma = 0.15\nomega = 4\nf(t) = A*exp(-gamma*t)*(cos(omega*t) + i*sin(omega*t))\ntmin = 0\ntmax = 20\nperiod = 2*pi/4",
        expected_mode=Mode.COMPLEX_CURVE,
    ),
    Preset(
        key="surface_ripple",
        name="Surface Ripple",
        category="math",
        code="z(x, y) = sin(x)*cos(y)\nxmin = -pi\nxmax = pi\nymin = -pi\nymax = pi",
        expected_mode=Mode.SURFACE,
    ),
    Preset(
        key="paraboloid",
        name="Paraboloid",
        category="math",
        code="z(x, y) = x^2 + y^2\nxmin = -2\nxmax = 2\nymin = -2\nymax = 2",
        expected_mode=Mode.SURFACE,
    ),
    Preset(
        key="nan_discontinuity",
        name="NaN Discontinuity",
        category="math",
        code="x(t) = 1/(t-1)\ny(t) = sin(t)\nz(t) = 0\ntmin = 0\ntmax = 2",
        expected_mode=Mode.PARAM_CURVE,
    ),
)

_BY_KEY = {preset.key: preset for preset in PRESETS}


def list_presets() -> list[Preset]:
    return list(PRESETS)


def get_preset(key: str) -> Preset:
    """Return the preset named ``key``; raises ``KeyError`` when unknown."""

    try:
        return _BY_KEY[key]
    except KeyError:
        raise KeyError(f"Unknown preset '{key}'") from None


__all__ = ["PRESETS", "Preset", "get_preset", "list_presets"]
