import pytest

from plugins.helix_plot.core import Mode, detect_mode, parse_program


def _mode(text: str) -> Mode:
    return detect_mode(parse_program(text).definitions)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("r(t) = (cos(t), sin(t), t)", Mode.PARAM_CURVE),
        ("x(t) = cos(t)\ny(t) = sin(t)\nz(t) = t", Mode.PARAM_CURVE),
        ("f(t) = exp(i*t)", Mode.COMPLEX_CURVE),
        ("z(x, y) = x*y", Mode.SURFACE),
        ("z(y, x) = x - y", Mode.SURFACE),
        ("z(x, y) = x\ny = 2", Mode.SURFACE),
        ("z(x, y) = x\nx = 1\ny = 2", Mode.PARAM_CURVE),
        ("z(t) = t", Mode.PARAM_CURVE),
        ("z(x, y, w) = x", Mode.PARAM_CURVE),
        ("", Mode.PARAM_CURVE),
    ],
)
def test_detect_mode(text, expected):
    assert _mode(text) == expected


def test_vector_r_outranks_complex_f():
    assert _mode("f(t) = t\nr(t) = (t, t, t)") == Mode.PARAM_CURVE


def test_scalar_r_does_not_select_curve():
    assert _mode("r(t) = t\nf(t) = i*t") == Mode.COMPLEX_CURVE


def test_axes_outrank_complex_f():
    assert _mode("f(t) = t\nx(t) = t\ny(t) = t\nz(t) = t") == Mode.PARAM_CURVE


def test_complex_f_outranks_surface():
    assert _mode("z(x, y) = x\nf(t) = t") == Mode.COMPLEX_CURVE
