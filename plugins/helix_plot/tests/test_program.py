import math

import pytest

from plugins.helix_plot.core import (
    HelixPlotSettings,
    Mode,
    SampleRange,
    build_plot,
    format_definition,
    get_preset,
    parse_program,
)
from plugins.helix_plot.core.program import is_skippable


def test_comments_blank_lines_and_redefinitions():
    program = parse_program("# helix\n\n// note\nf(t) = t\nbad line\nf(t) = 2*t\n")
    assert [format_definition(d) for d in program.definitions] == ["f(t) = (2 * t)"]
    assert len(program.errors) == 1
    error = program.errors[0]
    assert error.line == 5
    assert error.code == "parse.invalid_lhs"
    assert str(error).startswith("Line 5: ")


def test_failed_line_does_not_stop_the_rest():
    program = parse_program("f(t) = (t\nA = 2")
    assert program.get("f") is None
    assert program.get("A") is not None
    assert program.errors[0].to_dict()["code"] == "parse.missing_close_paren"


def test_skippable_lines():
    assert is_skippable("   ")
    assert is_skippable("  # comment")
    assert is_skippable("// comment")
    assert not is_skippable("x = 1")


def test_range_constants_set_the_parameter_interval():
    result = build_plot("f(t) = t\ntmin = 1\ntmax = 3", count=3)
    assert result.mode is Mode.COMPLEX_CURVE
    assert result.t_range == SampleRange(1.0, 3.0)
    assert list(result.sample.t) == [1.0, 2.0, 3.0]
    assert result.parameters == {}


def test_non_real_range_constant_is_ignored():
    settings = HelixPlotSettings(t_range=(0.0, 5.0))
    result = build_plot("f(t) = t\ntmin = i\ntmax = 1/0", settings, count=2)
    assert result.t_range == SampleRange(0.0, 5.0)


def test_parameters_and_period():
    result = build_plot(get_preset("damped_oscillator").code, count=10)
    assert result.parameters == pytest.approx({"A": 1.0, "gamma": 0.15, "omega": 4.0})
    assert result.period == pytest.approx(math.pi / 2)


def test_surface_ranges_and_grid_size():
    text = "z(x, y) = x*y\nxmin = 0\nxmax = 1\nymin = -1\nymax = 1"
    result = build_plot(text, grid_size=(2, 3))
    assert result.mode is Mode.SURFACE
    assert result.sample.shape == (2, 3)
    assert result.grid.x == SampleRange(0.0, 1.0)
    assert result.grid.y == SampleRange(-1.0, 1.0)
    assert result.sample.grid[1, 0].tolist() == [1.0, -1.0, -1.0]


def test_explicit_mode_overrides_detection():
    result = build_plot("x(t) = t\ny(t) = t\nz(t) = t\nf(t) = i*t", mode=Mode.COMPLEX_CURVE, count=4)
    assert result.mode is Mode.COMPLEX_CURVE
    assert result.sample.mode is Mode.COMPLEX_CURVE


def test_default_sample_count_comes_from_settings():
    result = build_plot("f(t) = t", HelixPlotSettings(default_samples=12))
    assert len(result.sample) == 12


def test_to_dict_is_json_ready():
    payload = build_plot("x(t) = 1/(t-1)\ny(t) = 0\nz(t) = 0\ntmin = 0\ntmax = 2\nbroken", count=3).to_dict()
    assert payload["mode"] == "curve"
    assert payload["t_range"] == [0.0, 2.0]
    assert payload["errors"][0]["line"] == 6
    assert payload["sample"]["points"][1] == [None, 0.0, 0.0]
    assert payload["period"] is None


def test_overly_nested_line_is_rejected_alone():
    source = "a = 1\nx = " + "(" * 400 + "1" + ")" * 400 + "\ny(t) = t"
    program = parse_program(source)
    assert [definition.target for definition in program.definitions] == ["a", "y"]
    assert len(program.errors) == 1
    assert program.errors[0].line == 2
    assert program.errors[0].code == "parse.too_deep"


def test_long_sum_does_not_abort_the_plot():
    result = build_plot("a = " + "+".join(["1"] * 3000) + "\nf(t) = t", count=5)
    assert len(result.sample) == 5
    assert result.sample.valid.all()
    assert [error.code for error in result.errors] == ["parse.too_deep"]
