import pytest

from plugins.helix_plot.core import Mode, build_plot, detect_mode, get_preset, list_presets, parse_program

PRESET_KEYS = [preset.key for preset in list_presets()]


@pytest.mark.parametrize("key", PRESET_KEYS)
def test_preset_parses_and_detects_expected_mode(key):
    preset = get_preset(key)
    program = parse_program(preset.code)
    assert program.errors == []
    assert detect_mode(program.definitions) is preset.expected_mode


@pytest.mark.parametrize("key", PRESET_KEYS)
def test_preset_samples(key):
    preset = get_preset(key)
    result = build_plot(preset.code, count=50, grid_size=(8, 8))
    assert result.mode is preset.expected_mode
    assert result.sample.valid.any()


def test_discontinuity_preset_reports_a_gap():
    result = build_plot(get_preset("nan_discontinuity").code, count=5)
    assert result.sample.invalid_count == 1
    assert result.sample.segments() == [(0, 2), (3, 5)]


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset("missing")


def test_to_dict_uses_plain_values():
    payload = get_preset("helix").to_dict()
    assert payload["expected_mode"] == Mode.PARAM_CURVE.value
    assert "z(t) = 0.1*t" in payload["code"]
