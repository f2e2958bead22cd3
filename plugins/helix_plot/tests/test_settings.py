import math

from plugins.helix_plot.core import HelixPlotSettings, load_settings


def test_defaults():
    settings = load_settings(None)
    assert settings == HelixPlotSettings()
    assert settings.default_samples == 800
    assert settings.grid == (50, 50)
    assert settings.x_range == (-math.pi, math.pi)


def test_overrides_are_coerced():
    settings = load_settings(
        {
            "default_samples": "200",
            "max_samples": 1000,
            "grid": [10, "20"],
            "t_range": [0, 6.5],
            "max_channels": 3,
        }
    )
    assert settings.default_samples == 200
    assert settings.max_samples == 1000
    assert settings.grid == (10, 20)
    assert settings.t_range == (0.0, 6.5)
    assert settings.max_channels == 3


def test_malformed_values_fall_back():
    settings = load_settings(
        {
            "max_samples": "lots",
            "grid": [10],
            "t_range": [0, "inf"],
            "y_range": "wide",
            "max_grid_points": -5,
        }
    )
    defaults = HelixPlotSettings()
    assert settings.max_samples == defaults.max_samples
    assert settings.grid == defaults.grid
    assert settings.t_range == defaults.t_range
    assert settings.y_range == defaults.y_range
    assert settings.max_grid_points == 1


def test_default_samples_never_exceed_maximum():
    settings = load_settings({"default_samples": 5000, "max_samples": 100})
    assert settings.default_samples == 100
