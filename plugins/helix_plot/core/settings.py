"""Configuration helpers for the HelixPlot plugin."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

_DEFAULT_T_RANGE = (0.0, 10.0)
_DEFAULT_XY_RANGE = (-math.pi, math.pi)


@dataclass(frozen=True)
class HelixPlotSettings:
    default_samples: int = 800
    max_samples: int = 20000
    grid: tuple[int, int] = (50, 50)
    max_grid_points: int = 250000
    t_range: tuple[float, float] = _DEFAULT_T_RANGE
    x_range: tuple[float, float] = _DEFAULT_XY_RANGE
    y_range: tuple[float, float] = _DEFAULT_XY_RANGE
    max_source_length: int = 20000
    max_channels: int = 64


def _positive_int(raw: Any, default: int) -> int:
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(value, 1)


def _pair(raw: Any, default: tuple[float, float]) -> tuple[float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return default
    try:
        low, high = float(raw[0]), float(raw[1])
    except (TypeError, ValueError):
        return default
    if not (math.isfinite(low) and math.isfinite(high)):
        return default
    return low, high


def _grid(raw: Any, default: tuple[int, int]) -> tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return default
    return _positive_int(raw[0], default[0]), _positive_int(raw[1], default[1])


def load_settings(raw: Mapping[str, Any] | None) -> HelixPlotSettings:
    """Build settings from the ``plugins.helix_plot`` section of ``config.yml``.

    Missing or malformed entries fall back to the defaults so a bad config
    file never prevents the app from starting.
    """

    raw = raw or {}
    defaults = HelixPlotSettings()
    max_samples = _positive_int(raw.get("max_samples"), defaults.max_samples)
    default_samples = min(_positive_int(raw.get("default_samples"), defaults.default_samples), max_samples)
    return HelixPlotSettings(
        default_samples=default_samples,
        max_samples=max_samples,
        grid=_grid(raw.get("grid"), defaults.grid),
        max_grid_points=_positive_int(raw.get("max_grid_points"), defaults.max_grid_points),
        t_range=_pair(raw.get("t_range"), defaults.t_range),
        x_range=_pair(raw.get("x_range"), defaults.x_range),
        y_range=_pair(raw.get("y_range"), defaults.y_range),
        max_source_length=_positive_int(raw.get("max_source_length"), defaults.max_source_length),
        max_channels=_positive_int(raw.get("max_channels"), defaults.max_channels),
    )


__all__ = ["HelixPlotSettings", "load_settings"]
