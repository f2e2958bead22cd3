"""Turn definitions into fixed-length point sequences or surface grids.

Sampling never stops early: a sample whose evaluation fails, or whose
coordinates are not all finite, is kept with ``valid=False`` so renderers can
split the curve into segments around the gap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

import numpy as np

from common.logging import get_logger

from .errors import EvalError, SamplingError
from .evaluator import base_scope, evaluate, make_scope
from .modes import ComplexMapping, Mode, detect_mode
from .nodes import Definition, Node, Tuple
from .values import Real, Value, magnitude

logger = get_logger("helixplot.sampler")

Position = tuple[float, float, float]
_NAN_POSITION: Position = (math.nan, math.nan, math.nan)


@dataclass(frozen=True, slots=True)
class SampleRange:
    start: float
    stop: float


@dataclass(frozen=True, slots=True)
class GridSpec:
    """Rectangular ``nx`` by ``ny`` lattice for height-field surfaces."""

    x: SampleRange = SampleRange(-math.pi, math.pi)
    y: SampleRange = SampleRange(-math.pi, math.pi)
    nx: int = 50
    ny: int = 50


def _json_coords(row: Iterable[float]) -> list[float | None]:
    return [float(value) if math.isfinite(value) else None for value in row]


@dataclass(slots=True)
class CurveSample:
    mode: Mode
    t: np.ndarray
    points: np.ndarray
    valid: np.ndarray

    def __len__(self) -> int:
        return int(self.points.shape[0])

    @property
    def invalid_count(self) -> int:
        return int(np.count_nonzero(~self.valid))

    def segments(self) -> list[tuple[int, int]]:
        """Half-open index ranges of consecutive valid points, two or more long."""

        runs: list[tuple[int, int]] = []
        start: int | None = None
        for index, ok in enumerate(self.valid):
            if ok and start is None:
                start = index
            elif not ok and start is not None:
                if index - start > 1:
                    runs.append((start, index))
                start = None
        if start is not None and len(self) - start > 1:
            runs.append((start, len(self)))
        return runs

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": "curve",
            "mode": self.mode.value,
            "count": len(self),
            "t": [float(value) for value in self.t],
            "points": [_json_coords(row) for row in self.points],
            "valid": [bool(flag) for flag in self.valid],
            "segments": [list(run) for run in self.segments()],
            "invalid": self.invalid_count,
        }


@dataclass(slots=True)
class SurfaceSample:
    mode: Mode
    grid: np.ndarray
    valid: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return int(self.grid.shape[0]), int(self.grid.shape[1])

    @property
    def invalid_count(self) -> int:
        return int(np.count_nonzero(~self.valid))

    def to_dict(self) -> dict[str, object]:
        nx, ny = self.shape
        return {
            "kind": "surface",
            "mode": self.mode.value,
            "shape": [nx, ny],
            "grid": [[_json_coords(node) for node in row] for row in self.grid],
            "valid": [[bool(flag) for flag in row] for row in self.valid],
            "invalid": self.invalid_count,
        }


SampleResult = CurveSample | SurfaceSample


def _try_evaluate(node: Node, scope: Mapping[str, Value]) -> Value | None:
    try:
        return evaluate(node, scope)
    except EvalError:
        return None


def compute_constants(definitions: Iterable[Definition]) -> dict[str, Value]:
    """Evaluate every parameterless definition once against the builtins only.

    Definitions that fail (for example ``y = t``, which needs the sampling
    variable) are left out of the returned map rather than reported.
    """

    scope = base_scope()
    constants: dict[str, Value] = {}
    for definition in definitions:
        if not definition.is_constant:
            continue
        value = _try_evaluate(definition.body, scope)
        if value is None:
            logger.debug("'%s' is not a constant; skipped", definition.target)
            continue
        constants[definition.target] = value
    return constants


def unit_steps(count: int) -> np.ndarray:
    """``i / (count - 1)`` for ``i`` in ``range(count)``; a single sample sits at 0."""

    if count < 1:
        raise SamplingError("Sample count must be at least 1")
    if count == 1:
        return np.zeros(1)
    return np.arange(count, dtype=float) / (count - 1)


def _curve_scope(definition: Definition, t: float, constants: Mapping[str, Value]) -> Mapping[str, Value]:
    bindings: dict[str, Value] = {"t": Real(t)}
    if definition.params and definition.params[0] != "t":
        bindings[definition.params[0]] = Real(t)
    return make_scope(bindings, constants)


def _curve_resolver(
    by_target: Mapping[str, Definition],
    mode: Mode,
    mapping: ComplexMapping,
    constants: Mapping[str, Value],
) -> Callable[[float], Position]:
    if mode is Mode.COMPLEX_CURVE:
        func = by_target.get("f")

        def complex_point(t: float) -> Position:
            if func is None:
                raise EvalError("No definition for f")
            value = evaluate(func.body, _curve_scope(func, t, constants))
            if mapping is ComplexMapping.B:
                return value.re, value.im, t
            if mapping is ComplexMapping.C:
                return value.re, value.im, magnitude(value)
            return t, value.re, value.im

        return complex_point

    vector = by_target.get("r")
    if vector is not None and isinstance(vector.body, Tuple):
        elements = vector.body.elements[:3]

        def vector_point(t: float) -> Position:
            scope = _curve_scope(vector, t, constants)
            coords = [evaluate(element, scope).re for element in elements]
            coords.extend([0.0] * (3 - len(coords)))
            return coords[0], coords[1], coords[2]

        return vector_point

    axes = [by_target.get(name) for name in ("x", "y", "z")]

    def axes_point(t: float) -> Position:
        coords = [
            0.0 if axis is None else evaluate(axis.body, _curve_scope(axis, t, constants)).re
            for axis in axes
        ]
        return coords[0], coords[1], coords[2]

    return axes_point


def sample_curve(
    definitions: Iterable[Definition],
    mode: Mode,
    mapping: ComplexMapping = ComplexMapping.A,
    t_range: SampleRange = SampleRange(0.0, 10.0),
    count: int = 800,
    *,
    constants: Mapping[str, Value] | None = None,
) -> CurveSample:
    definitions = list(definitions)
    if constants is None:
        constants = compute_constants(definitions)
    by_target = {definition.target: definition for definition in definitions}
    resolve = _curve_resolver(by_target, mode, mapping, constants)

    ts = t_range.start + unit_steps(count) * (t_range.stop - t_range.start)
    points = np.full((count, 3), np.nan)
    valid = np.zeros(count, dtype=bool)
    for index, t in enumerate(ts):
        try:
            position = resolve(float(t))
        except (EvalError, ArithmeticError):
            position = _NAN_POSITION
        points[index] = position
        valid[index] = all(math.isfinite(coord) for coord in position)

    result = CurveSample(mode=mode, t=ts, points=points, valid=valid)
    logger.debug("sampled %d curve points, %d invalid", count, result.invalid_count)
    return result


def sample_surface(
    definitions: Iterable[Definition],
    grid: GridSpec = GridSpec(),
    *,
    constants: Mapping[str, Value] | None = None,
) -> SurfaceSample:
    definitions = list(definitions)
    if constants is None:
        constants = compute_constants(definitions)
    height = next((d for d in reversed(definitions) if d.target == "z"), None)

    xs = grid.x.start + unit_steps(grid.nx) * (grid.x.stop - grid.x.start)
    ys = grid.y.start + unit_steps(grid.ny) * (grid.y.stop - grid.y.start)
    nodes = np.full((grid.nx, grid.ny, 3), np.nan)
    valid = np.zeros((grid.nx, grid.ny), dtype=bool)
    for i, x in enumerate(xs):
        for j, y in enumerate(ys):
            z = math.nan
            if height is not None:
                scope = make_scope({"x": Real(float(x)), "y": Real(float(y))}, constants)
                try:
                    z = evaluate(height.body, scope).re
                except (EvalError, ArithmeticError):
                    z = math.nan
            nodes[i, j] = (x, y, z)
            valid[i, j] = math.isfinite(x) and math.isfinite(y) and math.isfinite(z)

    result = SurfaceSample(mode=Mode.SURFACE, grid=nodes, valid=valid)
    logger.debug("sampled %dx%d surface, %d invalid", grid.nx, grid.ny, result.invalid_count)
    return result


def sample(
    definitions: Iterable[Definition],
    mode: Mode = Mode.AUTO,
    mapping: ComplexMapping = ComplexMapping.A,
    t_range: SampleRange = SampleRange(0.0, 10.0),
    count: int = 800,
    *,
    grid: GridSpec | None = None,
    constants: Mapping[str, Value] | None = None,
) -> SampleResult:
    """Sample ``definitions`` in ``mode``; :attr:`Mode.AUTO` is resolved with :func:`detect_mode`."""

    definitions = list(definitions)
    if mode is Mode.AUTO:
        mode = detect_mode(definitions)
    if mode is Mode.SURFACE:
        return sample_surface(definitions, grid or GridSpec(), constants=constants)
    return sample_curve(definitions, mode, mapping, t_range, count, constants=constants)


__all__ = [
    "SampleRange",
    "GridSpec",
    "CurveSample",
    "SurfaceSample",
    "SampleResult",
    "compute_constants",
    "unit_steps",
    "sample_curve",
    "sample_surface",
    "sample",
]
