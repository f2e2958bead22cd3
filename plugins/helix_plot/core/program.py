"""Multi-line definition programs and the text-to-samples pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping

from common.logging import get_logger

from .errors import ParseError
from .modes import ComplexMapping, Mode, detect_mode
from .nodes import Definition
from .parser import parse_definition
from .sampler import GridSpec, SampleRange, SampleResult, compute_constants, sample
from .settings import HelixPlotSettings
from .values import Real, Value

logger = get_logger("helixplot.program")

RANGE_NAMES = ("tmin", "tmax", "xmin", "xmax", "ymin", "ymax")
PERIOD_NAMES = ("period", "T", "Period")
RESERVED_NAMES = frozenset(RANGE_NAMES + PERIOD_NAMES)


@dataclass(frozen=True, slots=True)
class LineError:
    line: int
    message: str
    code: str = "parse"

    def to_dict(self) -> dict[str, object]:
        return {"line": self.line, "message": self.message, "code": self.code}

    def __str__(self) -> str:
        return f"Line {self.line}: {self.message}"


@dataclass(slots=True)
class ParsedProgram:
    definitions: list[Definition] = field(default_factory=list)
    errors: list[LineError] = field(default_factory=list)

    def get(self, target: str) -> Definition | None:
        for definition in self.definitions:
            if definition.target == target:
                return definition
        return None


def is_skippable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#") or stripped.startswith("//")


def parse_program(text: str) -> ParsedProgram:
    """Parse each definition line independently.

    Blank and comment lines are skipped. A failing line is recorded with its
    1-based number and does not stop the others. Redefining a target replaces
    the earlier definition.
    """

    by_target: dict[str, Definition] = {}
    errors: list[LineError] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if is_skippable(line):
            continue
        try:
            definition = parse_definition(line.strip())
        except ParseError as exc:
            logger.debug("line %d rejected: %s", number, exc)
            errors.append(LineError(line=number, message=str(exc), code=exc.code))
            continue
        by_target[definition.target] = definition
    return ParsedProgram(definitions=list(by_target.values()), errors=errors)


def _real_constant(constants: Mapping[str, Value], name: str) -> float | None:
    value = constants.get(name)
    if isinstance(value, Real) and math.isfinite(value.value):
        return value.value
    return None


def _range(constants: Mapping[str, Value], low: str, high: str, default: tuple[float, float]) -> SampleRange:
    start = _real_constant(constants, low)
    stop = _real_constant(constants, high)
    return SampleRange(
        default[0] if start is None else start,
        default[1] if stop is None else stop,
    )


@dataclass(slots=True)
class PlotResult:
    mode: Mode
    mapping: ComplexMapping
    sample: SampleResult
    errors: list[LineError]
    t_range: SampleRange
    grid: GridSpec
    parameters: dict[str, float]
    period: float | None
    definitions: list[Definition]

    def to_dict(self) -> dict[str, object]:
        return {
            "mode": self.mode.value,
            "mapping": self.mapping.value,
            "errors": [error.to_dict() for error in self.errors],
            "t_range": [self.t_range.start, self.t_range.stop],
            "x_range": [self.grid.x.start, self.grid.x.stop],
            "y_range": [self.grid.y.start, self.grid.y.stop],
            "parameters": self.parameters,
            "period": self.period,
            "sample": self.sample.to_dict(),
        }


def build_plot(
    text: str,
    settings: HelixPlotSettings | None = None,
    *,
    mode: Mode = Mode.AUTO,
    mapping: ComplexMapping = ComplexMapping.A,
    count: int | None = None,
    grid_size: tuple[int, int] | None = None,
) -> PlotResult:
    """Parse ``text``, pick a mode, read range constants and sample."""

    settings = settings or HelixPlotSettings()
    program = parse_program(text)
    definitions = program.definitions
    if mode is Mode.AUTO:
        mode = detect_mode(definitions)

    constants = compute_constants(definitions)
    t_range = _range(constants, "tmin", "tmax", settings.t_range)
    nx, ny = grid_size or settings.grid
    grid = GridSpec(
        x=_range(constants, "xmin", "xmax", settings.x_range),
        y=_range(constants, "ymin", "ymax", settings.y_range),
        nx=nx,
        ny=ny,
    )
    period = next(
        (value for value in (_real_constant(constants, name) for name in PERIOD_NAMES) if value is not None),
        None,
    )
    parameters = {
        name: value.value
        for name, value in constants.items()
        if name not in RESERVED_NAMES and isinstance(value, Real) and math.isfinite(value.value)
    }

    result = sample(
        definitions,
        mode,
        mapping,
        t_range,
        count or settings.default_samples,
        grid=grid,
        constants=constants,
    )
    return PlotResult(
        mode=mode,
        mapping=mapping,
        sample=result,
        errors=program.errors,
        t_range=t_range,
        grid=grid,
        parameters=parameters,
        period=period,
        definitions=definitions,
    )


__all__ = [
    "LineError",
    "ParsedProgram",
    "PlotResult",
    "RESERVED_NAMES",
    "build_plot",
    "is_skippable",
    "parse_program",
]
