"""API routes for the HelixPlot plugin."""

from __future__ import annotations

from functools import partial
from typing import Literal

from flask import Blueprint, Response, current_app, request
from pydantic import Field

from common.errors import LimitExceededAppError, NotFoundAppError, ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.tasks import run_in_thread
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    Complex,
    ComplexMapping,
    ExpressionError,
    HelixPlotSettings,
    Mode,
    Real,
    build_plot,
    compute_constants,
    describe,
    detect_mode,
    evaluate_expression,
    format_definition,
    format_node,
    free_variables,
    get_channel,
    get_preset,
    list_presets,
    load_settings,
    parse_expression,
    parse_program,
)

logger = get_logger("helixplot.api")


class ParsePayload(SchemaModel):
    source: str


class EvaluatePayload(SchemaModel):
    expression: str
    variables: dict[str, float | tuple[float, float]] | None = None


class PlotPayload(SchemaModel):
    source: str
    mode: Literal["auto", "curve", "complex", "surface"] = "auto"
    mapping: Literal["A", "B", "C"] = "A"
    samples: int | None = Field(default=None, ge=1)
    grid: tuple[int, int] | None = None
    channel: str | None = Field(default=None, min_length=1, max_length=128)
    generation: int | None = Field(default=None, ge=0)


api_bp = Blueprint("helix_plot_api", __name__, url_prefix="/api/helix_plot")


def _settings() -> HelixPlotSettings:
    settings = current_app.config.get("PLUGIN_SETTINGS", {}).get("helix_plot", {})
    return load_settings(settings)


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="helix_plot.invalid_request",
            details={"errors": getattr(exc, "details", None) or []},
        )
    )


def _invalid_expression(exc: ExpressionError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="helix_plot.invalid_expression",
            details={"reason": exc.code},
        )
    )


def _limit_exceeded(message: str) -> Response:
    return fail(LimitExceededAppError(message=message, code="helix_plot.limit_exceeded"))


def _check_source(source: str, settings: HelixPlotSettings) -> Response | None:
    if len(source) > settings.max_source_length:
        return _limit_exceeded("Source text is too long")
    return None


@api_bp.post("/parse")
def parse() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ParsePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    settings = _settings()
    if (error := _check_source(payload.source, settings)) is not None:
        return error

    program = parse_program(payload.source)
    constants = compute_constants(program.definitions)
    return ok(
        {
            "mode": detect_mode(program.definitions).value,
            "definitions": [
                {
                    "target": definition.target,
                    "params": list(definition.params),
                    "canonical": format_definition(definition),
                    "constant": definition.is_constant,
                    "vector": definition.is_vector,
                    "variables": sorted(free_variables(definition.body)),
                }
                for definition in program.definitions
            ],
            "constants": {name: describe(value) for name, value in constants.items()},
            "errors": [error.to_dict() for error in program.errors],
        }
    )


@api_bp.post("/evaluate")
def evaluate() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(EvaluatePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)

    variables = {
        name: Complex(*value) if isinstance(value, tuple) else Real(value)
        for name, value in (payload.variables or {}).items()
    }
    try:
        node = parse_expression(payload.expression)
        value = evaluate_expression(payload.expression, variables)
    except ExpressionError as exc:
        return _invalid_expression(exc)
    return ok(
        {
            **describe(value),
            "canonical": format_node(node),
            "used_variables": sorted(free_variables(node)),
        }
    )


@api_bp.post("/plot")
def plot() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(PlotPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)

    settings = _settings()
    if (error := _check_source(payload.source, settings)) is not None:
        return error
    if payload.samples is not None and payload.samples > settings.max_samples:
        return _limit_exceeded(f"At most {settings.max_samples} samples are allowed")
    if payload.grid is not None:
        nx, ny = payload.grid
        if nx < 1 or ny < 1:
            return fail(ValidationAppError(message="Grid size must be positive", code="helix_plot.invalid_request"))
        if nx * ny > settings.max_grid_points:
            return _limit_exceeded(f"At most {settings.max_grid_points} grid points are allowed")

    options = {
        "mode": Mode(payload.mode),
        "mapping": ComplexMapping(payload.mapping),
        "count": payload.samples,
        "grid_size": payload.grid,
    }
    try:
        if payload.channel:
            update = get_channel(payload.channel, settings).submit(
                payload.source, generation=payload.generation, **options
            )
            generation, result, stale = update.generation, update.result, update.stale
        else:
            result = run_in_thread(partial(build_plot, payload.source, settings, **options))
            generation, stale = payload.generation or 0, False
    except ExpressionError as exc:
        return _invalid_expression(exc)

    if stale:
        logger.info("stale plot request", extra={"channel": payload.channel, "generation": generation})
    data = result.to_dict() if result is not None else {}
    return ok({**data, "generation": generation, "stale": stale})


@api_bp.get("/presets")
def presets() -> Response:
    return ok({"presets": [preset.to_dict() for preset in list_presets()]})


@api_bp.get("/presets/<key>")
def preset_detail(key: str) -> Response:
    try:
        preset = get_preset(key)
    except KeyError as exc:
        return fail(NotFoundAppError(message=str(exc.args[0]), code="helix_plot.unknown_preset"))
    return ok(preset.to_dict())


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "parse",
    "evaluate",
    "plot",
    "presets",
    "preset_detail",
]
