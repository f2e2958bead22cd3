"""Exports for the HelixPlot expression engine."""

from .errors import (
    ArityError,
    DomainError,
    EvalDepthError,
    EvalError,
    ExpressionError,
    InvalidLhsError,
    MissingCloseParenError,
    NestingTooDeepError,
    ParseError,
    SamplingError,
    TrailingTokensError,
    UndefinedVariableError,
    UnexpectedEndError,
    UnexpectedTokenError,
    UnexpectedTupleError,
    UnknownFunctionError,
)
from .evaluator import BUILTIN_CONSTANTS, base_scope, evaluate, evaluate_expression, make_scope
from .jobs import ChannelUpdate, GenerationGate, PlotChannel, get_channel, reset_channels
from .modes import ComplexMapping, Mode, detect_mode
from .nodes import Definition, format_definition, format_node, free_variables
from .parser import parse_definition, parse_expression
from .presets import Preset, get_preset, list_presets
from .program import LineError, ParsedProgram, PlotResult, build_plot, parse_program
from .sampler import (
    CurveSample,
    GridSpec,
    SampleRange,
    SurfaceSample,
    compute_constants,
    sample,
)
from .settings import HelixPlotSettings, load_settings
from .tokens import Token, TokenKind, tokenize
from .values import Complex, Real, Value, describe

__all__ = [
    "ArityError",
    "DomainError",
    "EvalDepthError",
    "EvalError",
    "NestingTooDeepError",
    "ExpressionError",
    "InvalidLhsError",
    "MissingCloseParenError",
    "ParseError",
    "SamplingError",
    "TrailingTokensError",
    "UndefinedVariableError",
    "UnexpectedEndError",
    "UnexpectedTokenError",
    "UnexpectedTupleError",
    "UnknownFunctionError",
    "BUILTIN_CONSTANTS",
    "base_scope",
    "evaluate",
    "evaluate_expression",
    "make_scope",
    "ChannelUpdate",
    "GenerationGate",
    "PlotChannel",
    "get_channel",
    "reset_channels",
    "ComplexMapping",
    "Mode",
    "detect_mode",
    "Definition",
    "format_definition",
    "format_node",
    "free_variables",
    "parse_definition",
    "parse_expression",
    "Preset",
    "get_preset",
    "list_presets",
    "LineError",
    "ParsedProgram",
    "PlotResult",
    "build_plot",
    "parse_program",
    "CurveSample",
    "GridSpec",
    "SampleRange",
    "SurfaceSample",
    "compute_constants",
    "sample",
    "HelixPlotSettings",
    "load_settings",
    "Token",
    "TokenKind",
    "tokenize",
    "Complex",
    "Real",
    "Value",
    "describe",
]
