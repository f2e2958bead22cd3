"""Exception hierarchy for the HelixPlot expression engine."""

from __future__ import annotations


class ExpressionError(ValueError):
    """Raised when a definition cannot be parsed or evaluated."""

    code = "expression"


class ParseError(ExpressionError):
    """Structural problem with a single definition line."""

    code = "parse"


class InvalidLhsError(ParseError):
    code = "parse.invalid_lhs"


class UnexpectedTokenError(ParseError):
    code = "parse.unexpected_token"


class TrailingTokensError(ParseError):
    code = "parse.trailing_tokens"


class MissingCloseParenError(ParseError):
    code = "parse.missing_close_paren"


class UnexpectedEndError(ParseError):
    code = "parse.unexpected_end"


class NestingTooDeepError(ParseError):
    code = "parse.too_deep"


class EvalError(ExpressionError):
    """Raised while evaluating an AST against a scope."""

    code = "eval"


class UndefinedVariableError(EvalError):
    code = "eval.undefined_variable"

    def __init__(self, name: str):
        super().__init__(f"Undefined variable '{name}'")
        self.name = name


class DomainError(EvalError):
    code = "eval.domain"


class ArityError(EvalError):
    code = "eval.arity"


class UnknownFunctionError(EvalError):
    code = "eval.unknown_function"


class UnexpectedTupleError(EvalError):
    code = "eval.unexpected_tuple"


class EvalDepthError(EvalError):
    code = "eval.too_deep"


class SamplingError(ExpressionError):
    """Raised for unusable sampling configuration such as a zero point count."""

    code = "sample.invalid_config"


__all__ = [
    "ExpressionError",
    "SamplingError",
    "ParseError",
    "InvalidLhsError",
    "UnexpectedTokenError",
    "TrailingTokensError",
    "MissingCloseParenError",
    "UnexpectedEndError",
    "NestingTooDeepError",
    "EvalError",
    "UndefinedVariableError",
    "DomainError",
    "ArityError",
    "UnknownFunctionError",
    "UnexpectedTupleError",
    "EvalDepthError",
]
