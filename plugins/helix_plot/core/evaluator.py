"""AST evaluation against an immutable variable scope."""

from __future__ import annotations

import math
from collections import ChainMap
from typing import Mapping

from .errors import EvalDepthError, EvalError, UndefinedVariableError, UnexpectedTupleError
from .functions import call_function
from .nodes import BinaryOp, Call, Node, Number, Tuple, UnaryOp, Variable
from .parser import parse_expression
from .values import Complex, Real, Value, binary, unary

Scope = Mapping[str, Value]

BUILTIN_CONSTANTS: dict[str, Value] = {
    "pi": Real(math.pi),
    "e": Real(math.e),
    "tau": Real(math.tau),
    "i": Complex(0.0, 1.0),
    "j": Complex(0.0, 1.0),
}


def base_scope() -> Scope:
    """Scope holding only the builtin constants."""

    return ChainMap({}, BUILTIN_CONSTANTS)


def make_scope(bindings: Mapping[str, Value] | None = None, constants: Mapping[str, Value] | None = None) -> Scope:
    """Layer ``bindings`` over ``constants`` over the builtins without copying any of them."""

    layers: list[Mapping[str, Value]] = [dict(bindings or {})]
    if constants:
        layers.append(constants)
    layers.append(BUILTIN_CONSTANTS)
    return ChainMap(*layers)


def evaluate(node: Node, scope: Scope) -> Value:
    """Evaluate ``node``; raises an :class:`EvalError` subclass on failure."""

    try:
        return _evaluate(node, scope)
    except RecursionError:
        raise EvalDepthError("Expression is nested too deeply to evaluate") from None


def _evaluate(node: Node, scope: Scope) -> Value:
    if isinstance(node, Number):
        return Real(node.value)
    if isinstance(node, Variable):
        try:
            return scope[node.name]
        except KeyError:
            raise UndefinedVariableError(node.name) from None
    if isinstance(node, BinaryOp):
        return binary(node.op, _evaluate(node.left, scope), _evaluate(node.right, scope))
    if isinstance(node, UnaryOp):
        return unary(node.op, _evaluate(node.operand, scope))
    if isinstance(node, Call):
        return call_function(node.name, [_evaluate(arg, scope) for arg in node.args])
    if isinstance(node, Tuple):
        raise UnexpectedTupleError("A tuple cannot be evaluated to a single value")
    raise EvalError(f"Unsupported node type: {type(node).__name__}")


def evaluate_expression(source: str, variables: Mapping[str, Value] | None = None) -> Value:
    """Parse and evaluate a bare expression such as ``"sqrt(-4) + a"``."""

    return evaluate(parse_expression(source), make_scope(variables))


__all__ = [
    "BUILTIN_CONSTANTS",
    "Scope",
    "base_scope",
    "make_scope",
    "evaluate",
    "evaluate_expression",
]
