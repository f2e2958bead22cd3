"""Immutable abstract syntax tree for parsed definitions."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Number:
    value: float


@dataclass(frozen=True, slots=True)
class Variable:
    name: str


@dataclass(frozen=True, slots=True)
class BinaryOp:
    left: "Node"
    op: str
    right: "Node"


@dataclass(frozen=True, slots=True)
class UnaryOp:
    op: str
    operand: "Node"


@dataclass(frozen=True, slots=True)
class Call:
    name: str
    args: tuple["Node", ...] = ()


@dataclass(frozen=True, slots=True)
class Tuple:
    """Parenthesized list of two or more expressions, e.g. ``(cos(t), sin(t), t)``."""

    elements: tuple["Node", ...] = ()


Node = Number | Variable | BinaryOp | UnaryOp | Call | Tuple


@dataclass(frozen=True, slots=True)
class Definition:
    """One parsed line: ``target(params) = body``."""

    target: str
    params: tuple[str, ...]
    body: Node

    @property
    def is_constant(self) -> bool:
        return not self.params

    @property
    def is_vector(self) -> bool:
        return isinstance(self.body, Tuple)


def _format_number(value: float) -> str:
    if math.isinf(value):
        return "1e999"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_node(node: Node) -> str:
    """Render ``node`` as DSL text that parses back to an equal tree."""

    if isinstance(node, Number):
        return _format_number(node.value)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, UnaryOp):
        return f"({node.op}{format_node(node.operand)})"
    if isinstance(node, BinaryOp):
        return f"({format_node(node.left)} {node.op} {format_node(node.right)})"
    if isinstance(node, Call):
        args = ", ".join(format_node(arg) for arg in node.args)
        return f"{node.name}({args})"
    if isinstance(node, Tuple):
        return "(" + ", ".join(format_node(item) for item in node.elements) + ")"
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def format_definition(definition: Definition) -> str:
    lhs = definition.target
    if definition.params:
        lhs += "(" + ", ".join(definition.params) + ")"
    return f"{lhs} = {format_node(definition.body)}"


def free_variables(node: Node) -> set[str]:
    """Names referenced as variables anywhere below ``node``."""

    if isinstance(node, Variable):
        return {node.name}
    if isinstance(node, BinaryOp):
        return free_variables(node.left) | free_variables(node.right)
    if isinstance(node, UnaryOp):
        return free_variables(node.operand)
    if isinstance(node, Call):
        names: set[str] = set()
        for arg in node.args:
            names |= free_variables(arg)
        return names
    if isinstance(node, Tuple):
        names = set()
        for item in node.elements:
            names |= free_variables(item)
        return names
    return set()


def _children(node: Node) -> tuple[Node, ...]:
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, UnaryOp):
        return (node.operand,)
    if isinstance(node, Call):
        return node.args
    if isinstance(node, Tuple):
        return node.elements
    return ()


def node_depth(node: Node) -> int:
    """Height of the tree below ``node``; a leaf has depth 1.

    Walks with an explicit stack so arbitrarily deep trees can be measured.
    """

    deepest = 0
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in _children(current))
    return deepest


__all__ = [
    "Number",
    "Variable",
    "BinaryOp",
    "UnaryOp",
    "Call",
    "Tuple",
    "Node",
    "Definition",
    "format_node",
    "format_definition",
    "free_variables",
    "node_depth",
]
