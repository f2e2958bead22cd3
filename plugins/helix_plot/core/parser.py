"""Recursive-descent parser for single definition lines.

Precedence, lowest to highest::

    Expression := Term (('+' | '-') Term)*
    Term       := Factor (('*' | '/') Factor)*
    Factor     := ('+' | '-') Factor | Power
    Power      := Primary ('^' Factor)?        # right associative
    Primary    := Number | '(' Expression (',' Expression)* ')'
                | Identifier | Identifier '(' ArgList ')'

A number literal followed directly by an identifier or ``(`` is read as an
implicit product whose right operand is a ``Factor`` (``2t^2`` is ``2*(t^2)``).

Nesting and the height of the finished tree are both capped at
:data:`MAX_DEPTH` so that later tree walks stay within the interpreter's
recursion limit.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Iterator

from .errors import (
    InvalidLhsError,
    MissingCloseParenError,
    NestingTooDeepError,
    TrailingTokensError,
    UnexpectedEndError,
    UnexpectedTokenError,
)
from .nodes import BinaryOp, Call, Definition, Node, Number, Tuple, UnaryOp, Variable, node_depth
from .tokens import Token, TokenKind, tokenize

_LHS_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)(?:\s*\(([^()]*)\))?$")
_PARAM_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

MAX_DEPTH = 200


class Parser:
    """Consumes a token list and builds an AST for one expression."""

    def __init__(self, tokens: list[Token]):
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise UnexpectedEndError("Unexpected end of expression")
        self._pos += 1
        return token

    def _match(self, *symbols: str) -> Token | None:
        token = self._peek()
        if token is not None and token.is_symbol(*symbols):
            self._pos += 1
            return token
        return None

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self._depth += 1
        try:
            if self._depth > MAX_DEPTH:
                raise NestingTooDeepError(f"Expression is nested more than {MAX_DEPTH} levels deep")
            yield
        finally:
            self._depth -= 1

    def _expect_close(self, context: str) -> None:
        token = self._peek()
        if token is None or not token.is_symbol(")"):
            raise MissingCloseParenError(f"Missing ')' {context}")
        self._pos += 1

    def parse(self) -> Node:
        node = self.expression()
        token = self._peek()
        if token is not None:
            raise TrailingTokensError(f"Unexpected token at end: {token.text!r}")
        if node_depth(node) > MAX_DEPTH:
            raise NestingTooDeepError(f"Expression is nested more than {MAX_DEPTH} levels deep")
        return node

    def expression(self) -> Node:
        left = self.term()
        while (token := self._match("+", "-")) is not None:
            left = BinaryOp(left, token.text, self.term())
        return left

    def term(self) -> Node:
        left = self.factor()
        while (token := self._match("*", "/")) is not None:
            left = BinaryOp(left, token.text, self.factor())
        return left

    def factor(self) -> Node:
        # Sign applies to the whole power: -2^2 is -(2^2).
        with self._nested():
            token = self._match("+", "-")
            if token is not None:
                return UnaryOp(token.text, self.factor())
            return self.power()

    def power(self) -> Node:
        base = self.primary()
        if self._match("^") is not None:
            return BinaryOp(base, "^", self.factor())
        return base

    def primary(self) -> Node:
        with self._nested():
            return self._primary()

    def _primary(self) -> Node:
        token = self._advance()

        if token.kind is TokenKind.NUMBER:
            number = Number(float(token.text))
            following = self._peek()
            if following is not None and (
                following.kind is TokenKind.IDENTIFIER or following.is_symbol("(")
            ):
                return BinaryOp(number, "*", self.factor())
            return number

        if token.kind is TokenKind.IDENTIFIER:
            if self._match("(") is None:
                return Variable(token.text)
            args: list[Node] = []
            if self._match(")") is None:
                args.append(self.expression())
                while self._match(",") is not None:
                    args.append(self.expression())
                self._expect_close(f"in call to {token.text}")
            return Call(token.text, tuple(args))

        if token.is_symbol("("):
            elements = [self.expression()]
            while self._match(",") is not None:
                elements.append(self.expression())
            self._expect_close("after group")
            if len(elements) == 1:
                return elements[0]
            return Tuple(tuple(elements))

        raise UnexpectedTokenError(f"Unexpected token: {token.text!r}")


def parse_expression(source: str) -> Node:
    """Parse a bare right-hand side."""

    return Parser(tokenize(source)).parse()


def _parse_lhs(lhs: str) -> tuple[str, tuple[str, ...]]:
    match = _LHS_RE.match(lhs)
    if not match:
        raise InvalidLhsError(f"Invalid left-hand side: {lhs!r}")
    target, raw_params = match.group(1), match.group(2)
    if raw_params is None:
        return target, ()
    params = tuple(part.strip() for part in raw_params.split(","))
    for param in params:
        if not _PARAM_RE.match(param):
            raise InvalidLhsError(f"Invalid parameter {param!r} in {lhs!r}")
    return target, params


def parse_definition(line: str) -> Definition:
    """Parse ``name = expr`` or ``name(a, b) = expr`` into a :class:`Definition`."""

    lhs, sep, rhs = line.partition("=")
    if not sep:
        raise InvalidLhsError("Missing '=' in definition")
    target, params = _parse_lhs(lhs.strip())
    return Definition(target=target, params=params, body=parse_expression(rhs))


__all__ = ["MAX_DEPTH", "Parser", "parse_definition", "parse_expression"]
