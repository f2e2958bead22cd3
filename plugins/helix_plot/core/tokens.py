"""Tokenizer for the right-hand side of a definition."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    SYMBOL = "symbol"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    position: int = 0

    def is_symbol(self, *symbols: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.text in symbols


# An exponent only belongs to the number when digits follow it, so "2e" is "2" then "e".
_NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(source: str) -> list[Token]:
    """Split ``source`` into number, identifier and single-character symbol tokens.

    Never raises: characters that do not start a number or identifier are
    emitted as symbol tokens and left for the parser to reject.
    """

    tokens: list[Token] = []
    pos = 0
    length = len(source)
    while pos < length:
        match = _WHITESPACE_RE.match(source, pos)
        if match:
            pos = match.end()
            continue

        match = _NUMBER_RE.match(source, pos)
        if match:
            tokens.append(Token(TokenKind.NUMBER, match.group(0), pos))
            pos = match.end()
            continue

        match = _IDENTIFIER_RE.match(source, pos)
        if match:
            tokens.append(Token(TokenKind.IDENTIFIER, match.group(0), pos))
            pos = match.end()
            continue

        tokens.append(Token(TokenKind.SYMBOL, source[pos], pos))
        pos += 1
    return tokens


__all__ = ["Token", "TokenKind", "tokenize"]
