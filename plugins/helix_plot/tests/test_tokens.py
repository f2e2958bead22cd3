from plugins.helix_plot.core import TokenKind, tokenize


def _pairs(source):
    return [(token.kind, token.text) for token in tokenize(source)]


def test_numbers_identifiers_and_symbols():
    assert _pairs("2*sin(t) + .5") == [
        (TokenKind.NUMBER, "2"),
        (TokenKind.SYMBOL, "*"),
        (TokenKind.IDENTIFIER, "sin"),
        (TokenKind.SYMBOL, "("),
        (TokenKind.IDENTIFIER, "t"),
        (TokenKind.SYMBOL, ")"),
        (TokenKind.SYMBOL, "+"),
        (TokenKind.NUMBER, ".5"),
    ]


def test_exponent_requires_digits():
    assert _pairs("1.5e-3") == [(TokenKind.NUMBER, "1.5e-3")]
    assert _pairs("2e") == [(TokenKind.NUMBER, "2"), (TokenKind.IDENTIFIER, "e")]
    assert _pairs("3E+2x") == [(TokenKind.NUMBER, "3E+2"), (TokenKind.IDENTIFIER, "x")]


def test_trailing_dot_and_underscored_names():
    assert _pairs("3. _a1") == [(TokenKind.NUMBER, "3."), (TokenKind.IDENTIFIER, "_a1")]


def test_unknown_characters_become_symbols():
    tokens = tokenize("a $ b")
    assert [token.text for token in tokens] == ["a", "$", "b"]
    assert tokens[1].kind is TokenKind.SYMBOL
    assert [token.position for token in tokens] == [0, 2, 4]


def test_whitespace_only_is_empty():
    assert tokenize("  \t ") == []


def test_signed_exponent_then_operator():
    assert [token.text for token in tokenize("2.5e-3+x")] == ["2.5e-3", "+", "x"]
