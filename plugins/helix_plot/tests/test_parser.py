import pytest

from plugins.helix_plot.core import (
    InvalidLhsError,
    MissingCloseParenError,
    NestingTooDeepError,
    TrailingTokensError,
    UnexpectedEndError,
    UnexpectedTokenError,
    format_definition,
    format_node,
    free_variables,
    parse_definition,
    parse_expression,
)
from plugins.helix_plot.core.nodes import BinaryOp, Call, Number, Tuple, UnaryOp, Variable
from plugins.helix_plot.core.parser import MAX_DEPTH


def _canonical(source: str) -> str:
    return format_node(parse_expression(source))


def test_precedence_and_left_associativity():
    assert _canonical("1+2*3") == "(1 + (2 * 3))"
    assert _canonical("8-3-2") == "((8 - 3) - 2)"
    assert _canonical("8/4/2") == "((8 / 4) / 2)"


def test_power_is_right_associative_and_binds_tighter_than_sign():
    assert _canonical("2^3^2") == "(2 ^ (3 ^ 2))"
    assert parse_expression("-2^2") == UnaryOp("-", BinaryOp(Number(2.0), "^", Number(2.0)))
    assert _canonical("2^-1") == "(2 ^ (-1))"


def test_implicit_multiplication_after_number():
    assert parse_expression("0i") == BinaryOp(Number(0.0), "*", Variable("i"))
    assert _canonical("2t^2") == "(2 * (t ^ 2))"
    assert _canonical("3(t+1)") == "(3 * (t + 1))"


def test_calls_and_tuples():
    assert parse_expression("atan2(y, x)") == Call("atan2", (Variable("y"), Variable("x")))
    assert parse_expression("f()") == Call("f", ())
    node = parse_expression("(cos(t), sin(t), t)")
    assert isinstance(node, Tuple)
    assert len(node.elements) == 3
    assert parse_expression("((t))") == Variable("t")


@pytest.mark.parametrize(
    "source, error",
    [
        ("", UnexpectedEndError),
        ("1 +", UnexpectedEndError),
        ("(1 + 2", MissingCloseParenError),
        ("sin(t", MissingCloseParenError),
        ("1 2", TrailingTokensError),
        ("t)", TrailingTokensError),
        ("* 3", UnexpectedTokenError),
        ("a $ b", TrailingTokensError),
        ("$", UnexpectedTokenError),
    ],
)
def test_parse_errors(source, error):
    with pytest.raises(error):
        parse_expression(source)


def test_parse_definition_forms():
    constant = parse_definition("A = 1.5")
    assert constant.target == "A"
    assert constant.is_constant
    assert constant.body == Number(1.5)

    func = parse_definition("z(x, y) = x*y")
    assert func.params == ("x", "y")
    assert not func.is_constant

    vector = parse_definition("r(t) = (cos(t), sin(t), t)")
    assert vector.is_vector


@pytest.mark.parametrize("line", ["no equals here", "2x = 1", "f(1t) = 2", "f() = 1", "a b = 3", " = 4"])
def test_invalid_left_hand_side(line):
    with pytest.raises(InvalidLhsError):
        parse_definition(line)


def test_second_equals_sign_is_trailing():
    with pytest.raises(TrailingTokensError):
        parse_definition("x = 1 = 2")


@pytest.mark.parametrize(
    "source",
    [
        "-2^2 + 3*t",
        "exp(-0.1*t) * (cos(5*t) + i*sin(5*t))",
        "2t^2 - -t",
        "log(8, 2) / 0.25",
        "(cos(t), sin(t), t/(2*pi))",
        "1e-07 + 1e300*x",
    ],
)
def test_canonical_text_parses_back_to_same_tree(source):
    tree = parse_expression(source)
    assert parse_expression(format_node(tree)) == tree


def test_format_definition_and_free_variables():
    definition = parse_definition("f(t) = A*exp(-gamma*t)")
    assert format_definition(definition) == "f(t) = (A * exp(((-gamma) * t)))"
    assert free_variables(definition.body) == {"A", "gamma", "t"}


@pytest.mark.parametrize(
    "source",
    [
        "(" * 400 + "1" + ")" * 400,
        "-" * 1500 + "1",
        "2^" * 500 + "2",
        "+".join(["t"] * 3000),
        "f(" * 300 + "t" + ")" * 300,
    ],
)
def test_nesting_beyond_the_limit_is_a_parse_error(source):
    with pytest.raises(NestingTooDeepError) as excinfo:
        parse_expression(source)
    assert excinfo.value.code == "parse.too_deep"


def test_nesting_within_the_limit_parses():
    assert parse_expression("(" * 60 + "t" + ")" * 60) == Variable("t")
    chain = parse_expression("+".join(["t"] * (MAX_DEPTH // 2)))
    assert free_variables(chain) == {"t"}
    assert format_node(chain).count("t") == MAX_DEPTH // 2
