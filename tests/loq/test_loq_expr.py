"""Tests for Loq expression nodes and tokens."""

import math

import pytest

from loq import (
    LoqBinOp, LoqBool, LoqFun, LoqGroup, LoqLocation, LoqNumeric, LoqOperator, LoqToken,
    LoqTokenType, LoqVariable
)
from loq.loq_expr import format_number


class TestLoqExprDisplay:
    """Test source-form printing of expression nodes."""

    @pytest.mark.parametrize("value,expected", [
        (3.0, "3"),
        (0.0, "0"),
        (-5.0, "-5"),
        (2.5, "2.5"),
        (-0.125, "-0.125"),
        (math.inf, "inf"),
        (-math.inf, "-inf"),
        (math.nan, "nan"),
    ])
    def test_format_number(self, value, expected):
        """Test number formatting with and without a fractional part."""
        assert format_number(value) == expected

    def test_booleans(self):
        """Test boolean display."""
        assert str(LoqBool(True)) == "true"
        assert str(LoqBool(False)) == "false"

    def test_nested_display(self):
        """Test that compound nodes print without spaces."""
        expr = LoqBinOp(
            LoqOperator.MULTIPLY,
            LoqGroup(LoqBinOp(LoqOperator.PLUS, LoqVariable("a"), LoqNumeric(1.0))),
            LoqFun("f", (LoqVariable("b"), LoqNumeric(2.0)))
        )
        assert str(expr) == "(a+1)*f(b,2)"

    def test_debug_form(self):
        """Test that repr shows the tree structure."""
        assert repr(LoqNumeric(3.0)) == "LoqNumeric(value=3.0)"
        assert repr(LoqVariable("x")) == "LoqVariable(name='x')"

    @pytest.mark.parametrize("expr,kind", [
        (LoqNumeric(1.0), "Num"),
        (LoqBool(True), "Bool"),
        (LoqVariable("x"), "Sym"),
        (LoqFun("f", ()), "Sym"),
        (LoqGroup(LoqVariable("x")), "Sym"),
        (LoqBinOp(LoqOperator.PLUS, LoqNumeric(1.0), LoqNumeric(2.0)), "Sym"),
    ])
    def test_kind_names(self, expr, kind):
        """Test result kind names."""
        assert expr.kind_name() == kind


class TestLoqExprQueries:
    """Test name collection and predicates."""

    def test_variable_names_in_order(self):
        """Test that variable names are collected left to right, including call arguments."""
        expr = LoqBinOp(
            LoqOperator.PLUS,
            LoqVariable("a"),
            LoqFun("g", (LoqBinOp(LoqOperator.MULTIPLY, LoqVariable("b"), LoqVariable("a")),))
        )
        assert expr.variable_names() == ["a", "b", "a"]

    def test_called_function_names(self):
        """Test that nested calls are all reported."""
        expr = LoqGroup(LoqFun("f", (LoqFun("g", (LoqVariable("x"),)),)))
        assert expr.called_function_names() == ["f", "g"]

    def test_predicates(self):
        """Test the node kind predicates."""
        assignment = LoqBinOp(LoqOperator.EQUALS, LoqVariable("a"), LoqNumeric(1.0))
        comparison = LoqBinOp(LoqOperator.DOUBLE_EQUALS, LoqVariable("a"), LoqNumeric(1.0))
        assert assignment.is_assignment()
        assert not comparison.is_assignment()
        assert LoqNumeric(1.0).is_value()
        assert LoqBool(False).is_value()
        assert not LoqVariable("a").is_value()
        assert LoqVariable("a").is_variable()
        assert LoqBool(True).is_bool()
        assert not LoqNumeric(1.0).is_bool()
        assert LoqNumeric(1.0).is_numeric()
        assert not LoqBool(True).is_numeric()

    def test_parameter_names(self):
        """Test formal parameter names of a definition head."""
        head = LoqFun("f", (LoqVariable("a"), LoqVariable("b")))
        assert head.parameter_names() == ["a", "b"]
        assert head.arity() == 2

    def test_nodes_are_immutable(self):
        """Test that expression nodes cannot be modified."""
        node = LoqNumeric(1.0)
        with pytest.raises(AttributeError):
            node.value = 2.0  # type: ignore[misc]


class TestLoqTokens:
    """Test token and operator helpers."""

    @pytest.mark.parametrize("operator,precedence", [
        (LoqOperator.POWER, 0),
        (LoqOperator.MULTIPLY, 1),
        (LoqOperator.DIVIDE, 1),
        (LoqOperator.PLUS, 2),
        (LoqOperator.MINUS, 2),
        (LoqOperator.EQUALS, 3),
        (LoqOperator.DOUBLE_EQUALS, 3),
    ])
    def test_precedence(self, operator, precedence):
        """Test operator precedence levels; lower binds tighter."""
        assert operator.precedence == precedence

    def test_operator_from_token_type(self):
        """Test mapping operator tokens to operators."""
        assert LoqOperator.from_token_type(LoqTokenType.DOUBLE_EQUALS) is LoqOperator.DOUBLE_EQUALS
        assert str(LoqOperator.POWER) == "^"

    def test_token_describe(self):
        """Test token descriptions used in diagnostics."""
        location = LoqLocation(1, 1, "ab")
        assert LoqToken(LoqTokenType.IDENTIFIER, "ab", location).describe() == "identifier 'ab'"
        assert LoqToken(LoqTokenType.NUMBER, "12", location).describe() == "number literal '12'"
        assert LoqToken(LoqTokenType.RPAREN, ")", location).describe() == "')'"
        assert LoqToken(LoqTokenType.EOL, "\n", location).describe() == "end of line"

    def test_location_display(self):
        """Test location display."""
        assert str(LoqLocation(2, 7, "x")) == "line 2, column 7"


class TestLoqLongChains:
    """Test tree walks over long left-deep operator chains."""

    @pytest.fixture
    def long_sum(self):
        """A left-deep sum a0+a1+...+a999."""
        expr = LoqVariable("a0")
        for index in range(1, 1000):
            expr = LoqBinOp(LoqOperator.PLUS, expr, LoqVariable(f"a{index}"))

        return expr

    def test_left_spine(self, long_sum):
        """Test that the spine yields the leftmost operand and operations innermost first."""
        leftmost, chain = long_sum.left_spine()
        assert leftmost == LoqVariable("a0")
        assert len(chain) == 999
        assert chain[0].right == LoqVariable("a1")
        assert chain[-1] is long_sum

    def test_display(self, long_sum):
        """Test printing a long chain."""
        assert str(long_sum) == "+".join(f"a{index}" for index in range(1000))

    def test_name_collection(self, long_sum):
        """Test collecting names from a long chain, in order."""
        assert long_sum.variable_names() == [f"a{index}" for index in range(1000)]
        assert long_sum.called_function_names() == []

    def test_debug_form_matches_nested_shape(self):
        """Test that the debug form of a chain nests like the tree."""
        expr = LoqBinOp(
            LoqOperator.MINUS,
            LoqBinOp(LoqOperator.PLUS, LoqVariable("a"), LoqNumeric(1.0)),
            LoqVariable("b")
        )
        assert repr(expr) == (
            "LoqBinOp(operator=<LoqOperator.MINUS: '-'>, "
            "left=LoqBinOp(operator=<LoqOperator.PLUS: '+'>, "
            "left=LoqVariable(name='a'), right=LoqNumeric(value=1.0)), "
            "right=LoqVariable(name='b'))"
        )
