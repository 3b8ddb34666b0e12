"""Evaluator for Loq expressions: constant folding with symbolic pass-through."""

import logging
import math

from loq.loq_environment import LoqEnvironment
from loq.loq_expr import LoqBinOp, LoqBool, LoqExpr, LoqFun, LoqGroup, LoqNumeric, LoqVariable
from loq.loq_token import LoqOperator


def ieee_divide(a: float, b: float) -> float:
    """Divide with IEEE754 results for a zero divisor instead of raising."""
    if b != 0.0:
        return a / b

    if a == 0.0 or math.isnan(a):
        return math.nan

    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and value % 2 == 1


def ieee_power(a: float, b: float) -> float:
    """Raise a to the power b with IEEE754 pow() results instead of Python exceptions."""
    if a == 0.0 and b < 0.0:
        if _is_odd_integer(b):
            return math.copysign(math.inf, a)

        return math.inf

    try:
        return math.pow(a, b)

    except OverflowError:
        if a < 0.0 and _is_odd_integer(b):
            return -math.inf

        return math.inf

    except ValueError:
        # Negative base with a non-integer exponent
        return math.nan


class LoqEvaluator:
    """
    Reduces Loq expressions as far as the environment allows.

    Evaluation never fails: anything that cannot be resolved is returned as a
    (possibly partially reduced) symbolic expression.
    """

    ARITHMETIC = {
        LoqOperator.PLUS: lambda a, b: a + b,
        LoqOperator.MINUS: lambda a, b: a - b,
        LoqOperator.MULTIPLY: lambda a, b: a * b,
        LoqOperator.DIVIDE: ieee_divide,
        LoqOperator.POWER: ieee_power,
    }

    # `*` is AND and `+` is OR; other operators leave booleans symbolic
    BOOLEAN = {
        LoqOperator.DOUBLE_EQUALS: lambda a, b: a == b,
        LoqOperator.MULTIPLY: lambda a, b: a and b,
        LoqOperator.PLUS: lambda a, b: a or b,
    }

    def __init__(self) -> None:
        """Initialize evaluator."""
        self._logger = logging.getLogger("LoqEvaluator")

    def evaluate(self, expr: LoqExpr, env: LoqEnvironment) -> LoqExpr:
        """
        Evaluate a top-level statement, binding names for assignments and definitions.

        Args:
            expr: Parsed statement
            env: Session environment, updated by `=` statements

        Returns:
            The resulting value or residual symbolic expression
        """
        if not expr.is_assignment():
            return self.evaluate_recursive(expr, env)

        assert isinstance(expr, LoqBinOp)
        left = expr.left

        if isinstance(left, LoqFun):
            self._logger.debug("defining function '%s': %s", left.name, expr)
            env.define_function(expr)
            return expr

        assert isinstance(left, LoqVariable), f"assignment to a non-name should not have parsed: {expr!r}"
        value = self.evaluate_recursive(expr.right, env)
        self._logger.debug("binding '%s' to %s", left.name, value)
        env.define_variable(left.name, value)
        return LoqBinOp(LoqOperator.EQUALS, left, value)

    def evaluate_recursive(self, expr: LoqExpr, env: LoqEnvironment) -> LoqExpr:
        """
        Reduce an expression without modifying the environment.

        Args:
            expr: Expression to reduce
            env: Bindings to resolve names against

        Returns:
            A number or boolean when fully resolved, otherwise a symbolic expression
        """
        if isinstance(expr, (LoqNumeric, LoqBool)):
            return expr

        if isinstance(expr, LoqVariable):
            value = env.lookup_variable(expr.name)
            if value is None:
                return expr

            # A substituted operation keeps its own precedence when printed
            if isinstance(value, LoqBinOp):
                return LoqGroup(value)

            return value

        if isinstance(expr, LoqGroup):
            inner = self.evaluate_recursive(expr.inner, env)
            if isinstance(inner, (LoqNumeric, LoqBool, LoqVariable, LoqGroup)):
                return inner

            return LoqGroup(inner)

        if isinstance(expr, LoqBinOp):
            return self._evaluate_binop(expr, env)

        assert isinstance(expr, LoqFun), f"unknown expression type: {expr!r}"
        return self._evaluate_call(expr, env)

    def _evaluate_binop(self, expr: LoqBinOp, env: LoqEnvironment) -> LoqExpr:
        """
        Reduce a chain of binary operations, innermost first.

        The left spine is walked in a loop so long operator chains do not
        recurse once per operator.
        """
        leftmost, chain = expr.left_spine()
        result = self.evaluate_recursive(leftmost, env)
        for binop in chain:
            right = self.evaluate_recursive(binop.right, env)
            result = self._combine(binop.operator, result, right)

        return result

    def _combine(self, operator: LoqOperator, left: LoqExpr, right: LoqExpr) -> LoqExpr:
        """Apply an operator to two already-reduced operands."""
        if left.is_numeric() and right.is_numeric():
            assert isinstance(left, LoqNumeric) and isinstance(right, LoqNumeric)
            if operator is LoqOperator.DOUBLE_EQUALS:
                return LoqBool(left.value == right.value)

            if operator is LoqOperator.EQUALS:
                return LoqBinOp(operator, left, right)

            return LoqNumeric(self.ARITHMETIC[operator](left.value, right.value))

        if left.is_bool() and right.is_bool():
            assert isinstance(left, LoqBool) and isinstance(right, LoqBool)
            combine = self.BOOLEAN.get(operator)
            if combine is not None:
                return LoqBool(combine(left.value, right.value))

            return LoqBinOp(operator, left, right)

        # Still symbolic: render `x + -5` as `x - 5`
        if isinstance(right, LoqNumeric) and right.value < 0.0:
            if operator is LoqOperator.PLUS:
                return LoqBinOp(LoqOperator.MINUS, left, LoqNumeric(-right.value))

            if operator is LoqOperator.MINUS:
                return LoqBinOp(LoqOperator.PLUS, left, LoqNumeric(-right.value))

        return LoqBinOp(operator, left, right)

    def _evaluate_call(self, call: LoqFun, env: LoqEnvironment) -> LoqExpr:
        """
        Apply a user-defined function.

        Parameters are bound to the unevaluated arguments in a temporary
        environment.  Free variables left in the body are then resolved against
        the caller's environment; if the body is still symbolic the result is a
        residual equation `head=reduced-body`.
        """
        definition = env.lookup_function(call.name)
        if definition is None:
            return call

        head = definition.left
        assert isinstance(head, LoqFun), f"stored function without a head: {definition!r}"
        if head.arity() != call.arity():
            return call

        call_env = LoqEnvironment(
            variables=dict(zip(head.parameter_names(), call.params)),
            functions=env.functions
        )

        body = self.evaluate_recursive(definition.right, call_env)
        if body.is_value():
            return body

        body = self.evaluate_recursive(body, env)
        if body.is_value():
            return body

        return LoqBinOp(LoqOperator.EQUALS, head, body)
