"""Precedence-climbing parser for Loq statements with detailed error messages."""

from loq.loq_environment import LoqEnvironment
from loq.loq_error import (
    LoqExpectedTokenError, LoqInvalidExprError, LoqInvalidFuncParamError,
    LoqRecursiveFuncDefError, LoqUnexpectedTokenError, LoqUnusedParamsError
)
from loq.loq_expr import LoqBinOp, LoqExpr, LoqFun, LoqGroup, LoqNumeric, LoqVariable
from loq.loq_lexer import LoqLexer
from loq.loq_token import LoqOperator, LoqToken, LoqTokenType


class LoqParser:
    """
    Parses Loq source text into expressions, one statement per call to parse().

    The parser reads function definitions from the environment (to check call
    arity) but never modifies it; only the evaluator binds names.
    """

    # Token kinds that can begin an operand
    OPERAND_START = (LoqTokenType.IDENTIFIER, LoqTokenType.NUMBER, LoqTokenType.LPAREN)

    # Token kinds that end the expression at the current nesting level
    TERMINATORS = (LoqTokenType.RPAREN, LoqTokenType.COMMA, LoqTokenType.EOL)

    def __init__(self, source: str, env: LoqEnvironment | None = None, max_depth: int = 100):
        """
        Initialize parser over source text.

        Args:
            source: One line of input, or a whole file of newline-separated statements
            env: Environment holding previously defined functions, read-only here
            max_depth: Maximum nesting depth of groups and argument lists
        """
        self.lexer = LoqLexer(source)
        self.env = env if env is not None else LoqEnvironment()
        self.max_depth = max_depth
        self.depth = 0

    def has_more(self) -> bool:
        """
        Check whether another statement remains, skipping blank lines.

        Raises:
            LoqUnexpectedCharError: If the next token is malformed
        """
        self._skip_blank_lines()
        return self.lexer.peek_token() is not None

    def parse(self) -> LoqExpr:
        """
        Parse one complete statement.

        The statement must run to the end of the input or to the end of its
        line; trailing tokens are an error even when a valid prefix parsed.

        Returns:
            Parsed expression

        Raises:
            LoqTokenError: If the input contains a malformed token
            LoqParseError: If the statement is malformed or is a rejected definition
        """
        self._skip_blank_lines()
        self.depth = 0
        expr = self._parse_impl()

        token = self.lexer.peek_token()
        if token is not None:
            if token.type is not LoqTokenType.EOL:
                raise LoqUnexpectedTokenError(
                    token, "after a complete statement",
                    suggestion="Check for unbalanced parentheses or a missing operator"
                )

            self.lexer.next_token()

        if expr.is_assignment():
            assert isinstance(expr, LoqBinOp)
            if isinstance(expr.left, LoqFun):
                self._check_function_definition(expr)

        return expr

    def _skip_blank_lines(self) -> None:
        token = self.lexer.peek_token()
        while token is not None and token.type is LoqTokenType.EOL:
            self.lexer.next_token()
            token = self.lexer.peek_token()

    def _parse_impl(self) -> LoqExpr:
        """
        Parse an expression up to the next terminator at this nesting level.

        Each call is one nesting level; `=` and `==` are only legal at level 1.
        """
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                token = self.lexer.peek_token()
                raise LoqInvalidExprError(
                    token.text if token is not None else "",
                    f"expression is nested more than {self.max_depth} levels deep",
                    self.lexer.location(token)
                )

            pending: LoqExpr | None = None
            while True:
                token = self.lexer.peek_token()
                if token is None or token.type in self.TERMINATORS:
                    break

                if token.type in self.OPERAND_START:
                    if pending is not None:
                        raise LoqUnexpectedTokenError(
                            token, "directly after another operand",
                            suggestion="Put an operator such as + or * between two operands"
                        )

                    pending = self._parse_operand()
                    continue

                if pending is None:
                    raise LoqUnexpectedTokenError(
                        token, "where an operand was expected",
                        suggestion="Every operator needs an operand on both sides; write 0-x rather than -x"
                    )

                pending = self._parse_binop(pending)

            if pending is None:
                raise LoqExpectedTokenError(
                    self.OPERAND_START, token, "while parsing an expression", self.lexer.location(token)
                )

            return pending

        finally:
            self.depth -= 1

    def _parse_operand(self) -> LoqExpr:
        """Parse a variable, functor, number literal or parenthesized group."""
        token = self.lexer.expect_token(self.OPERAND_START, "while parsing an operand")

        if token.type is LoqTokenType.IDENTIFIER:
            next_token = self.lexer.peek_token()
            if next_token is not None and next_token.type is LoqTokenType.LPAREN:
                self.lexer.next_token()
                return self._parse_functor(token)

            return LoqVariable(token.text)

        if token.type is LoqTokenType.NUMBER:
            return LoqNumeric(float(token.text))

        inner = self._parse_impl()
        self.lexer.expect_token(
            (LoqTokenType.RPAREN,), f"to close the parenthesis opened at {token.location}"
        )
        return LoqGroup(inner)

    def _parse_functor(self, name_token: LoqToken) -> LoqFun:
        """
        Parse the argument list of `name(...)`; the name and '(' are already consumed.

        Args:
            name_token: The identifier naming the functor

        Returns:
            The functor, as a call or as a definition head
        """
        name = name_token.text
        args = []

        token = self.lexer.peek_token()
        if token is not None and token.type is LoqTokenType.RPAREN:
            self.lexer.next_token()

        else:
            while True:
                args.append(self._parse_impl())
                token = self.lexer.expect_token(
                    (LoqTokenType.COMMA, LoqTokenType.RPAREN), f"while parsing the argument list of '{name}'"
                )
                if token.type is LoqTokenType.RPAREN:
                    break

        functor = LoqFun(name, tuple(args))

        # A definition head may redefine the function with a different arity
        if not self._at_definition_head():
            self._check_call_arity(functor, name_token)

        return functor

    def _at_definition_head(self) -> bool:
        token = self.lexer.peek_token()
        return self.depth == 1 and token is not None and token.type is LoqTokenType.EQUALS

    def _check_call_arity(self, call: LoqFun, name_token: LoqToken) -> None:
        arity = self.env.function_arity(call.name)
        if arity is None or arity == call.arity():
            return

        noun = "argument" if arity == 1 else "arguments"
        raise LoqInvalidExprError(
            str(call),
            f"'{call.name}' takes {arity} {noun} but is called with {call.arity()}",
            name_token.location,
            example=str(self.env.lookup_function(call.name))
        )

    def _parse_binop(self, left: LoqExpr) -> LoqBinOp:
        """
        Parse an operator and its right operand using precedence climbing.

        Operators that bind tighter than this one are folded into the right
        operand first; an operator of equal or looser precedence ends it, so
        equal-precedence chains associate to the left.

        Args:
            left: The already-parsed left operand

        Returns:
            The binary operation
        """
        op_token = self.lexer.next_token()
        assert op_token is not None and op_token.type.is_operator(), f"expected an operator, got {op_token!r}"
        operator = LoqOperator.from_token_type(op_token.type)
        self._check_operator_placement(operator, op_token, left)

        right = self._parse_operand()
        while True:
            token = self.lexer.peek_token()
            if token is None or not token.type.is_operator():
                break

            if LoqOperator.from_token_type(token.type).precedence >= operator.precedence:
                break

            right = self._parse_binop(right)

        return LoqBinOp(operator, left, right)

    def _check_operator_placement(self, operator: LoqOperator, op_token: LoqToken, left: LoqExpr) -> None:
        """Reject operators whose position or left operand makes the statement illegal."""
        if left.is_assignment():
            raise LoqInvalidExprError(
                str(left), "an assignment cannot be used as an operand", op_token.location
            )

        if operator in (LoqOperator.EQUALS, LoqOperator.DOUBLE_EQUALS) and self.depth != 1:
            raise LoqInvalidExprError(
                f"{left}{operator}",
                f"'{operator}' is only allowed at the top level of a statement",
                op_token.location
            )

        if operator is not LoqOperator.EQUALS:
            return

        if isinstance(left, LoqFun):
            self._check_definition_head(left, op_token)
            return

        if not isinstance(left, LoqVariable):
            raise LoqInvalidExprError(
                str(left),
                "the left side of '=' must be a variable name or a function head",
                op_token.location,
                example="a=2 or f(x)=x*x"
            )

    def _check_definition_head(self, head: LoqFun, op_token: LoqToken) -> None:
        seen = set()
        for param in head.params:
            if not isinstance(param, LoqVariable):
                raise LoqInvalidFuncParamError(
                    param, f"in the definition of '{head.name}'", op_token.location
                )

            if param.name in seen:
                raise LoqInvalidFuncParamError(
                    param, f"appears more than once in the definition of '{head.name}'", op_token.location
                )

            seen.add(param.name)

    def _check_function_definition(self, definition: LoqBinOp) -> None:
        """
        Reject directly recursive definitions and definitions with unused parameters.

        Raises:
            LoqRecursiveFuncDefError: If the body calls the function being defined
            LoqUnusedParamsError: If any parameter is never referenced in the body
        """
        head = definition.left
        assert isinstance(head, LoqFun)
        body = definition.right

        if head.name in body.called_function_names():
            raise LoqRecursiveFuncDefError(definition, head.name)

        used = set(body.variable_names())
        unused = [name for name in head.parameter_names() if name not in used]
        if unused:
            raise LoqUnusedParamsError(head.name, body, unused)
