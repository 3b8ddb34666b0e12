"""Token types, operators and source locations for Loq expressions."""

from dataclasses import dataclass
from enum import Enum


class LoqTokenType(Enum):
    """Token types for Loq expressions."""
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    EOL = "EOL"
    EQUALS = "="
    DOUBLE_EQUALS = "=="
    MULTIPLY = "*"
    DIVIDE = "/"
    PLUS = "+"
    MINUS = "-"
    POWER = "^"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"

    @property
    def description(self) -> str:
        """Name of the token kind as used in diagnostics."""
        if self is LoqTokenType.IDENTIFIER:
            return "identifier"

        if self is LoqTokenType.NUMBER:
            return "number literal"

        if self is LoqTokenType.EOL:
            return "end of line"

        return f"'{self.value}'"

    def is_operator(self) -> bool:
        """Check if this token kind is a binary operator."""
        return self in OPERATOR_TOKEN_TYPES

    def is_operand(self) -> bool:
        """Check if this token kind is an identifier or number literal."""
        return self in OPERAND_TOKEN_TYPES


OPERATOR_TOKEN_TYPES = (
    LoqTokenType.EQUALS,
    LoqTokenType.DOUBLE_EQUALS,
    LoqTokenType.MULTIPLY,
    LoqTokenType.DIVIDE,
    LoqTokenType.PLUS,
    LoqTokenType.MINUS,
    LoqTokenType.POWER,
)

OPERAND_TOKEN_TYPES = (LoqTokenType.IDENTIFIER, LoqTokenType.NUMBER)


class LoqOperator(Enum):
    """Binary operators, keyed by their source symbol."""
    EQUALS = "="
    DOUBLE_EQUALS = "=="
    MULTIPLY = "*"
    DIVIDE = "/"
    PLUS = "+"
    MINUS = "-"
    POWER = "^"

    @property
    def precedence(self) -> int:
        """Binding strength; a lower number binds tighter."""
        return _PRECEDENCE[self]

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_token_type(cls, token_type: LoqTokenType) -> 'LoqOperator':
        """
        Map an operator token kind to its operator.

        Args:
            token_type: Token kind, which must be an operator kind

        Returns:
            The matching operator
        """
        assert token_type.is_operator(), f"{token_type} is not an operator token"
        return cls(token_type.value)

    def __str__(self) -> str:
        return self.value


_PRECEDENCE = {
    LoqOperator.POWER: 0,
    LoqOperator.MULTIPLY: 1,
    LoqOperator.DIVIDE: 1,
    LoqOperator.PLUS: 2,
    LoqOperator.MINUS: 2,
    LoqOperator.EQUALS: 3,
    LoqOperator.DOUBLE_EQUALS: 3,
}


@dataclass(frozen=True)
class LoqLocation:
    """Position of a token in the source."""
    line: int  # Line number (1-indexed)
    column: int  # Column number (1-indexed)
    source_line: str  # Text of the whole line, for caret rendering

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class LoqToken:
    """Represents a single token in a Loq expression."""
    type: LoqTokenType
    text: str
    location: LoqLocation

    def describe(self) -> str:
        """Describe the token for diagnostics."""
        if self.type is LoqTokenType.EOL:
            return "end of line"

        if self.type.is_operand():
            return f"{self.type.description} '{self.text}'"

        return f"'{self.text}'"

    def __repr__(self) -> str:
        return f"LoqToken({self.type.name}, {self.text!r}, line={self.location.line}, col={self.location.column})"
