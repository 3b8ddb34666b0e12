"""Exception classes for Loq with source-located, human-readable diagnostics."""

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from loq.loq_expr import LoqExpr
    from loq.loq_token import LoqLocation, LoqToken, LoqTokenType


class LoqError(Exception):
    """Base exception for Loq errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: str | None = None,
        expected: str | None = None,
        received: str | None = None,
        suggestion: str | None = None,
        example: str | None = None,
        line: int | None = None,
        column: int | None = None,
        source_line: str | None = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            line: Line number (1-indexed)
            column: Column number (1-indexed)
            source_line: Text of the line the error was found on
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.line = line
        self.column = column
        self.source_line = source_line

        super().__init__(self._format_detailed_message())

    def _format_problem_area(self) -> str:
        """
        Format the offending source line with a caret under the error column.

        Returns:
            Two lines: the source text and the marker line
        """
        assert self.source_line is not None and self.column is not None

        # Tabs are one column each, so echo them to keep the caret aligned
        prefix = self.source_line[:self.column - 1]
        marker = "".join(char if char == "\t" else " " for char in prefix)
        marker += " " * (self.column - 1 - len(prefix)) + "^"
        return f"    {self.source_line}\n    {marker}"

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.line is not None and self.column is not None:
            parts.append(f"Location: Line {self.line}, Column {self.column}")

            if self.source_line is not None:
                parts.append(self._format_problem_area())

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class LoqTokenError(LoqError):
    """Lexical errors."""


class LoqParseError(LoqError):
    """Syntax errors and rejected definitions."""


def _location_kwargs(location: 'LoqLocation | None') -> dict:
    if location is None:
        return {}

    return {
        "line": location.line,
        "column": location.column,
        "source_line": location.source_line
    }


def describe_token_types(expected: Sequence['LoqTokenType']) -> str:
    """
    Describe a set of token kinds in prose, e.g. "either identifier, number literal or '('".

    Args:
        expected: Token kinds, in the order they should be listed

    Returns:
        Human-readable description
    """
    names = [token_type.description for token_type in expected]
    if len(names) == 1:
        return names[0]

    return "either " + ", ".join(names[:-1]) + " or " + names[-1]


class LoqUnexpectedCharError(LoqTokenError):
    """A character cannot start any token, or a number literal is malformed."""

    def __init__(self, char: str, location: 'LoqLocation', context: str | None = None):
        self.char = char
        self.location = location
        display = repr(char) if char.isprintable() else f"\\u{ord(char):04x}"
        super().__init__(
            message=f"Found unexpected {display}.",
            received=f"Character: {display} (code {ord(char)})",
            context=context,
            suggestion="Only letters, digits, spaces and ( ) , = + - * / ^ are valid",
            **_location_kwargs(location)
        )


class LoqExpectedTokenError(LoqParseError):
    """The parser needed one of several token kinds and found something else."""

    def __init__(
        self,
        expected: Sequence['LoqTokenType'],
        found: 'LoqToken | None',
        while_doing: str,
        location: 'LoqLocation | None'
    ):
        self.expected_types = tuple(expected)
        self.found = found
        self.while_doing = while_doing
        self.location = location
        found_msg = found.describe() if found is not None else "nothing"
        expected_msg = describe_token_types(self.expected_types)
        super().__init__(
            message=f"Expected {expected_msg} {while_doing}, found {found_msg} instead.",
            **_location_kwargs(location)
        )


class LoqUnexpectedTokenError(LoqParseError):
    """A syntactically out-of-place token."""

    def __init__(self, found: 'LoqToken', while_doing: str, suggestion: str | None = None):
        self.found = found
        self.while_doing = while_doing
        self.location = found.location
        super().__init__(
            message=f"Found unexpected {found.describe()} {while_doing}.",
            suggestion=suggestion,
            **_location_kwargs(found.location)
        )


class LoqInvalidExprError(LoqParseError):
    """A parseable but semantically illegal expression."""

    def __init__(
        self,
        found: str,
        reason: str,
        location: 'LoqLocation | None' = None,
        example: str | None = None
    ):
        self.found = found
        self.reason = reason
        self.location = location
        super().__init__(
            message=f"Invalid expression '{found}': {reason}.",
            example=example,
            **_location_kwargs(location)
        )


class LoqUnusedParamsError(LoqParseError):
    """A function definition declares parameters its body never references."""

    def __init__(self, function: str, body: 'LoqExpr', unused: Sequence[str]):
        self.function = function
        self.body = body
        self.unused = tuple(unused)
        noun = "parameter" if len(self.unused) == 1 else "parameters"
        names = ", ".join(f"'{name}'" for name in self.unused)
        super().__init__(
            message=f"Function '{function}' never uses {noun} {names}.",
            received=f"Body: {body}",
            suggestion=f"Remove the unused {noun} or reference them in the body",
            example="Correct: f(a,b)=a+b\nIncorrect: f(a,b)=a"
        )


class LoqRecursiveFuncDefError(LoqParseError):
    """A function body calls the function being defined."""

    def __init__(self, definition: 'LoqExpr', function: str):
        self.definition = definition
        self.function = function
        super().__init__(
            message=f"Function '{function}' calls itself in its own definition.",
            received=f"Definition: {definition}",
            context="Recursive function definitions are not supported"
        )


class LoqInvalidFuncParamError(LoqParseError):
    """A formal parameter in a definition head is not a bare variable name."""

    def __init__(self, found: 'LoqExpr', while_doing: str, location: 'LoqLocation | None' = None):
        self.found = found
        self.while_doing = while_doing
        self.location = location
        super().__init__(
            message=f"Invalid function parameter '{found}' {while_doing}.",
            expected="A distinct variable name for each parameter",
            example="Correct: f(a,b)=a*b\nIncorrect: f(a,2)=a*2",
            **_location_kwargs(location)
        )
