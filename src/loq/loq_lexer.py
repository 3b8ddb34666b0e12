"""Pull-based lexer for Loq expressions with one token of lookahead."""

from typing import Sequence

from loq.loq_error import LoqExpectedTokenError, LoqUnexpectedCharError
from loq.loq_token import LoqLocation, LoqToken, LoqTokenType


class LoqLexer:
    """
    Lexes Loq source text into tokens on demand.

    Tokens are produced one at a time as the parser asks for them, so a lexical
    error surfaces exactly when the parser reaches the offending character.
    """

    SINGLE_CHAR_TOKENS = {
        '(': LoqTokenType.LPAREN,
        ')': LoqTokenType.RPAREN,
        ',': LoqTokenType.COMMA,
        '*': LoqTokenType.MULTIPLY,
        '/': LoqTokenType.DIVIDE,
        '+': LoqTokenType.PLUS,
        '-': LoqTokenType.MINUS,
        '^': LoqTokenType.POWER,
    }

    def __init__(self, source: str):
        """
        Initialize lexer over a source string.

        Args:
            source: One line of interactive input, or the text of a whole file
        """
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self._lines = source.split('\n')
        self._peeked: LoqToken | None = None

    def is_empty(self) -> bool:
        """Check if all input has been consumed and no peeked token is pending."""
        return self._peeked is None and self.pos >= len(self.source)

    def peek_token(self) -> LoqToken | None:
        """
        Look at the next token without consuming it.

        Returns:
            The next token, or None at the end of input

        Raises:
            LoqUnexpectedCharError: If the next token is malformed
        """
        if self._peeked is None:
            self._peeked = self._read_token()

        return self._peeked

    def next_token(self) -> LoqToken | None:
        """
        Consume and return the next token, re-supplying a peeked token if there is one.

        Returns:
            The next token, or None at the end of input

        Raises:
            LoqUnexpectedCharError: If the next token is malformed
        """
        if self._peeked is not None:
            token = self._peeked
            self._peeked = None
            return token

        return self._read_token()

    def expect_token(self, expected: Sequence[LoqTokenType], while_doing: str) -> LoqToken:
        """
        Consume the next token, requiring it to be one of the expected kinds.

        Args:
            expected: Acceptable token kinds
            while_doing: Description of what the parser was doing, for diagnostics

        Returns:
            The consumed token

        Raises:
            LoqExpectedTokenError: If the next token is missing or of another kind
        """
        token = self.peek_token()
        if token is None or token.type not in expected:
            raise LoqExpectedTokenError(expected, token, while_doing, self.location(token))

        self._peeked = None
        return token

    def location(self, token: LoqToken | None = None) -> LoqLocation:
        """
        Location of a token, or of the current read position when there is none.

        Args:
            token: Token to locate, if any

        Returns:
            Source location
        """
        if token is not None:
            return token.location

        return self._location_here()

    def _location_here(self) -> LoqLocation:
        return LoqLocation(self.line, self.column, self._lines[self.line - 1])

    def _advance(self) -> str:
        char = self.source[self.pos]
        self.pos += 1
        if char == '\n':
            self.line += 1
            self.column = 1

        else:
            self.column += 1

        return char

    def _current(self) -> str | None:
        if self.pos < len(self.source):
            return self.source[self.pos]

        return None

    def _read_token(self) -> LoqToken | None:
        """Read the next token from the character stream."""
        while self.pos < len(self.source):
            char = self.source[self.pos]

            # Newlines separate statements in file mode
            if char == '\n':
                location = self._location_here()
                self._advance()
                return LoqToken(LoqTokenType.EOL, '\n', location)

            if char.isspace():
                self._advance()
                continue

            location = self._location_here()

            if char == '=':
                self._advance()
                if self._current() == '=':
                    self._advance()
                    return LoqToken(LoqTokenType.DOUBLE_EQUALS, '==', location)

                return LoqToken(LoqTokenType.EQUALS, '=', location)

            token_type = self.SINGLE_CHAR_TOKENS.get(char)
            if token_type is not None:
                self._advance()
                return LoqToken(token_type, char, location)

            if char.isalpha():
                return self._read_identifier(location)

            if char.isdecimal():
                return self._read_number(location)

            raise LoqUnexpectedCharError(
                char, location, context="This character cannot start any token"
            )

        return None

    def _read_identifier(self, location: LoqLocation) -> LoqToken:
        """Read an identifier: a letter followed by letters and digits."""
        start = self.pos
        self._advance()
        while self.pos < len(self.source) and self.source[self.pos].isalnum():
            self._advance()

        return LoqToken(LoqTokenType.IDENTIFIER, self.source[start:self.pos], location)

    def _read_number(self, location: LoqLocation) -> LoqToken:
        """
        Read a number literal: digits with at most one decimal point.

        Raises:
            LoqUnexpectedCharError: On a second decimal point or a letter glued to the number
        """
        start = self.pos
        seen_dot = False
        while self.pos < len(self.source):
            char = self.source[self.pos]
            if not char.isdecimal() and char != '.':
                break

            if char == '.':
                if seen_dot:
                    raise LoqUnexpectedCharError(
                        char, self._location_here(),
                        context="A number literal can contain at most one decimal point"
                    )

                seen_dot = True

            self._advance()

        char = self._current()
        if char is not None and char.isalpha():
            raise LoqUnexpectedCharError(
                char, self._location_here(),
                context="A number literal cannot be directly followed by a letter"
            )

        return LoqToken(LoqTokenType.NUMBER, self.source[start:self.pos], location)
