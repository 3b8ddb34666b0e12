"""Shared fixtures and utilities for Loq tests."""

from typing import List

import pytest

from loq import Loq, LoqConfig, LoqEnvironment, LoqEvaluator, LoqExpr, LoqLexer, LoqParser, LoqToken


@pytest.fixture
def loq():
    """Create a fresh Loq session for each test."""
    return Loq()


@pytest.fixture
def loq_custom():
    """Factory for Loq sessions with custom configuration."""
    def _create_loq(max_depth: int = 100, debug: bool = False) -> Loq:
        return Loq(LoqConfig(max_depth=max_depth, debug=debug))
    return _create_loq


@pytest.fixture
def env():
    """Create an empty environment."""
    return LoqEnvironment()


@pytest.fixture
def evaluator():
    """Create an evaluator."""
    return LoqEvaluator()


class LoqTestHelpers:
    """Helper utilities for Loq testing."""

    @staticmethod
    def lex_all(source: str) -> List[LoqToken]:
        """Pull every token from a lexer."""
        lexer = LoqLexer(source)
        tokens = []
        token = lexer.next_token()
        while token is not None:
            tokens.append(token)
            token = lexer.next_token()

        return tokens

    @staticmethod
    def parse(source: str, env: LoqEnvironment | None = None) -> LoqExpr:
        """Parse a single statement."""
        return LoqParser(source, env).parse()

    @staticmethod
    def assert_value(loq: Loq, source: str, expected: float) -> None:
        """Assert that a statement evaluates to the expected number."""
        result = loq.run(source)
        assert result.is_numeric(), f"Expected a number from {source!r}, got {result}"
        assert result.expect_value() == expected, f"Evaluating {source!r} gave {result}, expected {expected}"

    @staticmethod
    def run_all(loq: Loq, statements: List[str]) -> List[LoqExpr]:
        """Run statements in order against one session."""
        return [loq.run(statement) for statement in statements]


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return LoqTestHelpers
