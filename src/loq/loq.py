"""Main Loq session class: parse and evaluate statements against a long-lived environment."""

import logging
from pathlib import Path
from typing import Dict, Iterator, List

from loq.loq_config import LoqConfig
from loq.loq_environment import LoqEnvironment
from loq.loq_error import LoqError
from loq.loq_evaluator import LoqEvaluator
from loq.loq_expr import LoqBinOp, LoqExpr
from loq.loq_parser import LoqParser


class Loq:
    """
    Loq symbolic calculator session.

    Holds the environment that assignments and function definitions write to,
    so successive statements can build on each other:

        session = Loq()
        session.run("f(a)=a*2")
        session.run("f(21)")   # LoqNumeric(42.0)
    """

    def __init__(self, config: LoqConfig | None = None, env: LoqEnvironment | None = None):
        """
        Initialize a Loq session.

        Args:
            config: Session settings; defaults are used if omitted
            env: Environment to start from; a fresh one is created if omitted
        """
        self.config = config if config is not None else LoqConfig()
        self.env = env if env is not None else LoqEnvironment()
        self.evaluator = LoqEvaluator()
        self._logger = logging.getLogger("Loq")

    def parse(self, source: str) -> LoqExpr:
        """
        Parse one statement against the session's function definitions.

        Args:
            source: A single line of Loq source

        Returns:
            The parsed expression

        Raises:
            LoqTokenError: If the source contains a malformed token
            LoqParseError: If the statement is malformed or is a rejected definition
        """
        parser = LoqParser(source, self.env, max_depth=self.config.max_depth)
        try:
            expr = parser.parse()

        except LoqError as e:
            self._logger.warning("rejected statement '%s': %s", source, e.message)
            raise

        self._logger.debug("parsed '%s' as %r", source, expr)
        return expr

    def evaluate(self, expr: LoqExpr) -> LoqExpr:
        """
        Evaluate a parsed statement, updating the environment for `=` statements.

        Args:
            expr: A statement returned by parse()

        Returns:
            A LoqNumeric or LoqBool when fully resolved, otherwise a symbolic expression
        """
        result = self.evaluator.evaluate(expr, self.env)
        self._logger.debug("evaluated %s to %s", expr, result)
        return result

    def run(self, source: str) -> LoqExpr:
        """
        Parse and evaluate one statement.

        Args:
            source: A single line of Loq source

        Returns:
            The evaluation result

        Raises:
            LoqError: If the statement cannot be parsed
        """
        return self.evaluate(self.parse(source))

    def iter_source(self, text: str) -> Iterator[LoqExpr]:
        """
        Parse and evaluate every newline-separated statement in a block of text, yielding each result.

        Statements run in order, so later lines see earlier definitions.  The
        first malformed statement stops the run; results already yielded keep
        their effects on the environment.

        Args:
            text: Source text, e.g. the contents of a file

        Yields:
            The result of each statement as soon as it is evaluated

        Raises:
            LoqError: If a statement cannot be parsed
        """
        parser = LoqParser(text.replace('\r', ''), self.env, max_depth=self.config.max_depth)
        while parser.has_more():
            try:
                expr = parser.parse()

            except LoqError as e:
                self._logger.warning("rejected statement at line %s: %s", e.line, e.message)
                raise

            yield self.evaluate(expr)

    def run_source(self, text: str) -> List[LoqExpr]:
        """
        Parse and evaluate every newline-separated statement in a block of text.

        Args:
            text: Source text, e.g. the contents of a file

        Returns:
            Results of the statements evaluated, in order

        Raises:
            LoqError: If a statement cannot be parsed
        """
        return list(self.iter_source(text))

    def iter_file(self, path: str | Path) -> Iterator[LoqExpr]:
        """
        Run the statements in a UTF-8 source file, yielding each result.

        Args:
            path: Path to the file

        Yields:
            The result of each statement as soon as it is evaluated

        Raises:
            OSError: If the file cannot be read
            LoqError: If a statement cannot be parsed
        """
        self._logger.info("running file '%s'", path)
        text = Path(path).read_text(encoding='utf-8')
        yield from self.iter_source(text)

    def run_file(self, path: str | Path) -> List[LoqExpr]:
        """
        Run all statements in a UTF-8 source file.

        Args:
            path: Path to the file

        Returns:
            Results of the statements evaluated, in order

        Raises:
            OSError: If the file cannot be read
            LoqError: If a statement cannot be parsed
        """
        return list(self.iter_file(path))

    def format_result(self, result: LoqExpr, debug: bool | None = None) -> str:
        """
        Format a result with its kind prefix, e.g. "Num: 3" or "Sym: x+1".

        Args:
            result: Evaluation result
            debug: Show the expression tree rather than its source form; defaults to the config

        Returns:
            Display string
        """
        if debug is None:
            debug = self.config.debug

        shown = repr(result) if debug else str(result)
        return f"{result.kind_name()}: {shown}"

    def variables(self) -> Dict[str, LoqExpr]:
        """Get a copy of the session's variable bindings."""
        return dict(self.env.variables)

    def functions(self) -> Dict[str, LoqBinOp]:
        """Get a copy of the session's function definitions."""
        return dict(self.env.functions)

    def reset(self) -> None:
        """Forget all variables and functions."""
        self._logger.info("resetting environment")
        self.env.clear()
