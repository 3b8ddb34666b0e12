"""Line-based read-eval-print loop for Loq."""

import logging
import sys
from typing import List, TextIO

from loq.loq import Loq
from loq.loq_config import LoqConfig
from loq.loq_error import LoqError


class LoqRepl:
    """
    Interactive Loq session over text streams.

    Lines ending in ';' are REPL commands:
        quit; / q;      leave the REPL
        debug; / db;    toggle showing expression trees instead of source form
        locals; / ls;   list variables and functors
    Any other non-empty line is evaluated as a Loq statement.
    """

    def __init__(
        self,
        config: LoqConfig | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None
    ):
        """
        Initialize the REPL.

        Args:
            config: Session settings
            stdin: Input stream, defaults to sys.stdin
            stdout: Output stream for results, defaults to sys.stdout
            stderr: Output stream for diagnostics, defaults to sys.stderr
        """
        self.config = config if config is not None else LoqConfig()
        self.session = Loq(self.config)
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.debug_mode = self.config.debug
        self.history: List[str] = []
        self.quit = False
        self._logger = logging.getLogger("LoqRepl")

    def read_input(self) -> str | None:
        """
        Prompt for and read one line.

        Returns:
            The line without trailing whitespace, or None at end of input
        """
        self.stdout.write(self.config.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None

        line = line.rstrip()
        self.history.append(line)
        return line

    def run(self) -> None:
        """Run until a quit command or end of input."""
        self._logger.info("starting REPL")
        while not self.quit:
            try:
                line = self.read_input()

            except KeyboardInterrupt:
                self.stdout.write("^C\n")
                continue

            if line is None:
                self.stdout.write("\n")
                break

            self.handle_line(line)

        self._logger.info("leaving REPL after %d lines", len(self.history))

    def handle_line(self, line: str) -> None:
        """
        Execute one line of input: a command or a statement.

        Args:
            line: Input line without trailing whitespace
        """
        if not line.strip():
            return

        if line.endswith(';'):
            self.handle_command(line[:-1].strip())
            return

        try:
            result = self.session.run(line)

        except LoqError as e:
            self.stderr.write(f"{e}\n")
            return

        self.stdout.write(f"  => {self.session.format_result(result, self.debug_mode)}\n")

    def handle_command(self, command: str) -> None:
        """
        Execute a REPL command.

        Args:
            command: Command name without the trailing ';'
        """
        if command in ("quit", "q"):
            self.quit = True
            return

        if command in ("debug", "db"):
            self.debug_mode = not self.debug_mode
            self.stdout.write(f"Debug mode set to {'true' if self.debug_mode else 'false'}\n")
            return

        if command in ("locals", "ls"):
            self.print_locals()
            return

        self.stdout.write(f"Unknown command {command}\n")

    def print_locals(self) -> None:
        """List the session's variables and functors."""
        rule = "-" * 39
        variables = self.session.variables()
        functions = self.session.functions()

        if variables:
            self.stdout.write(f"{rule}\nVariables\n{rule}\n")
            for name, value in variables.items():
                self.stdout.write(f"{name}: {value}\n")

        if functions:
            self.stdout.write(f"{rule}\nFunctors\n{rule}\n")
            for definition in functions.values():
                self.stdout.write(f"{definition}\n")

        if not variables and not functions:
            self.stdout.write("No variables or functors in local environment!\n")
