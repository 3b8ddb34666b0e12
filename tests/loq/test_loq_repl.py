"""Tests for the Loq REPL."""

import io

import pytest

from loq import LoqConfig, LoqRepl


@pytest.fixture
def make_repl():
    """Factory for a REPL over in-memory streams."""
    def _make_repl(text: str, debug: bool = False) -> LoqRepl:
        return LoqRepl(
            LoqConfig(debug=debug),
            stdin=io.StringIO(text),
            stdout=io.StringIO(),
            stderr=io.StringIO()
        )
    return _make_repl


class TestLoqRepl:
    """Test the read-eval-print loop."""

    def test_statements(self, make_repl):
        """Test that results are printed with their kind."""
        repl = make_repl("a=2\na\nx+1\n")
        repl.run()
        output = repl.stdout.getvalue()
        assert "  => Sym: a=2\n" in output
        assert "  => Num: 2\n" in output
        assert "  => Sym: x+1\n" in output

    def test_prompt_and_end_of_input(self, make_repl):
        """Test that a prompt is shown per line and end of input ends the loop."""
        repl = make_repl("1\n")
        repl.run()
        assert repl.stdout.getvalue() == ">  " + "  => Num: 1\n" + ">  " + "\n"

    def test_quit(self, make_repl):
        """Test that quit stops reading further lines."""
        repl = make_repl("a=1\nq;\na=2\n")
        repl.run()
        assert repl.quit
        assert repl.history == ["a=1", "q;"]
        assert repl.session.run("a").expect_value() == 1

    def test_long_quit(self, make_repl):
        """Test the long form of quit."""
        repl = make_repl("quit;\n")
        repl.run()
        assert repl.quit

    def test_debug_toggle(self, make_repl):
        """Test that debug toggles tree display."""
        repl = make_repl("db;\n3\ndebug;\n3\n")
        repl.run()
        output = repl.stdout.getvalue()
        assert "Debug mode set to true\n" in output
        assert "  => Num: LoqNumeric(value=3.0)\n" in output
        assert "Debug mode set to false\n" in output
        assert "  => Num: 3\n" in output

    def test_debug_from_config(self, make_repl):
        """Test that the REPL starts in the configured debug mode."""
        repl = make_repl("db;\n", debug=True)
        repl.run()
        assert "Debug mode set to false\n" in repl.stdout.getvalue()

    def test_locals_empty(self, make_repl):
        """Test the locals listing with nothing defined."""
        repl = make_repl("ls;\n")
        repl.run()
        assert "No variables or functors in local environment!\n" in repl.stdout.getvalue()

    def test_locals(self, make_repl):
        """Test the locals listing with variables and functors."""
        repl = make_repl("a=2\nf(x)=x*a\nlocals;\n")
        repl.run()
        output = repl.stdout.getvalue()
        rule = "-" * 39
        assert f"{rule}\nVariables\n{rule}\na: 2\n" in output
        assert f"{rule}\nFunctors\n{rule}\nf(x)=x*a\n" in output

    def test_unknown_command(self, make_repl):
        """Test that unknown commands are reported."""
        repl = make_repl("frob;\n")
        repl.run()
        assert "Unknown command frob\n" in repl.stdout.getvalue()

    def test_errors_go_to_stderr(self, make_repl):
        """Test that diagnostics are written to the error stream and the loop continues."""
        repl = make_repl("1+)\n2\n")
        repl.run()
        assert "Error: Expected" in repl.stderr.getvalue()
        assert "  => Num: 2\n" in repl.stdout.getvalue()

    def test_blank_lines_ignored(self, make_repl):
        """Test that blank lines produce no output."""
        repl = make_repl("\n   \n")
        repl.run()
        assert "=>" not in repl.stdout.getvalue()
        assert repl.stderr.getvalue() == ""

    def test_history(self, make_repl):
        """Test that every line read is recorded without its newline."""
        repl = make_repl("a=1  \nb=2\n")
        repl.run()
        assert repl.history == ["a=1", "b=2"]

    def test_interrupt_continues(self):
        """Test that an interrupt while reading abandons the line and keeps the loop running."""
        class InterruptingInput:
            """Input stream that is interrupted once before delivering its lines."""

            def __init__(self):
                self.items = iter([KeyboardInterrupt(), "2\n", ""])

            def readline(self):
                item = next(self.items)
                if isinstance(item, BaseException):
                    raise item

                return item

        repl = LoqRepl(stdin=InterruptingInput(), stdout=io.StringIO(), stderr=io.StringIO())
        repl.run()
        output = repl.stdout.getvalue()
        assert "^C\n" in output
        assert "  => Num: 2\n" in output

    def test_long_line_then_next(self, make_repl):
        """Test that a very long statement is answered and the loop reads on."""
        repl = make_repl("+".join(["1"] * 1000) + "\n1+1\n")
        repl.run()
        output = repl.stdout.getvalue()
        assert "  => Num: 1000\n" in output
        assert "  => Num: 2\n" in output
        assert repl.stderr.getvalue() == ""
