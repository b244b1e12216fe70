"""
Tests for CLI output formatting and logging setup.
"""

import io
import logging

from cryptshell.core.constants import ConsoleStyle
from cryptshell.scripts.cli_output import CLIOutput, get_output, set_output, setup_logging


def _ascii_output():
    buffer = io.StringIO()
    return CLIOutput(ConsoleStyle(ConsoleStyle.ASCII), stream=buffer), buffer


class TestCLIOutput:
    def test_prefixes(self):
        out, buffer = _ascii_output()
        out.info("mounted")
        out.warn("busy")
        out.error("failed")
        out.remedy("retry")
        lines = buffer.getvalue().splitlines()
        assert lines == [
            "[cryptshell] [OK] mounted",
            "[cryptshell] [!] busy",
            "[cryptshell] [X] failed",
            "[cryptshell] -> retry",
        ]

    def test_symbol_sets_match_printed_prefixes(self):
        for mode in (ConsoleStyle.UNICODE, ConsoleStyle.ASCII):
            assert sorted(ConsoleStyle._SYMBOLS[mode]) == ["ARROW", "FAILURE", "SUCCESS", "WARNING"]
        assert ConsoleStyle(ConsoleStyle.ASCII).symbol("LOCK") == ""

    def test_brackets_printed_verbatim(self):
        out, buffer = _ascii_output()
        out.log("path [red]/tmp/x[/red]")
        assert "[red]/tmp/x[/red]" in buffer.getvalue()

    def test_unicode_mode(self):
        out = CLIOutput(ConsoleStyle(ConsoleStyle.UNICODE), stream=io.StringIO())
        assert out.use_unicode

    def test_ascii_forced_by_environment(self, monkeypatch):
        monkeypatch.setenv("CRYPTSHELL_ASCII", "1")
        assert ConsoleStyle.detect_mode() == ConsoleStyle.ASCII

    def test_set_output_replaces_default(self):
        out, _ = _ascii_output()
        set_output(out)
        try:
            assert get_output() is out
        finally:
            set_output(None)


class TestSetupLogging:
    def test_levels(self):
        assert setup_logging(debug=True, stream=io.StringIO()).level == logging.DEBUG
        assert setup_logging(debug=False, stream=io.StringIO()).level == logging.WARNING

    def test_handler_not_stacked(self):
        logger = setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())
        tagged = [h for h in logger.handlers if getattr(h, "_cryptshell_handler", False)]
        assert len(tagged) == 1

    def test_child_loggers_reach_handler(self):
        stream = io.StringIO()
        setup_logging(debug=True, stream=stream)
        logging.getLogger("cryptshell.session").debug("hello")
        assert "DEBUG: cryptshell.session: hello" in stream.getvalue()
