import io
import logging

from promptlint.progress import configure_logging
from promptlint.report import GREEN, RED, RESET


def test_plain_progress_lines():
    stream = io.StringIO()
    configure_logging(colorize=False, stream=stream)

    logging.getLogger("promptlint.rules").info("Loading built-in rules")

    assert stream.getvalue() == "[promptlint] Loading built-in rules\n"


def test_colored_progress_by_keyword():
    stream = io.StringIO()
    configure_logging(colorize=True, stream=stream)

    logging.getLogger("promptlint.cli").info("Starting promptlint")
    logging.getLogger("promptlint.cli").error("something broke")

    lines = stream.getvalue().splitlines()
    assert lines[0].endswith(f"{GREEN}Starting promptlint{RESET}")
    assert lines[1].endswith(f"{RED}something broke{RESET}")


def test_quiet_hides_progress():
    stream = io.StringIO()
    configure_logging(colorize=False, quiet=True, stream=stream)

    logging.getLogger("promptlint.cli").info("Reading prompt from stdin")

    assert stream.getvalue() == ""
