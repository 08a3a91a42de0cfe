from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from promptlint import __version__
from promptlint.config import load_config
from promptlint.errors import ConfigurationError, PromptlintError, RulesError
from promptlint.progress import APP_NAME, configure_logging
from promptlint.report import TerminalSignals, render_report, resolve_color
from promptlint.rules import load_builtin_rules, load_rules
from promptlint.validator import RemoteValidator

logger = logging.getLogger(__name__)

USAGE_EXAMPLES = f"""Examples:
  {APP_NAME} --file prompt.txt
  cat prompt.txt | {APP_NAME}
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Check a prompt against style rules using an LLM",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-f", "--file", default=None, help="Path to file with prompt (reads stdin when omitted)")
    parser.add_argument("--rules", default=None, help="Path to a YAML rules file (built-in rules when omitted)")
    parser.add_argument("--version", action="store_true", help="Show version information")
    parser.add_argument(
        "--force-color",
        action="store_true",
        help="Force colored output even when stdout is not a terminal",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print warnings and errors to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    colorize = resolve_color(args.force_color, args.no_color, TerminalSignals.detect(sys.stdout))
    configure_logging(colorize=colorize, quiet=args.quiet)

    if args.version:
        print(f"{APP_NAME} version {__version__}")
        return 0

    logger.info("Starting %s v%s", APP_NAME, __version__)

    try:
        rules = load_rules(args.rules) if args.rules else load_builtin_rules()
    except RulesError as exc:
        print(f"Error: failed to load rules: {exc}", file=sys.stderr)
        return 1

    if args.file is None and sys.stdin.isatty():
        print("Error: No input provided. Please specify a file or pipe data to stdin.\n", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        prompt = _read_prompt(args.file)
    except OSError as exc:
        source = "file" if args.file else "stdin"
        print(f"Error reading {source}: {exc}", file=sys.stderr)
        return 1

    if not prompt.strip():
        print("Error: Empty input. Please provide a prompt to check.\n", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = load_config()
    except ConfigurationError as exc:
        print(f"Error setting up LLM API: {exc}", file=sys.stderr)
        return 1

    logger.info("Starting prompt validation process")
    try:
        issues = RemoteValidator(config).validate(prompt, rules)
    except PromptlintError as exc:
        print(f"Error checking prompt with LLM API: {exc}", file=sys.stderr)
        return 1

    logger.info("Generating final report")
    sys.stdout.write(render_report(issues, colorize))
    sys.stdout.flush()

    logger.info("Finished")
    return 0


def _read_prompt(file_path: str | None) -> str:
    if file_path:
        logger.info("Reading prompt from file: %s", file_path)
        text = Path(file_path).read_text(encoding="utf-8")
        logger.info("File read successfully")
        return text

    logger.info("Reading prompt from stdin")
    text = sys.stdin.read()
    logger.info("Stdin read successfully")
    return text


if __name__ == "__main__":
    raise SystemExit(main())
