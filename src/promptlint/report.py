from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Sequence, TextIO

from promptlint.models import Issue

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
BOLD = "\033[1m"

SEPARATOR = "─" * 60
SNIPPET_INDENT = "    "


@dataclass(frozen=True)
class TerminalSignals:
    is_tty: bool
    no_color: bool = False
    term: str = ""

    @classmethod
    def detect(cls, stream: TextIO, environ: Mapping[str, str] | None = None) -> TerminalSignals:
        env = os.environ if environ is None else environ
        isatty = getattr(stream, "isatty", None)
        return cls(
            is_tty=bool(isatty and isatty()),
            no_color="NO_COLOR" in env,
            term=env.get("TERM", ""),
        )


def resolve_color(force_color: bool, no_color: bool, signals: TerminalSignals) -> bool:
    if force_color:
        return True
    if no_color:
        return False
    if signals.no_color:
        return False
    if not signals.is_tty:
        return False
    return signals.term != "dumb"


def render_report(issues: Sequence[Issue], colorize: bool) -> str:
    if not issues:
        return _style("No issues found!", GREEN + BOLD, colorize) + "\n"

    parts: list[str] = []
    parts.append(f"Found {_style(f'{len(issues)} issues', BOLD, colorize)}:\n\n")

    for index, issue in enumerate(issues, start=1):
        parts.append(_style(f"[Issue {index}] {issue.description}", BLUE + BOLD, colorize) + "\n")
        parts.append(f"{_style('Reason:', BOLD, colorize)} {issue.reason}\n")
        parts.append(f"{_style('Fix:', BOLD, colorize)} {issue.fix}\n")

        if issue.original_snippet and issue.fixed_snippet:
            parts.append("\n")
            parts.append(_style("Original snippet:", BOLD, colorize) + "\n")
            parts.append(_style(indent_snippet(issue.original_snippet), RED, colorize) + "\n")
            parts.append(_style("Fixed snippet:", BOLD, colorize) + "\n")
            parts.append(_style(indent_snippet(issue.fixed_snippet), GREEN, colorize) + "\n")

        if index < len(issues):
            parts.append(f"\n{SEPARATOR}\n\n")

    return "".join(parts)


def indent_snippet(snippet: str) -> str:
    return "\n".join(SNIPPET_INDENT + line for line in snippet.split("\n"))


def _style(text: str, codes: str, colorize: bool) -> str:
    if not colorize:
        return text
    return f"{codes}{text}{RESET}"
