from __future__ import annotations

import copy
import logging
from typing import Any, Sequence

from promptlint.models import Rule

logger = logging.getLogger(__name__)

TOOL_NAME = "find_prompt_issues"

ISSUE_FIELDS = ("name", "description", "reason", "fix", "originalSnippet", "fixedSnippet")

SYSTEM_MESSAGE = """You are a prompt evaluation expert. Your task is to analyze a prompt and determine if it follows the provided rules.

Analyze the prompt against each rule and identify violations. The rules are provided in a separate message.

Use the find_prompt_issues tool to return the issues found in the prompt. If there are no issues, return an empty array."""

PROMPT_PREAMBLE = "Analyze the following prompt against the specified rules:\n\n"

_FIELD_DESCRIPTIONS = {
    "name": "Name of the violated rule",
    "description": "Description of the problem",
    "reason": "Why this is a problem (from the rules)",
    "fix": "Recommendation for fixing",
    "originalSnippet": "Problematic part of the prompt (if applicable)",
    "fixedSnippet": "Improved version of the snippet (if applicable)",
}

FIND_ISSUES_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Reports issues found in a prompt based on predefined rules",
        "parameters": {
            "type": "object",
            "properties": {
                "issues": {
                    "type": "array",
                    "description": "List of issues found in the prompt",
                    "items": {
                        "type": "object",
                        "properties": {
                            field: {"type": "string", "description": _FIELD_DESCRIPTIONS[field]}
                            for field in ISSUE_FIELDS
                        },
                        "required": list(ISSUE_FIELDS),
                    },
                }
            },
            "required": ["issues"],
        },
    },
}


def build_rules_description(rules: Sequence[Rule]) -> str:
    lines = ["List of prompt checking rules:", ""]
    for index, rule in enumerate(rules, start=1):
        lines.append(f"{index}. Rule: {rule.name}")
        lines.append(f"   Description: {rule.rule}")
        lines.append(f"   Reason: {rule.reason}")
        if rule.bad_example:
            lines.append(f"   Original snippet: {rule.bad_example}")
        if rule.good_example:
            lines.append(f"   Fixed snippet: {rule.good_example}")
        lines.append("")
    return "\n".join(lines) + "\n"


def build_request(prompt: str, rules: Sequence[Rule], model_name: str) -> dict[str, Any]:
    """Build the chat-completion payload that forces a ``find_prompt_issues`` call.

    Messages are ordered system instruction, rules description, then the
    prompt under test. The returned dict is freshly built on every call and
    is safe to mutate.
    """
    if not prompt.strip():
        raise ValueError("prompt must not be empty")

    logger.info("Preparing rules description for LLM")
    rules_description = build_rules_description(rules)

    logger.info("Building request payload")
    return {
        "model": model_name,
        "messages": [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": rules_description},
            {"role": "user", "content": PROMPT_PREAMBLE + prompt},
        ],
        "tools": [copy.deepcopy(FIND_ISSUES_TOOL)],
        "tool_choice": {"type": "function", "function": {"name": TOOL_NAME}},
    }

