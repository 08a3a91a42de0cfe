from __future__ import annotations

import importlib.resources
import logging
from pathlib import Path

import yaml

from promptlint.errors import RulesError
from promptlint.models import Rule

logger = logging.getLogger(__name__)

BUILTIN_RULES_FILE = "prompt_rules.yaml"

_REQUIRED_KEYS = ("name", "rule", "reason", "fix")


def load_builtin_rules() -> list[Rule]:
    logger.info("Loading built-in rules")
    content = importlib.resources.files("promptlint").joinpath(BUILTIN_RULES_FILE).read_text(encoding="utf-8")
    rules = parse_rules(content, source="built-in rules")
    logger.info("Loaded %d built-in rules successfully", len(rules))
    return rules


def load_rules(path: str | Path) -> list[Rule]:
    rules_path = Path(path)
    if not rules_path.exists():
        raise RulesError(f"Rules file not found: {rules_path}")

    logger.info("Loading rules from %s", rules_path)
    try:
        content = rules_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RulesError(f"Failed to read rules file {rules_path}: {exc}") from exc

    rules = parse_rules(content, source=str(rules_path))
    logger.info("Loaded %d rules successfully", len(rules))
    return rules


def parse_rules(content: str, *, source: str = "rules") -> list[Rule]:
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise RulesError(f"Error parsing YAML in {source}: {exc}") from exc

    if not isinstance(raw, dict):
        raise RulesError(f"{source} must be a mapping with a 'prompt_rules' list")

    items = raw.get("prompt_rules")
    if not isinstance(items, list) or not items:
        raise RulesError(f"{source} must include a non-empty 'prompt_rules' list")

    rules: list[Rule] = []
    for item in items:
        if not isinstance(item, dict):
            raise RulesError("Each rule entry must be a mapping")

        missing = [key for key in _REQUIRED_KEYS if key not in item]
        if missing:
            raise RulesError(f"Rule is missing keys: {', '.join(missing)}")

        empty = [key for key in _REQUIRED_KEYS if item[key] is None]
        if empty:
            raise RulesError(f"Rule has empty keys: {', '.join(empty)}")

        rules.append(
            Rule(
                name=str(item["name"]),
                rule=str(item["rule"]),
                reason=str(item["reason"]),
                fix=str(item["fix"]),
                bad_example=_text(item.get("badExample")),
                good_example=_text(item.get("goodExample")),
            )
        )

    return rules


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)
