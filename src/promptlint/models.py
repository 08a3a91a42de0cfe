from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rule:
    name: str
    rule: str
    reason: str
    fix: str
    bad_example: str = ""
    good_example: str = ""


@dataclass(frozen=True)
class Issue:
    rule_name: str = ""
    description: str = ""
    reason: str = ""
    fix: str = ""
    original_snippet: str = ""
    fixed_snippet: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the issue keyed the way the remote service reports it."""
        return {
            "name": self.rule_name,
            "description": self.description,
            "reason": self.reason,
            "fix": self.fix,
            "originalSnippet": self.original_snippet,
            "fixedSnippet": self.fixed_snippet,
        }


@dataclass(frozen=True)
class ValidatorConfig:
    api_key: str
    api_endpoint: str
    model_name: str
    timeout: float = 300.0
