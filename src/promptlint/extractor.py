"""Turn a chat-completion reply into an ordered list of issues.

Two reply shapes are accepted. The structured shape carries
``choices[0].message.tool_calls[*].function.arguments`` as JSON strings
holding an ``issues`` array. The legacy shape carries free text in
``choices[0].message.content`` with a JSON array embedded somewhere in it.

Attempts run in a fixed order and the first one that matches wins::

    tool_calls     -> any non-empty tool call list
    content_slice  -> content with a ``[`` ... ``]`` pair
    content_whole  -> any other non-empty content
    empty          -> nothing usable, zero issues

Once an attempt matches, a JSON decode failure inside it is fatal and the
later attempts are never tried.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from promptlint.errors import ResponseFormatError
from promptlint.models import Issue

logger = logging.getLogger(__name__)

SOURCE_TOOL_CALLS = "tool_calls"
SOURCE_CONTENT_SLICE = "content_slice"
SOURCE_CONTENT_WHOLE = "content_whole"
SOURCE_EMPTY = "empty"


@dataclass(frozen=True)
class ToolCall:
    arguments: str | None


@dataclass(frozen=True)
class ReplyMessage:
    tool_calls: tuple[ToolCall, ...] = ()
    content: str = ""


@dataclass(frozen=True)
class Extraction:
    source: str
    issues: tuple[Issue, ...] = ()


def parse_reply(envelope: Any) -> ReplyMessage | None:
    """Return a typed view of ``choices[0].message`` or None when it is missing."""
    if not isinstance(envelope, dict):
        return None

    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        return None

    choice = choices[0]
    if not isinstance(choice, dict):
        return None

    message = choice.get("message")
    if not isinstance(message, dict):
        return None

    tool_calls: list[ToolCall] = []
    raw_calls = message.get("tool_calls")
    if isinstance(raw_calls, list):
        for raw_call in raw_calls:
            tool_calls.append(_to_tool_call(raw_call))

    content = message.get("content")
    return ReplyMessage(
        tool_calls=tuple(tool_calls),
        content=content if isinstance(content, str) else "",
    )


def extract(envelope: Any) -> Extraction:
    message = parse_reply(envelope)
    if message is None:
        logger.warning("Response has no message to extract issues from")
        return Extraction(source=SOURCE_EMPTY)

    for attempt in _ATTEMPTS:
        result = attempt(message)
        if result is not None:
            return result

    return Extraction(source=SOURCE_EMPTY)


def extract_issues(envelope: Any) -> list[Issue]:
    return list(extract(envelope).issues)


def issue_from_mapping(item: Mapping[str, Any]) -> Issue:
    return Issue(
        rule_name=_string_field(item, "name"),
        description=_string_field(item, "description"),
        reason=_string_field(item, "reason"),
        fix=_string_field(item, "fix"),
        original_snippet=_string_field(item, "originalSnippet"),
        fixed_snippet=_string_field(item, "fixedSnippet"),
    )


def _from_tool_calls(message: ReplyMessage) -> Extraction | None:
    if not message.tool_calls:
        logger.info("No tool calls found in response, trying legacy format")
        return None

    logger.info("Extracting tool call results")
    issues: list[Issue] = []
    for call in message.tool_calls:
        if call.arguments is None:
            continue

        try:
            payload = json.loads(call.arguments)
        except json.JSONDecodeError as exc:
            raise ResponseFormatError(f"error parsing tool response: {exc}", raw=call.arguments) from exc
        if payload is None:
            continue
        if not isinstance(payload, dict):
            raise ResponseFormatError(
                f"error parsing tool response: expected an object, got {type(payload).__name__}",
                raw=call.arguments,
            )

        items = payload.get("issues")
        if not isinstance(items, list):
            continue

        logger.info("Processing %d issues found by LLM", len(items))
        for item in items:
            if isinstance(item, dict):
                issues.append(issue_from_mapping(item))

    return Extraction(source=SOURCE_TOOL_CALLS, issues=tuple(issues))


def _from_content_slice(message: ReplyMessage) -> Extraction | None:
    content = message.content
    if not content:
        return None

    start = content.find("[")
    end = content.rfind("]")
    if start < 0 or end <= start:
        return None

    issues = _parse_legacy_array(content[start : end + 1], raw=content)
    return Extraction(source=SOURCE_CONTENT_SLICE, issues=issues)


def _from_content_whole(message: ReplyMessage) -> Extraction | None:
    content = message.content
    if not content:
        return None

    issues = _parse_legacy_array(content, raw=content)
    return Extraction(source=SOURCE_CONTENT_WHOLE, issues=issues)


_ATTEMPTS: tuple[Callable[[ReplyMessage], Extraction | None], ...] = (
    _from_tool_calls,
    _from_content_slice,
    _from_content_whole,
)


def _parse_legacy_array(text: str, *, raw: str) -> tuple[Issue, ...]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"failed to parse legacy response as JSON: {exc}\nResponse: {raw}", raw=raw) from exc

    if payload is None:
        return ()
    if not isinstance(payload, list):
        raise ResponseFormatError(
            f"failed to parse legacy response: expected a JSON array, got {type(payload).__name__}\nResponse: {raw}",
            raw=raw,
        )

    issues: list[Issue] = []
    for item in payload:
        if item is None:
            item = {}
        if not isinstance(item, dict) or not all(
            isinstance(value, str) or value is None for value in item.values()
        ):
            raise ResponseFormatError(
                f"failed to parse legacy response: entries must be objects with string values\nResponse: {raw}",
                raw=raw,
            )
        issues.append(issue_from_mapping(item))

    return tuple(issues)


def _to_tool_call(raw_call: object) -> ToolCall:
    if not isinstance(raw_call, dict):
        return ToolCall(arguments=None)
    function = raw_call.get("function")
    if not isinstance(function, dict):
        return ToolCall(arguments=None)
    arguments = function.get("arguments")
    return ToolCall(arguments=arguments if isinstance(arguments, str) else None)


def _string_field(item: Mapping[str, Any], key: str) -> str:
    value = item.get(key)
    if isinstance(value, str):
        return value
    return ""
