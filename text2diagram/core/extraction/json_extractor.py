"""
JSON extraction from free-form LLM output.

Models wrap JSON in markdown fences, prepend chatter, or trail off into
prose with stray braces. Extraction tries, in order:

1. a fenced code block tagged ``json`` (or untagged), with both fences on
   their own lines,
2. a balanced-bracket span starting at the first ``{``, widened to the
   array that directly encloses it (``[{...}, ...]``),
3. a greedy regex over ``[{...}]``, then ``{...}``, then ``[...]``,

then trims and parses the candidate.

Dependencies: json, re
System role: First recovery stage of the analyze loop
"""

import json
import re
from typing import Any

from text2diagram.core.exceptions import EmptyExtractionError, MalformedJsonError

# json.dumps never emits a raw newline inside a string, so a closing fence
# at the start of a line cannot sit inside a serialized value.
_FENCE_PATTERN = re.compile(
    r"^[ \t]*```(?:json)?[ \t]*\r?\n([\s\S]*?)\r?\n[ \t]*```",
    re.IGNORECASE | re.MULTILINE,
)
_ARRAY_OF_OBJECTS_PATTERN = re.compile(r"\[\s*{[\s\S]*?}\s*\]")
_OBJECT_PATTERN = re.compile(r"{[\s\S]*}")
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

_CLOSERS = {"{": "}", "[": "]"}


def _balanced_span(text: str, start: int) -> str | None:
    """
    Return the bracket-balanced span opening at ``start``.

    Brackets inside JSON string literals are ignored.

    Args:
        text: Text to scan
        start: Index of an opening ``{`` or ``[``

    Returns:
        str | None: Balanced span, or None when the brackets never close
    """
    stack: list[str] = []
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif char in ("}", "]"):
            if not stack or stack.pop() != char:
                return None
            if not stack:
                return text[start:index + 1]
    return None


def _parses(candidate: str) -> bool:
    try:
        json.loads(candidate)
    except ValueError:
        return False
    return True


def _enclosing_array_starts(text: str, object_start: int) -> list[int]:
    """Indexes of ``[`` that directly precede ``object_start``, outermost first."""
    starts: list[int] = []
    index = object_start - 1
    while index >= 0:
        char = text[index]
        if char == "[":
            starts.append(index)
        elif not char.isspace():
            break
        index -= 1
    return starts[::-1]


def _find_balanced(text: str) -> str | None:
    """Locate the balanced object opening at the first ``{``."""
    object_start = text.find("{")
    if object_start == -1:
        return None

    # Arrays of objects are kept whole; any other bracket before the object is prose.
    for array_start in _enclosing_array_starts(text, object_start):
        array_span = _balanced_span(text, array_start)
        if array_span is not None and _parses(array_span):
            return array_span

    return _balanced_span(text, object_start)


def find_json_candidate(text: str) -> str:
    """
    Locate the JSON-shaped substring of a model response without parsing it.

    Args:
        text: Raw model output

    Returns:
        str: Trimmed candidate, possibly empty
    """
    if not text:
        return ""

    fence = _FENCE_PATTERN.search(text)
    if fence:
        return fence.group(1).strip()

    balanced = _find_balanced(text)
    if balanced is not None:
        return balanced.strip()

    for pattern in (_ARRAY_OF_OBJECTS_PATTERN, _OBJECT_PATTERN, _ARRAY_PATTERN):
        match = pattern.search(text)
        if match:
            return match.group(0).strip()

    return ""


def extract_json(text: str) -> Any:
    """
    Recover a single JSON value from raw model output.

    Args:
        text: Raw model output

    Returns:
        Any: Parsed JSON value (usually a dict, sometimes a list)

    Raises:
        EmptyExtractionError: No JSON-shaped substring was found
        MalformedJsonError: The candidate did not parse
    """
    candidate = find_json_candidate(text)
    if not candidate:
        raise EmptyExtractionError()

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedJsonError(
            f"{e.msg} at line {e.lineno} column {e.colno}",
            candidate,
        ) from e
