"""
Sequence diagram validator.

Elements carry no explicit type tag; the variant is decided by which marker
fields are present. An element with ``Participant1`` and ``Participant2`` is
a statement, one with an ``AltBlock`` key is an alt block, and so on.
Anything matching zero or several variants is rejected immediately.

Dependencies: text2diagram.core.validation.base, text2diagram.models.sequence
System role: Turns extracted JSON into a typed SequenceDiagram
"""

from typing import Any

from text2diagram.core.exceptions import SchemaValidationError, UnrecognizedShapeError
from text2diagram.core.validation.base import (
    get_field,
    has_field,
    join_path,
    optional_string,
    require_container,
    require_list,
    require_object,
    require_string,
)
from text2diagram.models.sequence import (
    ARROW_TYPES,
    AltBlock,
    AltBranch,
    CriticalBlock,
    LoopBlock,
    OptionBlock,
    ParallelBlock,
    ParallelBranch,
    SequenceDiagram,
    Statement,
)

STATEMENT = "Statement"
BLOCK_MARKERS = ("AltBlock", "LoopBlock", "ParallelBlock", "CriticalBlock")


def classify_sequence_element(element: Any, path: str) -> str:
    """
    Decide which union variant an element is.

    Args:
        element: Raw JSON element
        path: Validation path of the element

    Returns:
        str: "Statement" or one of BLOCK_MARKERS

    Raises:
        UnrecognizedShapeError: Zero or multiple variants match
        SchemaValidationError: A statement has only one participant
    """
    obj = require_object(element, path)

    has_sender = has_field(obj, "Participant1")
    has_receiver = has_field(obj, "Participant2")
    markers = [marker for marker in BLOCK_MARKERS if has_field(obj, marker)]
    if has_sender and has_receiver:
        markers.insert(0, STATEMENT)

    if len(markers) > 1:
        raise UnrecognizedShapeError(
            path, f"ambiguous element, matches {' and '.join(markers)}"
        )
    if markers:
        return markers[0]
    if has_sender or has_receiver:
        missing = "Participant2" if has_sender else "Participant1"
        raise SchemaValidationError(path, f"missing required field '{missing}'")
    raise UnrecognizedShapeError(
        path,
        "unrecognized element; expected a statement (Participant1, Participant2, "
        "Message, ArrowType) or one of " + ", ".join(BLOCK_MARKERS),
    )


def _parse_body(obj: dict, path: str) -> list:
    items = require_list(obj, "Body", path)
    body_path = join_path(path, "Body")
    return [
        parse_sequence_element(item, join_path(body_path, index))
        for index, item in enumerate(items)
    ]


def _parse_statement(obj: dict, path: str) -> Statement:
    arrow = require_string(obj, "ArrowType", path)
    if arrow not in ARROW_TYPES:
        raise SchemaValidationError(
            join_path(path, "ArrowType"),
            f"invalid arrow '{arrow}'; expected one of {', '.join(ARROW_TYPES)}",
        )
    return Statement(
        sender=require_string(obj, "Participant1", path),
        receiver=require_string(obj, "Participant2", path),
        message=require_string(obj, "Message", path),
        arrow_type=arrow,
    )


def _parse_alt(block: dict, path: str) -> AltBlock:
    branches_path = join_path(path, "Branches")
    branches = []
    for index, raw in enumerate(require_list(block, "Branches", path)):
        branch_path = join_path(branches_path, index)
        branch = require_object(raw, branch_path)
        branches.append(
            AltBranch(
                condition=require_string(branch, "Condition", branch_path),
                body=_parse_body(branch, branch_path),
            )
        )
    return AltBlock(branches=branches)


def _parse_loop(block: dict, path: str) -> LoopBlock:
    return LoopBlock(
        title=require_string(block, "Title", path),
        body=_parse_body(block, path),
    )


def _parse_parallel(block: dict, path: str) -> ParallelBlock:
    branches_path = join_path(path, "Branches")
    branches = []
    for index, raw in enumerate(require_list(block, "Branches", path)):
        branch_path = join_path(branches_path, index)
        branch = require_object(raw, branch_path)
        branches.append(
            ParallelBranch(
                title=require_string(branch, "Title", branch_path),
                body=_parse_body(branch, branch_path),
            )
        )
    return ParallelBlock(branches=branches)


def _parse_critical(block: dict, path: str) -> CriticalBlock:
    options_path = join_path(path, "Options")
    options = []
    for index, raw in enumerate(require_list(block, "Options", path, non_empty=False)):
        option_path = join_path(options_path, index)
        option = require_object(raw, option_path)
        options.append(
            OptionBlock(
                condition=require_string(option, "Condition", option_path),
                body=_parse_body(option, option_path),
            )
        )
    return CriticalBlock(
        title=optional_string(block, "Title", path) or "Critical section",
        body=_parse_body(block, path),
        options=options,
    )


_BLOCK_PARSERS = {
    "AltBlock": _parse_alt,
    "LoopBlock": _parse_loop,
    "ParallelBlock": _parse_parallel,
    "CriticalBlock": _parse_critical,
}


def parse_sequence_element(element: Any, path: str):
    """Validate one element (recursively) and return its typed variant."""
    variant = classify_sequence_element(element, path)
    if variant == STATEMENT:
        return _parse_statement(element, path)

    block_path = join_path(path, variant)
    block = require_object(get_field(element, variant), block_path)
    return _BLOCK_PARSERS[variant](block, block_path)


def validate_sequence(data: Any) -> SequenceDiagram:
    """
    Validate a full sequence diagram response.

    Args:
        data: Extracted JSON, ``{"Elements": [...]}``

    Returns:
        SequenceDiagram: Typed model

    Raises:
        SchemaValidationError: On the first structural problem found
    """
    elements = require_container(data, "Elements")
    return SequenceDiagram(
        elements=[
            parse_sequence_element(element, join_path("Elements", index))
            for index, element in enumerate(elements)
        ]
    )
