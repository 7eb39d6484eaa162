"""
Mermaid renderer for sequence diagrams.

Plain recursive descent over the element union, one case per variant.
Critical-section options are not rendered.

Dependencies: text2diagram.models.sequence
System role: Sequence model → Mermaid text
"""

import re

from text2diagram.core.exceptions import AssemblyError
from text2diagram.models.sequence import (
    AltBlock,
    CriticalBlock,
    LoopBlock,
    ParallelBlock,
    SequenceDiagram,
    Statement,
)

INDENT = "    "

_ENTITIES = {"#": "#35;", ";": "#59;"}
_SPECIAL = re.compile(r"[#;]")


def _text(value: str) -> str:
    """Escape characters that end or corrupt a Mermaid statement."""
    return _SPECIAL.sub(lambda match: _ENTITIES[match.group(0)], value)


def render_sequence(diagram: SequenceDiagram) -> str:
    """Render a sequence diagram as Mermaid ``sequenceDiagram`` text."""
    lines = ["sequenceDiagram"]
    _render_elements(diagram.elements, 1, lines)
    return "\n".join(lines)


def _render_elements(elements: list, depth: int, lines: list[str]) -> None:
    for element in elements:
        _render_element(element, depth, lines)


def _render_element(element, depth: int, lines: list[str]) -> None:
    pad = INDENT * depth

    if isinstance(element, Statement):
        lines.append(
            f"{pad}{element.sender} {element.arrow_type} {element.receiver}: "
            f"{_text(element.message)}"
        )
    elif isinstance(element, AltBlock):
        for index, branch in enumerate(element.branches):
            keyword = "alt" if index == 0 else "else"
            lines.append(f"{pad}{keyword} {_text(branch.condition)}")
            _render_elements(branch.body, depth + 1, lines)
        lines.append(f"{pad}end")
    elif isinstance(element, LoopBlock):
        lines.append(f"{pad}loop {_text(element.title)}")
        _render_elements(element.body, depth + 1, lines)
        lines.append(f"{pad}end")
    elif isinstance(element, ParallelBlock):
        for index, branch in enumerate(element.branches):
            keyword = "par" if index == 0 else "and"
            lines.append(f"{pad}{keyword} {_text(branch.title)}")
            _render_elements(branch.body, depth + 1, lines)
        lines.append(f"{pad}end")
    elif isinstance(element, CriticalBlock):
        lines.append(f"{pad}critical {_text(element.title)}")
        _render_elements(element.body, depth + 1, lines)
        lines.append(f"{pad}end")
    else:
        raise AssemblyError(f"Unsupported sequence element: {type(element).__name__}")
