"""Deterministic rendering of validated models into diagram markup."""

from text2diagram.core.assembly.er_renderer import connector, render_er
from text2diagram.core.assembly.flowchart_renderer import render_flowchart
from text2diagram.core.assembly.renderer import render_diagram
from text2diagram.core.assembly.sequence_renderer import render_sequence
from text2diagram.core.assembly.usecase_renderer import render_use_case

__all__ = [
    "connector",
    "render_diagram",
    "render_er",
    "render_flowchart",
    "render_sequence",
    "render_use_case",
]
