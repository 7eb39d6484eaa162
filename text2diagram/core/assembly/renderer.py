"""
Diagram assembler entry point.

Dispatches a validated model to its renderer. No LLM calls; the same model
always yields byte-identical output.

Dependencies: text2diagram.core.assembly renderers
System role: Final stage of every generation
"""

from text2diagram.core.assembly.er_renderer import render_er
from text2diagram.core.assembly.flowchart_renderer import DEFAULT_INLINE_THRESHOLD, render_flowchart
from text2diagram.core.assembly.sequence_renderer import render_sequence
from text2diagram.core.assembly.usecase_renderer import render_use_case
from text2diagram.core.exceptions import AssemblyError
from text2diagram.models.er import ERModel
from text2diagram.models.flowchart import FlowGraph
from text2diagram.models.sequence import SequenceDiagram
from text2diagram.models.usecase import UseCaseDiagram


def render_diagram(model, subflow_inline_threshold: int = DEFAULT_INLINE_THRESHOLD) -> str:
    """
    Render any supported diagram model to markup.

    Args:
        model: Validated diagram model
        subflow_inline_threshold: Flowchart subflow inlining bound

    Returns:
        str: Mermaid or PlantUML text

    Raises:
        AssemblyError: No renderer exists for the model type
    """
    if isinstance(model, SequenceDiagram):
        return render_sequence(model)
    if isinstance(model, ERModel):
        return render_er(model)
    if isinstance(model, FlowGraph):
        return render_flowchart(model, subflow_inline_threshold)
    if isinstance(model, UseCaseDiagram):
        return render_use_case(model)
    raise AssemblyError(f"No renderer for model type {type(model).__name__}")
