"""Per-diagram-type generators."""

from text2diagram.application.generators.base import DiagramGenerator
from text2diagram.application.generators.er_generator import ERDiagramGenerator
from text2diagram.application.generators.flowchart_generator import (
    FlowchartGenerator,
    insert_decision,
)
from text2diagram.application.generators.sequence_generator import SequenceDiagramGenerator
from text2diagram.application.generators.usecase_generator import UseCaseDiagramGenerator

__all__ = [
    "DiagramGenerator",
    "ERDiagramGenerator",
    "FlowchartGenerator",
    "SequenceDiagramGenerator",
    "UseCaseDiagramGenerator",
    "insert_decision",
]
