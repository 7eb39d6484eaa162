"""
Domain models.

Pydantic models for requests, results and the typed intermediate
representation of every supported diagram type.
"""

from text2diagram.models.diagram import (
    DiagramModel,
    DiagramRequest,
    DiagramResult,
    DiagramType,
)
from text2diagram.models.er import Cardinality, Entity, ERModel, Property, PropertyRole, Relationship
from text2diagram.models.evaluation import EvaluationReport
from text2diagram.models.flowchart import (
    EdgeType,
    FlowEdge,
    FlowGraph,
    FlowNode,
    FlowType,
    NodeType,
    Subflow,
)
from text2diagram.models.prompt import PromptContext
from text2diagram.models.sequence import (
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
from text2diagram.models.usecase import (
    Actor,
    Association,
    Extend,
    Include,
    Package,
    UseCase,
    UseCaseDiagram,
)

__all__ = [
    "Actor",
    "AltBlock",
    "AltBranch",
    "Association",
    "Cardinality",
    "CriticalBlock",
    "DiagramModel",
    "DiagramRequest",
    "DiagramResult",
    "DiagramType",
    "ERModel",
    "EdgeType",
    "Entity",
    "EvaluationReport",
    "Extend",
    "FlowEdge",
    "FlowGraph",
    "FlowNode",
    "FlowType",
    "Include",
    "LoopBlock",
    "NodeType",
    "OptionBlock",
    "Package",
    "ParallelBlock",
    "ParallelBranch",
    "PromptContext",
    "Property",
    "PropertyRole",
    "Relationship",
    "SequenceDiagram",
    "Statement",
    "Subflow",
    "UseCase",
    "UseCaseDiagram",
]
