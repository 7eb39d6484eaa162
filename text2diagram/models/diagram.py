"""
Diagram request and result models.

Dependencies: pydantic
System role: Public input/output types of the diagram service
"""

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from text2diagram.models.er import ERModel
from text2diagram.models.evaluation import EvaluationReport
from text2diagram.models.flowchart import FlowGraph
from text2diagram.models.sequence import SequenceDiagram
from text2diagram.models.usecase import UseCaseDiagram

DiagramModel = Union[SequenceDiagram, ERModel, FlowGraph, UseCaseDiagram]


class DiagramType(str, Enum):
    """Supported diagram notations (State is declared but not wired)."""

    FLOWCHART = "Flowchart"
    SEQUENCE = "Sequence"
    ER = "ER"
    USE_CASE = "UseCase"
    STATE = "State"


class DiagramRequest(BaseModel):
    """Single user request to generate a diagram."""

    model_config = ConfigDict(frozen=True)

    diagram_type: DiagramType
    input_text: str = Field(description="Natural-language use-case description")


class DiagramResult(BaseModel):
    """Generated diagram: markup plus the validated model behind it."""

    diagram_type: DiagramType
    markup: str = Field(description="Mermaid or PlantUML text")
    model: DiagramModel
    diagram_json: dict[str, Any] = Field(description="Wire-format JSON of the model")
    evaluations: list[EvaluationReport] = Field(default_factory=list)
    corrections_applied: int = 0
