"""
Flowchart models.

A flowchart is built from one basic flow plus alternative and exception
subflows. Subflows keep their own node-id namespace and are attached to the
basic flow through an inserted decision node.

Dependencies: pydantic
System role: Typed intermediate representation for flowcharts
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class NodeType(str, Enum):
    """Shape category of a flowchart node."""

    START = "Start"
    END = "End"
    PROCESS = "Process"
    SUBROUTINE = "Subroutine"
    DECISION = "Decision"
    INPUT_OUTPUT = "InputOutput"
    DOCUMENT = "Document"
    DATA_STORE = "DataStore"
    LOOP = "Loop"
    PARALLEL = "Parallel"
    COMMENT = "Comment"


class EdgeType(str, Enum):
    """Connector style of a flowchart edge."""

    ARROW = "Arrow"
    OPEN_ARROW = "OpenArrow"
    CROSS_ARROW = "CrossArrow"
    NO_ARROW = "NoArrow"


class FlowType(str, Enum):
    """Role of a flow in the use case."""

    BASIC = "Basic"
    ALTERNATIVE = "Alternative"
    EXCEPTION = "Exception"


class FlowNode(BaseModel):
    id: str
    label: str
    type: NodeType

    def to_wire(self) -> dict[str, Any]:
        return {"Id": self.id, "Label": self.label, "Type": self.type.value}


class FlowEdge(BaseModel):
    source_id: str
    target_id: str
    type: EdgeType = EdgeType.ARROW
    label: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "SourceId": self.source_id,
            "TargetId": self.target_id,
            "Type": self.type.value,
            "Label": self.label or "",
        }


class Flow(BaseModel):
    """Nodes and edges of a single extracted flow."""

    name: str
    flow_type: FlowType = FlowType.BASIC
    nodes: list[FlowNode] = Field(default_factory=list)
    edges: list[FlowEdge] = Field(default_factory=list)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def find_node(self, node_id: str) -> FlowNode | None:
        return next((node for node in self.nodes if node.id == node_id), None)

    def start_node(self) -> FlowNode | None:
        return next((node for node in self.nodes if node.type == NodeType.START), None)


class Subflow(Flow):
    """Alternative or exception flow attached to the basic flow."""

    branch_node_id: str | None = Field(
        default=None,
        description="Decision node in the basic flow that branches into this subflow",
    )
    rejoin_node_id: str | None = Field(
        default=None,
        description="Basic-flow node where the subflow merges back, if any",
    )

    def entry_node(self) -> FlowNode | None:
        """First node reached when entering the subflow (Start is skipped)."""
        start = self.start_node()
        if start is not None:
            for edge in self.edges:
                if edge.source_id == start.id:
                    target = self.find_node(edge.target_id)
                    if target is not None and target.type != NodeType.START:
                        return target
        return next((node for node in self.nodes if node.type != NodeType.START), None)

    def to_wire(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "FlowType": self.flow_type.value,
            "Nodes": [n.to_wire() for n in self.nodes],
            "Edges": [e.to_wire() for e in self.edges],
            "BranchNodeId": self.branch_node_id or "",
            "RejoinNodeId": self.rejoin_node_id or "",
        }


class FlowGraph(BaseModel):
    """Validated flowchart model: basic flow nodes/edges plus subflows."""

    nodes: list[FlowNode]
    edges: list[FlowEdge] = Field(default_factory=list)
    subflows: list[Subflow] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "Nodes": [n.to_wire() for n in self.nodes],
            "Edges": [e.to_wire() for e in self.edges],
            "Subflows": [s.to_wire() for s in self.subflows],
        }


class FlowDescriptor(BaseModel):
    """Named alternative or exception flow found by the categorizer."""

    name: str
    description: str


class FlowCategories(BaseModel):
    """Use-case specification split into basic, alternative and exception flows."""

    basic_flow: str
    alternative_flows: list[FlowDescriptor] = Field(default_factory=list)
    exception_flows: list[FlowDescriptor] = Field(default_factory=list)


class DecisionPoint(BaseModel):
    """Where a subflow branches off the basic flow and where it rejoins."""

    insertion_node_id: str
    decision_label: str
    rejoin_node_id: str | None = None


class ExtractedFlows(BaseModel):
    """Concurrently extracted flows, joined by role."""

    basic: Flow
    alternatives: list[Flow] = Field(default_factory=list)
    exceptions: list[Flow] = Field(default_factory=list)

    def subflows(self) -> list[Flow]:
        return [*self.alternatives, *self.exceptions]


# Decision edge labels per subflow type: (into the subflow, along the basic flow)
BRANCH_LABELS: dict[FlowType, tuple[str, str]] = {
    FlowType.ALTERNATIVE: ("Yes", "No"),
    FlowType.EXCEPTION: ("No", "Yes"),
}
