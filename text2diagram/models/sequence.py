"""
Sequence diagram models.

A sequence diagram is an ordered list of elements, where each element is
exactly one variant of a tagged union: a statement (message arrow) or a
block (alt / loop / par / critical) whose bodies nest further elements.

Dependencies: pydantic
System role: Typed intermediate representation for sequence diagrams
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

ARROW_TYPES: tuple[str, ...] = ("->", "-->", "->>", "-->>", "-x", "--x", "-)", "--)")


class Statement(BaseModel):
    """Single message exchanged between two participants."""

    kind: Literal["statement"] = "statement"
    sender: str = Field(description="Participant sending the message")
    receiver: str = Field(description="Participant receiving the message")
    message: str = Field(description="Message text shown on the arrow")
    arrow_type: str = Field(description="Mermaid arrow token, one of ARROW_TYPES")

    def to_wire(self) -> dict[str, Any]:
        return {
            "Participant1": self.sender,
            "Participant2": self.receiver,
            "Message": self.message,
            "ArrowType": self.arrow_type,
        }


class AltBranch(BaseModel):
    """Guarded branch of an alt block."""

    condition: str = Field(description="Guard condition for the branch")
    body: list["SequenceElement"] = Field(description="Elements executed in the branch")

    def to_wire(self) -> dict[str, Any]:
        return {"Condition": self.condition, "Body": [e.to_wire() for e in self.body]}


class AltBlock(BaseModel):
    """Alternative paths; first branch renders as alt, the rest as else."""

    kind: Literal["alt"] = "alt"
    branches: list[AltBranch] = Field(description="Ordered alternative branches")

    def to_wire(self) -> dict[str, Any]:
        return {"AltBlock": {"Branches": [b.to_wire() for b in self.branches]}}


class LoopBlock(BaseModel):
    """Repeated section of the interaction."""

    kind: Literal["loop"] = "loop"
    title: str = Field(description="Loop description")
    body: list["SequenceElement"] = Field(description="Elements repeated by the loop")

    def to_wire(self) -> dict[str, Any]:
        return {"LoopBlock": {"Title": self.title, "Body": [e.to_wire() for e in self.body]}}


class ParallelBranch(BaseModel):
    """One concurrently executed branch of a par block."""

    title: str = Field(description="Branch title")
    body: list["SequenceElement"] = Field(description="Elements in the branch")

    def to_wire(self) -> dict[str, Any]:
        return {"Title": self.title, "Body": [e.to_wire() for e in self.body]}


class ParallelBlock(BaseModel):
    """Branches executed in parallel."""

    kind: Literal["par"] = "par"
    branches: list[ParallelBranch] = Field(description="Parallel branches")

    def to_wire(self) -> dict[str, Any]:
        return {"ParallelBlock": {"Branches": [b.to_wire() for b in self.branches]}}


class OptionBlock(BaseModel):
    """Optional path attached to a critical region."""

    condition: str = Field(description="Condition under which the option applies")
    body: list["SequenceElement"] = Field(description="Elements of the option")

    def to_wire(self) -> dict[str, Any]:
        return {"Condition": self.condition, "Body": [e.to_wire() for e in self.body]}


class CriticalBlock(BaseModel):
    """Critical region with optional fallbacks."""

    kind: Literal["critical"] = "critical"
    title: str = Field(description="Critical region description")
    body: list["SequenceElement"] = Field(description="Elements of the critical region")
    options: list[OptionBlock] = Field(default_factory=list, description="Option paths")

    def to_wire(self) -> dict[str, Any]:
        return {
            "CriticalBlock": {
                "Title": self.title,
                "Body": [e.to_wire() for e in self.body],
                "Options": [o.to_wire() for o in self.options],
            }
        }


SequenceElement = Annotated[
    Union[Statement, AltBlock, LoopBlock, ParallelBlock, CriticalBlock],
    Field(discriminator="kind"),
]


class SequenceDiagram(BaseModel):
    """Validated sequence diagram model."""

    elements: list[SequenceElement] = Field(description="Top-level elements in order")

    def to_wire(self) -> dict[str, Any]:
        return {"Elements": [e.to_wire() for e in self.elements]}


for _model in (
    AltBranch, AltBlock, LoopBlock, ParallelBranch, ParallelBlock,
    OptionBlock, CriticalBlock, SequenceDiagram,
):
    _model.model_rebuild()
