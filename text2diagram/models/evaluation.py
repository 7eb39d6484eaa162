"""
Evaluation report model.

Dependencies: pydantic
System role: Structured self-critique returned by the evaluation step
"""

from typing import Any

from pydantic import BaseModel, Field


class EvaluationReport(BaseModel):
    """Model critique of an assembled draft diagram."""

    is_accurate: bool = Field(description="True when the draft needs no changes")
    missing_elements: list[str] = Field(default_factory=list)
    incorrect_elements: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    commentary: str = Field(default="", description="Free-form reviewer notes")

    def to_wire(self) -> dict[str, Any]:
        return {
            "IsAccurate": self.is_accurate,
            "MissingElements": self.missing_elements,
            "IncorrectElements": self.incorrect_elements,
            "Suggestions": self.suggestions,
            "Commentary": self.commentary,
        }
