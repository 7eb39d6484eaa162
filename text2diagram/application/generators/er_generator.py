"""
ER diagram generator.

Pipeline: entities → properties → relationships, then the assembled model
is evaluated and, if flagged, regenerated with minimal changes.

Dependencies: text2diagram.core
System role: ER diagram generation
"""

from collections.abc import Mapping
from typing import Any

from text2diagram.application.generators.base import DiagramGenerator
from text2diagram.core.pipeline.steps import PipelineStep, PromptStep
from text2diagram.core.prompts.er_prompts import (
    ENTITY_EXAMPLE,
    PROPERTY_EXAMPLE,
    RELATIONSHIP_EXAMPLE,
    get_entity_prompt,
    get_property_prompt,
    get_relationship_prompt,
)
from text2diagram.core.prompts.template import build_prompt, to_prompt_json
from text2diagram.core.validation.er_validator import (
    validate_entity_names,
    validate_entity_properties,
    validate_er_model,
    validate_relationships,
)
from text2diagram.models.diagram import DiagramType
from text2diagram.models.er import ERModel
from text2diagram.models.prompt import PromptContext


def _entity_prompt(input_text: str, outputs: Mapping[str, Any]) -> PromptContext:
    return build_prompt(get_entity_prompt(), input_text, example=ENTITY_EXAMPLE)


def _property_prompt(input_text: str, outputs: Mapping[str, Any]) -> PromptContext:
    return build_prompt(
        get_property_prompt(),
        input_text,
        entities=to_prompt_json(outputs["entities"]),
        example=PROPERTY_EXAMPLE,
    )


def _relationship_prompt(input_text: str, outputs: Mapping[str, Any]) -> PromptContext:
    return build_prompt(
        get_relationship_prompt(),
        input_text,
        entities=to_prompt_json([entity.to_wire() for entity in outputs["properties"]]),
        example=RELATIONSHIP_EXAMPLE,
    )


class ERDiagramGenerator(DiagramGenerator):
    """Generates ER diagrams through three dependent analysis steps."""

    diagram_type = DiagramType.ER
    diagram_kind = "ER"
    evaluating_message = "Evaluating ER diagram..."
    regenerating_message = "Modifying ER diagram..."
    completed_message = "Generated ER diagram successfully!"

    def validate_model(self, data: Any) -> ERModel:
        return validate_er_model(data)

    def steps(self) -> list[PipelineStep]:
        return [
            PromptStep(
                "entities",
                _entity_prompt,
                lambda data, outputs: validate_entity_names(data),
                progress_message="Identifying entities...",
            ),
            PromptStep(
                "properties",
                _property_prompt,
                lambda data, outputs: validate_entity_properties(data, outputs["entities"]),
                progress_message="Identifying properties...",
            ),
            PromptStep(
                "relationships",
                _relationship_prompt,
                lambda data, outputs: validate_relationships(data, outputs["entities"]),
                progress_message="Identifying relationships...",
            ),
        ]

    def assemble(self, outputs: Mapping[str, Any]) -> ERModel:
        return ERModel(entities=outputs["properties"], relationships=outputs["relationships"])
