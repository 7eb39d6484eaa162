"""
Use case diagram generator.

Pipeline: actors → use_cases → associations → relationships → packages.
The packaging step returns the complete diagram, so assembly just takes
that fragment.

Dependencies: text2diagram.core
System role: Use case diagram generation
"""

from collections.abc import Mapping
from typing import Any

from text2diagram.application.generators.base import DiagramGenerator
from text2diagram.core.pipeline.steps import PipelineStep, PromptStep
from text2diagram.core.prompts.template import build_prompt, to_prompt_json
from text2diagram.core.prompts.usecase_prompts import (
    ACTOR_EXAMPLE,
    ASSOCIATION_EXAMPLE,
    PACKAGE_EXAMPLE,
    RELATIONSHIP_EXAMPLE,
    USE_CASE_EXAMPLE,
    get_actor_prompt,
    get_association_prompt,
    get_package_prompt,
    get_relationship_prompt,
    get_use_case_prompt,
)
from text2diagram.core.validation.usecase_validator import (
    validate_actors,
    validate_associations,
    validate_packages,
    validate_use_case_diagram,
    validate_use_case_relationships,
    validate_use_cases,
)
from text2diagram.models.diagram import DiagramType
from text2diagram.models.usecase import UseCaseDiagram


def _names(items) -> str:
    return to_prompt_json([item.name for item in items])


def _wire(items) -> str:
    return to_prompt_json([item.to_wire() for item in items])


def _actor_prompt(input_text: str, outputs: Mapping[str, Any]):
    return build_prompt(get_actor_prompt(), input_text, example=ACTOR_EXAMPLE)


def _use_case_prompt(input_text: str, outputs: Mapping[str, Any]):
    return build_prompt(
        get_use_case_prompt(),
        input_text,
        actors=_names(outputs["actors"]),
        example=USE_CASE_EXAMPLE,
    )


def _association_prompt(input_text: str, outputs: Mapping[str, Any]):
    return build_prompt(
        get_association_prompt(),
        input_text,
        actors=_names(outputs["actors"]),
        use_cases=_names(outputs["use_cases"]),
        example=ASSOCIATION_EXAMPLE,
    )


def _relationship_prompt(input_text: str, outputs: Mapping[str, Any]):
    return build_prompt(
        get_relationship_prompt(),
        input_text,
        use_cases=_names(outputs["use_cases"]),
        example=RELATIONSHIP_EXAMPLE,
    )


def _package_prompt(input_text: str, outputs: Mapping[str, Any]):
    return build_prompt(
        get_package_prompt(),
        input_text,
        actors=_names(outputs["actors"]),
        use_cases=_names(outputs["use_cases"]),
        associations=_wire(outputs["associations"]),
        relationships=to_prompt_json(outputs["relationships"].to_wire()),
        example=PACKAGE_EXAMPLE,
    )


class UseCaseDiagramGenerator(DiagramGenerator):
    """Generates packaged use case diagrams through five dependent steps."""

    diagram_type = DiagramType.USE_CASE
    diagram_kind = "use case"
    evaluating_message = "Evaluating use case diagram..."
    regenerating_message = "Modifying use case diagram..."
    completed_message = "Generated use case diagram successfully!"

    def validate_model(self, data: Any) -> UseCaseDiagram:
        return validate_use_case_diagram(data)

    def steps(self) -> list[PipelineStep]:
        return [
            PromptStep(
                "actors",
                _actor_prompt,
                lambda data, outputs: validate_actors(data),
                progress_message="Identifying actors...",
            ),
            PromptStep(
                "use_cases",
                _use_case_prompt,
                lambda data, outputs: validate_use_cases(data),
                progress_message="Identifying use cases...",
            ),
            PromptStep(
                "associations",
                _association_prompt,
                lambda data, outputs: validate_associations(
                    data, outputs["actors"], outputs["use_cases"]
                ),
                progress_message="Identifying associations...",
            ),
            PromptStep(
                "relationships",
                _relationship_prompt,
                lambda data, outputs: validate_use_case_relationships(data, outputs["use_cases"]),
                progress_message="Identifying relationships...",
            ),
            PromptStep(
                "packages",
                _package_prompt,
                lambda data, outputs: validate_packages(
                    data, outputs["actors"], outputs["use_cases"]
                ),
                progress_message="Grouping use cases into packages...",
            ),
        ]

    def assemble(self, outputs: Mapping[str, Any]) -> UseCaseDiagram:
        return outputs["packages"]
