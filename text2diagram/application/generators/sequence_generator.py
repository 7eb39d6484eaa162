"""
Sequence diagram generator.

Single-shot: one retrying analysis produces the whole element tree, then
the optional evaluate → regenerate pass refines it.

Dependencies: text2diagram.core
System role: Sequence diagram generation
"""

import logging
from typing import Any

from text2diagram.application.generators.base import DiagramGenerator
from text2diagram.core.exceptions import AnalysisFailedError, PipelineError
from text2diagram.core.pipeline.multi_step_pipeline import PipelineRun
from text2diagram.core.pipeline.refinement import ModelRefiner
from text2diagram.core.prompts.sequence_prompts import (
    SEQUENCE_EXAMPLE,
    SEQUENCE_SCHEMA,
    get_sequence_prompt,
)
from text2diagram.core.prompts.template import build_prompt
from text2diagram.core.validation.sequence_validator import validate_sequence
from text2diagram.models.diagram import DiagramType
from text2diagram.models.sequence import SequenceDiagram
from text2diagram.observability.progress import ProgressReporter

logger = logging.getLogger(__name__)


class SequenceDiagramGenerator(DiagramGenerator):
    """Generates sequence diagrams with a single analysis call."""

    diagram_type = DiagramType.SEQUENCE
    diagram_kind = "sequence"
    evaluating_message = "Evaluating sequence diagram..."
    regenerating_message = "Modifying sequence diagram..."
    completed_message = "Generated sequence diagram successfully!"

    def validate_model(self, data: Any) -> SequenceDiagram:
        return validate_sequence(data)

    async def generate(self, input_text: str, progress: ProgressReporter) -> PipelineRun:
        logger.info(f"{__name__}:generate - START input_len={len(input_text)}")
        await progress.report("Analyzing interactions...")

        prompt = build_prompt(
            get_sequence_prompt(),
            input_text,
            schema=SEQUENCE_SCHEMA,
            example=SEQUENCE_EXAMPLE,
        )
        draft = await self._analyzer.analyze(prompt, validate_sequence, step="sequence")

        refiner = ModelRefiner(self._analyzer, self.refinement())
        try:
            refined = await refiner.refine(input_text, draft, self.correction_passes, progress)
        except AnalysisFailedError as e:
            raise PipelineError("regenerate", e) from e

        logger.info(
            f"{__name__}:generate - COMPLETE elements={len(refined.model.elements)}, "
            f"corrections={refined.corrections_applied}"
        )
        return PipelineRun(
            model=refined.model,
            outputs={"sequence": draft},
            evaluations=refined.evaluations,
            corrections_applied=refined.corrections_applied,
        )
