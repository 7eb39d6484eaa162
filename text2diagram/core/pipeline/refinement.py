"""
Evaluate → regenerate sub-loop.

After a draft is assembled, the model is asked to critique it against the
original description. An inaccurate verdict triggers a regeneration that
patches only the flagged parts. An unparsable critique accepts the draft.
The number of correction passes is bounded by configuration.

Dependencies: text2diagram.core.analysis, text2diagram.core.prompts,
    text2diagram.core.validation
System role: Self-correction of assembled diagram models
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from text2diagram.core.analysis.retrying_analyzer import RetryingAnalyzer
from text2diagram.core.exceptions import AnalysisFailedError
from text2diagram.core.prompts.refinement_prompts import (
    EVALUATION_EXAMPLE,
    get_evaluation_prompt,
    get_feedback_prompt,
    get_regeneration_prompt,
)
from text2diagram.core.prompts.template import build_prompt, to_prompt_json
from text2diagram.core.validation.evaluation_validator import validate_evaluation
from text2diagram.models.evaluation import EvaluationReport
from text2diagram.observability.progress import ProgressReporter

logger = logging.getLogger(__name__)


class Refinement:
    """Per-diagram-type description of how drafts are critiqued and patched."""

    def __init__(
        self,
        diagram_kind: str,
        validator: Callable[[Any], Any],
        evaluating_message: str | None = None,
        regenerating_message: str | None = None,
    ) -> None:
        """
        Initialize refinement description.

        Args:
            diagram_kind: Human-readable diagram name used in prompts ("ER")
            validator: Whole-model validator for regenerated drafts
            evaluating_message: Progress message before evaluation
            regenerating_message: Progress message before regeneration
        """
        self.diagram_kind = diagram_kind
        self.validator = validator
        self.evaluating_message = evaluating_message
        self.regenerating_message = regenerating_message


class RefinementResult(BaseModel):
    """Outcome of refining one draft."""

    model: Any
    evaluations: list[EvaluationReport] = Field(default_factory=list)
    corrections_applied: int = 0


def format_feedback(report: EvaluationReport) -> str:
    """Render an evaluation report as reviewer feedback text."""
    sections = []
    for title, items in (
        ("Missing elements", report.missing_elements),
        ("Incorrect elements", report.incorrect_elements),
        ("Suggestions", report.suggestions),
    ):
        if items:
            sections.append(title + ":\n" + "\n".join(f"- {item}" for item in items))
    if report.commentary:
        sections.append(f"Commentary: {report.commentary}")
    return "\n\n".join(sections) or "The reviewer marked the diagram as inaccurate."


class ModelRefiner:
    """Runs evaluation and regeneration calls for one diagram type."""

    def __init__(self, analyzer: RetryingAnalyzer, refinement: Refinement) -> None:
        self._analyzer = analyzer
        self._refinement = refinement

    async def evaluate(self, input_text: str, model: Any) -> EvaluationReport | None:
        """
        Ask the model to critique a draft.

        Args:
            input_text: Original description
            model: Draft diagram model

        Returns:
            EvaluationReport | None: Critique, or None when it was unparsable
        """
        prompt = build_prompt(
            get_evaluation_prompt(),
            input_text,
            diagram_kind=self._refinement.diagram_kind,
            diagram_json=to_prompt_json(model.to_wire()),
            example=EVALUATION_EXAMPLE,
        )
        try:
            report = await self._analyzer.analyze(
                prompt, validate_evaluation, step="evaluate", max_attempts=1
            )
        except AnalysisFailedError as e:
            logger.warning(
                f"{__name__}:evaluate - Unparsable evaluation, accepting draft - {e.message}"
            )
            return None

        logger.info(
            f"{__name__}:evaluate - is_accurate={report.is_accurate}, "
            f"missing={len(report.missing_elements)}, incorrect={len(report.incorrect_elements)}"
        )
        return report

    async def regenerate(self, input_text: str, model: Any, report: EvaluationReport) -> Any:
        """
        Patch a draft with minimal changes based on a critique.

        Raises:
            StepExhaustedError: No valid patched model was produced
        """
        prompt = build_prompt(
            get_regeneration_prompt(),
            input_text,
            diagram_kind=self._refinement.diagram_kind,
            diagram_json=to_prompt_json(model.to_wire()),
            feedback=format_feedback(report),
        )
        return await self._analyzer.analyze(
            prompt, self._refinement.validator, step="regenerate"
        )

    async def apply_feedback(self, model: Any, feedback: str) -> Any:
        """
        Apply free-form user feedback to an existing diagram.

        Raises:
            StepExhaustedError: No valid updated model was produced
        """
        prompt = build_prompt(
            get_feedback_prompt(),
            diagram_kind=self._refinement.diagram_kind,
            diagram_json=to_prompt_json(model.to_wire()),
            feedback=feedback,
        )
        return await self._analyzer.analyze(
            prompt, self._refinement.validator, step="apply_feedback"
        )

    async def refine(
        self,
        input_text: str,
        model: Any,
        passes: int,
        progress: ProgressReporter | None = None,
    ) -> RefinementResult:
        """
        Run up to ``passes`` evaluate → regenerate cycles on a draft.

        Args:
            input_text: Original description
            model: Draft diagram model
            passes: Maximum number of regenerations
            progress: Optional progress reporter

        Returns:
            RefinementResult: Final model plus the critiques collected
        """
        progress = progress or ProgressReporter()
        result = RefinementResult(model=model)

        while result.corrections_applied < passes:
            if self._refinement.evaluating_message:
                await progress.report(self._refinement.evaluating_message)
            report = await self.evaluate(input_text, result.model)
            if report is None:
                break
            result.evaluations.append(report)
            if report.is_accurate:
                break

            if self._refinement.regenerating_message:
                await progress.report(self._refinement.regenerating_message)
            result.model = await self.regenerate(input_text, result.model, report)
            result.corrections_applied += 1

        return result
