"""
Diagram generator base class.

A generator knows the steps, prompts, validators and assembly for one
diagram type. Multi-step types describe ordered pipeline steps; single-shot
types override ``generate`` and call the retrying analyzer directly.

Dependencies: text2diagram.core.pipeline, text2diagram.configs
System role: Shared plumbing for per-diagram-type generators
"""

from collections.abc import Mapping
from typing import Any

from text2diagram.configs.pipeline import PipelineSettings
from text2diagram.core.analysis.retrying_analyzer import RetryingAnalyzer
from text2diagram.core.pipeline.multi_step_pipeline import MultiStepPipeline, PipelineRun
from text2diagram.core.pipeline.refinement import Refinement
from text2diagram.core.pipeline.steps import PipelineStep
from text2diagram.models.diagram import DiagramType
from text2diagram.observability.progress import ProgressReporter


class DiagramGenerator:
    """Base class for diagram generators."""

    diagram_type: DiagramType
    diagram_kind: str = "diagram"
    evaluating_message: str | None = None
    regenerating_message: str | None = None
    completed_message: str | None = None

    def __init__(
        self,
        analyzer: RetryingAnalyzer,
        settings: PipelineSettings | None = None,
    ) -> None:
        """
        Initialize generator.

        Args:
            analyzer: Retrying analyzer bound to the LLM client
            settings: Pipeline settings (evaluation, correction passes)
        """
        self._analyzer = analyzer
        self._settings = settings or PipelineSettings()

    @property
    def correction_passes(self) -> int:
        if not self._settings.enable_evaluation:
            return 0
        return self._settings.correction_passes

    def validate_model(self, data: Any) -> Any:
        """Validate a complete wire-format model of this diagram type."""
        raise NotImplementedError

    def refinement(self) -> Refinement:
        return Refinement(
            diagram_kind=self.diagram_kind,
            validator=self.validate_model,
            evaluating_message=self.evaluating_message,
            regenerating_message=self.regenerating_message,
        )

    def steps(self) -> list[PipelineStep]:
        raise NotImplementedError

    def assemble(self, outputs: Mapping[str, Any]) -> Any:
        raise NotImplementedError

    async def generate(self, input_text: str, progress: ProgressReporter) -> PipelineRun:
        """
        Run the multi-step pipeline for this diagram type.

        Args:
            input_text: Natural-language description
            progress: Progress reporter

        Returns:
            PipelineRun: Final model, fragments and critiques

        Raises:
            PipelineError: A step exhausted its retries
        """
        pipeline = MultiStepPipeline(
            self._analyzer,
            correction_passes=self.correction_passes,
            progress=progress,
        )
        return await pipeline.run(input_text, self.steps(), self.assemble, self.refinement())
