"""
Diagram service orchestrator.

Entry point for callers: validates the request, picks the generator for
the diagram type, runs it and renders the final model to markup. Also
applies user feedback to stored diagrams and re-renders stored JSON.

Dependencies: text2diagram.application.generators, text2diagram.core,
    text2diagram.boundary.llm, text2diagram.configs
System role: Diagram generation orchestration
"""

import json
import logging
from typing import Any

from text2diagram.application.generators import (
    DiagramGenerator,
    ERDiagramGenerator,
    FlowchartGenerator,
    SequenceDiagramGenerator,
    UseCaseDiagramGenerator,
)
from text2diagram.boundary.llm.client import LLMClient
from text2diagram.boundary.llm.factory import create_llm_client
from text2diagram.configs.settings import Settings, get_settings
from text2diagram.core.analysis.retrying_analyzer import RetryingAnalyzer
from text2diagram.core.assembly.renderer import render_diagram
from text2diagram.core.exceptions import (
    AnalysisFailedError,
    InvalidInputError,
    PipelineError,
    SchemaValidationError,
    Text2DiagramError,
    UnsupportedDiagramTypeError,
)
from text2diagram.core.pipeline.refinement import ModelRefiner
from text2diagram.models.diagram import DiagramRequest, DiagramResult, DiagramType
from text2diagram.observability.log_utils import log_exception_with_context, log_with_context
from text2diagram.observability.progress import ProgressReporter, ProgressSink

logger = logging.getLogger(__name__)

GENERATORS: dict[DiagramType, type[DiagramGenerator]] = {
    DiagramType.FLOWCHART: FlowchartGenerator,
    DiagramType.SEQUENCE: SequenceDiagramGenerator,
    DiagramType.ER: ERDiagramGenerator,
    DiagramType.USE_CASE: UseCaseDiagramGenerator,
}


class DiagramService:
    """Diagram service orchestrator."""

    def __init__(
        self,
        llm: LLMClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize diagram service.

        Args:
            llm: LLM boundary client (built from settings when omitted)
            settings: Application settings (cached singleton when omitted)
        """
        self._settings = settings or get_settings()
        self._llm = llm or create_llm_client(self._settings.llm)
        self._analyzer = RetryingAnalyzer(
            self._llm, max_attempts=self._settings.pipeline.max_attempts
        )

    def _generator(self, diagram_type: DiagramType | str) -> DiagramGenerator:
        try:
            resolved = DiagramType(diagram_type)
        except ValueError as e:
            raise UnsupportedDiagramTypeError(str(diagram_type)) from e
        generator_cls = GENERATORS.get(resolved)
        if generator_cls is None:
            raise UnsupportedDiagramTypeError(resolved.value)
        return generator_cls(self._analyzer, self._settings.pipeline)

    def _reporter(self, progress: ProgressSink | None) -> ProgressReporter:
        return ProgressReporter(progress, enabled=self._settings.pipeline.progress_messages)

    def _result(self, generator: DiagramGenerator, model: Any, **extra: Any) -> DiagramResult:
        return DiagramResult(
            diagram_type=generator.diagram_type,
            markup=render_diagram(model, self._settings.pipeline.subflow_inline_threshold),
            model=model,
            diagram_json=model.to_wire(),
            **extra,
        )

    async def generate(
        self,
        request: DiagramRequest,
        progress: ProgressSink | None = None,
    ) -> DiagramResult:
        """
        Generate a diagram from a natural-language description.

        Args:
            request: Diagram type and input text
            progress: Optional sink receiving stage messages

        Returns:
            DiagramResult: Markup, model and critiques

        Raises:
            InvalidInputError: Empty description
            UnsupportedDiagramTypeError: Diagram type without a generator
            PipelineError: A pipeline step exhausted its retries
            StepExhaustedError: The single sequence analysis exhausted its retries
        """
        if not request.input_text or not request.input_text.strip():
            raise InvalidInputError("Input text must not be empty", field="input_text")

        generator = self._generator(request.diagram_type)
        reporter = self._reporter(progress)
        logger.info(
            f"{__name__}:generate - START type={generator.diagram_type.value}, "
            f"input_len={len(request.input_text)}"
        )

        try:
            run = await generator.generate(request.input_text, reporter)
        except Text2DiagramError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:generate - Generation failed",
                e,
                diagram_type=generator.diagram_type.value,
                step=e.details.get("step"),
            )
            raise
        result = self._result(
            generator,
            run.model,
            evaluations=run.evaluations,
            corrections_applied=run.corrections_applied,
        )

        if generator.completed_message:
            await reporter.report(generator.completed_message)
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:generate - COMPLETE",
            diagram_type=generator.diagram_type.value,
            markup_len=len(result.markup),
            corrections=result.corrections_applied,
        )
        return result

    async def regenerate(
        self,
        diagram_type: DiagramType | str,
        diagram_json: dict | str,
        feedback: str,
        progress: ProgressSink | None = None,
    ) -> DiagramResult:
        """
        Apply user feedback to an existing diagram.

        Args:
            diagram_type: Type of the stored diagram
            diagram_json: Wire-format JSON of the stored diagram
            feedback: Free-form change request
            progress: Optional sink receiving stage messages

        Returns:
            DiagramResult: Updated diagram

        Raises:
            InvalidInputError: Empty feedback or invalid diagram JSON
            PipelineError: No valid updated model was produced
        """
        if not feedback or not feedback.strip():
            raise InvalidInputError("Feedback must not be empty", field="feedback")

        generator = self._generator(diagram_type)
        model = self._load(generator, diagram_json)
        reporter = self._reporter(progress)
        if generator.regenerating_message:
            await reporter.report(generator.regenerating_message)

        logger.info(f"{__name__}:regenerate - START type={generator.diagram_type.value}")
        refiner = ModelRefiner(self._analyzer, generator.refinement())
        try:
            updated = await refiner.apply_feedback(model, feedback)
        except AnalysisFailedError as e:
            raise PipelineError("apply_feedback", e) from e

        result = self._result(generator, updated)
        if generator.completed_message:
            await reporter.report(generator.completed_message)
        return result

    def render(self, diagram_type: DiagramType | str, diagram_json: dict | str) -> str:
        """
        Re-render stored diagram JSON without calling the LLM.

        Raises:
            InvalidInputError: The JSON does not describe a valid diagram
        """
        generator = self._generator(diagram_type)
        model = self._load(generator, diagram_json)
        return render_diagram(model, self._settings.pipeline.subflow_inline_threshold)

    @staticmethod
    def _load(generator: DiagramGenerator, diagram_json: dict | str) -> Any:
        data = diagram_json
        if isinstance(diagram_json, str):
            try:
                data = json.loads(diagram_json)
            except json.JSONDecodeError as e:
                raise InvalidInputError(
                    f"Diagram JSON is not valid JSON: {e.msg}", field="diagram_json"
                ) from e
        try:
            return generator.validate_model(data)
        except SchemaValidationError as e:
            raise InvalidInputError(
                f"Diagram JSON is not a valid {generator.diagram_kind} diagram: {e}",
                field="diagram_json",
            ) from e
