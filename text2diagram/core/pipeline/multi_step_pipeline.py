"""
Multi-step pipeline built on LangGraph.

Compiles ordered steps into a stateful graph:

    step_1 → step_2 → ... → assemble → evaluate ⇄ regenerate → END

Each step's validated fragment is stored under its name and is visible to
every later step. A step that exhausts its retries fails the whole run;
no partial model is ever returned. The evaluate/regenerate cycle is
bounded by ``correction_passes``.

Dependencies: langgraph, text2diagram.core.analysis, text2diagram.core.pipeline
System role: Orchestrates dependent LLM calls for multi-step diagram types
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypedDict

from langgraph.graph import END, StateGraph
from pydantic import BaseModel, Field

from text2diagram.core.analysis.retrying_analyzer import RetryingAnalyzer
from text2diagram.core.exceptions import AnalysisFailedError, PipelineError
from text2diagram.core.pipeline.refinement import ModelRefiner, Refinement
from text2diagram.core.pipeline.steps import PipelineStep, StepContext
from text2diagram.models.evaluation import EvaluationReport
from text2diagram.observability.progress import ProgressReporter

logger = logging.getLogger(__name__)

Assembler = Callable[[Mapping[str, Any]], Any]

ASSEMBLE_NODE = "assemble"
EVALUATE_NODE = "evaluate"
REGENERATE_NODE = "regenerate"


class PipelineState(TypedDict, total=False):
    """LangGraph state for one pipeline run."""

    input_text: str
    outputs: dict[str, Any]
    draft: Any
    evaluations: list[EvaluationReport]
    corrections: int
    accepted: bool


class PipelineRun(BaseModel):
    """Result of a successful pipeline run."""

    model: Any
    outputs: dict[str, Any] = Field(default_factory=dict)
    evaluations: list[EvaluationReport] = Field(default_factory=list)
    corrections_applied: int = 0


def _node_name(step: PipelineStep) -> str:
    return f"step_{step.name}"


class MultiStepPipeline:
    """
    Runs dependent analysis steps in declared order.

    Steps are never retried against each other; retries happen inside a
    step through the retrying analyzer.
    """

    def __init__(
        self,
        analyzer: RetryingAnalyzer,
        *,
        correction_passes: int = 1,
        progress: ProgressReporter | None = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            analyzer: Retrying analyzer shared by all steps
            correction_passes: Maximum regenerations after evaluation (0 disables)
            progress: Progress reporter for stage messages
        """
        if correction_passes < 0:
            raise ValueError("correction_passes must not be negative")
        self._analyzer = analyzer
        self._correction_passes = correction_passes
        self._progress = progress or ProgressReporter()

    def build_graph(
        self,
        steps: Sequence[PipelineStep],
        assemble: Assembler,
        refinement: Refinement | None = None,
    ):
        """
        Compile the steps into a LangGraph graph.

        Args:
            steps: Ordered steps
            assemble: Builds the draft model from all fragments
            refinement: Optional evaluate/regenerate description

        Returns:
            CompiledGraph: Runnable graph
        """
        if not steps:
            raise ValueError("pipeline needs at least one step")
        names = [step.name for step in steps]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate step names: {names}")

        logger.debug(f"{__name__}:build_graph - steps={names}")
        graph = StateGraph(PipelineState)

        for step in steps:
            graph.add_node(_node_name(step), self._step_node(step))
        graph.add_node(ASSEMBLE_NODE, self._assemble_node(assemble))

        graph.set_entry_point(_node_name(steps[0]))
        for current, following in zip(steps, steps[1:]):
            graph.add_edge(_node_name(current), _node_name(following))
        graph.add_edge(_node_name(steps[-1]), ASSEMBLE_NODE)

        if refinement is not None and self._correction_passes > 0:
            refiner = ModelRefiner(self._analyzer, refinement)
            graph.add_node(EVALUATE_NODE, self._evaluate_node(refiner, refinement))
            graph.add_node(REGENERATE_NODE, self._regenerate_node(refiner, refinement))
            graph.add_edge(ASSEMBLE_NODE, EVALUATE_NODE)
            graph.add_conditional_edges(
                EVALUATE_NODE,
                self._route_after_evaluation,
                {REGENERATE_NODE: REGENERATE_NODE, END: END},
            )
            graph.add_conditional_edges(
                REGENERATE_NODE,
                self._route_after_regeneration,
                {EVALUATE_NODE: EVALUATE_NODE, END: END},
            )
        else:
            graph.add_edge(ASSEMBLE_NODE, END)

        return graph.compile()

    async def run(
        self,
        input_text: str,
        steps: Sequence[PipelineStep],
        assemble: Assembler,
        refinement: Refinement | None = None,
    ) -> PipelineRun:
        """
        Execute the pipeline.

        Args:
            input_text: Original description
            steps: Ordered steps
            assemble: Builds the draft model from all fragments
            refinement: Optional evaluate/regenerate description

        Returns:
            PipelineRun: Final model, fragments and critiques

        Raises:
            PipelineError: A step exhausted its retries
        """
        logger.info(f"{__name__}:run - START steps={len(steps)}, input_len={len(input_text)}")
        graph = self.build_graph(steps, assemble, refinement)

        # Every step, assembly and each evaluate/regenerate pair is one superstep.
        recursion_limit = len(steps) + 2 * self._correction_passes + 10
        final_state = await graph.ainvoke(
            {
                "input_text": input_text,
                "outputs": {},
                "draft": None,
                "evaluations": [],
                "corrections": 0,
                "accepted": False,
            },
            config={"recursion_limit": recursion_limit},
        )

        run = PipelineRun(
            model=final_state["draft"],
            outputs=final_state.get("outputs", {}),
            evaluations=final_state.get("evaluations", []),
            corrections_applied=final_state.get("corrections", 0),
        )
        logger.info(
            f"{__name__}:run - COMPLETE corrections={run.corrections_applied}, "
            f"evaluations={len(run.evaluations)}"
        )
        return run

    def _step_node(self, step: PipelineStep):
        async def run_step(state: PipelineState) -> dict:
            if step.progress_message:
                await self._progress.report(step.progress_message)
            context = StepContext(
                input_text=state["input_text"],
                outputs=state["outputs"],
                analyzer=self._analyzer,
                progress=self._progress,
            )
            try:
                fragment = await step.execute(context)
            except AnalysisFailedError as e:
                logger.error(f"{__name__}:run_step - step={step.name} failed: {e.message}")
                raise PipelineError(step.name, e) from e
            logger.debug(f"{__name__}:run_step - step={step.name} complete")
            return {"outputs": {**state["outputs"], step.name: fragment}}

        return run_step

    def _assemble_node(self, assemble: Assembler):
        async def run_assemble(state: PipelineState) -> dict:
            return {"draft": assemble(state["outputs"])}

        return run_assemble

    def _evaluate_node(self, refiner: ModelRefiner, refinement: Refinement):
        async def run_evaluate(state: PipelineState) -> dict:
            if refinement.evaluating_message:
                await self._progress.report(refinement.evaluating_message)
            report = await refiner.evaluate(state["input_text"], state["draft"])
            if report is None:
                return {"accepted": True}
            return {
                "evaluations": [*state["evaluations"], report],
                "accepted": report.is_accurate,
            }

        return run_evaluate

    def _regenerate_node(self, refiner: ModelRefiner, refinement: Refinement):
        async def run_regenerate(state: PipelineState) -> dict:
            if refinement.regenerating_message:
                await self._progress.report(refinement.regenerating_message)
            try:
                model = await refiner.regenerate(
                    state["input_text"], state["draft"], state["evaluations"][-1]
                )
            except AnalysisFailedError as e:
                raise PipelineError(REGENERATE_NODE, e) from e
            return {"draft": model, "corrections": state["corrections"] + 1}

        return run_regenerate

    def _route_after_evaluation(self, state: PipelineState) -> str:
        if state.get("accepted") or state.get("corrections", 0) >= self._correction_passes:
            return END
        return REGENERATE_NODE

    def _route_after_regeneration(self, state: PipelineState) -> str:
        if state.get("corrections", 0) < self._correction_passes:
            return EVALUATE_NODE
        return END
