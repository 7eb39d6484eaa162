"""Multi-step pipelines, steps and the evaluate → regenerate sub-loop."""

from text2diagram.core.pipeline.concurrency import gather_all_or_nothing
from text2diagram.core.pipeline.multi_step_pipeline import MultiStepPipeline, PipelineRun
from text2diagram.core.pipeline.refinement import (
    ModelRefiner,
    Refinement,
    RefinementResult,
    format_feedback,
)
from text2diagram.core.pipeline.steps import CallableStep, PipelineStep, PromptStep, StepContext

__all__ = [
    "CallableStep",
    "ModelRefiner",
    "MultiStepPipeline",
    "PipelineRun",
    "PipelineStep",
    "PromptStep",
    "Refinement",
    "RefinementResult",
    "StepContext",
    "format_feedback",
    "gather_all_or_nothing",
]
