"""
Pipeline step definitions.

A step produces one named fragment. ``PromptStep`` is the common case: a
prompt built from the input and earlier fragments, analyzed with the
retrying analyzer. ``CallableStep`` covers composite steps that fan out
several analyses themselves.

Dependencies: text2diagram.core.analysis, text2diagram.observability
System role: Units of work executed in order by MultiStepPipeline
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from text2diagram.core.analysis.retrying_analyzer import RetryingAnalyzer
from text2diagram.models.prompt import PromptContext
from text2diagram.observability.progress import ProgressReporter

PromptBuilder = Callable[[str, Mapping[str, Any]], PromptContext | str]
FragmentValidator = Callable[[Any, Mapping[str, Any]], Any]


class StepContext:
    """What a step can see: the input text and fragments of earlier steps."""

    def __init__(
        self,
        input_text: str,
        outputs: Mapping[str, Any],
        analyzer: RetryingAnalyzer,
        progress: ProgressReporter,
    ) -> None:
        self.input_text = input_text
        self.outputs = outputs
        self.analyzer = analyzer
        self.progress = progress


class PipelineStep:
    """Base class for ordered pipeline steps."""

    def __init__(self, name: str, progress_message: str | None = None) -> None:
        if not name:
            raise ValueError("step name must not be empty")
        self.name = name
        self.progress_message = progress_message

    async def execute(self, context: StepContext) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class PromptStep(PipelineStep):
    """Single LLM analysis with extract → validate → retry discipline."""

    def __init__(
        self,
        name: str,
        prompt_builder: PromptBuilder,
        validator: FragmentValidator,
        progress_message: str | None = None,
        max_attempts: int | None = None,
    ) -> None:
        """
        Initialize prompt step.

        Args:
            name: Output name of the fragment
            prompt_builder: (input_text, prior_outputs) -> prompt
            validator: (json, prior_outputs) -> fragment
            progress_message: Stage message reported before the step runs
            max_attempts: Override of the analyzer's attempt bound
        """
        super().__init__(name, progress_message)
        self.prompt_builder = prompt_builder
        self.validator = validator
        self.max_attempts = max_attempts

    async def execute(self, context: StepContext) -> Any:
        prompt = self.prompt_builder(context.input_text, context.outputs)
        return await context.analyzer.analyze(
            prompt,
            lambda data: self.validator(data, context.outputs),
            step=self.name,
            max_attempts=self.max_attempts,
        )


class CallableStep(PipelineStep):
    """Step backed by an arbitrary coroutine function."""

    def __init__(
        self,
        name: str,
        func: Callable[[StepContext], Awaitable[Any]],
        progress_message: str | None = None,
    ) -> None:
        super().__init__(name, progress_message)
        self.func = func

    async def execute(self, context: StepContext) -> Any:
        return await self.func(context)
