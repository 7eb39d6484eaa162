"""
Retrying analyzer.

Runs the prompt → LLM → extract → validate loop for a single step. A failed
extraction or validation is fed back into the next attempt's prompt, so the
model can correct itself; attempts are strictly sequential for that reason.
After ``max_attempts`` failures the step is exhausted and a terminal error
carrying the last diagnostic is raised.

Dependencies: tenacity, text2diagram.boundary.llm, text2diagram.core.extraction
System role: Orchestration loop underneath every diagram generation step
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from text2diagram.boundary.llm.client import LLMClient
from text2diagram.core.exceptions import (
    ExtractionError,
    LLMInvocationError,
    SchemaValidationError,
    StepExhaustedError,
)
from text2diagram.core.extraction.json_extractor import extract_json
from text2diagram.models.prompt import PromptContext
from text2diagram.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

T = TypeVar("T")

Validator = Callable[[Any], T]

DEFAULT_MAX_ATTEMPTS = 3


class AnalysisState(str, Enum):
    """States of a single analysis attempt."""

    PROMPTING = "prompting"
    EXTRACTING = "extracting"
    VALIDATING = "validating"
    SUCCESS = "success"
    RETRY = "retry"
    EXHAUSTED = "exhausted"


class AttemptFailed(Exception):
    """One attempt failed in a way a later attempt may fix."""

    def __init__(self, reason: str, state: AnalysisState, feed_back: bool = True) -> None:
        super().__init__(reason)
        self.reason = reason
        self.state = state
        self.feed_back = feed_back


class RetryingAnalyzer:
    """
    Bounded retry loop around one LLM-backed analysis step.

    Recoverable failures (empty or malformed JSON, schema violations,
    provider errors) never escape; only exhaustion does.
    """

    def __init__(self, llm: LLMClient, max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> None:
        """
        Initialize analyzer.

        Args:
            llm: LLM boundary client
            max_attempts: Default attempt bound per analysis
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._llm = llm
        self.max_attempts = max_attempts

    @property
    def llm(self) -> LLMClient:
        return self._llm

    async def analyze(
        self,
        prompt: PromptContext | str,
        validator: Validator[T],
        *,
        step: str = "analysis",
        max_attempts: int | None = None,
    ) -> T:
        """
        Run the analysis until the validator accepts a response.

        Args:
            prompt: Prompt context (or plain prompt string) for attempt 1
            validator: Turns extracted JSON into a typed value, raising
                SchemaValidationError on contract violations
            step: Step name for logs and errors
            max_attempts: Override of the analyzer's default bound

        Returns:
            T: Validated value from the first successful attempt

        Raises:
            StepExhaustedError: Every attempt failed
            ValueError: The attempt override is below 1
        """
        limit = self.max_attempts if max_attempts is None else max_attempts
        if limit < 1:
            raise ValueError("max_attempts must be at least 1")
        context = prompt if isinstance(prompt, PromptContext) else PromptContext(base_prompt=prompt)

        def log_retry(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception()
            logger.warning(
                f"{__name__}:analyze - step={step} attempt {retry_state.attempt_number}/{limit} "
                f"failed while {error.state.value}, state={AnalysisState.RETRY.value}: "
                f"{safe_log_value(error.reason)}"
            )

        logger.info(f"{__name__}:analyze - START step={step}, max_attempts={limit}")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(limit),
            retry=retry_if_exception_type(AttemptFailed),
            before_sleep=log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    number = attempt.retry_state.attempt_number
                    try:
                        result = await self._attempt(context, validator, step, number)
                    except AttemptFailed as e:
                        if e.feed_back:
                            context = context.with_error(e.reason)
                        raise
                    logger.info(f"{__name__}:analyze - COMPLETE step={step} attempts={number}")
                    return result
        except AttemptFailed as e:
            logger.error(
                f"{__name__}:analyze - step={step} {AnalysisState.EXHAUSTED.value} "
                f"after {limit} attempts: {safe_log_value(e.reason)}"
            )
            raise StepExhaustedError(step, limit, e.reason) from e

    async def _attempt(
        self,
        context: PromptContext,
        validator: Validator[T],
        step: str,
        number: int,
    ) -> T:
        state = AnalysisState.PROMPTING
        raw_text = ""
        extracted: Any = None

        while state != AnalysisState.SUCCESS:
            if state == AnalysisState.PROMPTING:
                try:
                    response = await self._llm.generate(context.render())
                except asyncio.CancelledError:
                    logger.warning(f"{__name__}:analyze - step={step} cancelled at attempt {number}")
                    raise
                except LLMInvocationError as e:
                    # Provider failures are not the model's fault; keep the prompt as is.
                    raise AttemptFailed(e.message, state, feed_back=False) from e
                except Exception as e:
                    raise AttemptFailed(
                        f"LLM call failed: {type(e).__name__}: {e}", state, feed_back=False
                    ) from e
                raw_text = response.content
                logger.debug(
                    f"{__name__}:analyze - step={step} attempt={number} "
                    f"response={safe_log_value(raw_text, 300)}"
                )
                state = AnalysisState.EXTRACTING

            elif state == AnalysisState.EXTRACTING:
                try:
                    extracted = extract_json(raw_text)
                except ExtractionError as e:
                    raise AttemptFailed(str(e), state) from e
                state = AnalysisState.VALIDATING

            elif state == AnalysisState.VALIDATING:
                try:
                    result = validator(extracted)
                except SchemaValidationError as e:
                    raise AttemptFailed(str(e), state) from e
                state = AnalysisState.SUCCESS

        return result
