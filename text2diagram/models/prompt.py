"""
Prompt context model.

Dependencies: pydantic
System role: Immutable per-attempt prompt state carried by the retrying analyzer
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PRIOR_ERROR_HEADER = "### PREVIOUS ATTEMPT FAILED"


class PromptContext(BaseModel):
    """
    Prompt for one analysis attempt.

    Never mutated: each retry derives a new context carrying the previous
    attempt's error message.
    """

    model_config = ConfigDict(frozen=True)

    base_prompt: str
    prior_error: str | None = None
    step_inputs: dict[str, Any] = Field(default_factory=dict)

    def with_error(self, error: str) -> "PromptContext":
        return self.model_copy(update={"prior_error": error})

    def render(self) -> str:
        """Build the final prompt string sent to the model."""
        if not self.prior_error:
            return self.base_prompt
        return (
            f"{self.base_prompt}\n\n"
            f"{PRIOR_ERROR_HEADER}\n"
            f"Your previous response was rejected with this error:\n"
            f"{self.prior_error}\n"
            f"Fix the problem and return the complete JSON again, following the "
            f"required format exactly."
        )
