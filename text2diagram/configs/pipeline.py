"""
Pipeline configuration settings.

Retry bounds, correction passes and rendering knobs for diagram generation.

Dependencies: pydantic_settings
System role: Orchestration tuning for analyzers and pipelines
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class PipelineSettings(BaseSettings):
    """Configuration for the retrying analyzer and multi-step pipeline."""

    max_attempts: int = Field(
        default=3,
        ge=1,
        description="LLM attempts per analyzed step before giving up",
    )
    correction_passes: int = Field(
        default=1,
        ge=0,
        description="Maximum evaluate/regenerate cycles after the draft is assembled",
    )
    enable_evaluation: bool = Field(
        default=True,
        description="Ask the model to critique the assembled draft",
    )
    subflow_inline_threshold: int = Field(
        default=3,
        ge=0,
        description="Subflows with at most this many nodes are rendered inline",
    )
    progress_messages: bool = Field(
        default=True,
        description="Emit stage messages to the progress sink",
    )

    class Config:
        """Pydantic config for environment variable loading."""

        env_prefix = "PIPELINE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
