"""
Unified application settings.

Combines the shared base fields (environment, log level) with the LLM
and pipeline sections. DiagramService falls back to get_settings() when
no Settings instance is injected.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from text2diagram.configs.base import BaseSettings
from text2diagram.configs.llm import LLMSettings
from text2diagram.configs.pipeline import PipelineSettings


class Settings(BaseSettings):
    """Root settings object handed to DiagramService."""

    llm: LLMSettings = LLMSettings()
    pipeline: PipelineSettings = PipelineSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Return the process-wide Settings, read from the environment once.

    Tests that change environment variables must call
    ``get_settings.cache_clear()`` to see them.
    """
    return Settings()
