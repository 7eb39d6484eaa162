"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from text2diagram.configs.llm import LLMSettings
from text2diagram.configs.pipeline import PipelineSettings
from text2diagram.configs.settings import Settings, get_settings

__all__ = ["LLMSettings", "PipelineSettings", "Settings", "get_settings"]
