"""Prompt templates and prompt-building helpers."""

from text2diagram.core.prompts.template import build_prompt, to_prompt_json

__all__ = ["build_prompt", "to_prompt_json"]
