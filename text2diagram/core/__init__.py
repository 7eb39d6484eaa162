"""
Core orchestration layer.

Extraction, validation, retrying analysis, multi-step pipelines, prompts
and deterministic assembly of diagram markup.
"""
