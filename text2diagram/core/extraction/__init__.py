"""JSON extraction from LLM output."""

from text2diagram.core.extraction.json_extractor import extract_json, find_json_candidate

__all__ = ["extract_json", "find_json_candidate"]
