"""Retrying analysis of LLM output."""

from text2diagram.core.analysis.retrying_analyzer import (
    AnalysisState,
    RetryingAnalyzer,
)

__all__ = ["AnalysisState", "RetryingAnalyzer"]
