"""
Exception hierarchy for text2diagram.

Provides layered exception structure for domain-specific errors.
Recoverable errors (extraction, schema validation, provider failures) are
consumed by the retrying analyzer; only exhaustion and defects reach callers.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class Text2DiagramError(Exception):
    """Base exception for all text2diagram errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(Text2DiagramError):
    """Raised when caller input is unusable (e.g. empty description)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid input error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ExtractionError(Text2DiagramError):
    """Base exception for failures to recover JSON from model output."""

    def __str__(self) -> str:
        return self.message


class EmptyExtractionError(ExtractionError):
    """Raised when no JSON-shaped substring exists in the model output."""

    def __init__(self, message: str = "No JSON object or array found in the response.") -> None:
        super().__init__(message)


class MalformedJsonError(ExtractionError):
    """Raised when the extracted candidate does not parse as JSON."""

    def __init__(self, message: str, candidate: str | None = None) -> None:
        """
        Initialize malformed JSON error.

        Args:
            message: Parser message
            candidate: Extracted text that failed to parse
        """
        details = {"candidate": candidate[:200]} if candidate else None
        super().__init__(f"Malformed JSON: {message}", details)


class SchemaValidationError(Text2DiagramError):
    """Raised when extracted JSON breaks the structural contract of a model.

    ``str()`` yields ``"{path}: {reason}"``; that exact text is injected into
    the next retry prompt.
    """

    def __init__(self, path: str, reason: str) -> None:
        """
        Initialize schema validation error.

        Args:
            path: Dotted/indexed location of the offending value
            reason: What is missing or invalid at that location
        """
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if path else reason)

    def __str__(self) -> str:
        return self.message


class UnrecognizedShapeError(SchemaValidationError):
    """Raised when a union element matches no variant, or more than one."""


class LLMInvocationError(Text2DiagramError):
    """Raised when the LLM provider call itself fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class AnalysisFailedError(Text2DiagramError):
    """Base exception for analyses that could not produce a valid model."""


class StepExhaustedError(AnalysisFailedError):
    """Raised when a single step used all of its attempts without success."""

    def __init__(self, step: str, attempts: int, last_error: str | None) -> None:
        """
        Initialize step exhausted error.

        Args:
            step: Name of the analyzed step
            attempts: Number of attempts made
            last_error: Last recorded extraction/validation message
        """
        self.step = step
        self.attempts = attempts
        self.last_error = last_error
        message = f"Diagram generation failed after {attempts} attempts"
        if last_error:
            message = f"{message}: {last_error}"
        super().__init__(message, {"step": step})


class PipelineError(Text2DiagramError):
    """Raised when a pipeline step fails; wraps the step's terminal error."""

    def __init__(self, step: str, cause: AnalysisFailedError) -> None:
        """
        Initialize pipeline error.

        Args:
            step: Name of the failing pipeline step
            cause: The step's terminal error
        """
        self.step = step
        self.cause = cause
        super().__init__(f"Step '{step}' failed. {cause.message}", {"step": step})


class AssemblyError(Text2DiagramError):
    """Raised when a validated model cannot be rendered (programming defect)."""


class UnsupportedDiagramTypeError(Text2DiagramError):
    """Raised for diagram types that are declared but not wired end-to-end."""

    def __init__(self, diagram_type: str) -> None:
        super().__init__(
            f"Diagram type not supported: {diagram_type}",
            {"diagram_type": diagram_type},
        )
