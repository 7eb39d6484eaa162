"""
Evaluation report validator.

Dependencies: text2diagram.core.validation.base, text2diagram.models.evaluation
System role: Typed self-critique from extracted JSON
"""

import json
from typing import Any

from text2diagram.core.exceptions import SchemaValidationError
from text2diagram.core.validation.base import (
    get_field,
    join_path,
    optional_string,
    require_field,
    require_object,
)
from text2diagram.models.evaluation import EvaluationReport


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise SchemaValidationError("IsAccurate", f"expected a boolean, got {value!r}")


def _findings(obj: dict, name: str) -> list[str]:
    value = get_field(obj, name)
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, list):
        raise SchemaValidationError(name, "expected an array")
    findings = []
    for index, item in enumerate(value):
        if isinstance(item, str):
            findings.append(item)
        elif isinstance(item, (dict, list)):
            findings.append(json.dumps(item, ensure_ascii=False))
        elif item is not None:
            findings.append(str(item))
        else:
            raise SchemaValidationError(join_path(name, index), "null finding")
    return findings


def validate_evaluation(data: Any) -> EvaluationReport:
    """
    Validate an evaluation response.

    Args:
        data: ``{"IsAccurate", "MissingElements", "IncorrectElements",
            "Suggestions", "Commentary"}``

    Returns:
        EvaluationReport: Parsed critique
    """
    obj = require_object(data, "")
    return EvaluationReport(
        is_accurate=_flag(require_field(obj, "IsAccurate", "")),
        missing_elements=_findings(obj, "MissingElements"),
        incorrect_elements=_findings(obj, "IncorrectElements"),
        suggestions=_findings(obj, "Suggestions"),
        commentary=optional_string(obj, "Commentary", ""),
    )
