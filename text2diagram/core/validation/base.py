"""
Shared helpers for structural validation of extracted JSON.

Field names are matched case-insensitively: prompts document PascalCase,
but ``participant1`` or ``PARTICIPANT1`` is accepted as well. Every failure
raises SchemaValidationError with the path of the offending value, e.g.
``Elements[6].AltBlock.Branches[1].Body``.

Dependencies: text2diagram.core.exceptions
System role: Building blocks for the per-diagram-type validators
"""

from enum import Enum
from typing import Any, TypeVar

from text2diagram.core.exceptions import SchemaValidationError

E = TypeVar("E", bound=Enum)

_MISSING = object()


def join_path(path: str, segment: str | int) -> str:
    """Append a field name or list index to a validation path."""
    if isinstance(segment, int):
        return f"{path}[{segment}]"
    return f"{path}.{segment}" if path else segment


def has_field(obj: dict, name: str) -> bool:
    return get_field(obj, name, _MISSING) is not _MISSING


def get_field(obj: dict, name: str, default: Any = None) -> Any:
    """
    Case-insensitive dictionary lookup.

    An exact match wins over a case-folded one.
    """
    if name in obj:
        return obj[name]
    folded = name.casefold()
    for key, value in obj.items():
        if isinstance(key, str) and key.casefold() == folded:
            return value
    return default


def require_object(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise SchemaValidationError(path, f"expected an object, got {_type_name(value)}")
    return value


def require_field(obj: dict, name: str, path: str) -> Any:
    value = get_field(obj, name, _MISSING)
    if value is _MISSING or value is None:
        raise SchemaValidationError(path, f"missing required field '{name}'")
    return value


def require_string(obj: dict, name: str, path: str, allow_empty: bool = False) -> str:
    """Required string field, stripped; empty strings fail unless allowed."""
    value = require_field(obj, name, path)
    if not isinstance(value, str):
        raise SchemaValidationError(
            join_path(path, name), f"expected a string, got {_type_name(value)}"
        )
    value = value.strip()
    if not value and not allow_empty:
        raise SchemaValidationError(join_path(path, name), "must not be empty")
    return value


def optional_string(obj: dict, name: str, path: str, default: str = "") -> str:
    value = get_field(obj, name)
    if value is None:
        return default
    if not isinstance(value, str):
        raise SchemaValidationError(
            join_path(path, name), f"expected a string, got {_type_name(value)}"
        )
    return value.strip()


def require_list(obj: dict, name: str, path: str, non_empty: bool = True) -> list:
    """Required array field; a missing optional array is treated as empty."""
    value = get_field(obj, name)
    if value is None:
        if non_empty:
            raise SchemaValidationError(path, f"missing or empty '{name}' array")
        return []
    if not isinstance(value, list):
        raise SchemaValidationError(
            join_path(path, name), f"expected an array, got {_type_name(value)}"
        )
    if non_empty and not value:
        raise SchemaValidationError(path, f"missing or empty '{name}' array")
    return value


def require_container(value: Any, name: str, non_empty: bool = True) -> list:
    """
    Top-level container array of a response.

    Accepts ``{"<name>": [...]}`` or the bare array itself.
    """
    if isinstance(value, list):
        if non_empty and not value:
            raise SchemaValidationError(name, f"missing or empty '{name}' array")
        return value
    if not isinstance(value, dict):
        raise SchemaValidationError(
            "", f"expected a JSON object with a '{name}' array, got {_type_name(value)}"
        )
    return require_list(value, name, "", non_empty=non_empty)


def require_enum(value: Any, enum_cls: type[E], path: str) -> E:
    """Match an enum by value, case-insensitively."""
    if isinstance(value, str):
        folded = value.strip().casefold()
        for member in enum_cls:
            if member.value.casefold() == folded:
                return member
    allowed = ", ".join(repr(member.value) for member in enum_cls)
    raise SchemaValidationError(path, f"invalid value {value!r}; expected one of {allowed}")


def resolve_name(name: str, known: list[str]) -> str | None:
    """Return the declared spelling of ``name`` from ``known``, ignoring case."""
    if name in known:
        return name
    folded = name.casefold()
    return next((candidate for candidate in known if candidate.casefold() == folded), None)


def ensure_unique(names: list[str], path: str, what: str) -> None:
    seen: set[str] = set()
    for index, name in enumerate(names):
        key = name.casefold()
        if key in seen:
            raise SchemaValidationError(join_path(path, index), f"duplicate {what} '{name}'")
        seen.add(key)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
