"""
ER diagram validators.

One validator per pipeline step (entity names, entity properties,
relationships) plus a whole-model validator used for regenerated drafts.
Relationship endpoints must name entities from the already-extracted set.

Dependencies: text2diagram.core.validation.base, text2diagram.models.er
System role: Typed ER fragments from extracted JSON
"""

import re
from typing import Any

from text2diagram.core.exceptions import SchemaValidationError
from text2diagram.core.validation.base import (
    ensure_unique,
    get_field,
    join_path,
    optional_string,
    require_container,
    require_enum,
    require_field,
    require_list,
    require_object,
    require_string,
    resolve_name,
)
from text2diagram.models.er import (
    Cardinality,
    Entity,
    ERModel,
    Property,
    PropertyRole,
    Relationship,
)

_ENTITY_NAME = re.compile(r"^[A-Z][A-Z0-9_]*$")


def _entity_name(value: Any, path: str) -> str:
    if isinstance(value, dict):
        name = require_string(value, "Name", path)
    elif isinstance(value, str):
        name = value.strip()
    else:
        raise SchemaValidationError(path, "expected an entity name string")
    if not _ENTITY_NAME.match(name):
        raise SchemaValidationError(
            path, f"entity name '{name}' must be UPPERCASE letters, digits or underscores"
        )
    return name


def validate_entity_names(data: Any) -> list[str]:
    """Validate the entity identification step: unique UPPERCASE names."""
    items = require_container(data, "Entities")
    names = [
        _entity_name(item, join_path("Entities", index))
        for index, item in enumerate(items)
    ]
    ensure_unique(names, "Entities", "entity")
    return names


def _parse_property(raw: Any, path: str) -> Property:
    obj = require_object(raw, path)
    role = get_field(obj, "Role")
    return Property(
        type=require_string(obj, "Type", path),
        name=require_string(obj, "Name", path),
        role=PropertyRole.NONE if role in (None, "") else require_enum(
            role, PropertyRole, join_path(path, "Role")
        ),
        description=optional_string(obj, "Description", path),
    )


def _parse_entity(raw: Any, path: str) -> Entity:
    obj = require_object(raw, path)
    name = _entity_name(require_field(obj, "Name", path), join_path(path, "Name"))
    properties_path = join_path(path, "Properties")
    properties = [
        _parse_property(item, join_path(properties_path, index))
        for index, item in enumerate(require_list(obj, "Properties", path, non_empty=False))
    ]
    ensure_unique([p.name for p in properties], properties_path, "property")
    return Entity(name=name, properties=properties)


def validate_entity_properties(data: Any, known_entities: list[str]) -> list[Entity]:
    """
    Validate the property step against the identified entities.

    Entities the model skipped keep an empty property list; unknown entity
    names are rejected.

    Args:
        data: ``{"Entities": [{"Name", "Properties": [...]}]}``
        known_entities: Names from the entity identification step

    Returns:
        list[Entity]: Entities in identification order
    """
    items = require_container(data, "Entities")
    parsed: dict[str, Entity] = {}
    for index, item in enumerate(items):
        path = join_path("Entities", index)
        entity = _parse_entity(item, path)
        canonical = resolve_name(entity.name, known_entities)
        if canonical is None:
            raise SchemaValidationError(
                join_path(path, "Name"),
                f"unknown entity '{entity.name}'; expected one of {', '.join(known_entities)}",
            )
        if canonical in parsed:
            raise SchemaValidationError(join_path(path, "Name"), f"duplicate entity '{canonical}'")
        parsed[canonical] = entity.model_copy(update={"name": canonical})

    return [parsed.get(name, Entity(name=name)) for name in known_entities]


def _parse_relationship(raw: Any, path: str, known_entities: list[str]) -> Relationship:
    obj = require_object(raw, path)
    endpoints = []
    for field in ("SourceEntityName", "DestinationEntityName"):
        name = require_string(obj, field, path)
        canonical = resolve_name(name, known_entities)
        if canonical is None:
            raise SchemaValidationError(
                join_path(path, field),
                f"unknown entity '{name}'; expected one of {', '.join(known_entities)}",
            )
        endpoints.append(canonical)

    return Relationship(
        source_entity=endpoints[0],
        destination_entity=endpoints[1],
        source_cardinality=require_enum(
            require_field(obj, "SourceRelationshipType", path),
            Cardinality,
            join_path(path, "SourceRelationshipType"),
        ),
        destination_cardinality=require_enum(
            require_field(obj, "DestinationRelationshipType", path),
            Cardinality,
            join_path(path, "DestinationRelationshipType"),
        ),
        description=optional_string(obj, "Description", path),
    )


def validate_relationships(data: Any, known_entities: list[str]) -> list[Relationship]:
    """Validate the relationship step; endpoints must be known entities."""
    items = require_container(data, "Relationships", non_empty=False)
    return [
        _parse_relationship(item, join_path("Relationships", index), known_entities)
        for index, item in enumerate(items)
    ]


def validate_er_model(data: Any) -> ERModel:
    """
    Validate a complete ER model (used for regenerated drafts).

    Args:
        data: ``{"Entities": [...], "Relationships": [...]}``

    Returns:
        ERModel: Typed model with referential integrity checked
    """
    obj = require_object(data, "")
    entities = [
        _parse_entity(item, join_path("Entities", index))
        for index, item in enumerate(require_list(obj, "Entities", ""))
    ]
    names = [entity.name for entity in entities]
    ensure_unique(names, "Entities", "entity")
    relationships = [
        _parse_relationship(item, join_path("Relationships", index), names)
        for index, item in enumerate(require_list(obj, "Relationships", "", non_empty=False))
    ]
    return ERModel(entities=entities, relationships=relationships)
