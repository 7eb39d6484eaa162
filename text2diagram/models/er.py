"""
Entity relationship models.

Dependencies: pydantic
System role: Typed intermediate representation for ER diagrams
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Cardinality(str, Enum):
    """Relationship multiplicity on one side of a relationship."""

    ZERO_OR_ONE = "ZeroOrOne"
    EXACTLY_ONE = "ExactlyOne"
    ZERO_OR_MORE = "ZeroOrMore"
    ONE_OR_MORE = "OneOrMore"


class PropertyRole(str, Enum):
    """Key role of an entity property."""

    PK = "PK"
    FK = "FK"
    NONE = ""


class Property(BaseModel):
    """Attribute of an entity."""

    type: str = Field(description="Attribute type (string, int, float, bool, string[])")
    name: str = Field(description="Attribute name")
    role: PropertyRole = Field(default=PropertyRole.NONE, description="PK, FK or empty")
    description: str = Field(default="", description="Short attribute description")

    def to_wire(self) -> dict[str, Any]:
        return {
            "Type": self.type,
            "Name": self.name,
            "Role": self.role.value,
            "Description": self.description,
        }


class Entity(BaseModel):
    """Named entity with its attributes."""

    name: str = Field(description="UPPERCASE entity name")
    properties: list[Property] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {"Name": self.name, "Properties": [p.to_wire() for p in self.properties]}


class Relationship(BaseModel):
    """Relationship between two entities with cardinality on each side."""

    source_entity: str
    destination_entity: str
    source_cardinality: Cardinality
    destination_cardinality: Cardinality
    description: str = ""

    def to_wire(self) -> dict[str, Any]:
        return {
            "SourceEntityName": self.source_entity,
            "DestinationEntityName": self.destination_entity,
            "SourceRelationshipType": self.source_cardinality.value,
            "DestinationRelationshipType": self.destination_cardinality.value,
            "Description": self.description,
        }


class ERModel(BaseModel):
    """Validated ER diagram model."""

    entities: list[Entity]
    relationships: list[Relationship] = Field(default_factory=list)

    def entity_names(self) -> list[str]:
        return [entity.name for entity in self.entities]

    def to_wire(self) -> dict[str, Any]:
        return {
            "Entities": [e.to_wire() for e in self.entities],
            "Relationships": [r.to_wire() for r in self.relationships],
        }
