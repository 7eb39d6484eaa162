"""
Use case diagram models.

Dependencies: pydantic
System role: Typed intermediate representation for use case diagrams
"""

from typing import Any

from pydantic import BaseModel, Field


class Actor(BaseModel):
    name: str


class UseCase(BaseModel):
    name: str


class Association(BaseModel):
    actor: str
    use_case: str

    def to_wire(self) -> dict[str, Any]:
        return {"Actor": self.actor, "UseCase": self.use_case}


class Include(BaseModel):
    base_use_case: str
    included_use_case: str

    def to_wire(self) -> dict[str, Any]:
        return {"BaseUseCase": self.base_use_case, "IncludedUseCase": self.included_use_case}


class Extend(BaseModel):
    base_use_case: str
    extended_use_case: str

    def to_wire(self) -> dict[str, Any]:
        return {"BaseUseCase": self.base_use_case, "ExtendedUseCase": self.extended_use_case}


class UseCaseRelationships(BaseModel):
    """Include/extend relationships extracted in one step."""

    includes: list[Include] = Field(default_factory=list)
    extends: list[Extend] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "Includes": [i.to_wire() for i in self.includes],
            "Extends": [e.to_wire() for e in self.extends],
        }


class Package(BaseModel):
    """Grouping of actors, use cases and the relations between them."""

    name: str
    actors: list[Actor] = Field(default_factory=list)
    use_cases: list[UseCase] = Field(default_factory=list)
    associations: list[Association] = Field(default_factory=list)
    includes: list[Include] = Field(default_factory=list)
    extends: list[Extend] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "Name": self.name,
            "Actors": [{"Name": a.name} for a in self.actors],
            "UseCases": [{"Name": u.name} for u in self.use_cases],
            "Associations": [a.to_wire() for a in self.associations],
            "Includes": [i.to_wire() for i in self.includes],
            "Extends": [e.to_wire() for e in self.extends],
        }


class UseCaseDiagram(BaseModel):
    """Validated use case diagram model."""

    packages: list[Package]

    def to_wire(self) -> dict[str, Any]:
        return {"Packages": [p.to_wire() for p in self.packages]}
