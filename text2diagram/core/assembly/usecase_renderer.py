"""
PlantUML renderer for use case diagrams.

Every actor and use case gets a stable alias derived from its name, so
names with spaces or punctuation render safely. Actors declared in several
packages are emitted once, in the first package that declares them.

Dependencies: text2diagram.models.usecase
System role: Use case model → PlantUML text
"""

import re

from text2diagram.models.usecase import UseCaseDiagram

INDENT = "    "


class _Aliases:
    """Deterministic, collision-free aliases in declaration order."""

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._by_name: dict[str, str] = {}
        self._used: set[str] = set()

    def get(self, name: str) -> str:
        key = name.casefold()
        if key not in self._by_name:
            base = re.sub(r"[^0-9A-Za-z]+", "_", name).strip("_") or "item"
            alias = f"{self._prefix}_{base}"
            suffix = 2
            while alias in self._used:
                alias = f"{self._prefix}_{base}_{suffix}"
                suffix += 1
            self._used.add(alias)
            self._by_name[key] = alias
        return self._by_name[key]

    def __contains__(self, name: str) -> bool:
        return name.casefold() in self._by_name


def _text(value: str) -> str:
    return value.replace('"', "'")


def render_use_case(diagram: UseCaseDiagram) -> str:
    """Render a use case diagram as PlantUML text."""
    actors = _Aliases("A")
    use_cases = _Aliases("UC")
    lines = ["@startuml", "left to right direction"]

    for package in diagram.packages:
        lines.append(f'package "{_text(package.name)}" {{')
        for actor in package.actors:
            if actor.name in actors:
                continue
            lines.append(f'{INDENT}actor "{_text(actor.name)}" as {actors.get(actor.name)}')
        for use_case in package.use_cases:
            if use_case.name in use_cases:
                continue
            lines.append(f'{INDENT}usecase "{_text(use_case.name)}" as {use_cases.get(use_case.name)}')
        lines.append("}")

    relations: list[str] = []
    for package in diagram.packages:
        for association in package.associations:
            relations.append(f"{actors.get(association.actor)} --> {use_cases.get(association.use_case)}")
        for include in package.includes:
            relations.append(
                f"{use_cases.get(include.base_use_case)} ..> "
                f"{use_cases.get(include.included_use_case)} : <<include>>"
            )
        for extend in package.extends:
            relations.append(
                f"{use_cases.get(extend.base_use_case)} <.. "
                f"{use_cases.get(extend.extended_use_case)} : <<extend>>"
            )

    lines.extend(dict.fromkeys(relations))
    lines.append("@enduml")
    return "\n".join(lines)
