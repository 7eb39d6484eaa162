"""
Use case diagram validators.

Names are matched case-insensitively and normalized to their declared
spelling. Visibility rule for packaged diagrams: an association's use case
must be declared in the association's own package; actors and use cases
referenced otherwise may be declared in any package of the diagram.

Dependencies: text2diagram.core.validation.base, text2diagram.models.usecase
System role: Typed use case fragments from extracted JSON
"""

from typing import Any

from text2diagram.core.exceptions import SchemaValidationError
from text2diagram.core.validation.base import (
    ensure_unique,
    join_path,
    require_container,
    require_list,
    require_object,
    require_string,
    resolve_name,
)
from text2diagram.models.usecase import (
    Actor,
    Association,
    Extend,
    Include,
    Package,
    UseCase,
    UseCaseDiagram,
    UseCaseRelationships,
)


def _name(item: Any, path: str) -> str:
    if isinstance(item, str) and item.strip():
        return item.strip()
    return require_string(require_object(item, path), "Name", path)


def _names(items: list, path: str, what: str) -> list[str]:
    names = [_name(item, join_path(path, index)) for index, item in enumerate(items)]
    ensure_unique(names, path, what)
    return names


def _reference(obj: dict, field: str, path: str, known: list[str], what: str) -> str:
    name = require_string(obj, field, path)
    canonical = resolve_name(name, known)
    if canonical is None:
        raise SchemaValidationError(join_path(path, field), f"unknown {what} '{name}'")
    return canonical


def validate_actors(data: Any) -> list[Actor]:
    """Validate the actor step: non-empty, unique names."""
    items = require_container(data, "Actors")
    return [Actor(name=name) for name in _names(items, "Actors", "actor")]


def validate_use_cases(data: Any) -> list[UseCase]:
    """Validate the use case step: non-empty, unique names."""
    items = require_container(data, "UseCases")
    return [UseCase(name=name) for name in _names(items, "UseCases", "use case")]


def _parse_associations(items: list, path: str, actors: list[str], use_cases: list[str]):
    associations = []
    for index, raw in enumerate(items):
        item_path = join_path(path, index)
        obj = require_object(raw, item_path)
        associations.append(
            Association(
                actor=_reference(obj, "Actor", item_path, actors, "actor"),
                use_case=_reference(obj, "UseCase", item_path, use_cases, "use case"),
            )
        )
    return associations


def validate_associations(
    data: Any,
    actors: list[Actor],
    use_cases: list[UseCase],
) -> list[Association]:
    """Validate associations against the extracted actors and use cases."""
    items = require_container(data, "Associations")
    return _parse_associations(
        items,
        "Associations",
        [a.name for a in actors],
        [u.name for u in use_cases],
    )


def _parse_includes(items: list, path: str, use_cases: list[str]) -> list[Include]:
    includes = []
    for index, raw in enumerate(items):
        item_path = join_path(path, index)
        obj = require_object(raw, item_path)
        include = Include(
            base_use_case=_reference(obj, "BaseUseCase", item_path, use_cases, "use case"),
            included_use_case=_reference(obj, "IncludedUseCase", item_path, use_cases, "use case"),
        )
        if include.base_use_case == include.included_use_case:
            raise SchemaValidationError(item_path, "a use case cannot include itself")
        includes.append(include)
    return includes


def _parse_extends(items: list, path: str, use_cases: list[str]) -> list[Extend]:
    extends = []
    for index, raw in enumerate(items):
        item_path = join_path(path, index)
        obj = require_object(raw, item_path)
        extend = Extend(
            base_use_case=_reference(obj, "BaseUseCase", item_path, use_cases, "use case"),
            extended_use_case=_reference(obj, "ExtendedUseCase", item_path, use_cases, "use case"),
        )
        if extend.base_use_case == extend.extended_use_case:
            raise SchemaValidationError(item_path, "a use case cannot extend itself")
        extends.append(extend)
    return extends


def validate_use_case_relationships(
    data: Any,
    use_cases: list[UseCase],
) -> UseCaseRelationships:
    """Validate include/extend relationships; both may be empty."""
    obj = require_object(data, "")
    names = [u.name for u in use_cases]
    return UseCaseRelationships(
        includes=_parse_includes(require_list(obj, "Includes", "", non_empty=False), "Includes", names),
        extends=_parse_extends(require_list(obj, "Extends", "", non_empty=False), "Extends", names),
    )


def validate_use_case_diagram(data: Any) -> UseCaseDiagram:
    """
    Validate a complete packaged use case diagram.

    Args:
        data: ``{"Packages": [{"Name", "Actors", "UseCases", "Associations",
            "Includes", "Extends"}]}``

    Returns:
        UseCaseDiagram: Typed diagram with every reference resolved
    """
    raw_packages = require_container(data, "Packages")

    # First pass collects declarations so references can resolve across packages.
    declared = []
    for index, raw in enumerate(raw_packages):
        path = join_path("Packages", index)
        obj = require_object(raw, path)
        declared.append((
            path,
            obj,
            require_string(obj, "Name", path),
            _names(require_list(obj, "Actors", path, non_empty=False), join_path(path, "Actors"), "actor"),
            _names(require_list(obj, "UseCases", path, non_empty=False), join_path(path, "UseCases"), "use case"),
        ))
    ensure_unique([name for _, _, name, _, _ in declared], "Packages", "package")

    all_actors = [actor for *_, actors, _ in declared for actor in actors]
    all_use_cases = [use_case for *_, use_cases in declared for use_case in use_cases]

    packages = []
    for path, obj, name, actors, use_cases in declared:
        packages.append(
            Package(
                name=name,
                actors=[Actor(name=actor) for actor in actors],
                use_cases=[UseCase(name=use_case) for use_case in use_cases],
                associations=_parse_associations(
                    require_list(obj, "Associations", path, non_empty=False),
                    join_path(path, "Associations"),
                    all_actors,
                    use_cases,
                ),
                includes=_parse_includes(
                    require_list(obj, "Includes", path, non_empty=False),
                    join_path(path, "Includes"),
                    all_use_cases,
                ),
                extends=_parse_extends(
                    require_list(obj, "Extends", path, non_empty=False),
                    join_path(path, "Extends"),
                    all_use_cases,
                ),
            )
        )
    return UseCaseDiagram(packages=packages)


def validate_packages(
    data: Any,
    actors: list[Actor],
    use_cases: list[UseCase],
) -> UseCaseDiagram:
    """
    Validate the packaging step: a full diagram that places every extracted
    use case in some package and declares no unknown elements.
    """
    diagram = validate_use_case_diagram(data)
    known_actors = [a.name for a in actors]
    known_use_cases = [u.name for u in use_cases]

    placed: list[str] = []
    for index, package in enumerate(diagram.packages):
        path = join_path("Packages", index)
        for actor in package.actors:
            if resolve_name(actor.name, known_actors) is None:
                raise SchemaValidationError(join_path(path, "Actors"), f"unknown actor '{actor.name}'")
        for use_case in package.use_cases:
            if resolve_name(use_case.name, known_use_cases) is None:
                raise SchemaValidationError(
                    join_path(path, "UseCases"), f"unknown use case '{use_case.name}'"
                )
            placed.append(use_case.name)

    for use_case in known_use_cases:
        if resolve_name(use_case, placed) is None:
            raise SchemaValidationError("Packages", f"use case '{use_case}' is not placed in any package")
    return diagram
