"""
Mermaid renderer for ER diagrams.

Relationship connectors come from a cardinality lookup table. The left
token describes the source side as written; the destination token is the
same table entry read right-to-left (``}o`` becomes ``o{``).

Dependencies: text2diagram.models.er
System role: ER model → Mermaid text
"""

from text2diagram.core.exceptions import AssemblyError
from text2diagram.models.er import Cardinality, ERModel, PropertyRole

CARDINALITY_TOKENS: dict[Cardinality, str] = {
    Cardinality.ZERO_OR_ONE: "|o",
    Cardinality.EXACTLY_ONE: "||",
    Cardinality.ZERO_OR_MORE: "}o",
    Cardinality.ONE_OR_MORE: "}|",
}

_MIRROR = str.maketrans("{}", "}{")


def _token(cardinality: Cardinality) -> str:
    try:
        return CARDINALITY_TOKENS[cardinality]
    except KeyError as e:
        raise AssemblyError(f"No connector token for cardinality {cardinality!r}") from e


def connector(source: Cardinality, destination: Cardinality) -> str:
    """Build the Mermaid connector, e.g. ExactlyOne → ZeroOrMore gives ``||--o{``."""
    right = _token(destination)[::-1].translate(_MIRROR)
    return f"{_token(source)}--{right}"


def _text(value: str) -> str:
    return value.replace('"', "'")


def render_er(model: ERModel) -> str:
    """Render an ER model as Mermaid ``erDiagram`` text."""
    lines = ["erDiagram"]

    for entity in model.entities:
        lines.append(f"    {entity.name} {{")
        for prop in entity.properties:
            parts = [prop.type.replace(" ", "_"), prop.name.replace(" ", "_")]
            if prop.role != PropertyRole.NONE:
                parts.append(prop.role.value)
            if prop.description:
                parts.append(f'"{_text(prop.description)}"')
            lines.append("        " + " ".join(parts))
        lines.append("    }")

    for rel in model.relationships:
        lines.append(
            f"    {rel.source_entity} "
            f"{connector(rel.source_cardinality, rel.destination_cardinality)} "
            f'{rel.destination_entity} : "{_text(rel.description)}"'
        )

    return "\n".join(lines)
