"""
ER diagram prompts.

Three dependent steps: identify entities, then their properties, then the
relationships between them. Later prompts embed earlier step outputs.

Dependencies: langchain_core
System role: Prompts for the ER diagram pipeline
"""

from langchain_core.prompts import PromptTemplate

ENTITY_EXAMPLE = """```json
{
  "Entities": ["STUDENT", "COURSE", "ENROLLMENT"]
}
```"""

PROPERTY_EXAMPLE = """```json
{
  "Entities": [
    {
      "Name": "STUDENT",
      "Properties": [
        {"Type": "string", "Name": "student_id", "Role": "PK", "Description": "Unique student identifier"},
        {"Type": "string", "Name": "full_name", "Role": "", "Description": "Student full name"}
      ]
    },
    {
      "Name": "ENROLLMENT",
      "Properties": [
        {"Type": "string", "Name": "enrollment_id", "Role": "PK", "Description": "Unique enrollment identifier"},
        {"Type": "string", "Name": "student_id", "Role": "FK", "Description": "Enrolled student"}
      ]
    }
  ]
}
```"""

RELATIONSHIP_EXAMPLE = """```json
{
  "Relationships": [
    {
      "SourceEntityName": "STUDENT",
      "DestinationEntityName": "ENROLLMENT",
      "SourceRelationshipType": "ExactlyOne",
      "DestinationRelationshipType": "ZeroOrMore",
      "Description": "registers"
    }
  ]
}
```"""

ENTITY_TEMPLATE = PromptTemplate.from_template(
    """You are a database designer. Identify the entities needed for an Entity Relationship Diagram of the domain below.

Domain description:
{input_text}

Rules:
- Entities are the persistent things the system stores data about.
- Names are singular, UPPERCASE, using only letters, digits and underscores.
- Do not list attributes or relationships yet.
- {format_rules}

Example output:
{example}
"""
)

PROPERTY_TEMPLATE = PromptTemplate.from_template(
    """You are a database designer. For each entity below, list its properties.

Domain description:
{input_text}

Entities:
{entities}

Rules:
- Type is one of: string, int, float, bool, string[].
- Role is "PK" for the primary key, "FK" for a foreign key, otherwise "".
- Every entity has exactly one PK.
- Use only the entity names listed above.
- {format_rules}

Example output:
{example}
"""
)

RELATIONSHIP_TEMPLATE = PromptTemplate.from_template(
    """You are a database designer. Identify the relationships between the entities below.

Domain description:
{input_text}

Entities with their properties:
{entities}

Rules:
- SourceEntityName and DestinationEntityName must be entity names listed above.
- SourceRelationshipType and DestinationRelationshipType are one of: ZeroOrOne, ExactlyOne, ZeroOrMore, OneOrMore.
- Description is a short verb phrase describing the relationship.
- {format_rules}

Example output:
{example}
"""
)


def get_entity_prompt() -> PromptTemplate:
    return ENTITY_TEMPLATE


def get_property_prompt() -> PromptTemplate:
    return PROPERTY_TEMPLATE


def get_relationship_prompt() -> PromptTemplate:
    return RELATIONSHIP_TEMPLATE
