"""
Use case diagram prompts.

Five dependent steps: actors, use cases, associations, include/extend
relationships and package grouping.

Dependencies: langchain_core
System role: Prompts for the use case diagram pipeline
"""

from langchain_core.prompts import PromptTemplate

ACTOR_EXAMPLE = """```json
{
  "Actors": [{"Name": "Customer"}, {"Name": "Payment Gateway"}]
}
```"""

USE_CASE_EXAMPLE = """```json
{
  "UseCases": [{"Name": "Place Order"}, {"Name": "Process Payment"}]
}
```"""

ASSOCIATION_EXAMPLE = """```json
{
  "Associations": [
    {"Actor": "Customer", "UseCase": "Place Order"},
    {"Actor": "Payment Gateway", "UseCase": "Process Payment"}
  ]
}
```"""

RELATIONSHIP_EXAMPLE = """```json
{
  "Includes": [{"BaseUseCase": "Place Order", "IncludedUseCase": "Process Payment"}],
  "Extends": [{"BaseUseCase": "Place Order", "ExtendedUseCase": "Apply Coupon"}]
}
```"""

PACKAGE_EXAMPLE = """```json
{
  "Packages": [
    {
      "Name": "Ordering",
      "Actors": [{"Name": "Customer"}],
      "UseCases": [{"Name": "Place Order"}, {"Name": "Apply Coupon"}],
      "Associations": [{"Actor": "Customer", "UseCase": "Place Order"}],
      "Includes": [],
      "Extends": [{"BaseUseCase": "Place Order", "ExtendedUseCase": "Apply Coupon"}]
    },
    {
      "Name": "Payments",
      "Actors": [{"Name": "Payment Gateway"}],
      "UseCases": [{"Name": "Process Payment"}],
      "Associations": [{"Actor": "Payment Gateway", "UseCase": "Process Payment"}],
      "Includes": [{"BaseUseCase": "Place Order", "IncludedUseCase": "Process Payment"}],
      "Extends": []
    }
  ]
}
```"""

ACTOR_TEMPLATE = PromptTemplate.from_template(
    """You are a requirements analyst. Identify the actors in the use case specification below.

Specification:
{input_text}

Rules:
- Actors are people, roles or external systems that interact with the system.
- Do not include the system itself.
- {format_rules}

Example output:
{example}
"""
)

USE_CASE_TEMPLATE = PromptTemplate.from_template(
    """You are a requirements analyst. Identify the use cases in the specification below.

Specification:
{input_text}

Known actors:
{actors}

Rules:
- A use case is a goal an actor achieves with the system, named as a short verb phrase.
- Each name appears once.
- {format_rules}

Example output:
{example}
"""
)

ASSOCIATION_TEMPLATE = PromptTemplate.from_template(
    """You are a requirements analyst. Link actors to the use cases they take part in.

Specification:
{input_text}

Actors:
{actors}

Use cases:
{use_cases}

Rules:
- Only use actor and use case names from the lists above, spelled exactly.
- Every use case should have at least one associated actor when the text supports it.
- {format_rules}

Example output:
{example}
"""
)

RELATIONSHIP_TEMPLATE = PromptTemplate.from_template(
    """You are a requirements analyst. Identify include and extend relationships between use cases.

Specification:
{input_text}

Use cases:
{use_cases}

Rules:
- Include: the base use case always performs the included use case.
- Extend: the extending use case optionally adds behaviour to the base use case.
- Only use names from the list above. Return empty arrays when there are none.
- {format_rules}

Example output:
{example}
"""
)

PACKAGE_TEMPLATE = PromptTemplate.from_template(
    """You are a requirements analyst. Group the extracted elements into packages (functional areas) of a use case diagram.

Specification:
{input_text}

Actors:
{actors}

Use cases:
{use_cases}

Associations:
{associations}

Relationships:
{relationships}

Rules:
- Every use case is placed in exactly one package.
- An association belongs to the package that declares its use case.
- Keep every association, include and extend listed above; do not invent new elements.
- {format_rules}

Example output:
{example}
"""
)


def get_actor_prompt() -> PromptTemplate:
    return ACTOR_TEMPLATE


def get_use_case_prompt() -> PromptTemplate:
    return USE_CASE_TEMPLATE


def get_association_prompt() -> PromptTemplate:
    return ASSOCIATION_TEMPLATE


def get_relationship_prompt() -> PromptTemplate:
    return RELATIONSHIP_TEMPLATE


def get_package_prompt() -> PromptTemplate:
    return PACKAGE_TEMPLATE
