"""
Evaluation and regeneration prompts.

Shared by every diagram type: the model critiques an assembled draft, and
flagged problems are patched with minimal changes. The feedback template
applies free-form user feedback to an existing diagram the same way.

Dependencies: langchain_core
System role: Prompts for the evaluate → regenerate sub-loop
"""

from langchain_core.prompts import PromptTemplate

EVALUATION_EXAMPLE = """```json
{
  "IsAccurate": false,
  "MissingElements": ["Relationship between ORDER and PRODUCT"],
  "IncorrectElements": ["CUSTOMER.email should not be a key"],
  "Suggestions": ["Add ORDER_ITEM to resolve the many-to-many relationship"],
  "Commentary": "Mostly complete; one relationship is missing."
}
```"""

EVALUATION_TEMPLATE = PromptTemplate.from_template(
    """You are a strict reviewer of {diagram_kind} diagrams. Compare the draft diagram with the original description and report inaccuracies.

Original description:
{input_text}

Draft diagram (JSON):
```json
{diagram_json}
```

Rules:
- IsAccurate is true only when nothing is missing or wrong.
- MissingElements lists elements present in the description but absent from the draft.
- IncorrectElements lists elements of the draft that contradict the description.
- Suggestions lists concrete fixes.
- {format_rules}

Example output:
{example}
"""
)

REGENERATION_TEMPLATE = PromptTemplate.from_template(
    """You are a {diagram_kind} diagram editor. Apply MINIMAL changes to the diagram below so it addresses the reviewer feedback. Keep every element that is not mentioned in the feedback unchanged.

Original description:
{input_text}

Current diagram (JSON):
```json
{diagram_json}
```

Reviewer feedback:
{feedback}

Rules:
- Return the COMPLETE updated diagram in the same JSON structure as the current diagram.
- {format_rules}
"""
)

FEEDBACK_TEMPLATE = PromptTemplate.from_template(
    """You are a {diagram_kind} diagram editor. A user reviewed the diagram below and asked for changes. Apply exactly what the user asks, with minimal changes elsewhere.

Current diagram (JSON):
```json
{diagram_json}
```

User feedback:
{feedback}

Rules:
- Return the COMPLETE updated diagram in the same JSON structure as the current diagram.
- {format_rules}
"""
)


def get_evaluation_prompt() -> PromptTemplate:
    return EVALUATION_TEMPLATE


def get_regeneration_prompt() -> PromptTemplate:
    return REGENERATION_TEMPLATE


def get_feedback_prompt() -> PromptTemplate:
    return FEEDBACK_TEMPLATE
