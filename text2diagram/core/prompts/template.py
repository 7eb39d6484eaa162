"""
Prompt building helpers.

Templates are LangChain ``PromptTemplate`` objects whose variables carry
the input text, upstream step outputs and format specifications. JSON
examples are injected as variable values so their braces never need
escaping in the template source.

Dependencies: langchain_core, text2diagram.models.prompt
System role: Pure prompt construction for every analysis step
"""

import json
from typing import Any

from langchain_core.prompts import PromptTemplate

from text2diagram.models.prompt import PromptContext

RESPONSE_FORMAT_RULES = (
    "Return ONLY one JSON object wrapped in a ```json code fence. "
    "Use exactly the field names shown (PascalCase). Do not add comments "
    "or any text outside the code fence."
)


def to_prompt_json(value: Any) -> str:
    """Serialize a value for embedding in a prompt."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def build_prompt(
    template: PromptTemplate,
    input_text: str = "",
    *,
    schema: str | None = None,
    prior_error: str | None = None,
    **inputs: Any,
) -> PromptContext:
    """
    Render a template into a prompt context for the first attempt.

    Args:
        template: Prompt template; may use ``input_text``, ``schema``,
            ``format_rules`` and any keys of ``inputs``
        input_text: Original user description
        schema: Optional schema/format description
        prior_error: Error from a previous attempt, if any
        **inputs: Upstream step outputs referenced by the template

    Returns:
        PromptContext: Immutable context for the retrying analyzer
    """
    variables: dict[str, Any] = {
        "input_text": input_text,
        "format_rules": RESPONSE_FORMAT_RULES,
        **inputs,
    }
    if schema is not None:
        variables["schema"] = schema
    text = template.format(
        **{name: variables[name] for name in template.input_variables}
    )
    return PromptContext(base_prompt=text, prior_error=prior_error, step_inputs=inputs)
