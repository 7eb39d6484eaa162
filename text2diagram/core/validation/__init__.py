"""
Schema validation of extracted JSON.

Each validator returns a typed model or raises SchemaValidationError whose
message names the offending path.
"""

from text2diagram.core.validation.er_validator import (
    validate_entity_names,
    validate_entity_properties,
    validate_er_model,
    validate_relationships,
)
from text2diagram.core.validation.evaluation_validator import validate_evaluation
from text2diagram.core.validation.flowchart_validator import (
    validate_decision_point,
    validate_flow_categories,
    validate_flow_edges,
    validate_flow_graph,
    validate_flow_nodes,
)
from text2diagram.core.validation.sequence_validator import (
    classify_sequence_element,
    validate_sequence,
)
from text2diagram.core.validation.usecase_validator import (
    validate_actors,
    validate_associations,
    validate_packages,
    validate_use_case_diagram,
    validate_use_case_relationships,
    validate_use_cases,
)

__all__ = [
    "classify_sequence_element",
    "validate_actors",
    "validate_associations",
    "validate_decision_point",
    "validate_entity_names",
    "validate_entity_properties",
    "validate_er_model",
    "validate_evaluation",
    "validate_flow_categories",
    "validate_flow_edges",
    "validate_flow_graph",
    "validate_flow_nodes",
    "validate_packages",
    "validate_relationships",
    "validate_sequence",
    "validate_use_case_diagram",
    "validate_use_case_relationships",
    "validate_use_cases",
]
