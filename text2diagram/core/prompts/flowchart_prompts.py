"""
Flowchart prompts.

Steps: split the specification into flows, extract nodes and edges per
flow, then pick where each alternative/exception flow branches off the
basic flow.

Dependencies: langchain_core
System role: Prompts for the flowchart pipeline
"""

from langchain_core.prompts import PromptTemplate

NODE_TYPES = (
    "Start, End, Process, Subroutine, Decision, InputOutput, Document, "
    "DataStore, Loop, Parallel, Comment"
)
EDGE_TYPES = "Arrow, OpenArrow, CrossArrow, NoArrow"

CATEGORY_EXAMPLE = """```json
{
  "BasicFlow": "1. User opens the login page. 2. User enters credentials. 3. System validates them. 4. System shows the dashboard.",
  "AlternativeFlows": [
    {"Name": "rememberMe", "Description": "At step 2 the user ticks 'remember me'; the system stores a session cookie."}
  ],
  "ExceptionFlows": [
    {"Name": "invalidCredentials", "Description": "At step 3 validation fails; the system shows an error and returns to step 2."}
  ]
}
```"""

NODE_EXAMPLE = """```json
{
  "Nodes": [
    {"Id": "start_1", "Label": "Start", "Type": "Start"},
    {"Id": "input_credentials", "Label": "Enter credentials", "Type": "InputOutput"},
    {"Id": "validate", "Label": "Validate credentials", "Type": "Process"},
    {"Id": "end_1", "Label": "Show dashboard", "Type": "End"}
  ]
}
```"""

EDGE_EXAMPLE = """```json
{
  "Edges": [
    {"SourceId": "start_1", "TargetId": "input_credentials", "Type": "Arrow", "Label": ""},
    {"SourceId": "input_credentials", "TargetId": "validate", "Type": "Arrow", "Label": ""},
    {"SourceId": "validate", "TargetId": "end_1", "Type": "Arrow", "Label": ""}
  ]
}
```"""

DECISION_EXAMPLE = """```json
{
  "InsertionNodeId": "validate",
  "DecisionLabel": "Credentials valid?",
  "RejoinNodeId": "input_credentials"
}
```"""

CATEGORY_TEMPLATE = PromptTemplate.from_template(
    """You are a business analyst. Split the use case specification below into its basic flow, alternative flows and exception flows.

Specification:
{input_text}

Rules:
- BasicFlow is the main success scenario as plain text. It must not be empty.
- Each alternative or exception flow has a unique camelCase Name and a Description
  that says at which basic-flow step it starts and what happens.
- Use empty arrays when there are no alternative or exception flows.
- {format_rules}

Example output:
{example}
"""
)

NODE_TEMPLATE = PromptTemplate.from_template(
    """You are a flowchart designer. Extract the flowchart nodes of the {flow_kind} flow "{flow_name}".

Full specification (for context):
{input_text}

Flow to model:
{flow_description}

Rules:
- Type is one of: {node_types}.
- Exactly one node has Type "Start" and at least one node has Type "End".
- Ids are unique snake_case identifiers; Labels are short phrases.
- Use Decision nodes for every condition inside this flow.
- {format_rules}

Example output:
{example}
"""
)

EDGE_TEMPLATE = PromptTemplate.from_template(
    """You are a flowchart designer. Connect the nodes of the {flow_kind} flow "{flow_name}".

Flow to model:
{flow_description}

Nodes:
{nodes}

Rules:
- SourceId and TargetId must be node Ids from the list above.
- Type is one of: {edge_types}. Use Arrow unless another connector is clearly better.
- Edges leaving a Decision node carry a Label such as "Yes" or "No".
- Every node except Start is reachable from Start.
- {format_rules}

Example output:
{example}
"""
)

DECISION_TEMPLATE = PromptTemplate.from_template(
    """You are a flowchart designer. The {flow_kind} flow "{flow_name}" must branch off the basic flow through a new decision node.

Subflow description:
{flow_description}

Basic flow nodes:
{nodes}

Basic flow edges:
{edges}

Rules:
- InsertionNodeId is the basic-flow node BEFORE which the decision is inserted; it must not be the Start node.
- DecisionLabel is a short yes/no question for the decision node.
- RejoinNodeId is the basic-flow node where the subflow continues afterwards, or "" if it ends on its own.
- Only use Ids from the lists above.
- {format_rules}

Example output:
{example}
"""
)


def get_category_prompt() -> PromptTemplate:
    return CATEGORY_TEMPLATE


def get_node_prompt() -> PromptTemplate:
    return NODE_TEMPLATE


def get_edge_prompt() -> PromptTemplate:
    return EDGE_TEMPLATE


def get_decision_prompt() -> PromptTemplate:
    return DECISION_TEMPLATE
