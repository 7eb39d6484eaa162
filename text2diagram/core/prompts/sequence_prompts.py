"""
Sequence diagram prompts.

Dependencies: langchain_core
System role: Prompt for single-shot sequence diagram analysis
"""

from langchain_core.prompts import PromptTemplate

SEQUENCE_SCHEMA = """Root object:
  Elements: list of SequenceElement

SequenceElement is exactly ONE of:
  Statement:
    Participant1 (string): sender
    Participant2 (string): receiver
    Message (string): message or call
    ArrowType (string): one of "->", "-->", "->>", "-->>", "-x", "--x", "-)", "--)"
  {"LoopBlock": {"Title": string, "Body": [SequenceElement, ...]}}
  {"AltBlock": {"Branches": [{"Condition": string, "Body": [SequenceElement, ...]}, ...]}}
  {"ParallelBlock": {"Branches": [{"Title": string, "Body": [SequenceElement, ...]}, ...]}}
  {"CriticalBlock": {"Title": string, "Body": [SequenceElement, ...],
                     "Options": [{"Condition": string, "Body": [SequenceElement, ...]}, ...]}}

Every Body must contain at least one element."""

SEQUENCE_EXAMPLE = """INPUT:
A user logs into a web app. They enter credentials into the UI, which are sent to the AuthController. The controller forwards the credentials to AuthService. The service checks the database using UserRepository. If credentials are valid, it returns success. Otherwise, it returns failure.

OUTPUT:
```json
{
  "Elements": [
    {"Participant1": "User", "Participant2": "UI", "Message": "Enter credentials", "ArrowType": "->>"},
    {"Participant1": "UI", "Participant2": "AuthController", "Message": "Submit credentials", "ArrowType": "->>"},
    {"Participant1": "AuthController", "Participant2": "AuthService", "Message": "Validate credentials", "ArrowType": "->>"},
    {"Participant1": "AuthService", "Participant2": "UserRepository", "Message": "Query user by username", "ArrowType": "->>"},
    {"Participant1": "UserRepository", "Participant2": "AuthService", "Message": "Return user or null", "ArrowType": "-->>"},
    {"Participant1": "AuthService", "Participant2": "AuthController", "Message": "Return result", "ArrowType": "-->>"},
    {
      "AltBlock": {
        "Branches": [
          {"Condition": "Login successful", "Body": [
            {"Participant1": "UI", "Participant2": "User", "Message": "Redirect to dashboard", "ArrowType": "-->>"}
          ]},
          {"Condition": "Login failed", "Body": [
            {"Participant1": "UI", "Participant2": "User", "Message": "Show error message", "ArrowType": "-->>"}
          ]}
        ]
      }
    }
  ]
}
```"""

SEQUENCE_TEMPLATE = PromptTemplate.from_template(
    """You are a sequence diagram generator. You analyze software behavior descriptions and convert them into a structured object that is rendered as a Mermaid sequence diagram.

### TASK
Analyze the following use case and convert it into a sequence diagram object.

Use case:
{input_text}

### INSTRUCTIONS
1. Identify the participants (e.g. User, UI, Controller, Service, Repository).
2. Break the process down into messages exchanged between participants, in order.
3. Model control flow with blocks:
   - LoopBlock for repeated interactions
   - AltBlock for conditional logic (one branch per condition)
   - ParallelBlock for parallel execution
   - CriticalBlock for critical sections
4. {format_rules}

### SCHEMA
{schema}

### EXAMPLE
{example}
"""
)


def get_sequence_prompt() -> PromptTemplate:
    """Get the sequence analysis prompt template."""
    return SEQUENCE_TEMPLATE
