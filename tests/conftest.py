"""
Shared test fixtures and configuration for entire test suite.

Provides: scripted LLM fakes, pipeline settings, sample diagram payloads
Dependencies: pytest, text2diagram
System role: Test infrastructure and fixture management
"""

import json
from collections.abc import Callable
from typing import Any

import pytest

from text2diagram.boundary.llm.client import LLMResponse
from text2diagram.configs.llm import LLMSettings
from text2diagram.configs.pipeline import PipelineSettings
from text2diagram.configs.settings import Settings
from text2diagram.core.analysis.retrying_analyzer import RetryingAnalyzer

Reply = str | BaseException | Callable[[str], str]


def fenced(payload: Any) -> str:
    """Wrap a JSON payload the way models usually answer."""
    return f"Here is the result:\n```json\n{json.dumps(payload)}\n```"


def _resolve(reply: Reply, prompt: str) -> LLMResponse:
    if isinstance(reply, BaseException):
        raise reply
    if callable(reply):
        reply = reply(prompt)
    return LLMResponse(content=reply)


class ScriptedLLM:
    """LLM fake that replays canned replies in order and records every prompt."""

    def __init__(self, replies: list[Reply]) -> None:
        self._replies = list(replies)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)
        if not self._replies:
            raise AssertionError(f"No scripted reply left for prompt #{len(self.prompts)}")
        return _resolve(self._replies.pop(0), prompt)


class RoutingLLM:
    """
    LLM fake that answers by prompt content.

    Routes are checked in order; the first key contained in the prompt
    wins. A route value may be a single reply (reused) or a list of
    replies (consumed in order), which keeps concurrent steps deterministic.
    """

    def __init__(self, routes: list[tuple[str, Reply | list[Reply]]]) -> None:
        self._routes = [(key, value) for key, value in routes]
        self.prompts: list[str] = []

    def prompts_containing(self, fragment: str) -> list[str]:
        return [prompt for prompt in self.prompts if fragment in prompt]

    async def generate(self, prompt: str) -> LLMResponse:
        self.prompts.append(prompt)
        for key, value in self._routes:
            if key in prompt:
                if isinstance(value, list):
                    if not value:
                        raise AssertionError(f"Route '{key}' has no replies left")
                    return _resolve(value.pop(0), prompt)
                return _resolve(value, prompt)
        raise AssertionError(f"No route matches prompt: {prompt[:200]}")


@pytest.fixture
def fence() -> Callable[[Any], str]:
    """Serialize a payload as a fenced JSON model reply."""
    return fenced


@pytest.fixture
def scripted_llm() -> Callable[[list[Reply]], ScriptedLLM]:
    """Factory for ScriptedLLM instances."""
    return ScriptedLLM


@pytest.fixture
def routing_llm() -> Callable[[list[tuple[str, Any]]], RoutingLLM]:
    """Factory for RoutingLLM instances."""
    return RoutingLLM


@pytest.fixture
def analyzer_for() -> Callable[..., RetryingAnalyzer]:
    """Build a RetryingAnalyzer around any LLM fake."""

    def _build(llm, max_attempts: int = 3) -> RetryingAnalyzer:
        return RetryingAnalyzer(llm, max_attempts=max_attempts)

    return _build


@pytest.fixture
def no_evaluation_settings() -> PipelineSettings:
    """Pipeline settings with the evaluate/regenerate loop switched off."""
    return PipelineSettings(enable_evaluation=False)


@pytest.fixture
def app_settings() -> Callable[..., Settings]:
    """Factory for Settings with explicit pipeline overrides (no .env lookups)."""

    def _build(**pipeline: Any) -> Settings:
        return Settings(llm=LLMSettings(), pipeline=PipelineSettings(**pipeline))

    return _build


@pytest.fixture
def login_sequence_payload() -> dict:
    """Login scenario: six statements followed by a two-branch alt block."""
    return {
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
                        {
                            "Condition": "Login successful",
                            "Body": [
                                {"Participant1": "UI", "Participant2": "User", "Message": "Redirect to dashboard", "ArrowType": "-->>"}
                            ],
                        },
                        {
                            "Condition": "Login failed",
                            "Body": [
                                {"Participant1": "UI", "Participant2": "User", "Message": "Show error message", "ArrowType": "-->>"}
                            ],
                        },
                    ]
                }
            },
        ]
    }


@pytest.fixture
def library_er_payload() -> dict:
    """Complete ER model for a small library domain."""
    return {
        "Entities": [
            {
                "Name": "MEMBER",
                "Properties": [
                    {"Type": "string", "Name": "member_id", "Role": "PK", "Description": "Member identifier"},
                    {"Type": "string", "Name": "full name", "Role": "", "Description": "Display name"},
                ],
            },
            {
                "Name": "LOAN",
                "Properties": [
                    {"Type": "string", "Name": "loan_id", "Role": "PK", "Description": "Loan identifier"},
                    {"Type": "string", "Name": "member_id", "Role": "FK", "Description": "Borrowing member"},
                ],
            },
        ],
        "Relationships": [
            {
                "SourceEntityName": "MEMBER",
                "DestinationEntityName": "LOAN",
                "SourceRelationshipType": "ExactlyOne",
                "DestinationRelationshipType": "ZeroOrMore",
                "Description": "borrows",
            }
        ],
    }


@pytest.fixture
def shop_use_case_payload() -> dict:
    """Packaged use case diagram for a web shop."""
    return {
        "Packages": [
            {
                "Name": "Shopping",
                "Actors": [{"Name": "Customer"}],
                "UseCases": [{"Name": "Place Order"}, {"Name": "Pay"}],
                "Associations": [{"Actor": "Customer", "UseCase": "Place Order"}],
                "Includes": [{"BaseUseCase": "Place Order", "IncludedUseCase": "Pay"}],
                "Extends": [],
            },
            {
                "Name": "Support",
                "Actors": [{"Name": "Customer"}, {"Name": "Agent"}],
                "UseCases": [{"Name": "Request Refund"}],
                "Associations": [
                    {"Actor": "Customer", "UseCase": "Request Refund"},
                    {"Actor": "Agent", "UseCase": "Request Refund"},
                ],
                "Includes": [],
                "Extends": [{"BaseUseCase": "Place Order", "ExtendedUseCase": "Request Refund"}],
            },
        ]
    }
