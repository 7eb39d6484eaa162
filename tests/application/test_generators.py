"""
Test suite for the per-diagram-type generators.

Drives each generator end to end with scripted LLM replies: prompts are
checked for upstream fragments, results for the assembled model.

Dependencies: pytest, pytest-asyncio
System role: Verification of generator step wiring
"""

import pytest

from text2diagram.application.generators.er_generator import ERDiagramGenerator
from text2diagram.application.generators.flowchart_generator import (
    FlowchartGenerator,
    insert_decision,
)
from text2diagram.application.generators.sequence_generator import SequenceDiagramGenerator
from text2diagram.application.generators.usecase_generator import UseCaseDiagramGenerator
from text2diagram.configs.pipeline import PipelineSettings
from text2diagram.core.assembly.renderer import render_diagram
from text2diagram.core.exceptions import PipelineError, StepExhaustedError
from text2diagram.models.flowchart import (
    DecisionPoint,
    Flow,
    FlowEdge,
    FlowGraph,
    FlowNode,
    FlowType,
    NodeType,
)
from text2diagram.models.sequence import AltBlock
from text2diagram.observability.progress import ProgressReporter, QueueProgressSink

ACCURATE = {"IsAccurate": True, "Commentary": "Matches the description."}

FLOW_NODES = {
    "basicFlow": [
        {"Id": "start", "Label": "Start", "Type": "Start"},
        {"Id": "enter", "Label": "Enter credentials", "Type": "InputOutput"},
        {"Id": "validate", "Label": "Validate credentials", "Type": "Process"},
        {"Id": "end_1", "Label": "Show dashboard", "Type": "End"},
    ],
    "rememberMe": [
        {"Id": "start", "Label": "Start", "Type": "Start"},
        {"Id": "store_cookie", "Label": "Store session cookie", "Type": "Process"},
        {"Id": "end", "Label": "Continue", "Type": "End"},
    ],
    "invalidCredentials": [
        {"Id": "start", "Label": "Start", "Type": "Start"},
        {"Id": "show_error", "Label": "Show error", "Type": "Process"},
        {"Id": "end", "Label": "Retry", "Type": "End"},
    ],
}


def _chain(nodes: list[dict]) -> dict:
    return {"Edges": [
        {"SourceId": a["Id"], "TargetId": b["Id"], "Type": "Arrow", "Label": ""}
        for a, b in zip(nodes, nodes[1:])
    ]}


def _flowchart_routes(fence, exception_nodes=None) -> list:
    routes = [
        ("Split the use case specification", fence({
            "BasicFlow": "1. Enter credentials 2. Validate 3. Show dashboard",
            "AlternativeFlows": [{"Name": "rememberMe", "Description": "At step 1 the user ticks remember me."}],
            "ExceptionFlows": [{"Name": "invalidCredentials", "Description": "At step 2 validation fails."}],
        })),
        ('The alternative flow "rememberMe" must branch off', fence({
            "InsertionNodeId": "validate", "DecisionLabel": "Remember me?", "RejoinNodeId": "validate",
        })),
        ('The exception flow "invalidCredentials" must branch off', fence({
            "InsertionNodeId": "end_1", "DecisionLabel": "Credentials valid?", "RejoinNodeId": "enter",
        })),
    ]
    for name, kind in (("basicFlow", "basic"), ("rememberMe", "alternative"), ("invalidCredentials", "exception")):
        nodes = FLOW_NODES[name]
        node_reply = fence({"Nodes": nodes})
        if name == "invalidCredentials" and exception_nodes is not None:
            node_reply = exception_nodes
        routes.append((f'Extract the flowchart nodes of the {kind} flow "{name}"', node_reply))
        routes.append((f'Connect the nodes of the {kind} flow "{name}"', fence(_chain(nodes))))
    routes.append(("strict reviewer of flowchart diagrams", fence(ACCURATE)))
    return routes


class TestSequenceDiagramGenerator:
    """Single-shot sequence generation."""

    @pytest.mark.asyncio
    async def test_login_scenario(self, scripted_llm, analyzer_for, fence, login_sequence_payload) -> None:
        """Six statements plus an alt block render with alt/else/end."""
        # Arrange
        llm = scripted_llm([fence(login_sequence_payload)])
        generator = SequenceDiagramGenerator(analyzer_for(llm), PipelineSettings(enable_evaluation=False))

        # Act
        run = await generator.generate("A user logs into a web app...", ProgressReporter())
        markup = render_diagram(run.model)

        # Assert
        assert llm.calls == 1
        assert "A user logs into a web app..." in llm.prompts[0]
        assert len(run.model.elements) == 7
        alt = run.model.elements[-1]
        assert isinstance(alt, AltBlock)
        assert len(alt.branches) == 2
        assert "alt Login successful" in markup
        assert "else Login failed" in markup
        assert markup.rstrip().endswith("end")

    @pytest.mark.asyncio
    async def test_evaluation_runs_when_enabled(self, scripted_llm, analyzer_for, fence, login_sequence_payload) -> None:
        # Arrange
        llm = scripted_llm([fence(login_sequence_payload), fence(ACCURATE)])
        sink = QueueProgressSink()
        generator = SequenceDiagramGenerator(analyzer_for(llm), PipelineSettings())

        # Act
        run = await generator.generate("login", ProgressReporter(sink))

        # Assert
        assert llm.calls == 2
        assert run.evaluations[0].is_accurate is True
        assert "strict reviewer of sequence diagrams" in llm.prompts[1]
        assert sink.drain() == ["Analyzing interactions...", "Evaluating sequence diagram..."]

    @pytest.mark.asyncio
    async def test_exhaustion_surfaces_attempt_count(self, scripted_llm, analyzer_for) -> None:
        llm = scripted_llm(["no diagram"] * 3)
        generator = SequenceDiagramGenerator(analyzer_for(llm), PipelineSettings(enable_evaluation=False))

        with pytest.raises(StepExhaustedError) as exc_info:
            await generator.generate("login", ProgressReporter())

        assert "Diagram generation failed after 3 attempts" in exc_info.value.message


class TestERDiagramGenerator:
    """entities → properties → relationships pipeline."""

    @pytest.mark.asyncio
    async def test_pipeline(self, scripted_llm, analyzer_for, fence, library_er_payload) -> None:
        # Arrange
        llm = scripted_llm([
            fence({"Entities": ["MEMBER", "LOAN"]}),
            fence({"Entities": library_er_payload["Entities"]}),
            fence({"Relationships": library_er_payload["Relationships"]}),
            fence(ACCURATE),
        ])
        sink = QueueProgressSink()
        generator = ERDiagramGenerator(analyzer_for(llm), PipelineSettings())

        # Act
        run = await generator.generate("A library lends books to members.", ProgressReporter(sink))

        # Assert
        assert llm.calls == 4
        assert '"MEMBER"' in llm.prompts[1]
        assert '"member_id"' in llm.prompts[2]
        assert run.model.entity_names() == ["MEMBER", "LOAN"]
        assert 'MEMBER ||--o{ LOAN : "borrows"' in render_diagram(run.model)
        assert sink.drain() == [
            "Identifying entities...",
            "Identifying properties...",
            "Identifying relationships...",
            "Evaluating ER diagram...",
        ]

    @pytest.mark.asyncio
    async def test_relationship_to_unknown_entity_is_retried(self, scripted_llm, analyzer_for, fence) -> None:
        """The retry prompt names the unknown entity; the corrected reply is used."""
        # Arrange
        bad = {"Relationships": [{
            "SourceEntityName": "MEMBER", "DestinationEntityName": "BOOK",
            "SourceRelationshipType": "ExactlyOne", "DestinationRelationshipType": "ZeroOrMore",
        }]}
        good = {"Relationships": [{
            "SourceEntityName": "MEMBER", "DestinationEntityName": "LOAN",
            "SourceRelationshipType": "ExactlyOne", "DestinationRelationshipType": "ZeroOrMore",
        }]}
        llm = scripted_llm([
            fence(["MEMBER", "LOAN"]),
            fence({"Entities": [{"Name": "MEMBER", "Properties": []}]}),
            fence(bad),
            fence(good),
        ])
        generator = ERDiagramGenerator(analyzer_for(llm), PipelineSettings(enable_evaluation=False))

        # Act
        run = await generator.generate("library", ProgressReporter())

        # Assert
        assert "unknown entity 'BOOK'" in llm.prompts[3]
        assert run.model.relationships[0].destination_entity == "LOAN"


class TestFlowchartGenerator:
    """categorize → flows → decisions pipeline."""

    @pytest.mark.asyncio
    async def test_pipeline(self, routing_llm, analyzer_for, fence) -> None:
        # Arrange
        llm = routing_llm(_flowchart_routes(fence))
        generator = FlowchartGenerator(analyzer_for(llm), PipelineSettings())

        # Act
        run = await generator.generate("Login use case", ProgressReporter())
        graph = run.model

        # Assert
        assert [n.id for n in graph.nodes] == [
            "start", "enter", "decision_rememberMe", "validate", "decision_invalidCredentials", "end_1",
        ]
        assert [(s.name, s.branch_node_id, s.rejoin_node_id) for s in graph.subflows] == [
            ("rememberMe", "decision_rememberMe", "validate"),
            ("invalidCredentials", "decision_invalidCredentials", "enter"),
        ]
        incoming = [(e.source_id, e.target_id, e.label) for e in graph.edges]
        assert ("enter", "decision_rememberMe", None) in incoming
        assert ("decision_rememberMe", "validate", "No") in incoming
        assert ("decision_invalidCredentials", "end_1", "Yes") in incoming
        assert ("validate", "end_1", None) not in incoming

        second_decision = llm.prompts_containing('The exception flow "invalidCredentials" must branch off')
        assert "decision_rememberMe" in second_decision[0]

        markup = render_diagram(graph)
        assert "    decision_rememberMe -->|Yes| rememberMe_store_cookie" in markup
        assert "    decision_invalidCredentials --o|No| invalidCredentials_show_error" in markup
        assert "    invalidCredentials_end -.-> enter" in markup

    @pytest.mark.asyncio
    async def test_failing_flow_fails_the_flows_step(self, routing_llm, analyzer_for, fence) -> None:
        """One flow exhausting its retries fails the whole flows step."""
        llm = routing_llm(_flowchart_routes(fence, exception_nodes="cannot draw this"))
        generator = FlowchartGenerator(analyzer_for(llm), PipelineSettings(enable_evaluation=False))

        with pytest.raises(PipelineError) as exc_info:
            await generator.generate("Login use case", ProgressReporter())

        assert exc_info.value.step == "flows"
        assert exc_info.value.cause.step == "flows.invalidCredentials.nodes"
        assert not llm.prompts_containing("must branch off")


class TestInsertDecision:
    """Decision node insertion into the basic flow."""

    def _graph(self) -> FlowGraph:
        return FlowGraph(
            nodes=[
                FlowNode(id="start", label="Start", type=NodeType.START),
                FlowNode(id="a", label="A", type=NodeType.PROCESS),
                FlowNode(id="done", label="Done", type=NodeType.END),
            ],
            edges=[
                FlowEdge(source_id="start", target_id="a"),
                FlowEdge(source_id="a", target_id="done"),
            ],
        )

    def test_incoming_edges_are_redirected(self) -> None:
        subflow = Flow(name="retry", flow_type=FlowType.EXCEPTION, nodes=[], edges=[])

        graph = insert_decision(
            self._graph(), subflow, DecisionPoint(insertion_node_id="a", decision_label="OK?")
        )

        assert [n.id for n in graph.nodes] == ["start", "decision_retry", "a", "done"]
        assert [(e.source_id, e.target_id, e.label) for e in graph.edges] == [
            ("start", "decision_retry", None),
            ("a", "done", None),
            ("decision_retry", "a", "Yes"),
        ]
        assert graph.subflows[0].rejoin_node_id is None

    def test_decision_id_is_made_unique(self) -> None:
        graph = self._graph()
        graph.nodes.insert(1, FlowNode(id="decision_retry", label="x", type=NodeType.DECISION))
        subflow = Flow(name="retry", flow_type=FlowType.ALTERNATIVE)

        updated = insert_decision(graph, subflow, DecisionPoint(insertion_node_id="done", decision_label="?"))

        assert "decision_retry_2" in [n.id for n in updated.nodes]


class TestUseCaseDiagramGenerator:
    """actors → use_cases → associations → relationships → packages pipeline."""

    @pytest.mark.asyncio
    async def test_pipeline(self, scripted_llm, analyzer_for, fence, shop_use_case_payload) -> None:
        # Arrange
        llm = scripted_llm([
            fence({"Actors": ["Customer", "Agent"]}),
            fence({"UseCases": ["Place Order", "Pay", "Request Refund"]}),
            fence({"Associations": [
                {"Actor": "Customer", "UseCase": "Place Order"},
                {"Actor": "Agent", "UseCase": "Request Refund"},
            ]}),
            fence({
                "Includes": [{"BaseUseCase": "Place Order", "IncludedUseCase": "Pay"}],
                "Extends": [],
            }),
            fence(shop_use_case_payload),
        ])
        generator = UseCaseDiagramGenerator(analyzer_for(llm), PipelineSettings(enable_evaluation=False))

        # Act
        run = await generator.generate("An online shop", ProgressReporter())

        # Assert
        assert llm.calls == 5
        assert '"Customer"' in llm.prompts[1]
        assert '"Request Refund"' in llm.prompts[2]
        assert '"IncludedUseCase": "Pay"' in llm.prompts[4]
        assert [p.name for p in run.model.packages] == ["Shopping", "Support"]
        assert render_diagram(run.model).startswith("@startuml\nleft to right direction")
