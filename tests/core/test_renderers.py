"""Tests for the Mermaid and PlantUML renderers."""

import pytest

from text2diagram.core.assembly.er_renderer import connector, render_er
from text2diagram.core.assembly.flowchart_renderer import render_flowchart, safe_id
from text2diagram.core.assembly.renderer import render_diagram
from text2diagram.core.assembly.sequence_renderer import render_sequence
from text2diagram.core.assembly.usecase_renderer import render_use_case
from text2diagram.core.exceptions import AssemblyError
from text2diagram.core.validation.er_validator import validate_er_model
from text2diagram.core.validation.flowchart_validator import validate_flow_graph
from text2diagram.core.validation.sequence_validator import validate_sequence
from text2diagram.core.validation.usecase_validator import validate_use_case_diagram
from text2diagram.models.er import Cardinality
from text2diagram.models.sequence import (
    AltBlock,
    AltBranch,
    CriticalBlock,
    LoopBlock,
    OptionBlock,
    ParallelBlock,
    ParallelBranch,
    SequenceDiagram,
    Statement,
)


def _stmt(message: str) -> Statement:
    return Statement(sender="A", receiver="B", message=message, arrow_type="->>")


class TestSequenceRenderer:
    """sequenceDiagram output."""

    def test_login_example(self, login_sequence_payload: dict) -> None:
        markup = render_sequence(validate_sequence(login_sequence_payload))
        lines = markup.splitlines()

        assert lines[0] == "sequenceDiagram"
        assert lines[1] == "    User ->> UI: Enter credentials"
        assert "    UserRepository -->> AuthService: Return user or null" in lines
        assert lines[-5:] == [
            "    alt Login successful",
            "        UI -->> User: Redirect to dashboard",
            "    else Login failed",
            "        UI -->> User: Show error message",
            "    end",
        ]

    def test_loop_par_and_critical(self) -> None:
        diagram = SequenceDiagram(elements=[
            LoopBlock(title="retry", body=[
                ParallelBlock(branches=[
                    ParallelBranch(title="left", body=[_stmt("l")]),
                    ParallelBranch(title="right", body=[_stmt("r")]),
                ]),
            ]),
            CriticalBlock(
                title="commit",
                body=[_stmt("write")],
                options=[OptionBlock(condition="timeout", body=[_stmt("rollback")])],
            ),
        ])

        markup = render_sequence(diagram)

        assert markup == "\n".join([
            "sequenceDiagram",
            "    loop retry",
            "        par left",
            "            A ->> B: l",
            "        and right",
            "            A ->> B: r",
            "        end",
            "    end",
            "    critical commit",
            "        A ->> B: write",
            "    end",
        ])
        assert "rollback" not in markup

    def test_deterministic(self, login_sequence_payload: dict) -> None:
        diagram = validate_sequence(login_sequence_payload)
        assert render_sequence(diagram) == render_sequence(diagram)

    def test_statement_breaking_characters_are_escaped(self) -> None:
        """Semicolons and hashes in messages and guards become Mermaid entities."""
        diagram = SequenceDiagram(elements=[
            AltBlock(branches=[
                AltBranch(condition="retries; #2", body=[_stmt("save; then notify #ops")]),
            ]),
            LoopBlock(title="each item; #n", body=[_stmt("ok")]),
        ])

        lines = render_sequence(diagram).splitlines()

        assert "    alt retries#59; #35;2" in lines
        assert "        A ->> B: save#59; then notify #35;ops" in lines
        assert "    loop each item#59; #35;n" in lines


class TestERRenderer:
    """erDiagram output."""

    @pytest.mark.parametrize(
        ("source", "destination", "expected"),
        [
            (Cardinality.EXACTLY_ONE, Cardinality.ZERO_OR_MORE, "||--o{"),
            (Cardinality.ZERO_OR_ONE, Cardinality.ONE_OR_MORE, "|o--|{"),
            (Cardinality.ZERO_OR_MORE, Cardinality.ZERO_OR_ONE, "}o--o|"),
            (Cardinality.ONE_OR_MORE, Cardinality.EXACTLY_ONE, "}|--||"),
        ],
    )
    def test_connector(self, source, destination, expected) -> None:
        assert connector(source, destination) == expected

    def test_render(self, library_er_payload: dict) -> None:
        markup = render_er(validate_er_model(library_er_payload))

        assert markup == "\n".join([
            "erDiagram",
            "    MEMBER {",
            '        string member_id PK "Member identifier"',
            '        string full_name "Display name"',
            "    }",
            "    LOAN {",
            '        string loan_id PK "Loan identifier"',
            '        string member_id FK "Borrowing member"',
            "    }",
            '    MEMBER ||--o{ LOAN : "borrows"',
        ])


class TestFlowchartRenderer:
    """graph TD output."""

    def _graph(self, subflow_nodes: int = 1) -> dict:
        steps = [
            {"Id": f"s{i}", "Label": f"Step {i}", "Type": "Process"} for i in range(subflow_nodes)
        ]
        sub_edges = [{"SourceId": "start", "TargetId": "s0"}] + [
            {"SourceId": f"s{i}", "TargetId": f"s{i + 1}"} for i in range(subflow_nodes - 1)
        ] + [{"SourceId": f"s{subflow_nodes - 1}", "TargetId": "end"}]
        return {
            "Nodes": [
                {"Id": "start", "Label": "Start", "Type": "Start"},
                {"Id": "decision_invalid", "Label": "Valid \"login\"?", "Type": "Decision"},
                {"Id": "check", "Label": "Validate", "Type": "Process"},
                {"Id": "end", "Label": "Done", "Type": "End"},
            ],
            "Edges": [
                {"SourceId": "start", "TargetId": "decision_invalid"},
                {"SourceId": "decision_invalid", "TargetId": "check", "Label": "Yes"},
                {"SourceId": "check", "TargetId": "end"},
            ],
            "Subflows": [{
                "Name": "invalid",
                "FlowType": "Exception",
                "Nodes": [{"Id": "start", "Label": "Start", "Type": "Start"}] + steps
                + [{"Id": "end", "Label": "Back", "Type": "End"}],
                "Edges": sub_edges,
                "BranchNodeId": "decision_invalid",
                "RejoinNodeId": "start",
            }],
        }

    def test_small_subflow_is_inlined(self) -> None:
        markup = render_flowchart(validate_flow_graph(self._graph(1)), inline_threshold=3)
        lines = markup.splitlines()

        assert lines[0] == "graph TD"
        assert '    n_end(["Done"])' in lines
        assert '    decision_invalid{"Valid #quot;login#quot;?"}' in lines
        assert '    invalid_s0["Step 0"]' in lines
        assert "    decision_invalid --o|No| invalid_s0" in lines
        assert "    invalid_s0 --> invalid_end" in lines
        assert "    invalid_end -.-> start" in lines
        assert "subgraph" not in markup
        assert "invalid_start" not in markup

    def test_large_subflow_becomes_subgraph(self) -> None:
        markup = render_flowchart(validate_flow_graph(self._graph(3)), inline_threshold=3)

        assert '    subgraph sg_invalid["invalid"]' in markup
        assert '        invalid_s2["Step 2"]' in markup

    @pytest.mark.parametrize(("raw", "expected"), [("end", "n_end"), ("1st", "n_1st"), ("a-b", "a_b")])
    def test_safe_id(self, raw: str, expected: str) -> None:
        assert safe_id(raw) == expected

    def test_ids_that_sanitize_alike_stay_distinct(self) -> None:
        """Raw ids differing only in punctuation render as separate Mermaid nodes."""
        # Arrange
        graph = validate_flow_graph({
            "Nodes": [
                {"Id": "start", "Label": "Start", "Type": "Start"},
                {"Id": "step-1", "Label": "Dash", "Type": "Process"},
                {"Id": "step_1", "Label": "Underscore", "Type": "Process"},
                {"Id": "done", "Label": "Done", "Type": "End"},
            ],
            "Edges": [
                {"SourceId": "start", "TargetId": "step-1"},
                {"SourceId": "step-1", "TargetId": "step_1"},
                {"SourceId": "step_1", "TargetId": "done"},
            ],
            "Subflows": [],
        })

        # Act
        lines = render_flowchart(graph).splitlines()

        # Assert
        assert '    step_1["Dash"]' in lines
        assert '    step_1_2["Underscore"]' in lines
        assert "    step_1 --> step_1_2" in lines
        assert "    step_1_2 --> done" in lines

    def test_prefixed_subflow_ids_stay_distinct(self) -> None:
        """Subflow "a" node "b_c" and subflow "a_b" node "c" do not merge."""
        # Arrange
        def subflow(name: str, node_id: str) -> dict:
            return {
                "Name": name,
                "FlowType": "Alternative",
                "Nodes": [
                    {"Id": "start", "Label": "Start", "Type": "Start"},
                    {"Id": node_id, "Label": f"{name} step", "Type": "Process"},
                    {"Id": "back", "Label": "Back", "Type": "End"},
                ],
                "Edges": [
                    {"SourceId": "start", "TargetId": node_id},
                    {"SourceId": node_id, "TargetId": "back"},
                ],
                "BranchNodeId": "check",
                "RejoinNodeId": "done",
            }

        graph = validate_flow_graph({
            "Nodes": [
                {"Id": "start", "Label": "Start", "Type": "Start"},
                {"Id": "check", "Label": "Check", "Type": "Decision"},
                {"Id": "done", "Label": "Done", "Type": "End"},
            ],
            "Edges": [
                {"SourceId": "start", "TargetId": "check"},
                {"SourceId": "check", "TargetId": "done"},
            ],
            "Subflows": [subflow("a", "b_c"), subflow("a_b", "c")],
        })

        # Act
        lines = render_flowchart(graph).splitlines()

        # Assert
        assert '    a_b_c["a step"]' in lines
        assert '    a_b_c_2["a_b step"]' in lines
        assert "    check -->|Yes| a_b_c" in lines
        assert "    check -->|Yes| a_b_c_2" in lines


class TestUseCaseRenderer:
    """PlantUML output."""

    def test_render(self, shop_use_case_payload: dict) -> None:
        markup = render_use_case(validate_use_case_diagram(shop_use_case_payload))

        assert markup == "\n".join([
            "@startuml",
            "left to right direction",
            'package "Shopping" {',
            '    actor "Customer" as A_Customer',
            '    usecase "Place Order" as UC_Place_Order',
            '    usecase "Pay" as UC_Pay',
            "}",
            'package "Support" {',
            '    actor "Agent" as A_Agent',
            '    usecase "Request Refund" as UC_Request_Refund',
            "}",
            "A_Customer --> UC_Place_Order",
            "UC_Place_Order ..> UC_Pay : <<include>>",
            "A_Customer --> UC_Request_Refund",
            "A_Agent --> UC_Request_Refund",
            "UC_Place_Order <.. UC_Request_Refund : <<extend>>",
            "@enduml",
        ])


class TestRenderDiagram:
    """Dispatch by model type."""

    def test_dispatch(self, library_er_payload: dict) -> None:
        assert render_diagram(validate_er_model(library_er_payload)).startswith("erDiagram")

    def test_unknown_model_rejected(self) -> None:
        with pytest.raises(AssemblyError):
            render_diagram({"not": "a model"})
