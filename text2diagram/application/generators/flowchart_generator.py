"""
Flowchart generator.

Pipeline:

    categorize → flows (concurrent nodes → edges per flow) → decisions

The categorizer splits the specification into a basic flow plus named
alternative and exception flows. Each flow is then extracted on its own;
the extractions are independent so they run concurrently and are joined by
role, and any failure cancels the siblings. Finally each subflow, in
declared order, gets a decision node inserted into the basic flow at the
point the model chooses.

Dependencies: text2diagram.core
System role: Flowchart generation
"""

import logging
from collections.abc import Mapping
from typing import Any

from text2diagram.application.generators.base import DiagramGenerator
from text2diagram.core.pipeline.concurrency import gather_all_or_nothing
from text2diagram.core.pipeline.steps import CallableStep, PipelineStep, PromptStep, StepContext
from text2diagram.core.prompts.flowchart_prompts import (
    CATEGORY_EXAMPLE,
    DECISION_EXAMPLE,
    EDGE_EXAMPLE,
    EDGE_TYPES,
    NODE_EXAMPLE,
    NODE_TYPES,
    get_category_prompt,
    get_decision_prompt,
    get_edge_prompt,
    get_node_prompt,
)
from text2diagram.core.prompts.template import build_prompt, to_prompt_json
from text2diagram.core.validation.flowchart_validator import (
    validate_decision_point,
    validate_flow_categories,
    validate_flow_edges,
    validate_flow_graph,
    validate_flow_nodes,
)
from text2diagram.models.diagram import DiagramType
from text2diagram.models.flowchart import (
    BRANCH_LABELS,
    DecisionPoint,
    ExtractedFlows,
    Flow,
    FlowCategories,
    FlowEdge,
    FlowGraph,
    FlowNode,
    FlowType,
    NodeType,
    Subflow,
)

logger = logging.getLogger(__name__)

BASIC_FLOW_NAME = "basicFlow"


def _category_prompt(input_text: str, outputs: Mapping[str, Any]):
    return build_prompt(get_category_prompt(), input_text, example=CATEGORY_EXAMPLE)


def insert_decision(graph: FlowGraph, subflow: Flow, point: DecisionPoint) -> FlowGraph:
    """
    Attach a subflow to the basic flow through a new decision node.

    The decision node is placed before the insertion node; every basic-flow
    edge that targeted the insertion node is redirected to the decision,
    and the decision continues to the insertion node along the basic path.

    Args:
        graph: Current flow graph
        subflow: Extracted alternative or exception flow
        point: Where to branch and where to rejoin

    Returns:
        FlowGraph: New graph; the input is not modified
    """
    existing = {node.id for node in graph.nodes}
    decision_id = f"decision_{subflow.name}"
    suffix = 2
    while decision_id in existing:
        decision_id = f"decision_{subflow.name}_{suffix}"
        suffix += 1

    decision = FlowNode(id=decision_id, label=point.decision_label, type=NodeType.DECISION)
    nodes: list[FlowNode] = []
    for node in graph.nodes:
        if node.id == point.insertion_node_id:
            nodes.append(decision)
        nodes.append(node)

    edges = [
        edge.model_copy(update={"target_id": decision_id})
        if edge.target_id == point.insertion_node_id
        else edge
        for edge in graph.edges
    ]
    _, along_basic = BRANCH_LABELS[subflow.flow_type]
    edges.append(
        FlowEdge(source_id=decision_id, target_id=point.insertion_node_id, label=along_basic)
    )

    attached = Subflow(
        name=subflow.name,
        flow_type=subflow.flow_type,
        nodes=subflow.nodes,
        edges=subflow.edges,
        branch_node_id=decision_id,
        rejoin_node_id=point.rejoin_node_id,
    )
    return FlowGraph(nodes=nodes, edges=edges, subflows=[*graph.subflows, attached])


class FlowchartGenerator(DiagramGenerator):
    """Generates flowcharts from use case specifications."""

    diagram_type = DiagramType.FLOWCHART
    diagram_kind = "flowchart"
    evaluating_message = "Evaluating flowchart..."
    regenerating_message = "Modifying flowchart..."
    completed_message = "Generated flowchart successfully!"

    def validate_model(self, data: Any) -> FlowGraph:
        return validate_flow_graph(data)

    def steps(self) -> list[PipelineStep]:
        return [
            PromptStep(
                "categorize",
                _category_prompt,
                lambda data, outputs: validate_flow_categories(data),
                progress_message="Identifying flows...",
            ),
            CallableStep("flows", self._extract_flows, progress_message="Extracting flows..."),
            CallableStep(
                "decisions", self._attach_subflows, progress_message="Connecting flows..."
            ),
        ]

    def assemble(self, outputs: Mapping[str, Any]) -> FlowGraph:
        return outputs["decisions"]

    async def _extract_flow(
        self,
        context: StepContext,
        name: str,
        description: str,
        flow_type: FlowType,
    ) -> Flow:
        flow_kind = flow_type.value.lower()
        nodes = await context.analyzer.analyze(
            build_prompt(
                get_node_prompt(),
                context.input_text,
                flow_kind=flow_kind,
                flow_name=name,
                flow_description=description,
                node_types=NODE_TYPES,
                example=NODE_EXAMPLE,
            ),
            validate_flow_nodes,
            step=f"flows.{name}.nodes",
        )
        edges = await context.analyzer.analyze(
            build_prompt(
                get_edge_prompt(),
                context.input_text,
                flow_kind=flow_kind,
                flow_name=name,
                flow_description=description,
                nodes=to_prompt_json([node.to_wire() for node in nodes]),
                edge_types=EDGE_TYPES,
                example=EDGE_EXAMPLE,
            ),
            lambda data: validate_flow_edges(data, nodes),
            step=f"flows.{name}.edges",
        )
        return Flow(name=name, flow_type=flow_type, nodes=nodes, edges=edges)

    async def _extract_flows(self, context: StepContext) -> ExtractedFlows:
        categories: FlowCategories = context.outputs["categorize"]
        logger.info(
            f"{__name__}:_extract_flows - START alternatives={len(categories.alternative_flows)}, "
            f"exceptions={len(categories.exception_flows)}"
        )

        jobs = [(BASIC_FLOW_NAME, categories.basic_flow, FlowType.BASIC)]
        jobs += [(d.name, d.description, FlowType.ALTERNATIVE) for d in categories.alternative_flows]
        jobs += [(d.name, d.description, FlowType.EXCEPTION) for d in categories.exception_flows]

        flows = await gather_all_or_nothing(
            *(self._extract_flow(context, name, text, flow_type) for name, text, flow_type in jobs)
        )
        return ExtractedFlows(
            basic=flows[0],
            alternatives=[f for f in flows if f.flow_type == FlowType.ALTERNATIVE],
            exceptions=[f for f in flows if f.flow_type == FlowType.EXCEPTION],
        )

    async def _attach_subflows(self, context: StepContext) -> FlowGraph:
        extracted: ExtractedFlows = context.outputs["flows"]
        categories: FlowCategories = context.outputs["categorize"]
        descriptions = {
            d.name: d.description
            for d in categories.alternative_flows + categories.exception_flows
        }

        graph = FlowGraph(nodes=extracted.basic.nodes, edges=extracted.basic.edges)
        # Sequential: each insertion changes the basic flow the next one sees.
        for subflow in extracted.subflows():
            basic = Flow(name=BASIC_FLOW_NAME, nodes=graph.nodes, edges=graph.edges)
            point = await context.analyzer.analyze(
                build_prompt(
                    get_decision_prompt(),
                    context.input_text,
                    flow_kind=subflow.flow_type.value.lower(),
                    flow_name=subflow.name,
                    flow_description=descriptions.get(subflow.name, ""),
                    nodes=to_prompt_json([node.to_wire() for node in basic.nodes]),
                    edges=to_prompt_json([edge.to_wire() for edge in basic.edges]),
                    example=DECISION_EXAMPLE,
                ),
                lambda data, flow=basic: validate_decision_point(data, flow),
                step=f"decisions.{subflow.name}",
            )
            graph = insert_decision(graph, subflow, point)
            logger.debug(
                f"{__name__}:_attach_subflows - {subflow.name} inserted before "
                f"{point.insertion_node_id}"
            )
        return graph
