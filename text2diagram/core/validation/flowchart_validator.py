"""
Flowchart validators.

Covers flow categorization, per-flow node and edge extraction, decision
point selection and the complete flow graph. Node ids are unique within a
flow; subflows have their own id namespace.

Dependencies: text2diagram.core.validation.base, text2diagram.models.flowchart
System role: Typed flowchart fragments from extracted JSON
"""

import re
from typing import Any

from text2diagram.core.exceptions import SchemaValidationError
from text2diagram.core.validation.base import (
    ensure_unique,
    get_field,
    join_path,
    optional_string,
    require_container,
    require_enum,
    require_field,
    require_list,
    require_object,
    require_string,
)
from text2diagram.models.flowchart import (
    DecisionPoint,
    EdgeType,
    Flow,
    FlowCategories,
    FlowDescriptor,
    FlowEdge,
    FlowGraph,
    FlowNode,
    FlowType,
    NodeType,
    Subflow,
)

_FLOW_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def _flow_name(obj: dict, path: str) -> str:
    name = require_string(obj, "Name", path)
    if not _FLOW_NAME.match(name):
        raise SchemaValidationError(
            join_path(path, "Name"),
            f"flow name '{name}' must be a camelCase identifier (letters, digits, underscores)",
        )
    return name


def _parse_descriptors(obj: dict, field: str) -> list[FlowDescriptor]:
    descriptors = []
    for index, raw in enumerate(require_list(obj, field, "", non_empty=False)):
        path = join_path(field, index)
        item = require_object(raw, path)
        descriptors.append(
            FlowDescriptor(
                name=_flow_name(item, path),
                description=require_string(item, "Description", path),
            )
        )
    return descriptors


def validate_flow_categories(data: Any) -> FlowCategories:
    """
    Validate the flow categorizer output.

    Args:
        data: ``{"basicFlow": str, "alternativeFlows": [...], "exceptionFlows": [...]}``

    Returns:
        FlowCategories: Basic flow text plus named subflows
    """
    obj = require_object(data, "")
    categories = FlowCategories(
        basic_flow=require_string(obj, "BasicFlow", ""),
        alternative_flows=_parse_descriptors(obj, "AlternativeFlows"),
        exception_flows=_parse_descriptors(obj, "ExceptionFlows"),
    )
    names = [d.name for d in categories.alternative_flows + categories.exception_flows]
    ensure_unique(names, "Flows", "flow name")
    return categories


def _parse_node(raw: Any, path: str) -> FlowNode:
    obj = require_object(raw, path)
    return FlowNode(
        id=require_string(obj, "Id", path),
        label=require_string(obj, "Label", path),
        type=require_enum(require_field(obj, "Type", path), NodeType, join_path(path, "Type")),
    )


def _parse_nodes(items: list, path: str) -> list[FlowNode]:
    nodes = [_parse_node(item, join_path(path, index)) for index, item in enumerate(items)]
    ids = [node.id for node in nodes]
    seen: set[str] = set()
    for index, node_id in enumerate(ids):
        if node_id in seen:
            raise SchemaValidationError(join_path(path, index), f"duplicate node id '{node_id}'")
        seen.add(node_id)
    return nodes


def _check_terminals(nodes: list[FlowNode], path: str) -> None:
    starts = [node.id for node in nodes if node.type == NodeType.START]
    if len(starts) != 1:
        raise SchemaValidationError(
            path, f"expected exactly one Start node, found {len(starts)}"
        )
    if not any(node.type == NodeType.END for node in nodes):
        raise SchemaValidationError(path, "expected at least one End node, found 0")


def validate_flow_nodes(data: Any) -> list[FlowNode]:
    """Validate a flow's nodes: unique ids, one Start, at least one End."""
    nodes = _parse_nodes(require_container(data, "Nodes"), "Nodes")
    _check_terminals(nodes, "Nodes")
    return nodes


def _parse_edge(raw: Any, path: str, node_ids: list[str]) -> FlowEdge:
    obj = require_object(raw, path)
    endpoints = []
    for field in ("SourceId", "TargetId"):
        node_id = require_string(obj, field, path)
        if node_id not in node_ids:
            raise SchemaValidationError(
                join_path(path, field), f"unknown node id '{node_id}'"
            )
        endpoints.append(node_id)

    edge_type = get_field(obj, "Type")
    return FlowEdge(
        source_id=endpoints[0],
        target_id=endpoints[1],
        type=EdgeType.ARROW if edge_type in (None, "") else require_enum(
            edge_type, EdgeType, join_path(path, "Type")
        ),
        label=optional_string(obj, "Label", path) or None,
    )


def _parse_edges(items: list, path: str, node_ids: list[str]) -> list[FlowEdge]:
    return [
        _parse_edge(item, join_path(path, index), node_ids)
        for index, item in enumerate(items)
    ]


def validate_flow_edges(data: Any, nodes: list[FlowNode]) -> list[FlowEdge]:
    """Validate a flow's edges against its already-extracted nodes."""
    node_ids = [node.id for node in nodes]
    return _parse_edges(require_container(data, "Edges"), "Edges", node_ids)


def validate_decision_point(data: Any, flow: Flow) -> DecisionPoint:
    """
    Validate where a subflow branches off the basic flow.

    Args:
        data: ``{"InsertionNodeId", "DecisionLabel", "RejoinNodeId"}``
        flow: Current basic flow

    Returns:
        DecisionPoint: Insertion node, decision label and optional rejoin node
    """
    obj = require_object(data, "")
    node_ids = flow.node_ids()

    insertion = require_string(obj, "InsertionNodeId", "")
    node = flow.find_node(insertion)
    if node is None:
        raise SchemaValidationError(
            "InsertionNodeId", f"unknown node id '{insertion}'; expected one of {', '.join(node_ids)}"
        )
    if node.type == NodeType.START:
        raise SchemaValidationError(
            "InsertionNodeId", "decision cannot be inserted before the Start node"
        )

    rejoin = optional_string(obj, "RejoinNodeId", "") or None
    if rejoin is not None and rejoin not in node_ids:
        raise SchemaValidationError("RejoinNodeId", f"unknown node id '{rejoin}'")

    return DecisionPoint(
        insertion_node_id=insertion,
        decision_label=require_string(obj, "DecisionLabel", ""),
        rejoin_node_id=rejoin,
    )


def _parse_subflow(raw: Any, path: str, top_level_ids: list[str]) -> Subflow:
    obj = require_object(raw, path)
    name = _flow_name(obj, path)
    flow_type = require_enum(
        require_field(obj, "FlowType", path), FlowType, join_path(path, "FlowType")
    )
    if flow_type == FlowType.BASIC:
        raise SchemaValidationError(
            join_path(path, "FlowType"), "subflows must be Alternative or Exception"
        )

    nodes_path = join_path(path, "Nodes")
    nodes = _parse_nodes(require_list(obj, "Nodes", path), nodes_path)
    if all(node.type == NodeType.START for node in nodes):
        raise SchemaValidationError(nodes_path, "subflow needs at least one node besides Start")
    edges = _parse_edges(
        require_list(obj, "Edges", path, non_empty=False),
        join_path(path, "Edges"),
        [node.id for node in nodes],
    )

    branch = require_string(obj, "BranchNodeId", path)
    if branch not in top_level_ids:
        raise SchemaValidationError(
            join_path(path, "BranchNodeId"), f"unknown node id '{branch}'"
        )
    rejoin = optional_string(obj, "RejoinNodeId", path) or None
    if rejoin is not None and rejoin not in top_level_ids:
        raise SchemaValidationError(
            join_path(path, "RejoinNodeId"), f"unknown node id '{rejoin}'"
        )

    return Subflow(
        name=name,
        flow_type=flow_type,
        nodes=nodes,
        edges=edges,
        branch_node_id=branch,
        rejoin_node_id=rejoin,
    )


def validate_flow_graph(data: Any) -> FlowGraph:
    """
    Validate a complete flow graph (used for regenerated drafts).

    Args:
        data: ``{"Nodes": [...], "Edges": [...], "Subflows": [...]}``

    Returns:
        FlowGraph: Typed graph with all references resolved
    """
    obj = require_object(data, "")
    nodes = _parse_nodes(require_list(obj, "Nodes", ""), "Nodes")
    _check_terminals(nodes, "Nodes")
    node_ids = [node.id for node in nodes]
    edges = _parse_edges(require_list(obj, "Edges", ""), "Edges", node_ids)

    subflows = [
        _parse_subflow(item, join_path("Subflows", index), node_ids)
        for index, item in enumerate(require_list(obj, "Subflows", "", non_empty=False))
    ]
    ensure_unique([s.name for s in subflows], "Subflows", "subflow name")
    return FlowGraph(nodes=nodes, edges=edges, subflows=subflows)
