"""
Mermaid renderer for flowcharts.

Node shapes and edge connectors come from lookup tables keyed by the node
and edge enums. Subflow node ids are prefixed with the subflow name, and raw ids that
sanitize to the same Mermaid text get numeric suffixes, so distinct nodes
never merge. Small subflows are inlined; larger ones become labelled
``subgraph`` regions.

Dependencies: text2diagram.models.flowchart
System role: Flow graph → Mermaid text
"""

import re

from text2diagram.core.exceptions import AssemblyError
from text2diagram.models.flowchart import (
    BRANCH_LABELS,
    EdgeType,
    FlowGraph,
    FlowNode,
    FlowType,
    NodeType,
    Subflow,
)

DEFAULT_INLINE_THRESHOLD = 3
INDENT = "    "

NODE_SHAPES: dict[NodeType, tuple[str, str]] = {
    NodeType.START: ("([", "])"),
    NodeType.END: ("([", "])"),
    NodeType.PROCESS: ("[", "]"),
    NodeType.SUBROUTINE: ("[[", "]]"),
    NodeType.DECISION: ("{", "}"),
    NodeType.INPUT_OUTPUT: ("[/", "/]"),
    NodeType.DOCUMENT: ("[/", "/]"),
    NodeType.DATA_STORE: ("[(", ")]"),
    NodeType.LOOP: ("{{", "}}"),
    NodeType.PARALLEL: ("[/", "\\]"),
    NodeType.COMMENT: (">", "]"),
}

EDGE_CONNECTORS: dict[EdgeType, str] = {
    EdgeType.ARROW: "-->",
    EdgeType.OPEN_ARROW: "--o",
    EdgeType.CROSS_ARROW: "--x",
    EdgeType.NO_ARROW: "---",
}

REJOIN_CONNECTOR = "-.->"

_RESERVED_IDS = {"end", "graph", "subgraph", "style", "class", "click"}


def safe_id(raw: str) -> str:
    """Mermaid-safe node identifier."""
    value = re.sub(r"\W", "_", raw)
    if not value or value[0].isdigit() or value.lower() in _RESERVED_IDS:
        value = f"n_{value}"
    return value


class _NodeIds:
    """
    Collision-free Mermaid ids for one render call.

    Ids are keyed by (scope, raw id), where scope is None for the basic
    flow and the subflow name otherwise. Distinct keys that sanitize to the
    same text get ``_2``, ``_3``, ... in first-seen order.
    """

    def __init__(self) -> None:
        self._by_key: dict[tuple[str | None, str], str] = {}
        self._subgraphs: dict[str, str] = {}
        self._used: set[str] = set()

    def _claim(self, base: str) -> str:
        candidate = base
        suffix = 2
        while candidate in self._used:
            candidate = f"{base}_{suffix}"
            suffix += 1
        self._used.add(candidate)
        return candidate

    def get(self, raw: str, scope: str | None = None) -> str:
        key = (scope, raw)
        if key not in self._by_key:
            base = safe_id(raw if scope is None else f"{scope}_{raw}")
            self._by_key[key] = self._claim(base)
        return self._by_key[key]

    def subgraph(self, name: str) -> str:
        if name not in self._subgraphs:
            self._subgraphs[name] = self._claim(safe_id(f"sg_{name}"))
        return self._subgraphs[name]


def _label(text: str) -> str:
    return text.replace('"', "#quot;")


def _edge_label(text: str) -> str:
    return text.replace('"', "#quot;").replace("|", "/")


def _node_line(node_id: str, node: FlowNode) -> str:
    try:
        opener, closer = NODE_SHAPES[node.type]
    except KeyError as e:
        raise AssemblyError(f"No shape for node type {node.type!r}") from e
    return f'{node_id}{opener}"{_label(node.label)}"{closer}'


def _edge_line(source: str, target: str, edge_type: EdgeType, label: str | None) -> str:
    try:
        arrow = EDGE_CONNECTORS[edge_type]
    except KeyError as e:
        raise AssemblyError(f"No connector for edge type {edge_type!r}") from e
    if label:
        return f"{source} {arrow}|{_edge_label(label)}| {target}"
    return f"{source} {arrow} {target}"


def _render_subflow_nodes(subflow: Subflow, threshold: int, ids: _NodeIds, lines: list[str]) -> None:
    nodes = [node for node in subflow.nodes if node.type != NodeType.START]
    if len(nodes) <= threshold:
        lines.append(f"{INDENT}%% {subflow.name}")
        for node in nodes:
            lines.append(INDENT + _node_line(ids.get(node.id, subflow.name), node))
        return

    lines.append(f'{INDENT}subgraph {ids.subgraph(subflow.name)}["{_label(subflow.name)}"]')
    for node in nodes:
        lines.append(INDENT * 2 + _node_line(ids.get(node.id, subflow.name), node))
    lines.append(f"{INDENT}end")


def _render_subflow_edges(subflow: Subflow, ids: _NodeIds, lines: list[str]) -> None:
    start = subflow.start_node()
    start_id = start.id if start is not None else None

    entry = subflow.entry_node()
    if subflow.branch_node_id and entry is not None:
        into_label, _ = BRANCH_LABELS.get(subflow.flow_type, ("Yes", "No"))
        edge_type = EdgeType.OPEN_ARROW if subflow.flow_type == FlowType.EXCEPTION else EdgeType.ARROW
        lines.append(
            INDENT + _edge_line(
                ids.get(subflow.branch_node_id),
                ids.get(entry.id, subflow.name),
                edge_type,
                into_label,
            )
        )

    for edge in subflow.edges:
        # The decision edge replaces the subflow's own Start node.
        if start_id is not None and start_id in (edge.source_id, edge.target_id):
            continue
        lines.append(
            INDENT + _edge_line(
                ids.get(edge.source_id, subflow.name),
                ids.get(edge.target_id, subflow.name),
                edge.type,
                edge.label,
            )
        )

    if subflow.rejoin_node_id:
        for node in subflow.nodes:
            if node.type == NodeType.END:
                lines.append(
                    f"{INDENT}{ids.get(node.id, subflow.name)} {REJOIN_CONNECTOR} "
                    f"{ids.get(subflow.rejoin_node_id)}"
                )


def render_flowchart(graph: FlowGraph, inline_threshold: int = DEFAULT_INLINE_THRESHOLD) -> str:
    """
    Render a flow graph as Mermaid ``graph TD`` text.

    Args:
        graph: Validated flow graph
        inline_threshold: Subflows with at most this many nodes (Start
            excluded) are inlined instead of wrapped in a subgraph

    Returns:
        str: Mermaid flowchart
    """
    ids = _NodeIds()
    lines = ["graph TD"]

    for node in graph.nodes:
        lines.append(INDENT + _node_line(ids.get(node.id), node))
    for subflow in graph.subflows:
        _render_subflow_nodes(subflow, inline_threshold, ids, lines)

    for edge in graph.edges:
        lines.append(
            INDENT + _edge_line(ids.get(edge.source_id), ids.get(edge.target_id), edge.type, edge.label)
        )
    for subflow in graph.subflows:
        _render_subflow_edges(subflow, ids, lines)

    return "\n".join(lines)
