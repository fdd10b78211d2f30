from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from fieldlink.bootstrap import load_builtin_nodes
from fieldlink.compat.connection import explain_connection, is_connectable
from fieldlink.core.contracts import FieldType
from fieldlink.core.logger import get_logger, push_graph_id, reset_graph_id
from fieldlink.models.graph_config import EdgeConfig, GraphConfig, NodeConfig
from fieldlink.nodes.registry import NodeTemplateRegistry

EdgeReason = str  # ok|unknown_node|unknown_node_type|unknown_field|incompatible_types


@dataclass(frozen=True)
class EdgeCheckResult:
    edge: EdgeConfig
    ok: bool
    reason: EdgeReason
    source_type: Optional[FieldType] = None
    target_type: Optional[FieldType] = None
    matched_rules: Tuple[str, ...] = ()
    message: str = ""


@dataclass
class GraphCheckReport:
    graph_id: str
    results: List[EdgeCheckResult] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def violations(self) -> List[EdgeCheckResult]:
        return [result for result in self.results if not result.ok]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "graph_id": self.graph_id,
            "is_valid": self.is_valid,
            "edge_count": len(self.results),
            "violations": [
                {
                    "edge": str(result.edge),
                    "reason": result.reason,
                    "source_type": str(result.source_type) if result.source_type else None,
                    "target_type": str(result.target_type) if result.target_type else None,
                    "message": result.message,
                }
                for result in self.violations
            ],
        }


class GraphChecker:
    """
    Checks every edge of a declared graph against the connection rules.

    Only port types are checked. Cycles, fan-in and fan-out are left to the
    caller. Unknown nodes and fields are reported on the offending edge rather
    than raised, so one report covers the whole graph.

    Example:
        >>> from fieldlink import GraphChecker
        >>> report = GraphChecker().check({"nodes": [...], "edges": [...]})
        >>> report.is_valid
        True
    """

    def __init__(self, graph_id: Optional[str] = None):
        """
        Args:
            graph_id: Identifier used in log records. Falls back to the
                      config's graph_id, then to a generated UUID.
        """
        self.graph_id = graph_id
        load_builtin_nodes()

    def check(self, cfg: Union[Dict[str, Any], GraphConfig]) -> GraphCheckReport:
        """
        Check all edges of ``cfg``.

        Args:
            cfg: Graph as a dict (validated here) or a ``GraphConfig``.

        Returns:
            GraphCheckReport with one result per edge, in declaration order.

        Raises:
            ValidationError: If the config dict is invalid (pydantic raises this).
        """
        if isinstance(cfg, dict):
            cfg = GraphConfig.model_validate(cfg)

        graph_id = self.graph_id or cfg.graph_id or str(uuid.uuid4())
        token = push_graph_id(graph_id)
        log = get_logger(__name__)
        try:
            nodes = cfg.node_by_id()
            report = GraphCheckReport(graph_id=graph_id)
            log.info(f"Checking {len(cfg.edges)} edge(s) across {len(nodes)} node(s)")

            for edge in cfg.edges:
                result = self._check_edge(cfg, nodes, edge)
                if result.ok:
                    log.debug(f"Edge {edge} accepted ({result.reason}; rules={list(result.matched_rules)})")
                else:
                    log.warning(f"Edge {edge} rejected: {result.message}")
                report.results.append(result)

            log.info(f"Graph check finished: {len(report.violations)} violation(s)")
            return report
        finally:
            reset_graph_id(token)

    def connectable_targets(
        self,
        cfg: Union[Dict[str, Any], GraphConfig],
        node_id: str,
        field_name: str,
    ) -> List[Tuple[str, str]]:
        """
        List the (node_id, field) inputs that the output ``node_id.field_name`` may feed.

        Used to highlight valid drop targets while a connection is dragged.
        Inputs on the source node itself are skipped. An unknown source yields
        an empty list.
        """
        if isinstance(cfg, dict):
            cfg = GraphConfig.model_validate(cfg)

        nodes = cfg.node_by_id()
        source_node = nodes.get(node_id)
        if source_node is None:
            return []
        source_outputs = self._resolve_ports(cfg, source_node, "outputs")
        if source_outputs is None or field_name not in source_outputs:
            return []
        source_type = source_outputs[field_name]

        targets: List[Tuple[str, str]] = []
        for node in cfg.nodes:
            if node.id == node_id:
                continue
            inputs = self._resolve_ports(cfg, node, "inputs")
            if not inputs:
                continue
            for input_name, target_type in inputs.items():
                if is_connectable(source_type, target_type):
                    targets.append((node.id, input_name))
        return targets

    def _check_edge(self, cfg: GraphConfig, nodes: Mapping[str, NodeConfig], edge: EdgeConfig) -> EdgeCheckResult:
        source_node = nodes.get(edge.source.node_id)
        target_node = nodes.get(edge.destination.node_id)
        for endpoint, node in ((edge.source, source_node), (edge.destination, target_node)):
            if node is None:
                return EdgeCheckResult(
                    edge=edge,
                    ok=False,
                    reason="unknown_node",
                    message=f"node {endpoint.node_id!r} is not declared",
                )

        source_outputs = self._resolve_ports(cfg, source_node, "outputs")
        target_inputs = self._resolve_ports(cfg, target_node, "inputs")
        for node, ports in ((source_node, source_outputs), (target_node, target_inputs)):
            if ports is None:
                return EdgeCheckResult(
                    edge=edge,
                    ok=False,
                    reason="unknown_node_type",
                    message=f"node {node.id!r} has unknown type {node.type!r}",
                )

        source_type = source_outputs.get(edge.source.field)
        if source_type is None:
            return EdgeCheckResult(
                edge=edge,
                ok=False,
                reason="unknown_field",
                message=f"node {source_node.id!r} ({source_node.type}) has no output {edge.source.field!r}",
            )
        target_type = target_inputs.get(edge.destination.field)
        if target_type is None:
            return EdgeCheckResult(
                edge=edge,
                ok=False,
                reason="unknown_field",
                source_type=source_type,
                message=f"node {target_node.id!r} ({target_node.type}) has no input {edge.destination.field!r}",
            )

        verdict = explain_connection(source_type, target_type)
        if not verdict.connectable:
            return EdgeCheckResult(
                edge=edge,
                ok=False,
                reason="incompatible_types",
                source_type=source_type,
                target_type=target_type,
                message=f"cannot connect {source_type} to {target_type} ({verdict.reason})",
            )
        return EdgeCheckResult(
            edge=edge,
            ok=True,
            reason="ok",
            source_type=source_type,
            target_type=target_type,
            matched_rules=verdict.matched_rules,
        )

    @staticmethod
    def _resolve_ports(cfg: GraphConfig, node: NodeConfig, side: str) -> Optional[Dict[str, FieldType]]:
        inline = cfg.templates.get(node.type)
        if inline is not None:
            return inline.output_types() if side == "outputs" else inline.input_types()
        template = NodeTemplateRegistry.try_get(node.type)
        if template is None:
            return None
        return dict(template.outputs if side == "outputs" else template.inputs)


def check_graph(cfg: Union[Dict[str, Any], GraphConfig], *, graph_id: Optional[str] = None) -> GraphCheckReport:
    """Shortcut for ``GraphChecker(graph_id).check(cfg)``."""
    return GraphChecker(graph_id=graph_id).check(cfg)
