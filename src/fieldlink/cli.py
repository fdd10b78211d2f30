"""
Command-line interface and entry points for fieldlink.

Checks the edges of a graph file against the connection rules. Graph files
are JSON, or YAML when PyYAML is installed (``pip install fieldlink[yaml]``).
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from fieldlink.bootstrap import load_builtin_nodes
from fieldlink.core.exceptions import GraphConfigError
from fieldlink.core.logger import get_logger, set_log_level
from fieldlink.graph_checker import GraphChecker
from fieldlink.models.graph_config import GraphConfig
from fieldlink.nodes.registry import NodeTemplateRegistry

logger = get_logger(__name__)


def load_graph_file(config_path: str) -> Dict[str, Any]:
    """
    Read a graph file into a plain dict.

    Raises:
        GraphConfigError: If the file is missing, has an unsupported suffix,
                          or cannot be parsed.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise GraphConfigError(f"Graph file not found: {config_path}")

    with open(config_file, "r") as f:
        if config_file.suffix == ".json":
            try:
                config = json.load(f)
            except json.JSONDecodeError as exc:
                raise GraphConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
        elif config_file.suffix in (".yaml", ".yml"):
            try:
                import yaml
            except ImportError as exc:
                raise GraphConfigError(
                    "PyYAML required for YAML graphs. Install with: pip install pyyaml"
                ) from exc
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise GraphConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        else:
            raise GraphConfigError(
                f"Unsupported graph format: {config_file.suffix}. Use .json or .yaml"
            )

    if not isinstance(config, dict):
        raise GraphConfigError(f"Graph file {config_path} must contain a mapping at the top level")
    return config


def main(
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    *,
    graph_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Check every edge of a graph.

    Can be called with either:
    - A graph file path (JSON/YAML)
    - A graph dictionary (programmatic)

    Returns:
        Report dict with ``status`` ("valid" or "invalid"), ``graph_id``,
        ``edge_count`` and ``violations``.

    Raises:
        GraphConfigError: If the graph file cannot be read.
        ValueError: If neither config_path nor config_dict is provided.
        ValidationError: If the graph does not match the schema.

    Example:
        >>> from fieldlink.cli import main
        >>> result = main(config_dict={"nodes": [...], "edges": [...]})
        >>> print(result["status"])
    """
    try:
        if config_dict is not None:
            config = config_dict
            logger.info("Using provided graph dictionary")
        elif config_path:
            config = load_graph_file(config_path)
            logger.info(f"Loaded graph from {config_path}")
        else:
            raise ValueError("Either config_path or config_dict must be provided")

        report = GraphChecker(graph_id=graph_id).check(config)

        result: Dict[str, Any] = {"status": "valid" if report.is_valid else "invalid"}
        result.update(report.to_dict())
        return result

    except Exception as e:
        logger.error(f"Graph check failed: {str(e)}")
        raise


def validate_config(config_path: str) -> bool:
    """
    Validate a graph file's schema and node types without checking edges.

    Returns:
        True if the graph is well formed and every node type resolves.

    Raises:
        GraphConfigError: If the file cannot be read or a node type is unknown.
        ValidationError: If the graph does not match the schema.
    """
    try:
        config = load_graph_file(config_path)
        logger.info(f"Validating graph: {config_path}")

        cfg = GraphConfig.model_validate(config)

        load_builtin_nodes()
        unknown = sorted(
            {
                node.type
                for node in cfg.nodes
                if node.type not in cfg.templates and NodeTemplateRegistry.try_get(node.type) is None
            }
        )
        if unknown:
            raise GraphConfigError(f"Unknown node types: {unknown}")

        logger.info("Graph is valid")
        return True

    except Exception as e:
        logger.error(f"Graph validation failed: {str(e)}")
        raise


def _print_report(result: Dict[str, Any]) -> None:
    print(f"graph {result['graph_id']}: {result['status']} ({result['edge_count']} edge(s))")
    for violation in result["violations"]:
        print(f"  {violation['edge']}: {violation['reason']} - {violation['message']}")


def cli(argv: Optional[list] = None) -> None:
    """
    Command-line interface for fieldlink.

    Usage:
        fieldlink check /path/to/graph.json [--verbose]
        fieldlink validate /path/to/graph.json
    """
    parser = argparse.ArgumentParser(
        prog="fieldlink",
        description="Check node-graph edges for field type compatibility",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    check_parser = subparsers.add_parser("check", help="Check every edge of a graph")
    check_parser.add_argument("config", help="Path to graph file (JSON or YAML)")
    check_parser.add_argument("--graph-id", default=None, help="Identifier used in log records")
    check_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    validate_parser = subparsers.add_parser(
        "validate", help="Validate graph schema and node types without checking edges"
    )
    validate_parser.add_argument("config", help="Path to graph file (JSON or YAML)")

    args = parser.parse_args(argv)

    if args.command == "check":
        if args.verbose:
            set_log_level("DEBUG")
        try:
            result = main(config_path=args.config, graph_id=args.graph_id)
        except Exception as e:
            logger.error(f"Check failed: {e}")
            sys.exit(1)
        _print_report(result)
        sys.exit(0 if result["status"] == "valid" else 1)

    elif args.command == "validate":
        try:
            validate_config(args.config)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(1)
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    cli()
