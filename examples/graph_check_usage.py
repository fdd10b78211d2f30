"""
Example: Checking edges before committing them to a graph.

This shows the two ways an editor backend uses fieldlink:
- Per edge: ask whether a single connection is legal while the user drags it
- Per graph: check every edge of a saved graph file in one report
"""

from fieldlink import FieldType, GraphChecker, explain_connection, is_connectable
from fieldlink.cli import load_graph_file


# =============================================================================
# Example 1: A single candidate edge
# =============================================================================
source = FieldType("IntegerField")
target = FieldType.collection_or_scalar("StringField")

print(f"{source} -> {target}: {is_connectable(source, target)}")
print(f"   Why: {explain_connection(source, target)}")


# =============================================================================
# Example 2: Highlight drop targets for a dragged output
# =============================================================================
graph = load_graph_file("examples/collect_iterate_graph.json")
checker = GraphChecker()

for node_id, field_name in checker.connectable_targets(graph, "seed", "value"):
    print(f"   seed.value may connect to {node_id}.{field_name}")


# =============================================================================
# Example 3: Check a whole graph
# =============================================================================
report = checker.check(graph)
print(f"\nGraph {report.graph_id} valid: {report.is_valid}")
for violation in report.violations:
    print(f"   {violation.edge}: {violation.message}")
