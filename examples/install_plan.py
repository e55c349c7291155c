"""Install Plan Example for mapgraph.

This example builds a package dependency graph, then:
- prints an install order (topological sort)
- removes every package that depends on openssl while iterating
- hands a read-only view of the result to a reporting function

Run it with:
    python examples/install_plan.py
"""

from mapgraph import Digraph, MapDigraph, ReadOnlyDigraphError, topological_sort, unmodifiable

# -----------------------------------------------------------------------------
# Graph Setup
# -----------------------------------------------------------------------------

packages: MapDigraph[str, str | None] = MapDigraph.sorted_by()
packages.update(
    [
        ("libc", "openssl", ">=2.31"),
        ("libc", "python", ">=2.31"),
        ("openssl", "python", ">=3.0"),
        ("python", "pip", ">=3.12"),
        ("openssl", "curl", None),
    ],
)
packages.add("docs")


def report(graph: Digraph[str, str | None]) -> None:
    """Print every dependency with its version constraint."""
    for source, target, constraint in graph.edges():
        print(f"  {source} -> {target}" + (f" ({constraint})" if constraint else ""))
    try:
        graph.add("malware")
    except ReadOnlyDigraphError as e:
        print(f"  (refused to modify the graph: {e})")


if __name__ == "__main__":
    print("Install order:", ", ".join(topological_sort(packages)))

    # Drop everything built on top of openssl
    dependents = packages.reverse()
    cursor = iter(packages.vertices())
    for package in cursor:
        if dependents.contains_edge(package, "openssl"):
            cursor.remove()

    print(f"Without openssl dependents: {packages!r}")
    print("Remaining dependencies:")
    report(unmodifiable(packages))
    print("Acyclic:", packages.is_acyclic())
