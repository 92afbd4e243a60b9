"""Dependency graph utilities.

Provides topological sorting for ordering the workspace catalog, and the
reverse (dependents) view used to propagate bumps. When package A depends
on package B, B comes first.
"""

from __future__ import annotations

from collections.abc import Mapping

from .models import Package


def reverse_deps(packages: Mapping[str, Package]) -> dict[str, list[str]]:
    """Map each package to the sorted list of packages that depend on it.

    Dependencies outside ``packages`` are ignored.
    """
    dependents: dict[str, list[str]] = {n: [] for n in packages}
    for name, info in packages.items():
        for dep in info.deps:
            if dep in dependents:
                dependents[dep].append(name)
    return {n: sorted(d) for n, d in dependents.items()}


def topo_sort(packages: Mapping[str, Package]) -> list[str]:
    """Topologically sort packages by their internal dependencies.

    Uses Kahn's algorithm to produce an order where dependencies come
    before dependents. Packages with no dependencies are sorted
    alphabetically for deterministic output.

    Args:
        packages: Map of package name → Package with deps.

    Returns:
        List of package names, dependencies first.

    Raises:
        RuntimeError: If a dependency cycle is detected.

    Example:
        If A depends on B, and B depends on C:
        topo_sort({A, B, C}) → [C, B, A]
    """
    # Count incoming edges (dependencies) for each package
    in_degree = {n: 0 for n in packages}
    for name, info in packages.items():
        in_degree[name] = sum(1 for dep in info.deps if dep in packages)

    dependents = reverse_deps(packages)
    queue = sorted(n for n, d in in_degree.items() if d == 0)
    order: list[str] = []

    while queue:
        node = queue.pop(0)
        order.append(node)
        for dependent in dependents[node]:
            in_degree[dependent] -= 1
            # When a package has all deps satisfied, add to queue
            if in_degree[dependent] == 0:
                queue.append(dependent)

    # If we didn't process all packages, there must be a cycle
    if len(order) != len(packages):
        remaining = sorted(set(packages) - set(order))
        raise RuntimeError(f"Dependency cycle detected involving: {remaining}")

    return order
