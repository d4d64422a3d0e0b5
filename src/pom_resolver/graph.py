from __future__ import annotations

import logging

import networkx as nx

from pom_resolver.exceptions import CyclicParentError
from pom_resolver.inheritance import describe
from pom_resolver.workspace import Workspace

logger = logging.getLogger(__name__)


def build_graph(workspace: Workspace) -> nx.DiGraph:
    """Build a directed graph of the workspace's projects and the POMs they reference.

    Nodes are POM coordinates (the file path when the coordinate is unresolved).
    Edges carry a `kind`:
        - "parent": A -> B means B is A's parent POM
        - "dependency": A -> B means A declares a dependency resolved to POM B
    """
    g = nx.DiGraph()
    for pom in workspace.projects():
        a = describe(pom)
        g.add_node(a, file=str(pom.file))
        try:
            for parent in pom.parent_poms():
                g.add_edge(a, describe(parent), kind="parent")
            for dep in pom.dependencies():
                for target in dep.poms():
                    g.add_edge(a, describe(target), kind="dependency", scope=dep.scope())
        except CyclicParentError as exc:
            logger.warning("Dependencies of %s skipped: %s", a, exc)
    return g


def reverse_dependencies(g: nx.DiGraph, target: str) -> list[str]:
    """Return POMs that depend on `target` through a dependency edge."""
    if target not in g:
        return []
    return sorted(u for u, _, kind in g.in_edges(target, data="kind") if kind == "dependency")


def parent_cycles(g: nx.DiGraph) -> list[list[str]]:
    """Return every cycle made of parent edges, each starting at its smallest node id."""
    parents = nx.DiGraph()
    parents.add_edges_from((u, v) for u, v, kind in g.edges(data="kind") if kind == "parent")
    found: list[list[str]] = []
    for cycle in nx.simple_cycles(parents):
        start = cycle.index(min(cycle))
        found.append(cycle[start:] + cycle[:start])
    return sorted(found)
