"""Serialize graphs to Graphviz DOT text."""

from __future__ import annotations

from typing import Iterable

from diagen.models import ModuleGraph, Subgraph

_INDENT = "    "


def to_dot(nodes: Iterable[str], edges: Iterable[tuple[str, str]]) -> str:
    """Render nodes then edges, in the order given."""
    lines = ["digraph G {"]
    lines.extend(f"{_INDENT}{node}" for node in nodes)
    lines.extend(f"{_INDENT}{src} -> {dst}" for src, dst in edges)
    lines.append("}")
    return "\n".join(lines) + "\n"


def subgraph_dot(subgraph: Subgraph) -> str:
    return to_dot(subgraph.nodes, subgraph.edges)


def global_graph_dot(graph: ModuleGraph) -> str:
    """The whole forward graph, declared modules in sorted order."""
    modules = sorted(graph.forward)
    edges = [(module, dep) for module in modules for dep in graph.forward[module]]
    return to_dot(modules, edges)
