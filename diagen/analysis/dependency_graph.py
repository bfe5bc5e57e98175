"""Dependency graph builder: forward and inverse maps, BFS reachability subgraphs."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from diagen.models import Direction, ModuleGraph, ScannedModule, Subgraph

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Build a module dependency graph from scanned modules."""

    def build(self, modules: Iterable[ScannedModule]) -> ModuleGraph:
        graph = ModuleGraph()

        for module in modules:
            name = module.name
            if name in graph.forward:
                # Later declarations win; dependents recorded earlier stay.
                logger.warning(
                    "Module %s declared more than once (%s, %s); keeping the later one",
                    name, graph.sources.get(name), module.file_path,
                )
            graph.inverse.setdefault(name, [])

            for dep in module.dependencies:
                graph.inverse.setdefault(dep, []).append(name)

            graph.forward[name] = list(module.dependencies)
            if module.file_path is not None:
                graph.sources[name] = module.file_path

        return graph

    def derive_subgraph(
        self,
        adjacency: dict[str, list[str]],
        root: str,
        direction: Direction,
    ) -> Subgraph:
        """BFS from root, recording every edge walked.

        Edges to already-visited nodes are recorded too, so cycles and
        diamonds show all their edges. For a backward view each edge is
        flipped so arrows still point from dependent to dependency.
        """
        result = Subgraph(root=root, direction=direction)

        visited = {root}
        queue = deque([root])

        while queue:
            current = queue.popleft()
            result.nodes.append(current)

            for neighbor in adjacency.get(current, []):
                if direction is Direction.FORWARD:
                    result.edges.append((current, neighbor))
                else:
                    result.edges.append((neighbor, current))
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        logger.debug(
            "%s subgraph of %s: %d nodes, %d edges",
            direction.value, root, len(result.nodes), len(result.edges),
        )
        return result

    def forward_subgraph(self, graph: ModuleGraph, root: str) -> Subgraph:
        return self.derive_subgraph(graph.forward, root, Direction.FORWARD)

    def backward_subgraph(self, graph: ModuleGraph, root: str) -> Subgraph:
        return self.derive_subgraph(graph.inverse, root, Direction.BACKWARD)
