"""Linearize queue items with an explicit dependency graph (Kahn's algorithm).

Edges are parent -> child plus declared ``depends_on`` cross-references.
Among items whose dependencies are all satisfied, the lowest
``(generation_order, discovery_index)`` goes first, so without
cross-references the result equals a stable sort by ``generation_order``:
a child's key is always at least 100 above its parent's.
"""

from __future__ import annotations

import heapq
import logging
from collections import defaultdict
from collections.abc import Sequence

from uigen.architecture.errors import DependencyCycleError
from uigen.schemas.architecture import GenerationQueueItem

logger = logging.getLogger(__name__)


def dependency_edges(items: Sequence[GenerationQueueItem]) -> dict[int, set[int]]:
    """Map each item index to the indexes that must come after it."""
    index_of = {item.component.name: i for i, item in enumerate(items)}
    edges: dict[int, set[int]] = defaultdict(set)

    for i, item in enumerate(items):
        if item.dependencies:
            parent = item.dependencies[-1].name
            if parent in index_of:
                edges[index_of[parent]].add(i)
        for target in item.component.depends_on:
            if target not in index_of:
                logger.warning(
                    "Component %s depends on unknown component %s: ignoring",
                    item.component.name, target,
                )
                continue
            if index_of[target] == i:
                continue
            edges[index_of[target]].add(i)

    return edges


def schedule(items: Sequence[GenerationQueueItem]) -> list[GenerationQueueItem]:
    """Return ``items`` in dependency order; ``items`` must be in discovery order."""
    edges = dependency_edges(items)
    in_degree = [0] * len(items)
    for targets in edges.values():
        for t in targets:
            in_degree[t] += 1

    ready = [(item.generation_order, i) for i, item in enumerate(items) if in_degree[i] == 0]
    heapq.heapify(ready)

    ordered: list[GenerationQueueItem] = []
    while ready:
        _, i = heapq.heappop(ready)
        ordered.append(items[i])
        for t in edges.get(i, ()):
            in_degree[t] -= 1
            if in_degree[t] == 0:
                heapq.heappush(ready, (items[t].generation_order, t))

    if len(ordered) != len(items):
        stuck = [items[i].component.name for i in range(len(items)) if in_degree[i] > 0]
        raise DependencyCycleError(stuck)

    return ordered
