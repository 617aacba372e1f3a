"""Architecture compiler: component tree -> dependency-ordered generation queue.

One sequential depth-first pre-order pass. Each node's routes and actions
are resolved before its children are visited, because children inherit the
parent's accumulated routes and actions. Traversal is deliberately
single-worker: tie-breaking between equal order keys relies on discovery
order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from uigen.architecture import documentation
from uigen.architecture.actions import ActionSynthesizer
from uigen.architecture.errors import ActionSynthesisError, MalformedComponentError
from uigen.architecture.plan import build_plan
from uigen.architecture.routes import parent_path, resolve_routes
from uigen.architecture.scheduling import schedule
from uigen.schemas.architecture import (
    ActionDefinition,
    ArchitecturePlan,
    ComponentReference,
    GenerationQueueItem,
    ProjectInfo,
    RouteDefinition,
)
from uigen.schemas.components import ComponentNode, ComponentType

logger = logging.getLogger(__name__)

_TYPE_ADJUSTMENT: dict[ComponentType, int] = {
    ComponentType.LAYOUT: -5,
    ComponentType.FORM: 5,
}


def generation_order(node: ComponentNode, level: int, ancestry: Sequence[ComponentReference]) -> int:
    """Heuristic order key: ``level*100 + len(ancestry)*10 + type adjustment``.

    Layout shells sort before content at comparable depth and forms after it.
    Unrelated nodes can share a key; discovery order breaks the tie. Keys are
    clamped at zero, which only ever affects a layout root.
    """
    return max(0, level * 100 + len(ancestry) * 10 + _TYPE_ADJUSTMENT.get(node.type, 0))


def _tree_path(ancestry: Sequence[ComponentReference], name: str) -> str:
    return " > ".join([*(ref.name for ref in ancestry), name or "<unnamed>"])


class ArchitectureCompiler:
    """Compile a component tree into a sorted list of ``GenerationQueueItem``.

    Same-named nodes are deduplicated globally: the first occurrence in
    pre-order is kept and any later occurrence is skipped along with its
    whole subtree.
    """

    def __init__(self, synthesizer: ActionSynthesizer | None = None) -> None:
        self.synthesizer = synthesizer or ActionSynthesizer()

    async def compile(self, root: ComponentNode) -> list[GenerationQueueItem]:
        discovered: list[GenerationQueueItem] = []
        visited: set[str] = set()
        await self._visit(root, 0, (), (), (), discovered, visited)
        logger.debug("Compiled %d components from root %s", len(discovered), root.name)
        return schedule(discovered)

    def compile_sync(self, root: ComponentNode) -> list[GenerationQueueItem]:
        return asyncio.run(self.compile(root))

    async def build_plan(self, root: ComponentNode, project: ProjectInfo) -> ArchitecturePlan:
        queue = await self.compile(root)
        return build_plan(queue, root, project, self.synthesizer)

    async def _visit(
        self,
        node: ComponentNode,
        level: int,
        ancestry: tuple[ComponentReference, ...],
        inherited_routes: tuple[RouteDefinition, ...],
        inherited_actions: tuple[ActionDefinition, ...],
        queue: list[GenerationQueueItem],
        visited: set[str],
    ) -> None:
        path = _tree_path(ancestry, node.name)
        if not node.name or not node.name.strip():
            raise MalformedComponentError(
                "Component has no name", node_name=node.name, node_path=path,
            )

        if node.name in visited:
            logger.warning("Duplicate component name %s at %s: skipping subtree", node.name, path)
            return
        visited.add(node.name)

        own_routes = resolve_routes(node, level, parent_path(ancestry))

        try:
            server_actions = await self.synthesizer.generate_server_actions(node)
            client_actions = self.synthesizer.generate_client_actions(node, server_actions)
        except Exception as exc:
            raise ActionSynthesisError(
                f"Action synthesis failed: {exc}", node_name=node.name, node_path=path,
            ) from exc

        declared = tuple(
            ActionDefinition(
                name=a.name,
                type=a.type,
                description=a.description,
                parameters=tuple(a.parameters),
            )
            for a in node.actions
        )
        all_actions = inherited_actions + tuple(client_actions) + declared
        all_routes = inherited_routes + tuple(own_routes)

        queue.append(
            GenerationQueueItem(
                component=node,
                level=level,
                dependencies=ancestry,
                routes=all_routes,
                actions=all_actions,
                server_actions=tuple(server_actions),
                generation_order=generation_order(node, level, ancestry),
                self_documentation=documentation.synthesize(
                    node, level, ancestry, all_actions, all_routes, server_actions,
                ),
            )
        )
        logger.debug("Visited %s (level %d, %d routes)", path, level, len(own_routes))

        child_ancestry = ancestry + (ComponentReference(name=node.name, level=level),)
        for child in node.children.values():
            await self._visit(
                child, level + 1, child_ancestry, all_routes, all_actions, queue, visited,
            )
