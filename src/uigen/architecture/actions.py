"""Action synthesizer: server actions, client wrappers and API endpoints per component.

The compiler only aggregates what this class returns. Subclass it (or pass
any object with the same three methods) to plug in a different strategy,
e.g. one that asks a model for the action set.
"""

from __future__ import annotations

from collections.abc import Sequence

from uigen.architecture.naming import capitalize, kebab_case, pluralize, snake_case
from uigen.schemas.architecture import (
    ActionDefinition,
    ApiEndpoint,
    CachingPolicy,
    HttpMethod,
    ServerActionDefinition,
    ServerActionParameter,
)
from uigen.schemas.components import ActionType, ComponentNode, ComponentType

_METHOD_PREFIXES: tuple[tuple[str, HttpMethod], ...] = (
    ("create", "POST"),
    ("update", "PUT"),
    ("delete", "DELETE"),
)


class ActionSynthesizer:
    """Rule-based synthesizer keyed on ``ComponentNode.type``.

    - form        -> ``submit<Name>``
    - display     -> ``get<Names>``
    - interactive -> ``create/get/update/delete<Name>``
    - layout      -> nothing
    """

    async def generate_server_actions(self, node: ComponentNode) -> list[ServerActionDefinition]:
        match node.type:
            case ComponentType.FORM:
                return [self._form_submit_action(node)]
            case ComponentType.DISPLAY:
                return [self._data_fetch_action(node)]
            case ComponentType.INTERACTIVE:
                return self._crud_actions(node)
            case _:
                return []

    def generate_client_actions(
        self,
        node: ComponentNode,
        server_actions: Sequence[ServerActionDefinition],
    ) -> list[ActionDefinition]:
        return [
            ActionDefinition(
                name=f"handle{capitalize(sa.name)}",
                type=ActionType.CLIENT_ACTION,
                description=f"Client-side handler for {sa.name}",
                parameters=tuple(p.name for p in sa.parameters),
                server_action=sa.name,
            )
            for sa in server_actions
        ]

    def generate_api_endpoint(
        self, server_action: ServerActionDefinition, node: ComponentNode
    ) -> ApiEndpoint:
        method: HttpMethod = "GET"
        for prefix, candidate in _METHOD_PREFIXES:
            if server_action.name.startswith(prefix):
                method = candidate
        return ApiEndpoint(
            path=f"/api/{kebab_case(node.name)}",
            method=method,
            action=server_action.name,
        )

    # ------------------------------------------------------------------
    # Per-type rules
    # ------------------------------------------------------------------

    @staticmethod
    def database_table(node: ComponentNode) -> str:
        if node.database and node.database.table:
            return node.database.table
        return snake_case(pluralize(node.name))

    def _form_submit_action(self, node: ComponentNode) -> ServerActionDefinition:
        return ServerActionDefinition(
            name=f"submit{node.name}",
            description=f"Handle {node.name} form submission",
            parameters=(
                ServerActionParameter(
                    name="formData",
                    type="FormData",
                    required=True,
                    description="Form data from client submission",
                ),
                ServerActionParameter(
                    name="userId",
                    type="string",
                    required=False,
                    description="Optional user ID for authentication",
                ),
            ),
            returns=f"{{ success: boolean; data?: {node.name}; error?: string }}",
            database=self.database_table(node),
            validation=f"{node.name.lower()}Schema",
            middleware=("auth", "rateLimit"),
            error_handling=("ValidationError", "DatabaseError", "AuthError"),
            caching=CachingPolicy(strategy="no-cache"),
        )

    def _data_fetch_action(self, node: ComponentNode) -> ServerActionDefinition:
        return ServerActionDefinition(
            name=f"get{pluralize(node.name)}",
            description=f"Fetch data for {node.name} display",
            parameters=(
                ServerActionParameter(
                    name="filters",
                    type="Record<string, any>",
                    required=False,
                    description="Optional filters for data fetching",
                ),
                ServerActionParameter(
                    name="pagination",
                    type="{ page: number; limit: number }",
                    required=False,
                    description="Pagination parameters",
                ),
            ),
            returns=f"{node.name}[]",
            database=self.database_table(node),
            middleware=("auth",),
            caching=CachingPolicy(strategy="revalidate", revalidate=60),
        )

    def _crud_actions(self, node: ComponentNode) -> list[ServerActionDefinition]:
        name = node.name
        table = self.database_table(node)
        id_param = ServerActionParameter(name="id", type="string", required=True, description=f"{name} ID")
        return [
            ServerActionDefinition(
                name=f"create{name}",
                description=f"Create new {name}",
                parameters=(
                    ServerActionParameter(
                        name="data",
                        type=f"Omit<{name}, 'id'>",
                        required=True,
                        description=f"{name} data without ID",
                    ),
                ),
                returns=name,
                database=table,
                validation=f"{name.lower()}Schema",
                middleware=("auth", "rateLimit"),
            ),
            ServerActionDefinition(
                name=f"get{name}",
                description=f"Get {name} by ID",
                parameters=(id_param,),
                returns=f"{name} | null",
                database=table,
                middleware=("auth",),
                caching=CachingPolicy(strategy="revalidate", revalidate=60),
            ),
            ServerActionDefinition(
                name=f"update{name}",
                description=f"Update existing {name}",
                parameters=(
                    id_param,
                    ServerActionParameter(
                        name="data",
                        type=f"Partial<{name}>",
                        required=True,
                        description="Fields to update",
                    ),
                ),
                returns=name,
                database=table,
                validation=f"{name.lower()}UpdateSchema",
                middleware=("auth", "rateLimit"),
            ),
            ServerActionDefinition(
                name=f"delete{name}",
                description=f"Delete {name}",
                parameters=(id_param,),
                returns="boolean",
                database=table,
                middleware=("auth", "rateLimit"),
            ),
        ]
