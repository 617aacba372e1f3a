"""Tests for the rule-based action synthesizer."""

from __future__ import annotations

import pytest

from uigen.architecture.actions import ActionSynthesizer
from uigen.schemas.components import ActionType, ComponentNode


@pytest.fixture
def synthesizer() -> ActionSynthesizer:
    return ActionSynthesizer()


class TestServerActions:
    @pytest.mark.asyncio
    async def test_form_gets_submit_action(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(name="ProductForm", type="form")
        actions = await synthesizer.generate_server_actions(node)
        assert [a.name for a in actions] == ["submitProductForm"]
        submit = actions[0]
        assert [p.name for p in submit.parameters] == ["formData", "userId"]
        assert submit.parameters[1].required is False
        assert submit.database == "product_forms"
        assert submit.validation == "productformSchema"
        assert submit.caching.strategy == "no-cache"

    @pytest.mark.asyncio
    async def test_display_gets_fetch_action(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(name="Category", type="display")
        actions = await synthesizer.generate_server_actions(node)
        assert [a.name for a in actions] == ["getCategories"]
        assert actions[0].returns == "Category[]"
        assert actions[0].caching.revalidate == 60

    @pytest.mark.asyncio
    async def test_interactive_gets_crud(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(name="Cart", type="interactive")
        actions = await synthesizer.generate_server_actions(node)
        assert [a.name for a in actions] == ["createCart", "getCart", "updateCart", "deleteCart"]
        assert actions[3].returns == "boolean"

    @pytest.mark.asyncio
    async def test_layout_gets_nothing(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(name="Shell", type="layout")
        assert await synthesizer.generate_server_actions(node) == []

    @pytest.mark.asyncio
    async def test_database_binding_overrides_table(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(
            name="ProductForm", type="form", database={"table": "products", "operations": ["write"]},
        )
        actions = await synthesizer.generate_server_actions(node)
        assert actions[0].database == "products"


class TestClientActions:
    @pytest.mark.asyncio
    async def test_one_wrapper_per_server_action(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(name="Cart", type="interactive")
        server_actions = await synthesizer.generate_server_actions(node)
        client_actions = synthesizer.generate_client_actions(node, server_actions)

        assert [a.name for a in client_actions] == [
            "handleCreateCart", "handleGetCart", "handleUpdateCart", "handleDeleteCart",
        ]
        assert all(a.type == ActionType.CLIENT_ACTION for a in client_actions)
        assert client_actions[2].parameters == ("id", "data")
        assert client_actions[2].server_action == "updateCart"


class TestApiEndpoint:
    @pytest.mark.asyncio
    async def test_methods_from_name_prefix(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(name="ShoppingCart", type="interactive")
        server_actions = await synthesizer.generate_server_actions(node)
        endpoints = [synthesizer.generate_api_endpoint(sa, node) for sa in server_actions]

        assert {e.path for e in endpoints} == {"/api/shopping-cart"}
        assert [e.method for e in endpoints] == ["POST", "GET", "PUT", "DELETE"]
        assert endpoints[0].action == "createShoppingCart"

    @pytest.mark.asyncio
    async def test_submit_is_get(self, synthesizer: ActionSynthesizer) -> None:
        node = ComponentNode(name="ContactForm", type="form")
        (submit,) = await synthesizer.generate_server_actions(node)
        assert synthesizer.generate_api_endpoint(submit, node).method == "GET"
