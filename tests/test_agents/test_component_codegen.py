"""Tests for the Component Generator agent."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from uigen.agents.component_codegen.agent import ComponentCodegenAgent
from uigen.architecture.compiler import ArchitectureCompiler
from uigen.schemas.codegen import GeneratedComponent
from uigen.shared.llm_client import DryRunClient, LLMClient

SAMPLE_OUTPUT = {
    "component_name": "ProductForm",
    "file_name": "ProductForm.tsx",
    "code": "export function ProductForm() { return <form /> }\n",
    "notes": ["Assumes a products table"],
}


@pytest.fixture
def form_item(sample_tree):
    queue = ArchitectureCompiler().compile_sync(sample_tree)
    return next(item for item in queue if item.component.name == "ProductForm")


class TestComponentCodegenAgent:
    def test_name(self, mock_llm_client: LLMClient) -> None:
        assert ComponentCodegenAgent(mock_llm_client).name == "Component Generator"

    def test_user_message(self, mock_llm_client: LLMClient, form_item) -> None:
        message = ComponentCodegenAgent(mock_llm_client).build_user_message(form_item)

        assert message.startswith("Component: ProductForm\nType: form\nLevel: 2")
        assert " * Component: ProductForm" in message
        assert "- /product/product/[id]/edit (dynamic)" in message
        assert "- handleSubmitProductForm (client-action) -> submitProductForm" in message
        assert "- onSubmit (form-action)" in message
        assert "- submitProductForm(formData, userId)" in message

    def test_user_message_empty_sections(self, mock_llm_client: LLMClient, sample_tree) -> None:
        queue = ArchitectureCompiler().compile_sync(sample_tree)
        root = queue[0]
        message = ComponentCodegenAgent(mock_llm_client).build_user_message(root)
        assert "## Server actions\n- None" in message

    def test_parse_output(self, mock_llm_client: LLMClient) -> None:
        agent = ComponentCodegenAgent(mock_llm_client)
        result = agent.parse_output(json.dumps(SAMPLE_OUTPUT))
        assert isinstance(result, GeneratedComponent)
        assert result.notes == ["Assumes a products table"]

    @pytest.mark.asyncio
    async def test_generate_defaults_file_name(self, mock_llm_client: LLMClient, form_item) -> None:
        agent = ComponentCodegenAgent(mock_llm_client)
        agent.client.simple_completion = AsyncMock(
            return_value=json.dumps({"component_name": "ProductForm", "code": "x"})
        )
        result = await agent.generate(form_item)
        assert result.file_name == "ProductForm.tsx"

    @pytest.mark.asyncio
    async def test_generate_with_dry_run_client(self, form_item) -> None:
        result = await ComponentCodegenAgent(DryRunClient()).generate(form_item)
        assert result.component_name == "ProductForm"
        assert "data-component=\"ProductForm\"" in result.code
