"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from uigen.schemas.components import ComponentNode
from uigen.shared.llm_client import LLMClient

SAMPLE_MANIFEST = {
    "Dashboard": {
        "type": "layout",
        "description": "Main application shell",
        "children": {
            "Product": {
                "type": "layout",
                "description": "Product management area",
                "children": {
                    "ProductList": {"type": "display"},
                    "ProductForm": {
                        "type": "form",
                        "actions": [{"name": "onSubmit", "type": "form-action"}],
                        "database": {"table": "products", "operations": ["write", "update"]},
                    },
                },
            },
            "Settings": {"type": "interactive"},
        },
    },
    "metadata": {"version": "1.0"},
}


@pytest.fixture
def sample_tree() -> ComponentNode:
    """Dashboard(layout) > Product(layout) > {ProductList, ProductForm}; Dashboard > Settings."""
    return ComponentNode.model_validate({
        "name": "Dashboard",
        "type": "layout",
        "description": "Main application shell",
        "children": {
            "Product": {
                "name": "Product",
                "type": "layout",
                "children": {
                    "ProductList": {"name": "ProductList", "type": "display"},
                    "ProductForm": {
                        "name": "ProductForm",
                        "type": "form",
                        "actions": [{"name": "onSubmit", "type": "form-action"}],
                        "database": {"table": "products", "operations": ["write", "update"]},
                    },
                },
            },
            "Settings": {"name": "Settings", "type": "interactive"},
        },
    })


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    path = tmp_path / ".uigen" / "component-list.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(SAMPLE_MANIFEST))
    return path


@pytest.fixture
def tmp_config(tmp_path: Path, manifest_file: Path) -> Path:
    """Write a minimal valid config YAML next to the sample manifest and return its path."""
    cfg = tmp_path / "uigen.yml"
    cfg.write_text(
        """\
project_name: "Test Shop"
description: "A small storefront"
output_directory: "{out}"
""".format(out=str(tmp_path / "out"))
    )
    return cfg


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Return an LLMClient with a mocked OpenAI SDK underneath."""
    client = LLMClient.__new__(LLMClient)
    client._client = AsyncMock()
    client.model = "gpt-4o"
    return client
