"""Tests for scaffold rendering and file writing."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from uigen.architecture.compiler import ArchitectureCompiler
from uigen.output.scaffold import (
    collect_route_files,
    render_layout_file,
    render_page_file,
    render_server_action,
    render_server_action_file,
    route_directory,
    write_scaffold,
)
from uigen.schemas.architecture import RouteDefinition, ServerActionDefinition, ServerActionParameter
from uigen.schemas.components import ComponentNode

_ACTION_IMPORT = re.compile(r"^import \{ (.+) \} from '@/actions/(.+)';$", re.MULTILINE)
_EXPORTED = re.compile(r"^export async function (\w+)\(", re.MULTILINE)

ORDERS_TREE = {
    "name": "Shop",
    "type": "layout",
    "children": {
        "Orders": {
            "name": "Orders",
            "type": "layout",
            "actions": [{"name": "onRefresh"}],
            "children": {
                "OrderDetail": {"name": "OrderDetail", "type": "display"},
                "OrderForm": {
                    "name": "OrderForm",
                    "type": "form",
                    "actions": [{"name": "onSubmit", "type": "form-action"}],
                },
            },
        },
    },
}


@pytest.fixture
def queue(sample_tree):
    return ArchitectureCompiler().compile_sync(sample_tree)


class TestRenderers:
    def test_server_action(self) -> None:
        action = ServerActionDefinition(
            name="getProducts",
            description="Fetch products",
            parameters=(ServerActionParameter(name="filters", type="Record<string, any>", required=False),),
            returns="Product[]",
            database="products",
            middleware=("auth",),
        )
        text = render_server_action(action)
        assert "export async function getProducts(filters?: Record<string, any>): Promise<Product[]> {" in text
        assert "    // Database: products" in text
        assert "    // Middleware: auth" in text
        assert "Validation" not in text

    def test_server_action_file_header(self, queue) -> None:
        settings = next(i for i in queue if i.component.name == "Settings")
        text = render_server_action_file("Settings", settings.server_actions)
        assert text.startswith("'use server';\n")
        assert text.count("export async function") == 4

    def test_dynamic_page(self, queue) -> None:
        route = RouteDefinition(
            path="/product/product/[id]/edit",
            type="dynamic",
            page="ProductForm",
            components=("ProductForm",),
            actions=("onSubmit",),
        )
        form = next(i for i in queue if i.component.name == "ProductForm")
        text = render_page_file(route, form.server_actions)
        assert text.startswith("import { ProductForm } from '@/components/product-form/ProductForm';")
        assert "import { submitProductForm } from '@/actions/product-formActions';" in text
        assert "onSubmit" not in text
        assert "// Fetch data using submitProductForm(params.id)" in text
        assert "{ params }: { params: { id: string } }" in text
        assert "<ProductForm />" in text

    def test_dynamic_page_prefers_getter(self, queue) -> None:
        settings = next(i for i in queue if i.component.name == "Settings")
        route = RouteDefinition(path="/settings/[id]", type="dynamic", page="Settings")
        text = render_page_file(route, settings.server_actions)
        assert "// Fetch data using getSettings(params.id)" in text

    def test_page_without_server_actions_imports_none(self) -> None:
        route = RouteDefinition(
            path="/product", page="Product", components=("Product",), actions=("onRefresh",),
        )
        text = render_page_file(route)
        assert "@/actions/" not in text
        assert "onRefresh" not in text

    def test_static_page_without_actions(self) -> None:
        text = render_page_file(RouteDefinition(path="/", page="Dashboard", components=("Dashboard",)))
        assert "export default async function Page() {" in text
        assert "@/actions/" not in text

    def test_layout(self) -> None:
        text = render_layout_file(RouteDefinition(path="/", layout="RootLayout"))
        assert "export default function RootLayout(" in text
        assert 'className="root-layout"' in text


class TestCollectRouteFiles:
    def test_inherited_routes_collapse(self, queue) -> None:
        routes = collect_route_files(queue)
        assert list(routes) == ["/", "/product", "/product/product/new", "/product/product/[id]/edit"]
        assert routes["/"].components == ("Dashboard",)
        assert routes["/product"].components == ("Product",)

    def test_route_directory(self, tmp_path: Path) -> None:
        assert route_directory(tmp_path, "/") == tmp_path
        assert route_directory(tmp_path, "/product/[id]/edit") == tmp_path / "product" / "[id]" / "edit"


class TestWriteScaffold:
    def test_writes_every_file(self, queue, tmp_path: Path) -> None:
        written = write_scaffold(
            queue,
            app_dir=tmp_path / "app",
            components_dir=tmp_path / "components",
            actions_dir=tmp_path / "actions",
            component_code={"ProductForm": "export function ProductForm() {}"},
        )
        rel = {str(p.relative_to(tmp_path)) for p in written}

        assert len(written) == 16
        assert "components/product-form/ProductForm.tsx" in rel
        assert "actions/settingsActions.ts" in rel
        assert "actions/product-listActions.ts" in rel
        assert "app/page.tsx" in rel
        assert "app/layout.tsx" in rel
        assert "app/product/product/[id]/edit/page.tsx" in rel
        assert "actions/dashboardActions.ts" not in rel

    def test_component_file_has_documentation_then_code(self, queue, tmp_path: Path) -> None:
        write_scaffold(
            queue,
            app_dir=tmp_path / "app",
            components_dir=tmp_path / "components",
            actions_dir=tmp_path / "actions",
            component_code={"ProductForm": "export function ProductForm() {}"},
        )
        form = (tmp_path / "components" / "product-form" / "ProductForm.tsx").read_text()
        assert form.startswith("/**\n * Component: ProductForm")
        assert form.endswith(" */\n\nexport function ProductForm() {}\n")

        listing = (tmp_path / "components" / "product-list" / "ProductList.tsx").read_text()
        assert listing.endswith(" */\n")

    @pytest.mark.parametrize("use_sample", [True, False])
    def test_page_imports_resolve_to_action_exports(self, sample_tree, use_sample, tmp_path: Path) -> None:
        """Every name a page imports is exported by the actions module it imports from."""
        tree = sample_tree if use_sample else ComponentNode.model_validate(ORDERS_TREE)
        queue = ArchitectureCompiler().compile_sync(tree)
        write_scaffold(
            queue,
            app_dir=tmp_path / "app",
            components_dir=tmp_path / "components",
            actions_dir=tmp_path / "actions",
        )

        imports = 0
        for page in (tmp_path / "app").rglob("page.tsx"):
            for names, module in _ACTION_IMPORT.findall(page.read_text()):
                actions_file = tmp_path / "actions" / f"{module}.ts"
                assert actions_file.exists(), f"{page} imports missing module {module}"
                exported = set(_EXPORTED.findall(actions_file.read_text()))
                for name in names.split(", "):
                    assert name in exported, f"{name} not exported by {module}"
                    imports += 1
        assert imports > 0

    def test_form_page_imports_submit_action(self, queue, tmp_path: Path) -> None:
        write_scaffold(
            queue,
            app_dir=tmp_path / "app",
            components_dir=tmp_path / "components",
            actions_dir=tmp_path / "actions",
        )
        new_page = (tmp_path / "app" / "product" / "product" / "new" / "page.tsx").read_text()
        assert "import { submitProductForm } from '@/actions/product-formActions';" in new_page
        feature_page = (tmp_path / "app" / "product" / "page.tsx").read_text()
        assert "@/actions/" not in feature_page
