"""Typer CLI: ``uigen validate``, ``uigen plan`` and ``uigen scaffold`` commands."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from uigen.architecture.errors import CompilerError
from uigen.config import load_config
from uigen.shared.brain import BrainError
from uigen.shared.manifest import ManifestError

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="uigen",
    help="uigen: compile component trees into architecture plans and app scaffolds.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config_or_exit(config: Path) -> "ProjectConfig":  # noqa: F821
    try:
        return load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)


def _fail(label: str, exc: Exception) -> None:
    console.print(f"[red]{label}:[/] {exc}")
    if isinstance(exc, CompilerError) and exc.node_path:
        console.print(f"  Component: {exc.node_name or '(unnamed)'}")
        console.print(f"  Path:      {exc.node_path}")
    raise typer.Exit(code=1)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to uigen.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate the config and component manifest without compiling."""
    from uigen.shared.manifest import find_duplicate_names, find_unnamed_paths, load_component_tree

    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)

    try:
        tree = load_component_tree(cfg.manifest_file)
    except ManifestError as exc:
        _fail("Manifest validation failed", exc)

    unnamed = find_unnamed_paths(tree)
    if unnamed:
        console.print("[red]Components without a name:[/]")
        for path in unnamed:
            console.print(f"  - {path}")
        raise typer.Exit(code=1)

    console.print("[green]Config and manifest are valid![/]\n")
    console.print(f"  Project:      {cfg.project_name}")
    console.print(f"  Architecture: {cfg.architecture}")
    console.print(f"  Manifest:     {cfg.manifest_file}")
    console.print(f"  Root:         {tree.name}")
    console.print(f"  Components:   {sum(1 for _ in tree.iter_tree())}")

    duplicates = find_duplicate_names(tree)
    if duplicates:
        console.print(
            "\n[yellow]Warning:[/] duplicate component names: only the first "
            "occurrence of each (and its subtree) will be generated:"
        )
        for name in duplicates:
            console.print(f"  - {name}")


@app.command()
def plan(
    config: Path = typer.Option(..., "--config", "-c", help="Path to uigen.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan JSON instead of the overview."),
) -> None:
    """Compile the component tree and write the architecture plan."""
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)

    try:
        asyncio.run(_run_plan(cfg, as_json=as_json))
    except (CompilerError, ManifestError, BrainError) as exc:
        _fail("Planning failed", exc)


@app.command()
def scaffold(
    config: Path = typer.Option(..., "--config", "-c", help="Path to uigen.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Generate placeholder components (no API calls)."),
    no_code: bool = typer.Option(False, "--no-code", help="Write documentation headers, routes and actions only."),
) -> None:
    """Compile the component tree and write components, routes and server actions.

    Examples:

        uigen scaffold --config uigen.yml

        uigen scaffold --config uigen.yml --dry-run
    """
    _setup_logging(verbose)
    cfg = _load_config_or_exit(config)

    if dry_run:
        console.print("[yellow]DRY-RUN mode: no API calls will be made.[/]\n")

    try:
        asyncio.run(_run_scaffold(cfg, dry_run=dry_run, generate_code=not no_code))
    except (CompilerError, ManifestError, BrainError) as exc:
        _fail("Scaffold failed", exc)


def _print_overview(queue: list) -> None:
    from uigen.architecture.plan import plan_overview

    counts = plan_overview(queue)
    console.print("\n[bold blue]Architecture Overview:[/]")
    console.print(f"  • Total Components:     {counts['components']}")
    console.print(f"  • Total Server Actions: {counts['server_actions']}")
    console.print(f"  • Total Routes:         {counts['routes']}")
    console.print(f"  • Total Client Actions: {counts['client_actions']}")


async def _run_plan(cfg: "ProjectConfig", *, as_json: bool = False) -> None:  # noqa: F821
    """Compile, project and persist the architecture plan."""
    from uigen.architecture.compiler import ArchitectureCompiler
    from uigen.architecture.plan import build_plan
    from uigen.output.markdown import render_plan_markdown
    from uigen.shared.brain import BrainStore
    from uigen.shared.manifest import load_component_tree

    brain = BrainStore(cfg.state_root)
    tree = load_component_tree(cfg.manifest_file)

    compiler = ArchitectureCompiler()
    brain.set_status("planning")
    try:
        queue = await compiler.compile(tree)
    except CompilerError as exc:
        brain.add_update("ArchitectureCompiler", "error", str(exc))
        brain.set_status("error")
        raise
    architecture_plan = build_plan(queue, tree, cfg.project_info(), compiler.synthesizer)

    plan_json = architecture_plan.model_dump_json(by_alias=True, indent=2)
    if as_json:
        typer.echo(plan_json)
    else:
        _print_overview(queue)

    cfg.state_root.mkdir(parents=True, exist_ok=True)
    json_path = cfg.state_root / "architecture-plan.json"
    json_path.write_text(plan_json)
    md_path = cfg.state_root / "architecture-plan.md"
    md_path.write_text(render_plan_markdown(architecture_plan, queue))

    brain.update_artifact("architecture-plan", json_path)
    brain.add_update(
        "ArchitectureCompiler",
        "completion",
        f"Architecture plan ready: {len(queue)} components",
        architecture_plan.metadata.model_dump(by_alias=True),
    )
    brain.set_status("done")

    if not as_json:
        console.print(f"\n[green]Architecture plan saved to:[/] {json_path}")
        console.print(f"[green]Plan report written to:[/] {md_path}")


async def _run_scaffold(
    cfg: "ProjectConfig",  # noqa: F821
    *,
    dry_run: bool = False,
    generate_code: bool = True,
) -> None:
    """Compile the tree, optionally generate component code, and write all files."""
    from uigen.agents.component_codegen.agent import ComponentCodegenAgent
    from uigen.architecture.compiler import ArchitectureCompiler
    from uigen.output.scaffold import write_scaffold
    from uigen.shared.brain import BrainStore
    from uigen.shared.manifest import load_component_tree
    from uigen.shared.progress import GenerationProgress

    brain = BrainStore(cfg.state_root)
    tree = load_component_tree(cfg.manifest_file)
    try:
        queue = await ArchitectureCompiler().compile(tree)
    except CompilerError as exc:
        brain.add_update("ArchitectureCompiler", "error", str(exc))
        brain.set_status("error")
        raise
    _print_overview(queue)

    component_code: dict[str, str] = {}
    if generate_code:
        if dry_run:
            from uigen.shared.llm_client import DryRunClient
            client = DryRunClient()
        else:
            from uigen.shared.llm_client import LLMClient
            client = LLMClient(model=cfg.model)

        agent = ComponentCodegenAgent(client=client)
        brain.set_status("generating")
        with GenerationProgress() as progress:
            progress.print_phase("Generating components")
            for item in queue:
                name = item.component.name
                progress.start_step(name)
                try:
                    generated = await agent.generate(
                        item, on_progress=lambda m, n=name: progress.update_step(n, m),
                    )
                except Exception as exc:
                    progress.fail_step(name, str(exc))
                    brain.add_update(agent.name, "error", f"{name}: {exc}")
                    continue
                component_code[name] = generated.code
                progress.finish_step(name)
                for note in generated.notes:
                    progress.log_event(name, note)

    root = cfg.output_root
    written = write_scaffold(
        queue,
        app_dir=root / cfg.app_directory,
        components_dir=root / cfg.components_directory,
        actions_dir=root / cfg.actions_directory,
        component_code=component_code,
    )

    brain.update_artifact("scaffold", root)
    brain.add_update(
        "Scaffold",
        "completion",
        f"Wrote {len(written)} files for {len(queue)} components",
        {"files": [str(p) for p in written]},
    )
    brain.set_status("done")

    skipped = len(queue) - len(component_code) if generate_code else 0
    console.print(f"\n[green]Wrote {len(written)} files under:[/] {root}")
    if skipped:
        console.print(f"[yellow]{skipped} component(s) failed code generation: documentation header only.[/]")
