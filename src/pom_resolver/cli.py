"""Typer CLI entry point for pom-resolver."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pom_resolver.config import ResolverConfig
from pom_resolver.elements import Dependency
from pom_resolver.exceptions import PomResolverError
from pom_resolver.fs import File
from pom_resolver.graph import build_graph, parent_cycles, reverse_dependencies
from pom_resolver.report import resolve_workspace
from pom_resolver.visualize import build_project_tree
from pom_resolver.workspace import Workspace
from pom_resolver.xmltree import Element

app = typer.Typer(add_completion=False, help="Resolve Maven POM inheritance and match dependencies to local jars.")
console = Console()
err_console = Console(stderr=True)

RootArg = Annotated[
    Path,
    typer.Argument(help="Root folder to scan for pom.xml / *.pom (or a single POM file)."),
]
RepoOption = Annotated[
    Optional[Path],
    typer.Option("--repo", help="Local repository (.m2/repository). Defaults to POMRES_LOCAL_REPO."),
]


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log resolution details.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _load(root: Path, repo: Path | None) -> Workspace:
    config = ResolverConfig.from_env()
    if repo is not None:
        config.local_repository = repo
    try:
        return Workspace.from_config(root, config)
    except ValueError as exc:
        raise PomResolverError(str(exc)) from exc


@app.command()
def analyze(
    root: RootArg,
    repo: RepoOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the reports as JSON.")] = False,
) -> None:
    """Resolve every POM under ROOT and print coordinates, properties and dependencies."""
    try:
        workspace = _load(root, repo)
        reports = resolve_workspace(workspace)
        if not reports:
            console.print("[bold red]Error:[/bold red] No POM files found.")
            raise typer.Exit(code=1)

        if as_json:
            typer.echo(json.dumps([r.model_dump() for r in reports], indent=2))
            return
        for report in reports:
            console.print(build_project_tree(report))
    except PomResolverError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from None


@app.command()
def artifacts(
    root: RootArg,
    coordinate: Annotated[str, typer.Argument(help="Coordinate: groupId:artifactId[:version]")],
    repo: RepoOption = None,
) -> None:
    """Show the jars of the local repositories that COORDINATE matches."""
    parts = coordinate.split(":")
    if len(parts) not in (2, 3) or not all(parts[:2]):
        console.print("[bold red]Error:[/bold red] Expected groupId:artifactId[:version]")
        raise typer.Exit(code=1)

    try:
        workspace = _load(root, repo)
        probe = _probe(workspace, *parts)
        jars = [jar for r in workspace.repositories for jar in r.artifacts(probe)]
    except PomResolverError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from None

    if not jars:
        console.print("[dim]No matching jars found.[/dim]")
        return
    for jar in jars:
        match = "precise" if jar.precisely_matches(probe) else "fallback"
        console.print(f"{jar.coordinate} [dim]({match})[/dim] {jar.file.absolute_path}", soft_wrap=True)


def _probe(workspace: Workspace, group_id: str, artifact_id: str, version: str = "") -> Dependency:
    """A standalone `<dependency>` element for an ad-hoc coordinate."""
    file = File.at("<command-line>")
    dep = Element("dependency", "", file)
    dep.children = tuple(
        Element(name, text, file, dep)
        for name, text in (("groupId", group_id), ("artifactId", artifact_id), ("version", version))
        if text
    )
    return Dependency(dep, workspace)


@app.command()
def dependents(
    root: RootArg,
    target: Annotated[str, typer.Argument(help="Target POM coordinate: groupId:artifactId:version")],
    limit: Annotated[int, typer.Option("--limit", help="Max rows to print.")] = 200,
) -> None:
    """Show the POMs under ROOT that depend on TARGET."""
    try:
        g = build_graph(_load(root, None))
    except PomResolverError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from None

    preds = reverse_dependencies(g, target)
    table = Table(title=f"Reverse dependencies (who depends on {target})")
    table.add_column("#", style="dim", width=6)
    table.add_column("Dependent")

    if not preds:
        console.print(table)
        console.print("[dim]No reverse dependencies found (or target not in workspace).[/dim]")
        return

    for i, gav in enumerate(preds[:limit], start=1):
        table.add_row(str(i), gav)
    console.print(table)

    if len(preds) > limit:
        console.print(f"[dim]Truncated: showing {limit}/{len(preds)}[/dim]")


@app.command()
def cycles(root: RootArg) -> None:
    """List cyclic parent-POM chains under ROOT."""
    try:
        g = build_graph(_load(root, None))
    except PomResolverError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from None

    found = parent_cycles(g)
    if not found:
        console.print("[green]No cyclic parent chains.[/green]")
        return
    for cycle in found:
        console.print(f"[bold red]cycle[/bold red] {' -> '.join([*cycle, cycle[0]])}")
    raise typer.Exit(code=1)


def main() -> None:
    """Console-script entry point."""
    app()
