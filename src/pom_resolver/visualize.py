"""Rich rendering utilities for resolved Maven projects."""

from __future__ import annotations

from rich.tree import Tree

from pom_resolver.models import ResolvedProject


def build_project_tree(model: ResolvedProject, *, show_jars: bool = True) -> Tree:
    """Build a Rich Tree representing a resolved project.

    Args:
        model: Resolved project report.
        show_jars: Whether to list matched jars under each dependency.

    Returns:
        A Rich Tree object for rendering.
    """
    root = Tree(f"[bold]{model.project.compact()}[/bold] [dim]{model.file}[/dim]")
    if model.error:
        root.add(f"[bold red]{model.error}[/bold red]")
        return root

    if model.parent is not None:
        found = "" if model.parent_files else " [yellow](not in workspace)[/yellow]"
        root.add(f"parent {model.parent.compact()}{found}")
    root.add(f"sources {model.source_directory}")

    if model.properties:
        props = root.add("properties")
        for key, value in sorted(model.properties.items()):
            props.add(f"{key} = {value}")

    if not model.dependencies:
        root.add("[dim]No direct dependencies found[/dim]")
        return root

    deps_branch = root.add("dependencies")
    for dep in model.dependencies:
        style = "" if dep.project_dependency else "dim"
        node = deps_branch.add(f"[{style}]{dep.label()}[/{style}]" if style else dep.label())
        if show_jars:
            for jar in dep.jars:
                node.add(f"[green]{jar}[/green]")
    return root
