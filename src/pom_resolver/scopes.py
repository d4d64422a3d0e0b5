"""Effective dependency scopes and what they make visible."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pom_resolver.elements import Dependency


DEFAULT_SCOPE = "compile"

# `test` is left out: whether a test dependency is needed to compile is ambiguous.
PROJECT_SCOPES = frozenset({"compile", "provided"})
EXPORTED_SCOPES = frozenset({"compile"})


def effective_scope(dep: Dependency) -> str:
    """Return the dependency's `<scope>`.

    A missing or empty `<scope>` means "compile". A placeholder that does not
    resolve gives "", which is neither a project nor an exported scope.
    """
    element = dep.scope_element
    if element is None:
        return DEFAULT_SCOPE
    value = element.value()
    if value is None:
        return ""
    return value or DEFAULT_SCOPE


def is_project_dependency(dep: Dependency) -> bool:
    """A real (not managed) dependency that takes part in compilation."""
    return dep.is_declared() and effective_scope(dep) in PROJECT_SCOPES


def is_exported(dep: Dependency) -> bool:
    """A real dependency that consumers of the project see transitively."""
    return dep.is_declared() and effective_scope(dep) in EXPORTED_SCOPES
