"""Parent-POM inheritance.

A `<parent>` is a weak reference: it names a POM by coordinate and is
resolved by looking that coordinate up in the workspace. Everything that is
inherited (properties, project properties, managed dependency versions) walks
up these references, and every walk first checks the chain for cycles.

All queries are memoized on the workspace.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from pom_resolver.exceptions import CyclicParentError

if TYPE_CHECKING:
    from pom_resolver.elements import Dependency, Pom, PomElement, PomProperty

logger = logging.getLogger(__name__)


def describe(pom: Pom) -> str:
    """The POM's coordinate, or its file path when the coordinate cannot be resolved."""
    try:
        coordinate = pom.coordinate()
    except CyclicParentError:
        coordinate = None
    return coordinate or str(pom.file)


def parent_poms(pom: Pom) -> tuple[Pom, ...]:
    """Every POM whose `group:artifact:version` equals this POM's `<parent>` coordinate."""
    return pom.workspace.memo("parent_poms", pom.element, lambda: _find_parent_poms(pom), default=())


def _find_parent_poms(pom: Pom) -> tuple[Pom, ...]:
    parent = pom.parent_element
    if parent is None or parent.artifact is None:
        return ()
    wanted = parent.coordinate()
    if wanted is None:
        logger.debug("Parent of %s has an unresolved coordinate", pom.file)
        return ()
    found = tuple(c for c in pom.workspace.pom_candidates(parent.artifact.raw_value()) if c.coordinate() == wanted)
    if not found:
        logger.debug("Parent POM %s of %s is not in the workspace", wanted, pom.file)
    return found


def ancestors(pom: Pom) -> tuple[Pom, ...]:
    """Transitive parent POMs, nearest first.

    Raises:
        CyclicParentError: If the chain leads back to `pom`.
    """
    return pom.workspace.memo("ancestors", pom.element, lambda: _walk_ancestors(pom), default=())


def _walk_ancestors(pom: Pom) -> tuple[Pom, ...]:
    found: list[Pom] = []
    queue: deque[tuple[Pom, list[Pom]]] = deque((p, [pom]) for p in parent_poms(pom))
    while queue:
        current, path = queue.popleft()
        if current == pom:
            chain = [describe(p) for p in (*path, pom)]
            logger.warning("Cyclic parent chain: %s", " -> ".join(chain))
            raise CyclicParentError(chain)
        if current in found:
            continue
        found.append(current)
        queue.extend((p, [*path, current]) for p in parent_poms(current))
    return tuple(found)


def properties(pom: Pom) -> tuple[PomProperty, ...]:
    """Local properties plus inherited ones whose name is not declared locally.

    Shadowing applies at every level of the chain, so a grandparent's property
    is hidden by the parent's property of the same name as well.
    """
    return pom.workspace.memo("properties", pom.element, lambda: _collect_properties(pom), default=())


def _collect_properties(pom: Pom) -> tuple[PomProperty, ...]:
    ancestors(pom)
    result = pom.local_properties()
    local_names = {p.property_name for p in result}
    for parent in parent_poms(pom):
        result.extend(p for p in properties(parent) if p.property_name not in local_names and p not in result)
    return tuple(result)


def project_property(pom: Pom, path: str) -> tuple[PomElement, ...]:
    """Look up `${project.<path>}` on `pom`.

    `path` names a leaf element below `<project>`; dotted paths such as
    `parent.version` walk nested elements. Elements that have children are
    never values. If the POM declares the path at all, parent POMs are not
    consulted.
    """
    return pom.workspace.memo(
        "project_property",
        (pom.element, path),
        lambda: _find_project_property(pom, path),
        default=(),
    )


def _find_project_property(pom: Pom, path: str) -> tuple[PomElement, ...]:
    element = pom.element
    for segment in path.split("."):
        element = element.child(segment)
        if element is None:
            break
    if element is not None:
        if element.has_children:
            return ()
        return (pom.workspace.wrap(element),)
    ancestors(pom)
    result: list[PomElement] = []
    for parent in parent_poms(pom):
        result.extend(project_property(parent, path))
    return tuple(result)


def version_string_for_dependency(pom: Pom, dep: Dependency) -> str:
    """The version `pom` or its ancestors manage for `dep`, or "" when none does."""
    key = dep.short_coordinate()
    if key is None:
        return ""
    own_entry = dep.element if dep.is_managed() else None
    return pom.workspace.memo(
        "managed_version",
        (pom.element, key, own_entry),
        lambda: _managed_version(pom, dep, key),
        default="",
    )


def _managed_version(pom: Pom, dep: Dependency, key: str) -> str:
    for managed in pom.managed_dependencies():
        if managed == dep or managed.short_coordinate() != key:
            continue
        version = managed.explicit_version_string()
        if version:
            return version
    ancestors(pom)
    for parent in parent_poms(pom):
        version = version_string_for_dependency(parent, dep)
        if version:
            return version
    return ""
