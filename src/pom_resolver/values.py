"""Resolve the text of POM elements, including `${...}` placeholders.

Only text that is exactly one placeholder is resolved. Anything else, such as
`${a}.${b}` or `v${rev}`, is returned verbatim: there is no nested or partial
expansion.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pom_resolver import inheritance

if TYPE_CHECKING:
    from pom_resolver.elements import Pom, PomElement

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$\{([^{}]+)\}")

PROJECT_PREFIXES = ("project.", "pom.")
BASEDIR_NAMES = frozenset({"basedir", "project.basedir", "pom.basedir"})

# Project properties that fall back to the POM's `<parent>` when neither the
# POM nor a resolved parent POM declares them.
_INHERITED_COORDINATES = ("groupId", "version")


def placeholder_name(text: str) -> str | None:
    """Return `name` when `text` is exactly `${name}`, otherwise None."""
    m = _PLACEHOLDER_RE.fullmatch(text)
    return m.group(1).strip() if m else None


def resolve(element: PomElement) -> tuple[str, ...]:
    """Resolve the text of `element`.

    Returns:
        The raw text when it is not a placeholder; otherwise every value the
        placeholder resolves to, which is empty when it cannot be resolved.
    """
    raw = element.raw_value()
    name = placeholder_name(raw)
    if name is None:
        return (raw,)
    return element.workspace.memo(
        "value",
        element.element,
        lambda: _resolve_placeholder(element, name),
        default=(),
    )


def _resolve_placeholder(element: PomElement, name: str) -> tuple[str, ...]:
    pom = element.pom()
    if pom is None:
        logger.debug("Placeholder ${%s} outside of a POM is unresolved", name)
        return ()

    if name in BASEDIR_NAMES:
        return (pom.folder.absolute_path,)

    for prefix in PROJECT_PREFIXES:
        if name.startswith(prefix):
            resolved = _resolve_project_property(pom, element, name[len(prefix):])
            break
    else:
        resolved = _unique_values(p for p in inheritance.properties(pom) if p.property_name == name)

    if not resolved:
        logger.debug("Unresolved placeholder ${%s} in %s", name, pom.file)
    return resolved


def _resolve_project_property(pom: Pom, element: PomElement, path: str) -> tuple[str, ...]:
    resolved = _unique_values(inheritance.project_property(pom, path))
    if resolved or path not in _INHERITED_COORDINATES:
        return resolved
    fallback = pom.group if path == "groupId" else pom.version
    if fallback is None or fallback == element:
        return ()
    return _unique_values([fallback])


def _unique_values(elements: Iterable[PomElement]) -> tuple[str, ...]:
    seen: list[str] = []
    for e in elements:
        for v in e.values():
            if v not in seen:
                seen.append(v)
    return tuple(seen)
