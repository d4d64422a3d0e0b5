"""Discover the files of a snapshot: POMs and local Maven repositories."""

from __future__ import annotations

from pathlib import Path


def is_pom_file(path: Path) -> bool:
    """`pom.xml`, `*.pom`, and XML files with `pom` in their name (such as `dependency-reduced-pom.xml`)."""
    name = path.name.lower()
    return name == "pom.xml" or name.endswith(".pom") or (name.endswith(".xml") and "pom" in name)


def find_pom_files(root: Path) -> list[Path]:
    """Find Maven POM files under root.

    Args:
        root: A directory to scan recursively, or a single pom file.

    Returns:
        Sorted unique list of POM files.
    """
    if root.is_file():
        return [root]

    poms: list[Path] = []
    for p in root.rglob("*"):
        if not p.is_file():
            continue
        if is_pom_file(p):
            poms.append(p)
    return sorted(set(poms))


def find_local_repositories(root: Path) -> list[Path]:
    """Find `.m2/repository` folders under root (root itself included)."""
    if not root.is_dir():
        return []
    candidates = [root, *root.rglob("repository")]
    return sorted(
        {p for p in candidates if p.is_dir() and p.name == "repository" and p.parent.name == ".m2"}
    )
