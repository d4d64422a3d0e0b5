"""Files and folders of a snapshot.

Containers are compared by absolute path, so two `Folder` objects for the same
directory are interchangeable.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Container:
    """A file or folder identified by its absolute path."""

    path: Path

    @classmethod
    def at(cls, path: str | Path) -> "Container":
        return cls(Path(path).expanduser().absolute())

    @property
    def base_name(self) -> str:
        return self.path.name

    @property
    def absolute_path(self) -> str:
        return self.path.as_posix()

    @property
    def parent_container(self) -> Folder | None:
        parent = self.path.parent
        if parent == self.path:
            return None
        return Folder(parent)

    def ancestors(self) -> Iterator[Folder]:
        """Yield the parent container, its parent, and so on up to the root."""
        current = self.parent_container
        while current is not None:
            yield current
            current = current.parent_container

    def __str__(self) -> str:
        return self.absolute_path


@dataclass(frozen=True)
class Folder(Container):
    def contains(self, other: Container) -> bool:
        """Reflexive-transitive containment: a folder contains itself."""
        return other.path == self.path or self.path in other.path.parents

    def folder(self, relative: str) -> Folder:
        return Folder(Path(os.path.normpath(self.path / relative)))


@dataclass(frozen=True)
class File(Container):
    @property
    def stem(self) -> str:
        return self.path.stem

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")
