"""Match dependency coordinates against jars of a local Maven repository.

A local repository is a folder named `repository` inside a `.m2` folder. Jars
are laid out as `<group path>/<artifact>/<version>/<file>.jar`; a jar's
coordinate is read from that layout, never from the file name.

Version strings come in two flavours:

- hard qualifiers such as `[1.0]` match exactly that version;
- anything else is soft and matches every version it is a prefix of, so
  `2` matches `2.0` and `2.1.3`.

Ranges like `[1.0,2.0)` are not hard qualifiers; they are matched as soft
versions, which in practice means they only match through the fallback.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from pom_resolver.exceptions import RepositoryError
from pom_resolver.fs import File, Folder

if TYPE_CHECKING:
    from pom_resolver.elements import ProtoPom

logger = logging.getLogger(__name__)

_HARD_QUALIFIER_RE = re.compile(r"\[[^\[\],]+\]")


def is_hard_qualifier(version: str) -> bool:
    """True for an exact single-version range like `[1.0]`."""
    return _HARD_QUALIFIER_RE.fullmatch(version) is not None


def version_matches(candidate: str, requested: str) -> bool:
    """Whether a concrete `candidate` version satisfies the `requested` version string."""
    if is_hard_qualifier(requested):
        return requested.startswith(f"[{candidate}]")
    return candidate.startswith(requested)


def is_maven_repository(folder: Folder) -> bool:
    parent = folder.parent_container
    return folder.base_name == "repository" and parent is not None and parent.base_name == ".m2"


class RepositoryJar:
    """A jar file inside a local repository."""

    def __init__(self, file: File, repository: MavenRepository) -> None:
        self.file = file
        self.repository = repository
        version_dir = file.parent_container
        artifact_dir = version_dir.parent_container
        group_dir = artifact_dir.parent_container
        self.version = version_dir.base_name
        self.artifact_id = artifact_dir.base_name
        self.group_id = ".".join(group_dir.path.relative_to(repository.folder.path).parts)

    @property
    def short_coordinate(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def coordinate(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def artifact_matches(self, pom: ProtoPom) -> bool:
        """Same group and artifact; the version is ignored."""
        return self.group_id == pom.group_id() and self.artifact_id == pom.artifact_id()

    def precisely_matches(self, pom: ProtoPom) -> bool:
        return self.artifact_matches(pom) and version_matches(self.version, pom.version_string())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RepositoryJar) and other.file == self.file

    def __hash__(self) -> int:
        return hash(self.file)

    def __repr__(self) -> str:
        return f"<RepositoryJar {self.coordinate}>"


class MavenRepository:
    """A local repository and the jars it held when it was scanned."""

    def __init__(self, folder: Folder, jar_files: Iterable[File] | None = None) -> None:
        if not is_maven_repository(folder):
            raise RepositoryError(f"Not a .m2/repository folder: {folder}")
        self.folder = folder
        if jar_files is None:
            jar_files = (File.at(p) for p in folder.path.rglob("*.jar") if p.is_file())
        self._jars: list[RepositoryJar] = []
        self._by_artifact: dict[tuple[str, str], list[RepositoryJar]] = {}
        for f in jar_files:
            # group path, artifact, version and file name at the very least
            if not folder.contains(f) or len(f.path.relative_to(folder.path).parts) < 4:
                logger.debug("Ignoring jar outside the repository layout: %s", f)
                continue
            jar = RepositoryJar(f, self)
            self._jars.append(jar)
            self._by_artifact.setdefault((jar.group_id, jar.artifact_id), []).append(jar)
        logger.debug("Indexed %d jar(s) in %s", len(self._jars), folder)

    @classmethod
    def at(cls, path: str | Path) -> MavenRepository:
        return cls(Folder.at(path))

    def jars(self) -> list[RepositoryJar]:
        return list(self._jars)

    def artifacts(self, pom: ProtoPom) -> list[RepositoryJar]:
        """Return the jars of this repository that `pom` refers to.

        Only precise matches are returned when the version is a hard qualifier
        or when at least one jar matches precisely. Otherwise every jar with
        the right group and artifact is returned, whatever its version: when no
        version in the repository fits, all of them are plausible.
        """
        group_id = pom.group_id()
        artifact_id = pom.artifact_id()
        if group_id is None or artifact_id is None:
            return []
        candidates = self._by_artifact.get((group_id, artifact_id), [])
        requested = pom.version_string()
        precise = [jar for jar in candidates if version_matches(jar.version, requested)]
        if precise or is_hard_qualifier(requested):
            return precise
        return list(candidates)

    def __repr__(self) -> str:
        return f"<MavenRepository {self.folder}>"
