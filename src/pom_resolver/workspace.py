"""The snapshot a resolution runs against.

A `Workspace` owns the parsed POM files and local repositories, the index used
to resolve coordinate references between POMs, and the memo tables of every
resolution query.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable, Iterable
from pathlib import Path
from typing import Any, TypeVar

from pom_resolver.config import DEFAULT_SOURCE_DIRECTORY, ResolverConfig
from pom_resolver.elements import Pom, PomElement, ProtoPom, is_pom_element, wrap
from pom_resolver.exceptions import PomResolverError
from pom_resolver.fs import Folder
from pom_resolver.matcher import MavenRepository, RepositoryJar, version_matches
from pom_resolver.scanner import find_local_repositories, find_pom_files
from pom_resolver.xmltree import Element, XmlFile, parse_xml

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class _ResolutionState(threading.local):
    def __init__(self) -> None:
        self.stack: list[tuple[str, Hashable]] = []
        self.active: set[tuple[str, Hashable]] = set()
        self.tainted: set[tuple[str, Hashable]] = set()


class Workspace:
    """Parsed POM files and local repositories, plus resolution caches.

    Args:
        files: Parsed XML files. Only `project` elements outside
            `dependency-reduced-pom` files become POMs.
        repositories: Local repositories to match dependencies against.
        source_directory: Source folder of a POM without `<sourceDirectory>`,
            relative to the POM's folder.
        project_files: Files holding the projects being analyzed. POMs of the
            other files (e.g. cached in a local repository) are only looked
            up as parents and dependencies. Defaults to every file.
    """

    def __init__(
        self,
        files: Iterable[XmlFile] = (),
        repositories: Iterable[MavenRepository] = (),
        *,
        source_directory: str = DEFAULT_SOURCE_DIRECTORY,
        project_files: Iterable[XmlFile] | None = None,
    ) -> None:
        self.files = list(files)
        self.repositories = list(repositories)
        self.default_source_directory = source_directory
        self._cache: dict[tuple[str, Hashable], Any] = {}
        self._state = _ResolutionState()
        self._poms = [Pom(f.root, self) for f in self.files if is_pom_element(f.root)]
        if project_files is None:
            self._projects = list(self._poms)
        else:
            wanted = {f.file for f in project_files}
            self._projects = [p for p in self._poms if p.file in wanted]
        # Keyed by raw artifactId text so building the index needs no resolution.
        self._by_artifact: dict[str, list[Pom]] = {}
        self._placeholder_artifacts: list[Pom] = []
        for pom in self._poms:
            artifact = pom.artifact
            if artifact is None:
                continue
            raw = artifact.raw_value()
            if "${" in raw:
                self._placeholder_artifacts.append(pom)
            else:
                self._by_artifact.setdefault(raw, []).append(pom)

    @classmethod
    def load(
        cls,
        root: str | Path,
        *,
        local_repositories: Iterable[str | Path] = (),
        source_directory: str = DEFAULT_SOURCE_DIRECTORY,
    ) -> Workspace:
        """Scan `root` (and the given local repositories) and build a workspace.

        Local repositories found under `root` are used too. POMs inside a local
        repository are parent and dependency candidates, not projects. Files
        that fail to parse are logged and skipped.
        """
        root_path = Path(root)
        repo_paths = {Path(p).expanduser().absolute() for p in local_repositories}
        repo_paths.update(p.absolute() for p in find_local_repositories(root_path))

        project_paths = {
            p.absolute()
            for p in find_pom_files(root_path)
            if not any(p.absolute().is_relative_to(repo) for repo in repo_paths)
        }
        pom_paths = set(project_paths)
        for repo in repo_paths:
            pom_paths.update(p.absolute() for p in find_pom_files(repo))

        files: list[XmlFile] = []
        for path in sorted(pom_paths):
            try:
                files.append(parse_xml(path))
            except PomResolverError as exc:
                logger.warning("Skipping %s: %s", path, exc)

        repositories = [MavenRepository(Folder.at(p)) for p in sorted(repo_paths)]
        projects = [f for f in files if f.file.path in project_paths]
        logger.info(
            "Loaded %d project(s), %d XML file(s) and %d local repositories from %s",
            len(projects),
            len(files),
            len(repositories),
            root_path,
        )
        return cls(files, repositories, source_directory=source_directory, project_files=projects)

    @classmethod
    def from_config(cls, root: str | Path, config: ResolverConfig) -> Workspace:
        config.validate()
        repos = [config.local_repository] if config.local_repository else []
        return cls.load(root, local_repositories=repos, source_directory=config.source_directory)

    def wrap(self, element: Element) -> PomElement:
        return wrap(element, self)

    def poms(self) -> list[Pom]:
        return list(self._poms)

    def projects(self) -> list[Pom]:
        """The POMs being analyzed; a subset of `poms()`."""
        return list(self._projects)

    def pom_for_file(self, path: str | Path) -> Pom | None:
        wanted = Path(path).absolute()
        for pom in self._poms:
            if pom.file.path == wanted:
                return pom
        return None

    def pom_candidates(self, artifact_id: str) -> list[Pom]:
        """POMs that may have `artifact_id`: exact raw matches plus POMs whose artifactId is a placeholder."""
        return [*self._by_artifact.get(artifact_id, []), *self._placeholder_artifacts]

    def find_poms(self, ref: ProtoPom) -> list[Pom]:
        """POMs with the same group and artifact as `ref` whose version satisfies `ref`'s version string."""
        artifact = ref.artifact
        short = ref.short_coordinate()
        if artifact is None or short is None:
            return []
        requested = ref.version_string()
        return [
            pom
            for pom in self.pom_candidates(artifact.value() or artifact.raw_value())
            if pom != ref and pom.short_coordinate() == short and version_matches(pom.version_string(), requested)
        ]

    def artifacts(self, ref: ProtoPom) -> list[RepositoryJar]:
        """Matching jars from every local repository of the workspace."""
        return [jar for repo in self.repositories for jar in repo.artifacts(ref)]

    def memo(self, kind: str, key: Hashable, compute: Callable[[], _T], *, default: _T) -> _T:
        """Evaluate `compute` once per `(kind, key)`.

        A query that re-enters itself (e.g. `<version>${project.version}</version>`)
        gets `default`. Results that depended on such a truncated answer are
        returned but not cached. Exceptions propagate and are not cached.
        """
        token = (kind, key)
        try:
            return self._cache[token]
        except KeyError:
            pass

        state = self._state
        if token in state.active:
            logger.debug("Re-entrant %s query treated as unresolved", kind)
            state.tainted.update(state.stack)
            return default

        state.active.add(token)
        state.stack.append(token)
        try:
            result = compute()
        finally:
            state.stack.pop()
            state.active.discard(token)
            tainted = token in state.tainted
            state.tainted.discard(token)

        if not tainted:
            self._cache[token] = result
        return result
