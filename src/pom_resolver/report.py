"""Build `ResolvedProject` reports from a workspace."""

from __future__ import annotations

import logging

from pom_resolver.elements import Dependency, Pom, ProtoPom
from pom_resolver.exceptions import CyclicParentError
from pom_resolver.models import GAV, ResolvedDependency, ResolvedProject
from pom_resolver.workspace import Workspace

logger = logging.getLogger(__name__)


def gav_of(ref: ProtoPom) -> GAV:
    return GAV(
        group_id=ref.group_id() or "",
        artifact_id=ref.artifact_id() or "",
        version=ref.version_string(),
    )


def resolve_dependency(dep: Dependency) -> ResolvedDependency:
    return ResolvedDependency(
        gav=gav_of(dep),
        scope=dep.scope(),
        project_dependency=dep.is_project_dependency(),
        exported=dep.is_exported(),
        jars=sorted(jar.file.absolute_path for jar in dep.artifacts()),
    )


def resolve_project(pom: Pom) -> ResolvedProject:
    """Resolve one POM.

    A cyclic parent chain does not abort the report: the error is recorded and
    only what can be read without walking the chain is filled in.
    """
    parent = pom.parent_element
    artifact = pom.artifact
    report = ResolvedProject(
        file=str(pom.file),
        project=GAV(artifact_id=artifact.raw_value() if artifact is not None else ""),
    )
    try:
        pom.ancestors()
        report.parent = gav_of(parent) if parent is not None else None
        report.source_directory = pom.source_directory().absolute_path
        report.project = gav_of(pom)
        report.name = pom.project_name()
        report.parent_files = [str(p.file) for p in pom.parent_poms()]
        report.properties = {p.property_name: p.value() or p.raw_value() for p in reversed(pom.properties())}
        report.modules = pom.modules()
        report.repositories = [r.url() or r.repository_id() or r.kind for r in pom.repositories()]
        report.dependencies = [resolve_dependency(d) for d in pom.dependencies()]
    except CyclicParentError as exc:
        report.error = str(exc)
    return report


def resolve_workspace(workspace: Workspace) -> list[ResolvedProject]:
    """Report every project of the workspace; POMs cached in local repositories are not reported."""
    reports = [resolve_project(pom) for pom in workspace.projects()]
    logger.info("Resolved %d POM(s)", len(reports))
    return reports
