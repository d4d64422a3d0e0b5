"""Pydantic models of resolved Maven projects."""

from __future__ import annotations

from pydantic import BaseModel, Field


UNKNOWN = "Unknown"


class GAV(BaseModel):
    """Maven coordinates (GroupId, ArtifactId, Version).

    Parts that could not be resolved are empty strings.
    """

    group_id: str = ""
    artifact_id: str = ""
    version: str = ""

    def compact(self) -> str:
        """Return a compact string representation.

        Returns:
            A string like `groupId:artifactId:version`, with "Unknown" for unresolved parts.
        """
        return ":".join(part or UNKNOWN for part in (self.group_id, self.artifact_id, self.version))


class ResolvedDependency(BaseModel):
    """A dependency of a project after version and scope resolution."""

    gav: GAV
    scope: str = "compile"
    project_dependency: bool = False
    exported: bool = False
    jars: list[str] = Field(default_factory=list)

    def label(self) -> str:
        """Return a user-facing label for the dependency.

        Returns:
            A formatted string including GAV and non-default scope.
        """
        parts: list[str] = [self.gav.compact()]
        if self.scope != "compile":
            parts.append(f"(scope={self.scope or UNKNOWN})")
        if self.exported:
            parts.append("(exported)")
        return " ".join(parts)


class ResolvedProject(BaseModel):
    """A POM with inheritance, properties and dependency versions resolved."""

    file: str
    project: GAV
    name: str | None = None
    parent: GAV | None = None
    parent_files: list[str] = Field(default_factory=list)
    properties: dict[str, str] = Field(default_factory=dict)
    source_directory: str = ""
    modules: list[str] = Field(default_factory=list)
    repositories: list[str] = Field(default_factory=list)
    dependencies: list[ResolvedDependency] = Field(default_factory=list)
    error: str | None = None
