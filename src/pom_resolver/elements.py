"""Typed views over the elements of a POM file.

A view pairs an `Element` with the `Workspace` it was loaded into. Views are
cheap and created on demand; two views over the same element are equal.
Which view class an element gets depends only on its tag name (and, for
properties, on its parent's tag), see `wrap`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from pom_resolver import inheritance, scopes, values
from pom_resolver.fs import Container, File, Folder
from pom_resolver.xmltree import Element

if TYPE_CHECKING:
    from pom_resolver.matcher import RepositoryJar
    from pom_resolver.workspace import Workspace


DEPENDENCY_REDUCED_POM = "dependency-reduced-pom"
REPOSITORY_TAGS = ("repository", "snapshotRepository", "pluginRepository")

_V = TypeVar("_V", bound="PomElement")
_VIEWS: dict[str, type[PomElement]] = {}


def _view(*tags: str):
    def register(cls: type[_V]) -> type[_V]:
        for tag in tags:
            _VIEWS[tag] = cls
        return cls

    return register


def is_pom_element(element: Element) -> bool:
    """A `project` element, unless it lives in a Maven Shade `dependency-reduced-pom` file."""
    return element.name == "project" and element.file.stem != DEPENDENCY_REDUCED_POM


def wrap(element: Element, workspace: Workspace) -> PomElement:
    """Return the most specific view for `element`."""
    if element.name == "project":
        cls = Pom if is_pom_element(element) else PomElement
    elif element.parent is not None and element.parent.name == "properties":
        cls = PomProperty
    else:
        cls = _VIEWS.get(element.name, PomElement)
    return cls(element, workspace)


class PomElement:
    """An element of a POM file whose text may be a `${...}` placeholder."""

    def __init__(self, element: Element, workspace: Workspace) -> None:
        self.element = element
        self.workspace = workspace

    @property
    def name(self) -> str:
        return self.element.name

    def child(self, name: str) -> PomElement | None:
        found = self.element.child(name)
        return wrap(found, self.workspace) if found is not None else None

    def children(self, name: str | None = None) -> list[PomElement]:
        elements = self.element.children if name is None else self.element.children_named(name)
        return [wrap(e, self.workspace) for e in elements]

    def _typed_child(self, name: str, cls: type[_V]) -> _V | None:
        found = self.child(name)
        return found if isinstance(found, cls) else None

    def pom(self) -> Pom | None:
        """The POM this element belongs to (the element itself for a POM)."""
        for element in (self.element, *self.element.ancestors()):
            if is_pom_element(element):
                return Pom(element, self.workspace)
        return None

    def raw_value(self) -> str:
        return self.element.text

    def values(self) -> list[str]:
        """Every resolution of this element's text; empty when unresolved."""
        return list(values.resolve(self))

    def value(self) -> str | None:
        """The resolved text, or None when a placeholder cannot be resolved."""
        resolved = values.resolve(self)
        return resolved[0] if resolved else None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PomElement) and other.element is self.element

    def __hash__(self) -> int:
        return hash(self.element)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}={self.raw_value()!r}>"


@_view("groupId")
class Group(PomElement):
    pass


@_view("artifactId")
class Artifact(PomElement):
    pass


@_view("version")
class Version(PomElement):
    pass


@_view("name")
class Name(PomElement):
    pass


@_view("scope")
class Scope(PomElement):
    pass


@_view("sourceDirectory")
class SourceDirectory(PomElement):
    pass


@_view("module")
class Module(PomElement):
    pass


class PomProperty(PomElement):
    """A property declared inside `<properties>`, keyed by its tag name."""

    @property
    def property_name(self) -> str:
        return self.name


@_view("properties")
class Properties(PomElement):
    def properties(self) -> list[PomProperty]:
        return [p for p in self.children() if isinstance(p, PomProperty)]


class ProtoPom(PomElement):
    """Anything identified by `groupId`/`artifactId`/`version` children."""

    @property
    def group(self) -> Group | None:
        return self._typed_child("groupId", Group)

    @property
    def artifact(self) -> Artifact | None:
        return self._typed_child("artifactId", Artifact)

    @property
    def version(self) -> Version | None:
        return self._typed_child("version", Version)

    def group_id(self) -> str | None:
        group = self.group
        return group.value() if group is not None else None

    def artifact_id(self) -> str | None:
        artifact = self.artifact
        return artifact.value() if artifact is not None else None

    def version_string(self) -> str:
        """The resolved version, or "" when there is none."""
        version = self.version
        if version is None:
            return ""
        return version.value() or ""

    def short_coordinate(self) -> str | None:
        """`group:artifact`, or None when either part is unresolved."""
        group_id = self.group_id()
        artifact_id = self.artifact_id()
        if group_id is None or artifact_id is None:
            return None
        return f"{group_id}:{artifact_id}"

    def coordinate(self) -> str | None:
        """`group:artifact:version`, or None when group or artifact is unresolved."""
        short = self.short_coordinate()
        if short is None:
            return None
        return f"{short}:{self.version_string()}"


@_view("parent")
class Parent(ProtoPom):
    """The `<parent>` reference of a POM; resolved by coordinate, see `Pom.parent_poms`."""


@_view("dependency")
class Dependency(ProtoPom):
    @property
    def scope_element(self) -> Scope | None:
        return self._typed_child("scope", Scope)

    def scope(self) -> str:
        return scopes.effective_scope(self)

    def _collection(self) -> Element | None:
        collection = self.element.parent
        if collection is None or collection.name != "dependencies":
            return None
        return collection

    def is_managed(self) -> bool:
        """True for entries of `<dependencyManagement>`, which only supply default versions."""
        collection = self._collection()
        return collection is not None and collection.parent is not None and collection.parent.name == "dependencyManagement"

    def is_declared(self) -> bool:
        """True for entries of the POM's own `<dependencies>` collection."""
        collection = self._collection()
        return collection is not None and collection.parent is not None and is_pom_element(collection.parent)

    def is_project_dependency(self) -> bool:
        return scopes.is_project_dependency(self)

    def is_exported(self) -> bool:
        return scopes.is_exported(self)

    def explicit_version_string(self) -> str:
        return super().version_string()

    def version_string(self) -> str:
        """The explicit version, else the version managed by the owning POM or its ancestors.

        A declared `<version>` that does not resolve stays unresolved ("").
        """
        if self.version is not None:
            return self.explicit_version_string()
        pom = self.pom()
        if pom is None:
            return ""
        return pom.version_string_for_dependency(self)

    def poms(self) -> list[Pom]:
        """POMs of the workspace this dependency refers to."""
        return self.workspace.find_poms(self)

    def artifacts(self) -> list[RepositoryJar]:
        """Jars in the workspace's local repositories matching this dependency."""
        return self.workspace.artifacts(self)


@_view("dependencies")
class Dependencies(PomElement):
    def dependencies(self) -> list[Dependency]:
        return [d for d in self.children("dependency") if isinstance(d, Dependency)]


@_view("dependencyManagement")
class DependencyManagement(PomElement):
    def dependencies(self) -> list[Dependency]:
        collection = self._typed_child("dependencies", Dependencies)
        return collection.dependencies() if collection is not None else []


@_view(*REPOSITORY_TAGS)
class DeclaredRepository(PomElement):
    """A `<repository>`, `<snapshotRepository>` or `<pluginRepository>` declaration."""

    @property
    def kind(self) -> str:
        return self.name

    def repository_id(self) -> str | None:
        child = self.child("id")
        return child.value() if child is not None else None

    def url(self) -> str | None:
        child = self.child("url")
        return child.value() if child is not None else None


@_view("build")
class Build(PomElement):
    @property
    def source_directory(self) -> SourceDirectory | None:
        return self._typed_child("sourceDirectory", SourceDirectory)


@_view("modules")
class Modules(PomElement):
    def modules(self) -> list[Module]:
        return [m for m in self.children("module") if isinstance(m, Module)]


class Pom(ProtoPom):
    """A Maven project (`<project>` element)."""

    @property
    def parent_element(self) -> Parent | None:
        return self._typed_child("parent", Parent)

    @property
    def group(self) -> Group | None:
        local = super().group
        if local is not None:
            return local
        parent = self.parent_element
        return parent.group if parent is not None else None

    @property
    def version(self) -> Version | None:
        local = super().version
        if local is not None:
            return local
        parent = self.parent_element
        return parent.version if parent is not None else None

    @property
    def file(self) -> File:
        return self.element.file

    @property
    def folder(self) -> Folder:
        return self.element.file.parent_container

    @property
    def dependencies_element(self) -> Dependencies | None:
        return self._typed_child("dependencies", Dependencies)

    @property
    def dependency_management(self) -> DependencyManagement | None:
        return self._typed_child("dependencyManagement", DependencyManagement)

    @property
    def properties_element(self) -> Properties | None:
        return self._typed_child("properties", Properties)

    @property
    def build(self) -> Build | None:
        return self._typed_child("build", Build)

    def project_name(self) -> str | None:
        name = self._typed_child("name", Name)
        return name.value() if name is not None else None

    def parent_poms(self) -> list[Pom]:
        return list(inheritance.parent_poms(self))

    def ancestors(self) -> list[Pom]:
        return list(inheritance.ancestors(self))

    def local_properties(self) -> list[PomProperty]:
        props = self.properties_element
        return props.properties() if props is not None else []

    def properties(self) -> list[PomProperty]:
        """Local properties plus every inherited property a local one does not shadow."""
        return list(inheritance.properties(self))

    def property(self, name: str) -> PomProperty | None:
        for prop in inheritance.properties(self):
            if prop.property_name == name:
                return prop
        return None

    def project_property(self, name: str) -> PomElement | None:
        found = inheritance.project_property(self, name)
        return found[0] if found else None

    def version_string_for_dependency(self, dep: Dependency) -> str:
        return inheritance.version_string_for_dependency(self, dep)

    def dependencies(self) -> list[Dependency]:
        collection = self.dependencies_element
        return collection.dependencies() if collection is not None else []

    def managed_dependencies(self) -> list[Dependency]:
        management = self.dependency_management
        return management.dependencies() if management is not None else []

    def project_dependencies(self) -> list[Dependency]:
        return [d for d in self.dependencies() if d.is_project_dependency()]

    def exported_dependencies(self) -> list[Dependency]:
        return [d for d in self.dependencies() if d.is_exported()]

    def exported_poms(self) -> list[Pom]:
        result: list[Pom] = []
        for dep in self.exported_dependencies():
            result.extend(p for p in dep.poms() if p not in result)
        return result

    def repositories(self) -> list[DeclaredRepository]:
        """Repositories declared under `<repositories>`, `<pluginRepositories>` or `<distributionManagement>`."""
        return [
            DeclaredRepository(nested, self.workspace)
            for element in self.element.children
            for nested in element.children
            if nested.name in REPOSITORY_TAGS
        ]

    def modules(self) -> list[str]:
        modules = self._typed_child("modules", Modules)
        if modules is None:
            return []
        return [m.value() or m.raw_value() for m in modules.modules()]

    def source_directory(self) -> Folder:
        """The folder holding this project's main sources."""
        relative = self.workspace.default_source_directory
        build = self.build
        if build is not None and build.source_directory is not None:
            relative = build.source_directory.value() or relative
        return self.folder.folder(relative)

    def contains_source(self, container: Container) -> bool:
        return self.source_directory().contains(container)
