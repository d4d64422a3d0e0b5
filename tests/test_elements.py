from __future__ import annotations

from pathlib import Path

from pom_resolver.elements import DeclaredRepository, Dependency, Parent, Pom, PomProperty
from pom_resolver.fs import File
from pom_resolver.workspace import Workspace


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


POM = """<?xml version=\"1.0\" encoding=\"UTF-8\"?>
<project xmlns=\"http://maven.apache.org/POM/4.0.0\">
  <modelVersion>4.0.0</modelVersion>
  <groupId>com.acme</groupId>
  <artifactId>demo</artifactId>
  <version>1.0.0</version>
  <name>Demo project</name>

  <modules>
    <module>core</module>
    <module>web</module>
  </modules>

  <properties>
    <slf4j.version>2.0.12</slf4j.version>
  </properties>

  <dependencies>
    <dependency>
      <groupId>org.slf4j</groupId>
      <artifactId>slf4j-api</artifactId>
      <version>${slf4j.version}</version>
    </dependency>
    <dependency>
      <groupId>junit</groupId>
      <artifactId>junit</artifactId>
      <scope>test</scope>
    </dependency>
  </dependencies>

  <repositories>
    <repository>
      <id>central</id>
      <url>https://repo.maven.apache.org/maven2</url>
    </repository>
  </repositories>
  <distributionManagement>
    <snapshotRepository>
      <id>snapshots</id>
      <url>https://example.com/snapshots</url>
    </snapshotRepository>
  </distributionManagement>
</project>
"""


def test_pom_accessors(tmp_path: Path) -> None:
    _write(tmp_path, "pom.xml", POM)
    (pom,) = Workspace.load(tmp_path).poms()

    assert isinstance(pom, Pom)
    assert pom.group_id() == "com.acme"
    assert pom.artifact_id() == "demo"
    assert pom.version_string() == "1.0.0"
    assert pom.short_coordinate() == "com.acme:demo"
    assert pom.coordinate() == "com.acme:demo:1.0.0"
    assert pom.project_name() == "Demo project"
    assert pom.modules() == ["core", "web"]
    assert pom.parent_element is None
    assert pom.dependency_management is None


def test_dependencies_and_scopes(tmp_path: Path) -> None:
    _write(tmp_path, "pom.xml", POM)
    (pom,) = Workspace.load(tmp_path).poms()

    slf4j, junit = pom.dependencies()
    assert isinstance(slf4j, Dependency)
    assert slf4j.scope() == "compile"
    assert slf4j.version_string() == "2.0.12"
    assert junit.scope() == "test"
    assert junit.version_string() == ""
    assert slf4j.pom() == pom


def test_properties_are_keyed_by_tag(tmp_path: Path) -> None:
    _write(tmp_path, "pom.xml", POM)
    (pom,) = Workspace.load(tmp_path).poms()

    (prop,) = pom.local_properties()
    assert isinstance(prop, PomProperty)
    assert prop.property_name == "slf4j.version"
    assert prop.value() == "2.0.12"


def test_declared_repositories(tmp_path: Path) -> None:
    _write(tmp_path, "pom.xml", POM)
    (pom,) = Workspace.load(tmp_path).poms()

    repos = pom.repositories()
    assert all(isinstance(r, DeclaredRepository) for r in repos)
    assert [(r.kind, r.repository_id(), r.url()) for r in repos] == [
        ("repository", "central", "https://repo.maven.apache.org/maven2"),
        ("snapshotRepository", "snapshots", "https://example.com/snapshots"),
    ]


def test_missing_version_is_empty_string(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "pom.xml",
        "<project><groupId>g</groupId><artifactId>a</artifactId></project>",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    assert pom.version is None
    assert pom.version_string() == ""
    assert pom.coordinate() == "g:a:"


def test_dependency_reduced_pom_is_not_a_pom(tmp_path: Path) -> None:
    _write(tmp_path, "pom.xml", POM)
    _write(tmp_path, "dependency-reduced-pom.xml", POM)
    workspace = Workspace.load(tmp_path)

    assert len(workspace.files) == 2
    poms = workspace.poms()
    assert [p.file.base_name for p in poms] == ["pom.xml"]

    reduced = next(f for f in workspace.files if f.file.stem == "dependency-reduced-pom")
    view = workspace.wrap(reduced.root)
    assert not isinstance(view, Pom)
    assert view.pom() is None


def test_parent_view_and_group_fallback(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "pom.xml",
        """<project>
  <parent>
    <groupId>com.acme</groupId>
    <artifactId>parent</artifactId>
    <version>9.9.9</version>
  </parent>
  <artifactId>child</artifactId>
</project>
""",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    assert isinstance(pom.parent_element, Parent)
    assert pom.parent_element.coordinate() == "com.acme:parent:9.9.9"
    # Neither groupId nor version is declared locally; both come from <parent>.
    assert pom.coordinate() == "com.acme:child:9.9.9"
    assert pom.parent_poms() == []


def test_source_directory_default_and_override(tmp_path: Path) -> None:
    _write(tmp_path, "a/pom.xml", "<project><groupId>g</groupId><artifactId>a</artifactId></project>")
    _write(
        tmp_path,
        "b/pom.xml",
        """<project>
  <groupId>g</groupId><artifactId>b</artifactId>
  <build><sourceDirectory>src/java</sourceDirectory></build>
</project>
""",
    )
    workspace = Workspace.load(tmp_path)
    a = workspace.pom_for_file(tmp_path / "a" / "pom.xml")
    b = workspace.pom_for_file(tmp_path / "b" / "pom.xml")

    assert a.source_directory().path == (tmp_path / "a" / "src" / "main" / "java").absolute()
    assert b.source_directory().path == (tmp_path / "b" / "src" / "java").absolute()

    source = File.at(tmp_path / "a" / "src" / "main" / "java" / "com" / "acme" / "App.java")
    assert a.contains_source(source)
    assert not b.contains_source(source)
    assert a.contains_source(a.source_directory())


def test_configured_source_directory(tmp_path: Path) -> None:
    _write(tmp_path, "pom.xml", "<project><groupId>g</groupId><artifactId>a</artifactId></project>")
    (pom,) = Workspace.load(tmp_path, source_directory="src").poms()

    assert pom.source_directory().path == (tmp_path / "src").absolute()
