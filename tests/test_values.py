from __future__ import annotations

from pathlib import Path

import pytest

from pom_resolver.values import placeholder_name
from pom_resolver.workspace import Workspace


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


PARENT = """<project>
  <groupId>com.acme</groupId>
  <artifactId>parent</artifactId>
  <version>3.1.0</version>
  <description>shared parent</description>
  <properties>
    <lib.version>1.2.3</lib.version>
  </properties>
</project>
"""


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("${foo}", "foo"),
        ("${project.version}", "project.version"),
        ("${a}.${b}", None),
        ("v${rev}", None),
        ("${rev}-SNAPSHOT", None),
        ("1.0", None),
        ("${}", None),
    ],
)
def test_placeholder_name(text: str, expected: str | None) -> None:
    assert placeholder_name(text) == expected


def test_version_placeholder_resolves_from_properties(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "pom.xml",
        """<project>
  <groupId>com.acme</groupId>
  <artifactId>demo</artifactId>
  <version>1.0.0</version>
  <properties><foo>1.2.3</foo></properties>
  <dependencies>
    <dependency>
      <groupId>org.example</groupId>
      <artifactId>lib</artifactId>
      <version>${foo}</version>
    </dependency>
  </dependencies>
</project>
""",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    (dep,) = pom.dependencies()
    assert dep.version_string() == "1.2.3"
    assert dep.version.raw_value() == "${foo}"


def test_partial_placeholders_are_returned_verbatim(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "pom.xml",
        """<project>
  <groupId>com.acme</groupId>
  <artifactId>demo</artifactId>
  <version>${major}.${minor}</version>
  <properties><major>1</major><minor>2</minor></properties>
</project>
""",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    assert pom.version_string() == "${major}.${minor}"


def test_unresolved_placeholder_is_none(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "pom.xml",
        """<project>
  <groupId>com.acme</groupId>
  <artifactId>demo</artifactId>
  <version>${missing}</version>
</project>
""",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    assert pom.version.value() is None
    assert pom.version.values() == []
    assert pom.version_string() == ""


def test_project_properties(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "pom.xml",
        """<project>
  <groupId>com.acme</groupId>
  <artifactId>demo</artifactId>
  <version>2.5</version>
  <properties>
    <own.version>${project.version}</own.version>
    <own.group>${pom.groupId}</own.group>
    <composite>${project.properties}</composite>
    <home>${project.basedir}</home>
  </properties>
</project>
""",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    assert pom.property("own.version").value() == "2.5"
    assert pom.property("own.group").value() == "com.acme"
    # <properties> has children, so it is not a value
    assert pom.property("composite").value() is None
    assert pom.property("home").value() == tmp_path.absolute().as_posix()


def test_project_property_inherited_from_parent_pom(tmp_path: Path) -> None:
    _write(tmp_path, "parent/pom.xml", PARENT)
    _write(
        tmp_path,
        "child/pom.xml",
        """<project>
  <parent>
    <groupId>com.acme</groupId>
    <artifactId>parent</artifactId>
    <version>3.1.0</version>
  </parent>
  <artifactId>child</artifactId>
  <properties>
    <desc>${project.description}</desc>
    <parent.v>${project.parent.version}</parent.v>
    <lib>${lib.version}</lib>
  </properties>
</project>
""",
    )
    workspace = Workspace.load(tmp_path)
    child = workspace.pom_for_file(tmp_path / "child" / "pom.xml")

    assert child.property("desc").value() == "shared parent"
    assert child.property("parent.v").value() == "3.1.0"
    assert child.property("lib").value() == "1.2.3"
    assert child.project_property("description").raw_value() == "shared parent"


def test_project_property_local_element_shadows_parent(tmp_path: Path) -> None:
    _write(tmp_path, "parent/pom.xml", PARENT)
    _write(
        tmp_path,
        "child/pom.xml",
        """<project>
  <parent>
    <groupId>com.acme</groupId>
    <artifactId>parent</artifactId>
    <version>3.1.0</version>
  </parent>
  <artifactId>child</artifactId>
  <description>own</description>
</project>
""",
    )
    workspace = Workspace.load(tmp_path)
    child = workspace.pom_for_file(tmp_path / "child" / "pom.xml")

    assert child.project_property("description").raw_value() == "own"


def test_project_version_falls_back_to_parent_element(tmp_path: Path) -> None:
    # The parent POM is not part of the snapshot.
    _write(
        tmp_path,
        "pom.xml",
        """<project>
  <parent>
    <groupId>org.external</groupId>
    <artifactId>parent</artifactId>
    <version>7</version>
  </parent>
  <artifactId>child</artifactId>
  <dependencies>
    <dependency>
      <groupId>${project.groupId}</groupId>
      <artifactId>sibling</artifactId>
      <version>${project.version}</version>
    </dependency>
  </dependencies>
</project>
""",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    (dep,) = pom.dependencies()
    assert dep.coordinate() == "org.external:sibling:7"


def test_self_referential_placeholder_is_unresolved(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "pom.xml",
        """<project>
  <groupId>com.acme</groupId>
  <artifactId>demo</artifactId>
  <version>${project.version}</version>
  <properties>
    <a>${b}</a>
    <b>${a}</b>
  </properties>
</project>
""",
    )
    (pom,) = Workspace.load(tmp_path).poms()

    assert pom.version_string() == ""
    assert pom.property("a").value() is None
    assert pom.property("b").value() is None


def test_placeholder_outside_a_pom_is_unresolved(tmp_path: Path) -> None:
    _write(
        tmp_path,
        "dependency-reduced-pom.xml",
        "<project><properties><x>1</x></properties><version>${x}</version></project>",
    )
    workspace = Workspace.load(tmp_path)
    (parsed,) = workspace.files

    version = workspace.wrap(parsed.root.child("version"))
    assert version.value() is None
