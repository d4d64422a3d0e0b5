"""Pytest configuration and fixtures for pom-resolver tests."""
from __future__ import annotations

from pathlib import Path

import pytest

from pom_resolver.matcher import MavenRepository


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's ~/.m2 and POMRES_* settings out of the tests."""
    monkeypatch.delenv("POMRES_LOCAL_REPO", raising=False)
    monkeypatch.delenv("POMRES_SOURCE_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def local_repo(tmp_path: Path):
    """Return a helper that creates jars in `<tmp>/.m2/repository` and indexes them."""
    root = tmp_path / ".m2" / "repository"
    root.mkdir(parents=True)

    def add(*coordinates: str) -> MavenRepository:
        for coordinate in coordinates:
            group_id, artifact_id, version = coordinate.split(":")
            folder = root.joinpath(*group_id.split("."), artifact_id, version)
            folder.mkdir(parents=True, exist_ok=True)
            (folder / f"{artifact_id}-{version}.jar").write_bytes(b"PK\x03\x04")
        return MavenRepository.at(root)

    return add
