"""Resolver configuration module.

Configuration is read from environment variables; CLI options override it.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_SOURCE_DIRECTORY = "src/main/java"
DEFAULT_LOCAL_REPOSITORY = Path("~/.m2/repository")


@dataclass
class ResolverConfig:
    """Resolver configuration container.

    Attributes:
        local_repository: Local Maven repository to match jars against, if any.
        source_directory: Source folder of POMs that do not declare
            `<build><sourceDirectory>`, relative to the POM.
    """

    local_repository: Path | None = None
    source_directory: str = DEFAULT_SOURCE_DIRECTORY

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """Create configuration from environment variables.

        Environment variables:
            POMRES_LOCAL_REPO: Local repository path (default: ~/.m2/repository when it exists)
            POMRES_SOURCE_DIR: Default source directory (default: "src/main/java")
        """
        repo = os.getenv("POMRES_LOCAL_REPO")
        if repo:
            local_repository: Path | None = Path(repo).expanduser()
        else:
            default = DEFAULT_LOCAL_REPOSITORY.expanduser()
            local_repository = default if default.is_dir() else None

        return cls(
            local_repository=local_repository,
            source_directory=os.getenv("POMRES_SOURCE_DIR") or DEFAULT_SOURCE_DIRECTORY,
        )

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If a configured path is missing or unusable.
        """
        if self.local_repository is not None and not self.local_repository.is_dir():
            raise ValueError(f"Local repository does not exist: {self.local_repository}")
        if not self.source_directory.strip():
            raise ValueError("POMRES_SOURCE_DIR must not be empty")
