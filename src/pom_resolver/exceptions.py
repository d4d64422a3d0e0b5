"""Custom exceptions for pom-resolver."""

from __future__ import annotations


class PomResolverError(Exception):
    """Base exception for pom-resolver."""


class PomNotFoundError(PomResolverError):
    """Raised when a POM file cannot be found."""


class PomParseError(PomResolverError):
    """Raised when a POM file cannot be parsed."""


class RepositoryError(PomResolverError):
    """Raised when a folder is used as a local repository but is not one."""


class CyclicParentError(PomResolverError):
    """Raised when a POM's parent chain refers back to itself.

    Attributes:
        chain: Coordinates along the cycle, starting and ending with the same POM.
    """

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__("Cyclic parent POM chain: " + " -> ".join(chain))
