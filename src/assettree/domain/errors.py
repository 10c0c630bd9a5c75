from __future__ import annotations

"""
Asset Tree Exception Hierarchy.

Runtime failures (I/O during ingestion or publishing, unresolved references
in template helpers) derive from AssetTreeError and carry the offending path.
Caller contract violations raise TreeContractError and are never recovered.
"""


class AssetTreeError(Exception):
    """Base exception for all recoverable asset tree failures."""


class IngestionError(AssetTreeError):
    """Raised when a directory cannot be listed or an image header cannot be decoded."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"while ingesting {path}: {message}")
        self.path = path


class PublishError(AssetTreeError):
    """Raised when a node cannot be written to the output tree."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"while publishing {path}: {message}")
        self.path = path


class AssetNotFoundError(AssetTreeError):
    """Raised by template helpers when a reference resolves in neither tree."""

    def __init__(self, reference: str, searched_local: bool) -> None:
        tree = "local" if searched_local else "global"
        super().__init__(f"{reference} not found in the {tree} assets tree")
        self.reference = reference
        self.searched_local = searched_local


class TreeContractError(RuntimeError):
    """Raised when a node is used in a way its kind or lifecycle forbids."""
