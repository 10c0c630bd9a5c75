from __future__ import annotations

"""
Asset Tree Data Models.

Defines the intrusive tree node used to mirror a directory of static assets.
Each node owns its children through `first_child`; siblings form a doubly
linked chain (`next`/`previous`) kept in ascending name order, and every
non-root node keeps a back-reference to its `parent`.
"""

import logging
import os
import posixpath
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from assettree.domain.errors import TreeContractError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class NodeKind(Enum):
    """Kind of an asset tree node. IMAGE is a FILE carrying size variants."""
    FILE = "file"
    DIRECTORY = "directory"
    IMAGE = "image"


class TraverseStatus(Enum):
    """Control signal returned by a traversal visitor."""
    CONTINUE = "continue"
    SKIP_CHILDREN = "skip_children"
    TERMINATE = "terminate"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class SizeVariant:
    """
    One rendition of an image node.

    Attributes:
        width: Pixel width of the rendition.
        original: True for the rendition matching the natural image width.
        materialized: True once the rendition has been written to disk.
    """
    width: int
    original: bool = False
    materialized: bool = False


class TreeNode:
    """
    A node of an in-memory assets tree.

    Content is either read lazily from `source_path` (and cached after the
    first read) or overridden in memory for synthetic nodes. Output paths are
    only set once the node has been published.
    """

    def __init__(
            self,
            kind: NodeKind,
            name: str,
            path: str = "",
            parent: Optional[TreeNode] = None,
            source_path: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.name = name
        self.path = path
        self.source_path = source_path

        self.parent: Optional[TreeNode] = parent
        self.first_child: Optional[TreeNode] = None
        self.next: Optional[TreeNode] = None
        self.previous: Optional[TreeNode] = None

        self.sizes: List[SizeVariant] = []

        self.output_path: Optional[str] = None
        self.output_rel_path: Optional[str] = None

        self._content: Optional[bytes] = None
        self._overridden = False

    def __repr__(self) -> str:
        return f"TreeNode({self.kind.name}, {self.name!r}, path={self.path!r})"

    # -------------------------------------------------------------------------
    # KIND HELPERS
    # -------------------------------------------------------------------------

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_image(self) -> bool:
        return self.kind is NodeKind.IMAGE

    @property
    def is_overridden(self) -> bool:
        return self._overridden

    # -------------------------------------------------------------------------
    # CONTENT
    # -------------------------------------------------------------------------

    def content(self) -> bytes:
        """
        Return the node's bytes, reading `source_path` on first access.

        Returns:
            bytes: The overridden content, or the cached backing file content.

        Raises:
            TreeContractError: If the node is a directory.
            OSError: If the backing file cannot be read.
        """
        if self.kind is NodeKind.DIRECTORY:
            raise TreeContractError(f"{self.name} is not a file or image node")

        if self._content is not None:
            return self._content

        if self.source_path is None:
            return b""

        with open(self.source_path, "rb") as f:
            self._content = f.read()
        logger.debug(f"Loaded {len(self._content)} bytes from {self.source_path}")
        return self._content

    def set_content(self, content: bytes) -> None:
        """
        Override the node's content in memory.

        Raises:
            TreeContractError: If the node is not a plain file node.
        """
        if self.kind is not NodeKind.FILE:
            raise TreeContractError(f"{self.name} is not a file node")

        self._content = bytes(content)
        self._overridden = True

    # -------------------------------------------------------------------------
    # TOPOLOGY
    # -------------------------------------------------------------------------

    def children(self) -> Iterator[TreeNode]:
        """Yield the direct children in sibling order."""
        child = self.first_child
        while child is not None:
            yield child
            child = child.next

    def last_child(self) -> Optional[TreeNode]:
        """Walk the sibling chain from `first_child` to its end."""
        if self.first_child is None:
            return None

        last = self.first_child
        while last.next is not None:
            last = last.next
        return last

    # -------------------------------------------------------------------------
    # SIZE VARIANTS
    # -------------------------------------------------------------------------

    def original_size(self) -> SizeVariant:
        """
        Return the variant matching the image's natural width.

        Raises:
            TreeContractError: If the node is not an image or has no original variant.
        """
        if self.kind is not NodeKind.IMAGE:
            raise TreeContractError(f"{self.name} is not an image node")

        for size in self.sizes:
            if size.original:
                return size
        raise TreeContractError(f"{self.name} has no original size")

    def find_size(self, width: int) -> Optional[SizeVariant]:
        for size in self.sizes:
            if size.width == width:
                return size
        return None

    def variant_path(self, size: SizeVariant, relative: bool = False) -> str:
        """
        Build the published path of a size variant: `<output dir>/<width><ext>`.

        Args:
            size: The variant to locate.
            relative: Use the output-relative directory instead of the absolute one.

        Raises:
            TreeContractError: If the node is not an image or was never published.
        """
        if self.kind is not NodeKind.IMAGE:
            raise TreeContractError(f"{self.name} is not an image node")

        base = self.output_rel_path if relative else self.output_path
        if base is None:
            raise TreeContractError(f"{self.name} hasn't been published")

        _, ext = os.path.splitext(self.name)
        file_name = f"{size.width}{ext}"
        if relative:
            return posixpath.join(base, file_name)
        return os.path.join(base, file_name)
