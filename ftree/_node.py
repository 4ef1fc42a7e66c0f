from __future__ import annotations

import bisect
from collections.abc import Iterator
from typing import NamedTuple

from ._exceptions import (
    FTAlreadyInTreeError,
    FTConflictingPathError,
    FTNoSuchPathError,
)
from ._path import Path

# ---------------------------------------------------------------------------
#  Child lookup
# ---------------------------------------------------------------------------


class ChildSlot(NamedTuple):
    """Result of a sorted child lookup.

    When ``found`` is true, ``index`` is the child's position; otherwise it
    is the position at which a child with that path would be inserted.
    """

    found: bool
    index: int


def _node_path(node: DirNode | FileNode) -> Path:
    return node.path


def _find(children: list, path: Path) -> ChildSlot:
    idx = bisect.bisect_left(children, path, key=_node_path)
    found = idx < len(children) and children[idx].path == path
    return ChildSlot(found, idx)


# ---------------------------------------------------------------------------
#  Nodes
# ---------------------------------------------------------------------------


class FileNode:
    __slots__ = ("path", "contents")

    def __init__(self, path: Path, contents: bytes | None = None) -> None:
        if path.depth < 2:
            raise FTConflictingPathError(
                f"A file cannot be the root of the tree: '{path}'"
            )
        self.path: Path = path
        self.contents: bytes | None = _copy_contents(contents)

    @property
    def size(self) -> int:
        return 0 if self.contents is None else len(self.contents)

    def replace_contents(self, contents: bytes | None) -> bytes | None:
        old = self.contents
        self.contents = _copy_contents(contents)
        return old

    def __repr__(self) -> str:
        return f"FileNode({self.path.pathname!r}, size={self.size})"


class DirNode:
    __slots__ = ("path", "parent", "dir_children", "file_children")

    def __init__(self, path: Path, parent: DirNode | None = None) -> None:
        if parent is not None:
            if path != parent.path and not parent.path.is_ancestor_of(path):
                raise FTConflictingPathError(
                    f"'{parent.path}' is not an ancestor of '{path}'"
                )
            # parent must be exactly one level up
            if path.depth != parent.path.depth + 1:
                raise FTNoSuchPathError(
                    f"'{parent.path}' is not the direct parent of '{path}'"
                )
        elif path.depth != 1:
            raise FTNoSuchPathError(
                f"A directory without a parent must be the root: '{path}'"
            )
        self.path: Path = path
        self.parent: DirNode | None = parent
        self.dir_children: list[DirNode] = []
        self.file_children: list[FileNode] = []

    # -- lookup --

    def find_dir_child(self, path: Path) -> ChildSlot:
        return _find(self.dir_children, path)

    def find_file_child(self, path: Path) -> ChildSlot:
        return _find(self.file_children, path)

    @property
    def num_dir_children(self) -> int:
        return len(self.dir_children)

    @property
    def num_file_children(self) -> int:
        return len(self.file_children)

    def get_dir_child(self, index: int) -> DirNode:
        if not 0 <= index < len(self.dir_children):
            raise IndexError(f"No directory child {index} under '{self.path}'")
        return self.dir_children[index]

    def get_file_child(self, index: int) -> FileNode:
        if not 0 <= index < len(self.file_children):
            raise IndexError(f"No file child {index} under '{self.path}'")
        return self.file_children[index]

    # -- linking --

    def add_dir_child(self, child: DirNode, slot: ChildSlot) -> None:
        if slot.found:
            raise FTAlreadyInTreeError(f"Directory exists: '{child.path}'")
        self.dir_children.insert(slot.index, child)

    def add_file_child(self, child: FileNode, slot: ChildSlot) -> None:
        if slot.found:
            raise FTAlreadyInTreeError(f"File exists: '{child.path}'")
        self.file_children.insert(slot.index, child)

    def remove_dir_child(self, index: int) -> DirNode:
        child = self.dir_children.pop(index)
        child.parent = None
        return child

    def remove_file_child(self, index: int) -> FileNode:
        return self.file_children.pop(index)

    def release(self) -> tuple[int, int]:
        """Drop the whole subtree rooted here.

        Directories are released depth-first, then this node's files.
        Returns ``(directories_released, files_released)``, this node
        included.
        """
        dirs = 0
        files = 0
        for child in self.dir_children:
            child_dirs, child_files = child.release()
            dirs += child_dirs
            files += child_files
        self.dir_children.clear()
        files += len(self.file_children)
        self.file_children.clear()
        self.parent = None
        return dirs + 1, files

    # -- traversal --

    def iter_preorder(self) -> Iterator[DirNode]:
        yield self
        for child in self.dir_children:
            yield from child.iter_preorder()

    def __repr__(self) -> str:
        return (
            f"DirNode({self.path.pathname!r}, dirs={len(self.dir_children)}, "
            f"files={len(self.file_children)})"
        )


def _copy_contents(contents: bytes | None) -> bytes | None:
    if contents is None:
        return None
    if not isinstance(contents, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"File contents must be bytes-like, not {type(contents).__name__}"
        )
    return bytes(contents)
