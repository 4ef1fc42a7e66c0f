from __future__ import annotations

import logging
from collections.abc import Iterator

from ._checker import check_tree
from ._exceptions import (
    FTAlreadyInitializedError,
    FTAlreadyInTreeError,
    FTConflictingPathError,
    FTError,
    FTNodeLimitExceededError,
    FTNoSuchPathError,
    FTNotADirectoryError,
    FTNotAFileError,
    FTNotInitializedError,
)
from ._node import DirNode, FileNode
from ._path import Path
from ._typing import FTStatResult, FTStats

logger = logging.getLogger(__name__)


class FileTree:
    """In-memory hierarchy of directories and files under a single root.

    Directories may hold sub-directories and files; files are always
    leaves. ``count`` tracks directory nodes only, so ``root is None``
    exactly when ``count == 0``.

    A tree starts uninitialized; call :meth:`init` before use and
    :meth:`destroy` to release everything. Not thread-safe: callers must
    serialize access.
    """

    def __init__(
        self,
        max_nodes: int | None = None,
        check_invariants: bool = False,
    ) -> None:
        if max_nodes is not None and (
            isinstance(max_nodes, bool) or not isinstance(max_nodes, int) or max_nodes < 1
        ):
            raise ValueError(
                f"Invalid max_nodes value: {max_nodes!r}. Expected a positive int or None."
            )
        self._max_nodes: int | None = max_nodes
        self._check_invariants: bool = check_invariants
        self._initialized: bool = False
        self._root: DirNode | None = None
        self._count: int = 0
        self._file_count: int = 0

    # -- state --

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def root(self) -> DirNode | None:
        return self._root

    @property
    def count(self) -> int:
        """Number of directory nodes in the tree."""
        return self._count

    @property
    def file_count(self) -> int:
        return self._file_count

    # -- lifecycle --

    def init(self) -> None:
        if self._initialized:
            raise FTAlreadyInitializedError("File tree is already initialized.")
        self._initialized = True
        self._root = None
        self._count = 0
        self._file_count = 0
        logger.debug("File tree initialized (max_nodes=%s)", self._max_nodes)
        self._after_mutation()

    def destroy(self) -> None:
        self._require_initialized()
        if self._root is not None:
            dirs, files = self._root.release()
            self._count -= dirs
            self._file_count -= files
            self._root = None
        assert self._count == 0
        self._initialized = False
        logger.debug("File tree destroyed")
        self._after_mutation()

    def check(self) -> None:
        """Verify every structural invariant; raise FTInvariantError if one fails."""
        check_tree(self._initialized, self._root, self._count)

    def _after_mutation(self) -> None:
        if self._check_invariants:
            self.check()

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise FTNotInitializedError("File tree is not initialized.")

    # -- node allocation helpers --

    def _reserve(self, staged: int) -> None:
        if self._max_nodes is None:
            return
        current = self._count + self._file_count + staged
        if current >= self._max_nodes:
            raise FTNodeLimitExceededError(current, self._max_nodes)

    def _stage_dirs(
        self, npath: Path, anchor: DirNode | None, stop: int
    ) -> tuple[DirNode | None, DirNode | None, int]:
        """Build the missing directories of *npath* down to depth *stop*.

        The chain hangs off *anchor* but is not linked into it, so dropping
        the returned nodes leaves the tree untouched. Returns
        ``(first_new, last, created)`` where *last* is the deepest directory
        (*anchor* itself when nothing was created).
        """
        start = 1 if anchor is None else anchor.path.depth + 1
        first: DirNode | None = None
        parent = anchor
        created = 0
        for depth in range(start, stop + 1):
            self._reserve(created)
            node = DirNode(npath.prefix(depth), parent)
            if first is None:
                first = node
            else:
                assert parent is not None
                parent.add_dir_child(node, parent.find_dir_child(node.path))
            parent = node
            created += 1
        return first, parent, created

    def _commit(self, anchor: DirNode | None, first: DirNode | None, created: int) -> None:
        if first is not None:
            if anchor is None:
                self._root = first
            else:
                anchor.add_dir_child(first, anchor.find_dir_child(first.path))
        self._count += created

    # -- path helpers --

    def _parse(self, path: str) -> Path:
        self._require_initialized()
        return Path.parse(path)

    def _traverse(self, npath: Path) -> DirNode | None:
        """Return the deepest existing directory on the way to *npath*.

        None when the tree is empty. Only directory children are followed.
        """
        if self._root is None:
            return None
        if npath.prefix(1) != self._root.path:
            raise FTConflictingPathError(
                f"'{npath}' is not under the root '{self._root.path}'"
            )
        current = self._root
        for depth in range(2, npath.depth + 1):
            slot = current.find_dir_child(npath.prefix(depth))
            if not slot.found:
                break
            current = current.dir_children[slot.index]
        return current

    def _find_dir(self, path: str) -> DirNode:
        npath = self._parse(path)
        node = self._traverse(npath)
        if node is None:
            raise FTNoSuchPathError(f"No such directory: '{path}'")
        if node.path != npath:
            if node.path.depth == npath.depth - 1 and node.find_file_child(npath).found:
                raise FTNotADirectoryError(f"Not a directory: '{path}'")
            raise FTNoSuchPathError(f"No such directory: '{path}'")
        return node

    def _find_file(self, path: str) -> tuple[DirNode, int]:
        npath = self._parse(path)
        parent = self._traverse(npath)
        if parent is None:
            raise FTNoSuchPathError(f"No such file: '{path}'")
        if parent.path == npath:
            raise FTNotAFileError(f"Is a directory: '{path}'")
        if parent.path.depth != npath.depth - 1:
            raise FTNoSuchPathError(f"No such file: '{path}'")
        slot = parent.find_file_child(npath)
        if not slot.found:
            raise FTNoSuchPathError(f"No such file: '{path}'")
        return parent, slot.index

    def _get_file(self, path: str) -> FileNode:
        parent, index = self._find_file(path)
        return parent.file_children[index]

    def _check_insertable(self, npath: Path, anchor: DirNode | None) -> None:
        if anchor is None:
            return
        if anchor.path == npath:
            raise FTAlreadyInTreeError(f"Directory exists: '{npath}'")
        # Files have no children, so only the level below anchor can be a file
        next_path = npath.prefix(anchor.path.depth + 1)
        if anchor.find_file_child(next_path).found:
            if next_path == npath:
                raise FTAlreadyInTreeError(f"File exists: '{npath}'")
            raise FTNotADirectoryError(
                f"A file exists at path component: '{next_path}'"
            )

    # -- public API --

    def insert_dir(self, path: str) -> None:
        npath = self._parse(path)
        anchor = self._traverse(npath)
        self._check_insertable(npath, anchor)
        first, _last, created = self._stage_dirs(npath, anchor, npath.depth)
        self._commit(anchor, first, created)
        logger.debug("Inserted directory %s (%d new directories)", npath, created)
        self._after_mutation()

    def insert_file(self, path: str, contents: bytes | None = None) -> None:
        npath = self._parse(path)
        anchor = self._traverse(npath)
        self._check_insertable(npath, anchor)
        if npath.depth < 2:
            raise FTConflictingPathError(f"A file cannot be the root of the tree: '{path}'")
        first, parent, created = self._stage_dirs(npath, anchor, npath.depth - 1)
        assert parent is not None
        self._reserve(created)
        fnode = FileNode(npath, contents)
        parent.add_file_child(fnode, parent.find_file_child(npath))
        self._commit(anchor, first, created)
        self._file_count += 1
        logger.debug(
            "Inserted file %s (%d bytes, %d new directories)", npath, fnode.size, created
        )
        self._after_mutation()

    def remove_dir(self, path: str) -> None:
        node = self._find_dir(path)
        parent = node.parent
        if parent is None:
            self._root = None
        else:
            slot = parent.find_dir_child(node.path)
            assert slot.found
            parent.remove_dir_child(slot.index)
        npath = node.path
        dirs, files = node.release()
        self._count -= dirs
        self._file_count -= files
        if self._root is None:
            assert self._count == 0
        logger.debug("Removed directory %s (%d directories, %d files)", npath, dirs, files)
        self._after_mutation()

    def remove_file(self, path: str) -> None:
        parent, index = self._find_file(path)
        fnode = parent.remove_file_child(index)
        self._file_count -= 1
        logger.debug("Removed file %s", fnode.path)
        self._after_mutation()

    def contains_dir(self, path: str) -> bool:
        try:
            self._find_dir(path)
        except FTError:
            return False
        return True

    def contains_file(self, path: str) -> bool:
        try:
            self._find_file(path)
        except FTError:
            return False
        return True

    def get_file_contents(self, path: str) -> bytes | None:
        """Return the contents of the file at *path*, or None on any failure.

        A None return is not an existence check: contents may be None.
        """
        try:
            return self._get_file(path).contents
        except FTError:
            return None

    def replace_file_contents(self, path: str, contents: bytes | None) -> bytes | None:
        """Store *contents* in the file at *path* and return the old contents.

        Returns None if the file cannot be found. The old contents may
        themselves be None.
        """
        try:
            fnode = self._get_file(path)
        except FTError:
            return None
        return fnode.replace_contents(contents)

    def stat(self, path: str) -> FTStatResult:
        try:
            self._find_dir(path)
        except FTNotADirectoryError:
            fnode = self._get_file(path)
            return FTStatResult(is_file=True, size=fnode.size)
        return FTStatResult(is_file=False, size=None)

    def to_string(self) -> str | None:
        """Render the tree, one path per line.

        Directories appear in pre-order; each directory's line is followed
        by its files before any sub-directory. None if uninitialized.
        """
        if not self._initialized:
            return None
        lines: list[str] = []
        if self._root is not None:
            for node in self._root.iter_preorder():
                lines.append(node.path.pathname)
                lines.extend(fnode.path.pathname for fnode in node.file_children)
        return "".join(line + "\n" for line in lines)

    def listdir(self, path: str) -> list[str]:
        node = self._find_dir(path)
        names = [child.path.name for child in node.dir_children]
        names.extend(fnode.path.name for fnode in node.file_children)
        return sorted(names)

    def walk(self, path: str | None = None) -> Iterator[tuple[str, list[str], list[str]]]:
        """Walk the tree top-down, yielding ``(dir_path, dirnames, filenames)``.

        Starts at the root when *path* is None; an empty tree yields nothing.
        Lookup errors are raised here, not on first iteration.
        """
        if path is None:
            self._require_initialized()
            start = self._root
        else:
            start = self._find_dir(path)
        return self._walk(start)

    @staticmethod
    def _walk(start: DirNode | None) -> Iterator[tuple[str, list[str], list[str]]]:
        if start is None:
            return
        for node in start.iter_preorder():
            yield (
                node.path.pathname,
                [child.path.name for child in node.dir_children],
                [fnode.path.name for fnode in node.file_children],
            )

    def export_tree(self) -> dict[str, bytes | None]:
        self._require_initialized()
        result: dict[str, bytes | None] = {}
        if self._root is not None:
            for node in self._root.iter_preorder():
                for fnode in node.file_children:
                    result[fnode.path.pathname] = fnode.contents
        return result

    def stats(self) -> FTStats:
        return FTStats(
            dir_count=self._count,
            file_count=self._file_count,
            node_count=self._count + self._file_count,
            max_nodes=self._max_nodes,
        )

    def __repr__(self) -> str:
        state = "initialized" if self._initialized else "uninitialized"
        root = self._root.path.pathname if self._root is not None else None
        return (
            f"FileTree({state}, root={root!r}, dirs={self._count}, "
            f"files={self._file_count})"
        )
