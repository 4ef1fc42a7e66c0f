"""Independent invariant checker for :class:`~ftree.FileTree`.

The checker never mutates the tree. It re-derives every structural
invariant by a pre-order walk from the root and stops at the first
violation, raising :class:`FTInvariantError` with the offending path(s).

Usage::

    from ftree._checker import check_tree, is_valid

    check_tree(tree.initialized, tree.root, tree.count)  # raises
    assert is_valid(tree.initialized, tree.root, tree.count)  # logs
"""

from __future__ import annotations

import logging

from ._exceptions import FTInvariantError
from ._node import DirNode, FileNode
from ._path import Path

logger = logging.getLogger(__name__)


def is_valid(initialized: bool, root: DirNode | None, count: int) -> bool:
    """Return True if the tree satisfies every invariant.

    The first violation found is logged at WARNING level.
    """
    try:
        check_tree(initialized, root, count)
    except FTInvariantError as exc:
        logger.warning("File tree invariant violated: %s", exc)
        return False
    return True


def check_tree(initialized: bool, root: DirNode | None, count: int) -> None:
    # Top-level state
    if not initialized:
        if count != 0:
            raise FTInvariantError(f"Not initialized, but count is {count}")
        if root is not None:
            raise FTInvariantError(
                "Not initialized, but root node is not None", root.path.pathname
            )
    if root is None:
        if count != 0:
            raise FTInvariantError(f"Root node is None, but count is {count}")
        return
    if count == 0:
        raise FTInvariantError("Root node is not None, but count is 0", root.path.pathname)
    if not isinstance(root, DirNode):
        raise FTInvariantError(f"Root node is a {type(root).__name__}, not a directory")
    if root.parent is not None:
        raise FTInvariantError(
            "Root node has a parent", root.path.pathname, root.parent.path.pathname
        )
    if root.path.depth != 1:
        raise FTInvariantError("Root node is not at depth 1", root.path.pathname)

    reached = _check_subtree(root)
    if reached != count:
        raise FTInvariantError(
            f"Count is {count}, but {reached} directories are reachable from the root"
        )


def _check_subtree(node: DirNode) -> int:
    """Check *node* and everything below it; return the directories reached."""
    dirs = _check_node(node)
    reached = 1
    for child in dirs:
        reached += _check_subtree(child)
    return reached


def _check_node(node: DirNode) -> list[DirNode]:
    path = node.path
    dirs = _fetch_children(node, "dir")
    files = _fetch_children(node, "file")

    for child in dirs:
        if not isinstance(child, DirNode):
            raise FTInvariantError(
                f"Directory child is a {type(child).__name__}", path.pathname
            )
        if child.parent is not node:
            raise FTInvariantError(
                "Parent link does not point at the directory listing the node",
                path.pathname,
                child.path.pathname,
            )
        _check_parent_prefix(path, child.path)
    for child in files:
        if not isinstance(child, FileNode):
            raise FTInvariantError(
                f"File child is a {type(child).__name__}", path.pathname
            )
        if child.path.depth < 2:
            raise FTInvariantError("File node is at root depth", child.path.pathname)
        _check_parent_prefix(path, child.path)

    _check_siblings([child.path for child in dirs])
    _check_siblings([child.path for child in files])

    # Directories and files share one namespace
    shared = {child.path for child in dirs} & {child.path for child in files}
    if shared:
        raise FTInvariantError(
            "A directory and a file have the same absolute path",
            min(shared).pathname,
        )
    return dirs


def _fetch_children(node: DirNode, kind: str) -> list:
    num = getattr(node, f"num_{kind}_children")
    getter = getattr(node, f"get_{kind}_child")
    children = []
    for index in range(num):
        try:
            child = getter(index)
        except IndexError:
            raise FTInvariantError(
                f"num_{kind}_children claims {num} children, "
                f"but get_{kind}_child({index}) fails",
                node.path.pathname,
            ) from None
        if child is None:
            raise FTInvariantError(f"{kind.capitalize()} child {index} is None", node.path.pathname)
        children.append(child)
    return children


def _check_parent_prefix(parent_path: Path, child_path: Path) -> None:
    # parent's path must be the longest proper prefix of the child's
    if (
        child_path.shared_prefix_depth(parent_path) != child_path.depth - 1
        or parent_path.depth != child_path.depth - 1
    ):
        raise FTInvariantError(
            "P-C nodes don't have P-C paths",
            parent_path.pathname,
            child_path.pathname,
        )


def _check_siblings(paths: list[Path]) -> None:
    previous: Path | None = None
    for current in paths:
        if previous is not None:
            if current == previous:
                raise FTInvariantError(
                    "Two nodes have the same absolute path", current.pathname
                )
            if current < previous:
                raise FTInvariantError(
                    "Children are not in lexicographic order",
                    previous.pathname,
                    current.pathname,
                )
        previous = current
