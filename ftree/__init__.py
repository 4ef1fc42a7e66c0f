from ._checker import check_tree, is_valid
from ._exceptions import (
    FTAlreadyInitializedError,
    FTAlreadyInTreeError,
    FTBadPathError,
    FTConflictingPathError,
    FTError,
    FTInvariantError,
    FTMemoryError,
    FTNodeLimitExceededError,
    FTNoSuchPathError,
    FTNotADirectoryError,
    FTNotAFileError,
    FTNotInitializedError,
    FTStatus,
)
from ._node import ChildSlot, DirNode, FileNode
from ._path import Path
from ._tree import FileTree
from ._typing import FTStatResult, FTStats

__all__ = [
    "FileTree",
    "Path",
    "DirNode",
    "FileNode",
    "ChildSlot",
    "check_tree",
    "is_valid",
    "FTStatus",
    "FTError",
    "FTNotInitializedError",
    "FTAlreadyInitializedError",
    "FTBadPathError",
    "FTConflictingPathError",
    "FTNoSuchPathError",
    "FTNotADirectoryError",
    "FTNotAFileError",
    "FTAlreadyInTreeError",
    "FTMemoryError",
    "FTNodeLimitExceededError",
    "FTInvariantError",
    "FTStatResult",
    "FTStats",
]
__version__ = "0.1.0"
