from enum import IntEnum


class FTStatus(IntEnum):
    """Status codes carried by every :class:`FTError`."""

    SUCCESS = 0
    INITIALIZATION_ERROR = 1
    BAD_PATH = 2
    CONFLICTING_PATH = 3
    NO_SUCH_PATH = 4
    NOT_A_DIRECTORY = 5
    NOT_A_FILE = 6
    ALREADY_IN_TREE = 7
    MEMORY_ERROR = 8


class FTError(Exception):
    """Base class for all file tree errors."""

    status: FTStatus = FTStatus.SUCCESS


class FTNotInitializedError(FTError, RuntimeError):
    """Raised when the tree is used before init() or after destroy()."""

    status = FTStatus.INITIALIZATION_ERROR


class FTAlreadyInitializedError(FTError, RuntimeError):
    """Raised when init() is called on an initialized tree."""

    status = FTStatus.INITIALIZATION_ERROR


class FTBadPathError(FTError, ValueError):
    """Raised when a string is not a well-formed absolute path. Subclass of ValueError."""

    status = FTStatus.BAD_PATH


class FTConflictingPathError(FTError, ValueError):
    """Raised when a path is not under the root, or a file would become the root."""

    status = FTStatus.CONFLICTING_PATH


class FTNoSuchPathError(FTError, FileNotFoundError):
    """Raised when a path names no directory or file in the tree."""

    status = FTStatus.NO_SUCH_PATH


class FTNotADirectoryError(FTError, NotADirectoryError):
    """Raised when a directory was expected but a file was found."""

    status = FTStatus.NOT_A_DIRECTORY


class FTNotAFileError(FTError, IsADirectoryError):
    """Raised when a file was expected but a directory was found."""

    status = FTStatus.NOT_A_FILE


class FTAlreadyInTreeError(FTError, FileExistsError):
    """Raised when inserting at a path that already exists."""

    status = FTStatus.ALREADY_IN_TREE


class FTMemoryError(FTError, MemoryError):
    """Raised when a node cannot be allocated. The tree is left unchanged."""

    status = FTStatus.MEMORY_ERROR


class FTNodeLimitExceededError(FTMemoryError):
    """Raised when the node count limit is exceeded. Subclass of FTMemoryError."""

    def __init__(self, current: int, limit: int) -> None:
        self.current = current
        self.limit = limit
        super().__init__(
            f"FT node limit exceeded: current {current} nodes, limit is {limit}."
        )


class FTInvariantError(FTError, AssertionError):
    """Raised by the checker when a structural invariant does not hold.

    ``paths`` holds the pathnames of the offending node(s).
    """

    def __init__(self, message: str, *paths: str) -> None:
        self.message = message
        self.paths = paths
        if paths:
            detail = " ".join(f"({p})" for p in paths)
            super().__init__(f"{message}: {detail}")
        else:
            super().__init__(message)
