from __future__ import annotations

from ._exceptions import FTBadPathError


class Path:
    """Immutable absolute path made of non-empty components.

    Paths are ordered component-wise, so two siblings compare the same way
    their rendered pathnames do.
    """

    __slots__ = ("_parts",)

    def __init__(self, parts: tuple[str, ...]) -> None:
        if not parts:
            raise ValueError("A path needs at least one component.")
        self._parts: tuple[str, ...] = tuple(parts)

    @classmethod
    def parse(cls, raw: str) -> Path:
        if not isinstance(raw, str):
            raise FTBadPathError(f"Path must be a string, not {type(raw).__name__}")
        if "\0" in raw:
            raise FTBadPathError(f"Path contains a NUL character: {raw!r}")
        converted = raw.replace("\\", "/")
        # relative paths are treated as if prepended with "/"
        if converted.startswith("/"):
            converted = converted[1:]
        if not converted:
            raise FTBadPathError(f"Path has no components: '{raw}'")
        parts = converted.split("/")
        for part in parts:
            if not part:
                raise FTBadPathError(f"Empty path component in '{raw}'")
            if part in (".", ".."):
                raise FTBadPathError(f"Relative component '{part}' in '{raw}'")
        return cls(tuple(parts))

    @property
    def parts(self) -> tuple[str, ...]:
        return self._parts

    @property
    def depth(self) -> int:
        return len(self._parts)

    @property
    def name(self) -> str:
        return self._parts[-1]

    @property
    def pathname(self) -> str:
        return "/" + "/".join(self._parts)

    def prefix(self, depth: int) -> Path:
        if depth < 1 or depth > len(self._parts):
            raise ValueError(
                f"Prefix depth {depth} out of range for '{self.pathname}' "
                f"(depth {len(self._parts)})"
            )
        if depth == len(self._parts):
            return self
        return Path(self._parts[:depth])

    def shared_prefix_depth(self, other: Path) -> int:
        shared = 0
        for mine, theirs in zip(self._parts, other._parts):
            if mine != theirs:
                break
            shared += 1
        return shared

    def is_ancestor_of(self, other: Path) -> bool:
        """True if this path is a proper prefix of *other*."""
        return (
            self.depth < other.depth
            and other.shared_prefix_depth(self) == self.depth
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._parts == other._parts

    def __lt__(self, other: Path) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._parts < other._parts

    def __le__(self, other: Path) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._parts <= other._parts

    def __gt__(self, other: Path) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._parts > other._parts

    def __ge__(self, other: Path) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._parts >= other._parts

    def __hash__(self) -> int:
        return hash(self._parts)

    def __str__(self) -> str:
        return self.pathname

    def __repr__(self) -> str:
        return f"Path({self.pathname!r})"
