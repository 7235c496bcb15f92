"""src/wiremodel/http/path.py

The path component of a URL.
"""

from typing import Any, List

__all__ = ["Path", "split_path"]


def split_path(path: str) -> List[str]:
    """Slash-separated parts of a path, empty parts dropped: ``//a//b/`` -> ``['a', 'b']``."""
    return [part for part in path.split("/") if part]


class Path:
    """Immutable wrapper over a URL path string."""

    __slots__ = ("_path",)

    def __init__(self, path: str):
        self._path = path

    @property
    def parts(self) -> List[str]:
        """Parts of the path, e.g. ``/user/profile`` -> ``['user', 'profile']``."""
        return split_path(self._path)

    def contains(self, string: str) -> bool:
        return string in self._path

    def starts_with(self, string: str) -> bool:
        return self._path.startswith(string)

    def ends_with(self, string: str) -> bool:
        return self._path.endswith(string)

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"Path({self._path!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Path):
            return self._path == other._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._path)
