"""src/wiremodel/http/headers.py

Case-insensitive, multi-valued HTTP header storage for Wiremodel.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

__all__ = ["Headers", "HeaderValue", "title_case"]

HeaderValue = Union[str, int, Sequence[Union[str, int]]]


def title_case(name: str) -> str:
    """Capitalize each hyphen-delimited word: ``content-type`` -> ``Content-Type``."""
    return "-".join(part.capitalize() for part in name.lower().split("-"))


def _as_list(value: HeaderValue) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


class Headers(Mapping[str, str]):
    """
    Case-insensitive dictionary for HTTP headers with support for multiple values.

    Keys are stored lowercased, each mapped to the ordered list of its values.
    Behaves like a read-only dictionary where values are the comma-joined
    strings; access raw lists via get_all().

    The ``set``/``add``/``remove`` primitives mutate in place and are meant for
    the owner of a private copy (see :class:`wiremodel.model.message.Message`).
    """

    __slots__ = ("_headers",)

    def __init__(self, headers: Optional[Mapping[str, HeaderValue]] = None):
        self._headers: Dict[str, List[str]] = {}
        if headers:
            for k, v in headers.items():
                self._headers[k.lower()] = _as_list(v)

    def __getitem__(self, key: str) -> str:
        """Get header value (comma-joined if multiple)."""
        values = self._headers.get(key.lower())
        if values is None:
            raise KeyError(key)
        return ", ".join(values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Headers):
            return self._headers == other._headers
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({self.presentation()!r})"

    def get_all(self, key: str) -> List[str]:
        """
        Get all values of a header.

        Args:
            key: Header name (case-insensitive).

        Returns:
            Copy of the list of values for the header, empty list if not found.
        """
        return list(self._headers.get(key.lower(), []))

    def first(self, key: str) -> Optional[str]:
        """First value of the header, or None if absent."""
        values = self._headers.get(key.lower())
        return values[0] if values else None

    def last(self, key: str) -> Optional[str]:
        """Last value of the header, or None if absent."""
        values = self._headers.get(key.lower())
        return values[-1] if values else None

    def presentation(self) -> Dict[str, List[str]]:
        """Headers keyed by their wire name (Title-Case), in insertion order."""
        return {title_case(k): list(v) for k, v in self._headers.items()}

    def lines(self) -> Iterator[str]:
        """Yield one ``Name: value`` line per header value, without CRLF."""
        for name, values in self._headers.items():
            wire_name = title_case(name)
            for value in values:
                yield f"{wire_name}: {value}"

    def copy(self) -> "Headers":
        """Return an independent copy."""
        other = Headers()
        other._headers = {k: list(v) for k, v in self._headers.items()}
        return other

    def set(self, key: str, value: HeaderValue) -> None:
        """Replace all values of a header."""
        self._headers[key.lower()] = _as_list(value)

    def add(self, key: str, value: HeaderValue) -> None:
        """Append values to a header, creating it if absent."""
        self._headers.setdefault(key.lower(), []).extend(_as_list(value))

    def remove(self, key: str) -> None:
        """Remove a header if present."""
        self._headers.pop(key.lower(), None)
