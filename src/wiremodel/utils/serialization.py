"""utils/serialization.py

Form encoding (``application/x-www-form-urlencoded``) for Wiremodel.

Nested values use bracketed keys: ``{"b": {"c": "y"}}`` encodes to
``b%5Bc%5D=y`` and decodes back. Decoded scalars are always strings, and a
nested mapping whose keys are ``"0"`` to ``"n-1"`` in order decodes to a list.
"""

import re
import urllib.parse
from typing import Any, Dict, List, Mapping, Tuple, Union

__all__ = ["FormValue", "build_query", "parse_query"]

FormValue = Union[str, List["FormValue"], Dict[str, "FormValue"]]

_KEY = re.compile(r"^([^\[]+)((?:\[[^\]]*\])+)")
_SEGMENT = re.compile(r"\[([^\]]*)\]")
_INDEX = re.compile(r"^(?:0|[1-9][0-9]*)\Z")


def _scalar(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return str(value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return

    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = list(enumerate(value))
    else:
        pairs.append((prefix, _scalar(value)))
        return

    for key, item in items:
        _flatten(f"{prefix}[{key}]", item, pairs)


def build_query(data: Mapping[str, Any]) -> str:
    """
    Encode a possibly nested mapping as a query string.

    None values are skipped, booleans become ``1``/``0``, other scalars are
    converted with ``str()``.
    """
    pairs: List[Tuple[str, str]] = []

    for key, value in data.items():
        _flatten(str(key), value, pairs)

    return "&".join(
        f"{urllib.parse.quote_plus(k, safe='')}={urllib.parse.quote_plus(v, safe='')}"
        for k, v in pairs
    )


def _split_key(key: str) -> List[str]:
    match = _KEY.match(key)
    if match is None:
        return [key]
    return [match.group(1)] + _SEGMENT.findall(match.group(2))


def _next_index(node: Dict[str, Any]) -> str:
    indexes = [int(k) for k in node if _INDEX.match(k)]
    return str(max(indexes) + 1) if indexes else "0"


def _assign(root: Dict[str, Any], keys: List[str], value: str) -> None:
    node = root
    last = len(keys) - 1

    for i, key in enumerate(keys):
        if i > 0 and key == "":
            key = _next_index(node)

        if i == last:
            node[key] = value
            return

        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child


def _listify(value: Any) -> Any:
    if not isinstance(value, dict):
        return value

    converted = {k: _listify(v) for k, v in value.items()}

    if converted and list(converted) == [str(i) for i in range(len(converted))]:
        return list(converted.values())

    return converted


def parse_query(query: str) -> Dict[str, FormValue]:
    """
    Decode a query string into a nested mapping.

    Later occurrences of a key win; ``a[]=1&a[]=2`` appends.
    """
    result: Dict[str, Any] = {}

    for pair in query.split("&"):
        if not pair:
            continue

        key, _, value = pair.partition("=")
        keys = _split_key(urllib.parse.unquote_plus(key))

        if not keys[0]:
            continue

        _assign(result, keys, urllib.parse.unquote_plus(value))

    return {k: _listify(v) for k, v in result.items()}
