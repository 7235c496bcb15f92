"""utils/validators.py

Validation and lookup helpers for nested request values.
"""

import re
from typing import Any, Mapping, Optional

from wiremodel.exceptions import InvalidArgumentError
from wiremodel.model.uploaded_file import UploadedFile

__all__ = ["check_files", "copy_tree", "resolve_path"]

_BRACKET = re.compile(r"\[(.*?)\]")
_CONTAINERS = (Mapping, list, tuple)


def check_files(files: Any) -> None:
    """
    Check that ``files`` is a map or list whose leaves are all UploadedFile.

    Raises:
        InvalidArgumentError: If the root is not a container, or on the first
            leaf that is not an UploadedFile.
    """
    if not isinstance(files, _CONTAINERS):
        raise InvalidArgumentError(
            f"Expected a map or list of uploaded files, got {type(files).__name__}"
        )

    values = files.values() if isinstance(files, Mapping) else files

    for value in values:
        if isinstance(value, _CONTAINERS):
            check_files(value)
        elif not isinstance(value, UploadedFile):
            raise InvalidArgumentError(
                f"Expected UploadedFile or nested container, got {type(value).__name__}"
            )


def copy_tree(value: Any) -> Any:
    """
    Copy the maps and lists of a nested value; leaves are shared.

    Maps become dicts and tuples become lists.
    """
    if isinstance(value, Mapping):
        return {k: copy_tree(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [copy_tree(v) for v in value]
    return value


def resolve_path(value: Any, path: str) -> Optional[Any]:
    """
    Look up a dotted (``a.b.c``) or bracketed (``a[b][c]``) path in nested values.

    Returns None as soon as a segment is missing or the current value cannot
    be indexed. List items are addressed by their decimal index.
    """
    for item in _BRACKET.sub(r".\1", path).split("."):
        if isinstance(value, Mapping):
            value = value.get(item)
        elif (
            isinstance(value, (list, tuple))
            and item.isascii()
            and item.isdigit()
            and int(item) < len(value)
        ):
            value = value[int(item)]
        else:
            return None

        if value is None:
            return None

    return value
