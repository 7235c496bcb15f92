"""src/wiremodel/model/uploaded_file.py

Files uploaded with a ``multipart/form-data`` request.
"""

# pylint: disable=redefined-builtin

import enum
import logging
import shutil
from typing import Any, Dict, Mapping

from wiremodel.exceptions import UploadError

__all__ = ["UploadStatus", "UploadedFile", "file_tree_from_fields"]

logger = logging.getLogger(__name__)


class UploadStatus(enum.IntEnum):
    """Upload outcome, numbered like the ``error`` field of PHP's ``$_FILES``."""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


class UploadedFile:
    """
    A file received with a request, stored at a temporary path.

    Attributes:
        path: Temporary location of the file on the server.
        name: File name sent by the client.
        type: Media type sent by the client.
        size: Size in bytes.
        status: Outcome of the upload.
    """

    __slots__ = ("path", "name", "type", "size", "status", "_moved")

    def __init__(
        self,
        path: str,
        name: str,
        type: str,
        size: int,
        status: UploadStatus = UploadStatus.OK,
    ):
        self.path = path
        self.name = name
        self.type = type
        self.size = size
        self.status = status
        self._moved = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UploadedFile":
        """Create from a ``tmp_name``/``name``/``type``/``size``/``error`` mapping."""
        return cls(
            data["tmp_name"],
            data["name"],
            data["type"],
            int(data["size"]),
            UploadStatus(int(data["error"])),
        )

    def __repr__(self) -> str:
        return f"<UploadedFile {self.name!r} ({self.type}, {self.size} bytes)>"

    @property
    def extension(self) -> str:
        """Extension of the client file name without the dot, empty if none."""
        _, dot, extension = self.name.rpartition(".")
        return extension if dot else ""

    def is_valid(self) -> bool:
        """Whether the file was uploaded successfully."""
        return self.status == UploadStatus.OK

    def is_selected(self) -> bool:
        """Whether the client selected a file at all."""
        return self.status != UploadStatus.NO_FILE

    def move_to(self, destination: str) -> None:
        """
        Move the temporary file to its final location.

        Args:
            destination: Target file path.

        Raises:
            UploadError: If the file was already moved or cannot be moved.
        """
        if self._moved:
            raise UploadError("The uploaded file has already been moved.")

        try:
            shutil.move(self.path, destination)
        except OSError as e:
            raise UploadError(f"Could not move uploaded file to {destination}: {e}") from e

        self._moved = True
        logger.debug("Moved uploaded file %r to %s", self.name, destination)


def _file_branch(tmp_name: Any, name: Any, type: Any, size: Any, error: Any) -> Any:
    if isinstance(tmp_name, Mapping):
        branch = {
            str(k): _file_branch(tmp_name[k], name[k], type[k], size[k], error[k])
            for k in tmp_name
        }
        # {0: ..., 1: ...} is a list of files.
        if list(branch) == [str(i) for i in range(len(branch))]:
            return list(branch.values())
        return branch

    if isinstance(tmp_name, (list, tuple)):
        return [
            _file_branch(*fields) for fields in zip(tmp_name, name, type, size, error)
        ]

    return UploadedFile(tmp_name, name, type, int(size), UploadStatus(int(error)))


def file_tree_from_fields(files: Mapping[str, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Build a tree of UploadedFile from per-field upload descriptions.

    Each field maps ``tmp_name``, ``name``, ``type``, ``size`` and ``error``
    to either a scalar (one file) or parallel nested structures of the same
    shape (several files), as PHP lays out ``$_FILES``.

    Example:
        ``{"pics": {"tmp_name": ["/tmp/1", "/tmp/2"], "name": ["a.jpg", "b.jpg"], ...}}``
        gives ``{"pics": [UploadedFile(...), UploadedFile(...)]}``.
    """
    return {
        field: _file_branch(
            entry["tmp_name"], entry["name"], entry["type"], entry["size"], entry["error"]
        )
        for field, entry in files.items()
    }
