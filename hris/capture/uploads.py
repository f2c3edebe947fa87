"""
In-memory upload files and the client-side checks run before sending them.

Size and MIME type are checked locally so an obviously invalid file never
costs a round-trip; the server still validates authoritatively.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from hris.core.exceptions import ClientValidationError

_MIME_LABELS = {
    "image/jpeg": "JPG",
    "image/jpg": "JPG",
    "image/png": "PNG",
    "application/pdf": "PDF",
}


@dataclass(frozen=True)
class UploadFile:
    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> UploadFile:
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=(content_type or guessed or "application/octet-stream").lower(),
        )

    def as_form_file(self) -> tuple[str, bytes, str]:
        """Tuple accepted by httpx's ``files=`` argument."""
        return (self.filename, self.content, self.content_type)


def _format_size(max_bytes: int) -> str:
    mb = max_bytes / (1024 * 1024)
    return f"{mb:g}MB"


def _allowed_label(allowed_types: list[str]) -> str:
    labels: list[str] = []
    for mime in allowed_types:
        label = _MIME_LABELS.get(mime, mime)
        if label not in labels:
            labels.append(label)
    if len(labels) == 1:
        return labels[0]
    return ", ".join(labels[:-1]) + f" and {labels[-1]}"


def validate_upload(
    file: UploadFile,
    *,
    max_bytes: int,
    allowed_types: list[str],
    field: str = "file",
) -> UploadFile:
    """Return *file* unchanged or raise :class:`ClientValidationError`."""
    if file.content_type.lower() not in allowed_types:
        raise ClientValidationError(
            f"Only {_allowed_label(allowed_types)} files are allowed",
            field=field,
        )
    if file.size > max_bytes:
        raise ClientValidationError(
            f"File size must be less than {_format_size(max_bytes)}",
            field=field,
        )
    return file
