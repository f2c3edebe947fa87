"""
Photo capture for attendance proof.

A :class:`CameraCapture` takes one snapshot per ``capture`` call and must
give the device back on ``release``. Screens release the camera right after
a capture and again when they close.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from hris.capture.location import CaptureKind
from hris.capture.uploads import UploadFile

logger = logging.getLogger(__name__)

CAMERA_MESSAGES: dict[CaptureKind, str] = {
    CaptureKind.DENIED: "Camera permission denied. Please allow camera access or upload a photo instead.",
    CaptureKind.UNAVAILABLE: "Camera is not available on this device. Please upload a photo instead.",
}


class PhotoResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: CaptureKind
    photo: UploadFile | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is CaptureKind.SUCCESS and self.photo is not None

    @classmethod
    def success(cls, photo: UploadFile) -> PhotoResult:
        return cls(kind=CaptureKind.SUCCESS, photo=photo)

    @classmethod
    def failure(cls, kind: CaptureKind, message: str | None = None) -> PhotoResult:
        return cls(kind=kind, message=message or CAMERA_MESSAGES.get(kind))


class CameraCapture(Protocol):
    async def capture(self) -> PhotoResult: ...

    def release(self) -> None: ...


def snapshot_name(now: datetime | None = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d%H%M%S")
    return f"attendance-{stamp}.jpg"


class FileCameraCapture:
    """Reads the latest frame a capture daemon wrote to *path* (JPEG)."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self.is_open = False

    async def capture(self) -> PhotoResult:
        self.is_open = True
        try:
            content = self._path.read_bytes()
        except PermissionError:
            return PhotoResult.failure(CaptureKind.DENIED)
        except OSError as exc:
            logger.warning("Camera frame %s unreadable: %s", self._path, exc)
            return PhotoResult.failure(CaptureKind.UNAVAILABLE)
        finally:
            self.release()
        return PhotoResult.success(
            UploadFile(filename=snapshot_name(), content=content, content_type="image/jpeg")
        )

    def release(self) -> None:
        self.is_open = False
