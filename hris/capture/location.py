"""
One-shot location capture for attendance proof and geofence setup.

A :class:`LocationProvider` answers a single ``current_position`` call with
a :class:`LocationResult`; callers branch on ``result.kind`` instead of on
error codes. There is no watch mode and no automatic retry.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Protocol, Union

from pydantic import BaseModel

from hris.core.config import settings
from hris.schemas.attendance import Coordinates

logger = logging.getLogger(__name__)


class CaptureKind(str, Enum):
    SUCCESS = "success"
    DENIED = "denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"


LOCATION_MESSAGES: dict[CaptureKind, str] = {
    CaptureKind.DENIED: "Location permission denied. Please allow location access and try again.",
    CaptureKind.UNAVAILABLE: "Location information is unavailable.",
    CaptureKind.TIMEOUT: "Location request timed out. Please try again.",
}


class LocationResult(BaseModel):
    kind: CaptureKind
    coordinates: Coordinates | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind is CaptureKind.SUCCESS and self.coordinates is not None

    @classmethod
    def success(cls, coordinates: Coordinates) -> LocationResult:
        return cls(kind=CaptureKind.SUCCESS, coordinates=coordinates)

    @classmethod
    def failure(cls, kind: CaptureKind, message: str | None = None) -> LocationResult:
        return cls(kind=kind, message=message or LOCATION_MESSAGES[kind])


class LocationProvider(Protocol):
    async def current_position(self, timeout: float | None = None) -> LocationResult: ...


class StaticLocationProvider:
    """Always reports the same coordinates (kiosks, fixed terminals, tests)."""

    def __init__(self, latitude: float, longitude: float, accuracy: float | None = None) -> None:
        self._coordinates = Coordinates(latitude=latitude, longitude=longitude, accuracy=accuracy)

    async def current_position(self, timeout: float | None = None) -> LocationResult:
        return LocationResult.success(self._coordinates)


PositionSource = Callable[[], Union[Coordinates, Awaitable[Coordinates]]]


class CallableLocationProvider:
    """Adapts a sync or async position function, e.g. a GPS daemon query.

    ``PermissionError`` maps to *denied*, ``TimeoutError`` to *timeout*; any
    other failure, including a value that is not :class:`Coordinates`, maps
    to *unavailable*.
    """

    def __init__(self, source: PositionSource) -> None:
        self._source = source

    async def _read(self) -> Coordinates:
        value = self._source()
        if inspect.isawaitable(value):
            value = await value
        if not isinstance(value, Coordinates):
            raise TypeError(f"position source returned {type(value).__name__}")
        return value

    async def current_position(self, timeout: float | None = None) -> LocationResult:
        limit = settings.GEOLOCATION_TIMEOUT_SECONDS if timeout is None else timeout
        try:
            coordinates = await asyncio.wait_for(self._read(), timeout=limit)
        except PermissionError:
            return LocationResult.failure(CaptureKind.DENIED)
        except (TimeoutError, asyncio.TimeoutError):
            logger.info("Location request exceeded %.1fs", limit)
            return LocationResult.failure(CaptureKind.TIMEOUT)
        except OSError as exc:
            logger.warning("Location unavailable: %s", exc)
            return LocationResult.failure(CaptureKind.UNAVAILABLE)
        except Exception as exc:
            logger.error("Location source failed: %s", exc, exc_info=exc)
            return LocationResult.failure(CaptureKind.UNAVAILABLE)
        return LocationResult.success(coordinates)
