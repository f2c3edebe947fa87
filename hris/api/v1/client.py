"""
HTTP transport for the HRIS REST API.

Every response is wrapped in the ``{success, data, error, meta}`` envelope;
:class:`ApiClient` unwraps it and turns failures into :class:`ApiError`.
Authenticated calls refresh an expired access token first and retry once
when the server reports the token as expired. Concurrent callers share a
single in-flight refresh.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from hris.core.config import settings
from hris.core.exceptions import ApiError
from hris.core.session import Session
from hris.schemas.auth import AccessTokenResponse
from hris.schemas.common import ApiResponse, ErrorDetail

logger = logging.getLogger(__name__)


def upload_url(path: str | None, base: str | None = None) -> str | None:
    """Absolute URL for a stored upload; absolute URLs pass through untouched."""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    clean = path[1:] if path.startswith("/") else path
    return f"{(base or settings.UPLOADS_URL).rstrip('/')}/{clean}"


def query_params(params: BaseModel | dict[str, Any] | None) -> dict[str, Any]:
    """Drop unset values and serialise dates / enums for the query string."""
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        params = params.model_dump(mode="json", exclude_none=True)
    out: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = str(value).lower()
        out[key] = value
    return out


class ApiClient:
    def __init__(
        self,
        session: Session,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.session = session
        self._http = httpx.AsyncClient(
            base_url=(base_url or settings.API_URL).rstrip("/"),
            timeout=settings.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        self._refresh_lock = asyncio.Lock()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    # ── Public request API ──────────────────────────────────────────
    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: BaseModel | dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        auth: bool = True,
    ) -> ApiResponse:
        if isinstance(json, BaseModel):
            json = json.model_dump(mode="json", exclude_none=True)
        kwargs: dict[str, Any] = {
            "json": json,
            "params": query_params(params),
            "data": data,
            "files": files,
        }
        if not auth:
            return await self._send(method, path, headers={}, **kwargs)
        return await self._send_with_auth(method, path, retry=True, **kwargs)

    async def get(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", path, **kwargs)

    # ── Token refresh ───────────────────────────────────────────────
    async def refresh_access_token(self, stale_token: str | None = None) -> str:
        """Exchange the refresh token (body or cookie) for a new access token.

        Callers that queued behind an in-flight refresh reuse its result.
        On failure the session is cleared and the error propagates.
        """
        async with self._refresh_lock:
            current = self.session.access_token
            if current and current != stale_token and not self.session.is_access_token_expired():
                return current

            body = (
                {"refresh_token": self.session.refresh_token}
                if self.session.refresh_token
                else None
            )
            try:
                envelope = await self._send("POST", "/auth/refresh", headers={}, json=body)
                if envelope.data is None:
                    raise ApiError(401, "UNAUTHORIZED", "Failed to refresh token")
                token = AccessTokenResponse.model_validate(envelope.data)
            except (ApiError, ValidationError) as exc:
                logger.info("Token refresh failed; clearing session: %s", exc)
                self.session.clear()
                if isinstance(exc, ApiError):
                    raise
                raise ApiError(401, "PARSE_ERROR", "Failed to refresh token") from exc

            self.session.set_access_token(token.access_token, token.access_token_expires_in)
            logger.debug("Access token refreshed")
            return token.access_token

    # ── Internals ───────────────────────────────────────────────────
    async def _send_with_auth(self, method: str, path: str, *, retry: bool, **kwargs: Any) -> ApiResponse:
        if retry and self.session.is_access_token_expired():
            await self.refresh_access_token(self.session.access_token)

        token_used = self.session.access_token
        try:
            return await self._send(method, path, headers=self.session.auth_headers(), **kwargs)
        except ApiError as exc:
            if not (retry and exc.is_token_expired()):
                raise
            logger.info("Access token rejected on %s %s; refreshing once", method, path)
            await self.refresh_access_token(token_used)
            return await self._send_with_auth(method, path, retry=False, **kwargs)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str],
        json: Any = None,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> ApiResponse:
        try:
            response = await self._http.request(
                method,
                path,
                json=json,
                params=params or None,
                data=data,
                files=files,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(0, "NETWORK_ERROR", "Unable to reach the server") from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> ApiResponse:
        try:
            envelope = ApiResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            raise ApiError(response.status_code, "PARSE_ERROR", "Failed to parse response")

        if response.is_error or not envelope.success:
            detail = envelope.error or ErrorDetail()
            raise ApiError(response.status_code, detail.code, detail.message, detail.details)
        return envelope
