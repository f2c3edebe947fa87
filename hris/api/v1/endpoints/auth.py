"""
Auth endpoints: login (password or employee code), registration, token
refresh and password recovery.

Successful logins store the tokens on the client's :class:`Session`.
"""

from __future__ import annotations

import logging
import time

from hris.api.v1.endpoints.base import EndpointGroup
from hris.schemas.auth import (AccessTokenResponse, CurrentUser,
                               ForgotPasswordRequest, LoginEmployeeCodeRequest,
                               LoginRequest, RegisterRequest,
                               ResetPasswordRequest, TokenResponse,
                               VerifyEmailRequest)

logger = logging.getLogger(__name__)


class AuthEndpoints(EndpointGroup):
    def _store(self, tokens: TokenResponse) -> TokenResponse:
        session = self._client.session
        session.set_access_token(tokens.access_token, tokens.access_token_expires_in)
        session.set_refresh_token(tokens.refresh_token)
        return tokens

    async def register(self, body: RegisterRequest) -> TokenResponse:
        envelope = await self._client.post("/auth/register", json=body, auth=False)
        return self._store(self._one(TokenResponse, envelope))

    async def login(self, body: LoginRequest) -> TokenResponse:
        envelope = await self._client.post("/auth/login", json=body, auth=False)
        tokens = self._store(self._one(TokenResponse, envelope))
        logger.info("Signed in as %s", body.email)
        return tokens

    async def login_with_employee_code(self, body: LoginEmployeeCodeRequest) -> TokenResponse:
        envelope = await self._client.post("/auth/login/employee-code", json=body, auth=False)
        tokens = self._store(self._one(TokenResponse, envelope))
        logger.info("Signed in as %s@%s", body.employee_code, body.company_username)
        return tokens

    def google_login_url(self) -> str:
        """URL to open in a browser for the Google OAuth flow."""
        return f"{self._client.base_url.rstrip('/')}/auth/login/oauth/google"

    async def me(self) -> CurrentUser:
        user = self._one(CurrentUser, await self._client.get("/auth/me"))
        self._client.session.user = user
        return user

    async def logout(self) -> None:
        try:
            await self._client.post("/auth/logout")
        finally:
            self._client.session.clear()

    async def refresh(self) -> AccessTokenResponse:
        token = await self._client.refresh_access_token(self._client.session.access_token)
        expires_at = self._client.session.access_token_expires_at or 0
        return AccessTokenResponse(
            access_token=token,
            access_token_expires_in=max(expires_at - int(time.time()), 0),
        )

    async def forgot_password(self, body: ForgotPasswordRequest) -> None:
        await self._client.post("/auth/forgot-password", json=body, auth=False)

    async def reset_password(self, body: ResetPasswordRequest) -> None:
        await self._client.post("/auth/reset-password", json=body, auth=False)

    async def verify_email(self, body: VerifyEmailRequest) -> None:
        await self._client.post("/auth/verify-email", json=body, auth=False)
