"""Company onboarding and profile settings."""

from __future__ import annotations

import logging
from typing import Any

from hris.api.v1.api import HrisApi
from hris.capture.uploads import UploadFile
from hris.core.exceptions import ClientValidationError, notify_failure
from hris.core.notify import Notifier
from hris.schemas.employee import Company, CompanyCreate, CompanyUpdate
from hris.views.base import parse_form
from hris.views.employees import check_image

logger = logging.getLogger(__name__)


class CompanySetup:
    def __init__(self, api: HrisApi, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier
        self.company: Company | None = None
        self.logo: UploadFile | None = None
        self.submitting = False

    def choose_logo(self, file: UploadFile | None) -> bool:
        if file is None:
            self.logo = None
            return True
        try:
            self.logo = check_image(file, field="logo")
        except ClientValidationError as exc:
            notify_failure(self.notifier, exc, title="Invalid file", fallback=exc.message)
            return False
        return True

    async def load(self) -> Company | None:
        try:
            self.company = await self.api.company.get_mine()
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to load company")
        return self.company

    async def create(self, fields: dict[str, Any]) -> Company | None:
        body = parse_form(self.notifier, CompanyCreate, fields)
        if body is None:
            return None

        self.submitting = True
        try:
            self.company = await self.api.company.create(body, self.logo)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to create company")
            return None
        finally:
            self.submitting = False

        self.logo = None
        logger.info("Company %s created", self.company.username)
        self.notifier.success("Company created successfully")
        return self.company

    async def update(self, fields: dict[str, Any]) -> Company | None:
        body = parse_form(self.notifier, CompanyUpdate, fields)
        if body is None:
            return None
        self.submitting = True
        try:
            self.company = await self.api.company.update(body)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to update company")
            return None
        finally:
            self.submitting = False
        self.notifier.success("Company updated successfully")
        return self.company

    async def upload_logo(self, file: UploadFile) -> str | None:
        if not self.choose_logo(file):
            return None
        try:
            url = await self.api.company.upload_logo(file)
        except Exception as exc:
            notify_failure(self.notifier, exc, fallback="Failed to upload logo")
            return None
        finally:
            self.logo = None
        self.notifier.success("Logo updated")
        if self.company is not None:
            self.company = self.company.model_copy(update={"logo_url": url})
        return url
