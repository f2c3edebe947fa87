"""
V1 API aggregator: wires every endpoint group onto one shared client.
"""

from __future__ import annotations

from hris.api.v1.client import ApiClient
from hris.api.v1.endpoints.attendance import AttendanceEndpoints
from hris.api.v1.endpoints.auth import AuthEndpoints
from hris.api.v1.endpoints.company import CompanyEndpoints, InvitationEndpoints
from hris.api.v1.endpoints.dashboard import (DashboardEndpoints,
                                             NotificationEndpoints)
from hris.api.v1.endpoints.employees import EmployeeEndpoints
from hris.api.v1.endpoints.leave import LeaveEndpoints
from hris.api.v1.endpoints.master import MasterEndpoints
from hris.api.v1.endpoints.payroll import PayrollEndpoints
from hris.api.v1.endpoints.schedule import (EmployeeScheduleEndpoints,
                                            ScheduleEndpoints)
from hris.api.v1.endpoints.subscription import SubscriptionEndpoints
from hris.core.session import Session


class HrisApi:
    def __init__(self, client: ApiClient) -> None:
        self.client = client

        # Auth (login, refresh, password recovery)
        self.auth = AuthEndpoints(client)

        # Company, invitations, employees
        self.company = CompanyEndpoints(client)
        self.invitations = InvitationEndpoints(client)
        self.employees = EmployeeEndpoints(client)

        # Leave, master data, schedules
        self.leave = LeaveEndpoints(client)
        self.master = MasterEndpoints(client)
        self.schedule = ScheduleEndpoints(client)
        self.employee_schedules = EmployeeScheduleEndpoints(client)

        # Attendance and payroll
        self.attendance = AttendanceEndpoints(client)
        self.payroll = PayrollEndpoints(client)

        # Dashboard, billing, notifications
        self.dashboard = DashboardEndpoints(client)
        self.subscription = SubscriptionEndpoints(client)
        self.notifications = NotificationEndpoints(client)

    @property
    def session(self) -> Session:
        return self.client.session

    async def __aenter__(self) -> HrisApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()
