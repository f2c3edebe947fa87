"""
In-process fake of the HRIS REST API used by the test-suite.

Every route answers with the same ``{success, data, error, meta}`` envelope
as the real server. Tests steer it through a few knobs:

* ``failures[(method, path)] = (status, code, message)`` answers that route
  with an error envelope.
* ``raw[(method, path)] = (status, text)`` answers with an arbitrary body.
* ``gate`` holds leave and attendance decision handlers open until it is set.
* ``refresh_fails`` / ``refresh_delay`` control ``/auth/refresh``.

Each request is recorded in ``calls``; the last JSON body and multipart
form per route are kept in ``bodies`` and ``forms``.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import math
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse, Response

PREFIX = "/api/v1"
REFRESH_TOKEN = "refresh-token"

# /auth routes that need a bearer token
_AUTHED_AUTH_ROUTES = {"/auth/me", "/auth/logout"}


def ok(data: Any = None, message: str | None = None, meta: dict | None = None) -> JSONResponse:
    body: dict[str, Any] = {"success": True, "message": message, "data": data}
    if meta is not None:
        body["meta"] = meta
    return JSONResponse(body)


def fail(status: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        {"success": False, "message": message, "error": {"code": code, "message": message}},
        status_code=status,
    )


def paginate(rows: list[dict], query: Any, default_limit: int = 10) -> tuple[list[dict], dict]:
    """Slice *rows* by the ``page`` / ``limit`` query and describe the slice."""
    page, limit = int(query.get("page", 1)), int(query.get("limit", default_limit))
    start = (page - 1) * limit
    meta = {
        "page": page,
        "limit": limit,
        "total_items": len(rows),
        "total_pages": max(1, math.ceil(len(rows) / limit)),
    }
    return rows[start : start + limit], meta


@dataclass
class Call:
    method: str
    path: str
    authorization: str | None
    query: dict[str, str]


# ── Seed data ───────────────────────────────────────────────────────
def _employee(employee_id: str, code: str, name: str, status: str = "active") -> dict:
    return {
        "id": employee_id,
        "employee_code": code,
        "full_name": name,
        "employment_status": status,
        "position_name": "Engineer",
    }


def _leave_request(request_id: str, employee_id: str, name: str) -> dict:
    return {
        "id": request_id,
        "employee_id": employee_id,
        "employee_name": name,
        "leave_type_id": "lt1",
        "leave_type_name": "Annual Leave",
        "start_date": "2026-11-02",
        "end_date": "2026-11-03",
        "duration_type": "full_day",
        "total_days": 2,
        "reason": "Family trip out of town",
        "status": "waiting_approval",
    }


def _payroll_record(record_id: str, employee_id: str, name: str, net: float) -> dict:
    return {
        "id": record_id,
        "employee_id": employee_id,
        "employee_name": name,
        "period_month": 10,
        "period_year": 2026,
        "base_salary": net,
        "gross_salary": net,
        "net_salary": net,
        "status": "draft",
    }


class FakeBackend:
    def __init__(self) -> None:
        self.calls: list[Call] = []
        self.bodies: dict[tuple[str, str], Any] = {}
        self.forms: dict[tuple[str, str], dict[str, Any]] = {}
        self.failures: dict[tuple[str, str], tuple[int, str, str]] = {}
        self.raw: dict[tuple[str, str], tuple[int, str]] = {}
        self.tokens: set[str] = set()
        self.refresh_fails = False
        self.refresh_delay = 0.0
        self.refresh_count = 0
        self.gate: asyncio.Event | None = None
        self._ids = itertools.count(100)

        self.employees = {
            e["id"]: e
            for e in (
                _employee("e1", "EMP001", "Alice Smith"),
                _employee("e2", "EMP002", "Bob Jones"),
                _employee("e3", "EMP003", "Carol White"),
            )
        }
        self.leave_types = {
            "lt1": {"id": "lt1", "code": "ANN", "name": "Annual Leave", "default_quota": 12},
            "lt2": {"id": "lt2", "code": "SICK", "name": "Sick Leave", "has_quota": False},
            "lt3": {"id": "lt3", "code": "OLD", "name": "Retired Type", "is_active": False},
        }
        self.quotas = [
            {"id": "q1", "employee_id": "e1", "leave_type_id": "lt1", "year": 2026,
             "earned_quota": 12, "used_quota": 2, "available_quota": 10},
            {"id": "q2", "employee_id": "e2", "leave_type_id": "lt1", "year": 2026,
             "earned_quota": 12, "used_quota": 9, "available_quota": 3},
            {"id": "q3", "employee_id": "e9", "leave_type_id": "lt1", "year": 2026,
             "earned_quota": 12, "available_quota": 12},
        ]
        self.leave_requests = {
            r["id"]: r
            for r in (
                _leave_request("lr1", "e1", "Alice Smith"),
                _leave_request("lr2", "e2", "Bob Jones"),
            )
        }
        self.attendance = {
            "a1": {"id": "a1", "employee_id": "e1", "employee_name": "Alice Smith",
                   "date": "2026-10-01", "status": "present"},
            "a2": {"id": "a2", "employee_id": "e1", "employee_name": "Alice Smith",
                   "date": "2026-10-02", "status": "late", "late_minutes": 12},
        }
        self.master: dict[str, dict[str, dict]] = {
            "branches": {"b1": {"id": "b1", "name": "Head Office"}},
            "grades": {"g1": {"id": "g1", "name": "Senior"}},
            "positions": {"p1": {"id": "p1", "name": "Engineer"}},
        }
        self.schedules = {
            "s1": {"id": "s1", "name": "Office Hours", "type": "WFO", "grace_period_minutes": 10},
        }
        self.assignments: dict[str, dict] = {}
        self.payroll_records = {
            r["id"]: r
            for r in (
                _payroll_record("pr1", "e1", "Alice Smith", 9_000_000),
                _payroll_record("pr2", "e2", "Bob Jones", 7_500_000),
            )
        }
        self.payroll_settings = {"id": "ps1", "pay_day": 25, "currency": "IDR"}
        self.plans = [
            {"id": "plan-basic", "name": "Basic", "tier": "basic",
             "price_per_seat_monthly": "15000", "price_per_seat_yearly": "150000"},
            {"id": "plan-pro", "name": "Pro", "tier": "pro",
             "price_per_seat_monthly": "30000", "price_per_seat_yearly": "300000"},
        ]
        self.subscription: dict | None = {
            "id": "sub1", "plan_id": "plan-basic", "status": "active",
            "billing_cycle": "monthly", "max_seats": 5, "used_seats": 3,
        }
        self.invoices = [
            {"id": "inv1", "invoice_number": "INV-001", "amount": "75000",
             "status": "pending", "payment_url": "https://pay.example/inv1"},
            {"id": "inv0", "invoice_number": "INV-000", "amount": "75000", "status": "paid"},
        ]
        self.notifications = {
            n["id"]: n
            for n in (
                {"id": "n1", "type": "leave", "title": "Leave approved", "is_read": False},
                {"id": "n2", "type": "payroll", "title": "Payslip ready", "is_read": False},
                {"id": "n3", "type": "system", "title": "Welcome", "is_read": True},
            )
        }

        self.app = FastAPI()
        self.app.middleware("http")(self._middleware)
        self.app.include_router(self._router())

    # ── Helpers ─────────────────────────────────────────────────────
    def issue_token(self) -> str:
        token = f"access-{next(self._ids)}"
        self.tokens.add(token)
        return token

    def new_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def calls_to(self, method: str, path: str) -> list[Call]:
        return [c for c in self.calls if c.method == method and c.path == path]

    def count(self, method: str, path: str) -> int:
        return len(self.calls_to(method, path))

    async def wait_for_call(self, method: str, path: str, timeout: float = 2.0) -> None:
        async def _poll() -> None:
            while not self.count(method, path):
                await asyncio.sleep(0.001)

        await asyncio.wait_for(_poll(), timeout)

    @staticmethod
    def _path(request: Request) -> str:
        return request.url.path.removeprefix(PREFIX)

    async def _json(self, request: Request) -> Any:
        raw = await request.body()
        body = json.loads(raw) if raw else None
        self.bodies[(request.method, self._path(request))] = body
        return body

    async def _form(self, request: Request) -> dict[str, Any]:
        form = await request.form()
        fields: dict[str, Any] = {}
        for key, value in form.multi_items():
            if isinstance(value, str):
                fields[key] = value
            else:
                content = await value.read()
                fields[key] = {
                    "filename": value.filename,
                    "content_type": value.content_type,
                    "size": len(content),
                }
        self.forms[(request.method, self._path(request))] = fields
        return fields

    async def _payload(self, request: Request) -> dict[str, Any]:
        if request.headers.get("content-type", "").startswith("multipart/"):
            return await self._form(request)
        return await self._json(request) or {}

    async def _middleware(self, request: Request, call_next: Any) -> Response:
        path = self._path(request)
        authorization = request.headers.get("authorization")
        self.calls.append(Call(request.method, path, authorization, dict(request.query_params)))

        key = (request.method, path)
        if key in self.raw:
            status, text = self.raw[key]
            return Response(text, status_code=status, media_type="application/json")
        if key in self.failures:
            return fail(*self.failures[key])

        public = (
            path.startswith("/auth/") and path not in _AUTHED_AUTH_ROUTES
        ) or path.startswith("/invitations/view/")
        if not public:
            token = authorization.removeprefix("Bearer ") if authorization else None
            if token not in self.tokens:
                return fail(401, "UNAUTHORIZED", "Invalid or expired token")
        return await call_next(request)

    # ── Routes ──────────────────────────────────────────────────────
    def _router(self) -> APIRouter:
        router = APIRouter(prefix=PREFIX)

        # Auth
        def _tokens() -> dict:
            return {
                "access_token": self.issue_token(),
                "access_token_expires_in": 3600,
                "refresh_token": REFRESH_TOKEN,
                "refresh_token_expires_in": 86400,
            }

        @router.post("/auth/login")
        async def login(request: Request):
            body = await self._json(request)
            if body["password"] != "secret123":
                return fail(401, "INVALID_CREDENTIALS", "Invalid email or password")
            return ok(_tokens())

        @router.post("/auth/login/employee-code")
        async def login_employee_code(request: Request):
            await self._json(request)
            return ok(_tokens())

        @router.post("/auth/refresh")
        async def refresh(request: Request):
            await self._json(request)
            self.refresh_count += 1
            if self.refresh_delay:
                await asyncio.sleep(self.refresh_delay)
            if self.refresh_fails:
                return fail(401, "UNAUTHORIZED", "Invalid refresh token")
            return ok({"access_token": self.issue_token(), "access_token_expires_in": 3600})

        @router.get("/auth/me")
        async def me():
            return ok({"id": "u1", "email": "admin@example.com", "name": "Admin", "role": "admin"})

        @router.post("/auth/logout")
        async def logout():
            return ok(message="Logged out")

        # Company and invitations
        @router.post("/company")
        async def create_company(request: Request):
            form = await self._form(request)
            data = json.loads(form["data"])
            return ok({"id": "c1", "name": data["company_name"], "username": data["company_username"]})

        @router.post("/company/my/logo")
        async def upload_logo(request: Request):
            form = await self._form(request)
            return ok({"logo_url": f"/logos/{form['logo']['filename']}"})

        @router.get("/invitations/view/{token}")
        async def view_invitation(token: str):
            return ok({
                "id": "inv-e1", "company_id": "c1", "company_name": "Acme", "employee_id": "e1",
                "email": "alice@example.com", "token": token, "status": "pending",
            })

        # Employees
        @router.get("/employees")
        async def list_employees(request: Request):
            q = request.query_params
            rows = list(self.employees.values())
            if q.get("search"):
                needle = q["search"].lower()
                rows = [e for e in rows if needle in e["full_name"].lower()]
            if q.get("employment_status"):
                rows = [e for e in rows if e["employment_status"] == q["employment_status"]]
            rows, meta = paginate(rows, q)
            return ok({
                "employees": rows,
                "total_count": meta["total_items"],
                "page": meta["page"],
                "limit": meta["limit"],
            })

        @router.get("/employees/search")
        async def search_employees(q: str):
            return ok([e for e in self.employees.values() if q.lower() in e["full_name"].lower()])

        @router.get("/employees/{employee_id}")
        async def get_employee(employee_id: str):
            if employee_id not in self.employees:
                return fail(404, "NOT_FOUND", "Employee not found")
            return ok(self.employees[employee_id])

        @router.post("/employees")
        async def create_employee(request: Request):
            payload = await self._payload(request)
            if "data" in payload:
                payload = json.loads(payload["data"])
            employee = _employee(self.new_id("e"), payload["employee_code"], payload["full_name"])
            self.employees[employee["id"]] = employee
            return ok(employee)

        @router.post("/employees/{employee_id}/inactivate")
        async def inactivate_employee(employee_id: str, request: Request):
            body = await self._json(request)
            self.employees[employee_id].update(
                employment_status="inactive", resignation_date=body["resignation_date"]
            )
            return ok(message="Employee inactivated")

        @router.delete("/employees/{employee_id}")
        async def delete_employee(employee_id: str):
            self.employees.pop(employee_id, None)
            return ok(message="Employee deleted")

        # Leave
        @router.get("/leave/types")
        async def list_leave_types():
            return ok(list(self.leave_types.values()))

        @router.post("/leave/types")
        async def create_leave_type(request: Request):
            body = await self._json(request)
            leave_type = {"id": self.new_id("lt"), **body}
            self.leave_types[leave_type["id"]] = leave_type
            return ok(leave_type)

        @router.get("/leave/quota")
        async def list_quota():
            return ok(self.quotas)

        @router.post("/leave/quota/adjust")
        async def adjust_quota(request: Request):
            body = await self._json(request)
            for quota in self.quotas:
                if (quota["employee_id"], quota["leave_type_id"]) == (
                    body["employee_id"], body["leave_type_id"]
                ):
                    quota["adjustment_quota"] = quota.get("adjustment_quota", 0) + body["adjustment"]
                    quota["available_quota"] += body["adjustment"]
                    return ok(quota)
            return fail(404, "NOT_FOUND", "Quota not found")

        @router.get("/leave/requests")
        async def list_leave_requests(request: Request):
            status = request.query_params.get("status")
            rows = [r for r in self.leave_requests.values() if not status or r["status"] == status]
            rows, meta = paginate(rows, request.query_params)
            return ok(rows, meta=meta)

        @router.get("/leave/requests/my")
        async def my_leave_requests():
            return ok([r for r in self.leave_requests.values() if r["employee_id"] == "e1"])

        @router.post("/leave/requests")
        async def create_leave_request(request: Request):
            payload = await self._payload(request)
            created = {
                **_leave_request(self.new_id("lr"), "e1", "Alice Smith"),
                "leave_type_id": payload["leave_type_id"],
                "start_date": payload["start_date"],
                "end_date": payload["end_date"],
                "reason": payload["reason"],
            }
            self.leave_requests[created["id"]] = created
            return ok(created)

        async def _decide(request_id: str, status: str, request: Request):
            body = await self._json(request)
            if self.gate is not None:
                await self.gate.wait()
            leave = self.leave_requests[request_id]
            leave["status"] = status
            if body and body.get("rejection_reason"):
                leave["rejection_reason"] = body["rejection_reason"]
            return ok(leave)

        @router.post("/leave/requests/{request_id}/approve")
        async def approve_leave(request_id: str, request: Request):
            return await _decide(request_id, "approved", request)

        @router.post("/leave/requests/{request_id}/reject")
        async def reject_leave(request_id: str, request: Request):
            return await _decide(request_id, "rejected", request)

        @router.post("/leave/requests/{request_id}/cancel")
        async def cancel_leave(request_id: str, request: Request):
            return await _decide(request_id, "cancelled", request)

        # Attendance
        def _attendance_page(rows: list[dict], request: Request) -> JSONResponse:
            rows, meta = paginate(rows, request.query_params)
            return ok({
                "attendances": rows,
                "total_count": meta["total_items"],
                "page": meta["page"],
                "limit": meta["limit"],
                "total_pages": meta["total_pages"],
            })

        @router.get("/attendance")
        async def list_attendance(request: Request):
            return _attendance_page(list(self.attendance.values()), request)

        @router.get("/attendance/my")
        async def my_attendance(request: Request):
            q = request.query_params
            rows = [
                a
                for a in self.attendance.values()
                if q.get("start_date", "") <= a["date"] <= q.get("end_date", "9999")
            ]
            return _attendance_page(rows, request)

        async def _review(attendance_id: str, status: str):
            if self.gate is not None:
                await self.gate.wait()
            record = self.attendance[attendance_id]
            record["status"] = status
            return ok(record)

        @router.post("/attendance/{attendance_id}/approve")
        async def approve_attendance(attendance_id: str):
            return await _review(attendance_id, "present")

        @router.post("/attendance/{attendance_id}/reject")
        async def reject_attendance(attendance_id: str):
            return await _review(attendance_id, "absent")

        @router.delete("/attendance/{attendance_id}")
        async def delete_attendance(attendance_id: str):
            self.attendance.pop(attendance_id)
            return ok()

        async def _clock(request: Request, kind: str):
            form = await self._form(request)
            record = {
                "id": self.new_id("a"),
                "employee_id": "e1",
                "date": "2026-10-19",
                "status": "present",
                f"{kind}_time": "2026-10-19T08:00:00Z",
                f"{kind}_latitude": float(form["latitude"]),
                f"{kind}_longitude": float(form["longitude"]),
                "notes": form.get("notes"),
            }
            self.attendance[record["id"]] = record
            return ok(record)

        @router.post("/attendance/clock-in")
        async def clock_in(request: Request):
            return await _clock(request, "clock_in")

        @router.post("/attendance/clock-out")
        async def clock_out(request: Request):
            return await _clock(request, "clock_out")

        # Master data
        @router.get("/master/{segment}")
        async def list_master(segment: str):
            return ok(list(self.master[segment].values()))

        @router.post("/master/{segment}")
        async def create_master(segment: str, request: Request):
            body = await self._json(request)
            entity = {"id": self.new_id(segment[0]), **body}
            self.master[segment][entity["id"]] = entity
            return ok(entity)

        @router.put("/master/{segment}/{entity_id}")
        async def update_master(segment: str, entity_id: str, request: Request):
            body = await self._json(request)
            self.master[segment][entity_id].update(body)
            return ok(self.master[segment][entity_id])

        @router.delete("/master/{segment}/{entity_id}")
        async def delete_master(segment: str, entity_id: str):
            self.master[segment].pop(entity_id, None)
            return ok()

        # Schedules
        @router.get("/schedule")
        async def list_schedules():
            return ok(list(self.schedules.values()))

        @router.post("/schedule")
        async def create_schedule(request: Request):
            body = await self._json(request)
            schedule = {"id": self.new_id("s"), **body}
            self.schedules[schedule["id"]] = schedule
            return ok(schedule)

        @router.post("/schedule/locations")
        async def create_location(request: Request):
            body = await self._json(request)
            location = {"id": self.new_id("loc"), **body}
            schedule = self.schedules[body["work_schedule_id"]]
            schedule.setdefault("locations", []).append(location)
            return ok(location)

        @router.delete("/schedule/locations/{location_id}")
        async def delete_location(location_id: str):
            for schedule in self.schedules.values():
                schedule["locations"] = [
                    loc for loc in schedule.get("locations", []) if loc["id"] != location_id
                ]
            return ok()

        @router.post("/schedule/{schedule_id}/employee/{employee_id}")
        async def assign_schedule(schedule_id: str, employee_id: str, request: Request):
            body = await self._json(request)
            assignment = {
                "id": self.new_id("as"),
                "employee_id": employee_id,
                "work_schedule_id": schedule_id,
                **body,
            }
            self.assignments[assignment["id"]] = assignment
            return ok(assignment)

        @router.get("/employee-schedules/employee/{employee_id}/active")
        async def active_assignment(employee_id: str):
            found = [a for a in self.assignments.values() if a["employee_id"] == employee_id]
            return ok(found[-1] if found else None)

        # Payroll
        @router.get("/payroll/settings")
        async def payroll_settings():
            return ok(self.payroll_settings)

        @router.put("/payroll/settings")
        async def update_payroll_settings(request: Request):
            self.payroll_settings.update(await self._json(request))
            return ok(self.payroll_settings)

        def _in_period(record: dict, month: Any, year: Any) -> bool:
            return (month is None or record["period_month"] == int(month)) and (
                year is None or record["period_year"] == int(year)
            )

        @router.get("/payroll/records")
        async def list_payroll_records(request: Request):
            q = request.query_params
            rows = [
                p
                for p in self.payroll_records.values()
                if _in_period(p, q.get("period_month"), q.get("period_year"))
                and (not q.get("status") or p["status"] == q["status"])
            ]
            rows, meta = paginate(rows, q)
            return ok({
                "records": rows,
                "total_count": meta["total_items"],
                "total_pages": meta["total_pages"],
            })

        @router.get("/payroll/summary")
        async def payroll_summary(request: Request):
            q = request.query_params
            rows = [
                p
                for p in self.payroll_records.values()
                if _in_period(p, q.get("period_month"), q.get("period_year"))
            ]
            return ok({
                "total_employees": len(rows),
                "total_gross_salary": sum(p["gross_salary"] for p in rows),
                "total_net_salary": sum(p["net_salary"] for p in rows),
                "total_paid": sum(p["status"] == "paid" for p in rows),
                "total_draft": sum(p["status"] == "draft" for p in rows),
            })

        @router.post("/payroll/finalize")
        async def finalize_payroll(request: Request):
            body = await self._json(request)
            paid = []
            for record in self.payroll_records.values():
                if record["status"] == "draft" and _in_period(
                    record, body["period_month"], body["period_year"]
                ):
                    record.update(status="paid", paid_at="2026-10-19T10:00:00Z")
                    paid.append(record)
            return ok(paid)

        @router.post("/payroll/records/{record_id}/pay")
        async def pay_record(record_id: str):
            record = self.payroll_records[record_id]
            record.update(status="paid", paid_at="2026-10-19T10:00:00Z")
            return ok(record)

        # Subscription
        @router.get("/subscription/plans")
        async def list_plans():
            return ok(self.plans)

        @router.get("/subscription")
        async def my_subscription():
            return ok(self.subscription)

        @router.get("/subscription/invoices")
        async def list_invoices():
            return ok(self.invoices)

        @router.post("/subscription/checkout")
        async def checkout(request: Request):
            body = await self._json(request)
            return ok({"payment_url": f"https://pay.example/{body['plan_id']}", "invoice_id": "inv2"})

        @router.post("/subscription/seats")
        async def change_seats(request: Request):
            body = await self._json(request)
            if body["seat_count"] > self.subscription["max_seats"]:
                invoice = {"id": "inv3", "status": "pending", "amount": "45000",
                           "payment_url": "https://pay.example/inv3"}
                return ok({"invoice": invoice}, message="Invoice created for additional seats")
            self.subscription["pending_seats"] = body["seat_count"]
            return ok(message="Seat change will apply at the next billing period")

        @router.post("/subscription/upgrade")
        async def upgrade(request: Request):
            body = await self._json(request)
            return ok({"payment_url": f"https://pay.example/upgrade/{body['plan_id']}"})

        @router.post("/subscription/downgrade")
        async def downgrade(request: Request):
            body = await self._json(request)
            self.subscription["pending_plan_id"] = body["plan_id"]
            return ok(message="Downgrade scheduled")

        @router.post("/subscription/cancel")
        async def cancel_subscription(request: Request):
            await self._json(request)
            self.subscription["status"] = "cancelled"
            return ok()

        @router.post("/subscription/invoices/{invoice_id}/cancel")
        async def cancel_invoice(invoice_id: str):
            for invoice in self.invoices:
                if invoice["id"] == invoice_id:
                    if invoice["status"] != "pending":
                        return fail(400, "INVALID_STATE", "Only pending invoices can be cancelled")
                    invoice["status"] = "cancelled"
                    return ok()
            return fail(404, "NOT_FOUND", "Invoice not found")

        # Notifications
        @router.get("/notifications")
        async def list_notifications(request: Request):
            q = request.query_params
            rows = list(self.notifications.values())
            if q.get("unread_only") == "true":
                rows = [n for n in rows if not n["is_read"]]
            page, limit = int(q.get("page", 1)), int(q.get("limit", 20))
            start = (page - 1) * limit
            return ok({
                "notifications": rows[start : start + limit],
                "total": len(rows),
                "unread_count": sum(not n["is_read"] for n in self.notifications.values()),
                "page": page,
                "limit": limit,
            })

        @router.put("/notifications/mark-read")
        async def mark_read(request: Request):
            body = await self._json(request)
            for notification_id in body["notification_ids"]:
                self.notifications[notification_id]["is_read"] = True
            return ok()

        @router.put("/notifications/mark-all-read")
        async def mark_all_read():
            for notification in self.notifications.values():
                notification["is_read"] = True
            return ok()

        # Dashboard
        @router.get("/dashboard")
        async def dashboard():
            return ok({"total_employees": len(self.employees), "active_employees": 3})

        @router.get("/dashboard/monthly-attendance")
        async def monthly_attendance(month: int, year: int):
            return ok([{"date": f"{year}-{month:02d}-{d:02d}", "count": d} for d in (1, 2, 3)])

        return router
