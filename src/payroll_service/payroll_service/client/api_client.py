"""
Payroll API client

Thin synchronous wrapper over the REST API: sends JSON, unwraps the
``{"success": true, "data": ...}`` envelope and raises ``ApiError`` with the
server's ``error`` message on any non-2xx answer.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

import httpx

from ..config import get_settings_module

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: int, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def default_base_url() -> str:
    settings = importlib.import_module(get_settings_module())
    return getattr(settings, "API_BASE_URL")


class PayrollApiClient:
    """Client for the payroll REST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or default_base_url()).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "PayrollApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        response = self.client.request(method, path, json=json, params=params or None)
        return self._unwrap(response)

    @staticmethod
    def _unwrap(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            error = body.get("error") if isinstance(body, dict) else None
            message = error or f"API Error: {response.reason_phrase}"
            logger.warning("%s %s -> %s: %s", response.request.method, response.request.url, response.status_code, message)
            raise ApiError(message, response.status_code, body.get("details") if isinstance(body, dict) else None)

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    # --- businesses ---

    def create_business(self, *, name: str, business_name: str, business_email: str) -> dict:
        return self.request(
            "POST",
            "/businesses",
            json={"name": name, "businessName": business_name, "businessEmail": business_email},
        )

    def get_business(self, business_id: str) -> dict:
        return self.request("GET", f"/businesses/{business_id}")

    def get_latest_business(self) -> Optional[dict]:
        return self.request("GET", "/businesses/latest/one")

    def update_salary_config(self, business_id: str, *, calculation_method: str, hours: int, minutes: int) -> None:
        self.request(
            "PATCH",
            f"/businesses/{business_id}/salary-config",
            json={"calculationMethod": calculation_method, "shiftHours": {"hours": hours, "minutes": minutes}},
        )

    def update_usage_type(self, business_id: str, payroll_usage_type: str) -> dict:
        return self.request(
            "PATCH",
            f"/businesses/{business_id}/usage-type",
            json={"payrollUsageType": payroll_usage_type},
        )

    def set_payout_pin(self, business_id: str, pin: str) -> None:
        self.request("PUT", f"/businesses/{business_id}/payout-pin", json={"pin": pin})

    # --- employees ---

    def create_employee(self, employee: dict) -> dict:
        return self.request("POST", "/employees", json=employee)

    def list_employees(self, business_id: Optional[str] = None) -> list[dict]:
        return self.request("GET", "/employees", params={"businessId": business_id})

    def get_employee(self, employee_id: str) -> dict:
        return self.request("GET", f"/employees/{employee_id}")

    def update_employee(self, employee_id: str, changes: dict) -> dict:
        return self.request("PATCH", f"/employees/{employee_id}", json=changes)

    def delete_employee(self, employee_id: str) -> None:
        self.request("DELETE", f"/employees/{employee_id}")

    # --- shifts ---

    def list_shifts(self, business_id: Optional[str] = None) -> list[dict]:
        return self.request("GET", "/shifts", params={"businessId": business_id})

    def get_shift(self, shift_id: str) -> dict:
        return self.request("GET", f"/shifts/{shift_id}")

    def create_shift(self, shift: dict) -> dict:
        return self.request("POST", "/shifts", json=shift)

    def update_shift(self, shift_id: str, changes: dict) -> dict:
        return self.request("PATCH", f"/shifts/{shift_id}", json=changes)

    def delete_shift(self, shift_id: str) -> None:
        self.request("DELETE", f"/shifts/{shift_id}")

    def assign_shift(self, shift_id: str, employee_ids: list[str]) -> None:
        self.request("POST", f"/shifts/{shift_id}/assign", json={"employeeIds": employee_ids})

    def replace_shift_assignment(self, shift_id: str, employee_ids: list[str]) -> None:
        self.request("PATCH", f"/shifts/{shift_id}/assign", json={"employeeIds": employee_ids})

    # --- payments ---

    def create_payment(self, payment: dict) -> dict:
        return self.request("POST", "/payments", json=payment)

    def list_payments(
        self,
        *,
        business_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        payment_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[dict]:
        return self.request(
            "GET",
            "/payments",
            params={"businessId": business_id, "employeeId": employee_id, "type": payment_type, "status": status},
        )

    def get_payment(self, payment_id: str) -> dict:
        return self.request("GET", f"/payments/{payment_id}")

    def update_payment(self, payment_id: str, changes: dict) -> dict:
        return self.request("PATCH", f"/payments/{payment_id}", json=changes)

    def delete_payment(self, payment_id: str) -> None:
        self.request("DELETE", f"/payments/{payment_id}")

    def employee_payment_summary(self, employee_id: str) -> dict:
        return self.request("GET", f"/payments/employee/{employee_id}/summary")

    # --- attendance ---

    def record_attendance(self, record: dict) -> dict:
        return self.request("PUT", "/attendance", json=record)

    def list_attendance(self, employee_id: str, *, start: Optional[str] = None, end: Optional[str] = None) -> dict:
        return self.request("GET", "/attendance", params={"employeeId": employee_id, "start": start, "end": end})

    # --- payroll ---

    def payroll_draft(
        self,
        business_id: str,
        *,
        basis: Optional[str] = None,
        period_end: Optional[str] = None,
        tab: Optional[str] = None,
    ) -> list[dict]:
        return self.request(
            "GET",
            "/payroll/draft",
            params={"businessId": business_id, "basis": basis, "periodEnd": period_end, "tab": tab},
        )

    def payroll_totals(
        self,
        entries: list[dict],
        *,
        included_ids: list[str],
        cash_paid_ids: Optional[list[str]] = None,
        filter: str = "all",
    ) -> dict:
        return self.request(
            "POST",
            "/payroll/totals",
            json={
                "entries": entries,
                "includedIds": included_ids,
                "cashPaidIds": cash_paid_ids or [],
                "filter": filter,
            },
        )

    def finalize_payroll(
        self,
        business_id: str,
        entries: list[dict],
        *,
        included_ids: list[str],
        cash_paid_ids: Optional[list[str]] = None,
        date: Optional[str] = None,
        pin: Optional[str] = None,
    ) -> dict:
        body = {
            "businessId": business_id,
            "entries": entries,
            "includedIds": included_ids,
            "cashPaidIds": cash_paid_ids or [],
        }
        if date:
            body["date"] = date
        if pin:
            body["pin"] = pin
        return self.request("POST", "/payroll/finalize", json=body)

    # --- health ---

    def health(self) -> dict:
        # /health lives outside the API prefix
        root = self.base_url.rsplit("/api/", 1)[0]
        return self.request("GET", f"{root}/health")
