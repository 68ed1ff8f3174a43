from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api/v1") -> None:
    base = f"{prefix}/businesses"

    @app.route(base, methods=["POST"], endpoint="businesses_create")
    def businesses_create():
        body = json_body()
        business = container.business_service.create(
            name=body.get("name"),
            business_name=body.get("businessName"),
            business_email=body.get("businessEmail"),
        )
        return ok(business.to_dict(), 201)

    @app.route(f"{base}/latest/one", methods=["GET"], endpoint="businesses_latest")
    def businesses_latest():
        business = container.business_service.latest()
        return ok(business.to_dict() if business else None)

    @app.route(f"{base}/<business_id>", methods=["GET"], endpoint="businesses_get")
    def businesses_get(business_id: str):
        business = container.business_service.get(business_id)
        data = business.to_dict()
        data["employees"] = [e.to_dict() for e in container.employee_service.list(business_id=business_id)]
        return ok(data)

    @app.route(f"{base}/<business_id>/salary-config", methods=["PATCH"], endpoint="businesses_salary_config")
    def businesses_salary_config(business_id: str):
        container.business_service.update_salary_config(business_id, json_body())
        return ok(message="Salary config updated")

    @app.route(f"{base}/<business_id>/usage-type", methods=["PATCH"], endpoint="businesses_usage_type")
    def businesses_usage_type(business_id: str):
        usage = container.business_service.update_usage_type(business_id, json_body().get("payrollUsageType"))
        return ok({"payrollUsageType": usage.value}, message="Payroll usage updated")

    @app.route(f"{base}/<business_id>/payout-pin", methods=["PUT"], endpoint="businesses_payout_pin")
    def businesses_payout_pin(business_id: str):
        container.business_service.set_payout_pin(business_id, json_body().get("pin"))
        return ok(message="Payout PIN updated")
