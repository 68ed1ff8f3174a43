from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api/v1") -> None:
    base = f"{prefix}/payments"

    @app.route(base, methods=["GET"], endpoint="payments_list")
    def payments_list():
        payments = container.payment_service.list(
            business_id=request.args.get("businessId"),
            employee_id=request.args.get("employeeId"),
            payment_type=request.args.get("type"),
            status=request.args.get("status"),
        )
        return ok([p.to_dict() for p in payments])

    @app.route(f"{base}/<payment_id>", methods=["GET"], endpoint="payments_get")
    def payments_get(payment_id: str):
        return ok(container.payment_service.get(payment_id).to_dict())

    @app.route(base, methods=["POST"], endpoint="payments_create")
    def payments_create():
        return ok(container.payment_service.create(json_body()).to_dict(), 201)

    @app.route(f"{base}/<payment_id>", methods=["PATCH"], endpoint="payments_update")
    def payments_update(payment_id: str):
        return ok(container.payment_service.update(payment_id, json_body()).to_dict())

    @app.route(f"{base}/<payment_id>", methods=["DELETE"], endpoint="payments_delete")
    def payments_delete(payment_id: str):
        container.payment_service.delete(payment_id)
        return ok({"message": "Payment deleted successfully"})

    @app.route(f"{base}/employee/<employee_id>/summary", methods=["GET"], endpoint="payments_employee_summary")
    def payments_employee_summary(employee_id: str):
        return ok(container.payment_service.employee_summary(employee_id))
