from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api/v1") -> None:
    base = f"{prefix}/employees"

    @app.route(base, methods=["POST"], endpoint="employees_create")
    def employees_create():
        employee = container.employee_service.create(json_body())
        return ok(employee.to_dict(), 201)

    @app.route(base, methods=["GET"], endpoint="employees_list")
    def employees_list():
        employees = container.employee_service.list(business_id=request.args.get("businessId"))
        return ok([e.to_dict() for e in employees])

    @app.route(f"{base}/<employee_id>", methods=["GET"], endpoint="employees_get")
    def employees_get(employee_id: str):
        return ok(container.employee_service.get(employee_id).to_dict())

    @app.route(f"{base}/<employee_id>", methods=["PATCH"], endpoint="employees_update")
    def employees_update(employee_id: str):
        employee = container.employee_service.update(employee_id, json_body())
        return ok(employee.to_dict())

    @app.route(f"{base}/<employee_id>", methods=["DELETE"], endpoint="employees_delete")
    def employees_delete(employee_id: str):
        container.employee_service.delete(employee_id)
        return ok(message="Employee deleted")
