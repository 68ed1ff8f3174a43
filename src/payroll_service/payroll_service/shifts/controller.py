from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api/v1") -> None:
    base = f"{prefix}/shifts"

    @app.route(base, methods=["GET"], endpoint="shifts_list")
    def shifts_list():
        summaries = container.shift_service.list(business_id=request.args.get("businessId"))
        return ok([s.to_dict() for s in summaries])

    @app.route(f"{base}/<shift_id>", methods=["GET"], endpoint="shifts_get")
    def shifts_get(shift_id: str):
        return ok(container.shift_service.get_summary(shift_id).to_dict(with_employees=True))

    @app.route(base, methods=["POST"], endpoint="shifts_create")
    def shifts_create():
        shift = container.shift_service.create(json_body())
        return ok(shift.to_dict(), 201)

    @app.route(f"{base}/<shift_id>", methods=["PATCH"], endpoint="shifts_update")
    def shifts_update(shift_id: str):
        return ok(container.shift_service.update(shift_id, json_body()).to_dict())

    @app.route(f"{base}/<shift_id>", methods=["DELETE"], endpoint="shifts_delete")
    def shifts_delete(shift_id: str):
        container.shift_service.delete(shift_id)
        return ok(message="Shift deleted")

    @app.route(f"{base}/<shift_id>/assign", methods=["POST"], endpoint="shifts_assign")
    def shifts_assign(shift_id: str):
        count = container.shift_service.assign(shift_id, json_body())
        return ok(message=f"Assigned {count} employees to shift")

    @app.route(f"{base}/<shift_id>/assign", methods=["PATCH"], endpoint="shifts_replace_assignment")
    def shifts_replace_assignment(shift_id: str):
        count = container.shift_service.replace_assignment(shift_id, json_body())
        return ok(message=f"Updated shift assignment to {count} employees")
