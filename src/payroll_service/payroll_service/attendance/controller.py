from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api/v1") -> None:
    base = f"{prefix}/attendance"

    @app.route(base, methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        history = container.attendance_service.history(
            request.args.get("employeeId"),
            start=request.args.get("start"),
            end=request.args.get("end"),
        )
        return ok(history)

    @app.route(base, methods=["PUT"], endpoint="attendance_record_day")
    def attendance_record_day():
        return ok(container.attendance_service.record_day(json_body()).to_dict())

    @app.route(f"{base}/punch-in", methods=["POST"], endpoint="attendance_punch_in")
    def attendance_punch_in():
        record = container.attendance_service.punch_in(json_body().get("employeeId"))
        return ok(record.to_dict(), 201)

    @app.route(f"{base}/punch-out", methods=["POST"], endpoint="attendance_punch_out")
    def attendance_punch_out():
        record = container.attendance_service.punch_out(json_body().get("employeeId"))
        return ok(record.to_dict())
