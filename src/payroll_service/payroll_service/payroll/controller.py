from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import json_body, ok
from ..container import Container

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container, *, prefix: str = "/api/v1") -> None:
    base = f"{prefix}/payroll"

    def _draft():
        return container.payroll_service.build_draft(
            request.args.get("businessId"),
            basis=request.args.get("basis"),
            period_end=request.args.get("periodEnd"),
            tab=request.args.get("tab"),
        )

    @app.route(f"{base}/draft", methods=["GET"], endpoint="payroll_draft")
    def payroll_draft():
        return ok([e.to_dict() for e in _draft()])

    @app.route(f"{base}/draft/export", methods=["GET"], endpoint="payroll_draft_export")
    def payroll_draft_export():
        content = container.payroll_service.export_xlsx(_draft())
        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name="payroll.xlsx",
        )

    @app.route(f"{base}/net-pay", methods=["POST"], endpoint="payroll_net_pay")
    def payroll_net_pay():
        return ok(container.payroll_service.recompute_net_pay(json_body()))

    @app.route(f"{base}/totals", methods=["POST"], endpoint="payroll_totals")
    def payroll_totals():
        return ok(container.payroll_service.totals(json_body()).to_dict())

    @app.route(f"{base}/finalize", methods=["POST"], endpoint="payroll_finalize")
    def payroll_finalize():
        payments = container.payroll_service.finalize(json_body())
        return ok(
            {
                "payments": [p.to_dict() for p in payments],
                "count": len(payments),
                "totalAmount": sum(p.amount for p in payments),
            },
            201,
        )
