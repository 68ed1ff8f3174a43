def _create_business(client):
    resp = client.post(
        "/api/v1/businesses",
        json={"name": "Amit", "businessName": "TechFlow", "businessEmail": "amit@techflow.example"},
    )
    assert resp.status_code == 201
    return resp.get_json()["data"]


def _employee_payload(business_id: str, **overrides) -> dict:
    payload = {
        "businessId": business_id,
        "type": "full_time",
        "fullName": "Priya Verma",
        "companyId": "EMP001",
        "phoneNumber": "9876543210",
        "dob": "1990-01-01",
        "gender": "Female",
        "salaryCycleDate": 1,
        "salaryAccess": "allow",
        "wageType": "Monthly",
        "salaryAmount": "30000",
        "paymentDetails": {"upiId": "priya@okaxis"},
    }
    payload.update(overrides)
    return payload


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["status"] == "ok"
    assert "timestamp" in body


def test_health_db_reports_business_count(client):
    _create_business(client)
    body = client.get("/health/db").get_json()
    assert body["data"] == {"database": "connected", "businessCount": 1}


def test_business_roundtrip(client):
    business = _create_business(client)

    latest = client.get("/api/v1/businesses/latest/one").get_json()
    assert set(latest) == {"success", "data"}
    assert latest["data"]["id"] == business["id"]

    resp = client.patch(
        f"/api/v1/businesses/{business['id']}/salary-config",
        json={"calculationMethod": "calendar_month", "shiftHours": {"hours": 9, "minutes": 0}},
    )
    assert resp.get_json() == {"success": True, "message": "Salary config updated"}

    detail = client.get(f"/api/v1/businesses/{business['id']}").get_json()["data"]
    assert detail["salaryConfig"]["calculationMethod"] == "calendar_month"
    assert detail["employees"] == []


def test_latest_business_is_null_when_empty(client):
    assert client.get("/api/v1/businesses/latest/one").get_json() == {"success": True, "data": None}


def test_validation_error_envelope(client):
    resp = client.post("/api/v1/businesses", json={"name": "A"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert body["error"] == "businessName is required"


def test_not_found_envelope(client):
    resp = client.get("/api/v1/employees/00000000-0000-0000-0000-000000000000")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Employee not found"}


def test_unknown_route_is_json(client):
    resp = client.get("/api/v1/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_non_object_body_is_rejected(client):
    resp = client.post("/api/v1/employees", json=[1, 2])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Request body must be a JSON object"


def test_employee_and_shift_flow(client):
    business = _create_business(client)
    employee = client.post("/api/v1/employees", json=_employee_payload(business["id"])).get_json()["data"]

    shift = client.post(
        "/api/v1/shifts",
        json={
            "businessId": business["id"],
            "name": "General",
            "type": "fixed",
            "startTime": "09:00 AM",
            "endTime": "06:00 PM",
            "breakMinutes": 60,
        },
    ).get_json()["data"]
    assert shift["payableHours"] == "8 hr"

    resp = client.post(f"/api/v1/shifts/{shift['id']}/assign", json={"employeeIds": [employee["id"]]})
    assert resp.get_json()["message"] == "Assigned 1 employees to shift"

    listed = client.get(f"/api/v1/shifts?businessId={business['id']}").get_json()["data"]
    assert listed[0]["staffCount"] == 1

    detail = client.get(f"/api/v1/shifts/{shift['id']}").get_json()["data"]
    assert detail["employees"] == [{"id": employee["id"], "fullName": "Priya Verma", "wageType": "Monthly"}]

    resp = client.patch(f"/api/v1/shifts/{shift['id']}/assign", json={"employeeIds": []})
    assert resp.get_json()["message"] == "Updated shift assignment to 0 employees"

    resp = client.delete(f"/api/v1/employees/{employee['id']}")
    assert resp.get_json()["message"] == "Employee deleted"


def test_payment_routes(client):
    business = _create_business(client)
    employee = client.post("/api/v1/employees", json=_employee_payload(business["id"])).get_json()["data"]

    resp = client.post(
        "/api/v1/payments",
        json={
            "type": "one-time",
            "amount": 500,
            "paymentMode": "Cash",
            "employeeId": employee["id"],
            "businessId": business["id"],
            "date": "2025-03-01",
        },
    )
    assert resp.status_code == 201
    payment = resp.get_json()["data"]
    assert payment["status"] == "completed"
    assert payment["employee"]["fullName"] == "Priya Verma"

    resp = client.post("/api/v1/payments", json={"type": "one-time"})
    assert resp.status_code == 400

    summary = client.get(f"/api/v1/payments/employee/{employee['id']}/summary").get_json()["data"]
    assert summary["totalPayments"] == 1

    resp = client.delete(f"/api/v1/payments/{payment['id']}")
    assert resp.get_json() == {"success": True, "data": {"message": "Payment deleted successfully"}}


def test_attendance_routes(client):
    business = _create_business(client)
    employee = client.post("/api/v1/employees", json=_employee_payload(business["id"])).get_json()["data"]

    resp = client.put(
        "/api/v1/attendance",
        json={"employeeId": employee["id"], "date": "2025-03-03", "status": "present", "punchIn": "09:00", "punchOut": "18:30"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"]["workingMinutes"] == 570

    history = client.get(
        f"/api/v1/attendance?employeeId={employee['id']}&start=2025-03-01&end=2025-03-31"
    ).get_json()["data"]
    assert history["counts"]["present"] == 1


def test_payroll_routes(client):
    business = _create_business(client)
    client.post("/api/v1/employees", json=_employee_payload(business["id"]))
    client.put(f"/api/v1/businesses/{business['id']}/payout-pin", json={"pin": "1234"})

    entries = client.get(f"/api/v1/payroll/draft?businessId={business['id']}").get_json()["data"]
    assert entries[0]["netPay"] == 30000
    assert entries[0]["paymentMode"] == "UPI"

    totals = client.post(
        "/api/v1/payroll/totals",
        json={"entries": entries, "includedIds": [entries[0]["employeeId"]], "cashPaidIds": [], "filter": "all"},
    ).get_json()["data"]
    assert totals == {"totalPayout": 30000, "count": 1}

    finalize = {
        "businessId": business["id"],
        "entries": entries,
        "includedIds": [entries[0]["employeeId"]],
        "date": "2025-03-31",
    }
    resp = client.post("/api/v1/payroll/finalize", json={**finalize, "pin": "0000"})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Invalid payout PIN"

    resp = client.post("/api/v1/payroll/finalize", json={**finalize, "pin": "1234"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["count"] == 1


def test_payroll_export(client):
    business = _create_business(client)
    client.post("/api/v1/employees", json=_employee_payload(business["id"]))

    resp = client.get(f"/api/v1/payroll/draft/export?businessId={business['id']}")

    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "payroll.xlsx" in resp.headers["Content-Disposition"]
    assert resp.data[:2] == b"PK"


def test_net_pay_route(client):
    resp = client.post(
        "/api/v1/payroll/net-pay",
        json={"baseAmount": 1000, "adjustments": [{"type": "deduction", "label": "x", "amount": 5000}]},
    )
    assert resp.get_json()["data"] == {"netPay": 0.0, "netPayLabel": "₹0"}


def test_infinite_salary_hours_is_a_client_error(client):
    business = _create_business(client)
    resp = client.patch(
        f"/api/v1/businesses/{business['id']}/salary-config",
        data='{"calculationMethod": "calendar_month", "shiftHours": {"hours": Infinity, "minutes": 0}}',
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_finalize_with_numeric_pin_is_forbidden(client):
    business = _create_business(client)
    employee = client.post("/api/v1/employees", json=_employee_payload(business["id"])).get_json()["data"]
    client.put(f"/api/v1/businesses/{business['id']}/payout-pin", json={"pin": "1234"})

    resp = client.post(
        "/api/v1/payroll/finalize",
        json={
            "businessId": business["id"],
            "entries": [
                {
                    "employeeId": employee["id"],
                    "employeeName": employee["fullName"],
                    "wageType": "Monthly",
                    "baseAmount": 100,
                    "adjustments": [],
                    "netPay": 100,
                    "paymentMode": "UPI",
                    "status": "ready",
                }
            ],
            "includedIds": [employee["id"]],
            "pin": 1234,
        },
    )
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Invalid payout PIN"
