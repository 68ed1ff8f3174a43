from datetime import date

import pytest

from payroll_service.core.enums import PaymentMode, PaymentStatus, PaymentType
from payroll_service.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def payment_payload(make_employee, business):
    employee = make_employee()
    return {
        "type": "advance",
        "amount": "1500",
        "paymentMode": "UPI",
        "employeeId": employee.employee_id,
        "businessId": business.business_id,
        "date": "2025-03-10",
    }


def test_create_defaults_to_completed(container, payment_payload):
    payment = container.payment_service.create(payment_payload)

    assert payment.status is PaymentStatus.COMPLETED
    assert payment.amount == 1500.0
    assert payment.payment_mode is PaymentMode.UPI
    assert payment.to_dict()["employee"] == {
        "id": payment_payload["employeeId"],
        "fullName": "Priya Verma",
        "phoneNumber": "9876543210",
    }


@pytest.mark.parametrize("missing", ["type", "amount", "paymentMode", "employeeId", "businessId", "date"])
def test_create_reports_missing_fields(container, payment_payload, missing):
    payment_payload.pop(missing)
    with pytest.raises(ValidationError) as exc:
        container.payment_service.create(payment_payload)
    assert exc.value.message == "Missing required fields: type, amount, paymentMode, employeeId, businessId, date"


def test_create_rejects_zero_amount_as_missing(container, payment_payload):
    payment_payload["amount"] = 0
    with pytest.raises(ValidationError) as exc:
        container.payment_service.create(payment_payload)
    assert exc.value.message.startswith("Missing required fields")


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("type", "bonus", "Invalid payment type. Must be one of: one-time, advance, salary"),
        ("paymentMode", "Cheque", "Invalid payment mode. Must be one of: Cash, UPI, Phone, Bank Transfer"),
        ("status", "done", "Invalid status. Must be one of: pending, completed, failed"),
    ],
)
def test_create_enum_messages(container, payment_payload, field, value, message):
    payment_payload[field] = value
    with pytest.raises(ValidationError) as exc:
        container.payment_service.create(payment_payload)
    assert exc.value.message == message


def test_create_for_unknown_employee(container, payment_payload):
    payment_payload["employeeId"] = "00000000-0000-0000-0000-000000000000"
    with pytest.raises(NotFoundError) as exc:
        container.payment_service.create(payment_payload)
    assert exc.value.message == "Employee not found"


def test_update_blanks_become_null(container, payment_payload):
    payment = container.payment_service.create({**payment_payload, "narration": "Festival", "phoneNumber": "99"})
    updated = container.payment_service.update(
        payment.payment_id, {"narration": "", "phoneNumber": "", "status": "failed"}
    )
    assert updated.narration is None
    assert updated.phone_number is None
    assert updated.status is PaymentStatus.FAILED
    assert updated.payment_type is PaymentType.ADVANCE


def test_delete_then_get_is_not_found(container, payment_payload):
    payment = container.payment_service.create(payment_payload)
    container.payment_service.delete(payment.payment_id)
    with pytest.raises(NotFoundError) as exc:
        container.payment_service.get(payment.payment_id)
    assert exc.value.message == "Payment not found"


def test_list_filters(container, payment_payload):
    container.payment_service.create(payment_payload)
    container.payment_service.create({**payment_payload, "type": "one-time", "amount": 200})

    advances = container.payment_service.list(payment_type="advance")
    assert [p.payment_type for p in advances] == [PaymentType.ADVANCE]
    assert len(container.payment_service.list(employee_id=payment_payload["employeeId"])) == 2


def test_employee_summary(container, payment_payload):
    container.payment_service.create(payment_payload)
    container.payment_service.create({**payment_payload, "amount": 500, "status": "pending"})
    container.payment_service.create({**payment_payload, "type": "salary", "amount": 20000})

    summary = container.payment_service.employee_summary(payment_payload["employeeId"])

    assert summary["totalPayments"] == 3
    assert summary["totalAmount"] == 22000.0
    assert summary["byType"]["advance"] == {"count": 2, "amount": 2000.0}
    assert summary["byType"]["salary"] == {"count": 1, "amount": 20000.0}
    assert summary["byType"]["one-time"] == {"count": 0, "amount": 0.0}
    assert summary["byStatus"] == {"pending": 1, "completed": 2, "failed": 0}


def test_completed_advances_in_period(container, payment_payload):
    container.payment_service.create(payment_payload)
    container.payment_service.create({**payment_payload, "date": "2025-02-10"})
    container.payment_service.create({**payment_payload, "status": "pending"})

    advances = container.payment_service.completed_advances(
        payment_payload["employeeId"], date(2025, 3, 1), date(2025, 3, 31)
    )
    assert [p.date for p in advances] == ["2025-03-10"]
