import uuid

import pytest

from payroll_service.core.exceptions import NotFoundError, ValidationError


def test_create_shift_computes_payable_hours(make_shift):
    shift = make_shift(startTime="09:00 AM", endTime="06:30 PM", breakMinutes=60)
    data = shift.to_dict()
    assert data["payableMinutes"] == 510
    assert data["payableHours"] == "8 hr 30 min"


def test_overnight_shift(make_shift):
    shift = make_shift(name="Night", startTime="10:00 PM", endTime="06:00 AM", breakMinutes=30)
    assert shift.payable_minutes == 450


def test_break_longer_than_shift_clamps_to_zero(make_shift):
    shift = make_shift(startTime="09:00", endTime="10:00", breakMinutes=90)
    assert shift.payable_minutes == 0


def test_create_rejects_bad_time(make_shift):
    with pytest.raises(ValidationError):
        make_shift(startTime="nine")


def test_assign_and_replace(container, make_shift, make_employee):
    shift = make_shift()
    a = make_employee(fullName="A")
    b = make_employee(fullName="B")
    c = make_employee(fullName="C")

    assert container.shift_service.assign(shift.shift_id, {"employeeIds": [a.employee_id, b.employee_id]}) == 2
    summary = container.shift_service.get_summary(shift.shift_id)
    assert summary.staff_count == 2

    assert container.shift_service.replace_assignment(shift.shift_id, {"employeeIds": [c.employee_id]}) == 1
    holders = {e["fullName"] for e in container.shift_service.get_summary(shift.shift_id).employees}
    assert holders == {"C"}
    assert container.employee_service.get(a.employee_id).shift_id is None


def test_assign_requires_list(container, make_shift):
    shift = make_shift()
    with pytest.raises(ValidationError):
        container.shift_service.assign(shift.shift_id, {"employeeIds": "nope"})


def test_delete_detaches_staff(container, make_shift, make_employee):
    shift = make_shift()
    employee = make_employee()
    container.shift_service.assign(shift.shift_id, {"employeeIds": [employee.employee_id]})

    container.shift_service.delete(shift.shift_id)

    assert container.employee_service.get(employee.employee_id).shift_id is None
    with pytest.raises(NotFoundError):
        container.shift_service.get(shift.shift_id)


def test_update_shift(container, make_shift):
    shift = make_shift()
    updated = container.shift_service.update(shift.shift_id, {"name": "Morning", "breakMinutes": 30})
    assert updated.name == "Morning"
    assert updated.break_minutes == 30
    assert updated.start_time == shift.start_time


def test_assign_rejects_unknown_employee(container, make_shift, make_employee):
    shift = make_shift()
    employee = make_employee()
    ghost = str(uuid.uuid4())

    with pytest.raises(NotFoundError) as exc:
        container.shift_service.assign(shift.shift_id, {"employeeIds": [employee.employee_id, ghost]})

    assert exc.value.details == [ghost]
    assert container.employee_service.get(employee.employee_id).shift_id is None


def test_create_shift_for_unknown_business_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.shift_service.create(
            {
                "businessId": str(uuid.uuid4()),
                "name": "Ghost Shift",
                "type": "fixed",
                "startTime": "09:00",
                "endTime": "17:00",
            }
        )


def test_failed_replace_keeps_current_holders(container, make_shift, make_employee):
    shift = make_shift()
    holder = make_employee(fullName="Holder")
    container.shift_service.assign(shift.shift_id, {"employeeIds": [holder.employee_id]})

    with pytest.raises(NotFoundError):
        container.shift_service.replace_assignment(shift.shift_id, {"employeeIds": [str(uuid.uuid4())]})

    assert container.employee_service.get(holder.employee_id).shift_id == shift.shift_id
