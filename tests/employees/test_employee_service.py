import pytest

from payroll_service.core.enums import StaffType, WageType
from payroll_service.core.exceptions import NotFoundError, ValidationError


def test_create_employee(make_employee, business):
    employee = make_employee(weeklyOffs=["Sunday", "Saturday", "Sunday"], paymentDetails={"upiId": "priya@okaxis"})

    assert employee.business_id == business.business_id
    assert employee.staff_type is StaffType.FULL_TIME
    assert employee.wage_type is WageType.MONTHLY
    assert employee.weekly_offs == ["Sunday", "Saturday"]
    data = employee.to_dict()
    assert data["fullName"] == "Priya Verma"
    assert data["paymentDetails"] == {"upiId": "priya@okaxis"}
    assert isinstance(data["createdAt"], int)


def test_create_requires_fields(make_employee):
    with pytest.raises(ValidationError) as exc:
        make_employee(fullName="  ")
    assert exc.value.message == "fullName is required"


def test_create_rejects_unknown_weekday(make_employee):
    with pytest.raises(ValidationError):
        make_employee(weeklyOffs=["Funday"])


def test_create_rejects_salary_cycle_date_out_of_range(make_employee):
    with pytest.raises(ValidationError):
        make_employee(salaryCycleDate=0)


def test_create_for_unknown_business_is_not_found(make_employee):
    with pytest.raises(NotFoundError):
        make_employee(businessId="00000000-0000-0000-0000-000000000000")


def test_update_is_partial(container, make_employee):
    employee = make_employee()
    updated = container.employee_service.update(employee.employee_id, {"salaryAmount": 32000, "wageType": "Daily"})

    assert updated.salary_amount == "32000"
    assert updated.wage_type is WageType.DAILY
    assert updated.full_name == employee.full_name
    assert container.employee_service.get(employee.employee_id).salary_amount == "32000"


def test_update_unknown_shift_is_not_found(container, make_employee):
    employee = make_employee()
    with pytest.raises(NotFoundError):
        container.employee_service.update(employee.employee_id, {"shiftId": "00000000-0000-0000-0000-000000000000"})


def test_delete_employee(container, make_employee):
    employee = make_employee()
    container.employee_service.delete(employee.employee_id)
    with pytest.raises(NotFoundError):
        container.employee_service.get(employee.employee_id)


def test_list_filters_by_business(container, make_employee, business):
    make_employee()
    other = container.business_service.create(name="B", business_name="Other", business_email="o@x.example")
    make_employee(businessId=other.business_id, fullName="Someone Else")

    names = [e.full_name for e in container.employee_service.list(business_id=business.business_id)]
    assert names == ["Priya Verma"]
