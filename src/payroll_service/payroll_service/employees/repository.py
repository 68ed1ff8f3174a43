from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def create(self, employee: Employee) -> None:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list(self, *, business_id: Optional[str] = None) -> Sequence[Employee]:
        """Newest first."""

        raise NotImplementedError

    def list_by_ids(self, employee_ids: Sequence[str]) -> Sequence[Employee]:
        raise NotImplementedError

    def update(self, employee: Employee) -> None:
        raise NotImplementedError

    def delete_by_id(self, employee_id: str) -> bool:
        raise NotImplementedError

    def set_shift(self, employee_ids: Sequence[str], shift_id: Optional[str]) -> int:
        raise NotImplementedError

    def clear_shift(self, shift_id: str) -> int:
        """Detach every employee currently on shift_id; returns affected rows."""

        raise NotImplementedError

    def replace_shift_holders(self, shift_id: str, employee_ids: Sequence[str]) -> int:
        """Detach current holders and attach employee_ids in one transaction."""
        raise NotImplementedError

    def list_by_shift(self, shift_id: str) -> Sequence[Employee]:
        raise NotImplementedError
