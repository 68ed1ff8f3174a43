from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Payment, PaymentFilter


class PaymentRepository(Protocol):
    def create(self, payment: Payment) -> None:
        raise NotImplementedError

    def get_by_id(self, payment_id: str) -> Optional[Payment]:
        """Payment joined with its employee brief."""

        raise NotImplementedError

    def list(self, filters: PaymentFilter) -> Sequence[Payment]:
        """Newest first."""

        raise NotImplementedError

    def update(self, payment: Payment) -> None:
        raise NotImplementedError

    def delete_by_id(self, payment_id: str) -> bool:
        raise NotImplementedError
