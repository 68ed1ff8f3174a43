from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Shift, ShiftSummary


class ShiftRepository(Protocol):
    def create(self, shift: Shift) -> None:
        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def list_summaries(self, *, business_id: Optional[str] = None) -> Sequence[ShiftSummary]:
        """Newest first, each with its staff count."""

        raise NotImplementedError

    def update(self, shift: Shift) -> None:
        raise NotImplementedError

    def delete_by_id(self, shift_id: str) -> bool:
        raise NotImplementedError
