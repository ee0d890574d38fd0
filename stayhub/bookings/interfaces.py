"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional, Protocol

from ..shared_kernel import EntityId
from .domain import Booking, BookingStatus


class IBookingRepository(Protocol):
    """Интерфейс репозитория для бронирований."""

    def add(self, booking: Booking) -> None: ...
    def get_by_id(self, booking_id: EntityId) -> Optional[Booking]: ...
    def update(self, booking: Booking) -> None: ...
    def list_all(self) -> List[Booking]: ...
    def count(self, predicate: Optional[Callable[[Booking], bool]] = None) -> int: ...
    def find_by_user(self, user_id: EntityId) -> List[Booking]: ...
    def find_by_status(self, status: BookingStatus) -> List[Booking]: ...
    def find_due_for_completion(self, as_of: date) -> List[Booking]: ...
