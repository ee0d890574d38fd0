"""
Инфраструктурный слой контекста бронирования.
"""

from datetime import date
from typing import List

from ..shared_kernel import DocumentRepository, EntityId
from . import interfaces as ports
from .domain import Booking, BookingStatus


class BookingRepository(DocumentRepository[Booking], ports.IBookingRepository):
    """Репозиторий бронирований."""

    model_class = Booking
    resource_name = "Бронирование"

    def find_by_user(self, user_id: EntityId) -> List[Booking]:
        return self.find(lambda booking: booking.user_id == user_id)

    def find_by_status(self, status: BookingStatus) -> List[Booking]:
        return self.find(lambda booking: booking.status == status)

    def find_due_for_completion(self, as_of: date) -> List[Booking]:
        return self.find(lambda booking: booking.is_due_for_completion(as_of))
