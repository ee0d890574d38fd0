"""
Доменная модель контекста бронирования.

Бронирование создается подтвержденным и может перейти в любой
из объявленных статусов; ограничений графа переходов нет.
"""

from datetime import date
from enum import Enum
from typing import Union

from pydantic import Field, model_validator

from ..shared_kernel import Entity, EntityId, ValidationException


class BookingStatus(str, Enum):
    """Статусы бронирования."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Booking(Entity):
    """Бронирование объявления гостем."""

    user_id: EntityId
    listing_id: EntityId
    start_date: date
    end_date: date
    guests: int = Field(..., gt=0)
    total_price: float = Field(..., ge=0)
    status: BookingStatus = BookingStatus.CONFIRMED

    @model_validator(mode="after")
    def end_after_start(self) -> "Booking":
        if self.end_date <= self.start_date:
            raise ValueError("Дата выезда должна быть позже даты заезда")
        return self

    @classmethod
    def create(
        cls,
        user_id: EntityId,
        listing_id: EntityId,
        start_date: date,
        end_date: date,
        guests: int,
        total_price: float,
    ) -> "Booking":
        """Создает новое подтвержденное бронирование."""
        return cls(
            user_id=user_id,
            listing_id=listing_id,
            start_date=start_date,
            end_date=end_date,
            guests=guests,
            total_price=total_price,
            status=BookingStatus.CONFIRMED,
        )

    def change_status(self, status: BookingStatus) -> None:
        """Переводит бронирование в указанный статус."""
        self.status = status
        self.touch()

    def is_due_for_completion(self, as_of: date) -> bool:
        """Проживание закончилось, а бронирование все еще подтверждено."""
        return self.status == BookingStatus.CONFIRMED and self.end_date < as_of


class BookingPolicy:
    """Политики и бизнес-правила для бронирований."""

    @staticmethod
    def parse_status(value: Union[str, BookingStatus]) -> BookingStatus:
        """Проверяет, что статус входит в число объявленных."""
        try:
            return BookingStatus(value)
        except ValueError:
            raise ValidationException(f"Недопустимый статус бронирования: {value}")
