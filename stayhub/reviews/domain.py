"""
Доменная модель контекста отзывов.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, field_validator

from ..bookings.domain import Booking, BookingStatus
from ..shared_kernel import Entity, EntityId, ValidationException

MIN_RATING = 1
MAX_RATING = 5


class Review(Entity):
    """Отзыв гостя о завершенном проживании."""

    user_id: EntityId
    listing_id: EntityId
    booking_id: EntityId
    rating: int
    comment: str

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, v: int) -> int:
        if not MIN_RATING <= v <= MAX_RATING:
            raise ValueError(f"Оценка должна быть от {MIN_RATING} до {MAX_RATING}")
        return v

    @field_validator("comment")
    @classmethod
    def comment_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Комментарий не может быть пустым")
        return v

    @staticmethod
    def ensure_reviewable(booking: Booking) -> None:
        """Отзыв допустим только о завершенном проживании."""
        if booking.status != BookingStatus.COMPLETED:
            raise ValidationException("Отзыв можно оставить только о завершенном проживании")

    @classmethod
    def for_booking(cls, booking: Booking, rating: int, comment: str) -> "Review":
        """Создает отзыв о бронировании.

        Автор отзыва - всегда гость, оформивший бронирование.
        """
        cls.ensure_reviewable(booking)
        try:
            return cls(
                user_id=booking.user_id,
                listing_id=booking.listing_id,
                booking_id=booking.id,
                rating=rating,
                comment=comment,
            )
        except ValueError as e:
            raise ValidationException(str(e)) from e

    def revise(self, rating: Optional[int] = None, comment: Optional[str] = None) -> None:
        """Меняет переданные поля отзыва."""
        try:
            if rating is not None:
                self.rating = rating
            if comment is not None:
                self.comment = comment
        except ValueError as e:
            raise ValidationException(str(e)) from e
        self.touch()


class RatingSummary(BaseModel):
    """Агрегат рейтинга объявления."""

    avg_rating: float = 0.0
    reviews_count: int = 0

    @classmethod
    def from_ratings(cls, ratings: Iterable[int]) -> "RatingSummary":
        """Считает среднюю оценку, округленную до одного знака (половина - вверх)."""
        ratings = list(ratings)
        if not ratings:
            return cls(avg_rating=0.0, reviews_count=0)

        # Округляется точное двоичное значение среднего: 87/20 дает 4.3
        mean = Decimal(sum(ratings) / len(ratings))
        rounded = mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return cls(avg_rating=float(rounded), reviews_count=len(ratings))
