"""
Прикладной слой контекста отзывов.

Каждая запись отзыва завершается пересчетом агрегата рейтинга
объявления; пересчет - единственный путь записи этих полей.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..bookings import interfaces as booking_ports
from ..listings import interfaces as listing_ports
from ..listings.domain import Listing
from ..shared_kernel import (
    DEFAULT_UPDATE_ATTEMPTS,
    Actor,
    Capability,
    ConflictException,
    DomainException,
    EntityId,
    ILogger,
    NotFoundException,
    StructlogLogger,
    atomic_update,
    require_any,
)
from . import interfaces as ports
from .domain import RatingSummary, Review

# DTO (Data Transfer Objects) для входящих данных


class CreateReviewRequest(BaseModel):
    """Запрос на создание отзыва."""

    booking_id: EntityId
    rating: int
    comment: str


class UpdateReviewRequest(BaseModel):
    """Запрос на изменение отзыва."""

    rating: Optional[int] = None
    comment: Optional[str] = None


# DTO для исходящих данных


class ReviewDTO(BaseModel):
    """DTO для представления отзыва."""

    id: EntityId
    user_id: EntityId
    listing_id: EntityId
    booking_id: EntityId
    rating: int
    comment: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, review: Review) -> "ReviewDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=review.id,
            user_id=review.user_id,
            listing_id=review.listing_id,
            booking_id=review.booking_id,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


def newest_first(reviews: List[Review]) -> List[Review]:
    """Сортирует отзывы от новых к старым."""
    return sorted(reversed(reviews), key=lambda item: item.created_at, reverse=True)


# Сервисы приложения


class RatingAggregator:
    """Поддерживает агрегат рейтинга объявления в согласии с отзывами."""

    def __init__(
        self,
        reviews: ports.IReviewRepository,
        listings: listing_ports.IListingRepository,
        logger: Optional[ILogger] = None,
        max_update_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ):
        self._reviews = reviews
        self._listings = listings
        self._logger = logger or StructlogLogger(__name__)
        self._attempts = max_update_attempts

    def recompute(self, listing_id: EntityId) -> Optional[RatingSummary]:
        """Пересчитывает средний рейтинг и число отзывов объявления.

        Идемпотентна. Возвращает None, если объявление уже удалено.
        """
        summary = RatingSummary()

        # atomic_update читает объявление (и его версию) до чтения отзывов:
        # отзыв, записанный параллельно, вызовет конфликт версий и повтор
        def mutate(listing: Listing) -> None:
            nonlocal summary
            ratings = [r.rating for r in self._reviews.find_by_listing(listing.id)]
            summary = RatingSummary.from_ratings(ratings)
            listing.apply_rating(summary.avg_rating, summary.reviews_count)

        try:
            atomic_update(
                self._listings,
                listing_id,
                mutate,
                "Объявление",
                attempts=self._attempts,
                logger=self._logger,
            )
        except NotFoundException:
            self._logger.debug(
                "Объявление удалено, рейтинг не пересчитан", listing_id=str(listing_id)
            )
            return None

        self._logger.debug(
            "listing.rating_recomputed",
            listing_id=str(listing_id),
            avg_rating=summary.avg_rating,
            reviews_count=summary.reviews_count,
        )
        return summary


class ReviewApplicationService:
    """Сервис приложения для работы с отзывами."""

    def __init__(
        self,
        reviews: ports.IReviewRepository,
        bookings: booking_ports.IBookingRepository,
        aggregator: RatingAggregator,
        logger: Optional[ILogger] = None,
        max_update_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ):
        """Инициализирует сервис."""
        self._reviews = reviews
        self._bookings = bookings
        self._aggregator = aggregator
        self._logger = logger or StructlogLogger(__name__)
        self._attempts = max_update_attempts

    def create(self, request: CreateReviewRequest, actor: Actor) -> ReviewDTO:
        """Оставляет отзыв о завершенном проживании."""
        try:
            booking = self._bookings.get_by_id(request.booking_id)
            if booking is None:
                raise NotFoundException("Бронирование", request.booking_id)

            require_any(
                actor,
                {Capability.OWNER, Capability.ADMIN},
                owner_id=booking.user_id,
                message="Нет прав на отзыв об этом бронировании",
            )

            Review.ensure_reviewable(booking)
            if self._reviews.find_by_booking(booking.id) is not None:
                raise ConflictException("Отзыв об этом бронировании уже существует")

            review = Review.for_booking(booking, request.rating, request.comment)

            # Уникальный индекс по booking_id закрывает гонку двух вставок
            self._reviews.add(review)

        except DomainException as e:
            self._logger.warning(
                "Ошибка при создании отзыва",
                booking_id=str(request.booking_id),
                error=str(e),
            )
            raise

        self._aggregator.recompute(review.listing_id)
        self._logger.info(
            "review.created", review_id=str(review.id), listing_id=str(review.listing_id)
        )
        return ReviewDTO.from_domain(review)

    def update(
        self, review_id: EntityId, request: UpdateReviewRequest, actor: Actor
    ) -> ReviewDTO:
        """Изменяет отзыв (автор или администратор)."""

        def mutate(review: Review) -> None:
            require_any(
                actor,
                {Capability.OWNER, Capability.ADMIN},
                owner_id=review.user_id,
                message="Нет прав на изменение этого отзыва",
            )
            review.revise(rating=request.rating, comment=request.comment)

        review = atomic_update(
            self._reviews,
            review_id,
            mutate,
            "Отзыв",
            attempts=self._attempts,
            logger=self._logger,
        )
        self._aggregator.recompute(review.listing_id)
        self._logger.info("review.updated", review_id=str(review_id))
        return ReviewDTO.from_domain(review)

    def delete(self, review_id: EntityId, actor: Actor) -> None:
        """Удаляет отзыв (автор или администратор)."""
        review = self._reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundException("Отзыв", review_id)
        require_any(
            actor,
            {Capability.OWNER, Capability.ADMIN},
            owner_id=review.user_id,
            message="Нет прав на удаление этого отзыва",
        )

        if not self._reviews.delete(review_id):
            raise NotFoundException("Отзыв", review_id)
        self._aggregator.recompute(review.listing_id)
        self._logger.info("review.deleted", review_id=str(review_id), by=str(actor.id))

    def listing_reviews(self, listing_id: EntityId) -> List[ReviewDTO]:
        """Возвращает отзывы об объявлении, от новых к старым."""
        reviews = self._reviews.find_by_listing(listing_id)
        return [ReviewDTO.from_domain(review) for review in newest_first(reviews)]

    def user_reviews(self, user_id: EntityId, actor: Actor) -> List[ReviewDTO]:
        """Возвращает отзывы пользователя, от новых к старым."""
        require_any(
            actor,
            {Capability.SELF, Capability.ADMIN},
            subject_id=user_id,
            message="Нет доступа к отзывам пользователя",
        )
        reviews = self._reviews.find_by_user(user_id)
        return [ReviewDTO.from_domain(review) for review in newest_first(reviews)]
