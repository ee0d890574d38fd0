"""
Инфраструктурный слой контекста отзывов.
"""

from typing import List, Optional

from ..shared_kernel import DocumentRepository, EntityId
from . import interfaces as ports
from .domain import Review


class ReviewRepository(DocumentRepository[Review], ports.IReviewRepository):
    """Репозиторий отзывов (не более одного отзыва на бронирование)."""

    model_class = Review
    resource_name = "Отзыв"
    unique_indexes = (("booking_id",),)

    def find_by_booking(self, booking_id: EntityId) -> Optional[Review]:
        reviews = self.find(lambda review: review.booking_id == booking_id)
        return reviews[0] if reviews else None

    def find_by_listing(self, listing_id: EntityId) -> List[Review]:
        return self.find(lambda review: review.listing_id == listing_id)

    def find_by_user(self, user_id: EntityId) -> List[Review]:
        return self.find(lambda review: review.user_id == user_id)
