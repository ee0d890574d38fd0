"""
Интерфейсы (порты) для контекста отзывов.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..shared_kernel import EntityId
from .domain import Review


class IReviewRepository(Protocol):
    """Интерфейс репозитория отзывов."""

    def add(self, review: Review) -> None: ...
    def get_by_id(self, review_id: EntityId) -> Optional[Review]: ...
    def update(self, review: Review) -> None: ...
    def delete(self, review_id: EntityId) -> bool: ...
    def find_by_booking(self, booking_id: EntityId) -> Optional[Review]: ...
    def find_by_listing(self, listing_id: EntityId) -> List[Review]: ...
    def find_by_user(self, user_id: EntityId) -> List[Review]: ...
