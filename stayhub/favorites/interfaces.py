"""
Интерфейсы (порты) для контекста избранного.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from ..shared_kernel import EntityId
from .domain import Favorite


class IFavoriteRepository(Protocol):
    """Интерфейс репозитория избранного."""

    def add(self, favorite: Favorite) -> None: ...
    def delete(self, favorite_id: EntityId) -> bool: ...
    def find_pair(self, user_id: EntityId, listing_id: EntityId) -> Optional[Favorite]: ...
    def find_by_user(self, user_id: EntityId) -> List[Favorite]: ...
