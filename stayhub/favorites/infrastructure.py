"""
Инфраструктурный слой контекста избранного.
"""

from typing import List, Optional

from ..shared_kernel import DocumentRepository, EntityId
from . import interfaces as ports
from .domain import Favorite


class FavoriteRepository(DocumentRepository[Favorite], ports.IFavoriteRepository):
    """Репозиторий избранного."""

    model_class = Favorite
    resource_name = "Избранное"
    unique_indexes = (("user_id", "listing_id"),)

    def find_pair(self, user_id: EntityId, listing_id: EntityId) -> Optional[Favorite]:
        favorites = self.find(
            lambda fav: fav.user_id == user_id and fav.listing_id == listing_id
        )
        return favorites[0] if favorites else None

    def find_by_user(self, user_id: EntityId) -> List[Favorite]:
        return self.find(lambda fav: fav.user_id == user_id)
