"""
Прикладной слой контекста избранного.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..listings import interfaces as listing_ports
from ..listings.application import ListingDTO
from ..shared_kernel import (
    Actor,
    ConflictException,
    EntityId,
    ILogger,
    NotFoundException,
    StructlogLogger,
)
from . import interfaces as ports
from .domain import Favorite


class FavoriteDTO(BaseModel):
    """DTO для представления записи избранного."""

    id: EntityId
    user_id: EntityId
    listing_id: EntityId
    created_at: datetime

    @classmethod
    def from_domain(cls, favorite: Favorite) -> "FavoriteDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=favorite.id,
            user_id=favorite.user_id,
            listing_id=favorite.listing_id,
            created_at=favorite.created_at,
        )


class FavoriteRegistry:
    """Избранные объявления участника."""

    def __init__(
        self,
        favorites: ports.IFavoriteRepository,
        listings: listing_ports.IListingRepository,
        logger: Optional[ILogger] = None,
    ):
        self._favorites = favorites
        self._listings = listings
        self._logger = logger or StructlogLogger(__name__)

    def add(self, listing_id: EntityId, actor: Actor) -> FavoriteDTO:
        """Добавляет объявление в избранное."""
        if self._favorites.find_pair(actor.id, listing_id) is not None:
            raise ConflictException("Объявление уже в избранном")

        favorite = Favorite(user_id=actor.id, listing_id=listing_id)
        self._favorites.add(favorite)
        return FavoriteDTO.from_domain(favorite)

    def remove(self, listing_id: EntityId, actor: Actor) -> None:
        """Удаляет объявление из избранного."""
        favorite = self._favorites.find_pair(actor.id, listing_id)
        if favorite is None or not self._favorites.delete(favorite.id):
            raise NotFoundException("Избранное", listing_id)

    def check(self, listing_id: EntityId, actor: Actor) -> bool:
        """Проверяет, есть ли объявление в избранном."""
        return self._favorites.find_pair(actor.id, listing_id) is not None

    def list(self, actor: Actor) -> List[ListingDTO]:
        """Возвращает избранные объявления, от последних добавленных к первым.

        Записи об удаленных объявлениях пропускаются и удаляются,
        скрытые модерацией объявления только пропускаются.
        """
        favorites = sorted(
            reversed(self._favorites.find_by_user(actor.id)),
            key=lambda fav: fav.created_at,
            reverse=True,
        )

        result = []
        for favorite in favorites:
            listing = self._listings.get_by_id(favorite.listing_id)
            if listing is None:
                self._favorites.delete(favorite.id)
                self._logger.debug(
                    "Удалена запись избранного об удаленном объявлении",
                    favorite_id=str(favorite.id),
                )
                continue
            if listing.is_visible_to(actor):
                result.append(ListingDTO.from_domain(listing))
        return result
