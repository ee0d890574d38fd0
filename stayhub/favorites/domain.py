"""
Доменная модель контекста избранного.
"""

from ..shared_kernel import Entity, EntityId


class Favorite(Entity):
    """Объявление в избранном пользователя (одна запись на пару)."""

    user_id: EntityId
    listing_id: EntityId
