"""
Интерфейсы (порты) для контекста объявлений.
"""

from __future__ import annotations

from typing import Callable, Collection, List, Optional, Protocol

from ..shared_kernel import EntityId
from .domain import Listing, ModerationStatus


class IListingRepository(Protocol):
    """Интерфейс репозитория объявлений."""

    def add(self, listing: Listing) -> None: ...
    def get_by_id(self, listing_id: EntityId) -> Optional[Listing]: ...
    def update(self, listing: Listing) -> None: ...
    def delete(self, listing_id: EntityId) -> bool: ...
    def list_all(self) -> List[Listing]: ...
    def count(self, predicate: Optional[Callable[[Listing], bool]] = None) -> int: ...
    def find_by_host(self, host_id: EntityId) -> List[Listing]: ...
    def search(
        self,
        statuses: Optional[Collection[ModerationStatus]] = None,
        location: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        host_id: Optional[EntityId] = None,
    ) -> List[Listing]: ...
