"""
Инфраструктурный слой контекста объявлений.
"""

from typing import Collection, List, Optional

from ..shared_kernel import DocumentRepository, EntityId
from . import interfaces as ports
from .domain import Listing, ModerationStatus


class ListingRepository(DocumentRepository[Listing], ports.IListingRepository):
    """Репозиторий объявлений."""

    model_class = Listing
    resource_name = "Объявление"

    def find_by_host(self, host_id: EntityId) -> List[Listing]:
        return self.find(lambda listing: listing.host_id == host_id)

    def search(
        self,
        statuses: Optional[Collection[ModerationStatus]] = None,
        location: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        host_id: Optional[EntityId] = None,
    ) -> List[Listing]:
        needle = location.lower() if location else None

        def matches(listing: Listing) -> bool:
            if statuses is not None and listing.status not in statuses:
                return False
            # Поиск по местоположению - подстрока без учета регистра
            if needle is not None and needle not in listing.location.lower():
                return False
            if min_price is not None and listing.price < min_price:
                return False
            if max_price is not None and listing.price > max_price:
                return False
            if host_id is not None and listing.host_id != host_id:
                return False
            return True

        return self.find(matches)
