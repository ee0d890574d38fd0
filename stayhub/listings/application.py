"""
Прикладной слой контекста объявлений.

Содержит сервис приложения, который проверяет полномочия участника
и проводит объявление по машине состояний модерации.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..hosting import interfaces as hosting_ports
from ..shared_kernel import (
    DEFAULT_UPDATE_ATTEMPTS,
    Actor,
    Capability,
    DomainException,
    EntityId,
    ILogger,
    NotFoundException,
    StructlogLogger,
    ValidationException,
    atomic_update,
    has_any,
    require_any,
)
from . import interfaces as ports
from .domain import Listing, ModerationStatus

# DTO (Data Transfer Objects) для входящих данных


class CreateListingRequest(BaseModel):
    """Запрос на создание объявления."""

    title: str
    description: str
    price: float
    location: str
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)


class UpdateListingRequest(BaseModel):
    """Запрос на правку объявления (передаются только изменяемые поля)."""

    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    location: Optional[str] = None
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None

    def changes(self) -> dict:
        """Возвращает только переданные поля."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ReviewListingRequest(BaseModel):
    """Решение администратора по объявлению."""

    approve: bool
    rejection_reason: Optional[str] = None


class ListingFilter(BaseModel):
    """Фильтры списка объявлений.

    ``status`` и ``include_all_statuses`` учитываются только для администратора.
    """

    location: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    host_id: Optional[EntityId] = None
    status: Optional[ModerationStatus] = None
    include_all_statuses: bool = False


# DTO для исходящих данных


class ListingDTO(BaseModel):
    """DTO для представления объявления."""

    id: EntityId
    host_id: EntityId
    title: str
    description: str
    price: float
    location: str
    images: List[str]
    amenities: List[str]
    status: ModerationStatus
    is_approved: bool
    rejection_reason: Optional[str]
    avg_rating: float
    reviews_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, listing: Listing) -> "ListingDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=listing.id,
            host_id=listing.host_id,
            title=listing.title,
            description=listing.description,
            price=listing.price,
            location=listing.location,
            images=listing.images,
            amenities=listing.amenities,
            status=listing.status,
            is_approved=listing.is_approved,
            rejection_reason=listing.rejection_reason,
            avg_rating=listing.avg_rating,
            reviews_count=listing.reviews_count,
            created_at=listing.created_at,
            updated_at=listing.updated_at,
        )


class HostSummaryDTO(BaseModel):
    """Краткие сведения о хозяине объявления."""

    id: EntityId
    name: str
    avatar: Optional[str]
    host_since: Optional[datetime]


def newest_first(listings: List[Listing]) -> List[Listing]:
    """Сортирует объявления от новых к старым."""
    # При равных отметках времени более поздняя вставка идет первой
    return sorted(reversed(listings), key=lambda item: item.created_at, reverse=True)


# Сервисы приложения


class ListingApplicationService:
    """Сервис приложения для работы с объявлениями."""

    def __init__(
        self,
        listings: ports.IListingRepository,
        users: hosting_ports.IUserRepository,
        logger: Optional[ILogger] = None,
        max_update_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ):
        """Инициализирует сервис."""
        self._listings = listings
        self._users = users
        self._logger = logger or StructlogLogger(__name__)
        self._attempts = max_update_attempts

    def _update(self, listing_id: EntityId, mutate) -> Listing:
        return atomic_update(
            self._listings,
            listing_id,
            mutate,
            "Объявление",
            attempts=self._attempts,
            logger=self._logger,
        )

    @staticmethod
    def _build(factory, owner_id: EntityId, request: CreateListingRequest) -> Listing:
        try:
            return factory(owner_id, **request.model_dump())
        except ValueError as e:
            raise ValidationException(str(e)) from e

    def create(self, request: CreateListingRequest, actor: Actor) -> ListingDTO:
        """Создает объявление хозяина (ожидает модерации)."""
        require_any(
            actor, {Capability.HOST}, message="Создавать объявления могут только хозяева"
        )
        listing = self._build(Listing.submit, actor.id, request)
        self._listings.add(listing)
        self._logger.info(
            "listing.submitted", listing_id=str(listing.id), host_id=str(actor.id)
        )
        return ListingDTO.from_domain(listing)

    def create_as_admin(self, request: CreateListingRequest, actor: Actor) -> ListingDTO:
        """Создает объявление от имени администратора (сразу опубликовано)."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        listing = self._build(Listing.publish, actor.id, request)
        self._listings.add(listing)
        self._logger.info("listing.published", listing_id=str(listing.id))
        return ListingDTO.from_domain(listing)

    def update(
        self, listing_id: EntityId, request: UpdateListingRequest, actor: Actor
    ) -> ListingDTO:
        """Правит объявление.

        Существенная правка опубликованного объявления его хозяином
        возвращает объявление на модерацию; правки администратора
        статус не меняют.
        """
        changes = request.changes()

        def mutate(listing: Listing) -> None:
            require_any(
                actor,
                {Capability.OWNER, Capability.ADMIN},
                owner_id=listing.host_id,
                message="Нет прав на изменение этого объявления",
            )
            try:
                listing.apply_changes(changes, demote=not actor.is_admin)
            except ValueError as e:
                raise ValidationException(str(e)) from e

        try:
            listing = self._update(listing_id, mutate)
        except DomainException as e:
            self._logger.warning(
                "Ошибка при изменении объявления",
                listing_id=str(listing_id),
                error=str(e),
            )
            raise

        self._logger.info(
            "listing.updated",
            listing_id=str(listing_id),
            status=listing.status.value,
            fields=sorted(changes),
        )
        return ListingDTO.from_domain(listing)

    def review(
        self, listing_id: EntityId, request: ReviewListingRequest, actor: Actor
    ) -> ListingDTO:
        """Одобряет или отклоняет объявление."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")

        def mutate(listing: Listing) -> None:
            if request.approve:
                listing.approve()
            else:
                listing.reject(request.rejection_reason)

        listing = self._update(listing_id, mutate)
        self._logger.info(
            "listing.reviewed", listing_id=str(listing_id), status=listing.status.value
        )
        return ListingDTO.from_domain(listing)

    def delete(self, listing_id: EntityId, actor: Actor) -> None:
        """Удаляет объявление."""
        listing = self._listings.get_by_id(listing_id)
        if listing is None:
            raise NotFoundException("Объявление", listing_id)
        require_any(
            actor,
            {Capability.OWNER, Capability.ADMIN},
            owner_id=listing.host_id,
            message="Нет прав на удаление этого объявления",
        )
        self._listings.delete(listing_id)
        self._logger.info("listing.deleted", listing_id=str(listing_id), by=str(actor.id))

    def _get_visible(self, listing_id: EntityId, actor: Optional[Actor]) -> Listing:
        listing = self._listings.get_by_id(listing_id)
        # Скрытое объявление неотличимо от отсутствующего
        if listing is None or not listing.is_visible_to(actor):
            raise NotFoundException("Объявление", listing_id)
        return listing

    def view(self, listing_id: EntityId, actor: Optional[Actor] = None) -> ListingDTO:
        """Возвращает объявление с учетом правил видимости."""
        return ListingDTO.from_domain(self._get_visible(listing_id, actor))

    def list(
        self, filters: Optional[ListingFilter] = None, actor: Optional[Actor] = None
    ) -> List[ListingDTO]:
        """Возвращает объявления, по умолчанию только опубликованные."""
        filters = filters or ListingFilter()
        statuses = {ModerationStatus.APPROVED}
        if has_any(actor, {Capability.ADMIN}):
            if filters.include_all_statuses:
                statuses = None
            elif filters.status is not None:
                statuses = {filters.status}

        listings = self._listings.search(
            statuses=statuses,
            location=filters.location,
            min_price=filters.min_price,
            max_price=filters.max_price,
            host_id=filters.host_id,
        )
        return [ListingDTO.from_domain(listing) for listing in listings]

    def host_listings(self, actor: Actor) -> List[ListingDTO]:
        """Возвращает объявления участника, от новых к старым."""
        listings = self._listings.find_by_host(actor.id)
        return [ListingDTO.from_domain(listing) for listing in newest_first(listings)]

    def pending_listings(self, actor: Actor) -> List[ListingDTO]:
        """Возвращает объявления, ожидающие модерации."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        listings = self._listings.search(statuses={ModerationStatus.PENDING})
        return [ListingDTO.from_domain(listing) for listing in listings]

    def locations(self) -> List[str]:
        """Возвращает отсортированный список местоположений опубликованных объявлений."""
        listings = self._listings.search(statuses={ModerationStatus.APPROVED})
        return sorted({listing.location for listing in listings})

    def get_host(
        self, listing_id: EntityId, actor: Optional[Actor] = None
    ) -> HostSummaryDTO:
        """Возвращает актуальные сведения о хозяине объявления."""
        listing = self._get_visible(listing_id, actor)
        host = self._users.get_by_id(listing.host_id)
        if host is None:
            raise NotFoundException("Хозяин", listing.host_id)
        return HostSummaryDTO(
            id=host.id, name=host.name, avatar=host.avatar, host_since=host.host_since
        )
