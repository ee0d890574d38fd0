"""
Прикладной слой контекста бронирования.

Содержит сервис приложения для бронирований и внешний по отношению
к запросам механизм завершения прошедших бронирований.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel

from ..listings import interfaces as listing_ports
from ..shared_kernel import (
    DEFAULT_UPDATE_ATTEMPTS,
    Actor,
    Capability,
    ConcurrencyException,
    EntityId,
    ILogger,
    NotFoundException,
    StructlogLogger,
    ValidationException,
    atomic_update,
    has_any,
    require_any,
    today,
)
from . import interfaces as ports
from .domain import Booking, BookingPolicy, BookingStatus

# DTO (Data Transfer Objects) для входящих данных


class CreateBookingRequest(BaseModel):
    """Запрос на создание бронирования."""

    listing_id: EntityId
    start_date: date
    end_date: date
    guests: int
    total_price: float
    user_id: Optional[EntityId] = None  # По умолчанию - сам участник


# DTO для исходящих данных


class BookingDTO(BaseModel):
    """DTO для представления бронирования."""

    id: EntityId
    user_id: EntityId
    listing_id: EntityId
    start_date: date
    end_date: date
    guests: int
    total_price: float
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            listing_id=booking.listing_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            guests=booking.guests,
            total_price=booking.total_price,
            status=booking.status,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


# Сервисы приложения


class BookingApplicationService:
    """Сервис приложения для работы с бронированиями."""

    def __init__(
        self,
        bookings: ports.IBookingRepository,
        listings: listing_ports.IListingRepository,
        logger: Optional[ILogger] = None,
        max_update_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ):
        """Инициализирует сервис."""
        self._bookings = bookings
        self._listings = listings
        self._logger = logger or StructlogLogger(__name__)
        self._attempts = max_update_attempts

    def create(self, request: CreateBookingRequest, actor: Actor) -> BookingDTO:
        """Создает бронирование от имени самого гостя.

        Доступность дат не проверяется.
        """
        user_id = request.user_id or actor.id
        require_any(
            actor,
            {Capability.SELF},
            subject_id=user_id,
            message="Бронировать можно только от своего имени",
        )
        if self._listings.get_by_id(request.listing_id) is None:
            raise NotFoundException("Объявление", request.listing_id)

        try:
            booking = Booking.create(
                user_id=user_id,
                listing_id=request.listing_id,
                start_date=request.start_date,
                end_date=request.end_date,
                guests=request.guests,
                total_price=request.total_price,
            )
        except ValueError as e:
            raise ValidationException(str(e)) from e

        self._bookings.add(booking)
        self._logger.info(
            "booking.created", booking_id=str(booking.id), listing_id=str(booking.listing_id)
        )
        return BookingDTO.from_domain(booking)

    def set_status(
        self,
        booking_id: EntityId,
        status: Union[str, BookingStatus],
        actor: Actor,
    ) -> BookingDTO:
        """Меняет статус бронирования (владелец или администратор)."""

        def mutate(booking: Booking) -> None:
            require_any(
                actor,
                {Capability.OWNER, Capability.ADMIN},
                owner_id=booking.user_id,
                message="Нет прав на изменение этого бронирования",
            )
            booking.change_status(BookingPolicy.parse_status(status))

        booking = atomic_update(
            self._bookings,
            booking_id,
            mutate,
            "Бронирование",
            attempts=self._attempts,
            logger=self._logger,
        )
        self._logger.info(
            "booking.status_changed",
            booking_id=str(booking_id),
            status=booking.status.value,
            by=str(actor.id),
        )
        return BookingDTO.from_domain(booking)

    def get(self, booking_id: EntityId, actor: Actor) -> BookingDTO:
        """Возвращает бронирование владельцу или администратору."""
        booking = self._bookings.get_by_id(booking_id)
        if booking is None or not has_any(
            actor, {Capability.OWNER, Capability.ADMIN}, owner_id=booking.user_id
        ):
            raise NotFoundException("Бронирование", booking_id)
        return BookingDTO.from_domain(booking)

    def user_bookings(self, user_id: EntityId, actor: Actor) -> List[BookingDTO]:
        """Возвращает бронирования пользователя."""
        require_any(
            actor,
            {Capability.SELF, Capability.ADMIN},
            subject_id=user_id,
            message="Нет доступа к бронированиям пользователя",
        )
        return [
            BookingDTO.from_domain(booking)
            for booking in self._bookings.find_by_user(user_id)
        ]

    def all_bookings(self, actor: Actor) -> List[BookingDTO]:
        """Возвращает все бронирования."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        return [BookingDTO.from_domain(booking) for booking in self._bookings.list_all()]


class BookingCompletionSweep:
    """Завершает подтвержденные бронирования с прошедшей датой выезда.

    Ядро не запускает таймеры: ``run`` вызывает внешний планировщик.
    Запись идет тем же атомарным путем, что и ``set_status``, а условие
    проверяется на свежей копии, поэтому отмена, сделанная гостем между
    поиском и записью, не перезаписывается.
    """

    def __init__(
        self,
        bookings: ports.IBookingRepository,
        logger: Optional[ILogger] = None,
        max_update_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ):
        self._bookings = bookings
        self._logger = logger or StructlogLogger(__name__)
        self._attempts = max_update_attempts

    def run(self, as_of: Optional[date] = None) -> List[BookingDTO]:
        """Выполняет один проход и возвращает завершенные бронирования."""
        as_of = as_of or today()
        completed = []

        for candidate in self._bookings.find_due_for_completion(as_of):
            applied: List[EntityId] = []

            def mutate(booking: Booking) -> None:
                applied.clear()
                if booking.is_due_for_completion(as_of):
                    booking.change_status(BookingStatus.COMPLETED)
                    applied.append(booking.id)

            try:
                booking = atomic_update(
                    self._bookings,
                    candidate.id,
                    mutate,
                    "Бронирование",
                    attempts=self._attempts,
                    logger=self._logger,
                )
            except NotFoundException:
                continue
            except ConcurrencyException as e:
                # Бронирование будет обработано следующим проходом
                self._logger.warning(
                    "Не удалось завершить бронирование",
                    booking_id=str(candidate.id),
                    error=str(e),
                )
                continue

            if applied:
                completed.append(BookingDTO.from_domain(booking))

        self._logger.info(
            "booking.sweep_finished", as_of=as_of.isoformat(), completed=len(completed)
        )
        return completed
