"""
Прикладной слой администрирования: сводная статистика панели администратора.
"""

from typing import Optional

from pydantic import BaseModel

from ..bookings import interfaces as booking_ports
from ..bookings.domain import BookingStatus
from ..hosting import interfaces as hosting_ports
from ..listings import interfaces as listing_ports
from ..listings.domain import ModerationStatus
from ..shared_kernel import Actor, Capability, ILogger, StructlogLogger, require_any


class UserStatsDTO(BaseModel):
    total: int
    hosts: int
    pending_host_applications: int


class ListingStatsDTO(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int


class BookingStatsDTO(BaseModel):
    total: int
    confirmed: int
    cancelled: int
    completed: int


class DashboardDTO(BaseModel):
    """Сводка для панели администратора."""

    users: UserStatsDTO
    listings: ListingStatsDTO
    bookings: BookingStatsDTO
    revenue: float  # Сумма подтвержденных и завершенных бронирований


class DashboardService:
    """Сервис статистики для администратора."""

    def __init__(
        self,
        users: hosting_ports.IUserRepository,
        listings: listing_ports.IListingRepository,
        bookings: booking_ports.IBookingRepository,
        logger: Optional[ILogger] = None,
    ):
        self._users = users
        self._listings = listings
        self._bookings = bookings
        self._logger = logger or StructlogLogger(__name__)

    def dashboard(self, actor: Actor) -> DashboardDTO:
        """Собирает статистику по пользователям, объявлениям и бронированиям."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")

        def listings_with(status: ModerationStatus) -> int:
            return self._listings.count(lambda listing: listing.status == status)

        def bookings_with(status: BookingStatus) -> int:
            return self._bookings.count(lambda booking: booking.status == status)

        revenue = sum(
            booking.total_price
            for status in (BookingStatus.CONFIRMED, BookingStatus.COMPLETED)
            for booking in self._bookings.find_by_status(status)
        )

        dashboard = DashboardDTO(
            users=UserStatsDTO(
                total=self._users.count(),
                hosts=self._users.count(lambda user: user.is_host),
                pending_host_applications=self._users.count(
                    lambda user: user.has_pending_application()
                ),
            ),
            listings=ListingStatsDTO(
                total=self._listings.count(),
                pending=listings_with(ModerationStatus.PENDING),
                approved=listings_with(ModerationStatus.APPROVED),
                rejected=listings_with(ModerationStatus.REJECTED),
            ),
            bookings=BookingStatsDTO(
                total=self._bookings.count(),
                confirmed=bookings_with(BookingStatus.CONFIRMED),
                cancelled=bookings_with(BookingStatus.CANCELLED),
                completed=bookings_with(BookingStatus.COMPLETED),
            ),
            revenue=revenue,
        )
        self._logger.debug("admin.dashboard_viewed", by=str(actor.id))
        return dashboard
