"""
Общие фикстуры для тестов.
"""

from datetime import date

import pytest

from stayhub.bookings.application import CreateBookingRequest
from stayhub.bootstrap import bootstrap_app
from stayhub.config import Settings
from stayhub.hosting.application import ApplyForHostRequest, RegisterUserRequest
from stayhub.listings.application import CreateListingRequest, ReviewListingRequest
from stayhub.shared_kernel import Actor


@pytest.fixture
def app():
    """Собранное приложение с хранилищем в памяти."""
    settings = Settings(storage_backend="memory", log_level="ERROR", log_format="text")
    return bootstrap_app(settings)


@pytest.fixture
def register(app):
    """Регистрирует пользователя и возвращает его дескриптор участника."""

    def _register(name: str, email: str) -> Actor:
        user = app["users"].register_user(RegisterUserRequest(name=name, email=email))
        return Actor(id=user.id, is_admin=user.is_admin, is_host=user.is_host)

    return _register


@pytest.fixture
def admin(app, register) -> Actor:
    """Администратор."""
    user = register("Админ", "admin@example.com")
    dto = app["users"].grant_admin("admin@example.com")
    return Actor(id=user.id, is_admin=dto.is_admin, is_host=dto.is_host)


@pytest.fixture
def host(app, register, admin) -> Actor:
    """Пользователь с одобренной заявкой на статус хозяина."""
    user = register("Хозяин", "host@example.com")
    app["hosting"].apply(
        user.id, ApplyForHostRequest(phone="555-1", address="1 Main St"), user
    )
    dto = app["hosting"].approve_application(user.id, admin)
    return Actor(id=dto.id, is_admin=dto.is_admin, is_host=dto.is_host)


@pytest.fixture
def guest(register) -> Actor:
    """Гость."""
    return register("Гость", "guest@example.com")


@pytest.fixture
def other_guest(register) -> Actor:
    """Другой гость."""
    return register("Другой гость", "other@example.com")


@pytest.fixture
def cabin_request() -> CreateListingRequest:
    return CreateListingRequest(
        title="Cabin",
        description="Домик в лесу",
        price=100,
        location="Goa",
        amenities=["Wi-Fi"],
    )


@pytest.fixture
def approved_listing(app, host, admin, cabin_request):
    """Опубликованное объявление хозяина."""
    listing = app["listings"].create(cabin_request, host)
    return app["listings"].review(
        listing.id, ReviewListingRequest(approve=True), admin
    )


@pytest.fixture
def make_booking(app, approved_listing):
    """Создает подтвержденное бронирование опубликованного объявления."""

    def _make_booking(actor: Actor, listing_id=None):
        return app["bookings"].create(
            CreateBookingRequest(
                listing_id=listing_id or approved_listing.id,
                start_date=date(2024, 5, 1),
                end_date=date(2024, 5, 4),
                guests=2,
                total_price=300,
            ),
            actor,
        )

    return _make_booking


@pytest.fixture
def make_completed_booking(app, make_booking):
    """Создает бронирование и завершает его."""

    def _make_completed_booking(actor: Actor, listing_id=None):
        booking = make_booking(actor, listing_id)
        return app["bookings"].set_status(booking.id, "completed", actor)

    return _make_completed_booking
