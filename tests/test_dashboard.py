"""
Тесты панели администратора.
"""

import pytest

from stayhub.hosting.application import ApplyForHostRequest
from stayhub.listings.application import ReviewListingRequest
from stayhub.shared_kernel import ForbiddenException


def test_dashboard_requires_admin(app, guest):
    with pytest.raises(ForbiddenException):
        app["dashboard"].dashboard(guest)


def test_dashboard_counts(
    app, admin, host, guest, other_guest, cabin_request, approved_listing, make_booking
):
    """Тест: сводка по пользователям, объявлениям и бронированиям."""
    app["hosting"].apply(
        other_guest.id, ApplyForHostRequest(phone="555-2", address="2 Main St"), other_guest
    )
    rejected = app["listings"].create(cabin_request, host)
    app["listings"].review(rejected.id, ReviewListingRequest(approve=False), admin)
    app["listings"].create(cabin_request, host)

    confirmed = make_booking(guest)
    cancelled = make_booking(guest)
    completed = make_booking(other_guest)
    app["bookings"].set_status(cancelled.id, "cancelled", guest)
    app["bookings"].set_status(completed.id, "completed", other_guest)

    stats = app["dashboard"].dashboard(admin)

    assert stats.users.total == 4
    assert stats.users.hosts == 1
    assert stats.users.pending_host_applications == 1

    assert stats.listings.total == 3
    assert stats.listings.pending == 1
    assert stats.listings.approved == 1
    assert stats.listings.rejected == 1

    assert stats.bookings.total == 3
    assert stats.bookings.confirmed == 1
    assert stats.bookings.cancelled == 1
    assert stats.bookings.completed == 1
    # Отмененные бронирования в выручку не входят
    assert stats.revenue == confirmed.total_price + completed.total_price
