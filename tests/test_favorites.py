"""
Тесты избранного.
"""

import pytest

from stayhub.listings.application import CreateListingRequest, UpdateListingRequest
from stayhub.shared_kernel import ConflictException, NotFoundException


def test_add_and_remove_are_not_repeatable(app, guest, approved_listing):
    """Тест: повторное добавление - конфликт, повторное удаление - NotFound."""
    favorites = app["favorites"]

    favorite = favorites.add(approved_listing.id, guest)
    assert favorite.user_id == guest.id
    assert favorites.check(approved_listing.id, guest) is True

    with pytest.raises(ConflictException):
        favorites.add(approved_listing.id, guest)

    favorites.remove(approved_listing.id, guest)
    assert favorites.check(approved_listing.id, guest) is False

    with pytest.raises(NotFoundException):
        favorites.remove(approved_listing.id, guest)


def test_favorites_are_per_user(app, guest, other_guest, approved_listing):
    app["favorites"].add(approved_listing.id, guest)

    assert app["favorites"].check(approved_listing.id, other_guest) is False
    assert app["favorites"].list(other_guest) == []
    # У другого пользователя своя запись для той же пары
    app["favorites"].add(approved_listing.id, other_guest)


def test_list_most_recent_first(app, guest, admin, approved_listing):
    villa = app["listings"].create_as_admin(
        CreateListingRequest(title="Villa", description="Домик", price=300, location="Bali"),
        admin,
    )
    app["favorites"].add(approved_listing.id, guest)
    app["favorites"].add(villa.id, guest)

    listed = app["favorites"].list(guest)

    assert [listing.id for listing in listed] == [villa.id, approved_listing.id]


def test_deleted_listing_is_filtered_out(app, guest, host, approved_listing):
    """Тест: запись об удаленном объявлении не попадает в список."""
    app["favorites"].add(approved_listing.id, guest)
    app["listings"].delete(approved_listing.id, host)

    assert app["favorites"].list(guest) == []
    # Запись удалена вместе с объявлением
    assert app["favorites"].check(approved_listing.id, guest) is False


def test_hidden_listing_is_skipped(app, guest, host, approved_listing):
    app["favorites"].add(approved_listing.id, guest)
    app["listings"].update(approved_listing.id, UpdateListingRequest(price=150), host)

    assert app["favorites"].list(guest) == []
    # Запись сохраняется до повторной публикации
    assert app["favorites"].check(approved_listing.id, guest) is True
