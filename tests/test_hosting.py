"""
Тесты контекста хозяев жилья.
"""

from uuid import uuid4

import pytest

from stayhub.hosting.application import (
    ApplyForHostRequest,
    RegisterUserRequest,
    ReviewHostApplicationRequest,
)
from stayhub.hosting.domain import HostApplicationStatus, User
from stayhub.shared_kernel import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)

APPLICATION = ApplyForHostRequest(phone="555-1", address="1 Main St")


class TestUserDomain:
    """Тесты доменной модели пользователя."""

    def test_email_is_normalized(self):
        user = User(name="Анна", email="  Anna@Example.COM ")
        assert user.email == "anna@example.com"

    def test_invalid_email(self):
        with pytest.raises(ValueError):
            User(name="Анна", email="not-an-email")

    def test_apply_requires_phone_and_address(self):
        """Тест: телефон и адрес обязательны."""
        user = User(name="Анна", email="anna@example.com")

        with pytest.raises(ValidationException, match="Телефон и адрес"):
            user.apply_for_hosting(phone="555-1", address="   ")

        assert user.host_info is None
        assert not user.is_host

    def test_approve_incomplete_application(self):
        user = User(name="Анна", email="anna@example.com")
        with pytest.raises(ValidationException):
            user.approve_application()

    def test_revoke_checks_admin_first(self):
        """Тест: у администратора статус нельзя отозвать даже без статуса хозяина."""
        user = User(name="Админ", email="root@example.com", is_admin=True)
        with pytest.raises(ForbiddenException):
            user.revoke_hosting()


class TestUserApplicationService:
    """Тесты сервиса учетных записей."""

    def test_register_and_get_self(self, app, register):
        actor = register("Анна", "anna@example.com")

        dto = app["users"].get_user(actor.id, actor)

        assert dto.email == "anna@example.com"
        assert not dto.is_admin
        assert not dto.is_host
        assert "password_hash" not in dto.model_dump()

    def test_duplicate_email(self, app, register):
        register("Анна", "anna@example.com")

        with pytest.raises(ConflictException):
            app["users"].register_user(
                RegisterUserRequest(name="Другая Анна", email="ANNA@example.com")
            )

    def test_invalid_email_is_validation_error(self, app):
        with pytest.raises(ValidationException):
            app["users"].register_user(RegisterUserRequest(name="X", email="broken"))

    def test_foreign_account_is_forbidden(self, app, guest, other_guest, admin):
        with pytest.raises(ForbiddenException):
            app["users"].get_user(guest.id, other_guest)

        # Администратор видит любую учетную запись
        assert app["users"].get_user(guest.id, admin).id == guest.id

    def test_list_users_requires_admin(self, app, guest, admin):
        with pytest.raises(ForbiddenException):
            app["users"].list_users(guest)

        emails = {user.email for user in app["users"].list_users(admin)}
        assert emails == {"admin@example.com", "guest@example.com"}

    def test_grant_admin_unknown_email(self, app):
        with pytest.raises(NotFoundException):
            app["users"].grant_admin("nobody@example.com")

    def test_delete_user(self, app, guest, other_guest, admin):
        """Тест: удалять может только администратор и не других администраторов."""
        with pytest.raises(ForbiddenException):
            app["users"].delete_user(guest.id, other_guest)

        with pytest.raises(ForbiddenException):
            app["users"].delete_user(admin.id, admin)

        app["users"].delete_user(guest.id, admin)
        with pytest.raises(NotFoundException):
            app["users"].get_user(guest.id, admin)


class TestHostOnboarding:
    """Тесты подачи и рассмотрения заявок."""

    def test_apply_and_approve(self, app, register, admin):
        """Тест: подача заявки и ее одобрение."""
        applicant = register("Хозяин", "host@example.com")

        applied = app["hosting"].apply(applicant.id, APPLICATION, applicant)
        assert applied.host_info.status == HostApplicationStatus.PENDING.value
        assert applied.is_host is False

        approved = app["hosting"].approve_application(applicant.id, admin)
        assert approved.is_host is True
        assert approved.host_since is not None
        assert approved.host_info.status == HostApplicationStatus.APPROVED.value

    def test_apply_only_for_self(self, app, guest, other_guest):
        with pytest.raises(ForbiddenException):
            app["hosting"].apply(guest.id, APPLICATION, other_guest)

    def test_apply_without_address(self, app, guest):
        with pytest.raises(ValidationException):
            app["hosting"].apply(guest.id, ApplyForHostRequest(phone="555-1"), guest)

        assert app["users"].get_user(guest.id, guest).host_info is None

    def test_reapply_overwrites_application(self, app, guest):
        app["hosting"].apply(guest.id, APPLICATION, guest)
        dto = app["hosting"].apply(
            guest.id, ApplyForHostRequest(phone="555-2", address="2 Main St"), guest
        )
        assert dto.host_info.phone == "555-2"
        assert dto.host_info.address == "2 Main St"

    def test_pending_applications(self, app, guest, other_guest, admin):
        app["hosting"].apply(guest.id, APPLICATION, guest)

        with pytest.raises(ForbiddenException):
            app["hosting"].pending_applications(guest)

        pending = app["hosting"].pending_applications(admin)
        assert [user.id for user in pending] == [guest.id]

    def test_review_approve(self, app, guest, admin):
        app["hosting"].apply(guest.id, APPLICATION, guest)

        dto = app["hosting"].review_application(
            ReviewHostApplicationRequest(host_id=guest.id, approve=True), admin
        )

        assert dto.is_host is True
        assert dto.host_since is not None
        assert [host.id for host in app["hosting"].list_hosts(admin)] == [guest.id]

    def test_review_reject_keeps_application_status(self, app, guest, admin):
        """Тест: отклонение не меняет статус заявки."""
        app["hosting"].apply(guest.id, APPLICATION, guest)

        dto = app["hosting"].review_application(
            ReviewHostApplicationRequest(host_id=guest.id, approve=False), admin
        )

        assert dto.is_host is False
        assert dto.host_info.status == HostApplicationStatus.PENDING.value

    def test_review_requires_host_id(self, app, admin):
        with pytest.raises(ValidationException):
            app["hosting"].review_application(
                ReviewHostApplicationRequest(approve=True), admin
            )

    def test_review_by_non_admin(self, app, guest):
        app["hosting"].apply(guest.id, APPLICATION, guest)
        with pytest.raises(ForbiddenException):
            app["hosting"].review_application(
                ReviewHostApplicationRequest(host_id=guest.id, approve=True), guest
            )

    def test_review_unknown_user(self, app, admin):
        with pytest.raises(NotFoundException):
            app["hosting"].review_application(
                ReviewHostApplicationRequest(host_id=uuid4(), approve=True), admin
            )

    def test_revoke(self, app, host, admin):
        dto = app["hosting"].revoke(host.id, admin)

        assert dto.is_host is False
        assert dto.host_info.status == HostApplicationStatus.REJECTED.value

    def test_revoke_non_host(self, app, guest, admin):
        with pytest.raises(ValidationException):
            app["hosting"].revoke(guest.id, admin)

    def test_revoke_admin_host(self, app, admin):
        """Тест: статус хозяина администратора не отзывается."""
        app["hosting"].apply(admin.id, APPLICATION, admin)
        app["hosting"].approve_application(admin.id, admin)

        with pytest.raises(ForbiddenException):
            app["hosting"].revoke(admin.id, admin)

        assert app["users"].get_user(admin.id, admin).is_host is True

    def test_host_profile_visibility(self, app, host, guest, other_guest, admin):
        """Тест: профиль не-хозяина видят только он сам и администратор."""
        assert app["hosting"].get_host_profile(host.id, other_guest).id == host.id

        with pytest.raises(ForbiddenException):
            app["hosting"].get_host_profile(guest.id, other_guest)
        with pytest.raises(ForbiddenException):
            app["hosting"].get_host_profile(guest.id, None)

        assert app["hosting"].get_host_profile(guest.id, guest).id == guest.id
        assert app["hosting"].get_host_profile(guest.id, admin).id == guest.id

    def test_host_profile_unknown(self, app, guest):
        with pytest.raises(NotFoundException):
            app["hosting"].get_host_profile(uuid4(), guest)
