"""
Тесты сборки приложения и настроек.
"""

import json

from stayhub.bootstrap import bootstrap_app
from stayhub.config import Settings, configure_logging
from stayhub.hosting.application import RegisterUserRequest, UserApplicationService
from stayhub.hosting.infrastructure import UserRepository
from stayhub.listings.application import CreateListingRequest
from stayhub.shared_kernel import Actor, StructlogLogger


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("STAYHUB_STORAGE_BACKEND", "json")
    monkeypatch.setenv("STAYHUB_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STAYHUB_MAX_UPDATE_ATTEMPTS", "7")

    settings = Settings()

    assert settings.storage_backend == "json"
    assert settings.data_dir == tmp_path
    assert settings.max_update_attempts == 7


def test_json_storage_survives_restart(tmp_path):
    """Тест: данные в JSON-хранилище доступны после повторной сборки."""
    settings = Settings(
        storage_backend="json", data_dir=tmp_path, log_level="ERROR", log_format="text"
    )
    app = bootstrap_app(settings)
    app["users"].register_user(RegisterUserRequest(name="Админ", email="admin@example.com"))
    admin = app["users"].grant_admin("admin@example.com")
    listing = app["listings"].create_as_admin(
        CreateListingRequest(title="Cabin", description="Домик", price=100, location="Goa"),
        Actor(id=admin.id, is_admin=True),
    )

    restarted = bootstrap_app(settings)

    assert restarted["listings"].view(listing.id).title == "Cabin"
    restored_admin = restarted["users"].get_user(admin.id, Actor(id=admin.id, is_admin=True))
    assert restored_admin.is_admin is True
    assert (tmp_path / "users.json").exists()
    assert (tmp_path / "listings.json").exists()


def test_structlog_logger_writes_named_events(capsys):
    """Тест: логгер пишет событие с именем и контекстом в JSON."""
    configure_logging(Settings(log_level="INFO", log_format="json"))

    StructlogLogger("stayhub.tests", request_id="r-1").info("user.registered", user_id="u-1")

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "user.registered"
    assert record["logger_name"] == "stayhub.tests"
    assert record["request_id"] == "r-1"
    assert record["user_id"] == "u-1"
    assert record["level"] == "info"


def test_services_work_with_default_logger():
    """Тест: сервис без переданного логгера использует structlog."""
    configure_logging(Settings(log_level="WARNING", log_format="text"))
    service = UserApplicationService(UserRepository())

    user = service.register_user(RegisterUserRequest(name="Анна", email="anna@example.com"))

    assert service.grant_admin(user.email).is_admin is True


def test_bootstrap_with_default_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STAYHUB_STORAGE_BACKEND", raising=False)

    app = bootstrap_app(Settings(log_level="INFO"))

    assert app["users"].register_user(
        RegisterUserRequest(name="Анна", email="anna@example.com")
    ).email == "anna@example.com"
