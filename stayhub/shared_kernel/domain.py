"""
Основные доменные типы и утилиты общего ядра.
"""

from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# Общие типы идентификаторов
EntityId = UUID


def generate_id() -> UUID:
    """Генерирует новый UUID."""
    return uuid4()


def now() -> datetime:
    """Возвращает текущие дату и время в UTC."""
    return datetime.now(timezone.utc)


def today() -> date:
    """Возвращает текущую дату."""
    return now().date()


class Entity(BaseModel):
    """Базовый класс сущностей, хранящихся в репозиториях.

    Поле ``version`` увеличивает репозиторий при каждом успешном обновлении,
    сама сущность его не меняет.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: EntityId = Field(default_factory=generate_id)
    version: int = 0
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    def touch(self) -> None:
        """Обновляет отметку времени изменения."""
        self.updated_at = now()


class Actor(BaseModel):
    """Аутентифицированный участник, от имени которого выполняется операция.

    Дескриптор передает внешний сервис аутентификации, ядро ему доверяет.
    """

    model_config = ConfigDict(frozen=True)

    id: EntityId
    is_admin: bool = False
    is_host: bool = False


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class NotFoundException(DomainException):
    """Ресурс отсутствует или скрыт правилами видимости."""

    def __init__(self, resource: str, resource_id: Optional[object] = None):
        message = f"{resource} не найден"
        if resource_id is not None:
            message = f"{resource} с ID {resource_id} не найден"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class ForbiddenException(DomainException):
    """Исключение при отсутствии необходимых полномочий."""

    pass


class BusinessRuleValidationException(DomainException):
    """Исключение при нарушении бизнес-правил."""

    pass


class ValidationException(BusinessRuleValidationException):
    """Некорректные или неполные входные данные."""

    pass


class ConflictException(DomainException):
    """Исключение при попытке создать дубликат."""

    pass


class ConcurrencyException(DomainException):
    """Исключение при конфликте версий."""

    pass
