"""
Общее ядро (Shared Kernel) маркетплейса краткосрочной аренды.

Содержит общие типы данных, исключения, разрешение полномочий
и базовую инфраструктуру хранения, используемые всеми контекстами.
"""

from .application import DEFAULT_UPDATE_ATTEMPTS, atomic_update
from .capabilities import Capability, has_any, require_any, resolve_capabilities
from .domain import (
    Actor,
    BusinessRuleValidationException,
    ConcurrencyException,
    ConflictException,
    DomainException,
    Entity,
    EntityId,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    generate_id,
    now,
    today,
)
from .infrastructure import DocumentRepository, StructlogLogger
from .interfaces import ILogger, IRepository

__all__ = [
    # Базовые типы
    "EntityId",
    "Entity",
    "Actor",
    "generate_id",
    # Полномочия
    "Capability",
    "resolve_capabilities",
    "has_any",
    "require_any",
    # Исключения
    "DomainException",
    "NotFoundException",
    "ForbiddenException",
    "BusinessRuleValidationException",
    "ValidationException",
    "ConflictException",
    "ConcurrencyException",
    # Хранение и логирование
    "IRepository",
    "ILogger",
    "DocumentRepository",
    "StructlogLogger",
    "atomic_update",
    "DEFAULT_UPDATE_ATTEMPTS",
    # Утилиты
    "now",
    "today",
]
