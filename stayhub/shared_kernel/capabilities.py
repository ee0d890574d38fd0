"""
Разрешение полномочий участника по отношению к ресурсу.
"""

from enum import Enum
from typing import FrozenSet, Iterable, Optional

from .domain import Actor, EntityId, ForbiddenException


class Capability(str, Enum):
    """Полномочия участника."""

    SELF = "self"  # Участник действует над своей учетной записью
    OWNER = "owner"  # Участник владеет ресурсом
    HOST = "host"  # Участник является хозяином жилья
    ADMIN = "admin"  # Администратор


def resolve_capabilities(
    actor: Actor,
    owner_id: Optional[EntityId] = None,
    subject_id: Optional[EntityId] = None,
) -> FrozenSet[Capability]:
    """Возвращает набор полномочий участника.

    Args:
        actor: Участник, выполняющий операцию
        owner_id: Владелец ресурса (хозяин объявления, автор бронирования или отзыва)
        subject_id: Пользователь, над учетной записью которого выполняется операция
    """
    capabilities = set()
    if actor.is_admin:
        capabilities.add(Capability.ADMIN)
    if actor.is_host:
        capabilities.add(Capability.HOST)
    if owner_id is not None and actor.id == owner_id:
        capabilities.add(Capability.OWNER)
    if subject_id is not None and actor.id == subject_id:
        capabilities.add(Capability.SELF)
    return frozenset(capabilities)


def has_any(
    actor: Optional[Actor],
    required: Iterable[Capability],
    owner_id: Optional[EntityId] = None,
    subject_id: Optional[EntityId] = None,
) -> bool:
    """Проверяет, есть ли у участника хотя бы одно из полномочий."""
    if actor is None:
        return False
    held = resolve_capabilities(actor, owner_id=owner_id, subject_id=subject_id)
    return bool(held.intersection(required))


def require_any(
    actor: Actor,
    required: Iterable[Capability],
    owner_id: Optional[EntityId] = None,
    subject_id: Optional[EntityId] = None,
    message: str = "Недостаточно прав для выполнения операции",
) -> None:
    """Требует хотя бы одно из полномочий, иначе ForbiddenException."""
    if not has_any(actor, required, owner_id=owner_id, subject_id=subject_id):
        raise ForbiddenException(message)
