"""
Общие утилиты прикладного слоя.
"""

from typing import Callable, Optional, TypeVar

from .domain import ConcurrencyException, Entity, EntityId, NotFoundException
from .infrastructure import StructlogLogger
from .interfaces import ILogger, IRepository

T = TypeVar("T", bound=Entity)

DEFAULT_UPDATE_ATTEMPTS = 5


def atomic_update(
    repository: IRepository[T],
    entity_id: EntityId,
    mutate: Callable[[T], None],
    resource_name: str,
    attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    logger: Optional[ILogger] = None,
) -> T:
    """Выполняет чтение-изменение-запись с оптимистичной блокировкой.

    ``mutate`` получает свежую копию сущности и изменяет ее на месте; проверки
    прав и переходы состояния должны выполняться внутри ``mutate``, чтобы
    повторная попытка видела актуальное состояние. При конфликте версий
    операция повторяется, пока не закончатся попытки.
    """
    logger = logger or StructlogLogger(__name__)
    for attempt in range(1, attempts + 1):
        entity = repository.get_by_id(entity_id)
        if entity is None:
            raise NotFoundException(resource_name, entity_id)

        mutate(entity)

        try:
            repository.update(entity)
            return entity
        except ConcurrencyException:
            if attempt == attempts:
                raise
            logger.warning(
                "Конфликт версий, повторяем обновление",
                resource=resource_name,
                entity_id=str(entity_id),
                attempt=attempt,
            )

    raise ConcurrencyException(f"{resource_name} {entity_id}: попытки исчерпаны")
