"""
Интерфейсы (порты) общего ядра.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Protocol, TypeVar

from .domain import Entity, EntityId

T_Entity = TypeVar("T_Entity", bound=Entity)


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IRepository(Protocol[T_Entity]):
    """Контракт хранилища документов.

    ``get_by_id`` и ``find`` возвращают копии: изменения попадают в хранилище
    только через ``update``, который сверяет версию сущности.
    """

    def add(self, entity: T_Entity) -> None: ...
    def get_by_id(self, entity_id: EntityId) -> Optional[T_Entity]: ...
    def update(self, entity: T_Entity) -> None: ...
    def delete(self, entity_id: EntityId) -> bool: ...
    def find(self, predicate: Callable[[T_Entity], bool]) -> List[T_Entity]: ...
    def list_all(self) -> List[T_Entity]: ...
    def count(self, predicate: Optional[Callable[[T_Entity], bool]] = None) -> int: ...
