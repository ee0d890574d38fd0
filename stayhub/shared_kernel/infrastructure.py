"""
Инфраструктурный слой общего ядра.

Содержит базовый репозиторий документов (в памяти или в JSON-файле)
и реализацию логгера на основе structlog.
"""

import json
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar, Union
from uuid import UUID

import structlog

from . import interfaces as ports
from .domain import (
    ConcurrencyException,
    ConflictException,
    Entity,
    EntityId,
    NotFoundException,
)

T = TypeVar("T", bound=Entity)


class StructlogLogger(ports.ILogger):
    """Логгер, передающий сообщения и контекст в structlog."""

    def __init__(self, name: Optional[str] = None, **context: Any):
        if name is not None:
            context["logger_name"] = name
        self._logger = structlog.get_logger(**context)

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, **kwargs)


class DocumentRepository(Generic[T]):
    """Базовый репозиторий документов.

    Хранит сущности в памяти; если передан ``file_path``, после каждой записи
    сохраняет коллекцию в JSON-файл и загружает ее при создании.

    Все операции выполняются под блокировкой коллекции. ``update`` сверяет
    версию сущности с сохраненной (оптимистичная блокировка) и увеличивает ее.
    Уникальные индексы задаются в ``unique_indexes`` наборами имен полей.
    """

    model_class: Type[T]
    resource_name: str = "Документ"
    unique_indexes: Tuple[Tuple[str, ...], ...] = ()

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        logger: Optional[ports.ILogger] = None,
    ):
        """
        Инициализирует репозиторий.

        Args:
            file_path: Путь к JSON-файлу с данными (None - только память)
            logger: Логгер
        """
        self._file_path = Path(file_path) if file_path is not None else None
        self._logger = logger or StructlogLogger(__name__)
        self._items: Dict[EntityId, T] = {}
        self._lock = threading.RLock()
        self._load_data()

    def _load_data(self) -> None:
        """Загружает данные из JSON-файла."""
        if self._file_path is None or not self._file_path.exists():
            return

        raw_data = self._file_path.read_text(encoding="utf-8")
        if not raw_data.strip():
            return

        items = json.loads(raw_data)
        self._items = {
            UUID(item["id"]): self.model_class.model_validate(item) for item in items
        }
        self._logger.debug(
            "repository.loaded", path=str(self._file_path), count=len(self._items)
        )

    def _save_data(self) -> None:
        """Сохраняет данные в JSON-файл."""
        if self._file_path is None:
            return

        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        data = [item.model_dump(mode="json") for item in self._items.values()]
        with open(self._file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def _check_unique(self, entity: T) -> None:
        for fields in self.unique_indexes:
            key = tuple(getattr(entity, field) for field in fields)
            for other in self._items.values():
                if other.id == entity.id:
                    continue
                if tuple(getattr(other, field) for field in fields) == key:
                    raise ConflictException(
                        f"{self.resource_name} с такими значениями "
                        f"({', '.join(fields)}) уже существует"
                    )

    def add(self, entity: T) -> None:
        with self._lock:
            if entity.id in self._items:
                raise ConflictException(
                    f"{self.resource_name} с ID {entity.id} уже существует"
                )
            self._check_unique(entity)
            self._items[entity.id] = entity.model_copy(deep=True)
            self._save_data()

    def get_by_id(self, entity_id: EntityId) -> Optional[T]:
        with self._lock:
            entity = self._items.get(entity_id)
            return entity.model_copy(deep=True) if entity is not None else None

    def update(self, entity: T) -> None:
        with self._lock:
            stored = self._items.get(entity.id)
            if stored is None:
                raise NotFoundException(self.resource_name, entity.id)
            if stored.version != entity.version:
                raise ConcurrencyException(
                    f"{self.resource_name} {entity.id} изменен другим участником "
                    f"(версия {stored.version}, ожидалась {entity.version})"
                )
            self._check_unique(entity)
            entity.version += 1
            self._items[entity.id] = entity.model_copy(deep=True)
            self._save_data()

    def delete(self, entity_id: EntityId) -> bool:
        with self._lock:
            if self._items.pop(entity_id, None) is None:
                return False
            self._save_data()
            return True

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            return [
                item.model_copy(deep=True)
                for item in self._items.values()
                if predicate(item)
            ]

    def list_all(self) -> List[T]:
        return self.find(lambda item: True)

    def count(self, predicate: Optional[Callable[[T], bool]] = None) -> int:
        with self._lock:
            if predicate is None:
                return len(self._items)
            return sum(1 for item in self._items.values() if predicate(item))
