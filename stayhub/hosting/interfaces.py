"""
Интерфейсы (порты) для контекста хозяев жилья.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from ..shared_kernel import EntityId
from .domain import User


class IUserRepository(Protocol):
    """Интерфейс репозитория пользователей."""

    def add(self, user: User) -> None: ...
    def get_by_id(self, user_id: EntityId) -> Optional[User]: ...
    def update(self, user: User) -> None: ...
    def delete(self, user_id: EntityId) -> bool: ...
    def list_all(self) -> List[User]: ...
    def count(self, predicate: Optional[Callable[[User], bool]] = None) -> int: ...
    def find_by_email(self, email: str) -> Optional[User]: ...
    def find_hosts(self) -> List[User]: ...
    def find_pending_applications(self) -> List[User]: ...
