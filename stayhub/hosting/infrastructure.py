"""
Инфраструктурный слой контекста хозяев жилья.
"""

from typing import List, Optional

from ..shared_kernel import DocumentRepository
from . import interfaces as ports
from .domain import User


class UserRepository(DocumentRepository[User], ports.IUserRepository):
    """Репозиторий пользователей."""

    model_class = User
    resource_name = "Пользователь"
    unique_indexes = (("email",),)

    def find_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        users = self.find(lambda user: user.email == email)
        return users[0] if users else None

    def find_hosts(self) -> List[User]:
        return self.find(lambda user: user.is_host)

    def find_pending_applications(self) -> List[User]:
        return self.find(lambda user: user.has_pending_application())
