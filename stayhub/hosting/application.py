"""
Прикладной слой контекста хозяев жилья.

Содержит сервисы приложения для регистрации пользователей,
подачи и рассмотрения заявок на статус хозяина.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..shared_kernel import (
    DEFAULT_UPDATE_ATTEMPTS,
    Actor,
    Capability,
    ConflictException,
    DomainException,
    EntityId,
    ForbiddenException,
    ILogger,
    NotFoundException,
    StructlogLogger,
    ValidationException,
    atomic_update,
    has_any,
    require_any,
)
from . import interfaces as ports
from .domain import HostInfo, User

# DTO (Data Transfer Objects) для входящих данных


class RegisterUserRequest(BaseModel):
    """Запрос на регистрацию пользователя."""

    name: str
    email: str
    password_hash: Optional[str] = None
    avatar: Optional[str] = None


class ApplyForHostRequest(BaseModel):
    """Заявка на статус хозяина."""

    phone: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    identification: Optional[str] = None


class ReviewHostApplicationRequest(BaseModel):
    """Решение администратора по заявке."""

    host_id: Optional[EntityId] = None
    approve: bool = False


# DTO для исходящих данных


class HostInfoDTO(BaseModel):
    """DTO для представления заявки на статус хозяина."""

    phone: Optional[str]
    address: Optional[str]
    bio: Optional[str]
    identification: Optional[str]
    status: str

    @classmethod
    def from_domain(cls, host_info: HostInfo) -> "HostInfoDTO":
        """Создает DTO из доменной модели."""
        return cls(
            phone=host_info.phone,
            address=host_info.address,
            bio=host_info.bio,
            identification=host_info.identification,
            status=host_info.status.value,
        )


class UserDTO(BaseModel):
    """DTO для представления пользователя (без учетных данных)."""

    id: EntityId
    name: str
    email: str
    is_admin: bool
    is_host: bool
    host_since: Optional[datetime]
    host_info: Optional[HostInfoDTO]
    avatar: Optional[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            is_admin=user.is_admin,
            is_host=user.is_host,
            host_since=user.host_since,
            host_info=(
                HostInfoDTO.from_domain(user.host_info)
                if user.host_info is not None
                else None
            ),
            avatar=user.avatar,
            created_at=user.created_at,
        )


# Сервисы приложения


class UserApplicationService:
    """Сервис приложения для работы с учетными записями."""

    def __init__(
        self,
        users: ports.IUserRepository,
        logger: Optional[ILogger] = None,
    ):
        """Инициализирует сервис."""
        self._users = users
        self._logger = logger or StructlogLogger(__name__)

    def register_user(self, request: RegisterUserRequest) -> UserDTO:
        """Регистрирует нового пользователя."""
        try:
            user = User(
                name=request.name,
                email=request.email,
                password_hash=request.password_hash,
                avatar=request.avatar,
            )
        except ValueError as e:
            raise ValidationException(str(e)) from e

        if self._users.find_by_email(user.email) is not None:
            raise ConflictException(f"Пользователь с email {user.email} уже зарегистрирован")

        # Уникальность email дополнительно проверяет репозиторий при вставке
        self._users.add(user)
        self._logger.info("user.registered", user_id=str(user.id))
        return UserDTO.from_domain(user)

    def grant_admin(self, email: str) -> UserDTO:
        """Выдает права администратора пользователю с указанным email.

        Операторская операция: вызывается из служебных скриптов,
        а не от имени участника.
        """
        user = self._users.find_by_email(email)
        if user is None:
            raise NotFoundException("Пользователь", email)

        def mutate(u: User) -> None:
            u.is_admin = True
            u.touch()

        user = atomic_update(
            self._users, user.id, mutate, "Пользователь", logger=self._logger
        )
        self._logger.info("user.admin_granted", user_id=str(user.id))
        return UserDTO.from_domain(user)

    def get_user(self, user_id: EntityId, actor: Actor) -> UserDTO:
        """Возвращает учетную запись (себе или администратору)."""
        require_any(actor, {Capability.SELF, Capability.ADMIN}, subject_id=user_id)
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundException("Пользователь", user_id)
        return UserDTO.from_domain(user)

    def list_users(self, actor: Actor) -> List[UserDTO]:
        """Возвращает всех пользователей."""
        require_any(actor, {Capability.ADMIN})
        return [UserDTO.from_domain(user) for user in self._users.list_all()]

    def delete_user(self, user_id: EntityId, actor: Actor) -> None:
        """Удаляет пользователя."""
        require_any(actor, {Capability.ADMIN})
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundException("Пользователь", user_id)
        if user.is_admin:
            raise ForbiddenException("Нельзя удалить администратора")

        self._users.delete(user_id)
        self._logger.info("user.deleted", user_id=str(user_id), by=str(actor.id))


class HostOnboardingService:
    """Сервис приложения для заявок на статус хозяина."""

    def __init__(
        self,
        users: ports.IUserRepository,
        logger: Optional[ILogger] = None,
        max_update_attempts: int = DEFAULT_UPDATE_ATTEMPTS,
    ):
        """Инициализирует сервис."""
        self._users = users
        self._logger = logger or StructlogLogger(__name__)
        self._attempts = max_update_attempts

    def _update(self, user_id: EntityId, mutate) -> User:
        return atomic_update(
            self._users,
            user_id,
            mutate,
            "Пользователь",
            attempts=self._attempts,
            logger=self._logger,
        )

    def apply(
        self, user_id: EntityId, request: ApplyForHostRequest, actor: Actor
    ) -> UserDTO:
        """Подает заявку на статус хозяина от имени самого пользователя."""
        require_any(
            actor,
            {Capability.SELF},
            subject_id=user_id,
            message="Заявку можно подать только от своего имени",
        )
        try:
            user = self._update(
                user_id,
                lambda u: u.apply_for_hosting(
                    phone=request.phone,
                    address=request.address,
                    bio=request.bio,
                    identification=request.identification,
                ),
            )
        except DomainException as e:
            self._logger.warning(
                "Ошибка при подаче заявки", user_id=str(user_id), error=str(e)
            )
            raise

        self._logger.info("host.application_submitted", user_id=str(user_id))
        return UserDTO.from_domain(user)

    def review_application(
        self, request: ReviewHostApplicationRequest, actor: Actor
    ) -> UserDTO:
        """Одобряет или отклоняет заявку на статус хозяина."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        if request.host_id is None:
            raise ValidationException("Не указан ID хозяина")

        user = self._update(
            request.host_id, lambda u: u.review_application(request.approve)
        )
        self._logger.info(
            "host.application_reviewed",
            user_id=str(user.id),
            approved=request.approve,
        )
        return UserDTO.from_domain(user)

    def approve_application(self, user_id: EntityId, actor: Actor) -> UserDTO:
        """Одобряет заявку (административное сокращение)."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        user = self._update(user_id, lambda u: u.approve_application())
        self._logger.info("host.application_approved", user_id=str(user_id))
        return UserDTO.from_domain(user)

    def revoke(self, user_id: EntityId, actor: Actor) -> UserDTO:
        """Отзывает статус хозяина."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        try:
            user = self._update(user_id, lambda u: u.revoke_hosting())
        except DomainException as e:
            self._logger.warning(
                "Ошибка при отзыве статуса хозяина", user_id=str(user_id), error=str(e)
            )
            raise

        self._logger.info("host.revoked", user_id=str(user_id))
        return UserDTO.from_domain(user)

    def pending_applications(self, actor: Actor) -> List[UserDTO]:
        """Возвращает заявки, ожидающие рассмотрения."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        return [
            UserDTO.from_domain(user) for user in self._users.find_pending_applications()
        ]

    def list_hosts(self, actor: Actor) -> List[UserDTO]:
        """Возвращает всех хозяев."""
        require_any(actor, {Capability.ADMIN}, message="Доступ запрещен")
        return [UserDTO.from_domain(user) for user in self._users.find_hosts()]

    def get_host_profile(self, user_id: EntityId, actor: Actor) -> UserDTO:
        """Возвращает профиль хозяина.

        Профиль пользователя, который еще не стал хозяином,
        видят только он сам и администратор.
        """
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundException("Хозяин", user_id)
        if not user.is_host and not has_any(
            actor, {Capability.SELF, Capability.ADMIN}, subject_id=user_id
        ):
            raise ForbiddenException("Пользователь еще не является хозяином")
        return UserDTO.from_domain(user)
