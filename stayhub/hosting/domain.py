"""
Доменная модель контекста хозяев жилья.

Содержит агрегат пользователя и машину состояний заявки на статус хозяина:
нет заявки -> заявка на рассмотрении -> {хозяин, отклонена};
статус хозяина может быть отозван администратором.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..shared_kernel import (
    Entity,
    ForbiddenException,
    ValidationException,
    now,
)


class HostApplicationStatus(str, Enum):
    """Статусы заявки на статус хозяина."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class HostInfo(BaseModel):
    """Данные заявки на статус хозяина."""

    phone: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    identification: Optional[str] = None  # Номер документа или данные верификации
    status: HostApplicationStatus = HostApplicationStatus.PENDING

    def is_complete(self) -> bool:
        """Проверяет, заполнены ли обязательные поля заявки."""
        return bool(self.phone) and bool(self.address)


class User(Entity):
    """Пользователь маркетплейса."""

    name: str
    email: str
    password_hash: Optional[str] = Field(default=None, repr=False)
    is_admin: bool = False
    is_host: bool = False
    host_since: Optional[datetime] = None
    host_info: Optional[HostInfo] = None
    avatar: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Некорректный email")
        return v

    def has_pending_application(self) -> bool:
        """Заявка подана, но статус хозяина еще не выдан."""
        return (
            self.host_info is not None
            and bool(self.host_info.phone)
            and not self.is_host
        )

    def apply_for_hosting(
        self,
        phone: Optional[str],
        address: Optional[str],
        bio: Optional[str] = None,
        identification: Optional[str] = None,
    ) -> None:
        """Подает (или перезаписывает) заявку на статус хозяина."""
        phone = (phone or "").strip()
        address = (address or "").strip()
        if not phone or not address:
            raise ValidationException("Телефон и адрес обязательны")

        self.host_info = HostInfo(
            phone=phone,
            address=address,
            bio=bio,
            identification=identification,
            status=HostApplicationStatus.PENDING,
        )
        self.is_host = False
        # До одобрения поле хранит время подачи заявки
        self.host_since = now()
        self.touch()

    def review_application(self, approve: bool) -> None:
        """Одобряет или отклоняет заявку.

        Отклонение не меняет ``host_info.status``: статус "rejected"
        выставляет только отзыв статуса хозяина.
        """
        self.is_host = approve
        if approve and self.host_since is None:
            self.host_since = now()
        self.touch()

    def approve_application(self) -> None:
        """Одобряет полностью заполненную заявку."""
        if self.host_info is None or not self.host_info.is_complete():
            raise ValidationException("Пользователь не заполнил заявку на статус хозяина")

        self.is_host = True
        self.host_since = now()
        self.host_info.status = HostApplicationStatus.APPROVED
        self.touch()

    def revoke_hosting(self) -> None:
        """Отзывает статус хозяина."""
        # Администраторы-хозяева защищены от отзыва при любом состоянии
        if self.is_admin:
            raise ForbiddenException(
                "Нельзя отозвать статус хозяина у администратора"
            )
        if not self.is_host:
            raise ValidationException("Пользователь не является хозяином")

        self.is_host = False
        if self.host_info is not None:
            self.host_info.status = HostApplicationStatus.REJECTED
        self.touch()
