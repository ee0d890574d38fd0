"""
Доменная модель контекста объявлений.

Содержит агрегат объявления и машину состояний модерации:
pending -> {approved, rejected}; approved -> pending только при
существенной правке объявления хозяином.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, computed_field

from ..shared_kernel import (
    Actor,
    Capability,
    Entity,
    EntityId,
    ValidationException,
    has_any,
)


class ModerationStatus(str, Enum):
    """Статусы модерации объявления."""

    PENDING = "pending"  # Ожидает проверки администратором
    APPROVED = "approved"  # Опубликовано
    REJECTED = "rejected"  # Отклонено


# Поля, изменение которых хозяином снимает объявление с публикации
SIGNIFICANT_FIELDS = ("title", "description", "price", "location")

# Поля, которые можно менять через правку объявления
EDITABLE_FIELDS = frozenset(SIGNIFICANT_FIELDS + ("images", "amenities"))


class Listing(Entity):
    """Объявление о сдаче жилья."""

    host_id: EntityId
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    location: str = Field(..., min_length=1)
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)  # Удобства
    status: ModerationStatus = ModerationStatus.PENDING
    rejection_reason: Optional[str] = None
    # Агрегат рейтинга, пишется только пересчетом по отзывам
    avg_rating: float = 0.0
    reviews_count: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_approved(self) -> bool:
        """Опубликовано ли объявление."""
        return self.status == ModerationStatus.APPROVED

    @classmethod
    def submit(cls, host_id: EntityId, **fields: Any) -> "Listing":
        """Создает объявление хозяина, ожидающее модерации."""
        return cls(host_id=host_id, status=ModerationStatus.PENDING, **fields)

    @classmethod
    def publish(cls, admin_id: EntityId, **fields: Any) -> "Listing":
        """Создает объявление от имени администратора сразу опубликованным."""
        return cls(host_id=admin_id, status=ModerationStatus.APPROVED, **fields)

    def is_visible_to(self, actor: Optional[Actor]) -> bool:
        """Опубликованное объявление видно всем, остальные - хозяину и администратору."""
        if self.is_approved:
            return True
        return has_any(
            actor, {Capability.OWNER, Capability.ADMIN}, owner_id=self.host_id
        )

    def has_significant_changes(self, changes: Dict[str, Any]) -> bool:
        """Меняет ли правка хотя бы одно существенное поле."""
        return any(
            field in changes and changes[field] != getattr(self, field)
            for field in SIGNIFICANT_FIELDS
        )

    def apply_changes(self, changes: Dict[str, Any], demote: bool) -> None:
        """Применяет правку объявления.

        Args:
            changes: Новые значения редактируемых полей
            demote: Снимать ли опубликованное объявление с публикации
                при существенной правке (правка хозяином, а не администратором)
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Поля нельзя изменить: {', '.join(sorted(unknown))}"
            )

        significant = self.has_significant_changes(changes)
        for field, value in changes.items():
            setattr(self, field, value)

        # Отклоненное объявление остается отклоненным до повторной модерации
        if demote and significant and self.status == ModerationStatus.APPROVED:
            self.status = ModerationStatus.PENDING
        self.touch()

    def approve(self) -> None:
        """Публикует объявление."""
        self.status = ModerationStatus.APPROVED
        self.rejection_reason = None
        self.touch()

    def reject(self, reason: Optional[str] = None) -> None:
        """Отклоняет объявление."""
        self.status = ModerationStatus.REJECTED
        if reason:
            self.rejection_reason = reason
        self.touch()

    def apply_rating(self, avg_rating: float, reviews_count: int) -> None:
        """Записывает пересчитанный агрегат рейтинга."""
        self.avg_rating = avg_rating
        self.reviews_count = reviews_count
        self.touch()
