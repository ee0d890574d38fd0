"""
Тесты разрешения полномочий.
"""

from uuid import uuid4

import pytest

from stayhub.shared_kernel import (
    Actor,
    Capability,
    ForbiddenException,
    has_any,
    require_any,
    resolve_capabilities,
)


def test_plain_user_has_no_capabilities_on_foreign_resource():
    """Тест: у обычного пользователя нет полномочий на чужой ресурс."""
    actor = Actor(id=uuid4())
    assert resolve_capabilities(actor, owner_id=uuid4()) == frozenset()


def test_owner_self_host_and_admin_are_resolved_independently():
    """Тест: каждое полномочие определяется своим правилом."""
    actor_id = uuid4()
    actor = Actor(id=actor_id, is_admin=True, is_host=True)

    capabilities = resolve_capabilities(actor, owner_id=actor_id, subject_id=actor_id)

    assert capabilities == {
        Capability.ADMIN,
        Capability.HOST,
        Capability.OWNER,
        Capability.SELF,
    }


def test_owner_requires_matching_id():
    """Тест: полномочие владельца только при совпадении идентификаторов."""
    actor = Actor(id=uuid4(), is_host=True)

    assert Capability.OWNER not in resolve_capabilities(actor, owner_id=uuid4())
    assert Capability.OWNER in resolve_capabilities(actor, owner_id=actor.id)


def test_anonymous_actor_has_nothing():
    """Тест: анонимный участник не имеет полномочий."""
    assert not has_any(None, {Capability.ADMIN, Capability.OWNER})


def test_require_any_raises_forbidden_with_message():
    """Тест: при отсутствии полномочий выбрасывается ForbiddenException."""
    actor = Actor(id=uuid4())

    with pytest.raises(ForbiddenException, match="Нельзя"):
        require_any(actor, {Capability.ADMIN}, message="Нельзя")

    # Хотя бы одного полномочия из набора достаточно
    require_any(actor, {Capability.ADMIN, Capability.SELF}, subject_id=actor.id)
