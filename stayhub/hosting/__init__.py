"""
Модуль контекста хозяев жилья (Hosting Context).

Отвечает за учетные записи пользователей и путь от гостя к хозяину:
- Подачу заявки на статус хозяина
- Рассмотрение, одобрение и отзыв статуса администратором
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
