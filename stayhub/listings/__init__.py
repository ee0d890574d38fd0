"""
Модуль контекста объявлений (Listings Context).

Отвечает за объявления о сдаче жилья, включая:
- Создание объявлений хозяевами и администраторами
- Модерацию и снятие с публикации при существенной правке
- Правила видимости и поиск опубликованных объявлений
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
