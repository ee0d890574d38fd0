"""
Модуль контекста отзывов (Reviews Context).

Отвечает за отзывы о завершенном проживании и агрегат рейтинга объявления.
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
