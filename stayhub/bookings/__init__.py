"""
Модуль контекста бронирования (Booking Context).

Отвечает за бронирование объявлений гостями, включая:
- Создание подтвержденных бронирований
- Смену статуса владельцем или администратором
- Завершение прошедших бронирований внешним планировщиком
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
