"""
Модуль администрирования: статистика для панели администратора.
"""

from . import application

__all__ = ["application"]
