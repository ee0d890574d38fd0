"""
Ядро маркетплейса краткосрочной аренды: машины состояний, правила доступа
и поддержание производных агрегатов для пользователей, объявлений,
бронирований и отзывов.
"""

__version__ = "0.1.0"
