"""
Побочные эффекты успешного предсказания.

- Конфетти для уверенно позитивных слов (confidence > 0.8)
- Вибро-паттерн на каждый успех
"""

from typing import Optional

from haptics import SUCCESS_PATTERN, pulse
from models import PredictionResult, Sentiment
from notifications import CELEBRATION, NotificationTimer

CELEBRATION_THRESHOLD = 0.8


class SideEffectDispatcher:
    """Оценивает порог празднования и запускает сигналы успеха"""

    def __init__(self, notifications: NotificationTimer, haptics=None):
        self.notifications = notifications
        self.haptics = haptics

    @staticmethod
    def should_celebrate(result: Optional[PredictionResult]) -> bool:
        """Чистый предикат: positive И confidence строго больше 0.8"""
        if result is None:
            return False
        return result.sentiment == Sentiment.POSITIVE and result.confidence > CELEBRATION_THRESHOLD

    def dispatch(self, result: PredictionResult) -> bool:
        """
        Запускает эффекты успеха.

        Returns:
            True если было запущено празднование
        """
        celebrate = self.should_celebrate(result)
        if celebrate:
            self.notifications.trigger(CELEBRATION)

        pulse(self.haptics, SUCCESS_PATTERN)
        return celebrate
