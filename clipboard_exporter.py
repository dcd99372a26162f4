"""
Экспорт результата в буфер обмена.

Формат: "sunshine = ☀️ positive (92%)"

Запись в clipboard - best-effort: ошибка pyperclip только логируется,
подтверждение "Copied!" и вибро-импульс срабатывают в любом случае.
"""

from typing import Callable, Optional

import pyperclip

from errors import CapabilityError
from haptics import COPY_PATTERN, pulse
from models import PredictionResult
from notifications import COPY_CONFIRMATION, NotificationTimer


class ClipboardExporter:
    """
    Форматирует и копирует текущий результат.

    Responsibilities:
    - Форматирование строки результата
    - Запись в clipboard с проглатыванием ошибок платформы
    - Подтверждение копирования через NotificationTimer
    """

    def __init__(self,
                 notifications: NotificationTimer,
                 clipboard: Optional[Callable[[str], None]] = None,
                 haptics=None):
        """
        Args:
            notifications: Таймер флагов (поднимаем copy_confirmation)
            clipboard: Функция записи текста (по умолчанию pyperclip.copy)
            haptics: Объект с vibrate(pattern) или None
        """
        self.notifications = notifications
        self.clipboard = clipboard or pyperclip.copy
        self.haptics = haptics

    @staticmethod
    def format(word: str, result: PredictionResult) -> str:
        return f"{word} = {result.emoji} {result.sentiment.value} ({result.percent}%)"

    def write(self, text: str) -> None:
        """
        Записывает текст в буфер обмена.

        Raises:
            CapabilityError: pyperclip.PyperclipException, отсутствие xclip/xsel и т.п.
        """
        try:
            self.clipboard(text)
        except Exception as e:
            raise CapabilityError(f"Clipboard write failed: {e}") from e

    def export(self, word: str, result: PredictionResult) -> str:
        """
        Копирует результат в буфер обмена.

        Returns:
            Отформатированный текст (даже если запись не удалась)
        """
        text = self.format(word, result)

        try:
            self.write(text)
        except CapabilityError as e:
            print(f"[WARN] {e}")

        self.notifications.trigger(COPY_CONFIRMATION)
        pulse(self.haptics, COPY_PATTERN)
        return text
