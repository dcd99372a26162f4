"""
Иерархия ошибок MoodEmoji.

- ServiceError: сервис вернул не-2xx (сообщение из payload)
- TransportError: сеть недоступна, ответ не парсится
- CapabilityError: сбой платформенной возможности (clipboard, вибрация)

Пустой ввод ошибкой не считается - контроллер молча его игнорирует.
"""

from models import ErrorKind


class MoodEmojiError(Exception):
    """Базовое исключение приложения"""


class PredictionError(MoodEmojiError):
    """Ошибка получения предсказания"""
    kind: ErrorKind = ErrorKind.TRANSPORT


class ServiceError(PredictionError):
    """Сервис ответил ошибкой. Сообщение показывается пользователю как есть."""
    kind = ErrorKind.SERVICE

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(PredictionError):
    """Сетевая ошибка или невалидный ответ"""
    kind = ErrorKind.TRANSPORT


class CapabilityError(MoodEmojiError):
    """Clipboard / haptics недоступны. Никогда не показывается пользователю."""
