"""
Модели данных для MoodEmoji.

Содержит:
- Query: исходный ввод пользователя и его каноническая форма
- PredictionResult: вердикт сервиса (emoji + sentiment + confidence)
- HistoryEntry: запись истории предсказаний
- Ok / Err: результат удалённого вызова (tagged outcome)

Все модели неизменяемые (frozen dataclasses) - снапшоты можно безопасно
передавать между потоками и в UI.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


# ===== ОКРУГЛЕНИЕ =====

def round_half_up(value: float) -> int:
    """
    Округление "половина вверх" (62.5 -> 63).

    Встроенный round() использует банковское округление (62.5 -> 62),
    что расходится с отображаемыми процентами в UI.
    """
    return int(math.floor(value + 0.5))


# ===== ENUMS =====

class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ErrorKind(str, Enum):
    """Категории ошибок, видимых контроллеру"""
    SERVICE = "service"      # Сервис ответил не-2xx
    TRANSPORT = "transport"  # Сеть, парсинг, непредвиденное исключение


# ===== QUERY =====

@dataclass(frozen=True)
class Query:
    """
    Запрос пользователя.

    raw сохраняется для отображения (история, недавние слова),
    canonical уходит на сервер.
    """
    raw: str
    canonical: str

    @classmethod
    def from_raw(cls, raw: str) -> "Query":
        return cls(raw=raw, canonical=raw.strip().lower())

    @property
    def display(self) -> str:
        """Слово как его ввёл пользователь, без пробелов по краям"""
        return self.raw.strip()

    @property
    def is_empty(self) -> bool:
        return not self.canonical


# ===== РЕЗУЛЬТАТЫ =====

@dataclass(frozen=True)
class PredictionResult:
    emoji: str
    sentiment: Sentiment
    confidence: float

    @property
    def percent(self) -> int:
        """Уверенность в процентах (0-100)"""
        return round_half_up(self.confidence * 100)

    @property
    def confidence_band(self) -> str:
        """
        Уровень уверенности для индикатора в UI.

        Returns:
            "high" (> 0.7), "medium" (> 0.5) или "low"
        """
        if self.confidence > 0.7:
            return "high"
        if self.confidence > 0.5:
            return "medium"
        return "low"


@dataclass(frozen=True)
class HistoryEntry:
    """Запись истории. После создания не изменяется."""
    word: str
    emoji: str
    sentiment: Sentiment
    confidence: float
    timestamp: str

    @classmethod
    def from_result(cls, word: str, result: PredictionResult, timestamp: str) -> "HistoryEntry":
        return cls(
            word=word,
            emoji=result.emoji,
            sentiment=result.sentiment,
            confidence=result.confidence,
            timestamp=timestamp,
        )


# ===== OUTCOME =====

@dataclass(frozen=True)
class Ok:
    result: PredictionResult


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str


Outcome = Union[Ok, Err]
