"""
Контроллер состояния сессии MoodEmoji.

Координирует:
- Жизненный цикл запроса (loading / error / result)
- Историю предсказаний и кэш недавних слов
- Побочные эффекты успеха (конфетти, вибрация)
- Экспорт результата в буфер обмена

Architecture:
- Явная структура состояния с именованными операциями (без глобалей)
- Каждая операция публикует новый неизменяемый SessionSnapshot
- submit() = begin_submit() + сетевой вызов + complete_submit().
  GUI вызывает begin/complete в главном потоке, а сетевой вызов -
  в рабочем, поэтому состояние меняется только из одного потока.
"""

import datetime
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from clipboard_exporter import ClipboardExporter
from haptics import NullHaptics
from history import HistoryLog
from models import Err, ErrorKind, HistoryEntry, Ok, Outcome, PredictionResult, Query, Sentiment
from network import TRANSPORT_FALLBACK_MESSAGE
from notifications import CELEBRATION, COPY_CONFIRMATION, NotificationTimer
from recent_words import RecentWordsCache
from result_store import ResultStore
from side_effects import SideEffectDispatcher

# Быстрые примеры под полем ввода
EXAMPLE_WORDS: Tuple[str, ...] = (
    "sunshine", "coffee", "adventure", "rain", "success",
    "stress", "love", "chaos", "peace", "excitement",
)

TIMESTAMP_FORMAT = "%H:%M:%S"


@dataclass(frozen=True)
class SessionSnapshot:
    """Неизменяемый снимок состояния сессии для UI и тестов"""
    word: str
    result: Optional[PredictionResult]
    error: str
    loading: bool
    history: Tuple[HistoryEntry, ...]
    recent_words: Tuple[str, ...]
    flags: Dict[str, bool]
    positive_rate: int
    sentiment_counts: Dict[Sentiment, int]
    show_history: bool

    @property
    def can_submit(self) -> bool:
        """Кнопка отправки активна только вне загрузки и при непустом вводе"""
        return not self.loading and bool(self.word.strip())

    @property
    def copy_confirmation(self) -> bool:
        return self.flags.get(COPY_CONFIRMATION, False)

    @property
    def celebration(self) -> bool:
        return self.flags.get(CELEBRATION, False)


class RequestController:
    """
    Оркестрирует отправку слова и обновление состояния сессии.

    Responsibilities:
    - Валидация ввода (пустой ввод молча игнорируется)
    - Один логический запрос за раз (UI блокирует повторную отправку)
    - Fan-out успешного результата: ResultStore, HistoryLog, RecentWordsCache
    - Ошибки меняют только error/loading, хранилища не трогают
    """

    def __init__(self,
                 client,
                 notifications: NotificationTimer,
                 haptics=None,
                 clipboard: Optional[Callable[[str], None]] = None,
                 clock: Optional[Callable[[], datetime.datetime]] = None):
        """
        Args:
            client: PredictionClient (или любой объект с predict(canonical) -> Outcome)
            notifications: Таймер флагов copy_confirmation / celebration
            haptics: Объект с vibrate(pattern); None - NullHaptics
            clipboard: Функция записи в буфер обмена (по умолчанию pyperclip.copy)
            clock: Источник текущего времени для меток истории
        """
        self.client = client
        self.notifications = notifications
        self.clock = clock or datetime.datetime.now
        self.haptics = haptics if haptics is not None else NullHaptics()

        self.result_store = ResultStore()
        self.history = HistoryLog()
        self.recent_words = RecentWordsCache()
        self.side_effects = SideEffectDispatcher(notifications, self.haptics)
        self.exporter = ClipboardExporter(notifications, clipboard, self.haptics)

        # ===== СОСТОЯНИЕ =====
        self.word = ""
        self.error = ""
        self.loading = False
        self.show_history = False

        self._listeners: List[Callable[[SessionSnapshot], None]] = []

    # ===== ПОДПИСКА =====

    def subscribe(self, listener: Callable[[SessionSnapshot], None]) -> Callable[[], None]:
        """
        Регистрирует наблюдателя изменений.

        Returns:
            Функция отписки
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            word=self.word,
            result=self.result_store.current,
            error=self.error,
            loading=self.loading,
            history=tuple(self.history.entries()),
            recent_words=tuple(self.recent_words.words()),
            flags=self.notifications.flags(),
            positive_rate=self.history.positive_rate(),
            sentiment_counts=self.history.sentiment_counts(),
            show_history=self.show_history,
        )

    def _emit(self) -> SessionSnapshot:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
        return snap

    # ===== ОТПРАВКА =====

    def submit(self, word: str) -> SessionSnapshot:
        """
        Синхронная отправка слова: валидация, запрос, обновление состояния.

        Пустой ввод (или только пробелы) - ничего не меняется, запроса нет.
        """
        query = self.begin_submit(word)
        if query is None:
            return self.snapshot()

        outcome = self.request(query)
        return self.complete_submit(query, outcome)

    def begin_submit(self, word: str) -> Optional[Query]:
        """
        Переводит сессию в состояние загрузки.

        Returns:
            Query для сетевого вызова или None для пустого ввода
        """
        query = Query.from_raw(word)
        if query.is_empty:
            return None

        self.word = word
        self.error = ""
        self.result_store.clear()
        self.loading = True
        self._emit()
        return query

    def request(self, query: Query) -> Outcome:
        """
        Сетевой вызов. Единственная точка ожидания; может выполняться в рабочем потоке.

        Любое непредвиденное исключение превращается в транспортную ошибку.
        """
        try:
            return self.client.predict(query.canonical)
        except Exception as e:
            print(f"[ERROR] Prediction error: {e}")
            return Err(ErrorKind.TRANSPORT, TRANSPORT_FALLBACK_MESSAGE)

    def complete_submit(self, query: Query, outcome: Outcome) -> SessionSnapshot:
        """Применяет результат сетевого вызова к состоянию сессии"""
        if isinstance(outcome, Ok):
            result = outcome.result
            display = query.display

            self.result_store.set(result)
            self.history.append(HistoryEntry.from_result(display, result, self._timestamp()))
            self.recent_words.record(display)
            self.loading = False

            self.side_effects.dispatch(result)
        else:
            self.error = outcome.message or TRANSPORT_FALLBACK_MESSAGE
            self.loading = False

        return self._emit()

    def _timestamp(self) -> str:
        return self.clock().strftime(TIMESTAMP_FORMAT)

    # ===== ВВОД =====

    def set_input(self, text: str) -> SessionSnapshot:
        """Пользователь редактирует поле: ошибка скрывается"""
        self.word = text
        self.error = ""
        return self._emit()

    def choose_word(self, word: str) -> SessionSnapshot:
        """Клик по примеру или недавнему слову: только заполняет поле"""
        self.word = word
        return self._emit()

    def clear_input(self) -> SessionSnapshot:
        """Кнопка ✕: очищает поле, результат и ошибку"""
        self.word = ""
        self.error = ""
        self.result_store.clear()
        return self._emit()

    # ===== ДЕЙСТВИЯ =====

    def copy_result(self) -> Optional[str]:
        """
        Копирует текущий результат в буфер обмена.

        Returns:
            Скопированный текст или None если результата нет
        """
        if not self.result_store.has_result():
            return None

        text = self.exporter.export(self.word, self.result_store.current)
        self._emit()
        return text

    def clear_history(self) -> SessionSnapshot:
        """Очищает историю вместе с недавними словами"""
        self.history.clear()
        self.recent_words.clear()
        return self._emit()

    def clear_recent_words(self) -> SessionSnapshot:
        self.recent_words.clear()
        return self._emit()

    def toggle_history(self) -> SessionSnapshot:
        self.show_history = not self.show_history
        return self._emit()
