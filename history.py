"""
Журнал истории предсказаний для MoodEmoji.

Обрабатывает:
- Хранение последних 10 успешных предсказаний (новые - первыми)
- Вытеснение самой старой записи при переполнении
- Статистику для боковой панели (процент позитивных слов)

Живёт только в рамках сессии - на диск не сохраняется.
"""

from collections import deque
from typing import Dict, Iterator, List

from models import HistoryEntry, Sentiment, round_half_up


class HistoryLog:
    """Ограниченный журнал HistoryEntry, упорядоченный от новых к старым"""

    CAPACITY = 10

    def __init__(self, capacity: int = CAPACITY):
        self.capacity = capacity
        # deque(maxlen) сам отбрасывает хвост при appendleft
        self._entries: deque = deque(maxlen=capacity)

    def append(self, entry: HistoryEntry) -> None:
        """Добавляет запись в начало журнала"""
        self._entries.appendleft(entry)

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def count(self, sentiment: Sentiment) -> int:
        return sum(1 for entry in self._entries if entry.sentiment == sentiment)

    def sentiment_counts(self) -> Dict[Sentiment, int]:
        """Количество записей по каждой тональности (включая нулевые)"""
        return {sentiment: self.count(sentiment) for sentiment in Sentiment}

    def positive_rate(self) -> int:
        """
        Процент позитивных записей, округлённый до целого.

        Returns:
            0..100, для пустого журнала - 0
        """
        if not self._entries:
            return 0
        return round_half_up(self.count(Sentiment.POSITIVE) / len(self._entries) * 100)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.entries())

    def __getitem__(self, index):
        return self.entries()[index]
