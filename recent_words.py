"""
Кэш недавних слов для MoodEmoji.

Хранит до 5 различных слов в порядке "последнее - первым".
OrderedDict даёт O(1) проверку наличия и перемещение в начало.
"""

from collections import OrderedDict
from typing import Iterator, List


class RecentWordsCache:
    """
    Ограниченный список недавних запросов с дедупликацией.

    Слова сравниваются с учётом регистра - "Rain" и "rain" это разные записи,
    как их ввёл пользователь.
    """

    CAPACITY = 5

    def __init__(self, capacity: int = CAPACITY):
        self.capacity = capacity
        # Первый ключ = самое свежее слово
        self._words: "OrderedDict[str, None]" = OrderedDict()

    def record(self, word: str) -> None:
        """
        Добавляет слово в начало.

        Существующее слово переносится в начало без изменения длины.
        При переполнении отбрасывается самое старое.
        """
        self._words.pop(word, None)
        self._words[word] = None
        self._words.move_to_end(word, last=False)

        while len(self._words) > self.capacity:
            self._words.popitem(last=True)

    def clear(self) -> None:
        self._words.clear()

    def words(self) -> List[str]:
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __iter__(self) -> Iterator[str]:
        return iter(self.words())

    def __getitem__(self, index):
        return self.words()[index]
