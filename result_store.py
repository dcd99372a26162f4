"""Хранилище последнего успешного предсказания"""

from typing import Optional

from models import PredictionResult


class ResultStore:
    """
    Держит текущий PredictionResult.

    Результат заменяется целиком при каждом успехе и очищается
    при старте нового запроса или очистке ввода.
    """

    def __init__(self):
        self._result: Optional[PredictionResult] = None

    @property
    def current(self) -> Optional[PredictionResult]:
        return self._result

    def set(self, result: PredictionResult) -> None:
        self._result = result

    def clear(self) -> None:
        self._result = None

    def has_result(self) -> bool:
        return self._result is not None
