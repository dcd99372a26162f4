"""
Тактильная обратная связь для MoodEmoji.

Паттерн - последовательность длительностей в ms: вибрация, пауза, вибрация...
На десктопе вибромотора нет, поэтому BellHaptics заменяет каждый импульс
системным звуковым сигналом (tk bell). Всё best-effort: сбои только логируются.
"""

from typing import Callable, Optional, Sequence, Tuple

from errors import CapabilityError

# ===== ПАТТЕРНЫ =====
SUCCESS_PATTERN: Tuple[int, ...] = (50, 30, 50)  # Успешное предсказание
COPY_PATTERN: Tuple[int, ...] = (100,)           # Копирование результата


class NullHaptics:
    """Платформа без поддержки вибрации - вызовы молча игнорируются"""

    def vibrate(self, pattern: Sequence[int]) -> bool:
        return False


class BellHaptics:
    """
    Эмуляция вибрации через tk bell.

    Каждый импульс паттерна (чётные позиции) превращается в один bell(),
    паузы (нечётные позиции) выдерживаются через after().
    """

    def __init__(self, widget, enabled: Optional[Callable[[], bool]] = None):
        """
        Args:
            widget: Любой tk виджет (нужны bell() и after())
            enabled: Функция-переключатель (настройка HapticFeedback); None - всегда включено
        """
        self.widget = widget
        self.enabled = enabled

    def vibrate(self, pattern: Sequence[int]) -> bool:
        if self.enabled is not None and not self.enabled():
            return False

        offset = 0
        for index, duration in enumerate(pattern):
            if index % 2 == 0:
                if offset == 0:
                    self.widget.bell()
                else:
                    self.widget.after(offset, self.widget.bell)
            offset += int(duration)
        return True


def vibrate(haptics, pattern: Sequence[int]) -> bool:
    """
    Передаёт паттерн платформе.

    Raises:
        CapabilityError: платформа отказала в вибрации
    """
    try:
        return bool(haptics.vibrate(list(pattern)))
    except Exception as e:
        raise CapabilityError(f"vibrate{tuple(pattern)} failed: {e}") from e


def pulse(haptics, pattern: Sequence[int]) -> bool:
    """
    Best-effort вибрация: CapabilityError проглатывается с логом.

    Returns:
        True если платформа приняла паттерн
    """
    if haptics is None:
        return False
    try:
        return vibrate(haptics, pattern)
    except CapabilityError as e:
        print(f"[WARN] Haptic feedback failed: {e}")
        return False
