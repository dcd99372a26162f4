"""
Транзиентные уведомления для MoodEmoji.

Обрабатывает:
- Булевы флаги с автоматическим сбросом (copy_confirmation, celebration)
- Debounce: повторный trigger перезапускает окно жизни флага
- Отмену и пересоздание отложенного сброса (как debounce перевода)

КРИТИЧНО:
- Старый таймер НИКОГДА не должен сбросить флаг, активированный заново.
  Кроме after_cancel() каждый сброс проверяет номер поколения флага:
  threading.Timer.cancel() не гарантирует отмену, если callback уже стартовал.
"""

import threading
from typing import Any, Callable, Dict, Optional, Protocol


# ===== ФЛАГИ =====
COPY_CONFIRMATION = "copy_confirmation"
CELEBRATION = "celebration"

FLAG_DURATIONS_MS: Dict[str, int] = {
    COPY_CONFIRMATION: 2000,  # "Copied!" под кнопкой
    CELEBRATION: 3000,        # Конфетти
}


# ===== ПЛАНИРОВЩИКИ =====

class Scheduler(Protocol):
    """
    Минимальный интерфейс планировщика.

    tk.Tk / любой tk.Widget удовлетворяет ему без адаптеров:
    after(ms, func) возвращает id, after_cancel(id) отменяет вызов.
    """

    def after(self, ms: int, func: Callable[[], None]) -> Any: ...

    def after_cancel(self, handle: Any) -> None: ...


class ThreadingScheduler:
    """
    Планировщик на threading.Timer для работы без GUI.

    Callback выполняется в отдельном потоке таймера.
    """

    def after(self, ms: int, func: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(ms / 1000.0, func)
        timer.daemon = True
        timer.start()
        return timer

    def after_cancel(self, handle: threading.Timer) -> None:
        handle.cancel()


# ===== ТАЙМЕР УВЕДОМЛЕНИЙ =====

class NotificationTimer:
    """
    Управляет независимыми флагами уведомлений с автосбросом.

    Responsibilities:
    - trigger(): поднять флаг и (пере)запланировать сброс
    - Отмена предыдущего сброса при повторном trigger (debounce, не стек)
    - Уведомление подписчика при любом изменении флагов
    """

    def __init__(self,
                 scheduler: Scheduler,
                 durations: Optional[Dict[str, int]] = None,
                 on_change: Optional[Callable[[Dict[str, bool]], None]] = None):
        """
        Args:
            scheduler: Объект с after()/after_cancel() (tk root или ThreadingScheduler)
            durations: Время жизни флагов в ms (по умолчанию FLAG_DURATIONS_MS)
            on_change: Callback(flags) - вызывается после каждого изменения
        """
        self.scheduler = scheduler
        self.durations = dict(durations or FLAG_DURATIONS_MS)
        self.on_change = on_change

        self._lock = threading.Lock()
        self._flags: Dict[str, bool] = {name: False for name in self.durations}
        self._pending: Dict[str, Any] = {}
        self._generation: Dict[str, int] = {name: 0 for name in self.durations}

    def trigger(self, name: str) -> None:
        """
        Поднимает флаг и перезапускает окно его жизни.

        Raises:
            KeyError: если флаг не зарегистрирован
        """
        duration = self.durations[name]

        with self._lock:
            # Отменяем предыдущий сброс если есть
            pending = self._pending.pop(name, None)
            if pending is not None:
                self.scheduler.after_cancel(pending)

            self._generation[name] += 1
            generation = self._generation[name]
            self._flags[name] = True

            self._pending[name] = self.scheduler.after(
                duration,
                lambda: self._expire(name, generation)
            )

        self._notify()

    def _expire(self, name: str, generation: int) -> None:
        """Сбрасывает флаг, если с момента планирования не было нового trigger"""
        with self._lock:
            if self._generation[name] != generation:
                return  # Устаревший таймер
            self._pending.pop(name, None)
            self._flags[name] = False

        self._notify()

    def is_active(self, name: str) -> bool:
        return self._flags[name]

    def flags(self) -> Dict[str, bool]:
        """Копия текущего состояния флагов"""
        with self._lock:
            return dict(self._flags)

    def cancel_all(self) -> None:
        """
        Отменяет все ожидающие сбросы и гасит флаги.

        Используется при закрытии приложения.
        """
        with self._lock:
            for name, handle in self._pending.items():
                self.scheduler.after_cancel(handle)
                self._generation[name] += 1
            self._pending.clear()
            for name in self._flags:
                self._flags[name] = False

        self._notify()

    def _notify(self):
        if self.on_change is not None:
            self.on_change(self.flags())
