"""
Переиспользуемые кнопки для MoodEmoji.

Содержит:
- ToggleButton: Кнопка-переключатель с двумя состояниями (on/off)
- ActionButton: Кнопка для однократных действий (с поддержкой disabled)
"""

import tkinter as tk
from typing import Callable
from gui.styles import COLORS


class ToggleButton(tk.Label):
    """
    Кнопка-переключатель, визуально отражающая внешнее состояние.

    Features:
    - Состояние читается через is_enabled() (config, контроллер и т.п.)
    - Hover эффекты с сохранением состояния
    - Визуальная индикация on/off через цвета

    Цветовая схема:
    - Enabled: accent bg + dark fg (яркая кнопка)
    - Disabled: secondary bg + faint fg (приглушенная)
    - Hover: всегда accent bg + dark fg (независимо от состояния)
    """

    def __init__(self, parent: tk.Widget, text: str, is_enabled: Callable[[], bool],
                 command: Callable, **kwargs):
        """
        Args:
            parent: Родительский виджет
            text: Текст кнопки
            is_enabled: Функция, возвращающая текущее состояние (bool)
            command: Callback вызываемый при клике
            **kwargs: Дополнительные параметры для tk.Label
        """
        defaults = {
            "font": ("Segoe UI", 8),
            "cursor": "hand2",
            "padx": 8,
            "pady": 3,
            "relief": "flat"
        }
        defaults.update(kwargs)

        super().__init__(parent, text=text, **defaults)

        self.is_enabled = is_enabled
        self.command = command

        self.bind("<Button-1>", self._on_click)
        self.bind("<Enter>", self._on_enter)
        self.bind("<Leave>", self._on_leave)

        self.sync_state()

    def _on_click(self, event):
        """Обработка клика с передачей в callback"""
        self.command(event)
        self.sync_state()

    def _on_enter(self, event):
        """Hover эффект: всегда яркая кнопка"""
        self.config(bg=COLORS["text_accent"], fg=COLORS["bg"])

    def _on_leave(self, event):
        """Возврат к текущему состоянию"""
        self.sync_state()

    def sync_state(self):
        """Синхронизирует визуальное состояние кнопки с is_enabled()"""
        enabled = self.is_enabled()
        self.config(
            bg=COLORS["text_accent"] if enabled else COLORS["bg_secondary"],
            fg=COLORS["bg"] if enabled else COLORS["text_faint"]
        )


class ActionButton(tk.Label):
    """
    Кнопка для однократных действий без сохранения состояния.

    Отличие от ToggleButton:
    - Нет привязки к внешнему состоянию
    - Может быть заблокирована (set_enabled(False)) - клики игнорируются
    - Используется для команд: "Analyze", "Copy", "Clear", примеры слов
    """

    def __init__(self, parent: tk.Widget, text: str, command: Callable, **kwargs):
        """
        Args:
            parent: Родительский виджет
            text: Текст кнопки
            command: Callback(event) вызываемый при клике
            **kwargs: Дополнительные параметры для tk.Label
        """
        defaults = {
            "font": ("Segoe UI", 8),
            "bg": COLORS["bg_secondary"],
            "fg": COLORS["text_main"],
            "cursor": "hand2",
            "padx": 8,
            "pady": 3,
            "relief": "flat"
        }
        defaults.update(kwargs)

        super().__init__(parent, text=text, **defaults)

        self.command = command
        self.enabled = True

        self.bind("<Button-1>", self._on_click)
        self.bind("<Enter>", self._on_enter)
        self.bind("<Leave>", self._on_leave)

    def _on_click(self, event):
        if self.enabled:
            self.command(event)

    def _on_enter(self, event):
        """Hover эффект: яркая кнопка"""
        if self.enabled:
            self.config(bg=COLORS["text_accent"], fg=COLORS["bg"])

    def _on_leave(self, event):
        """Возврат к обычному состоянию"""
        self._apply_colors()

    def set_enabled(self, enabled: bool):
        """Блокирует/разблокирует кнопку (повторная отправка во время загрузки)"""
        if self.enabled == enabled:
            return
        self.enabled = enabled
        self.config(cursor="hand2" if enabled else "arrow")
        self._apply_colors()

    def _apply_colors(self):
        self.config(
            bg=COLORS["bg_secondary"],
            fg=COLORS["text_main"] if self.enabled else COLORS["text_faint"]
        )
