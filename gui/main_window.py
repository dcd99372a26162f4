"""
Главное окно приложения MoodEmoji.

Отображает:
- Поле ввода слова с кнопкой очистки и быстрыми примерами
- Кнопку отправки (блокируется во время загрузки)
- Ошибку / результат: emoji, вердикт, полоса уверенности, копирование
- Боковую панель: недавние слова, история, статистика
- Статус бар с переключателем вибро-отклика

Architecture:
- Всё состояние живёт в RequestController, окно только рендерит снапшоты
- Сетевой вызов выполняется в daemon-потоке, результат возвращается
  в главный поток через after(0, ...)
- Окно само служит планировщиком для NotificationTimer (after/after_cancel)
"""

import tkinter as tk
import threading
from typing import Optional

from config import get_config
from haptics import BellHaptics
from models import Query, Sentiment
from notifications import NotificationTimer
from request_controller import EXAMPLE_WORDS, RequestController, SessionSnapshot
from gui.styles import COLORS, FONTS, CONFIDENCE_BAR_WIDTH, CONFIDENCE_BAR_HEIGHT
from gui.buttons import ToggleButton, ActionButton


class MainWindow(tk.Tk):
    """
    Главное окно приложения.

    Responsibilities:
    - Layout и UI creation
    - Передача пользовательских действий в RequestController
    - Рендер SessionSnapshot
    - Запуск сетевого вызова вне главного потока
    """

    # ===== LAYOUT КОНСТАНТЫ =====
    MIN_WINDOW_WIDTH = 460
    MIN_WINDOW_HEIGHT = 560
    DEFAULT_WRAPLENGTH = 300

    def __init__(self, client, clipboard=None):
        """
        Args:
            client: PredictionClient для запросов к сервису
            clipboard: Функция записи в буфер обмена (по умолчанию pyperclip.copy)
        """
        super().__init__()
        self.cfg = get_config()

        self.title("Mood Emoji AI")
        x = self.cfg.get("USER", "WindowX", "100")
        y = self.cfg.get("USER", "WindowY", "100")
        w = self.cfg.get("USER", "WindowWidth", "520")
        h = self.cfg.get("USER", "WindowHeight", "720")
        self.geometry(f"{w}x{h}+{x}+{y}")
        self.configure(bg=COLORS["bg"])
        self.minsize(self.MIN_WINDOW_WIDTH, self.MIN_WINDOW_HEIGHT)

        # ===== СОЗДАНИЕ МЕНЕДЖЕРОВ =====
        self.notifications = NotificationTimer(self, on_change=lambda flags: self._render_flags(flags))
        self.haptics = BellHaptics(self, enabled=lambda: self.cfg.get_bool("USER", "HapticFeedback", True))
        self.controller = RequestController(
            client,
            self.notifications,
            haptics=self.haptics,
            clipboard=clipboard
        )
        if self.cfg.get_bool("USER", "ShowHistory", False):
            self.controller.toggle_history()

        # Флаг программной записи в поле ввода (чтобы trace не считал её вводом)
        self._syncing_input = False

        self._init_ui()
        self._bind_events()

        self.controller.subscribe(self.render)
        self.render(self.controller.snapshot())

    # ===== UI CREATION =====

    def _init_ui(self):
        """
        Инициализация всех UI элементов.

        Порядок: заголовок, статус бар (bottom), затем основная колонка и sidebar.
        """
        self._create_header()
        self._create_status_bar()

        body = tk.Frame(self, bg=COLORS["bg"])
        body.pack(fill="both", expand=True, padx=10, pady=5)

        self.main_column = tk.Frame(body, bg=COLORS["bg"])
        self.main_column.pack(side="left", fill="both", expand=True)

        self.sidebar = tk.Frame(body, bg=COLORS["bg_secondary"], width=170)
        self.sidebar.pack(side="right", fill="y", padx=(10, 0))
        self.sidebar.pack_propagate(False)

        self._create_input()
        self._create_examples()
        self._create_result_area()
        self._create_sidebar()

    def _create_label(self, parent, text: str = "", font_key: str = "ui",
                      fg_key: str = "text_main", **kwargs) -> tk.Label:
        """Фабрика для создания стилизованных Label с дефолтными стилями"""
        defaults = {
            "font": FONTS[font_key],
            "bg": parent.cget("bg"),
            "fg": COLORS[fg_key]
        }
        defaults.update(kwargs)
        return tk.Label(parent, text=text, **defaults)

    def _create_header(self):
        header = tk.Frame(self, bg=COLORS["bg"])
        header.pack(fill="x", pady=(12, 4))

        self._create_label(header, "✨🤖🎭 Mood Emoji AI", "header", "text_header").pack()
        self._create_label(
            header,
            "Type any word → Discover its emotional vibe",
            "subheader",
            "text_faint"
        ).pack()

        # Вместо конфетти - строка праздничных emoji на время флага celebration
        self.lbl_celebration = self._create_label(header, "", "celebration", "text_accent")
        self.lbl_celebration.pack()

    def _create_input(self):
        """Поле ввода + кнопка ✕ + кнопка отправки"""
        row = tk.Frame(self.main_column, bg=COLORS["bg"])
        row.pack(fill="x", pady=(5, 5))

        self.word_var = tk.StringVar()
        self.entry = tk.Entry(
            row,
            textvariable=self.word_var,
            font=FONTS["input"],
            bg=COLORS["bg_secondary"],
            fg=COLORS["text_main"],
            insertbackground=COLORS["text_accent"],
            relief="flat"
        )
        self.entry.pack(side="left", fill="x", expand=True, ipady=6)
        self.entry.focus_set()

        self.btn_clear_input = self._create_label(row, "✕", "subheader", "text_faint", cursor="hand2")
        self.btn_clear_input.bind("<Button-1>", self.on_clear_input)

        self.btn_submit = ActionButton(
            self.main_column,
            "Analyze Mood",
            self.on_submit,
            font=FONTS["submit"],
            pady=8
        )
        self.btn_submit.pack(fill="x", pady=(0, 5))

    def _create_examples(self):
        """Быстрые примеры слов"""
        frame = tk.Frame(self.main_column, bg=COLORS["bg"])
        frame.pack(fill="x", pady=(0, 8))

        self._create_label(frame, "Try:", "ui", "text_faint").grid(row=0, column=0, padx=(0, 4))
        for index, example in enumerate(EXAMPLE_WORDS):
            btn = ActionButton(frame, example, lambda e, w=example: self.on_choose_word(w))
            btn.grid(row=index // 5, column=index % 5 + 1, padx=2, pady=2, sticky="ew")

    def _create_result_area(self):
        """Ошибка, результат, пустое состояние"""
        self.lbl_error = self._create_label(
            self.main_column, "", "error", "text_error",
            wraplength=self.DEFAULT_WRAPLENGTH
        )
        self.lbl_error.pack(fill="x")

        self.result_frame = tk.Frame(self.main_column, bg=COLORS["bg"])

        self.lbl_emoji = self._create_label(self.result_frame, "", "emoji", cursor="hand2")
        self.lbl_emoji.pack()
        self.lbl_emoji.bind("<Button-1>", self.on_copy)

        self.lbl_verdict = self._create_label(self.result_frame, "", "verdict")
        self.lbl_verdict.pack(pady=(0, 6))

        bar_row = tk.Frame(self.result_frame, bg=COLORS["bg"])
        bar_row.pack()
        self.bar = tk.Canvas(
            bar_row,
            width=CONFIDENCE_BAR_WIDTH,
            height=CONFIDENCE_BAR_HEIGHT,
            bg=COLORS["bar_trough"],
            highlightthickness=0
        )
        self.bar.pack(side="left")
        self.lbl_percent = self._create_label(bar_row, "", "percent")
        self.lbl_percent.pack(side="left", padx=(6, 0))

        self.btn_copy = ActionButton(self.result_frame, "📋 Copy result", self.on_copy)
        self.btn_copy.pack(pady=(10, 0))

        self.lbl_copied = self._create_label(self.result_frame, "", "ui", "text_accent")
        self.lbl_copied.pack()

        self.lbl_empty = self._create_label(
            self.main_column,
            "✨ 🔮 🎯 🌈\nEnter a word to reveal its mood",
            "subheader",
            "text_faint"
        )

    def _create_sidebar(self):
        """Недавние слова, история, статистика"""
        # --- Recent ---
        recent_header = tk.Frame(self.sidebar, bg=COLORS["bg_secondary"])
        recent_header.pack(fill="x", padx=6, pady=(6, 2))
        self._create_label(recent_header, "Recent", "section").pack(side="left")
        self.btn_clear_recent = ActionButton(recent_header, "Clear", self.on_clear_recent)
        self.btn_clear_recent.pack(side="right")

        self.recent_frame = tk.Frame(self.sidebar, bg=COLORS["bg_secondary"])
        self.recent_frame.pack(fill="x", padx=6)

        # --- History ---
        history_header = tk.Frame(self.sidebar, bg=COLORS["bg_secondary"])
        history_header.pack(fill="x", padx=6, pady=(10, 2))
        self.lbl_history_title = self._create_label(history_header, "History", "section")
        self.lbl_history_title.pack(side="left")
        self.btn_clear_history = ActionButton(history_header, "Clear", self.on_clear_history)
        self.btn_clear_history.pack(side="right")
        self.btn_toggle_history = ToggleButton(
            history_header,
            "Show",
            lambda: self.controller.show_history,
            self.on_toggle_history
        )
        self.btn_toggle_history.pack(side="right", padx=(0, 4))

        self.history_frame = tk.Frame(self.sidebar, bg=COLORS["bg_secondary"])
        self.history_frame.pack(fill="x", padx=6)

        # --- Stats ---
        stats = tk.Frame(self.sidebar, bg=COLORS["bg_secondary"])
        stats.pack(side="bottom", fill="x", padx=6, pady=8)
        self._create_label(stats, "Positive rate", "ui", "text_faint").pack()
        self.lbl_positive_rate = self._create_label(stats, "0%", "stat", "text_accent")
        self.lbl_positive_rate.pack()

        counts_row = tk.Frame(stats, bg=COLORS["bg_secondary"])
        counts_row.pack()
        self.lbl_sentiment_counts = {}
        for sentiment in Sentiment:
            lbl = self._create_label(counts_row, f"{sentiment.value} 0", "ui", sentiment.value)
            lbl.pack(side="left", padx=4)
            self.lbl_sentiment_counts[sentiment] = lbl

    def _create_status_bar(self):
        """Нижняя панель статуса"""
        status_bar = tk.Frame(self, bg=COLORS["bg"])
        status_bar.pack(side="bottom", fill="x", pady=2)

        self.btn_toggle_haptics = ToggleButton(
            status_bar,
            "Haptics",
            lambda: self.cfg.get_bool("USER", "HapticFeedback", True),
            self.toggle_haptics
        )
        self.btn_toggle_haptics.pack(side="left", padx=(10, 5))

        self.lbl_status = tk.Label(
            status_bar,
            text="Ready",
            font=("Segoe UI", 7),
            bg=COLORS["bg"],
            fg=COLORS["text_faint"]
        )
        self.lbl_status.pack(side="right", padx=10)

    def _bind_events(self):
        """Привязка событий"""
        self.word_var.trace_add("write", self._on_input_changed)
        self.entry.bind("<Return>", self.on_submit)
        self.protocol("WM_DELETE_WINDOW", self.close_app)

    # ===== ДЕЙСТВИЯ ПОЛЬЗОВАТЕЛЯ =====

    def _on_input_changed(self, *args):
        if self._syncing_input:
            return
        self.controller.set_input(self.word_var.get())

    def on_submit(self, event=None):
        """
        Отправка слова.

        КРИТИЧНО: begin_submit/complete_submit выполняются в главном потоке,
        в рабочем потоке - только сетевой вызов.
        """
        if self.controller.loading:
            return

        query = self.controller.begin_submit(self.word_var.get())
        if query is None:
            return

        threading.Thread(
            target=self._worker_predict,
            args=(query,),
            daemon=True,
            name=f"Predict-{query.canonical}"
        ).start()

    def _worker_predict(self, query: Query):
        """Worker для сетевого вызова"""
        outcome = self.controller.request(query)
        self.after(0, lambda: self.controller.complete_submit(query, outcome))

    def on_choose_word(self, word: str):
        """Клик по примеру или недавнему слову"""
        if self.controller.loading:
            return
        self.controller.choose_word(word)
        self.entry.focus_set()
        self.entry.icursor("end")

    def on_clear_input(self, event=None):
        self.controller.clear_input()
        self.entry.focus_set()

    def on_copy(self, event=None):
        self.controller.copy_result()

    def on_clear_recent(self, event=None):
        self.controller.clear_recent_words()

    def on_clear_history(self, event=None):
        self.controller.clear_history()

    def on_toggle_history(self, event=None):
        snap = self.controller.toggle_history()
        self.cfg.set("USER", "ShowHistory", snap.show_history)

    def toggle_haptics(self, event=None):
        """Переключает вибро-отклик (сохраняется в config)"""
        current = self.cfg.get_bool("USER", "HapticFeedback", True)
        self.cfg.set("USER", "HapticFeedback", not current)

    # ===== RENDER =====

    def render(self, snap: SessionSnapshot):
        """Полная перерисовка по снапшоту состояния"""
        self._render_input(snap)
        self._render_result(snap)
        self._render_recent(snap)
        self._render_history(snap)
        self._render_flags(snap.flags)

        self.lbl_positive_rate.config(text=f"{snap.positive_rate}%")
        for sentiment, count in snap.sentiment_counts.items():
            self.lbl_sentiment_counts[sentiment].config(text=f"{sentiment.value} {count}")
        self.lbl_status.config(text="Analyzing..." if snap.loading else "Ready")

    def _render_input(self, snap: SessionSnapshot):
        if self.word_var.get() != snap.word:
            self._syncing_input = True
            try:
                self.word_var.set(snap.word)
            finally:
                self._syncing_input = False

        self.entry.config(state="disabled" if snap.loading else "normal")
        self.btn_submit.config(text="Analyzing..." if snap.loading else "Analyze Mood")
        self.btn_submit.set_enabled(snap.can_submit)

        if snap.word and not snap.loading:
            self.btn_clear_input.pack(side="left", padx=(4, 0))
        else:
            self.btn_clear_input.pack_forget()

    def _render_result(self, snap: SessionSnapshot):
        self.lbl_error.config(text=f"⚠️ {snap.error}" if snap.error else "")

        result = snap.result
        if result is None:
            self.result_frame.pack_forget()
            if not snap.error and not snap.loading:
                self.lbl_empty.pack(pady=30)
            else:
                self.lbl_empty.pack_forget()
            return

        self.lbl_empty.pack_forget()
        self.result_frame.pack(fill="x", pady=10)

        word = snap.word.strip()
        self.lbl_emoji.config(text=result.emoji)
        self.lbl_verdict.config(
            text=f"{word[:1].upper() + word[1:]} is {result.sentiment.value.capitalize()}",
            fg=COLORS[result.sentiment.value]
        )
        self._draw_confidence_bar(result.confidence, result.confidence_band)
        self.lbl_percent.config(text=f"{result.percent}%")

    def _draw_confidence_bar(self, confidence: float, band: str):
        self.bar.delete("all")
        width = int(CONFIDENCE_BAR_WIDTH * confidence)
        if width > 0:
            self.bar.create_rectangle(
                0, 0, width, CONFIDENCE_BAR_HEIGHT,
                fill=COLORS[f"band_{band}"],
                width=0
            )

    def _render_recent(self, snap: SessionSnapshot):
        for child in self.recent_frame.winfo_children():
            child.destroy()

        if not snap.recent_words:
            self._create_label(self.recent_frame, "No recent words", "ui", "text_faint").pack(anchor="w")
            return

        for word in snap.recent_words:
            btn = ActionButton(self.recent_frame, word, lambda e, w=word: self.on_choose_word(w), anchor="w")
            btn.pack(fill="x", pady=1)

    def _render_history(self, snap: SessionSnapshot):
        for child in self.history_frame.winfo_children():
            child.destroy()

        self.lbl_history_title.config(text=f"History ({len(snap.history)})")
        self.btn_toggle_history.config(text="Hide" if snap.show_history else "Show")
        self.btn_toggle_history.sync_state()

        if not snap.history:
            self._create_label(self.history_frame, "No history yet", "ui", "text_faint").pack(anchor="w")
            return

        if not snap.show_history:
            self._create_label(
                self.history_frame,
                f"View {len(snap.history)} history items",
                "ui",
                "text_faint"
            ).pack(anchor="w")
            return

        for entry in snap.history:
            row = tk.Frame(self.history_frame, bg=COLORS["bg_secondary"])
            row.pack(fill="x", pady=1)
            self._create_label(row, f"{entry.emoji} {entry.word}", "history_word").pack(side="left")
            self._create_label(row, entry.sentiment.value, "history_meta", entry.sentiment.value).pack(side="right")
            self._create_label(row, entry.timestamp, "history_meta", "text_faint").pack(side="right", padx=4)

    def _render_flags(self, flags: Optional[dict]):
        flags = flags or {}
        self.lbl_copied.config(text="✓ Copied!" if flags.get("copy_confirmation") else "")
        self.lbl_celebration.config(text="🎉 🎊 🎉 🎊 🎉" if flags.get("celebration") else "")

    # ===== WINDOW =====

    def save_geometry(self):
        """Сохраняет размер и позицию окна"""
        self.cfg.set("USER", "WindowX", self.winfo_x())
        self.cfg.set("USER", "WindowY", self.winfo_y())
        self.cfg.set("USER", "WindowWidth", self.winfo_width())
        self.cfg.set("USER", "WindowHeight", self.winfo_height())

    def close_app(self):
        """Закрытие приложения"""
        self.save_geometry()
        self.notifications.cancel_all()
        self.destroy()
