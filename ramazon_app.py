#!/usr/bin/env python3
"""
Ramazon Pro Desktop Widget
Always-on-top window for tracking the fast:
  - Countdown to saharlik (Fajr) or iftorlik (Maghrib) for the chosen city
  - Daily prayer checklist, Qur'on page counter and electronic tasbeh
  - Today's prayer times and Hijri date
  - Saharlik / iftorlik duas with copy and read-aloud
  - Desktop reminders 10 minutes before and at saharlik and iftorlik
"""

import argparse
import logging
import sys
import tkinter as tk

from ramazon.config import APP_NAME, CITIES, PRAYER_NAMES, TIMING_LABELS, get_settings
from ramazon.content import DUAS, HERO_QUOTE
from ramazon.context import AppContext
from ramazon.console import render_snapshot, run_live
from ramazon.conveniences import (
    cancel_timers,
    copy_to_clipboard,
    schedule_fast_reminders,
    speak,
    vibrate,
)
from ramazon.countdown import UNTIL_DAWN, format_remaining, window_label

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# Theme constants: emerald palette
# ──────────────────────────────────────────────────────────────────────────────
BG_DARK = "#064e3b"          # deep emerald hero background
BG_CARD = "#f8fafc"          # light card
BG_PANEL = "#ffffff"
ACCENT_GREEN = "#10b981"
ACCENT_LIGHT = "#6ee7b7"
ACCENT_ROSE = "#e11d48"
TEXT_WHITE = "#ffffff"
TEXT_DARK = "#1e293b"
TEXT_DIM = "#94a3b8"
TEXT_DAWN = "#7ec8e3"        # light blue for saharlik
TEXT_SUNSET = "#ffa07a"      # orange for iftorlik

FONT_BASE = ("Helvetica", 10, "bold")
FONT_SM = ("Helvetica", 8)
FONT_LG = ("Helvetica", 14, "bold")
FONT_XL = ("Helvetica", 28, "bold")
FONT_CLOCK = ("Courier", 22, "bold")
FONT_QUOTE = ("Helvetica", 11, "italic")

WINDOW_W = 480
WINDOW_H = 760

REFRESH_MS = 1000  # update UI every second
COPY_FEEDBACK_MS = 2000

TABS = [
    ("home", "Asosiy"),
    ("duas", "Duolar"),
    ("tasbeh", "Tasbeh"),
]


# ──────────────────────────────────────────────────────────────────────────────
# Main App
# ──────────────────────────────────────────────────────────────────────────────
class RamazonApp:
    def __init__(self, root: tk.Tk, ctx: AppContext):
        self.root = root
        self.ctx = ctx
        self._tick_id = None
        self._shown_date = None
        self._reminder_timers: list = []
        self._tabs: dict = {}
        self._tab_buttons: dict = {}
        self._prayer_buttons: dict = {}
        self._timing_labels: dict = {}
        self._copy_buttons: dict = {}

        ctx.clock.on_update = self._on_times_fetched

        self._setup_window()
        self._build_ui()
        self.show_tab("home")
        self._refresh_progress()
        ctx.start()
        self._tick()  # start the clock immediately

    # ──────────────────────────────────────────────────────────────────────
    # Window setup
    # ──────────────────────────────────────────────────────────────────────
    def _setup_window(self):
        root = self.root
        root.title(APP_NAME)
        root.configure(bg=BG_CARD)
        root.resizable(False, False)
        root.attributes("-topmost", True)  # always on top

        screen_w = root.winfo_screenwidth()
        screen_h = root.winfo_screenheight()
        x = screen_w - WINDOW_W - 40
        y = max(0, (screen_h - WINDOW_H) // 2)
        root.geometry(f"{WINDOW_W}x{WINDOW_H}+{x}+{y}")
        root.protocol("WM_DELETE_WINDOW", self.close)

    # ──────────────────────────────────────────────────────────────────────
    # UI construction
    # ──────────────────────────────────────────────────────────────────────
    def _build_ui(self):
        # ── tab bar ───────────────────────────────────────────────────────
        tab_bar = tk.Frame(self.root, bg=BG_PANEL)
        tab_bar.pack(fill=tk.X, side=tk.TOP)

        tk.Label(
            tab_bar, text=" 🌙 Ramazon Pro", font=FONT_LG, fg=BG_DARK, bg=BG_PANEL,
        ).pack(side=tk.LEFT, padx=6, pady=6)

        for tab_id, label in reversed(TABS):
            btn = tk.Button(
                tab_bar, text=label, font=FONT_SM, bd=0, cursor="hand2",
                command=lambda t=tab_id: self.show_tab(t),
            )
            btn.pack(side=tk.RIGHT, padx=3, pady=6)
            self._tab_buttons[tab_id] = btn

        body = tk.Frame(self.root, bg=BG_CARD)
        body.pack(fill=tk.BOTH, expand=True)
        for tab_id, _ in TABS:
            self._tabs[tab_id] = tk.Frame(body, bg=BG_CARD)

        self._build_home(self._tabs["home"])
        self._build_duas(self._tabs["duas"])
        self._build_tasbeh(self._tabs["tasbeh"])

    def _build_home(self, parent):
        # ── hero card ─────────────────────────────────────────────────────
        hero = tk.Frame(parent, bg=BG_DARK)
        hero.pack(fill=tk.X, padx=10, pady=(10, 6))

        top = tk.Frame(hero, bg=BG_DARK)
        top.pack(fill=tk.X, padx=10, pady=(8, 0))

        self.lbl_hijri = tk.Label(top, text="☪  …", font=FONT_SM, fg=ACCENT_LIGHT, bg=BG_DARK)
        self.lbl_hijri.pack(side=tk.LEFT)

        self.city_var = tk.StringVar(value=self.ctx.city)
        cities = CITIES if self.ctx.city in CITIES else [self.ctx.city] + CITIES
        city_menu = tk.OptionMenu(top, self.city_var, *cities, command=self._on_city_selected)
        city_menu.configure(font=FONT_SM, bg=BG_DARK, fg=ACCENT_LIGHT, bd=0, highlightthickness=0)
        city_menu.pack(side=tk.RIGHT)
        tk.Label(top, text="📍", font=FONT_SM, fg=ACCENT_LIGHT, bg=BG_DARK).pack(side=tk.RIGHT)

        tk.Label(
            hero, text=f"\"{HERO_QUOTE}\"", font=FONT_QUOTE, fg=TEXT_WHITE, bg=BG_DARK,
            wraplength=420, justify=tk.LEFT,
        ).pack(fill=tk.X, padx=10, pady=8)

        pages_row = tk.Frame(hero, bg=BG_DARK)
        pages_row.pack(fill=tk.X, padx=10)
        self.lbl_pages = tk.Label(pages_row, text="0 bet", font=FONT_XL, fg=TEXT_WHITE, bg=BG_DARK)
        self.lbl_pages.pack(side=tk.LEFT)
        tk.Button(
            pages_row, text=" + ", font=FONT_LG, fg=TEXT_WHITE, bg=ACCENT_GREEN, bd=0,
            cursor="hand2", command=lambda: self._adjust_pages(1),
        ).pack(side=tk.RIGHT, padx=3)
        tk.Button(
            pages_row, text=" − ", font=FONT_LG, fg=TEXT_WHITE, bg=BG_DARK, bd=0,
            cursor="hand2", command=lambda: self._adjust_pages(-1),
        ).pack(side=tk.RIGHT, padx=3)
        tk.Label(hero, text="BUGUN O'QILDI", font=FONT_SM, fg=TEXT_DIM, bg=BG_DARK).pack(anchor="w", padx=10)

        countdown_row = tk.Frame(hero, bg=BG_DARK)
        countdown_row.pack(fill=tk.X, padx=10, pady=(10, 10))
        self.lbl_countdown = tk.Label(
            countdown_row, text="00:00:00", font=FONT_CLOCK, fg=TEXT_WHITE, bg=BG_DARK,
        )
        self.lbl_countdown.pack(side=tk.LEFT)
        self.lbl_window = tk.Label(
            countdown_row, text="", font=FONT_BASE, fg=ACCENT_LIGHT, bg=BG_DARK,
        )
        self.lbl_window.pack(side=tk.RIGHT)

        # ── prayer checklist ──────────────────────────────────────────────
        prayers = tk.Frame(parent, bg=BG_PANEL)
        prayers.pack(fill=tk.X, padx=10, pady=6)
        head = tk.Frame(prayers, bg=BG_PANEL)
        head.pack(fill=tk.X, padx=8, pady=(6, 2))
        tk.Label(head, text="✔ Kunlik Namozlar", font=FONT_BASE, fg=TEXT_DARK, bg=BG_PANEL).pack(side=tk.LEFT)
        self.lbl_prayer_count = tk.Label(head, text="", font=FONT_SM, fg=TEXT_DIM, bg=BG_PANEL)
        self.lbl_prayer_count.pack(side=tk.RIGHT)

        row = tk.Frame(prayers, bg=BG_PANEL)
        row.pack(fill=tk.X, padx=8, pady=(0, 8))
        for name in PRAYER_NAMES:
            btn = tk.Button(
                row, text=name, font=FONT_SM, width=8, bd=0, cursor="hand2",
                command=lambda n=name: self._toggle_prayer(n),
            )
            btn.pack(side=tk.LEFT, expand=True, padx=2)
            self._prayer_buttons[name] = btn

        # ── tasbeh total ──────────────────────────────────────────────────
        tally = tk.Frame(parent, bg=BG_PANEL)
        tally.pack(fill=tk.X, padx=10, pady=6)
        tk.Label(tally, text="JAMI ZIKRLAR", font=FONT_SM, fg=TEXT_DIM, bg=BG_PANEL).pack(side=tk.LEFT, padx=8)
        tk.Button(
            tally, text="Davom etish ↗", font=FONT_SM, fg=TEXT_DIM, bg=BG_PANEL, bd=0,
            cursor="hand2", command=lambda: self.show_tab("tasbeh"),
        ).pack(side=tk.RIGHT, padx=8)
        self.lbl_tasbeh_total = tk.Label(tally, text="0", font=FONT_LG, fg=ACCENT_GREEN, bg=BG_PANEL)
        self.lbl_tasbeh_total.pack(side=tk.RIGHT, pady=6)

        # ── prayer times table ────────────────────────────────────────────
        table = tk.Frame(parent, bg=BG_PANEL)
        table.pack(fill=tk.X, padx=10, pady=6)
        tk.Label(table, text="🗓 Namoz Vaqtlari", font=FONT_BASE, fg=TEXT_DARK, bg=BG_PANEL).pack(anchor="w", padx=8, pady=(6, 2))
        grid = tk.Frame(table, bg=BG_PANEL)
        grid.pack(fill=tk.X, padx=8, pady=(0, 8))
        for col, (key, label) in enumerate(TIMING_LABELS.items()):
            fg = TEXT_DAWN if key == "Fajr" else (TEXT_SUNSET if key == "Maghrib" else TEXT_DARK)
            tk.Label(grid, text=label.upper(), font=FONT_SM, fg=TEXT_DIM, bg=BG_PANEL).grid(row=0, column=col, padx=6)
            lbl = tk.Label(grid, text="--:--", font=FONT_BASE, fg=fg, bg=BG_PANEL)
            lbl.grid(row=1, column=col, padx=6)
            self._timing_labels[key] = lbl

        # ── notification banner (hidden by default) ───────────────────────
        self.notif_frame = tk.Frame(parent, bg="#2d1b00")
        self.lbl_notif = tk.Label(
            self.notif_frame, text="", font=FONT_BASE, fg=ACCENT_LIGHT, bg="#2d1b00", wraplength=440,
        )
        self.lbl_notif.pack(pady=4)

    def _build_duas(self, parent):
        for dua in DUAS:
            card = tk.Frame(parent, bg=BG_PANEL)
            card.pack(fill=tk.X, padx=10, pady=8)

            head = tk.Frame(card, bg=BG_PANEL)
            head.pack(fill=tk.X, padx=8, pady=(8, 4))
            tk.Label(head, text=dua["title"], font=FONT_LG, fg=TEXT_DARK, bg=BG_PANEL).pack(side=tk.LEFT)

            copy_btn = tk.Button(
                head, text="⧉ Nusxa", font=FONT_SM, bd=0, cursor="hand2",
                command=lambda d=dua: self._copy_dua(d),
            )
            copy_btn.pack(side=tk.RIGHT, padx=2)
            self._copy_buttons[dua["key"]] = copy_btn
            tk.Button(
                head, text="🔊", font=FONT_SM, bd=0, cursor="hand2",
                command=lambda d=dua: speak(d["text"]),
            ).pack(side=tk.RIGHT, padx=2)

            tk.Label(
                card, text=f"\"{dua['text']}\"", font=FONT_QUOTE, fg=BG_DARK, bg=BG_PANEL,
                wraplength=430, justify=tk.LEFT,
            ).pack(fill=tk.X, padx=8, pady=4)
            tk.Label(
                card, text=f"Ma'nosi: {dua['meaning']}", font=FONT_SM, fg=TEXT_DIM, bg=BG_PANEL,
                wraplength=430, justify=tk.LEFT,
            ).pack(fill=tk.X, padx=8, pady=(0, 8))

    def _build_tasbeh(self, parent):
        tk.Label(parent, text="Elektron Tasbeh", font=FONT_LG, fg=TEXT_DARK, bg=BG_CARD).pack(pady=(30, 2))
        tk.Label(
            parent, text="ZIKR QILISHDA DAVOM ETING", font=FONT_SM, fg=TEXT_DIM, bg=BG_CARD,
        ).pack()

        self.btn_tasbeh = tk.Button(
            parent, text="0", font=("Helvetica", 64, "bold"), fg=ACCENT_GREEN, bg=BG_PANEL,
            width=5, height=2, bd=0, cursor="hand2", command=self._increment_tasbeh,
        )
        self.btn_tasbeh.pack(pady=30)

        tk.Button(
            parent, text="⟳ Nolga tushirish", font=FONT_BASE, fg=ACCENT_ROSE, bg=BG_PANEL, bd=0,
            cursor="hand2", command=self._reset_tasbeh,
        ).pack()

    def show_tab(self, tab_id: str):
        for name, frame in self._tabs.items():
            if name == tab_id:
                frame.pack(fill=tk.BOTH, expand=True)
            else:
                frame.pack_forget()
        for name, btn in self._tab_buttons.items():
            active = name == tab_id
            btn.config(bg=ACCENT_GREEN if active else BG_PANEL, fg=TEXT_WHITE if active else TEXT_DIM)

    # ──────────────────────────────────────────────────────────────────────
    # Progress actions
    # ──────────────────────────────────────────────────────────────────────
    def _toggle_prayer(self, name: str):
        self.ctx.tracker.toggle_prayer(name)
        self._refresh_progress()

    def _adjust_pages(self, delta: int):
        self.ctx.tracker.adjust_quran_pages(delta)
        self._refresh_progress()

    def _increment_tasbeh(self):
        self.ctx.tracker.increment_tasbeh()
        vibrate()
        self._refresh_progress()

    def _reset_tasbeh(self):
        self.ctx.tracker.reset_tasbeh()
        self._refresh_progress()

    def _refresh_progress(self):
        record = self.ctx.tracker.record
        self._shown_date = record.date
        self.lbl_pages.config(text=f"{record.quran_pages} bet")
        self.lbl_tasbeh_total.config(text=str(record.tasbeh_count))
        self.btn_tasbeh.config(text=str(record.tasbeh_count))
        self.lbl_prayer_count.config(
            text=f"{self.ctx.tracker.completed_prayers()}/{len(record.prayers)}"
        )
        for name, btn in self._prayer_buttons.items():
            done = record.prayers.get(name, False)
            btn.config(
                text=f"{'✔' if done else '○'} {name}",
                bg=ACCENT_LIGHT if done else BG_CARD,
                fg=BG_DARK if done else TEXT_DIM,
            )

    def _copy_dua(self, dua: dict):
        btn = self._copy_buttons[dua["key"]]
        if copy_to_clipboard(self.root, dua["text"]):
            btn.config(text="✔ Nusxalandi", fg=ACCENT_GREEN)
            self.root.after(COPY_FEEDBACK_MS, lambda: btn.config(text="⧉ Nusxa", fg=TEXT_DARK))

    # ──────────────────────────────────────────────────────────────────────
    # City + prayer times (fetch runs in background thread)
    # ──────────────────────────────────────────────────────────────────────
    def _on_city_selected(self, city: str):
        cancel_timers(self._reminder_timers)
        self.ctx.select_city(city)

    def _on_times_fetched(self, city: str, result: dict):
        """Called from the fetch thread; hand the update to the main thread."""
        self.root.after(0, self._on_times_loaded)

    def _on_times_loaded(self):
        timings = self.ctx.clock.timings
        if not timings:
            return
        for key, lbl in self._timing_labels.items():
            lbl.config(text=timings[key][:5])
        hijri = self.ctx.clock.hijri
        self.lbl_hijri.config(text=f"☪  {hijri['day']} {hijri['month_name']} {hijri['year']} H")

        cancel_timers(self._reminder_timers)
        self._reminder_timers.extend(
            schedule_fast_reminders(timings, self.ctx.clock.now(), callback=self._on_notification)
        )

    def _on_notification(self, title: str, message: str):
        """Called from a timer thread; schedule GUI update in main thread."""
        self.root.after(0, lambda: self._show_notif_banner(f"{title}\n{message}"))
        self.root.after(0, self.root.bell)

    def _show_notif_banner(self, text: str):
        self.lbl_notif.config(text=text)
        self.notif_frame.pack(fill=tk.X, padx=10, pady=4)
        self.root.after(15000, self.notif_frame.pack_forget)

    # ──────────────────────────────────────────────────────────────────────
    # Live countdown tick
    # ──────────────────────────────────────────────────────────────────────
    def _tick(self):
        """Called every second to roll the day over and update the countdown."""
        try:
            if self.ctx.roll_over():
                cancel_timers(self._reminder_timers)
            if self.ctx.tracker.record.date != self._shown_date:
                self._refresh_progress()

            window = self.ctx.clock.window()
            remaining = window.remaining_ms if window else None
            self.lbl_countdown.config(text=format_remaining(remaining))
            fg = ACCENT_LIGHT
            if window is not None:
                fg = TEXT_DAWN if window.kind == UNTIL_DAWN else TEXT_SUNSET
            self.lbl_window.config(text=f"🕒 {window_label(window)}", fg=fg)
        except Exception:
            logger.exception("Countdown tick failed")  # never stop the tick loop
        finally:
            self._tick_id = self.root.after(REFRESH_MS, self._tick)

    def close(self):
        if self._tick_id is not None:
            self.root.after_cancel(self._tick_id)
            self._tick_id = None
        cancel_timers(self._reminder_timers)
        self.root.destroy()


# ──────────────────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────────────────
def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Ramadan fast countdown and daily tracker")
    parser.add_argument("--city", help="city to fetch prayer times for (remembered)")
    parser.add_argument("--data-dir", help="directory for the saved progress")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--once", action="store_true", help="print today's summary and exit")
    mode.add_argument("--console", action="store_true", help="live countdown in the terminal")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream=sys.stderr)],
    )

    settings = get_settings()
    if args.data_dir:
        settings["data_dir"] = args.data_dir
    ctx = AppContext(settings, city=args.city)

    if args.once:
        ctx.start(background=False)
        print(render_snapshot(ctx))
        return
    if args.console:
        ctx.start(background=False)
        run_live(ctx)
        return

    root = tk.Tk()
    RamazonApp(root, ctx)
    root.mainloop()


if __name__ == "__main__":
    main()
