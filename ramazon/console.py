"""Plain-text rendering of the current state, for the terminal modes."""

import sys
import threading

from ramazon.config import TIMING_LABELS
from ramazon.countdown import Ticker, format_remaining, window_label


def countdown_line(ctx, now=None) -> str:
    window = ctx.clock.window(now)
    remaining = window.remaining_ms if window else None
    return f"{window_label(window)}  {format_remaining(remaining)}"


def render_snapshot(ctx, now=None) -> str:
    """Multi-line summary: city, Hijri date, countdown, timings and today's record."""
    now = now or ctx.clock.now()
    record = ctx.tracker.record
    lines = [f"📍 {ctx.city}  📅 {now.strftime('%Y-%m-%d %H:%M:%S')}"]

    hijri = ctx.clock.hijri
    if hijri:
        lines.append(f"☪  {hijri['day']} {hijri['month_name']} {hijri['year']} H")

    lines.append(countdown_line(ctx, now))

    timings = ctx.clock.timings
    if timings:
        for key, label in TIMING_LABELS.items():
            lines.append(f"  {label:<8} {timings[key]}")
    else:
        lines.append("  Namoz vaqtlari yuklanmadi")

    done = ctx.tracker.completed_prayers()
    marks = " ".join(
        f"[{'x' if checked else ' '}] {name}" for name, checked in record.prayers.items()
    )
    lines.append(f"Namozlar {done}/{len(record.prayers)}: {marks}")
    lines.append(f"Qur'on: {record.quran_pages} bet   Tasbeh: {record.tasbeh_count}")
    return "\n".join(lines)


def run_live(ctx, stream=None, stop_event=None) -> None:
    """
    Rewrite the countdown line once a second until interrupted.

    stop_event (a threading.Event) ends the loop as Ctrl+C does.
    """
    stream = stream or sys.stdout
    stop_event = stop_event or threading.Event()

    def _draw():
        ctx.roll_over()
        stream.write("\r" + countdown_line(ctx) + " " * 4)
        stream.flush()

    ticker = Ticker(_draw)
    _draw()
    ticker.start()
    try:
        while not stop_event.wait(0.5):
            pass
    except KeyboardInterrupt:
        pass
    finally:
        ticker.stop()
        stream.write("\n")
