"""Best-effort side channels: notifications, speech, vibration, clipboard."""

import datetime
import logging
import threading

from plyer import notification, tts, vibrator

from ramazon.config import APP_NAME, REMINDER_MINUTES
from ramazon.countdown import time_str_to_dt

logger = logging.getLogger(__name__)

APP_ICON = ""  # Path to icon file; empty = default

VIBRATE_SECONDS = 0.05

REMINDER_EVENTS = {
    "Fajr": "Saharlik",
    "Maghrib": "Iftorlik",
}


def send_notification(title: str, message: str, timeout: int = 10) -> None:
    """Send a desktop notification via plyer (cross-platform)."""
    try:
        kwargs = dict(
            app_name=APP_NAME,
            title=title,
            message=message,
            timeout=timeout,
        )
        if APP_ICON:
            kwargs["app_icon"] = APP_ICON
        notification.notify(**kwargs)
    except Exception as exc:
        logger.debug("Notification unavailable: %s", exc)


def speak(text: str) -> None:
    """Read text aloud on a daemon thread so the caller never waits."""

    def _run():
        try:
            tts.speak(text)
        except Exception as exc:
            logger.debug("Text-to-speech unavailable: %s", exc)

    threading.Thread(target=_run, daemon=True).start()


def vibrate(seconds: float = VIBRATE_SECONDS) -> None:
    try:
        vibrator.vibrate(seconds)
    except Exception as exc:
        logger.debug("Vibration unavailable: %s", exc)


def copy_to_clipboard(widget, text: str) -> bool:
    """Put text on the clipboard through a tkinter widget. Returns success."""
    try:
        widget.clipboard_clear()
        widget.clipboard_append(text)
        widget.update_idletasks()
    except Exception as exc:
        logger.debug("Clipboard unavailable: %s", exc)
        return False
    return True


def notify_reminder(event_name: str, minutes: int, callback=None) -> None:
    """
    Notify that saharlik/iftorlik is N minutes away.
    Optionally calls callback(title, message).
    """
    title = f"🌙 {event_name}: {minutes} daqiqa qoldi"
    message = f"{event_name} vaqtiga {minutes} daqiqa qoldi."
    send_notification(title, message, timeout=15)
    if callback:
        callback(title, message)


def notify_event(event_name: str, callback=None) -> None:
    """
    Notify that saharlik/iftorlik time has arrived.
    Optionally calls callback(title, message).
    """
    title = f"🌙 {event_name} vaqti!"
    message = f"Hozir {event_name} vaqti. Ramazon Mubarak!"
    send_notification(title, message, timeout=30)
    if callback:
        callback(title, message)


def schedule_reminders(
    event_name: str,
    seconds_until_event: int,
    callback=None,
    remind_minutes: int = REMINDER_MINUTES,
) -> list:
    """
    Schedule a reminder remind_minutes before the event and an alert at it.

    Returns the started Timer objects so they can be cancelled.
    """
    timers = []

    delay = seconds_until_event - remind_minutes * 60
    if delay > 0:
        t = threading.Timer(
            delay,
            notify_reminder,
            args=(event_name, remind_minutes, callback),
        )
        t.daemon = True
        t.start()
        timers.append(t)

    if seconds_until_event > 0:
        t = threading.Timer(
            seconds_until_event,
            notify_event,
            args=(event_name, callback),
        )
        t.daemon = True
        t.start()
        timers.append(t)

    return timers


def schedule_fast_reminders(timings: dict, now: datetime.datetime, callback=None) -> list:
    """Schedule reminders for today's saharlik and iftorlik that are still ahead."""
    timers = []
    for key, event_name in REMINDER_EVENTS.items():
        event_dt = time_str_to_dt(timings[key], now)
        secs = int((event_dt - now).total_seconds())
        timers.extend(schedule_reminders(event_name, secs, callback))
    return timers


def cancel_timers(timers: list) -> None:
    for t in timers:
        t.cancel()
    timers.clear()
