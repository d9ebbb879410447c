"""Saharlik / iftar countdown and the background clock that drives it."""

import datetime
import logging
import threading
from collections import namedtuple

from ramazon.config import DEFAULT_COUNTRY, DEFAULT_METHOD
from ramazon.prayer_api import fetch_times_for_city, parse_clock

logger = logging.getLogger(__name__)

UNTIL_DAWN = "until_dawn"
UNTIL_SUNSET = "until_sunset"
PASSED = "passed"

WINDOW_LABELS = {
    UNTIL_DAWN: "Saharlikgacha",
    UNTIL_SUNSET: "Iftorlikgacha",
    PASSED: "Iftorlik bo'ldi",
}
NO_TIMES_LABEL = "Ramazon Mubarak"

TICK_SECONDS = 1.0

Window = namedtuple("Window", ["kind", "remaining_ms"])


def time_str_to_dt(time_str: str, now: datetime.datetime) -> datetime.datetime:
    """
    Place an 'HH:MM' clock time on the calendar date of now.

    Anything after the first five characters (e.g. ' (+05)') is ignored.
    The result carries now's tzinfo, so it compares with now directly.
    """
    hour, minute = parse_clock(time_str)
    return now.replace(hour=hour, minute=minute, second=0, microsecond=0)


def _millis(delta: datetime.timedelta) -> int:
    return delta // datetime.timedelta(milliseconds=1)


def compute_window(timings: dict | None, now: datetime.datetime) -> Window | None:
    """
    Work out which fast window now falls in.

    Before Fajr the window runs until the dawn cutoff, before Maghrib it runs
    until sunset, afterwards the cutoff has passed and remaining_ms is None.
    An instant equal to a boundary counts as past it. Returns None when no
    timings have been loaded yet.
    """
    if not timings:
        return None
    dawn = time_str_to_dt(timings["Fajr"], now)
    sunset = time_str_to_dt(timings["Maghrib"], now)

    if now < dawn:
        return Window(UNTIL_DAWN, _millis(dawn - now))
    if now < sunset:
        return Window(UNTIL_SUNSET, _millis(sunset - now))
    return Window(PASSED, None)


def window_label(window: Window | None) -> str:
    if window is None:
        return NO_TIMES_LABEL
    return WINDOW_LABELS[window.kind]


def format_remaining(ms: int | None) -> str:
    """Format milliseconds as HH:MM:SS. None or a non-positive value gives 00:00:00."""
    if not ms or ms < 0:
        return "00:00:00"
    h = ms // 3_600_000
    m = (ms % 3_600_000) // 60_000
    s = (ms % 60_000) // 1000
    return f"{h:02d}:{m:02d}:{s:02d}"


class Ticker:
    """Call callback every interval seconds on a daemon thread until stop()."""

    def __init__(self, callback, interval: float = TICK_SECONDS):
        self.callback = callback
        self.interval = interval
        self._stopped = threading.Event()
        self._thread = None

    def start(self) -> None:
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.callback()
            except Exception:
                logger.exception("Tick callback failed")

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self.interval + 1)
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stopped.is_set()


class CountdownClock:
    """
    Holds the prayer times for the selected city and computes the window.

    Each request() gets a generation number; a result that arrives after a
    newer request was issued is dropped. A failed fetch leaves the previous
    times in place.
    """

    def __init__(
        self,
        tz=None,
        country: str = DEFAULT_COUNTRY,
        method: int = DEFAULT_METHOD,
        fetch=fetch_times_for_city,
        on_update=None,
    ):
        self.tz = tz
        self.country = country
        self.method = method
        self._fetch = fetch
        self.on_update = on_update
        self.city = None
        self.date = None
        self.day = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def timings(self) -> dict | None:
        day = self.day
        return day["timings"] if day else None

    @property
    def hijri(self) -> dict | None:
        day = self.day
        return day["hijri"] if day else None

    def now(self) -> datetime.datetime:
        return datetime.datetime.now(self.tz) if self.tz else datetime.datetime.now()

    def request(self, city: str, date: datetime.date = None, background: bool = True) -> int:
        """Start fetching times for city. Returns the request's generation."""
        if date is None:
            date = self.now().date()
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.city = city
            self.date = date
        if background:
            threading.Thread(
                target=self._load, args=(generation, city, date), daemon=True
            ).start()
        else:
            self._load(generation, city, date)
        return generation

    def _load(self, generation: int, city: str, date: datetime.date) -> None:
        result = self._fetch(city, date, country=self.country, method=self.method)
        self.apply_times(generation, city, result)

    def apply_times(self, generation: int, city: str, result: dict | None) -> bool:
        """Install a fetch result. Returns False if it was empty or stale."""
        if result is None:
            return False
        with self._lock:
            if generation != self._generation:
                logger.info("Dropping stale prayer times for %s", city)
                return False
            self.day = result
        logger.info("Loaded prayer times for %s", city)
        if self.on_update:
            self.on_update(city, result)
        return True

    def window(self, now: datetime.datetime = None) -> Window | None:
        return compute_window(self.timings, now or self.now())
