"""Application state holder built once at startup and passed to the UI."""

import datetime
import logging

from ramazon.config import CITY_KEY, get_settings, resolve_timezone
from ramazon.countdown import CountdownClock
from ramazon.prayer_api import fetch_times_for_city
from ramazon.progress import DailyTracker
from ramazon.storage import LocalStore

logger = logging.getLogger(__name__)


class AppContext:
    """
    Owns the store, the daily tracker, the countdown clock and the
    selected city.

    City precedence: the explicit city argument, then the last city saved
    in the store, then the configured default.
    """

    def __init__(self, settings: dict = None, city: str = None, store=None,
                 fetch=fetch_times_for_city, today=None):
        self.settings = settings or get_settings()
        self.tz = resolve_timezone(self.settings["timezone"])
        self.store = store if store is not None else LocalStore(self.settings["data_dir"])
        self.tracker = DailyTracker(self.store, self.tz, today=today)
        self.clock = CountdownClock(
            tz=self.tz,
            country=self.settings["country"],
            method=self.settings["method"],
            fetch=fetch,
        )
        saved = self.store.get_item(CITY_KEY)
        self.city = city or saved or self.settings["city"]
        if city and city != saved:
            self.store.set_item(CITY_KEY, city)

    def _record_day(self) -> datetime.date:
        self.tracker.ensure_today()
        return datetime.date.fromisoformat(self.tracker.record.date)

    def start(self, background: bool = True) -> None:
        """Fetch times for the current city."""
        self.clock.request(self.city, self._record_day(), background=background)

    def select_city(self, city: str, background: bool = True) -> None:
        """Switch city, remember it, and fetch its times."""
        if not city:
            return
        logger.info("City selected: %s", city)
        self.city = city
        self.store.set_item(CITY_KEY, city)
        self.clock.request(city, self._record_day(), background=background)

    def roll_over(self, background: bool = True) -> bool:
        """
        Move to a new day if the date changed.

        The record is reset by the tracker; the timings are refetched
        whenever they were requested for a day other than the record's.
        Returns True if a refetch was started.
        """
        today = self._record_day()
        if self.clock.date is None or self.clock.date == today:
            return False
        logger.info("New day %s, refetching prayer times for %s", today, self.city)
        self.clock.request(self.city, today, background=background)
        return True
