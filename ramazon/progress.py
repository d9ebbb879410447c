"""Day-scoped observance record: prayers, Quran pages and tasbeh tally."""

import datetime
import json
import logging
from dataclasses import dataclass, field

from ramazon.config import PRAYER_NAMES, PROGRESS_KEY

logger = logging.getLogger(__name__)


@dataclass
class DailyRecord:
    date: str
    prayers: dict = field(default_factory=dict)
    quran_pages: int = 0
    tasbeh_count: int = 0

    @classmethod
    def zeroed(cls, date: str, prayer_names=PRAYER_NAMES) -> "DailyRecord":
        return cls(date=date, prayers={name: False for name in prayer_names})

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "prayers": dict(self.prayers),
            "tasbeh": self.tasbeh_count,
            "quran_page": self.quran_pages,
        }

    @classmethod
    def from_dict(cls, data: dict, prayer_names=PRAYER_NAMES) -> "DailyRecord":
        """
        Build a record from its stored form.

        Raises ValueError if a field is missing or has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ValueError("record must be a JSON object")
        try:
            date = data["date"]
            prayers = data["prayers"]
            tasbeh = data["tasbeh"]
            pages = data["quran_page"]
        except KeyError as exc:
            raise ValueError(f"record is missing {exc.args[0]!r}") from None

        if not isinstance(date, str) or not date:
            raise ValueError("date must be a non-empty string")
        if not isinstance(prayers, dict) or set(prayers) != set(prayer_names):
            raise ValueError("prayers do not match the configured prayer names")
        if not all(isinstance(v, bool) for v in prayers.values()):
            raise ValueError("prayer flags must be booleans")
        for name, value in (("tasbeh", tasbeh), ("quran_page", pages)):
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer")

        return cls(
            date=date,
            prayers={name: prayers[name] for name in prayer_names},
            quran_pages=pages,
            tasbeh_count=tasbeh,
        )

    def dumps(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def loads(cls, text: str, prayer_names=PRAYER_NAMES) -> "DailyRecord":
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ValueError(f"record is not valid JSON: {exc}") from None
        return cls.from_dict(data, prayer_names)


class DailyTracker:
    """
    Sole owner of the live DailyRecord.

    Every mutation writes the whole record back to the store before
    returning.
    """

    def __init__(self, store, tz=None, prayer_names=PRAYER_NAMES, today=None):
        self.store = store
        self.tz = tz
        self.prayer_names = list(prayer_names)
        self._today = today or self._today_in_tz
        self.record = self.load()

    def _today_in_tz(self) -> str:
        now = datetime.datetime.now(self.tz) if self.tz else datetime.datetime.now()
        return now.date().isoformat()

    def load(self) -> DailyRecord:
        """Return today's persisted record, or a zeroed one for today."""
        today = self._today()
        raw = self.store.get_item(PROGRESS_KEY)
        if raw is None:
            return DailyRecord.zeroed(today, self.prayer_names)
        try:
            record = DailyRecord.loads(raw, self.prayer_names)
        except ValueError as exc:
            logger.warning("Discarding stored progress: %s", exc)
            self.store.remove_item(PROGRESS_KEY)
            return DailyRecord.zeroed(today, self.prayer_names)
        if record.date != today:
            logger.info("Stored progress is from %s, starting %s fresh", record.date, today)
            return DailyRecord.zeroed(today, self.prayer_names)
        return record

    def save(self) -> None:
        self.store.set_item(PROGRESS_KEY, self.record.dumps())

    def ensure_today(self) -> bool:
        """Roll over to a zeroed record if the day changed. Returns True on rollover."""
        today = self._today()
        if self.record.date == today:
            return False
        logger.info("Day changed (%s -> %s), resetting progress", self.record.date, today)
        self.record = DailyRecord.zeroed(today, self.prayer_names)
        self.save()
        return True

    def toggle_prayer(self, name: str) -> None:
        self.ensure_today()
        if name not in self.record.prayers:
            logger.debug("Ignoring toggle for unknown prayer %r", name)
            return
        self.record.prayers[name] = not self.record.prayers[name]
        self.save()

    def adjust_quran_pages(self, delta: int) -> None:
        self.ensure_today()
        self.record.quran_pages = max(0, self.record.quran_pages + delta)
        self.save()

    def increment_tasbeh(self) -> None:
        self.ensure_today()
        self.record.tasbeh_count += 1
        self.save()

    def reset_tasbeh(self) -> None:
        self.ensure_today()
        self.record.tasbeh_count = 0
        self.save()

    def completed_prayers(self) -> int:
        return sum(1 for done in self.record.prayers.values() if done)
