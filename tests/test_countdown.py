"""Tests for the countdown module."""

import datetime
import threading
import unittest
from unittest.mock import MagicMock, patch

import pytz

from ramazon.countdown import (
    NO_TIMES_LABEL,
    PASSED,
    UNTIL_DAWN,
    UNTIL_SUNSET,
    CountdownClock,
    Ticker,
    compute_window,
    format_remaining,
    time_str_to_dt,
    window_label,
)
from ramazon.prayer_api import fetch_times_for_city

TIMINGS = {
    "Fajr": "05:00",
    "Sunrise": "06:20",
    "Dhuhr": "12:30",
    "Asr": "16:00",
    "Maghrib": "19:00",
    "Isha": "20:20",
}

DAY = {"timings": TIMINGS, "hijri": {"day": "1", "month_name": "Ramadan", "month_ar": "", "year": "1447"}}


def _at(hour, minute=0, second=0, tz=pytz.utc):
    return tz.localize(datetime.datetime(2026, 3, 1, hour, minute, second))


class TestTimeStrToDt(unittest.TestCase):
    def test_uses_date_and_tz_of_now(self):
        tz = pytz.timezone("Asia/Tashkent")
        now = _at(10, tz=tz)
        dt = time_str_to_dt("18:15", now)
        self.assertEqual((dt.hour, dt.minute, dt.second), (18, 15, 0))
        self.assertEqual(dt.date(), now.date())
        self.assertEqual(dt.utcoffset(), now.utcoffset())

    def test_ignores_timezone_suffix(self):
        dt = time_str_to_dt("05:40 (+05)", _at(1))
        self.assertEqual((dt.hour, dt.minute), (5, 40))


class TestComputeWindow(unittest.TestCase):
    def test_before_dawn(self):
        window = compute_window(TIMINGS, _at(4, 59, 59))
        self.assertEqual(window.kind, UNTIL_DAWN)
        self.assertEqual(window.remaining_ms, 1000)

    def test_exactly_dawn_counts_as_past(self):
        window = compute_window(TIMINGS, _at(5))
        self.assertEqual(window.kind, UNTIL_SUNSET)
        self.assertEqual(window.remaining_ms, 14 * 3600 * 1000)

    def test_before_sunset(self):
        window = compute_window(TIMINGS, _at(18, 30))
        self.assertEqual(window.kind, UNTIL_SUNSET)
        self.assertEqual(window.remaining_ms, 30 * 60 * 1000)

    def test_exactly_sunset_has_passed(self):
        window = compute_window(TIMINGS, _at(19))
        self.assertEqual(window.kind, PASSED)
        self.assertIsNone(window.remaining_ms)

    def test_late_evening_has_passed(self):
        self.assertEqual(compute_window(TIMINGS, _at(23, 59)).kind, PASSED)

    def test_none_without_timings(self):
        self.assertIsNone(compute_window(None, _at(12)))
        self.assertIsNone(compute_window({}, _at(12)))

    def test_naive_now(self):
        window = compute_window(TIMINGS, datetime.datetime(2026, 3, 1, 3, 0))
        self.assertEqual(window.kind, UNTIL_DAWN)
        self.assertEqual(window.remaining_ms, 2 * 3600 * 1000)


class TestFormatRemaining(unittest.TestCase):
    def test_formats_hours_minutes_seconds(self):
        self.assertEqual(format_remaining(3_661_000), "01:01:01")

    def test_absent_duration(self):
        self.assertEqual(format_remaining(None), "00:00:00")

    def test_zero_and_negative(self):
        self.assertEqual(format_remaining(0), "00:00:00")
        self.assertEqual(format_remaining(-5000), "00:00:00")

    def test_truncates_milliseconds(self):
        self.assertEqual(format_remaining(59_999), "00:00:59")

    def test_hours_beyond_a_day(self):
        self.assertEqual(format_remaining(25 * 3_600_000), "25:00:00")


class TestWindowLabel(unittest.TestCase):
    def test_labels(self):
        self.assertEqual(window_label(compute_window(TIMINGS, _at(3))), "Saharlikgacha")
        self.assertEqual(window_label(compute_window(TIMINGS, _at(12))), "Iftorlikgacha")
        self.assertEqual(window_label(compute_window(TIMINGS, _at(20))), "Iftorlik bo'ldi")
        self.assertEqual(window_label(None), NO_TIMES_LABEL)


class TestTicker(unittest.TestCase):
    def test_calls_back_until_stopped(self):
        ticked = threading.Event()
        callback = MagicMock(side_effect=lambda: ticked.set())
        ticker = Ticker(callback, interval=0.01)
        ticker.start()
        self.assertTrue(ticked.wait(2))
        ticker.stop()
        self.assertFalse(ticker.running)
        calls = callback.call_count
        threading.Event().wait(0.05)
        self.assertEqual(callback.call_count, calls)

    def test_survives_callback_errors(self):
        calls = []
        done = threading.Event()

        def callback():
            calls.append(1)
            if len(calls) >= 2:
                done.set()
            raise RuntimeError("boom")

        ticker = Ticker(callback, interval=0.01)
        with self.assertLogs("ramazon.countdown", level="ERROR"):
            ticker.start()
            self.assertTrue(done.wait(2))
            ticker.stop()


class TestCountdownClock(unittest.TestCase):
    def test_request_loads_times(self):
        fetch = MagicMock(return_value=DAY)
        on_update = MagicMock()
        clock = CountdownClock(tz=pytz.utc, country="Uzbekistan", method=3, fetch=fetch, on_update=on_update)

        clock.request("Toshkent", datetime.date(2026, 3, 1), background=False)

        fetch.assert_called_once_with("Toshkent", datetime.date(2026, 3, 1), country="Uzbekistan", method=3)
        self.assertEqual(clock.timings, TIMINGS)
        self.assertEqual(clock.hijri["year"], "1447")
        on_update.assert_called_once_with("Toshkent", DAY)

    def test_failed_fetch_keeps_previous_times(self):
        fetch = MagicMock(side_effect=[DAY, None])
        clock = CountdownClock(tz=pytz.utc, fetch=fetch)

        clock.request("Toshkent", background=False)
        clock.request("Nukus", background=False)

        self.assertEqual(clock.timings, TIMINGS)
        self.assertEqual(clock.city, "Nukus")

    @patch("ramazon.prayer_api.requests.get")
    def test_malformed_times_keep_previous_times(self, mock_get):
        body = {"code": 200, "data": {"timings": dict(TIMINGS, Fajr=""), "date": {"hijri": {}}}}
        mock_get.return_value = MagicMock(**{"json.return_value": body})
        first_day = datetime.date(2026, 3, 1)

        def fetch(city, date, **kwargs):
            if date == first_day:
                return DAY
            return fetch_times_for_city(city, date, **kwargs)

        clock = CountdownClock(tz=pytz.utc, fetch=fetch)
        clock.request("Toshkent", first_day, background=False)
        with self.assertLogs("ramazon.prayer_api", level="WARNING"):
            clock.request("Toshkent", datetime.date(2026, 3, 2), background=False)

        self.assertEqual(clock.timings, TIMINGS)
        self.assertEqual(clock.date, datetime.date(2026, 3, 2))
        self.assertEqual(clock.window(_at(4, 59, 59)).kind, UNTIL_DAWN)

    def test_stale_result_is_dropped(self):
        clock = CountdownClock(tz=pytz.utc, fetch=MagicMock(return_value=None))
        first = clock.request("Toshkent", background=False)
        second = clock.request("Buxoro", background=False)

        other = {"timings": dict(TIMINGS, Fajr="06:00"), "hijri": DAY["hijri"]}
        self.assertTrue(clock.apply_times(second, "Buxoro", other))
        self.assertFalse(clock.apply_times(first, "Toshkent", DAY))
        self.assertEqual(clock.timings["Fajr"], "06:00")

    def test_window_without_times(self):
        clock = CountdownClock(tz=pytz.utc, fetch=MagicMock(return_value=None))
        self.assertIsNone(clock.window(_at(12)))

    def test_window_with_times(self):
        clock = CountdownClock(tz=pytz.utc, fetch=MagicMock(return_value=DAY))
        clock.request("Toshkent", background=False)
        self.assertEqual(clock.window(_at(4, 59, 59)).kind, UNTIL_DAWN)

    def test_background_request(self):
        loaded = threading.Event()
        clock = CountdownClock(
            tz=pytz.utc,
            fetch=MagicMock(return_value=DAY),
            on_update=lambda city, result: loaded.set(),
        )
        clock.request("Toshkent")
        self.assertTrue(loaded.wait(2))
        self.assertEqual(clock.timings, TIMINGS)


if __name__ == "__main__":
    unittest.main()
