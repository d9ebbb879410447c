"""Fetch prayer times and Hijri date for a city from the Aladhan API."""

import datetime
import logging

import requests

from ramazon.config import ALADHAN_BASE, DEFAULT_COUNTRY, DEFAULT_METHOD

logger = logging.getLogger(__name__)

TIMING_NAMES = ["Fajr", "Sunrise", "Dhuhr", "Asr", "Maghrib", "Isha"]

REQUEST_TIMEOUT = 10


def parse_clock(time_str: str) -> tuple:
    """
    Parse an 'HH:MM' clock time into (hour, minute).

    Anything after the first five characters (e.g. ' (+05)') is ignored.
    Raises ValueError if the value is not a valid time of day.
    """
    if not isinstance(time_str, str):
        raise ValueError(f"clock time must be a string, got {time_str!r}")
    hour, minute = map(int, time_str.strip()[:5].split(":"))
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"clock time out of range: {time_str!r}")
    return hour, minute


def _request_day(city: str, date: datetime.date, country: str, method: int) -> dict:
    """
    Request one day of timings for a city.

    Returns a dict with:
        timings: {name: "HH:MM"} for the six entries in TIMING_NAMES
        hijri: {day, month_name, month_ar, year}
        gregorian: {date_str, weekday}
    Raises requests.RequestException, ValueError or KeyError on failure.
    """
    date_str = date.strftime("%d-%m-%Y")
    url = f"{ALADHAN_BASE}/timingsByCity/{date_str}"
    params = {
        "city": city,
        "country": country,
        "method": method,
    }
    resp = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
    resp.raise_for_status()
    body = resp.json()
    if body.get("code") != 200:
        raise ValueError(f"Aladhan API error: {body.get('status')}")

    data = body["data"]
    raw_timings = data["timings"]
    timings = {name: raw_timings[name] for name in TIMING_NAMES}
    for value in timings.values():
        parse_clock(value)

    hijri_data = data["date"]["hijri"]
    hijri = {
        "day": hijri_data["day"],
        "month_name": hijri_data["month"]["en"],
        "month_ar": hijri_data["month"]["ar"],
        "year": hijri_data["year"],
    }

    greg_data = data["date"].get("gregorian", {})
    gregorian = {
        "date_str": greg_data.get("date", date_str),
        "weekday": greg_data.get("weekday", {}).get("en", ""),
    }

    return {"timings": timings, "hijri": hijri, "gregorian": gregorian}


def fetch_times_for_city(
    city: str,
    date: datetime.date = None,
    country: str = DEFAULT_COUNTRY,
    method: int = DEFAULT_METHOD,
) -> dict | None:
    """
    Fetch the day's prayer times for city.

    Returns the same dict as _request_day, or None if the request or the
    response parsing failed. Failures are logged, never raised or retried.
    """
    if date is None:
        date = datetime.date.today()
    try:
        return _request_day(city, date, country, method)
    except requests.RequestException as exc:
        logger.warning("Could not reach the prayer-time service for %s: %s", city, exc)
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.warning("Malformed prayer-time response for %s: %r", city, exc)
    return None
