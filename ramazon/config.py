"""Application settings, with environment-variable overrides."""

import logging
import os

import pytz

logger = logging.getLogger(__name__)

APP_ID = "ramadan-pro-v2-final"
APP_NAME = "Ramazon Pro"

PROGRESS_KEY = f"{APP_ID}-progress"
CITY_KEY = f"{APP_ID}-city"

ALADHAN_BASE = "https://api.aladhan.com/v1"

# Calculation method: 3 = Muslim World League
# 2 = ISNA, 4 = Mecca, 5 = Karachi, 11 = Egypt, 15 = Dubai, 20 = Turkey
DEFAULT_METHOD = 3
DEFAULT_COUNTRY = "Uzbekistan"
DEFAULT_CITY = "Toshkent"
DEFAULT_TIMEZONE = "Asia/Tashkent"

CITIES = [
    "Toshkent",
    "Andijon",
    "Buxoro",
    "Farg'ona",
    "Guliston",
    "Jizzax",
    "Namangan",
    "Navoiy",
    "Nukus",
    "Qarshi",
    "Samarqand",
    "Termiz",
    "Urganch",
]

# The five daily prayers tracked on the checklist, in order.
PRAYER_NAMES = ["Bomdod", "Peshin", "Asr", "Shom", "Xufton"]

# Aladhan timing keys shown in the timings table, with their local labels.
TIMING_LABELS = {
    "Fajr": "Bomdod",
    "Sunrise": "Quyosh",
    "Dhuhr": "Peshin",
    "Asr": "Asr",
    "Maghrib": "Shom",
    "Isha": "Xufton",
}

DATA_DIR = os.path.join(os.path.expanduser("~"), ".ramazon")
STORAGE_FILE = "storage.json"

REMINDER_MINUTES = 10


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


def get_settings() -> dict:
    """
    Resolve runtime settings from the environment.

    Returns a dict with: city, country, method, timezone, data_dir.
    """
    return {
        "city": os.getenv("RAMAZON_CITY", DEFAULT_CITY),
        "country": os.getenv("RAMAZON_COUNTRY", DEFAULT_COUNTRY),
        "method": _env_int("RAMAZON_METHOD", DEFAULT_METHOD),
        "timezone": os.getenv("RAMAZON_TIMEZONE", DEFAULT_TIMEZONE),
        "data_dir": os.getenv("RAMAZON_DATA_DIR", DATA_DIR),
    }


def resolve_timezone(name: str):
    """Return the pytz timezone for name, or UTC if it is unknown."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown timezone %r, using UTC", name)
        return pytz.utc
