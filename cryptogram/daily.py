"""Deterministic identity for daily challenges."""

import uuid
from datetime import date, datetime
from typing import Union

import config

DayLike = Union[date, str]

_HASH_MASK = 0xFFFFFFFFFFFFFFFF


def _as_date_string(day: DayLike) -> str:
    if isinstance(day, datetime):
        day = day.date()
    if isinstance(day, date):
        return day.strftime("%Y-%m-%d")
    return str(day).strip()


def _as_date(day: DayLike) -> date:
    if isinstance(day, datetime):
        return day.date()
    if isinstance(day, date):
        return day
    return datetime.strptime(str(day).strip(), "%Y-%m-%d").date()


def today_string() -> str:
    """Get the local calendar date as yyyy-MM-dd."""
    return date.today().strftime("%Y-%m-%d")


def daily_key(day: DayLike) -> str:
    """Human-readable key for a daily challenge, e.g. ``daily-2025-01-01``."""
    return f"{config.DAILY_ID_PREFIX}{_as_date_string(day)}"


def _djb2(data: bytes) -> int:
    value = 5381
    for byte in data:
        value = ((value << 5) + value + byte) & _HASH_MASK
    return value


def daily_id(day: DayLike) -> str:
    """
    Derive the canonical session id for a calendar date.

    A 64-bit djb2 hash of the daily key is spread over the fields of a
    UUID, so every device computes the same id for the same date without
    talking to a server.

    Args:
        day: A date, or a string formatted yyyy-MM-dd

    Returns:
        Lower-case UUID string
    """
    value = _djb2(daily_key(day).encode("utf-8"))
    text = "{:08x}-{:04x}-{:04x}-{:04x}-{:012x}".format(
        (value >> 32) & 0xFFFFFFFF,
        (value >> 16) & 0xFFFF,
        value & 0xFFFF,
        (value >> 48) & 0xFFFF,
        value & 0xFFFFFFFFFFFF,
    )
    return str(uuid.UUID(text))


def day_index(day: DayLike, launch_date: DayLike = None) -> int:
    """Days between the launch date and day (absolute, so pre-launch days still work)."""
    launch = _as_date(launch_date or config.DAILY_LAUNCH_DATE)
    return abs((_as_date(day) - launch).days)
