import unittest
import uuid
from datetime import date

from cryptogram import daily


class DailyIdTests(unittest.TestCase):
    def test_same_date_gives_same_id(self):
        first = daily.daily_id("2025-01-01")
        second = daily.daily_id("2025-01-01")
        self.assertEqual(first, second)

    def test_date_and_string_agree(self):
        self.assertEqual(daily.daily_id(date(2025, 1, 1)), daily.daily_id("2025-01-01"))

    def test_id_is_a_uuid(self):
        value = daily.daily_id("2025-01-01")
        self.assertEqual(str(uuid.UUID(value)), value)

    def test_known_layout(self):
        # djb2 over "daily-2025-01-01", truncated to 64 bits
        value = 5381
        for byte in b"daily-2025-01-01":
            value = (value * 33 + byte) % 2 ** 64
        expected = "{:08x}-{:04x}-{:04x}-{:04x}-{:012x}".format(
            value >> 32, (value >> 16) & 0xFFFF, value & 0xFFFF, value >> 48, value & 0xFFFFFFFFFFFF
        )
        self.assertEqual(daily.daily_id("2025-01-01"), expected)

    def test_distinct_dates_do_not_collide(self):
        ids = {daily.daily_id(date.fromordinal(date(2024, 1, 1).toordinal() + n)) for n in range(730)}
        self.assertEqual(len(ids), 730)

    def test_daily_key(self):
        self.assertEqual(daily.daily_key(date(2025, 1, 1)), "daily-2025-01-01")


class DayIndexTests(unittest.TestCase):
    def test_days_since_launch(self):
        self.assertEqual(daily.day_index("2024-12-27", "2024-12-17"), 10)
        self.assertEqual(daily.day_index(date(2024, 12, 17), "2024-12-17"), 0)

    def test_before_launch_is_absolute(self):
        self.assertEqual(daily.day_index("2024-12-15", "2024-12-17"), 2)
