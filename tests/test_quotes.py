import random
import unittest
from datetime import date, timedelta

import config
from data import quotes


class QuoteLibraryTests(unittest.TestCase):
    def test_every_quote_has_letters(self):
        for quote in quotes.get_all_quotes():
            self.assertTrue(any(ch in config.ALPHABET for ch in quote['text'].upper()))
            self.assertIn(quote['difficulty'], config.DIFFICULTIES)

    def test_estimate_difficulty(self):
        self.assertEqual(quotes.estimate_difficulty("Knowledge is power."), 'easy')
        self.assertEqual(
            quotes.estimate_difficulty("The quick brown fox jumps over the lazy dog."), 'hard'
        )

    def test_random_quote_matches_difficulty(self):
        rng = random.Random(1)
        for difficulty in config.DIFFICULTIES:
            if quotes.get_quotes_by_difficulty(difficulty):
                self.assertEqual(quotes.get_random_quote(difficulty, rng)['difficulty'], difficulty)

    def test_unknown_difficulty_falls_back(self):
        quote = quotes.get_random_quote("impossible", random.Random(2))
        self.assertIn(quote['text'], [q['text'] for q in quotes.QUOTES])


class DailyQuoteTests(unittest.TestCase):
    def test_same_day_same_quote(self):
        day = date(2025, 6, 1)
        self.assertEqual(quotes.get_daily_quote(day), quotes.get_daily_quote(day))

    def test_consecutive_days_cycle_through_library(self):
        start = date.fromisoformat(config.DAILY_LAUNCH_DATE)
        texts = [quotes.get_daily_quote(start + timedelta(days=n))['text'] for n in range(len(quotes.QUOTES))]
        self.assertEqual(len(set(texts)), len(quotes.QUOTES))
        self.assertEqual(texts, sorted(texts))

    def test_quote_source_dispatch(self):
        day = date(2025, 6, 1)
        self.assertEqual(quotes.get_quote(config.MODE_DAILY, day=day), quotes.get_daily_quote(day))
        custom = quotes.get_quote(config.MODE_CUSTOM, difficulty='easy', rng=random.Random(3))
        self.assertIsNotNone(custom)
