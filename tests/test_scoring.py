import unittest
from datetime import date, timedelta

from cryptogram import scoring


class TimeBonusTests(unittest.TestCase):
    def test_buckets(self):
        cases = [
            (1, 1.5), (29, 1.5), (30, 1.3), (59, 1.3), (60, 1.2), (119, 1.2),
            (120, 1.1), (179, 1.1), (180, 1.0), (299, 1.0), (300, 0.9),
            (599, 0.9), (600, 0.8), (10_000, 0.8),
        ]
        for elapsed, expected in cases:
            with self.subTest(elapsed=elapsed):
                self.assertEqual(scoring.time_bonus(elapsed), expected)


class MistakeMultiplierTests(unittest.TestCase):
    def test_fixed_steps(self):
        for mistakes, expected in [(0, 1.2), (1, 1.0), (2, 0.85), (3, 0.7), (4, 0.55)]:
            with self.subTest(mistakes=mistakes):
                self.assertEqual(scoring.mistake_multiplier(mistakes), expected)

    def test_heavy_penalty_has_a_floor(self):
        self.assertAlmostEqual(scoring.mistake_multiplier(5), 0.4)
        self.assertAlmostEqual(scoring.mistake_multiplier(6), 0.3)
        self.assertAlmostEqual(scoring.mistake_multiplier(7), 0.2)
        self.assertAlmostEqual(scoring.mistake_multiplier(12), 0.2)


class CalculateScoreTests(unittest.TestCase):
    def test_fast_perfect_medium(self):
        self.assertEqual(scoring.calculate_score("medium", 10, 0), 1800)

    def test_hard_two_mistakes(self):
        self.assertEqual(scoring.calculate_score("hard", 150, 2), 1400)

    def test_easy_slow_game(self):
        # 500 * 0.8 * 0.55 = 220
        self.assertEqual(scoring.calculate_score("easy", 900, 4), 220)

    def test_minimum_score(self):
        # 500 * 0.8 * 0.2 = 80, lifted to the minimum
        self.assertEqual(scoring.calculate_score("easy", 900, 9), 100)

    def test_unknown_difficulty_scores_as_medium(self):
        self.assertEqual(scoring.calculate_score("HARDCORE", 10, 0), 1800)
        self.assertEqual(scoring.calculate_score("Hard", 10, 0), 2700)

    def test_scores_are_multiples_of_ten_and_at_least_minimum(self):
        for difficulty in ("easy", "medium", "hard"):
            for elapsed in (1, 45, 90, 150, 240, 450, 700):
                for mistakes in range(10):
                    score = scoring.calculate_score(difficulty, elapsed, mistakes)
                    self.assertGreaterEqual(score, 100)
                    self.assertEqual(score % 10, 0)


class StreakBoostTests(unittest.TestCase):
    def test_multiplier_grows_and_caps(self):
        self.assertEqual(scoring.streak_boost_multiplier(0), 1.0)
        self.assertAlmostEqual(scoring.streak_boost_multiplier(4), 1.2)
        self.assertAlmostEqual(scoring.streak_boost_multiplier(20), 2.0)
        self.assertAlmostEqual(scoring.streak_boost_multiplier(45), 2.0)

    def test_percentage(self):
        self.assertEqual(scoring.boost_percentage(0), 0)
        self.assertEqual(scoring.boost_percentage(3), 15)
        self.assertEqual(scoring.boost_percentage(30), 100)

    def test_apply_boost(self):
        self.assertEqual(scoring.apply_streak_boost(1800, 0), 1800)
        self.assertEqual(scoring.apply_streak_boost(1400, 3), 1610)
        self.assertEqual(scoring.apply_streak_boost(100, 3), 115)
        self.assertEqual(scoring.apply_streak_boost(1000, 25), 2000)

    def test_daily_streak(self):
        today = date(2025, 3, 10)
        wins = [today, today - timedelta(days=1), today - timedelta(days=2), today - timedelta(days=5)]
        self.assertEqual(scoring.calculate_daily_streak(wins, today), 3)

    def test_daily_streak_needs_todays_win(self):
        today = date(2025, 3, 10)
        self.assertEqual(scoring.calculate_daily_streak([today - timedelta(days=1)], today), 0)
        self.assertEqual(scoring.calculate_daily_streak([], today), 0)
