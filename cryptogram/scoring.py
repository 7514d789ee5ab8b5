"""Scoring calculations for solved cryptograms."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable

import config


@dataclass(frozen=True)
class GameResult:
    """Outcome of a finished session, as handed to stats and leaderboards."""
    has_won: bool
    mistakes: int
    elapsed_seconds: int
    score: int

    def as_record(self) -> Dict:
        return {
            'hasWon': self.has_won,
            'mistakes': self.mistakes,
            'elapsedSeconds': self.elapsed_seconds,
            'score': self.score,
        }


def normalize_difficulty(difficulty: str) -> str:
    """Map a difficulty name onto a known level, defaulting to medium."""
    value = (difficulty or "").strip().lower()
    return value if value in config.DIFFICULTIES else config.DEFAULT_DIFFICULTY


def base_score(difficulty: str) -> int:
    return config.BASE_SCORES[normalize_difficulty(difficulty)]


def time_bonus(elapsed_seconds: int) -> float:
    """Multiplier for solving speed; faster solves earn more."""
    for limit in sorted(config.TIME_BONUSES):
        if elapsed_seconds < limit:
            return config.TIME_BONUSES[limit]
    return config.SLOW_TIME_BONUS


def mistake_multiplier(mistakes: int) -> float:
    """Progressive penalty for mistakes (wrong guesses and hints)."""
    if mistakes in config.MISTAKE_MULTIPLIERS:
        return config.MISTAKE_MULTIPLIERS[mistakes]
    penalty = config.HEAVY_MISTAKE_STEP * (mistakes - 5)
    return max(config.HEAVY_MISTAKE_MULTIPLIER - penalty, config.MIN_MISTAKE_MULTIPLIER)


def calculate_score(difficulty: str, elapsed_seconds: int, mistakes: int) -> int:
    """
    Calculate the score for a won game.

    Args:
        difficulty: Difficulty level (easy, medium, hard)
        elapsed_seconds: Whole seconds between start and last move
        mistakes: Wrong guesses plus hints used

    Returns:
        Score rounded down to a multiple of 10, never below the win minimum
    """
    raw = base_score(difficulty) * time_bonus(elapsed_seconds) * mistake_multiplier(mistakes)
    # Trim float noise so 1799.9999999 does not drop a whole step
    rounded = int(round(raw, 6) // config.SCORE_ROUNDING) * config.SCORE_ROUNDING
    return max(config.MIN_WIN_SCORE, rounded)


def streak_boost_multiplier(streak: int) -> float:
    """Score multiplier earned by a run of consecutive daily wins."""
    days = min(max(streak, 0), config.MAX_STREAK_DAYS)
    return min(1.0 + days * config.STREAK_BOOST_PER_DAY, config.MAX_BOOST_MULTIPLIER)


def boost_percentage(streak: int) -> int:
    """Boost as a whole percentage for display (0-100)."""
    return int(round((streak_boost_multiplier(streak) - 1.0) * 100))


def apply_streak_boost(score: int, streak: int) -> int:
    """Apply the daily streak boost on top of an unboosted score."""
    return score * (100 + boost_percentage(streak)) // 100


def calculate_daily_streak(win_dates: Iterable[date], today: date) -> int:
    """Count consecutive days, ending today, that have a daily win."""
    won = set(win_dates)
    streak = 0
    expected = today
    while expected in won:
        streak += 1
        expected -= timedelta(days=1)
    return streak
