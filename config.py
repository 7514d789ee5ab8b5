"""Configuration constants for the decodey cryptogram engine."""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Difficulty levels
DIFFICULTIES = ('easy', 'medium', 'hard')
DEFAULT_DIFFICULTY = 'medium'

# Mistake budget per difficulty
MISTAKE_LIMITS = {
    'easy': 8,
    'medium': 5,
    'hard': 3
}

# Base score per difficulty
BASE_SCORES = {
    'easy': 500,
    'medium': 1000,
    'hard': 1500
}

# Time bonus buckets (elapsed seconds upper bound: multiplier)
TIME_BONUSES = {
    30: 1.5,
    60: 1.3,
    120: 1.2,
    180: 1.1,
    300: 1.0,
    600: 0.9
}
SLOW_TIME_BONUS = 0.8

# Mistake multipliers (mistake count: multiplier)
MISTAKE_MULTIPLIERS = {
    0: 1.2,
    1: 1.0,
    2: 0.85,
    3: 0.7,
    4: 0.55
}
HEAVY_MISTAKE_MULTIPLIER = 0.4  # at 5 mistakes
HEAVY_MISTAKE_STEP = 0.1  # lost per mistake beyond 5
MIN_MISTAKE_MULTIPLIER = 0.2

# Score shaping
SCORE_ROUNDING = 10
MIN_WIN_SCORE = 100

# Streak boost
STREAK_BOOST_PER_DAY = 0.05  # 5% per consecutive daily win
MAX_STREAK_DAYS = 20
MAX_BOOST_MULTIPLIER = 2.0

# Daily challenge
DAILY_DIFFICULTY = 'medium'
DAILY_ID_PREFIX = 'daily-'
DAILY_LAUNCH_DATE = os.getenv("DAILY_LAUNCH_DATE", "2024-12-17")

# Hints are refused by the caller unless more than this many mistakes remain
HINT_RESERVE = 1

# Game modes
MODE_DAILY = 'daily'
MODE_CUSTOM = 'custom'
GAME_MODES = (MODE_DAILY, MODE_CUSTOM)

# Quote difficulty estimation (unique letters, text length)
EASY_QUOTE_LIMITS = (12, 40)
MEDIUM_QUOTE_LIMITS = (16, 60)

# Storage and runtime
DATABASE_PATH = os.getenv("DATABASE_PATH", "./data/decodey.db")
PLAYER_ID = os.getenv("PLAYER_ID", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
