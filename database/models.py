"""Database models and schemas."""

# SQL schemas for all tables

CREATE_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS sessions (
    session_id TEXT PRIMARY KEY,
    is_daily BOOLEAN NOT NULL DEFAULT FALSE,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    has_won BOOLEAN NOT NULL DEFAULT FALSE,
    has_lost BOOLEAN NOT NULL DEFAULT FALSE,
    difficulty TEXT NOT NULL,
    mistakes INTEGER DEFAULT 0,
    mistake_limit INTEGER NOT NULL,
    completed_on DATE,
    started_at TIMESTAMP NOT NULL,
    last_updated_at TIMESTAMP NOT NULL,
    record TEXT NOT NULL
);
"""

CREATE_PLAYER_STATS_TABLE = """
CREATE TABLE IF NOT EXISTS player_stats (
    player_id TEXT PRIMARY KEY,
    games_played INTEGER DEFAULT 0,
    games_won INTEGER DEFAULT 0,
    total_score INTEGER DEFAULT 0,
    current_streak INTEGER DEFAULT 0,
    best_streak INTEGER DEFAULT 0,
    average_mistakes REAL DEFAULT 0.0,
    average_time REAL DEFAULT 0.0,
    last_played TIMESTAMP
);
"""

# Indexes for performance
CREATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_sessions_active ON sessions(is_daily, is_active);",
    "CREATE INDEX IF NOT EXISTS idx_sessions_daily_wins ON sessions(is_daily, has_won, completed_on);",
]
