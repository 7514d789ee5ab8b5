"""Database operations manager."""

import logging
from datetime import date
from typing import Dict, List, Optional

import aiosqlite

import config
from cryptogram.codec import session_from_json, session_to_json
from cryptogram.scoring import GameResult
from cryptogram.session import PuzzleSession, utc_now
from cryptogram.stats import update_stats

logger = logging.getLogger(__name__)

STATS_COLUMNS = (
    'player_id',
    'games_played',
    'games_won',
    'total_score',
    'current_streak',
    'best_streak',
    'average_mistakes',
    'average_time',
    'last_played',
)


class DatabaseManager:
    """SQLite-backed session store."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or config.DATABASE_PATH

    def _connect(self) -> aiosqlite.Connection:
        """Get database connection."""
        return aiosqlite.connect(self.db_path)

    # Session operations
    async def save_session(self, session: PuzzleSession) -> None:
        """Insert or update a session record."""
        if not session.session_id:
            raise ValueError("session must have an id before it is saved")

        completed = session.completion_date()
        completed_on = completed.isoformat() if completed else None
        async with self._connect() as db:
            await db.execute(
                """
                INSERT INTO sessions
                (session_id, is_daily, is_active, has_won, has_lost, difficulty,
                 mistakes, mistake_limit, completed_on, started_at, last_updated_at, record)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(session_id) DO UPDATE SET
                    is_active = excluded.is_active,
                    has_won = excluded.has_won,
                    has_lost = excluded.has_lost,
                    mistakes = excluded.mistakes,
                    mistake_limit = excluded.mistake_limit,
                    completed_on = excluded.completed_on,
                    last_updated_at = excluded.last_updated_at,
                    record = excluded.record
                """,
                (
                    session.session_id,
                    session.is_daily,
                    session.is_active,
                    session.has_won,
                    session.has_lost,
                    session.difficulty,
                    session.mistakes,
                    session.mistake_limit,
                    completed_on,
                    session.started_at.isoformat(),
                    session.last_updated_at.isoformat(),
                    session_to_json(session),
                )
            )
            await db.commit()

    async def load_session(self, session_id: str) -> Optional[PuzzleSession]:
        """Load a session by its ID."""
        async with self._connect() as db:
            async with db.execute(
                "SELECT record, is_active FROM sessions WHERE session_id = ?",
                (session_id,)
            ) as cursor:
                row = await cursor.fetchone()
        if not row:
            return None
        return self._row_to_session(row)

    async def get_active_session(self, is_daily: bool) -> Optional[PuzzleSession]:
        """Get the active session for a game mode."""
        async with self._connect() as db:
            async with db.execute(
                """
                SELECT record, is_active FROM sessions
                WHERE is_daily = ? AND is_active = 1
                ORDER BY last_updated_at DESC
                LIMIT 1
                """,
                (is_daily,)
            ) as cursor:
                row = await cursor.fetchone()
        if not row:
            return None
        return self._row_to_session(row)

    async def deactivate_sessions(self, is_daily: bool, keep_id: Optional[str] = None) -> int:
        """Mark active sessions of a mode inactive, except keep_id."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                UPDATE sessions
                SET is_active = 0
                WHERE is_daily = ? AND is_active = 1 AND session_id != ?
                """,
                (is_daily, keep_id or "")
            )
            await db.commit()
            count = cursor.rowcount
        if count:
            logger.debug("Deactivated %d %s session(s)", count, "daily" if is_daily else "custom")
        return count

    @staticmethod
    def _row_to_session(row) -> PuzzleSession:
        # The column is authoritative: deactivate_sessions does not rewrite records
        session = session_from_json(row[0])
        session.is_active = bool(row[1])
        return session

    # Player operations
    async def record_result(self, player_id: str, result: GameResult) -> Dict:
        """Update player statistics after a finished game."""
        stats = update_stats(await self.get_player_stats(player_id), result, player_id)
        stats['last_played'] = utc_now().isoformat()

        async with self._connect() as db:
            await db.execute(
                f"""
                INSERT OR REPLACE INTO player_stats ({', '.join(STATS_COLUMNS)})
                VALUES ({', '.join('?' for _ in STATS_COLUMNS)})
                """,
                tuple(stats[column] for column in STATS_COLUMNS)
            )
            await db.commit()

        return stats

    async def get_player_stats(self, player_id: str) -> Optional[Dict]:
        """Get player statistics."""
        async with self._connect() as db:
            async with db.execute(
                f"SELECT {', '.join(STATS_COLUMNS)} FROM player_stats WHERE player_id = ?",
                (player_id,)
            ) as cursor:
                row = await cursor.fetchone()
        if not row:
            return None
        return dict(zip(STATS_COLUMNS, row))

    async def get_daily_win_dates(self) -> List[date]:
        """Get the completion dates of won daily challenges."""
        async with self._connect() as db:
            async with db.execute(
                """
                SELECT DISTINCT completed_on FROM sessions
                WHERE is_daily = 1 AND has_won = 1 AND completed_on IS NOT NULL
                ORDER BY completed_on
                """
            ) as cursor:
                rows = await cursor.fetchall()
        return [date.fromisoformat(row[0]) for row in rows]
