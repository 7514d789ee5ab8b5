"""Session storage interface and in-memory implementation."""

from datetime import date
from typing import Dict, List, Optional, Protocol

from cryptogram.codec import decode_session, encode_session
from cryptogram.scoring import GameResult
from cryptogram.session import PuzzleSession, utc_now
from cryptogram.stats import update_stats


class SessionStore(Protocol):
    """Narrow repository used by the session manager."""

    async def save_session(self, session: PuzzleSession) -> None:
        """Insert or replace the record for session.session_id."""

    async def load_session(self, session_id: str) -> Optional[PuzzleSession]:
        """Load a session by id, or None."""

    async def get_active_session(self, is_daily: bool) -> Optional[PuzzleSession]:
        """The active session of a mode, or None."""

    async def deactivate_sessions(self, is_daily: bool, keep_id: Optional[str] = None) -> int:
        """Mark every active session of a mode inactive except keep_id."""

    async def record_result(self, player_id: str, result: GameResult) -> Dict:
        """Fold a finished game into the player's stats and return them."""

    async def get_player_stats(self, player_id: str) -> Optional[Dict]:
        """Player stats, or None if the player has not finished a game."""

    async def get_daily_win_dates(self) -> List[date]:
        """Dates of won daily sessions."""


class MemorySessionStore:
    """Keeps encoded session records in dictionaries."""

    def __init__(self):
        # Dictionary mapping session_id to encoded record
        self._records: Dict[str, Dict] = {}
        # Dictionary mapping player_id to stats
        self._stats: Dict[str, Dict] = {}

    async def save_session(self, session: PuzzleSession) -> None:
        if not session.session_id:
            raise ValueError("session must have an id before it is saved")
        self._records[session.session_id] = encode_session(session)

    async def load_session(self, session_id: str) -> Optional[PuzzleSession]:
        record = self._records.get(session_id)
        return decode_session(record) if record else None

    async def get_active_session(self, is_daily: bool) -> Optional[PuzzleSession]:
        for record in self._records.values():
            if record['isActive'] and record['isDaily'] == is_daily:
                return decode_session(record)
        return None

    async def deactivate_sessions(self, is_daily: bool, keep_id: Optional[str] = None) -> int:
        count = 0
        for session_id, record in self._records.items():
            if record['isActive'] and record['isDaily'] == is_daily and session_id != keep_id:
                record['isActive'] = False
                count += 1
        return count

    async def record_result(self, player_id: str, result: GameResult) -> Dict:
        stats = update_stats(self._stats.get(player_id), result, player_id)
        stats['last_played'] = utc_now().isoformat()
        self._stats[player_id] = stats
        return dict(stats)

    async def get_player_stats(self, player_id: str) -> Optional[Dict]:
        stats = self._stats.get(player_id)
        return dict(stats) if stats else None

    async def get_daily_win_dates(self) -> List[date]:
        dates = []
        for record in self._records.values():
            if record['isDaily'] and record['hasWon']:
                dates.append(decode_session(record).completion_date())
        return sorted(set(dates))
