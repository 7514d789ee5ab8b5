"""Manages the active daily and custom sessions."""

import logging
import random
import uuid
from datetime import date
from typing import Callable, Dict, Optional

import config
from cryptogram import cipher
from cryptogram.daily import daily_id
from cryptogram.scoring import (
    GameResult,
    apply_streak_boost,
    calculate_daily_streak,
    normalize_difficulty,
)
from cryptogram.session import PuzzleSession, normalize_letter
from data.quotes import get_quote
from database.store import SessionStore

logger = logging.getLogger(__name__)

QuoteSource = Callable[..., Optional[Dict]]


class QuoteUnavailableError(Exception):
    """Raised when no usable quote can be found for a new session."""


def can_use_hint(session: PuzzleSession) -> bool:
    """Hints are only offered while more than the reserve mistake remains."""
    return (
        not session.is_terminal
        and bool(session.unrevealed_letters())
        and session.mistake_limit - session.mistakes > config.HINT_RESERVE
    )


def _check_mode(mode: str) -> str:
    if mode not in config.GAME_MODES:
        raise ValueError(f"Unknown game mode: {mode!r}")
    return mode


class SessionManager:
    """
    Owns one current session per game mode on top of a session store.

    Every mutating call persists the session once the engine has applied
    the move. Finished sessions are scored, recorded in the player's stats
    and released from their mode's active slot.
    """

    def __init__(
        self,
        store: SessionStore,
        quote_source: QuoteSource = get_quote,
        rng: Optional[random.Random] = None,
        player_id: str = config.PLAYER_ID,
        today: Optional[Callable[[], date]] = None,
    ):
        self.store = store
        self.quote_source = quote_source
        self.rng = rng or random.Random()
        self.player_id = player_id
        self._today = today or date.today
        # Dictionary mapping mode to its current session
        self._sessions: Dict[str, PuzzleSession] = {}
        # Results of the last finished game per mode
        self.last_results: Dict[str, GameResult] = {}

    def today(self) -> date:
        return self._today()

    def get_session(self, mode: str) -> Optional[PuzzleSession]:
        """Get the current session for a mode, if one is loaded."""
        return self._sessions.get(_check_mode(mode))

    async def load_or_create(self, mode: str, difficulty: Optional[str] = None) -> PuzzleSession:
        """Resume the mode's session or start a new one."""
        if _check_mode(mode) == config.MODE_DAILY:
            session = await self._load_or_create_daily()
        else:
            session = await self._load_or_create_custom(difficulty)
        self._sessions[mode] = session
        return session

    async def _load_or_create_daily(self) -> PuzzleSession:
        session_id = daily_id(self.today())
        session = await self.store.load_session(session_id)

        if session is None:
            return await self._create_session(config.MODE_DAILY, config.DAILY_DIFFICULTY, session_id)

        if session.is_terminal:
            # Completed - just load for display
            logger.info("Daily %s already finished (%s)", session_id, session.status)
            return session

        await self.store.deactivate_sessions(True, keep_id=session_id)
        if not session.is_active:
            session.is_active = True
            await self.store.save_session(session)
        logger.info("Resumed daily %s", session_id)
        return session

    async def _load_or_create_custom(self, difficulty: Optional[str]) -> PuzzleSession:
        session = await self.store.get_active_session(False)
        if session is not None:
            if not session.is_terminal:
                logger.info("Resumed custom session %s", session.session_id)
                return session
            # Finished but still marked active
            session.is_active = False
            await self.store.save_session(session)

        difficulty = normalize_difficulty(difficulty or config.DEFAULT_DIFFICULTY)
        return await self._create_session(config.MODE_CUSTOM, difficulty, str(uuid.uuid4()))

    async def start_new(self, mode: str, difficulty: Optional[str] = None) -> PuzzleSession:
        """Start a fresh session, replacing the mode's current one."""
        if _check_mode(mode) == config.MODE_DAILY:
            return await self.load_or_create(mode)
        difficulty = normalize_difficulty(difficulty or config.DEFAULT_DIFFICULTY)
        session = await self._create_session(mode, difficulty, str(uuid.uuid4()))
        self._sessions[mode] = session
        return session

    async def _create_session(self, mode: str, difficulty: str, session_id: str) -> PuzzleSession:
        is_daily = mode == config.MODE_DAILY
        quote = self.quote_source(mode, day=self.today(), difficulty=difficulty, rng=self.rng)
        if not quote or not any(cipher.is_letter(ch) for ch in quote.get('text', '').upper()):
            raise QuoteUnavailableError(f"No quote available for {mode} game")

        await self.store.deactivate_sessions(is_daily)

        session = PuzzleSession.new(
            quote['text'],
            difficulty=difficulty,
            is_daily=is_daily,
            rng=self.rng,
            author=quote.get('author'),
            attribution=quote.get('attribution'),
            challenge_date=self.today().isoformat() if is_daily else None,
        )
        session.session_id = session_id
        session.is_active = True
        await self.store.save_session(session)
        logger.info("Created %s session %s (%s)", mode, session_id, difficulty)
        return session

    def _require(self, mode: str) -> PuzzleSession:
        session = self.get_session(mode)
        if session is None:
            raise LookupError(f"No {mode} session loaded")
        return session

    # Player actions

    def select_letter(self, mode: str, cipher_letter: str) -> Optional[str]:
        """Select a ciphertext letter; returns the resulting selection."""
        session = self._require(mode)
        session.select_letter(cipher_letter)
        return session.selected_letter

    async def guess(self, mode: str, cipher_letter: str, plain_letter: str) -> bool:
        """Select cipher_letter and guess plain_letter for it in one move."""
        session = self._require(mode)
        if session.selected_letter != normalize_letter(cipher_letter):
            session.select_letter(cipher_letter)
        was_correct = session.guess(plain_letter)
        await self._persist(mode, session)
        return was_correct

    async def hint(self, mode: str) -> bool:
        """Reveal a letter if the hint policy allows it."""
        session = self._require(mode)
        if not can_use_hint(session):
            logger.debug("Hint refused for %s session %s", mode, session.session_id)
            return False
        revealed = session.hint(self.rng)
        await self._persist(mode, session)
        return revealed

    def tick(self, mode: str) -> bool:
        """Count one second of play time unless the session has finished."""
        session = self.get_session(mode)
        if session is None or session.is_terminal:
            return False
        session.active_seconds += 1
        return True

    async def save(self, mode: str) -> None:
        """Persist the current session, e.g. when the play timer stops."""
        session = self.get_session(mode)
        if session is not None:
            await self.store.save_session(session)

    async def abandon(self, mode: str) -> Optional[PuzzleSession]:
        """Give up on the current session: it is marked lost and inactive."""
        session = self.get_session(mode)
        if session is None:
            return None
        if not session.is_terminal:
            session.has_lost = True
            session.selected_letter = None
        session.is_active = False
        await self.store.save_session(session)
        del self._sessions[mode]
        logger.info("Abandoned %s session %s", mode, session.session_id)
        return session

    async def _persist(self, mode: str, session: PuzzleSession) -> None:
        if session.is_terminal and session.is_active:
            await self._finish(mode, session)
        else:
            await self.store.save_session(session)

    async def _finish(self, mode: str, session: PuzzleSession) -> GameResult:
        result = session.result()
        session.is_active = False
        await self.store.save_session(session)
        await self.store.record_result(self.player_id, result)
        self.last_results[mode] = result
        logger.info(
            "Finished %s session %s: %s, %d mistakes, score %d",
            mode, session.session_id, session.status, result.mistakes, result.score
        )
        return result

    # Scoring

    async def daily_streak(self) -> int:
        return calculate_daily_streak(await self.store.get_daily_win_dates(), self.today())

    async def streak_boosted_score(self, result: GameResult) -> int:
        """Apply the current daily streak boost to a result's score."""
        if not result.has_won:
            return 0
        return apply_streak_boost(result.score, await self.daily_streak())
