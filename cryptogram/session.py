"""Cryptogram puzzle session state."""

import random
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Set

import config
from cryptogram import cipher
from cryptogram.scoring import GameResult, calculate_score, normalize_difficulty

STATUS_IN_PROGRESS = 'in_progress'
STATUS_WON = 'won'
STATUS_LOST = 'lost'


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def default_mistake_limit(difficulty: str) -> int:
    """Mistake budget for a difficulty level."""
    return config.MISTAKE_LIMITS[normalize_difficulty(difficulty)]


def normalize_letter(letter: Optional[str]) -> Optional[str]:
    if not letter:
        return None
    letter = letter.strip().upper()
    return letter if cipher.is_letter(letter) else None


@dataclass
class PuzzleSession:
    """
    One cryptogram being played.

    Mutated in place through select_letter, guess and hint until it is won
    or lost; after that only score and stats may be read from it. The
    session does no locking; callers keep a single writer per session.
    """
    ciphertext: str
    plaintext: str
    decrypt_map: Dict[str, str]  # cipher -> plain
    encrypt_map: Dict[str, str]  # plain -> cipher

    difficulty: str = config.DEFAULT_DIFFICULTY
    mistake_limit: int = 5
    current_display: str = ""

    # Player progress
    reveal_state: Dict[str, str] = field(default_factory=dict)
    incorrect_attempts: Dict[str, Set[str]] = field(default_factory=dict)
    selected_letter: Optional[str] = None
    mistakes: int = 0
    has_won: bool = False
    has_lost: bool = False

    # Identity
    session_id: Optional[str] = None
    is_daily: bool = False
    is_active: bool = True
    challenge_date: Optional[str] = None  # yyyy-MM-dd of a daily challenge

    # Quote info
    author: Optional[str] = None
    attribution: Optional[str] = None

    # Timestamps
    started_at: datetime = field(default_factory=utc_now)
    last_updated_at: datetime = field(default_factory=utc_now)
    active_seconds: int = 0

    def __post_init__(self):
        if not self.current_display:
            self.update_current_display()

    @classmethod
    def new(
        cls,
        plaintext: str,
        difficulty: str = config.DEFAULT_DIFFICULTY,
        is_daily: bool = False,
        rng: Optional[random.Random] = None,
        mistake_limit: Optional[int] = None,
        author: Optional[str] = None,
        attribution: Optional[str] = None,
        challenge_date: Optional[str] = None,
    ) -> 'PuzzleSession':
        """Encrypt plaintext and start a fresh session for it."""
        difficulty = normalize_difficulty(difficulty)
        generated = cipher.generate(plaintext, rng)
        now = utc_now()
        return cls(
            ciphertext=generated.ciphertext,
            plaintext=(plaintext or "").upper(),
            decrypt_map=generated.decrypt_map,
            encrypt_map=generated.encrypt_map,
            difficulty=difficulty,
            mistake_limit=mistake_limit if mistake_limit is not None else default_mistake_limit(difficulty),
            is_daily=is_daily,
            author=author,
            attribution=attribution,
            challenge_date=challenge_date,
            started_at=now,
            last_updated_at=now,
        )

    # State

    @property
    def is_terminal(self) -> bool:
        return self.has_won or self.has_lost

    @property
    def status(self) -> str:
        if self.has_won:
            return STATUS_WON
        if self.has_lost:
            return STATUS_LOST
        return STATUS_IN_PROGRESS

    @property
    def remaining_mistakes(self) -> int:
        return max(0, self.mistake_limit - self.mistakes)

    def is_revealed(self, cipher_letter: str) -> bool:
        return cipher_letter in self.reveal_state

    def cipher_letters(self) -> Set[str]:
        """Distinct letters of the ciphertext."""
        return {ch for ch in self.ciphertext if cipher.is_letter(ch)}

    def unrevealed_letters(self) -> List[str]:
        return sorted(self.cipher_letters() - set(self.reveal_state))

    def update_current_display(self) -> None:
        self.current_display = cipher.apply_mapping(self.ciphertext, self.reveal_state)

    # Player actions

    def select_letter(self, cipher_letter: str) -> None:
        """
        Select a ciphertext letter to guess next.

        Selecting a solved letter, or the letter already selected, clears
        the selection instead. Letters that do not occur in the ciphertext
        cannot be selected.
        """
        letter = normalize_letter(cipher_letter)
        if letter is None or letter not in self.ciphertext:
            self.selected_letter = None
        elif self.is_terminal or self.is_revealed(letter):
            self.selected_letter = None
        elif letter == self.selected_letter:
            self.selected_letter = None
        else:
            self.selected_letter = letter

    def guess(self, plain_letter: str) -> bool:
        """
        Guess the plaintext letter behind the selected ciphertext letter.

        Returns:
            True if the guess was correct. Guessing with nothing selected,
            on a finished game, or repeating a known-wrong guess changes
            nothing and returns False.
        """
        selected = self.selected_letter
        guessed = normalize_letter(plain_letter)
        if selected is None or guessed is None or self.is_terminal:
            return False
        if guessed in self.incorrect_attempts.get(selected, set()):
            return False

        is_correct = self.decrypt_map.get(selected) == guessed
        if is_correct:
            self.reveal_state[selected] = guessed
            self.update_current_display()
            self._check_win()
        else:
            self.incorrect_attempts.setdefault(selected, set()).add(guessed)
            self.mistakes += 1
            self._check_loss()

        self.selected_letter = None
        self.last_updated_at = utc_now()
        return is_correct

    def hint(self, rng: Optional[random.Random] = None) -> bool:
        """
        Reveal one random unsolved letter at the cost of a mistake.

        The loss check runs before the win check: a hint that completes the
        puzzle with the last mistake in the budget loses the game. Keeping a
        mistake in reserve is the caller's policy, not enforced here.
        """
        # Letters without a known answer (damaged records) cannot be hinted
        remaining = [letter for letter in self.unrevealed_letters() if letter in self.decrypt_map]
        if not remaining or self.is_terminal:
            return False

        letter = (rng or random).choice(remaining)
        self.reveal_state[letter] = self.decrypt_map[letter]
        self.update_current_display()
        self.mistakes += 1
        if not self._check_loss():
            self._check_win()

        self.selected_letter = None
        self.last_updated_at = utc_now()
        return True

    def _check_loss(self) -> bool:
        if self.mistakes >= self.mistake_limit:
            self.has_lost = True
        return self.has_lost

    def _check_win(self) -> bool:
        self.has_won = self.cipher_letters() == set(self.reveal_state)
        return self.has_won

    # Reporting

    def letter_frequency(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for ch in self.ciphertext:
            if cipher.is_letter(ch):
                counts[ch] = counts.get(ch, 0) + 1
        return counts

    def unique_cipher_letters(self) -> List[str]:
        """Distinct ciphertext letters in order of first appearance."""
        seen = []
        for ch in self.ciphertext:
            if cipher.is_letter(ch) and ch not in seen:
                seen.append(ch)
        return seen

    def unique_solution_letters(self) -> List[str]:
        return sorted({ch for ch in self.plaintext if cipher.is_letter(ch)})

    def completion_percentage(self) -> float:
        total = len(self.cipher_letters())
        return len(self.reveal_state) / total if total else 0.0

    def elapsed_seconds(self) -> int:
        """Whole seconds from start to the last move, at least 1."""
        return max(1, int((self.last_updated_at - self.started_at).total_seconds()))

    def completion_date(self) -> Optional[date]:
        """
        Calendar day a finished session counts for.

        Dailies count for their challenge date. Sessions without one use the
        local date of the last move, the same calendar as ``date.today()``.
        """
        if not self.is_terminal:
            return None
        if self.challenge_date:
            return date.fromisoformat(self.challenge_date)
        return self.last_updated_at.astimezone().date()

    def calculate_score(self) -> int:
        """Unboosted score; 0 unless the game was won."""
        if not self.has_won:
            return 0
        return calculate_score(self.difficulty, self.elapsed_seconds(), self.mistakes)

    def result(self) -> GameResult:
        return GameResult(
            has_won=self.has_won,
            mistakes=self.mistakes,
            elapsed_seconds=self.elapsed_seconds(),
            score=self.calculate_score(),
        )


def new_session(plaintext: str, difficulty: str = config.DEFAULT_DIFFICULTY,
                is_daily: bool = False, **kwargs) -> PuzzleSession:
    """Create a session for plaintext; see PuzzleSession.new."""
    return PuzzleSession.new(plaintext, difficulty=difficulty, is_daily=is_daily, **kwargs)
