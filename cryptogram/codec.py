"""Flat record encoding for persisted sessions."""

import json
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Set

from cryptogram import cipher
from cryptogram.scoring import normalize_difficulty
from cryptogram.session import PuzzleSession, default_mistake_limit, utc_now


def _encode_time(value: datetime) -> str:
    return value.isoformat()


def _decode_time(value: Any) -> datetime:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except (TypeError, ValueError):
            return utc_now()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _letter_map(value: Any) -> Dict[str, str]:
    """Keep only single-letter to single-letter entries."""
    if not isinstance(value, dict):
        return {}
    return {
        key: item for key, item in value.items()
        if isinstance(key, str) and isinstance(item, str)
        and cipher.is_letter(key) and cipher.is_letter(item)
    }


def _letter_sets(value: Any) -> Dict[str, Set[str]]:
    if not isinstance(value, dict):
        return {}
    result = {}
    for key, items in value.items():
        if not (isinstance(key, str) and cipher.is_letter(key)):
            continue
        if not isinstance(items, (list, tuple, set)):
            continue
        letters = {item for item in items if isinstance(item, str) and cipher.is_letter(item)}
        if letters:
            result[key] = letters
    return result


def _int(value: Any, default: int = 0) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return default


def _bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _date_string(value: Any) -> Optional[str]:
    """Keep a yyyy-MM-dd string only if it names a real date."""
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        return None


def encode_session(session: PuzzleSession) -> Dict[str, Any]:
    """Serialize a session into a flat, JSON-friendly record."""
    return {
        'sessionId': session.session_id,
        'ciphertext': session.ciphertext,
        'plaintext': session.plaintext,
        'currentDisplay': session.current_display,
        'mapping': dict(session.decrypt_map),
        'reverseMapping': dict(session.encrypt_map),
        'revealState': dict(session.reveal_state),
        'incorrectAttempts': {
            key: sorted(letters) for key, letters in session.incorrect_attempts.items()
        },
        'selectedLetter': session.selected_letter,
        'mistakes': session.mistakes,
        'mistakeLimit': session.mistake_limit,
        'hasWon': session.has_won,
        'hasLost': session.has_lost,
        'difficulty': session.difficulty,
        'startedAt': _encode_time(session.started_at),
        'lastUpdatedAt': _encode_time(session.last_updated_at),
        'activeSeconds': session.active_seconds,
        'isDaily': session.is_daily,
        'isActive': session.is_active,
        'challengeDate': session.challenge_date,
        'author': session.author,
        'attribution': session.attribution,
    }


def decode_session(record: Dict[str, Any]) -> PuzzleSession:
    """
    Rebuild a session from a persisted record.

    Missing or malformed fields fall back to empty maps and zero counters
    so records written by older versions still load.
    """
    record = record if isinstance(record, dict) else {}
    decrypt_map = _letter_map(record.get('mapping'))
    encrypt_map = _letter_map(record.get('reverseMapping')) or cipher.invert_mapping(decrypt_map)
    difficulty = normalize_difficulty(record.get('difficulty'))
    selected = record.get('selectedLetter')
    mistake_limit = _int(record.get('mistakeLimit')) or default_mistake_limit(difficulty)

    return PuzzleSession(
        ciphertext=str(record.get('ciphertext') or ""),
        plaintext=str(record.get('plaintext') or ""),
        decrypt_map=decrypt_map,
        encrypt_map=encrypt_map,
        difficulty=difficulty,
        mistake_limit=mistake_limit,
        current_display=str(record.get('currentDisplay') or ""),
        reveal_state=_letter_map(record.get('revealState')),
        incorrect_attempts=_letter_sets(record.get('incorrectAttempts')),
        selected_letter=selected if isinstance(selected, str) and cipher.is_letter(selected) else None,
        mistakes=_int(record.get('mistakes')),
        has_won=_bool(record.get('hasWon'), False),
        has_lost=_bool(record.get('hasLost'), False),
        session_id=_optional_str(record.get('sessionId')),
        is_daily=_bool(record.get('isDaily'), False),
        is_active=_bool(record.get('isActive'), True),
        challenge_date=_date_string(record.get('challengeDate')),
        author=_optional_str(record.get('author')),
        attribution=_optional_str(record.get('attribution')),
        started_at=_decode_time(record.get('startedAt')),
        last_updated_at=_decode_time(record.get('lastUpdatedAt')),
        active_seconds=_int(record.get('activeSeconds')),
    )


def session_to_json(session: PuzzleSession) -> str:
    return json.dumps(encode_session(session), sort_keys=True)


def session_from_json(text: str) -> PuzzleSession:
    """Decode a JSON record; unreadable text yields an empty session."""
    try:
        record = json.loads(text) if text else {}
    except (TypeError, ValueError):
        record = {}
    return decode_session(record)
