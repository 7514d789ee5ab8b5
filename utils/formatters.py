"""Text formatting helpers."""

from cryptogram.session import PuzzleSession


def format_time(seconds: int) -> str:
    """Format whole seconds as m:ss."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


def format_score(score: int) -> str:
    """Format score with commas."""
    return f"{score:,}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format percentage."""
    return f"{value:.{decimals}f}%"


def format_mistakes(session: PuzzleSession) -> str:
    """Mistake counter such as ``2/5``."""
    return f"{session.mistakes}/{session.mistake_limit}"


def format_board(session: PuzzleSession) -> str:
    """Ciphertext over the current display, one pair of lines per puzzle."""
    lines = [session.ciphertext, session.current_display]
    wrong = []
    for letter in sorted(session.incorrect_attempts):
        wrong.append(f"{letter}≠{''.join(sorted(session.incorrect_attempts[letter]))}")
    if wrong:
        lines.append("Ruled out: " + " ".join(wrong))
    return "\n".join(lines)
