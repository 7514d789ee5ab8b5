"""Built-in quote library for custom games and daily challenges."""

import random
from datetime import date
from typing import Dict, List, Optional

import config
from cryptogram.daily import day_index

QUOTES = [
    {
        'text': 'Simplicity is the ultimate sophistication.',
        'author': 'Leonardo da Vinci',
        'attribution': None,
    },
    {
        'text': 'Well begun is half done.',
        'author': 'Aristotle',
        'attribution': 'Politics',
    },
    {
        'text': 'Knowledge is power.',
        'author': 'Francis Bacon',
        'attribution': 'Meditationes Sacrae',
    },
    {
        'text': 'Brevity is the soul of wit.',
        'author': 'William Shakespeare',
        'attribution': 'Hamlet',
    },
    {
        'text': 'I think, therefore I am.',
        'author': 'Rene Descartes',
        'attribution': 'Discourse on the Method',
    },
    {
        'text': 'The only thing we have to fear is fear itself.',
        'author': 'Franklin D. Roosevelt',
        'attribution': 'First inaugural address, 1933',
    },
    {
        'text': 'To be, or not to be, that is the question.',
        'author': 'William Shakespeare',
        'attribution': 'Hamlet',
    },
    {
        'text': 'Not all those who wander are lost.',
        'author': 'J. R. R. Tolkien',
        'attribution': 'The Fellowship of the Ring',
    },
    {
        'text': 'An unexamined life is not worth living.',
        'author': 'Socrates',
        'attribution': 'Apology',
    },
    {
        'text': 'The journey of a thousand miles begins with a single step.',
        'author': 'Lao Tzu',
        'attribution': 'Tao Te Ching',
    },
    {
        'text': 'It is not the strongest of the species that survives, but the most adaptable.',
        'author': 'Leon C. Megginson',
        'attribution': None,
    },
    {
        'text': 'Imagination is more important than knowledge.',
        'author': 'Albert Einstein',
        'attribution': None,
    },
    {
        'text': 'Whereof one cannot speak, thereof one must be silent.',
        'author': 'Ludwig Wittgenstein',
        'attribution': 'Tractatus Logico-Philosophicus',
    },
    {
        'text': 'The quick brown fox jumps over the lazy dog.',
        'author': 'Anonymous',
        'attribution': 'Typing exercise',
    },
    {
        'text': 'We are what we repeatedly do. Excellence, then, is not an act, but a habit.',
        'author': 'Will Durant',
        'attribution': 'The Story of Philosophy',
    },
    {
        'text': 'It was the best of times, it was the worst of times.',
        'author': 'Charles Dickens',
        'attribution': 'A Tale of Two Cities',
    },
    {
        'text': 'Those who cannot remember the past are condemned to repeat it.',
        'author': 'George Santayana',
        'attribution': 'The Life of Reason',
    },
    {
        'text': 'Hope is the thing with feathers that perches in the soul.',
        'author': 'Emily Dickinson',
        'attribution': None,
    },
    {
        'text': 'In the middle of difficulty lies opportunity.',
        'author': 'Albert Einstein',
        'attribution': None,
    },
    {
        'text': 'All happy families are alike; each unhappy family is unhappy in its own way.',
        'author': 'Leo Tolstoy',
        'attribution': 'Anna Karenina',
    },
]


def estimate_difficulty(text: str) -> str:
    """Rate a quote by its distinct letters and length."""
    unique_letters = len({ch for ch in text.upper() if ch in config.ALPHABET})
    length = len(text)
    easy_letters, easy_length = config.EASY_QUOTE_LIMITS
    medium_letters, medium_length = config.MEDIUM_QUOTE_LIMITS
    if unique_letters <= easy_letters and length <= easy_length:
        return 'easy'
    if unique_letters <= medium_letters and length <= medium_length:
        return 'medium'
    return 'hard'


def _with_difficulty(quote: Dict) -> Dict:
    return {**quote, 'difficulty': estimate_difficulty(quote['text'])}


def get_all_quotes() -> List[Dict]:
    """Get all quotes with their estimated difficulty."""
    return [_with_difficulty(q) for q in QUOTES]


def get_quotes_by_difficulty(difficulty: str) -> List[Dict]:
    """Get all quotes of a specific difficulty."""
    return [q for q in get_all_quotes() if q['difficulty'] == difficulty.lower()]


def get_random_quote(difficulty: Optional[str] = None, rng=None) -> Dict:
    """Get a random quote, optionally filtered by difficulty."""
    rng = rng or random
    quotes = get_quotes_by_difficulty(difficulty) if difficulty else []
    if not quotes:
        # Fallback to all quotes if difficulty not found
        quotes = get_all_quotes()
    return rng.choice(quotes)


def get_daily_quote(day: date) -> Dict:
    """
    Get the quote for a calendar date.

    Quotes are ordered by text and cycled by days since launch, so every
    player gets the same quote on the same day.
    """
    quotes = sorted(get_all_quotes(), key=lambda q: q['text'])
    return quotes[day_index(day) % len(quotes)]


def get_quote(mode: str, day: Optional[date] = None, difficulty: Optional[str] = None,
              rng=None) -> Optional[Dict]:
    """Quote source used by the session manager."""
    if mode == config.MODE_DAILY:
        return get_daily_quote(day or date.today())
    return get_random_quote(difficulty, rng)
