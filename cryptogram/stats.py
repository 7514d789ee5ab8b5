"""Player statistics aggregation."""

from typing import Dict, Optional

from cryptogram.scoring import GameResult


def empty_stats(player_id: str) -> Dict:
    return {
        'player_id': player_id,
        'games_played': 0,
        'games_won': 0,
        'total_score': 0,
        'current_streak': 0,
        'best_streak': 0,
        'average_mistakes': 0.0,
        'average_time': 0.0,
        'last_played': None,
    }


def update_stats(stats: Optional[Dict], result: GameResult, player_id: str = 'local') -> Dict:
    """
    Fold one finished game into a player's running statistics.

    Wins add to the total score and extend the streak; a loss resets the
    current streak. Averages are running means over every game played.
    """
    updated = dict(stats) if stats else empty_stats(player_id)
    games = updated['games_played'] + 1
    updated['games_played'] = games

    if result.has_won:
        updated['games_won'] += 1
        updated['total_score'] += result.score
        updated['current_streak'] += 1
        updated['best_streak'] = max(updated['best_streak'], updated['current_streak'])
    else:
        updated['current_streak'] = 0

    previous = games - 1
    updated['average_mistakes'] = (updated['average_mistakes'] * previous + result.mistakes) / games
    updated['average_time'] = (updated['average_time'] * previous + result.elapsed_seconds) / games
    return updated


def win_rate(stats: Optional[Dict]) -> float:
    """Percentage of games won."""
    if not stats or not stats.get('games_played'):
        return 0.0
    return stats['games_won'] / stats['games_played'] * 100
