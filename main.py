"""Main entry point for the decodey terminal game."""

import argparse
import asyncio
import logging
import sys

import aiosqlite
from dotenv import load_dotenv

import config
from cryptogram.session_manager import QuoteUnavailableError, SessionManager, can_use_hint
from cryptogram.stats import win_rate
from database.manager import DatabaseManager
from database.migrations import initialize_database
from utils.formatters import (
    format_board,
    format_mistakes,
    format_percentage,
    format_score,
    format_time,
)

# Load environment variables
load_dotenv()

HELP_TEXT = "Type two letters to guess (e.g. QE means cipher Q is plain E). Commands: /hint /abandon /quit"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Decode a substitution-cipher quotation.")
    parser.add_argument("--daily", action="store_true", help="Play today's daily challenge.")
    parser.add_argument("--difficulty", choices=config.DIFFICULTIES, default=config.DEFAULT_DIFFICULTY,
                        help="Difficulty for custom games.")
    parser.add_argument("--stats", action="store_true", help="Show player statistics and exit.")
    parser.add_argument("--db", default=None, help="Path to the SQLite database.")
    return parser.parse_args(argv)


async def show_stats(store: DatabaseManager) -> None:
    stats = await store.get_player_stats(config.PLAYER_ID)
    if not stats:
        print("No games finished yet.")
        return
    print(f"Games played: {stats['games_played']}  won: {stats['games_won']} "
          f"({format_percentage(win_rate(stats))})")
    print(f"Total score: {format_score(stats['total_score'])}")
    print(f"Streak: {stats['current_streak']} (best {stats['best_streak']})")
    print(f"Average mistakes: {stats['average_mistakes']:.1f}  "
          f"average time: {format_time(stats['average_time'])}")


async def track_time(manager: SessionManager, mode: str) -> None:
    """Count play time once per second until the session finishes."""
    while True:
        await asyncio.sleep(1)
        if not manager.tick(mode):
            return


async def play(manager: SessionManager, mode: str, difficulty: str) -> None:
    """Play one session on stdin until it finishes or the player quits."""
    session = await manager.load_or_create(mode, difficulty)
    print(HELP_TEXT)

    timer = asyncio.create_task(track_time(manager, mode))
    try:
        await play_moves(manager, mode, session)
    finally:
        timer.cancel()


async def play_moves(manager: SessionManager, mode: str, session) -> None:
    while not session.is_terminal:
        print()
        print(format_board(session))
        print(f"Mistakes: {format_mistakes(session)}")
        raw = (await asyncio.to_thread(input, "> ")).strip().upper()
        if not raw:
            continue
        if raw in ("/QUIT", "/Q"):
            await manager.save(mode)
            print("Progress saved.")
            return
        if raw == "/ABANDON":
            await manager.abandon(mode)
            print(f"Abandoned. The quote was: {session.plaintext}")
            return
        if raw == "/HINT":
            if not can_use_hint(session):
                print("No hints left: the last mistake is kept in reserve.")
            elif await manager.hint(mode):
                print("Letter revealed.")
            continue
        if len(raw) != 2:
            print(HELP_TEXT)
            continue
        if await manager.guess(mode, raw[0], raw[1]):
            print("Correct.")
        else:
            print("Wrong.")

    print()
    print(session.current_display)
    attribution = f" ({session.attribution})" if session.attribution else ""
    print(f"- {session.author or 'Unknown'}{attribution}")
    result = session.result()
    if result.has_won:
        boosted = await manager.streak_boosted_score(result)
        print(f"Solved in {format_time(result.elapsed_seconds)} with {result.mistakes} mistake(s).")
        print(f"Score: {format_score(result.score)}  with streak boost: {format_score(boosted)}")
    else:
        print(f"Out of mistakes. The quote was: {session.plaintext}")


async def main(argv=None) -> int:
    """Main function to start the game."""
    args = parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    db_path = await initialize_database(args.db)
    store = DatabaseManager(db_path)

    if args.stats:
        await show_stats(store)
        return 0

    manager = SessionManager(store)
    mode = config.MODE_DAILY if args.daily else config.MODE_CUSTOM
    try:
        await play(manager, mode, args.difficulty)
    except QuoteUnavailableError as e:
        print(f"ERROR: {e}")
        return 1
    return 0


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nGame stopped by user.")
    except aiosqlite.Error as e:
        print(f"Database error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
