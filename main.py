#!/usr/bin/env python3
"""
Minesweeper - terminal entry point.

Usage:
    python main.py play [--rows R] [--cols C] [--mines M] [--seed S]

In-game commands:
    r ROW COL   reveal a cell
    f ROW COL   toggle a flag
    n           start a new game
    q           quit
"""
import argparse
import logging
import random
import time
from typing import Optional

from minesweeper import (
    BoardConfig,
    GameSession,
    GameState,
    InvalidConfiguration,
    ManualTicker,
    render_session,
)

HELP = "Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)"


class WallClock:
    """Feeds whole elapsed wall-clock seconds into a ManualTicker."""

    def __init__(self, ticker: ManualTicker) -> None:
        self.ticker = ticker
        self._last = time.monotonic()

    def restart(self) -> None:
        self._last = time.monotonic()

    def catch_up(self) -> None:
        now = time.monotonic()
        seconds = int(now - self._last)
        if seconds > 0:
            self.ticker.advance(seconds)
            self._last += seconds


def parse_command(line: str) -> Optional[tuple]:
    """
    Parse one line of input.

    Returns:
        (verb, row, col) for r/f, (verb,) for n/q, or None if invalid.
    """
    parts = line.split()
    if not parts:
        return None
    verb = parts[0].lower()
    if verb in ("n", "q") and len(parts) == 1:
        return (verb,)
    if verb in ("r", "f") and len(parts) == 3:
        try:
            return verb, int(parts[1]), int(parts[2])
        except ValueError:
            return None
    return None


def play(args: argparse.Namespace) -> None:
    """Run an interactive game in the terminal."""
    try:
        config = BoardConfig(rows=args.rows, cols=args.cols, mine_count=args.mines)
    except InvalidConfiguration as error:
        print(f"Invalid configuration: {error}")
        return

    ticker = ManualTicker()
    clock = WallClock(ticker)
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(config, ticker=ticker, rng=rng)

    print(HELP)
    try:
        while True:
            clock.catch_up()
            print()
            print(render_session(session.snapshot(), coordinates=True))
            try:
                line = input("> ")
            except EOFError:
                break

            clock.catch_up()
            command = parse_command(line)
            if command is None:
                print(HELP)
                continue

            verb = command[0]
            if verb == "q":
                break
            if verb == "n":
                session.initialize()
                clock.restart()
            elif verb == "r":
                session.on_cell_activate(command[1], command[2])
            elif verb == "f":
                session.on_cell_mark(command[1], command[2])

            if session.state != GameState.PLAYING:
                print("Game over. Type n for a new game or q to quit.")
    finally:
        session.close()


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper in the terminal")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play an interactive game")
    play_parser.add_argument("--rows", type=int, default=10, help="Board rows")
    play_parser.add_argument("--cols", type=int, default=10, help="Board columns")
    play_parser.add_argument("--mines", type=int, default=15, help="Number of mines")
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "play":
        play(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
