#!/usr/bin/env python3
"""Watch a random player click through Minesweeper games."""
import argparse
import logging
import os
import time
from typing import Optional

import numpy as np

from minesweeper import BoardConfig, InvalidConfiguration, MinesweeperEnv


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def show(title: str, env: MinesweeperEnv, wins: int, clear: bool) -> None:
    """Print a frame: heading, running score and the board."""
    if clear:
        clear_screen()
    print(title)
    print(f"Wins: {wins}\n")
    print(env.render())


def play_game(
    env: MinesweeperEnv,
    rng: np.random.Generator,
    title: str,
    wins: int,
    delay: float,
    clear: bool,
) -> bool:
    """
    Click random hidden cells until the game ends.

    Returns:
        True if the game was won.
    """
    info = {}
    step = 0
    done = False
    while not done:
        action = int(rng.choice(np.flatnonzero(env.get_action_mask())))
        _, _, terminated, truncated, info = env.step(action)
        done = terminated or truncated
        step += 1

        row, col = divmod(action, env.config.cols)
        show(f"{title} | Step {step} | Clicked ({row}, {col})", env, wins, clear)
        time.sleep(delay)

    return info.get("game_state") == "WON"


def demo(
    delay: float = 0.3,
    games: int = 5,
    rows: int = 10,
    cols: int = 10,
    mines: int = 15,
    seed: Optional[int] = None,
    clear: bool = True,
) -> int:
    """
    Run demo games with visualization.

    Returns:
        Number of games won.
    """
    try:
        config = BoardConfig(rows=rows, cols=cols, mine_count=mines)
    except InvalidConfiguration as error:
        print(f"Invalid configuration: {error}")
        return 0

    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(seed)
    density = 100 * mines / config.total_cells
    print(f"Random player on {rows}x{cols} with {mines} mines ({density:.1f}% density)")

    wins = 0
    try:
        for game in range(games):
            env.reset(seed=None if seed is None else seed + game)
            title = f"=== Game {game + 1}/{games} ==="
            show(title, env, wins, clear)
            time.sleep(delay)

            if play_game(env, rng, title, wins, delay, clear):
                wins += 1
                print("\nCleared the board!")
            else:
                print("\nHit a mine.")
            time.sleep(delay)
    finally:
        env.close()

    if games:
        print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")
    return wins


def main() -> None:
    parser = argparse.ArgumentParser(description="Watch a random Minesweeper player")
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--rows", type=int, default=10, help="Board rows")
    parser.add_argument("--cols", type=int, default=10, help="Board columns")
    parser.add_argument("--mines", type=int, default=15, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    demo(delay=args.delay, games=args.games, rows=args.rows, cols=args.cols,
         mines=args.mines, seed=args.seed)


if __name__ == "__main__":
    main()
