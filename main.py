#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}]
    python main.py play --width W --height H --mines M
    python main.py simulate [--games N] [--seed S]
"""
import argparse
import logging

import numpy as np

from src.minesweeper import (
    DIFFICULTY_LEVELS,
    GameConfig,
    GameEvent,
    EventType,
    Minesweeper,
    MinesweeperEnv,
    Move,
    custom,
)

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: r ROW COL (reveal), f ROW COL (flag), p (pause/resume), q (quit)"


def build_config(args: argparse.Namespace) -> GameConfig:
    """Build a game configuration from command-line flags."""
    if args.width is not None or args.height is not None or args.mines is not None:
        preset = DIFFICULTY_LEVELS[args.difficulty]
        return custom(
            args.width if args.width is not None else preset.width,
            args.height if args.height is not None else preset.height,
            args.mines if args.mines is not None else preset.mines,
        )
    return DIFFICULTY_LEVELS[args.difficulty]


def announce(event: GameEvent) -> None:
    """Print the end of an episode."""
    if event.type == EventType.GAME_WON:
        score = event.game_score
        print(f"\n*** WIN! *** {score.moves} moves in {score.time_elapsed:.1f}s")
    elif event.type == EventType.GAME_LOST:
        print("\n*** LOST (hit mine) ***")


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config = build_config(args)
    game = Minesweeper(config, seed=args.seed)
    game.subscribe(announce)
    game.start()

    print(f"Board: {config.width}x{config.height} with {config.mines} mines")
    print(HELP_TEXT)

    while game.is_game_active():
        print()
        print(game)
        print(
            f"Mines left: {game.get_remaining_mines()} | "
            f"Moves: {game.get_move_count()} | "
            f"Time: {game.elapsed_time_formatted()}"
            + (" | PAUSED" if not game.is_playing else "")
        )

        try:
            command = input("> ").split()
        except EOFError:
            game.quit()
            break

        if not command:
            continue
        if command[0] == "q":
            game.quit()
        elif command[0] == "p":
            if game.is_playing:
                game.pause()
            else:
                game.resume()
        elif command[0] in ("r", "f") and len(command) == 3:
            action = "reveal" if command[0] == "r" else "flag"
            try:
                row, col = int(command[1]), int(command[2])
            except ValueError:
                print(HELP_TEXT)
                continue
            if action == "reveal":
                accepted = game.reveal_cell(row, col, first_click_protection=True)
            else:
                accepted = game.make_move(Move(action, row, col))
            if not accepted:
                print("Illegal move")
        else:
            print(HELP_TEXT)

    print()
    print(game)
    print(f"Final state: {game.game_state.value}")


def simulate(args: argparse.Namespace) -> None:
    """Play random games through the gym environment and report stats."""
    config = build_config(args)
    env = MinesweeperEnv(config=config)
    rng = np.random.default_rng(args.seed)

    print(f"Simulating {args.games} random games on {config.width}x{config.height} "
          f"with {config.mines} mines...")

    for game_number in range(args.games):
        # Seed only the first reset; later episodes continue the same stream
        _, info = env.reset(seed=args.seed if game_number == 0 else None)

        terminated = False
        while not terminated:
            valid_indices = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_indices))
            _, _, terminated, _, info = env.step(action)

        logger.info(
            "Game %d: %s after %d moves", game_number + 1,
            info["game_state"], info["moves"],
        )

    stats = env.game.get_stats()
    print(f"Games played: {stats.games_played}")
    print(f"  Won: {stats.games_won}  Lost: {stats.games_lost}")
    print(f"  Win rate: {stats.win_rate:.1f}%")
    print(f"  Best streak: {stats.best_streak}")
    if stats.best_time is not None:
        print(f"  Best time: {stats.best_time:.3f}s")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play or simulate games"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    board_options = argparse.ArgumentParser(add_help=False)
    board_options.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTY_LEVELS),
        default="beginner",
        help="Difficulty preset",
    )
    board_options.add_argument("--width", type=int, help="Custom board width")
    board_options.add_argument("--height", type=int, help="Custom board height")
    board_options.add_argument("--mines", type=int, help="Custom mine count")
    board_options.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers.add_parser(
        "play", parents=[board_options], help="Play in the terminal"
    )

    simulate_parser = subparsers.add_parser(
        "simulate", parents=[board_options], help="Simulate random games"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
