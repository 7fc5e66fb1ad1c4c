#!/usr/bin/env python3
"""Command-line chess against the alpha-beta engine.

Usage:
    python scripts/play.py                               # Human (White) vs alpha-beta
    python scripts/play.py --black human                 # Human vs Human
    python scripts/play.py --white alphabeta --black random --depth 2
    python scripts/play.py --config configs/play.yaml --verbose

Human input: two squares ("e2 e4" or "e2e4"), "O-O-O" to castle, "undo",
or "q" to quit.
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from termchess.config import load_config, player_config
from termchess.engine.players import create_agent
from termchess.game.board import Coordinate, render_board
from termchess.game.errors import ChessError
from termchess.game.game import Game
from termchess.game.notation import action_to_notation, game_to_notation, result_string
from termchess.game.rules import GameResult, legal_actions
from termchess.game.state import Side

logger = logging.getLogger("termchess.play")


def display_state(game: Game):
    """Print the current board."""
    state = game.state
    print(render_board(state.board.to_display_board(),
                       next_to_move=int(state.next_to_move),
                       move_number=len(state.history) // 2 + 1))
    print()


def human_turn(game: Game) -> bool:
    """Read and apply one human action. Returns False to quit."""
    moves = legal_actions(game.state)
    print("Legal moves: " + " ".join(action_to_notation(a) for a in moves))

    while True:
        inp = input("> ").strip()
        if inp.lower() == "q":
            return False
        if inp.lower() == "undo":
            # Take back the opponent's reply as well as our own move
            game.undo()
            game.undo()
            return True
        try:
            if inp.upper() == "O-O-O":
                game.castle()
                return True
            squares = inp.replace("-", " ").split()
            if len(squares) == 1 and len(squares[0]) == 4:
                squares = [squares[0][:2], squares[0][2:]]
            if len(squares) != 2:
                print("Enter two squares, e.g. 'e2 e4'.")
                continue
            from_sq, to_sq = (Coordinate.from_human(sq) for sq in squares)
            game.advance(game.find_action(from_sq, to_sq))
            return True
        except ChessError as e:
            print(e)


def play_game(config: dict):
    """Play a full game with the configured players."""
    game = Game()
    players = {}
    for side in Side:
        color = side.name.lower()
        settings = player_config(config, color)
        players[side] = None if settings["type"] == "human" else create_agent(settings)

    print("=" * 60)
    for side in Side:
        agent = players[side]
        print(f"  {side.name.title()}: {'human' if agent is None else agent.name}")
    print("=" * 60)

    max_moves = config["game"]["max_moves"]
    while len(game.history) < max_moves and game.result() == GameResult.ONGOING:
        display_state(game)
        side = game.next_to_move
        agent = players[side]

        if agent is None:
            if not human_turn(game):
                print("Game aborted.")
                return
        else:
            action = agent.get_action(game.state)
            print(f"{side.name.title()} ({agent.name}) plays: {action_to_notation(action)}")
            game.advance(action)

    display_state(game)
    result = game.result()
    if result == GameResult.CHECKMATE:
        print(f"Checkmate! {game.next_to_move.opponent.name.title()} wins.")
    elif result == GameResult.STALEMATE:
        print("Stalemate.")
    else:
        print(f"Move limit of {max_moves} reached.")

    headers = {side.name.title(): ("human" if players[side] is None else players[side].name)
               for side in Side}
    print(game_to_notation(game.history, headers, result_string(game.state, result)))


def main():
    parser = argparse.ArgumentParser(description="Play chess in your terminal")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to YAML config (defaults built in)")
    parser.add_argument("--white", choices=["human", "random", "alphabeta"],
                        help="Override the White player")
    parser.add_argument("--black", choices=["human", "random", "alphabeta"],
                        help="Override the Black player")
    parser.add_argument("--depth", type=int, help="Override search depth")
    parser.add_argument("--time-limit", type=float, help="Seconds per engine move")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    config = load_config(args.config)
    if args.white:
        config["players"]["white"] = {"type": args.white}
    if args.black:
        config["players"]["black"] = {"type": args.black}
    if args.depth is not None:
        config["search"]["depth"] = args.depth
    if args.time_limit is not None:
        config["search"]["time_limit"] = args.time_limit
    logger.debug("Config: %s", config)

    play_game(config)


if __name__ == "__main__":
    main()
