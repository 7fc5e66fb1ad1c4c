"""Chess rules engine: board, state, move generation, legality."""

from termchess.game.board import Coordinate, render_board
from termchess.game.state import (
    Action, Board, Capture, Castle, GameState, MovePiece, Piece, Promotion, Rank, Side,
)
from termchess.game.rules import (
    GameResult, enumerate_all_actions, game_result, is_in_check, is_in_checkmate,
    legal_actions, possible_actions,
)
from termchess.game.game import Game
from termchess.game.notation import action_to_notation, game_to_notation

__all__ = [
    "Coordinate", "render_board",
    "Action", "Board", "Capture", "Castle", "GameState", "MovePiece", "Piece",
    "Promotion", "Rank", "Side",
    "GameResult", "enumerate_all_actions", "game_result", "is_in_check",
    "is_in_checkmate", "legal_actions", "possible_actions",
    "Game", "action_to_notation", "game_to_notation",
]
