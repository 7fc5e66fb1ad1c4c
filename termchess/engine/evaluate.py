"""Static position evaluation: material plus mobility."""

from __future__ import annotations

from dataclasses import dataclass

from termchess.game.rules import enumerate_all_actions
from termchess.game.state import GameState, Piece, Side

MATERIAL_WEIGHT = 10


@dataclass
class PositionEval:
    """Breakdown of a static evaluation, from one side's perspective."""
    score: int
    material: int
    mobility: int


def evaluate_piece(piece: Piece, side: Side) -> int:
    return piece.value if piece.side == side else -piece.value


def material_balance(state: GameState, side: Side) -> int:
    return sum(evaluate_piece(piece, side)
               for _, piece in state.board.pieces_with_coordinates())


def mobility(state: GameState, side: Side) -> int:
    """Number of pseudo-legal actions available to ``side``."""
    return len(enumerate_all_actions(state, side))


def evaluate_position(state: GameState, side: Side) -> PositionEval:
    material = material_balance(state, side)
    moves = mobility(state, side)
    return PositionEval(MATERIAL_WEIGHT * material + moves, material, moves)


def evaluate_board(state: GameState, side: Side) -> int:
    """Score of the position for ``side``; higher is better."""
    return evaluate_position(state, side).score
