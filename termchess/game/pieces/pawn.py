"""Pawn: pushes forward one square, two from its start row, captures diagonally.

No en-passant and no promotion.
"""

from __future__ import annotations

from termchess.game.board import Coordinate
from termchess.game.mover import Direction, relative_square
from termchess.game.state import Action, Capture, GameState, MovePiece

CAPTURE_DIRECTIONS = (Direction.NORTH_WEST, Direction.NORTH_EAST)


def possible_moves(from_sq: Coordinate, state: GameState) -> list[Action]:
    board = state.board
    piece = board.piece_at(from_sq)
    side = piece.side
    moves: list[Action] = []

    one_step = relative_square(from_sq, side, Direction.NORTH)
    if one_step is None or not board.is_empty(one_step):
        return moves
    moves.append(MovePiece(piece, from_sq, one_step))

    # Double push needs both squares clear
    if from_sq.row == side.pawn_row:
        two_step = relative_square(from_sq, side, Direction.NORTH, Direction.NORTH)
        if two_step is not None and board.is_empty(two_step):
            moves.append(MovePiece(piece, from_sq, two_step))

    return moves


def possible_captures(from_sq: Coordinate, state: GameState) -> list[Action]:
    board = state.board
    piece = board.piece_at(from_sq)
    captures: list[Action] = []
    for direction in CAPTURE_DIRECTIONS:
        target_sq = relative_square(from_sq, piece.side, direction)
        if target_sq is None:
            continue
        target = board.piece_at(target_sq)
        if target is not None and target.side != piece.side:
            captures.append(Capture(piece, target, from_sq, target_sq))
    return captures


def possible_actions(from_sq: Coordinate, state: GameState) -> list[Action]:
    return possible_moves(from_sq, state) + possible_captures(from_sq, state)
