"""King: one square in any direction.

Castling depends on attack information, so it is added by
``termchess.game.rules`` rather than generated here.
"""

from __future__ import annotations

from termchess.game.board import Coordinate
from termchess.game.mover import ALL_DIRECTIONS, relative_square
from termchess.game.state import Action, Capture, GameState, MovePiece


def _destinations(from_sq: Coordinate, state: GameState) -> list[Coordinate]:
    side = state.board.piece_at(from_sq).side
    squares = (relative_square(from_sq, side, direction) for direction in ALL_DIRECTIONS)
    return [sq for sq in squares if sq is not None]


def possible_moves(from_sq: Coordinate, state: GameState) -> list[Action]:
    board = state.board
    piece = board.piece_at(from_sq)
    return [MovePiece(piece, from_sq, to_sq)
            for to_sq in _destinations(from_sq, state)
            if board.is_empty(to_sq)]


def possible_captures(from_sq: Coordinate, state: GameState) -> list[Action]:
    board = state.board
    piece = board.piece_at(from_sq)
    captures: list[Action] = []
    for to_sq in _destinations(from_sq, state):
        target = board.piece_at(to_sq)
        if target is not None and target.side != piece.side:
            captures.append(Capture(piece, target, from_sq, to_sq))
    return captures


def possible_actions(from_sq: Coordinate, state: GameState) -> list[Action]:
    return possible_moves(from_sq, state) + possible_captures(from_sq, state)
