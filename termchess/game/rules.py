"""Check detection, castling, legal move filtering, and game-end detection.

Legality is decided in two phases: generate pseudo-legal actions with the
per-piece generators, then simulate each one with ``evaluate_with_action`` and
reject those that leave the mover's own king attacked.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from termchess.game.board import Coordinate
from termchess.game.errors import InvariantViolation
from termchess.game.pieces import GENERATORS
from termchess.game.state import (
    CASTLED_KING_COL, CASTLED_ROOK_COL, KING_HOME_COL, ROOK_HOME_COL,
    Action, Capture, Castle, GameState, MovePiece, Piece, Rank, Side,
)


class GameResult(Enum):
    ONGOING = "ongoing"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


def _captures_by(state: GameState, side: Side) -> list[Action]:
    """Pseudo-legal captures for every piece of ``side``."""
    captures: list[Action] = []
    for coord, piece in state.board.pieces_with_coordinates():
        if piece.side == side:
            captures.extend(GENERATORS[piece.rank].possible_captures(coord, state))
    return captures


def opponent_can_capture(state: GameState, side: Side, coord: Coordinate) -> bool:
    """Whether the opponent of ``side`` has a pseudo-legal capture landing on ``coord``.

    An empty square is probed by standing a ``side`` king on it for the
    duration of the check, so pawns count by their capture diagonals rather
    than their pushes.
    """
    board = state.board
    original = board.piece_at(coord)
    if original is None:
        board.update(coord, Piece(side, Rank.KING))
    try:
        return any(action.to_sq == coord for action in _captures_by(state, side.opponent))
    finally:
        board.update(coord, original)


def is_in_check(state: GameState, side: Side) -> bool:
    """Whether any king of ``side`` is attacked by the opponent."""
    kings = state.board.find_pieces(Piece(side, Rank.KING))
    if not kings:
        raise InvariantViolation(f"No {side.name} king on the board")
    # Only captures can target an occupied square, so quiet moves are skipped.
    targets = {action.to_sq for action in _captures_by(state, side.opponent)}
    return any(king in targets for king in kings)


def _king_or_rook_has_moved(state: GameState, side: Side) -> bool:
    king = Piece(side, Rank.KING)
    rook_home = Coordinate(side.home_row, ROOK_HOME_COL)
    for action in state.history:
        if isinstance(action, Castle):
            if action.castling_side == side:
                return True
        elif isinstance(action, MovePiece):
            if action.piece == king or rook_home in (action.from_sq, action.to_sq):
                return True
        elif isinstance(action, Capture):
            if action.mover == king or rook_home in (action.from_sq, action.to_sq):
                return True
    return False


def can_castle_queen_side(state: GameState, side: Side) -> bool:
    """Queen-side castling rights and safety for ``side``.

    The king passes through the d-file and lands on the c-file; both squares
    and the king's own square must be free of attack.
    """
    board = state.board
    row = side.home_row
    if board.piece_at(Coordinate(row, KING_HOME_COL)) != Piece(side, Rank.KING):
        return False
    if board.piece_at(Coordinate(row, ROOK_HOME_COL)) != Piece(side, Rank.ROOK):
        return False
    if _king_or_rook_has_moved(state, side):
        return False
    if any(not board.is_empty(Coordinate(row, col))
           for col in range(ROOK_HOME_COL + 1, KING_HOME_COL)):
        return False
    if is_in_check(state, side):
        return False
    return not any(opponent_can_capture(state, side, Coordinate(row, col))
                   for col in (CASTLED_ROOK_COL, CASTLED_KING_COL))


def pseudo_legal_actions(from_sq: Coordinate, state: GameState) -> list[Action]:
    """All actions for the piece on ``from_sq``, ignoring self-check."""
    piece = state.board.piece_at(from_sq)
    if piece is None:
        return []
    actions = GENERATORS[piece.rank].possible_actions(from_sq, state)
    if piece.rank == Rank.KING and can_castle_queen_side(state, piece.side):
        actions.append(Castle(piece.side))
    return actions


def enumerate_all_actions(state: GameState, side: Side) -> list[Action]:
    """Pseudo-legal actions for every piece of ``side``, in row-major order."""
    actions: list[Action] = []
    for coord, piece in state.board.pieces_with_coordinates():
        if piece.side == side:
            actions.extend(pseudo_legal_actions(coord, state))
    return actions


def possible_actions(from_sq: Coordinate, state: GameState) -> list[Action]:
    """Legal actions for the piece on ``from_sq``: those not leaving its king in check."""
    piece = state.board.piece_at(from_sq)
    if piece is None:
        return []
    side = piece.side
    return [action for action in pseudo_legal_actions(from_sq, state)
            if not state.evaluate_with_action(action, lambda s: is_in_check(s, side))]


def legal_actions(state: GameState, side: Optional[Side] = None) -> list[Action]:
    """Legal actions for every piece of ``side`` (default: side to move)."""
    if side is None:
        side = state.next_to_move
    actions: list[Action] = []
    for coord, piece in state.board.pieces_with_coordinates():
        if piece.side == side:
            actions.extend(possible_actions(coord, state))
    return actions


def has_legal_action(state: GameState, side: Side) -> bool:
    return any(possible_actions(coord, state)
               for coord, piece in state.board.pieces_with_coordinates()
               if piece.side == side)


def is_in_checkmate(state: GameState, side: Side) -> bool:
    """True iff no piece of ``side`` has a legal action.

    Stalemate also satisfies this; use ``game_result`` to tell them apart.
    """
    return not has_legal_action(state, side)


def game_result(state: GameState) -> GameResult:
    """Outcome for the side to move."""
    side = state.next_to_move
    if has_legal_action(state, side):
        return GameResult.ONGOING
    if is_in_check(state, side):
        return GameResult.CHECKMATE
    return GameResult.STALEMATE
