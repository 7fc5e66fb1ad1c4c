"""Shared fixtures for building test positions."""

import pytest

from termchess.game.board import Coordinate
from termchess.game.state import RANK_CHARS, Board, GameState, Piece, Side


def sq(name: str) -> Coordinate:
    return Coordinate.from_human(name)


def piece(code: str) -> Piece:
    """'wK' -> white king, 'bq' / 'bQ' -> black queen."""
    side = Side.WHITE if code[0].lower() == "w" else Side.BLACK
    return Piece(side, RANK_CHARS[code[1].upper()])


@pytest.fixture
def make_state():
    """Factory building a GameState from {"e1": "wK", ...} on an empty board."""
    def _make(placements: dict, next_to_move: Side = Side.WHITE) -> GameState:
        board = Board.empty()
        for name, code in placements.items():
            board.update(sq(name), piece(code))
        return GameState.with_board(board, next_to_move)
    return _make
