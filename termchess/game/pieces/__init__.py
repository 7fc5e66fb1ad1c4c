"""Pseudo-legal move generators, one module per rank.

Each module exposes ``possible_moves``, ``possible_captures`` and
``possible_actions``, all taking ``(from_sq, state)``. Generation respects
occupancy and board edges but ignores whether the mover's own king is left in
check; that filter lives in ``termchess.game.rules``.
"""

from termchess.game.pieces import bishop, king, knight, pawn, queen, rook
from termchess.game.state import Rank

GENERATORS = {
    Rank.PAWN: pawn,
    Rank.KNIGHT: knight,
    Rank.BISHOP: bishop,
    Rank.ROOK: rook,
    Rank.QUEEN: queen,
    Rank.KING: king,
}

__all__ = ["GENERATORS", "pawn", "knight", "bishop", "rook", "queen", "king"]
