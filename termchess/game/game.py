"""Game facade: the surface exposed to sessions, scripts and players."""

from __future__ import annotations

import logging
from typing import Optional

from termchess.game.board import Coordinate
from termchess.game.errors import InvalidCapture, InvalidMove, UnsupportedAction
from termchess.game.rules import GameResult, game_result, is_in_checkmate, possible_actions
from termchess.game.state import Action, Capture, Castle, GameState, Piece, Promotion, Side

logger = logging.getLogger("termchess.game")


class Game:
    """Wraps a GameState and validates actions before applying them."""

    def __init__(self, state: Optional[GameState] = None):
        self.state = state if state is not None else GameState()

    @property
    def next_to_move(self) -> Side:
        return self.state.next_to_move

    @property
    def history(self) -> list[Action]:
        return self.state.history

    def piece_at(self, coord: Coordinate) -> Optional[Piece]:
        return self.state.piece_at(coord)

    def actions_at(self, coord: Coordinate) -> list[Action]:
        """Legal actions for the piece on ``coord``; empty if none or not its turn."""
        piece = self.state.piece_at(coord)
        if piece is None or piece.side != self.state.next_to_move:
            return []
        return possible_actions(coord, self.state)

    def advance(self, action: Action) -> None:
        """Apply ``action`` if it is legal for the side to move.

        Raises:
            InvalidMove / InvalidCapture: the action is not in the legal list.
            UnsupportedAction: promotion.
        """
        if isinstance(action, Promotion):
            raise UnsupportedAction("Pawn promotion is not implemented")

        if action not in self.actions_at(action.from_sq):
            logger.debug("Rejected %r", action)
            if isinstance(action, Capture):
                raise InvalidCapture(f"Invalid capture: {action!r}")
            raise InvalidMove(f"Invalid move: {action!r}")

        self.state.advance(action)

    def undo(self) -> None:
        self.state.undo()

    def has_completed(self) -> bool:
        """Checkmate (or stalemate) of the side to move."""
        return is_in_checkmate(self.state, self.state.next_to_move)

    def result(self) -> GameResult:
        return game_result(self.state)

    def find_action(self, from_sq: Coordinate, to_sq: Coordinate) -> Action:
        """The legal action moving the piece on ``from_sq`` to ``to_sq``.

        Castling is addressed by the king's squares (e1 to c1).
        """
        for action in self.actions_at(from_sq):
            if action.to_sq == to_sq:
                return action
        raise InvalidMove(f"No legal action from {from_sq} to {to_sq}")

    def castle(self) -> None:
        self.advance(Castle(self.state.next_to_move))
