"""Rook: slides along ranks and files."""

from __future__ import annotations

from termchess.game.board import Coordinate
from termchess.game.mover import ORTHOGONAL, ray_captures, ray_moves
from termchess.game.state import Action, GameState

DIRECTIONS = ORTHOGONAL


def possible_moves(from_sq: Coordinate, state: GameState) -> list[Action]:
    return ray_moves(state.board, from_sq, DIRECTIONS)


def possible_captures(from_sq: Coordinate, state: GameState) -> list[Action]:
    return ray_captures(state.board, from_sq, DIRECTIONS)


def possible_actions(from_sq: Coordinate, state: GameState) -> list[Action]:
    return possible_moves(from_sq, state) + possible_captures(from_sq, state)
