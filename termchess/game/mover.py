"""Side-relative coordinate arithmetic and ray casting for sliding pieces.

Directions are expressed from White's point of view ("north" is towards row 7)
and mirrored for Black, so each piece's movement is written once.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from termchess.game.board import BOARD_SIZE, Coordinate, in_bounds
from termchess.game.errors import OutOfBounds
from termchess.game.state import Board, Capture, MovePiece, Action, Side


class Direction(Enum):
    NORTH = (1, 0)
    NORTH_EAST = (1, 1)
    EAST = (0, 1)
    SOUTH_EAST = (-1, 1)
    SOUTH = (-1, 0)
    SOUTH_WEST = (-1, -1)
    WEST = (0, -1)
    NORTH_WEST = (1, -1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]


ORTHOGONAL = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)
DIAGONAL = (Direction.NORTH_EAST, Direction.SOUTH_EAST,
            Direction.SOUTH_WEST, Direction.NORTH_WEST)
ALL_DIRECTIONS = tuple(Direction)


class Mover:
    """Builder that accumulates side-relative steps from a starting square.

    >>> Mover(Side.WHITE).move_to(Coordinate(1, 4)).north().north().make()
    Coordinate(e4)
    """

    def __init__(self, side: Side, start: Optional[Coordinate] = None):
        self.side = side
        self.row = 0
        self.col = 0
        if start is not None:
            self.move_to(start)

    def move_to(self, coord: Coordinate) -> Mover:
        self.row = coord.row
        self.col = coord.column
        return self

    def step(self, *directions: Direction) -> Mover:
        sign = 1 if self.side == Side.WHITE else -1
        for direction in directions:
            self.row += sign * direction.d_row
            self.col += sign * direction.d_col
        return self

    def north(self) -> Mover:
        return self.step(Direction.NORTH)

    def south(self) -> Mover:
        return self.step(Direction.SOUTH)

    def east(self) -> Mover:
        return self.step(Direction.EAST)

    def west(self) -> Mover:
        return self.step(Direction.WEST)

    def make(self) -> Coordinate:
        if not in_bounds(self.row, self.col):
            raise OutOfBounds(f"Off the board: {self.row}, {self.col}")
        return Coordinate(self.row, self.col)


def relative_square(from_sq: Coordinate, side: Side,
                    *directions: Direction) -> Optional[Coordinate]:
    """Destination after stepping ``directions`` from ``from_sq``, or None if off-board."""
    try:
        return Mover(side, from_sq).step(*directions).make()
    except OutOfBounds:
        return None


def find_moves_in_direction(board: Board, from_sq: Coordinate, side: Side,
                            direction: Direction) -> list[Coordinate]:
    """Empty squares along a ray, stopping before the first occupied square."""
    squares = []
    mover = Mover(side, from_sq)
    for _ in range(BOARD_SIZE - 1):
        try:
            current = mover.step(direction).make()
        except OutOfBounds:
            break
        if not board.is_empty(current):
            break
        squares.append(current)
    return squares


def find_opposing_piece_in_direction(board: Board, from_sq: Coordinate, side: Side,
                                     direction: Direction) -> Optional[Coordinate]:
    """First occupied square along a ray, if it holds an enemy piece."""
    mover = Mover(side, from_sq)
    for _ in range(BOARD_SIZE - 1):
        try:
            current = mover.step(direction).make()
        except OutOfBounds:
            return None
        piece = board.piece_at(current)
        if piece is not None:
            return current if piece.side != side else None
    return None


def ray_moves(board: Board, from_sq: Coordinate,
              directions: tuple[Direction, ...]) -> list[Action]:
    """Quiet sliding moves for the piece on ``from_sq``."""
    piece = board.piece_at(from_sq)
    return [MovePiece(piece, from_sq, to_sq)
            for direction in directions
            for to_sq in find_moves_in_direction(board, from_sq, piece.side, direction)]


def ray_captures(board: Board, from_sq: Coordinate,
                 directions: tuple[Direction, ...]) -> list[Action]:
    """Sliding captures for the piece on ``from_sq``, at most one per ray."""
    piece = board.piece_at(from_sq)
    captures: list[Action] = []
    for direction in directions:
        target = find_opposing_piece_in_direction(board, from_sq, piece.side, direction)
        if target is not None:
            captures.append(Capture(piece, board.piece_at(target), from_sq, target))
    return captures
