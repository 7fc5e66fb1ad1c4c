"""Game state representation: pieces, board, actions, and apply/undo."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, TypeVar

from termchess.game.board import BOARD_SIZE, STARTING_POSITIONS, Coordinate
from termchess.game.errors import InvalidCoordinate, InvariantViolation, UnsupportedAction

T = TypeVar("T")


class Side(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opponent(self) -> Side:
        return Side(1 - self)

    @property
    def home_row(self) -> int:
        return 0 if self == Side.WHITE else BOARD_SIZE - 1

    @property
    def pawn_row(self) -> int:
        return 1 if self == Side.WHITE else BOARD_SIZE - 2


class Rank(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5


# Map character codes to Rank
RANK_CHARS = {
    "P": Rank.PAWN,
    "N": Rank.KNIGHT,
    "B": Rank.BISHOP,
    "R": Rank.ROOK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
}
RANK_NAMES = {v: k for k, v in RANK_CHARS.items()}

# Material weight per rank
RANK_VALUES = {
    Rank.PAWN: 1,
    Rank.KNIGHT: 3,
    Rank.BISHOP: 3,
    Rank.ROOK: 5,
    Rank.QUEEN: 9,
    Rank.KING: 1000,
}

# Queen-side castling squares, by column
KING_HOME_COL = 4
ROOK_HOME_COL = 0
CASTLED_KING_COL = 2
CASTLED_ROOK_COL = 3


@dataclass(frozen=True)
class Piece:
    side: Side
    rank: Rank

    @property
    def char(self) -> str:
        return RANK_NAMES[self.rank]

    @property
    def value(self) -> int:
        return RANK_VALUES[self.rank]

    def __repr__(self) -> str:
        return f"{self.side.name.title()}{self.rank.name.title()}"


class Board:
    """Fixed 8x8 grid of optional pieces.

    ``update`` overwrites cells unconditionally; occupancy rules belong to the
    move generators.
    """

    def __init__(self, cells: Optional[list[list[Optional[Piece]]]] = None):
        if cells is None:
            cells = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        self.cells = cells

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def default(cls) -> Board:
        """Standard starting layout."""
        board = cls()
        for (row, col), (char, side) in STARTING_POSITIONS.items():
            board.cells[row][col] = Piece(Side(side), RANK_CHARS[char])
        return board

    def copy(self) -> Board:
        return Board([row[:] for row in self.cells])

    def piece_at(self, coord: Coordinate) -> Optional[Piece]:
        return self.cells[coord.row][coord.column]

    def is_empty(self, coord: Coordinate) -> bool:
        return self.cells[coord.row][coord.column] is None

    def update(self, coord: Coordinate, piece: Optional[Piece]) -> None:
        row, col = getattr(coord, "row", None), getattr(coord, "column", None)
        if not (isinstance(row, int) and isinstance(col, int)
                and 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise InvalidCoordinate(f"Invalid board coordinates: {coord!r}")
        self.cells[row][col] = piece

    def find_pieces(self, piece: Piece) -> list[Coordinate]:
        """All squares holding ``piece``, in row-major order."""
        return [coord for coord, p in self.pieces_with_coordinates() if p == piece]

    def pieces_with_coordinates(self) -> list[tuple[Coordinate, Piece]]:
        """Every occupied square in row-major order."""
        return [(Coordinate(row, col), piece)
                for row, cells in enumerate(self.cells)
                for col, piece in enumerate(cells)
                if piece is not None]

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def to_display_board(self) -> list[list]:
        """Convert to the format expected by render_board."""
        return [[None if cell is None else (cell.char, int(cell.side)) for cell in row]
                for row in self.cells]


# Action types
@dataclass(frozen=True)
class Action:
    """A transition between positions. Pure data, never self-validating."""

    @property
    def side(self) -> Side:
        raise NotImplementedError


@dataclass(frozen=True)
class MovePiece(Action):
    """Quiet move onto an empty square."""
    piece: Piece
    from_sq: Coordinate
    to_sq: Coordinate

    @property
    def side(self) -> Side:
        return self.piece.side


@dataclass(frozen=True)
class Capture(Action):
    """Move onto a square holding an enemy piece, removing it."""
    mover: Piece
    captured: Piece
    from_sq: Coordinate
    to_sq: Coordinate

    @property
    def side(self) -> Side:
        return self.mover.side


@dataclass(frozen=True)
class Promotion(Action):
    """Pawn promotion. Declared but never generated or applied."""
    piece: Piece
    promoted_to: Piece
    from_sq: Coordinate
    to_sq: Coordinate

    @property
    def side(self) -> Side:
        return self.piece.side


@dataclass(frozen=True)
class Castle(Action):
    """Queen-side castling: king e-file to c-file, a-file rook to d-file."""
    castling_side: Side

    @property
    def side(self) -> Side:
        return self.castling_side

    @property
    def from_sq(self) -> Coordinate:
        return Coordinate(self.castling_side.home_row, KING_HOME_COL)

    @property
    def to_sq(self) -> Coordinate:
        return Coordinate(self.castling_side.home_row, CASTLED_KING_COL)


class GameState:
    """Mutable position: board, side to move, action history, captured pieces.

    Mutated only through ``advance`` and ``undo``. Search and legality checks
    explore hypothetical futures with ``evaluate_with_action``, which always
    reverts what it applied.
    """

    def __init__(self, board: Optional[Board] = None, next_to_move: Side = Side.WHITE):
        self.board: Board = board if board is not None else Board.default()
        self.next_to_move: Side = next_to_move
        self.history: list[Action] = []
        self.captured: list[Piece] = []

    @classmethod
    def with_board(cls, board: Board, next_to_move: Side = Side.WHITE) -> GameState:
        return cls(board=board, next_to_move=next_to_move)

    def clone(self) -> GameState:
        """Return an independent copy (for workers needing a private state)."""
        new = GameState.__new__(GameState)
        new.board = self.board.copy()
        new.next_to_move = self.next_to_move
        new.history = self.history.copy()
        new.captured = self.captured.copy()
        return new

    def piece_at(self, coord: Coordinate) -> Optional[Piece]:
        return self.board.piece_at(coord)

    def __eq__(self, other):
        if not isinstance(other, GameState):
            return NotImplemented
        return (self.board == other.board
                and self.next_to_move == other.next_to_move
                and self.history == other.history
                and self.captured == other.captured)

    def __repr__(self) -> str:
        return (f"GameState(next_to_move={self.next_to_move.name}, "
                f"history={len(self.history)} actions)")

    def _expect(self, coord: Coordinate, piece: Optional[Piece]):
        found = self.board.piece_at(coord)
        if found != piece:
            raise InvariantViolation(
                f"Expected {piece!r} on {coord}, found {found!r}")

    def advance(self, action: Action) -> None:
        """Apply an action. The action is trusted to be legal."""
        board = self.board

        if isinstance(action, MovePiece):
            self._expect(action.from_sq, action.piece)
            board.update(action.to_sq, action.piece)
            board.update(action.from_sq, None)

        elif isinstance(action, Capture):
            self._expect(action.from_sq, action.mover)
            self._expect(action.to_sq, action.captured)
            board.update(action.to_sq, action.mover)
            board.update(action.from_sq, None)
            self.captured.append(action.captured)

        elif isinstance(action, Castle):
            side = action.castling_side
            row = side.home_row
            king, rook = Piece(side, Rank.KING), Piece(side, Rank.ROOK)
            self._expect(Coordinate(row, KING_HOME_COL), king)
            self._expect(Coordinate(row, ROOK_HOME_COL), rook)
            board.update(Coordinate(row, KING_HOME_COL), None)
            board.update(Coordinate(row, ROOK_HOME_COL), None)
            board.update(Coordinate(row, CASTLED_KING_COL), king)
            board.update(Coordinate(row, CASTLED_ROOK_COL), rook)

        elif isinstance(action, Promotion):
            raise UnsupportedAction("Pawn promotion is not implemented")

        else:
            raise UnsupportedAction(f"Unknown action type: {type(action).__name__}")

        self.history.append(action)
        self.next_to_move = self.next_to_move.opponent

    def undo(self) -> None:
        """Revert the last applied action. No-op when history is empty."""
        if not self.history:
            return

        action = self.history[-1]
        board = self.board

        if isinstance(action, MovePiece):
            board.update(action.from_sq, action.piece)
            board.update(action.to_sq, None)

        elif isinstance(action, Capture):
            board.update(action.from_sq, action.mover)
            board.update(action.to_sq, action.captured)
            self.captured.pop()

        elif isinstance(action, Castle):
            side = action.castling_side
            row = side.home_row
            board.update(Coordinate(row, CASTLED_KING_COL), None)
            board.update(Coordinate(row, CASTLED_ROOK_COL), None)
            board.update(Coordinate(row, KING_HOME_COL), Piece(side, Rank.KING))
            board.update(Coordinate(row, ROOK_HOME_COL), Piece(side, Rank.ROOK))

        else:
            raise UnsupportedAction(f"Cannot undo {type(action).__name__}")

        self.history.pop()
        self.next_to_move = self.next_to_move.opponent

    def evaluate_with_action(self, action: Action, fn: Callable[[GameState], T]) -> T:
        """Apply ``action``, return ``fn(self)``, then revert.

        The state is rolled back to the history length seen on entry even if
        ``advance`` or ``fn`` raises.
        """
        depth = len(self.history)
        try:
            self.advance(action)
            return fn(self)
        finally:
            while len(self.history) > depth:
                self.undo()
