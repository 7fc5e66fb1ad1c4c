"""Board geometry, coordinates, starting layout, and text-based rendering."""

from __future__ import annotations

from dataclasses import dataclass

from termchess.game.errors import InvalidCoordinate

BOARD_SIZE = 8

# Column labels for notation
COL_LABELS = "abcdefgh"
# Row labels for notation (1-indexed, row 0 = "1", row 7 = "8")
ROW_LABELS = "12345678"

# Back rank from the a-file to the h-file
BACK_RANK = "RNBQKBNR"

# Starting positions: dict mapping (row, col) -> (rank_char, side)
# White on rows 0-1 (bottom), Black on rows 6-7 (top)
STARTING_POSITIONS: dict[tuple[int, int], tuple[str, int]] = {}
for _col, _char in enumerate(BACK_RANK):
    STARTING_POSITIONS[(0, _col)] = (_char, 0)
    STARTING_POSITIONS[(1, _col)] = ("P", 0)
    STARTING_POSITIONS[(6, _col)] = ("P", 1)
    STARTING_POSITIONS[(7, _col)] = (_char, 1)
del _col, _char


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, order=True)
class Coordinate:
    """A square on the board, 0-indexed. Ordering is row-major."""
    row: int
    column: int

    def __post_init__(self):
        if not (isinstance(self.row, int) and isinstance(self.column, int)):
            raise InvalidCoordinate(f"Invalid board coordinates: {self.row!r}, {self.column!r}")
        if not in_bounds(self.row, self.column):
            raise InvalidCoordinate(f"Invalid board coordinates: {self.row}, {self.column}")

    @classmethod
    def from_human(cls, text: str) -> Coordinate:
        """Parse algebraic notation like 'e4' (row 3, column 4)."""
        if not isinstance(text, str) or len(text.strip()) != 2:
            raise InvalidCoordinate(f"Coordinate must be 2 characters long: {text!r}")
        text = text.strip().lower()
        if text[0] not in COL_LABELS or text[1] not in ROW_LABELS:
            raise InvalidCoordinate(f"Bad coordinate {text!r}")
        return cls(ROW_LABELS.index(text[1]), COL_LABELS.index(text[0]))

    def to_human(self) -> str:
        return COL_LABELS[self.column] + ROW_LABELS[self.row]

    def __str__(self) -> str:
        return self.to_human()

    def __repr__(self) -> str:
        return f"Coordinate({self.to_human()})"


def rc_to_notation(row: int, col: int) -> str:
    """Convert (row, col) to algebraic notation like 'a1'."""
    return Coordinate(row, col).to_human()


def notation_to_rc(sq: str) -> tuple[int, int]:
    """Convert algebraic notation like 'a1' to (row, col)."""
    coord = Coordinate.from_human(sq)
    return (coord.row, coord.column)


def render_board(board, next_to_move: int | None = None,
                 move_number: int | None = None) -> str:
    """Render the board as a text string.

    Args:
        board: 8x8 list of lists. Each cell is None or (rank_char, side).
        next_to_move: Optional side to move (0=White, 1=Black).
        move_number: Optional full-move number.
    """
    lines = []

    if next_to_move is not None:
        side_name = "White" if next_to_move == 0 else "Black"
        if move_number is not None:
            lines.append(f"Move {move_number} - {side_name} to move")
        else:
            lines.append(f"{side_name} to move")
        lines.append("")

    lines.append("    a   b   c   d   e   f   g   h")
    lines.append("  +---+---+---+---+---+---+---+---+")

    for row in range(BOARD_SIZE - 1, -1, -1):
        row_str = f"{row + 1} |"
        for col in range(BOARD_SIZE):
            cell = board[row][col]
            if cell is not None:
                char, side = cell
                # Lowercase for black, uppercase for white
                display = char if side == 0 else char.lower()
                row_str += f" {display} |"
            else:
                row_str += "   |"
        row_str += f" {row + 1}"
        lines.append(row_str)
        lines.append("  +---+---+---+---+---+---+---+---+")

    lines.append("    a   b   c   d   e   f   g   h")

    return "\n".join(lines)
