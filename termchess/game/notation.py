"""Move notation emitter.

Action formats:
  Pe2-e4     Move pawn from e2 to e4
  Qd1xd8     Capture: queen on d1 takes the piece on d8
  O-O-O      Queen-side castling
  Pe7-e8=Q   Promotion (declared only, never generated)

Game format (similar to PGN):
  [White "alphabeta"]
  [Black "random"]
  [Result "1-0"]

  1. Pe2-e4 Pe7-e5
  2. Ng1-f3 Nb8-c6
  ...
"""

from __future__ import annotations

from typing import Optional

from termchess.game.rules import GameResult
from termchess.game.state import Action, Capture, Castle, GameState, MovePiece, Promotion, Side


def action_to_notation(action: Action) -> str:
    """Convert an action to its notation string."""
    if isinstance(action, MovePiece):
        return f"{action.piece.char}{action.from_sq}-{action.to_sq}"

    elif isinstance(action, Capture):
        return f"{action.mover.char}{action.from_sq}x{action.to_sq}"

    elif isinstance(action, Castle):
        return "O-O-O"

    elif isinstance(action, Promotion):
        return f"{action.piece.char}{action.from_sq}-{action.to_sq}={action.promoted_to.char}"

    raise ValueError(f"Unknown action type: {type(action)}")


def result_string(state: GameState, result: GameResult) -> str:
    """PGN-style result token for a finished (or unfinished) game."""
    if result == GameResult.CHECKMATE:
        return "0-1" if state.next_to_move == Side.WHITE else "1-0"
    if result == GameResult.STALEMATE:
        return "1/2-1/2"
    return "*"


def game_to_notation(history: list[Action],
                     headers: Optional[dict[str, str]] = None,
                     result: Optional[str] = None) -> str:
    """Format an action history as a numbered game record.

    Args:
        history: Actions in the order they were played, White first.
        headers: Optional dict of header key-value pairs.
        result: Game result string ("1-0", "0-1", "1/2-1/2", "*").
    """
    lines = []

    if headers:
        for key, value in headers.items():
            lines.append(f'[{key} "{value}"]')
    if result:
        lines.append(f'[Result "{result}"]')
    if headers or result:
        lines.append("")

    move_strs = [action_to_notation(action) for action in history]
    for i in range(0, len(move_strs), 2):
        lines.append(f"{i // 2 + 1}. " + " ".join(move_strs[i:i + 2]))

    if result:
        lines.append(result)

    return "\n".join(lines)
