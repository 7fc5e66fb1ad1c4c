"""Fixed-depth negamax search with alpha-beta pruning.

Score convention: every node is scored from the perspective of the side to
move at that node, and a child's score is negated when passed up. Children
are explored in place with ``GameState.evaluate_with_action`` (apply, recurse,
undo), so a search never clones the state and leaves it exactly as it found it.

Positions with no legal action are terminal: checkmate scores ``-MATE_SCORE``
adjusted by ply so that faster mates are preferred, stalemate scores zero.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from termchess.engine.evaluate import evaluate_board
from termchess.game.rules import is_in_check, legal_actions
from termchess.game.state import Action, Capture, GameState

logger = logging.getLogger("termchess.search")

DEFAULT_DEPTH = 3
MATE_SCORE = 1_000_000
INFINITY = MATE_SCORE * 10


class SearchTimeout(Exception):
    """Raised inside the search tree when the deadline passes."""


@dataclass
class SearchResult:
    action: Optional[Action]
    score: int
    nodes: int
    elapsed: float
    completed: bool = True


def order_actions(actions: list[Action]) -> list[Action]:
    """Captures first, most valuable victim first; quiet moves keep their order."""
    return sorted(actions, key=lambda a: -a.captured.value if isinstance(a, Capture) else 1)


class AlphaBetaSearch:
    """Negamax alpha-beta searcher.

    Args:
        depth: Plies searched below the root (1 = evaluate each root action).
        time_limit: Optional wall-clock budget in seconds. When it runs out the
            best root action searched so far is returned.
    """

    def __init__(self, depth: int = DEFAULT_DEPTH, time_limit: Optional[float] = None):
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.time_limit = time_limit
        self.nodes = 0
        self._deadline: Optional[float] = None

    def search(self, state: GameState) -> SearchResult:
        """Pick the best legal action for the side to move in ``state``."""
        start = time.monotonic()
        self.nodes = 0
        self._deadline = start + self.time_limit if self.time_limit is not None else None

        actions = order_actions(legal_actions(state))
        if not actions:
            return SearchResult(None, 0, 0, time.monotonic() - start)

        best_action: Optional[Action] = None
        best_score = -INFINITY
        alpha, beta = -INFINITY, INFINITY
        completed = True

        for action in actions:
            try:
                score = state.evaluate_with_action(
                    action, lambda s: -self._negamax(s, self.depth - 1, -beta, -alpha, 1))
            except SearchTimeout:
                completed = False
                logger.warning("Search deadline hit after %d nodes, %d/%d root actions",
                               self.nodes, actions.index(action), len(actions))
                break
            if score > best_score:
                best_score, best_action = score, action
            alpha = max(alpha, score)

        if best_action is None:
            # Deadline passed before any root action finished
            best_action, best_score = actions[0], 0

        elapsed = time.monotonic() - start
        logger.debug("Searched %d nodes in %.2fs, best %r (score %d)",
                     self.nodes, elapsed, best_action, best_score)
        return SearchResult(best_action, best_score, self.nodes, elapsed, completed)

    def _negamax(self, state: GameState, depth: int, alpha: int, beta: int, ply: int) -> int:
        self.nodes += 1
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise SearchTimeout()

        side = state.next_to_move
        if depth == 0:
            return evaluate_board(state, side)

        actions = legal_actions(state, side)
        if not actions:
            if is_in_check(state, side):
                return -MATE_SCORE + ply
            return 0

        best = -INFINITY
        for action in order_actions(actions):
            score = state.evaluate_with_action(
                action, lambda s: -self._negamax(s, depth - 1, -beta, -alpha, ply + 1))
            best = max(best, score)
            alpha = max(alpha, score)
            if alpha >= beta:
                break
        return best


def make_move(state: GameState, depth: int = DEFAULT_DEPTH,
              time_limit: Optional[float] = None) -> Optional[Action]:
    """Chosen action for the side to move, or None if it has no legal action."""
    return AlphaBetaSearch(depth=depth, time_limit=time_limit).search(state).action
