"""Search opponent: evaluation, alpha-beta search, and players."""

from termchess.engine.evaluate import evaluate_board
from termchess.engine.search import AlphaBetaSearch, SearchResult, make_move
from termchess.engine.players import AlphaBetaAgent, RandomAgent, create_agent, play_game

__all__ = [
    "evaluate_board", "AlphaBetaSearch", "SearchResult", "make_move",
    "AlphaBetaAgent", "RandomAgent", "create_agent", "play_game",
]
