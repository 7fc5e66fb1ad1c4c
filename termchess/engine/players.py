"""Automated players and a game loop for self-play and matches."""

from __future__ import annotations

import logging
import random
from typing import Optional

from termchess.engine.search import DEFAULT_DEPTH, AlphaBetaSearch
from termchess.game.notation import action_to_notation
from termchess.game.rules import GameResult, game_result, legal_actions
from termchess.game.state import Action, GameState

logger = logging.getLogger("termchess.players")


class Agent:
    """Base agent interface."""

    name = "agent"

    def get_action(self, state: GameState) -> Optional[Action]:
        raise NotImplementedError


class RandomAgent(Agent):
    """Plays random legal actions."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def get_action(self, state: GameState) -> Optional[Action]:
        actions = legal_actions(state)
        if not actions:
            return None
        return self.rng.choice(actions)


class AlphaBetaAgent(Agent):
    """Plays using negamax alpha-beta search."""

    name = "alphabeta"

    def __init__(self, depth: int = DEFAULT_DEPTH, time_limit: Optional[float] = None):
        self.search = AlphaBetaSearch(depth=depth, time_limit=time_limit)

    def get_action(self, state: GameState) -> Optional[Action]:
        return self.search.search(state).action


def create_agent(config: dict) -> Agent:
    """Create an agent from a player configuration.

    Args:
        config: Dict with a 'type' key ('random' or 'alphabeta') plus the
            agent's options ('seed', 'depth', 'time_limit').
    """
    agent_type = config.get("type", "alphabeta")
    if agent_type == "random":
        return RandomAgent(seed=config.get("seed"))
    elif agent_type == "alphabeta":
        return AlphaBetaAgent(depth=config.get("depth", DEFAULT_DEPTH),
                              time_limit=config.get("time_limit"))
    raise ValueError(f"Unknown agent type: {agent_type!r}")


def play_game(white: Agent, black: Agent, state: Optional[GameState] = None,
              max_moves: int = 200) -> tuple[GameState, GameResult]:
    """Play agents against each other until the game ends or ``max_moves`` is hit.

    Returns the final state and its result (ONGOING if the move cap was reached).
    """
    if state is None:
        state = GameState()

    agents = (white, black)
    while len(state.history) < max_moves:
        agent = agents[state.next_to_move]
        action = agent.get_action(state)
        if action is None:
            break
        logger.debug("%s (%s) plays %s", state.next_to_move.name.title(),
                     agent.name, action_to_notation(action))
        state.advance(action)

    result = game_result(state)
    logger.info("Game finished after %d actions: %s", len(state.history), result.value)
    return state, result
