"""
AI Policy - Move selection for computer-controlled play.

An AIPlayer takes a game and returns a recommended direction.
The algorithm set is closed:
- GREEDY: best immediate score after one move
- EXPECTIMAX: alternating max/chance search to a fixed depth
- MCTS: UCB1 tree search with rollouts

Every strategy works on clones; the game passed in is never modified.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable
import logging
import math

from ..engine_core.board import Tile
from ..engine_core.game import GameState
from ..engine_core.moves import ALL_DIRECTIONS, Direction
from .evaluator import BoardEvaluator
from .mcts import ROOT, Backpropagation, MCTSSearch

if TYPE_CHECKING:
    from ..engine_core.game import Game

logger = logging.getLogger(__name__)

FALLBACK_DIRECTION = Direction.UP


class AIAlgorithm(Enum):
    """Available search strategies."""
    GREEDY = "greedy"
    EXPECTIMAX = "expectimax"
    MCTS = "mcts"


# Default (max_depth, simulation_count) per algorithm
DEFAULT_SETTINGS: dict[AIAlgorithm, tuple[int, int]] = {
    AIAlgorithm.GREEDY: (1, 1),
    AIAlgorithm.EXPECTIMAX: (4, 1),
    AIAlgorithm.MCTS: (1000, 100),
}


@dataclass
class BotDecision:
    """
    A move recommendation.

    Contains:
    - The direction to play
    - Per-direction scores for the moves that were evaluated (for hints/debugging)
    """
    direction: Direction
    algorithm: AIAlgorithm
    best_score: float = 0.0
    move_scores: dict[Direction, float] = field(default_factory=dict)
    evaluation_details: dict[str, Any] = field(default_factory=dict)

    @property
    def evaluated_moves(self) -> int:
        return len(self.move_scores)


@dataclass
class AIPlayer:
    """
    Stateless move selector.

    Usage:
        ai = AIPlayer(AIAlgorithm.EXPECTIMAX)
        direction = ai.get_best_move(game)
        game.make_move(direction)

    max_depth and simulation_count default per algorithm (see DEFAULT_SETTINGS).
    For MCTS, max_depth caps the number of moves in each rollout.
    """
    algorithm: AIAlgorithm
    max_depth: int | None = None
    simulation_count: int | None = None
    evaluator: BoardEvaluator = field(default_factory=BoardEvaluator)
    backpropagation: Backpropagation = Backpropagation.NODE

    def __post_init__(self):
        default_depth, default_simulations = DEFAULT_SETTINGS[self.algorithm]
        if self.max_depth is None:
            self.max_depth = default_depth
        if self.simulation_count is None:
            self.simulation_count = default_simulations

    def with_max_depth(self, depth: int) -> AIPlayer:
        return replace(self, max_depth=depth)

    def with_simulation_count(self, count: int) -> AIPlayer:
        return replace(self, simulation_count=count)

    def get_best_move(self, game: Game) -> Direction:
        """Recommended direction for the current game state."""
        return self.decide(game).direction

    def decide(self, game: Game) -> BotDecision:
        """Recommended direction plus the scores behind it."""
        strategy = self._get_strategy(self.algorithm)
        decision = strategy(game)
        logger.debug(
            "%s chose %s (score %.2f, %d candidates)",
            self.algorithm.value,
            decision.direction.value,
            decision.best_score,
            decision.evaluated_moves,
        )
        return decision

    def _get_strategy(self, algorithm: AIAlgorithm) -> Callable[[Game], BotDecision]:
        strategies = {
            AIAlgorithm.GREEDY: self._greedy,
            AIAlgorithm.EXPECTIMAX: self._expectimax,
            AIAlgorithm.MCTS: self._mcts,
        }
        return strategies[algorithm]

    # ------------------------------------------------------------------
    # Greedy
    # ------------------------------------------------------------------

    def _greedy(self, game: Game) -> BotDecision:
        """
        Highest immediate score after one move.

        Only directions that move a tile are candidates; ties keep the first in
        enumeration order. UP is returned when no direction moves anything.
        """
        best_score = -math.inf
        best_direction = FALLBACK_DIRECTION
        scores: dict[Direction, float] = {}

        for direction in ALL_DIRECTIONS:
            candidate = game.clone()
            if not candidate.make_move(direction):
                continue
            score = candidate.score.current
            scores[direction] = score
            if score > best_score:
                best_score = score
                best_direction = direction

        return BotDecision(
            direction=best_direction,
            algorithm=AIAlgorithm.GREEDY,
            best_score=best_score if scores else 0.0,
            move_scores=scores,
        )

    # ------------------------------------------------------------------
    # Expectimax
    # ------------------------------------------------------------------

    def _expectimax(self, game: Game) -> BotDecision:
        best_score = -math.inf
        best_direction = FALLBACK_DIRECTION
        scores: dict[Direction, float] = {}
        depth = max(self.max_depth - 1, 0)

        for direction in ALL_DIRECTIONS:
            candidate = game.clone()
            if not candidate.make_move(direction):
                continue
            score = self._expectimax_search(candidate, depth, maximizing=False)
            scores[direction] = score
            if score > best_score:
                best_score = score
                best_direction = direction

        return BotDecision(
            direction=best_direction,
            algorithm=AIAlgorithm.EXPECTIMAX,
            best_score=best_score if scores else 0.0,
            move_scores=scores,
            evaluation_details={"depth": self.max_depth, "samples": self.simulation_count},
        )

    def _expectimax_search(self, game: Game, depth: int, maximizing: bool) -> float:
        if depth == 0 or game.state != GameState.PLAYING:
            return self.evaluator.evaluate(game.board)
        if maximizing:
            return self._max_layer(game, depth)
        return self._chance_layer(game, depth)

    def _max_layer(self, game: Game, depth: int) -> float:
        """Best score over the directions that move; static value if none do."""
        best = -math.inf
        for direction in ALL_DIRECTIONS:
            candidate = game.clone()
            if candidate.make_move(direction):
                best = max(best, self._expectimax_search(candidate, depth - 1, maximizing=False))
        if best == -math.inf:
            return self.evaluator.evaluate(game.board)
        return best

    def _chance_layer(self, game: Game, depth: int) -> float:
        """
        Average over a bounded sample of tile spawns.

        Up to simulation_count distinct empty cells are sampled with a copy of
        the game's own RNG, so the search is reproducible for seeded games.
        """
        empty = game.board.empty_positions()
        if not empty:
            return self.evaluator.evaluate(game.board)

        sampler = game.rng.clone()
        positions = sampler.sample(empty, self.simulation_count)
        if not positions:
            return self.evaluator.evaluate(game.board)

        total = 0.0
        for row, col in positions:
            candidate = game.clone()
            candidate.board.set_tile(row, col, Tile(sampler.gen_tile_value()))
            total += self._expectimax_search(candidate, depth - 1, maximizing=True)
        return total / len(positions)

    # ------------------------------------------------------------------
    # MCTS
    # ------------------------------------------------------------------

    def _mcts(self, game: Game) -> BotDecision:
        search = MCTSSearch(
            simulation_count=self.simulation_count,
            evaluator=self.evaluator,
            backpropagation=self.backpropagation,
            rollout_limit=self.max_depth,
        )
        tree = search.build_tree(game)
        direction = tree.best_move()
        children = tree.children_of(ROOT)
        chosen = next(child for child in children if child.last_move == direction)

        return BotDecision(
            direction=direction,
            algorithm=AIAlgorithm.MCTS,
            best_score=chosen.average_score,
            move_scores={child.last_move: child.average_score for child in children},
            evaluation_details={
                "visits": {child.last_move: child.visits for child in children},
                "nodes": len(tree.nodes),
            },
        )
