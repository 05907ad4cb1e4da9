"""
Monte Carlo Tree Search - UCB1-guided search with rollouts.

Each iteration:
1. Selection: descend while the node has children and has been visited,
   picking the child with the highest UCB1 value
2. Expansion: a visited node that is still playing gets one child per
   direction that actually moves a tile
3. Simulation: play the first succeeding direction (UP, DOWN, LEFT, RIGHT)
   until the game ends or the move limit is hit, then evaluate the board
4. Backpropagation: update the reached node (NODE mode) or every node on
   the path back to the root (PATH mode)

Nodes live in a flat arena (MCTSTree.nodes) and refer to each other by
index, so there is no recursive ownership to unwind.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging
import math

from ..engine_core.game import GameState
from ..engine_core.moves import ALL_DIRECTIONS, Direction
from ..errors import InvalidOperationError
from .evaluator import BoardEvaluator

if TYPE_CHECKING:
    from ..engine_core.game import Game

logger = logging.getLogger(__name__)

EXPLORATION_CONSTANT = 1.414
ROLLOUT_MOVE_LIMIT = 1000
ROOT = 0


class Backpropagation(Enum):
    """Which nodes receive a rollout result."""
    NODE = "node"  # Only the node reached by selection/expansion
    PATH = "path"  # Every node from the reached node up to the root


@dataclass
class MCTSNode:
    """
    A search-tree node.

    Holds the game snapshot reached by last_move from the parent
    (last_move is None at the root).
    """
    game: Game
    parent: int | None = None
    last_move: Direction | None = None
    children: list[int] = field(default_factory=list)
    visits: int = 0
    total_score: float = 0.0

    @property
    def average_score(self) -> float:
        if self.visits == 0:
            return 0.0
        return self.total_score / self.visits


def ucb1(total_score: float, visits: int, parent_visits: int, exploration: float) -> float:
    """
    Upper confidence bound for a child.

    Unvisited children score +inf so every child is tried once before
    exploitation starts.
    """
    if visits == 0:
        return math.inf
    exploitation = total_score / visits
    if parent_visits <= 1:
        return exploitation
    return exploitation + exploration * math.sqrt(math.log(parent_visits) / visits)


class MCTSTree:
    """
    Arena of MCTS nodes rooted at a snapshot of the searched game.
    """

    def __init__(self, game: Game):
        self.nodes: list[MCTSNode] = [MCTSNode(game=game.clone())]

    @property
    def root(self) -> MCTSNode:
        return self.nodes[ROOT]

    def node(self, index: int) -> MCTSNode:
        return self.nodes[index]

    def children_of(self, index: int) -> list[MCTSNode]:
        return [self.nodes[i] for i in self.nodes[index].children]

    def add_child(self, parent: int, game: Game, move: Direction) -> int:
        self.nodes.append(MCTSNode(game=game, parent=parent, last_move=move))
        child = len(self.nodes) - 1
        self.nodes[parent].children.append(child)
        return child

    def select_child(self, index: int, exploration: float = EXPLORATION_CONSTANT) -> int:
        """
        Child index with the highest UCB1 value (first wins ties).

        Precondition: the node has children.
        """
        node = self.nodes[index]
        if not node.children:
            raise InvalidOperationError("Cannot select child from empty children list")

        best_index = node.children[0]
        best_ucb = -math.inf
        for child_index in node.children:
            child = self.nodes[child_index]
            value = ucb1(child.total_score, child.visits, node.visits, exploration)
            if value > best_ucb:
                best_ucb = value
                best_index = child_index
        return best_index

    def expand(self, index: int, game: Game):
        """Add one child per direction that moves a tile from game."""
        for direction in ALL_DIRECTIONS:
            candidate = game.clone()
            if candidate.make_move(direction):
                self.add_child(index, candidate, direction)

    def backpropagate(self, index: int, score: float, mode: Backpropagation = Backpropagation.NODE):
        current: int | None = index
        while current is not None:
            node = self.nodes[current]
            node.visits += 1
            node.total_score += score
            if mode == Backpropagation.NODE:
                break
            current = node.parent

    def best_move(self) -> Direction:
        """Root child with the most visits (first wins ties)."""
        children = self.children_of(ROOT)
        if not children:
            raise InvalidOperationError("No valid moves")

        best = children[0]
        for child in children[1:]:
            if child.visits > best.visits:
                best = child
        return best.last_move


def rollout(game: Game, evaluator: BoardEvaluator, move_limit: int = ROLLOUT_MOVE_LIMIT) -> float:
    """
    Play game forward in place and return the static evaluation of the final board.

    Each step takes the first direction (in fixed order) that moves a tile.
    """
    moves = 0
    while game.state == GameState.PLAYING and moves < move_limit:
        if not any(game.make_move(direction) for direction in ALL_DIRECTIONS):
            break
        moves += 1
    return evaluator.evaluate(game.board)


@dataclass
class MCTSSearch:
    """
    Runs MCTS iterations over clones of a game.

    Usage:
        search = MCTSSearch(simulation_count=100)
        direction = search.best_move(game)
    """
    simulation_count: int = 100
    evaluator: BoardEvaluator = field(default_factory=BoardEvaluator)
    exploration: float = EXPLORATION_CONSTANT
    backpropagation: Backpropagation = Backpropagation.NODE
    rollout_limit: int = ROLLOUT_MOVE_LIMIT

    def build_tree(self, game: Game) -> MCTSTree:
        tree = MCTSTree(game)

        for _ in range(self.simulation_count):
            current = ROOT
            state = game.clone()

            # Selection
            while tree.node(current).children and tree.node(current).visits > 0:
                current = tree.select_child(current, self.exploration)
                state.make_move(tree.node(current).last_move)

            # Expansion
            if tree.node(current).visits > 0 and state.state == GameState.PLAYING:
                tree.expand(current, state)

            # Simulation
            result = rollout(state.clone(), self.evaluator, self.rollout_limit)

            # Backpropagation
            tree.backpropagate(current, result, self.backpropagation)

        return tree

    def best_move(self, game: Game) -> Direction:
        tree = self.build_tree(game)
        direction = tree.best_move()
        logger.debug(
            "MCTS picked %s after %d iterations (%d nodes, visits=%s)",
            direction.value,
            self.simulation_count,
            len(tree.nodes),
            {child.last_move.value: child.visits for child in tree.children_of(ROOT)},
        )
        return direction
