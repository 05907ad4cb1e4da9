"""
Board Evaluator - Static heuristic score for a board position.

Used as the leaf heuristic by expectimax and as the rollout score by MCTS.
The score combines:
- Position weights (corners and edges count more than the interior)
- Corner bonus (tiles sitting in a corner)
- Scattering penalty (small tiles anywhere on the board)
- Smoothness term (large differences between neighbours reduce the score)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.board import Board


DEFAULT_POSITION_WEIGHTS: tuple[tuple[float, ...], ...] = (
    (4.0, 2.0, 2.0, 4.0),
    (2.0, 1.0, 1.0, 2.0),
    (2.0, 1.0, 1.0, 2.0),
    (4.0, 2.0, 2.0, 4.0),
)


@dataclass
class EvaluationWeights:
    """
    Weights for the board evaluator.

    Cells outside position_weights use weight 1, so boards of any size
    can be evaluated.
    """
    position_weights: tuple[tuple[float, ...], ...] = DEFAULT_POSITION_WEIGHTS
    corner_multiplier: float = 2.0
    small_tile_threshold: int = 8
    small_tile_penalty: float = 0.5
    smoothness_weight: float = 0.1

    def weight_at(self, row: int, col: int) -> float:
        if row < len(self.position_weights) and col < len(self.position_weights[row]):
            return self.position_weights[row][col]
        return 1.0


@dataclass
class StateEvaluation:
    """
    Result of evaluating a board.
    """
    total_score: float
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class BoardEvaluator:
    """
    Scores boards with weighted heuristics.

    Usage:
        evaluator = BoardEvaluator()
        value = evaluator.evaluate(game.board)
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, board: Board) -> float:
        return self.evaluate_breakdown(board).total_score

    def evaluate_breakdown(self, board: Board) -> StateEvaluation:
        rows = board.to_rows()
        features = {
            "position": self._position_score(rows),
            "corner_bonus": self._corner_bonus(rows),
            "scatter_penalty": self._scatter_penalty(rows),
            "smoothness": self._smoothness(rows),
        }
        total = (
            features["position"]
            + features["corner_bonus"]
            - features["scatter_penalty"]
            + features["smoothness"]
        )
        return StateEvaluation(total_score=total, feature_breakdown=features)

    def _position_score(self, rows: list[list[int]]) -> float:
        score = 0.0
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value:
                    score += value * self.weights.weight_at(r, c)
        return score

    def _corner_bonus(self, rows: list[list[int]]) -> float:
        last = len(rows) - 1
        corners = [(0, 0), (0, last), (last, 0), (last, last)]
        return sum(
            rows[r][c] * self.weights.corner_multiplier
            for r, c in corners
            if rows[r][c]
        )

    def _scatter_penalty(self, rows: list[list[int]]) -> float:
        small = sum(
            1
            for row in rows
            for value in row
            if value and value <= self.weights.small_tile_threshold
        )
        return small * self.weights.small_tile_penalty

    def _smoothness(self, rows: list[list[int]]) -> float:
        """Negative sum of neighbour differences (a penalty despite the name)."""
        size = len(rows)
        total = 0.0
        for r in range(size):
            for c in range(size):
                value = rows[r][c]
                if not value:
                    continue
                if c + 1 < size and rows[r][c + 1]:
                    total -= abs(value - rows[r][c + 1]) * self.weights.smoothness_weight
                if r + 1 < size and rows[r + 1][c]:
                    total -= abs(value - rows[r + 1][c]) * self.weights.smoothness_weight
        return total
