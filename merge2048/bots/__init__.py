"""
Bots module - Computer players for 2048.

Provides:
- AIPlayer: Greedy, expectimax and MCTS move selection
- BoardEvaluator: Static board heuristic shared by the searches
- MCTSSearch: Tree search with selectable backpropagation
"""

from .policy import AIPlayer, AIAlgorithm, BotDecision, DEFAULT_SETTINGS
from .evaluator import BoardEvaluator, EvaluationWeights, StateEvaluation
from .mcts import MCTSSearch, MCTSTree, MCTSNode, Backpropagation

__all__ = [
    "AIPlayer",
    "AIAlgorithm",
    "BotDecision",
    "DEFAULT_SETTINGS",
    "BoardEvaluator",
    "EvaluationWeights",
    "StateEvaluation",
    "MCTSSearch",
    "MCTSTree",
    "MCTSNode",
    "Backpropagation",
]
