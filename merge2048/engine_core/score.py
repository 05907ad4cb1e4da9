"""
Score - Current, best and last-merge counters.

Invariant: best >= current after every update, and best never
decreases except through reset_all().
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Score:
    current: int = 0
    best: int = 0
    last_move: int = 0  # Points from the most recent merge event

    def add_merge_points(self, merged_value: int):
        """Award the value of a freshly merged tile."""
        points = self.calculate_merge_score(merged_value)
        self.last_move = points
        self.current += points
        if self.current > self.best:
            self.best = self.current

    def clear_last_move(self):
        """Forget the last merge, called at the start of every move."""
        self.last_move = 0

    def reset_current(self):
        """Reset for a new game (best is kept)."""
        self.current = 0
        self.last_move = 0

    def reset_all(self):
        self.current = 0
        self.best = 0
        self.last_move = 0

    @staticmethod
    def calculate_merge_score(merged_value: int) -> int:
        return merged_value

    def clone(self) -> Score:
        return Score(current=self.current, best=self.best, last_move=self.last_move)
