"""Savings goal progress."""
import math
from typing import Iterable, List
from finzen.models.goal import SavingsGoal
from finzen.models.summary import GoalProgress


class GoalProgressCalculator:
    """Computes completion percentages for savings goals."""

    def progress(self, goal: SavingsGoal) -> GoalProgress:
        """
        Progress of a single goal.

        ``raw_percent`` may exceed 100 for over-funded goals; ``bar_width`` is
        clamped to [0, 100]. A goal without a positive target reports 0% and
        is marked invalid.
        """
        target = goal.target_amount or 0.0
        if target <= 0:
            return GoalProgress(
                goal=goal,
                raw_percent=0.0,
                percent=0,
                bar_width=0.0,
                remaining_amount=0.0,
                valid=False,
            )

        raw = goal.current_amount / target * 100
        return GoalProgress(
            goal=goal,
            raw_percent=raw,
            percent=math.floor(raw + 0.5),
            bar_width=min(max(raw, 0.0), 100.0),
            remaining_amount=max(target - goal.current_amount, 0.0),
        )

    def progress_all(self, goals: Iterable[SavingsGoal]) -> List[GoalProgress]:
        return [self.progress(goal) for goal in goals]
