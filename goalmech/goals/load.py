# goalmech/goals/load.py
"""Point load goal: a constant force (N) on one particle."""

from typing import Sequence

import numpy as np

from ..geometry import as_point
from ..kernel.goal import Goal, Particle
from ..results import LoadResult


class LoadGoal(Goal):
    """
    Constant nodal force.

    With weighting 1 the move is the force itself, so in the weighted
    average it balances the weighting × move of the other goals.
    """

    def __init__(self, point, force):
        self._init_buffers([point], [1.0])
        self.force = as_point(force)
        self.move[0] = self.force

    def scaled(self, factor: float) -> 'LoadGoal':
        """New load at the same point with force × factor."""
        return LoadGoal(self.ppos[0], self.force * factor)

    def calculate(self, particles: Sequence[Particle]) -> None:
        self.move[0] = self.force

    def output(self, particles: Sequence[Particle]) -> LoadResult:
        return LoadResult(
            point=particles[self.pindex[0]].position.copy(),
            load_kn=np.array(self.force) * 1e-3,
        )
