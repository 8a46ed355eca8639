# goalmech/kernel/solver.py
"""
PARTICLE SOLVER: Weighted Projection of Goal Corrections
========================================================

PURPOSE:
--------
The goals only describe corrections; something has to apply them. This
module defines the protocol the buckling driver talks to (ParticleSolver)
and a reference implementation (ParticleSystem) that is enough to relax
small structures in tests and scripts.

ALGORITHM (one step):
---------------------
1. Every goal recomputes its move (and torque) buffers.
2. For each particle and each world axis:

       Δx = Σ_g w_g · move_g / Σ_g w_g

   using the per-axis weightings of the goals (axis_weighting()), so a
   support that only fixes z does not slow the particle down in x and y.
3. Positions move by Δx (plus momentum × previous velocity, if enabled).
   Orientations rotate by the weighted average rotation vector Δω:

       R ← exp(Δω) · R

4. The kinetic metric Σ|Δx|² tells the caller how far from equilibrium the
   system still is.

A fixed point of this iteration is a state where Σ w·move = 0 at every
particle, i.e. the forces of all goals on the particle are in balance.
"""

import logging
from typing import List, Optional, Protocol, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from ..config import SOLVER, SolverConfig
from .goal import ConfigurationError, Goal, Particle


logger = logging.getLogger(__name__)


class ParticleSolver(Protocol):
    """What the buckling driver needs from a particle solver."""

    def assign_indices(self, goal: Goal, tol: float) -> None:
        ...

    def step(self, goals: Sequence[Goal], use_torque: bool = True,
             threshold: float = 0.0) -> float:
        ...

    def kinetic_metric(self) -> float:
        ...

    def positions(self) -> np.ndarray:
        ...

    def outputs(self, goals: Sequence[Goal]) -> list:
        ...


class ParticleSystem:
    """
    Reference particle solver.

    Usage:
    ------
        ps = ParticleSystem()
        for g in goals:
            ps.assign_indices(g, tol=0.01)
        ps.solve(goals)
        results = ps.outputs(goals)
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config if config is not None else SOLVER
        self.particles: List[Particle] = []
        self._velocity = np.zeros((0, 3))
        self._kinetic = np.inf
        self.iterations = 0

    def __len__(self) -> int:
        return len(self.particles)

    def assign_indices(self, goal: Goal, tol: Optional[float] = None) -> None:
        """
        Map the goal's reference positions onto particles.

        A position within tol of an existing particle reuses it; otherwise a
        new particle is created, oriented by the goal's initial orientation
        when it has one.
        """
        tol = self.config.merge_tolerance if tol is None else tol
        indices = []
        created = 0
        for slot, point in enumerate(goal.positions_of_interest()):
            index = self._find(point, tol)
            if index is None:
                orientation = Rotation.identity()
                if goal.initial_orientation is not None:
                    orientation = goal.initial_orientation[slot].to_rotation()
                self.particles.append(Particle(point, orientation))
                index = len(self.particles) - 1
                created += 1
            elif goal.initial_orientation is not None:
                wanted = goal.initial_orientation[slot].to_rotation()
                if (self.particles[index].orientation.inv() * wanted).magnitude() > 1e-9:
                    logger.debug("%s: particle %d keeps the orientation of the goal that created it",
                                 type(goal).__name__, index)
            indices.append(index)

        n = len(goal.ppos)
        if not (len(indices) == n == len(goal.move) == len(goal.weighting)):
            raise ConfigurationError(
                f"{type(goal).__name__}: inconsistent buffer lengths "
                f"(ppos={n}, pindex={len(indices)}, move={len(goal.move)}, weighting={len(goal.weighting)})"
            )
        goal.pindex = indices
        self._velocity = np.vstack([self._velocity, np.zeros((created, 3))])
        logger.debug("%s -> particles %s (%d new)", type(goal).__name__, indices, created)

    def _find(self, point: np.ndarray, tol: float) -> Optional[int]:
        for i, particle in enumerate(self.particles):
            if np.linalg.norm(particle.position - point) <= tol:
                return i
        return None

    def step(self, goals: Sequence[Goal], use_torque: bool = True,
             threshold: float = 0.0) -> float:
        """
        One projection step over all goals.

        Velocities whose squared length falls below threshold are dropped
        from the momentum term. Returns the kinetic metric of the step.
        """
        n = len(self.particles)
        move_sum = np.zeros((n, 3))
        weight_sum = np.zeros((n, 3))
        torque_sum = np.zeros((n, 3))
        torque_weight_sum = np.zeros((n, 3))

        for goal in goals:
            goal.evaluate(self.particles)
            w = goal.axis_weighting()
            for slot, index in enumerate(goal.pindex):
                move_sum[index] += w[slot] * goal.move[slot]
                weight_sum[index] += w[slot]
            if use_torque and goal.has_torque:
                wt = goal.torque_axis_weighting()
                for slot, index in enumerate(goal.pindex):
                    torque_sum[index] += wt[slot] * goal.torque[slot]
                    torque_weight_sum[index] += wt[slot]

        delta = np.divide(move_sum, weight_sum, out=np.zeros_like(move_sum), where=weight_sum > 0.0)
        velocity = delta + self.config.momentum * self._velocity
        slow = np.einsum('ij,ij->i', velocity, velocity) < threshold
        velocity[slow] = delta[slow]
        self._velocity = velocity

        for i, particle in enumerate(self.particles):
            particle.position = particle.position + velocity[i]

        if use_torque:
            omega = np.divide(torque_sum, torque_weight_sum, out=np.zeros_like(torque_sum),
                              where=torque_weight_sum > 0.0)
            for i, particle in enumerate(self.particles):
                if omega[i].any():
                    particle.orientation = Rotation.from_rotvec(omega[i]) * particle.orientation

        self._kinetic = float(np.einsum('ij,ij->', velocity, velocity))
        self.iterations += 1
        return self._kinetic

    def solve(self, goals: Sequence[Goal], threshold: float = 1e-15,
              max_iterations: int = 10000, use_torque: bool = True) -> int:
        """Step until the kinetic metric drops to threshold or the cap is hit. Returns the step count."""
        for count in range(1, max_iterations + 1):
            if self.step(goals, use_torque, threshold) <= threshold:
                return count
        logger.debug("Relaxation stopped at the %d-step cap (kinetic metric %.3e)",
                     max_iterations, self._kinetic)
        return max_iterations

    def kinetic_metric(self) -> float:
        return self._kinetic

    def positions(self) -> np.ndarray:
        return np.array([p.position for p in self.particles]).reshape(-1, 3)

    def outputs(self, goals: Sequence[Goal]) -> list:
        return [goal.output(self.particles) for goal in goals]
