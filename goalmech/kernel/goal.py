# goalmech/kernel/goal.py
"""
GOAL CONTRACT: The Unit of Force Behaviour
==========================================

PURPOSE:
--------
A goal is evaluated once per relaxation iteration against the particles it
touches. It never moves particles itself: it writes a correction vector per
particle into its private `move` buffer (and, for orientation-bearing goals,
a rotation vector into `torque`). The solver combines all goals'
corrections as a weighted average:

    Δx_p = Σ_g (w_g · move_g) / Σ_g w_g

so `weighting × move` is a force in N, and equilibrium of a particle means
the weighted corrections of all goals acting on it cancel.

LIFECYCLE:
----------
1. Construction: reference geometry (`ppos`) and rest state are fixed.
2. Registration: the solver fills `pindex` (one global particle index per
   slot in `ppos`).
3. Evaluation: `calculate(particles)` recomputes `move`/`torque` from the
   current particle state and the fixed rest state. A goal that needs the
   particle orientations for its rest state binds them on the first call.
4. Output: `output(particles)` returns a frozen result record.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from ..geometry import Plane, as_point


class ConfigurationError(ValueError):
    """Raised when a goal is constructed from physically invalid inputs."""
    pass


class DegenerateGeometryError(ConfigurationError):
    """Raised when construction geometry is degenerate (e.g. zero length)."""
    pass


class FreeSupportWarning(UserWarning):
    """Issued when a support goal constrains no degree of freedom."""
    pass


@dataclass
class Particle:
    """
    A point with an orientation frame, owned and updated by the solver.

    Attributes:
    -----------
    position : np.ndarray
        Current position (m), shape (3,)
    orientation : Rotation
        Rotation from the world frame onto the particle frame
    """
    position: np.ndarray
    orientation: Rotation = field(default_factory=Rotation.identity)

    def __post_init__(self):
        self.position = as_point(self.position)

    @property
    def plane(self) -> Plane:
        return Plane.from_rotation(self.position, self.orientation)


class Goal(ABC):
    """
    Base class for all goals.

    Subclasses set `ppos`, `weighting` (and optionally `torque_weighting`,
    `initial_orientation`) in __init__ by calling `_init_buffers`, and
    implement `calculate` and `output`.
    """

    ppos: np.ndarray
    pindex: List[int]
    move: np.ndarray
    weighting: np.ndarray
    torque: Optional[np.ndarray] = None
    torque_weighting: Optional[np.ndarray] = None
    initial_orientation: Optional[List[Plane]] = None

    def _init_buffers(
        self,
        points: Sequence,
        weighting: Sequence[float],
        torque_weighting: Optional[Sequence[float]] = None,
        initial_orientation: Optional[List[Plane]] = None,
    ) -> None:
        self.ppos = np.array([as_point(p) for p in points], dtype=float)
        n = len(self.ppos)
        self.pindex = list(range(n))
        self.move = np.zeros((n, 3))
        self.weighting = np.asarray(weighting, dtype=float).reshape(n)
        if np.any(self.weighting <= 0.0):
            raise ConfigurationError(
                f"{type(self).__name__}: weighting must be strictly positive, got {self.weighting}"
            )
        if torque_weighting is not None:
            self.torque = np.zeros((n, 3))
            self.torque_weighting = np.asarray(torque_weighting, dtype=float).reshape(n)
            if initial_orientation is None:
                initial_orientation = [Plane.world_xy(p) for p in self.ppos]
            self.initial_orientation = list(initial_orientation)

    @property
    def has_torque(self) -> bool:
        return self.torque is not None

    def positions_of_interest(self) -> np.ndarray:
        """Reference positions, read once by the solver at registration."""
        return self.ppos.copy()

    def axis_weighting(self) -> np.ndarray:
        """Per-particle, per-axis weighting used by the solver, shape (n, 3)."""
        return np.repeat(self.weighting[:, None], 3, axis=1)

    def torque_axis_weighting(self) -> Optional[np.ndarray]:
        if self.torque_weighting is None:
            return None
        return np.repeat(self.torque_weighting[:, None], 3, axis=1)

    def evaluate(self, particles: Sequence[Particle]) -> None:
        """Recompute the move/torque buffers from the current particle state."""
        self.calculate(particles)

    @abstractmethod
    def calculate(self, particles: Sequence[Particle]) -> None:
        ...

    @abstractmethod
    def output(self, particles: Sequence[Particle]):
        ...

    def _positions(self, particles: Sequence[Particle]) -> List[np.ndarray]:
        return [particles[i].position for i in self.pindex]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={len(self.ppos)}, pindex={self.pindex})"
