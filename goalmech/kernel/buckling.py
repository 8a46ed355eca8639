# goalmech/kernel/buckling.py
"""
BUCKLING ANALYSIS: Incremental Loading Until the Response Runs Away
===================================================================

PURPOSE:
--------
Finds the load factor at which a relaxed structure stops responding
proportionally to its load. The load goals are scaled by an increasing
load factor and the particle system is brought back to equilibrium after
every increment. Buckling shows up as a sudden jump in the RMS of the nodal
displacements:

    LF_i = start + step · i

    RMS_i = sqrt(mean |x_node − x_node,initial|²), rounded to mm

    tangent_i = (step, RMS_i − RMS_{i−1})      ((start, RMS_0) for i = 0)

When the tangent turns to within `angle_deg` of vertical (the RMS axis), or
any node has moved further than `max_displacement`, the structure has
buckled and the buckling load factor is the previous increment's factor.
A tangent that is already steep in the first increment means the start
factor is too large (FIRST_STEP_FAILURE). A first-increment stop on
max_displacement alone still counts as BUCKLED.

An increment that reaches `equilibrium_iterations` without settling is
flagged in BucklingResult.converged; a result with such increments is
inconclusive.

The solver keeps its state between increments: every increment starts
from the equilibrium of the previous one.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import BUCKLING, BucklingConfig
from .goal import ConfigurationError, Goal
from .solver import ParticleSolver


logger = logging.getLogger(__name__)


class BucklingStatus(enum.Enum):
    BUCKLED = "buckled"
    FIRST_STEP_FAILURE = "first_step_failure"
    NO_BUCKLING = "no_buckling"


@dataclass(eq=False)
class Snapshot:
    """Particle positions and permanent-goal outputs after one increment."""
    increment: int
    load_factor: float
    positions: np.ndarray
    outputs: list


@dataclass(eq=False)
class BucklingResult:
    """
    Outcome of a buckling run.

    buckling_load_factor is the last load factor that did NOT buckle; it is
    only meaningful for BUCKLED (for NO_BUCKLING it is 0.0).

    converged holds one flag per increment: False where the increment hit
    the equilibrium iteration cap, so the positions behind its RMS value
    were not in equilibrium. snapshots start with the unloaded state
    (increment -1).
    """
    status: BucklingStatus
    buckling_load_factor: float
    load_factors: List[float] = field(default_factory=list)
    rms_displacements: List[float] = field(default_factory=list)
    converged: List[bool] = field(default_factory=list)
    snapshots: List[Snapshot] = field(default_factory=list)

    @property
    def increments(self) -> int:
        return len(self.load_factors)

    @property
    def is_safe(self) -> bool:
        """True if the structure carries at least the unscaled loads."""
        return self.status is BucklingStatus.BUCKLED and self.buckling_load_factor >= 1.0

    @property
    def equilibrium_reached(self) -> bool:
        """False if any increment stopped at the equilibrium iteration cap."""
        return all(self.converged)

    def to_frame(self) -> pd.DataFrame:
        """Load factor / RMS displacement curve, one row per increment."""
        return pd.DataFrame({
            "increment": np.arange(self.increments),
            "load_factor": self.load_factors,
            "rms_displacement": self.rms_displacements,
            "converged": self.converged,
        })


def displacement_rms(current: np.ndarray, initial: np.ndarray, decimals: int = 3) -> float:
    """Root mean square of nodal displacement lengths (m), rounded."""
    d = np.asarray(current) - np.asarray(initial)
    if len(d) == 0:
        return 0.0
    return round(math.sqrt(float(np.einsum('ij,ij->', d, d)) / len(d)), decimals)


def tangent_angle(d_load: float, d_rms: float) -> float:
    """Angle (rad) between the (ΔLF, ΔRMS) tangent and the RMS axis."""
    length = math.hypot(d_load, d_rms)
    if length == 0.0:
        return math.pi / 2.0
    return math.acos(max(-1.0, min(1.0, d_rms / length)))


class BucklingAnalysis:
    """
    Incremental load-factor driver.

    Parameters:
    -----------
    permanent_goals : list of Goal
        Goals that stay unchanged (elements, supports, unscaled loads)
    load_goals : list of Goal
        Loads to scale; each must provide scaled(factor)
    config : BucklingConfig
        Schedule, thresholds and caps

    Usage:
    ------
        analysis = BucklingAnalysis(elements + supports, loads)
        result = analysis.run(ParticleSystem())
    """

    def __init__(self, permanent_goals: Sequence[Goal], load_goals: Sequence[Goal],
                 config: Optional[BucklingConfig] = None):
        self.permanent_goals = list(permanent_goals)
        self.load_goals = list(load_goals)
        self.config = config if config is not None else BUCKLING
        for goal in self.load_goals:
            if not hasattr(goal, "scaled"):
                raise ConfigurationError(
                    f"{type(goal).__name__} cannot be used as a scaled load (no scaled())"
                )

    def _scaled_loads(self, factor: float) -> List[Goal]:
        scaled = []
        for original in self.load_goals:
            goal = original.scaled(factor)
            goal.pindex = list(original.pindex)
            scaled.append(goal)
        return scaled

    def run(self, solver: ParticleSolver) -> BucklingResult:
        cfg = self.config
        for goal in self.permanent_goals + self.load_goals:
            solver.assign_indices(goal, cfg.merge_tolerance)

        initial = np.array(solver.positions(), dtype=float)
        threshold_angle = math.radians(cfg.angle_deg)

        load_factors: List[float] = []
        rms_values: List[float] = []
        converged: List[bool] = []
        # Unloaded state, the "before" half of a first-increment pair
        snapshots: List[Snapshot] = [Snapshot(-1, 0.0, initial.copy(), solver.outputs(self.permanent_goals))]
        previous_rms = 0.0
        status = BucklingStatus.NO_BUCKLING
        blf = 0.0

        for i in range(cfg.max_increments):
            lf = cfg.start + cfg.step * i
            load_factors.append(lf)
            goals = self.permanent_goals + self._scaled_loads(lf)

            counter = 0
            while True:
                solver.step(goals, True, cfg.threshold)
                counter += 1
                if solver.kinetic_metric() <= cfg.threshold:
                    converged.append(True)
                    break
                if counter >= cfg.equilibrium_iterations:
                    converged.append(False)
                    logger.debug("Increment %d: equilibrium cap of %d steps reached (kinetic metric %.3e)",
                                 i, counter, solver.kinetic_metric())
                    break

            positions = np.array(solver.positions(), dtype=float)
            snapshot = Snapshot(i, lf, positions, solver.outputs(self.permanent_goals))
            snapshots.append(snapshot)
            if not cfg.output_all and len(snapshots) > 2:
                snapshots.pop(0)

            rms = displacement_rms(positions, initial, cfg.rms_decimals)
            rms_values.append(rms)
            d_load = cfg.start if i == 0 else cfg.step
            angle = tangent_angle(d_load, rms - previous_rms)
            max_disp = float(np.linalg.norm(positions - initial, axis=1).max()) if len(positions) else 0.0
            logger.info("Increment %d: LF=%.3f RMS=%.3f m angle=%.1f°", i, lf, rms, math.degrees(angle))

            by_angle = angle < threshold_angle
            by_displacement = max_disp > cfg.max_displacement
            if by_angle or by_displacement:
                blf = lf - cfg.step
                if i == 0 and by_angle:
                    status = BucklingStatus.FIRST_STEP_FAILURE
                    logger.error("Buckling during the first load step (LF=%.3f); decrease the start factor", lf)
                else:
                    status = BucklingStatus.BUCKLED
                    reason = "tangent angle" if by_angle else "maximum displacement"
                    logger.info("Buckling detected by %s at LF=%.3f, buckling load factor %.3f",
                                reason, lf, blf)
                break
            previous_rms = rms
        else:
            logger.warning("No buckling within %d load increments; adjust the load step",
                           cfg.max_increments)

        capped = converged.count(False)
        if capped:
            logger.warning("%d of %d increments stopped at the equilibrium cap of %d steps; "
                           "the result is inconclusive", capped, len(converged), cfg.equilibrium_iterations)

        return BucklingResult(status, blf, load_factors, rms_values, converged, snapshots)
