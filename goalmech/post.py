# goalmech/post.py
"""
POST-PROCESSING: Derived Quantities From Goal Outputs
=====================================================

PURPOSE:
--------
Small functions that turn the result records of the goals into the
quantities an engineer reads off a relaxed model:

- shear_vectors:       shear force in each segment from the moment change
                       between its two ends (rods)
- transform_moment:    express a moment vector in the axes of another plane
- stress_summation:    worst combined axial + bending stress per bar
- nodal_displacements: displacement of every node in mm

Units follow the result records: kN, kNm, MPa.
"""

from typing import List, Sequence

import numpy as np

from .geometry import Line, Plane, unitize
from .kernel.goal import ConfigurationError
from .results import BarResult, RodResult


def transform_moment(moment: np.ndarray, from_plane: Plane, to_plane: Plane) -> np.ndarray:
    """
    Re-express a moment vector given in the axes of from_plane in the axes
    of to_plane. The moment vector itself is unchanged, only its components.
    """
    return to_plane.to_local(from_plane.to_global(np.asarray(moment, dtype=float)))


def _rounded(p: np.ndarray, decimals: int = 3) -> tuple:
    return tuple(np.round(p, decimals) + 0.0)


def _shear_vector(plane_start: Plane, moment_start: float,
                  plane_end: Plane, moment_end: float, line: Line) -> np.ndarray:
    m_start = plane_start.yaxis * moment_start
    m_end = plane_end.yaxis * moment_end
    m_sum = unitize(m_start + m_end)

    # Moments pointing against the resultant count negative
    f_start = -1.0 if m_start @ m_sum < 0.0 else 1.0
    f_end = -1.0 if m_end @ m_sum < 0.0 else 1.0

    axis = line.start - line.end
    length = float(np.linalg.norm(axis))
    if length == 0.0:
        return np.zeros(3)
    # Symmetric section: the moment difference carries the whole shear
    shear = (f_end * moment_end - f_start * moment_start) / length
    direction = unitize(np.cross(np.cross(axis, m_sum), axis))
    return direction * shear


def shear_vectors(lines: Sequence[Line], moments: Sequence[float],
                  planes: Sequence[Plane]) -> List[np.ndarray]:
    """
    Shear force vector (kN) in each segment.

    Parameters:
    -----------
    lines : list of Line
        Segments (m)
    moments : list of float
        Bending moments (kNm) at the bending planes
    planes : list of Plane
        Bending planes (RodResult.bending_plane); their origins are matched to
        the segment end points to 1 mm

    Raises:
    -------
    ConfigurationError
        If neither end of a segment has a bending plane
    """
    origins = [_rounded(pl.origin) for pl in planes]
    result = []
    for line in lines:
        start = _rounded(line.start)
        end = _rounded(line.end)
        i_start = origins.index(start) if start in origins else -1
        i_end = origins.index(end) if end in origins else -1
        if i_start == -1 and i_end == -1:
            raise ConfigurationError(
                f"No bending plane at either end of segment {start} -> {end}"
            )
        # A missing end contributes a zero moment in an arbitrary plane
        pl_start, m_start = (planes[i_start], moments[i_start]) if i_start != -1 else (Plane.world_xy(), 0.0)
        pl_end, m_end = (planes[i_end], moments[i_end]) if i_end != -1 else (Plane.world_xy(), 0.0)
        result.append(_shear_vector(pl_start, m_start, pl_end, m_end, line))
    return result


def stress_summation(bars: Sequence[BarResult], rods: Sequence[RodResult]) -> np.ndarray:
    """
    Maximum absolute combined stress (MPa) per bar.

    At each bar end the bending stress of the rod sharing that particle is
    added to the axial stress with the sign of the axial stress; the larger
    of the two ends is returned.
    """
    bending = {}
    for rod in rods:
        bending[rod.shared_index] = abs(rod.stress_mpa)

    totals = np.zeros(len(bars))
    for i, bar in enumerate(bars):
        sign = -1.0 if bar.stress_mpa < 0.0 else 1.0
        at_start = bar.stress_mpa + sign * bending.get(bar.start_index, 0.0)
        at_end = bar.stress_mpa + sign * bending.get(bar.end_index, 0.0)
        totals[i] = max(abs(at_start), abs(at_end))
    return totals


def nodal_displacements(initial: Sequence, final: Sequence) -> np.ndarray:
    """Displacement vectors (mm) from initial to final positions (m)."""
    initial = np.asarray(initial, dtype=float).reshape(-1, 3)
    final = np.asarray(final, dtype=float).reshape(-1, 3)
    if initial.shape != final.shape:
        raise ValueError(
            f"Position lists differ in length: {len(initial)} vs {len(final)}"
        )
    return (final - initial) * 1e3
