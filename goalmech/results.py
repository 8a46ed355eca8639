# goalmech/results.py
"""
Output records produced by Goal.output().

Read-only snapshots of the engineering quantities of one goal at one
particle state. Units follow the package convention: forces in kN, moments
in kNm, stresses in MPa, pressure in kN/m², volume in m³.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .geometry import Line, Plane


@dataclass(frozen=True, eq=False)
class BarResult:
    """Axial element result. Negative force/stress = compression."""
    start_index: int
    end_index: int
    line: Line
    force_kn: float
    stress_mpa: float


@dataclass(frozen=True, eq=False)
class RodResult:
    """Bending result at the shared point of two consecutive segments."""
    shared_index: int
    bending_plane: Plane
    moment_knm: float
    stress_mpa: float


@dataclass(frozen=True, eq=False)
class BeamResult:
    """
    6-DOF beam result.

    my/mz are the bending moments about the local y and z section axes at
    the start and end of the member; torsion is the moment about the
    member axis.
    """
    plane_start: Plane
    plane_end: Plane
    normal_force_kn: float
    torsion_knm: float
    my_start_knm: float
    mz_start_knm: float
    my_end_knm: float
    mz_end_knm: float


@dataclass(frozen=True, eq=False)
class PressureResult:
    vertices: np.ndarray
    forces_kn: np.ndarray
    pressure_start: float
    pressure_end: float
    volume_start: float
    volume_end: float
    moles_start: float
    moles_end: float


@dataclass(frozen=True, eq=False)
class SupportResult:
    """
    Reaction of a support goal.

    reaction_moment_knm and plane are only set for 6-DOF supports; the
    moment is expressed in the axes of the support plane.
    """
    point: np.ndarray
    reaction_force_kn: np.ndarray
    plane: Optional[Plane] = None
    reaction_moment_knm: Optional[np.ndarray] = None


@dataclass(frozen=True, eq=False)
class LoadResult:
    point: np.ndarray
    load_kn: np.ndarray

