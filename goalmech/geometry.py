# goalmech/geometry.py
"""
GEOMETRY: Lines, Planes and Vector Helpers
==========================================

PURPOSE:
--------
The goals consume geometry as plain value types. Points and vectors are
numpy arrays of shape (3,); lines and planes are small frozen dataclasses.
Nothing here knows about particles or forces.

CONVENTIONS:
------------
- A Plane carries an origin and an orthonormal, right-handed frame
  (xaxis, yaxis, zaxis = xaxis × yaxis).
- Orientations of particles are scipy Rotations mapping the world frame
  onto the particle frame. A plane converts to and from such a rotation.
- unitize() of a zero vector returns the zero vector instead of NaN, so
  degenerate directions give zero corrections downstream.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation


WORLD_X = np.array([1.0, 0.0, 0.0])
WORLD_Y = np.array([0.0, 1.0, 0.0])
WORLD_Z = np.array([0.0, 0.0, 1.0])

# Levi-Civita permutation symbol e_ijk
EPSILON = np.zeros((3, 3, 3))
EPSILON[0, 1, 2] = EPSILON[1, 2, 0] = EPSILON[2, 0, 1] = 1.0
EPSILON[0, 2, 1] = EPSILON[2, 1, 0] = EPSILON[1, 0, 2] = -1.0


def as_point(p) -> np.ndarray:
    """Coerce a sequence of three numbers to a float array."""
    arr = np.asarray(p, dtype=float).reshape(3)
    return arr


def unitize(v: np.ndarray, tol: float = 1e-14) -> np.ndarray:
    """Return v / |v|, or a zero vector if |v| is (numerically) zero."""
    length = float(np.linalg.norm(v))
    if length <= tol:
        return np.zeros(3)
    return np.asarray(v, dtype=float) / length


def vector_angle(a: np.ndarray, b: np.ndarray) -> float:
    """Angle between two vectors in radians, in [0, π]. Zero if either is zero."""
    na = np.linalg.norm(a)
    nb = np.linalg.norm(b)
    if na == 0.0 or nb == 0.0:
        return 0.0
    c = float(np.dot(a, b) / (na * nb))
    return float(np.arccos(np.clip(c, -1.0, 1.0)))


def permutation_cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Cross product written with the permutation symbol: (a × b)_i = e_ijk a_j b_k.

    Used where the beam distributes end moments into nodal force couples,
    so the sign pattern of every term is carried by EPSILON alone.
    """
    return np.einsum('ijk,j,k->i', EPSILON, a, b)


def circumcenter(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray,
                 tol: float = 1e-12) -> Optional[np.ndarray]:
    """
    Centre of the circle through three points.

    Returns None when the points are collinear (infinite radius).
    """
    u = p0 - p1
    v = p2 - p1
    w = np.cross(u, v)
    w2 = float(np.dot(w, w))
    scale = float(np.dot(u, u) * np.dot(v, v))
    if scale == 0.0 or w2 <= tol * scale:
        return None
    offset = np.cross(np.dot(u, u) * v - np.dot(v, v) * u, w) / (2.0 * w2)
    return p1 + offset


def perpendicular(v: np.ndarray) -> np.ndarray:
    """Any unit vector perpendicular to v."""
    ref = WORLD_Z if abs(unitize(v) @ WORLD_Z) < 0.9 else WORLD_X
    return unitize(np.cross(v, ref))


def cull_duplicates(points: Sequence[np.ndarray], tol: float) -> List[np.ndarray]:
    """Remove points closer than tol to an already kept point, keeping order."""
    kept: List[np.ndarray] = []
    for p in points:
        p = as_point(p)
        if not any(np.linalg.norm(p - q) <= tol for q in kept):
            kept.append(p)
    return kept


@dataclass(frozen=True, eq=False)
class Line:
    """A straight segment from start to end (m)."""
    start: np.ndarray
    end: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'start', as_point(self.start))
        object.__setattr__(self, 'end', as_point(self.end))

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.end - self.start))

    @property
    def direction(self) -> np.ndarray:
        return unitize(self.end - self.start)

    def flipped(self) -> 'Line':
        return Line(self.end, self.start)


@dataclass(frozen=True, eq=False)
class Plane:
    """
    An oriented plane: origin plus an orthonormal right-handed frame.

    The constructor orthonormalises yaxis against xaxis (Gram-Schmidt),
    so any two non-parallel in-plane vectors are accepted.
    """
    origin: np.ndarray
    xaxis: np.ndarray
    yaxis: np.ndarray

    def __post_init__(self):
        x = unitize(as_point(self.xaxis))
        y = as_point(self.yaxis)
        y = unitize(y - (y @ x) * x)
        if not x.any() or not y.any():
            raise ValueError("Plane axes must be non-zero and non-parallel")
        object.__setattr__(self, 'origin', as_point(self.origin))
        object.__setattr__(self, 'xaxis', x)
        object.__setattr__(self, 'yaxis', y)

    @property
    def zaxis(self) -> np.ndarray:
        return np.cross(self.xaxis, self.yaxis)

    @property
    def matrix(self) -> np.ndarray:
        """3×3 matrix with the frame axes as columns."""
        return np.column_stack([self.xaxis, self.yaxis, self.zaxis])

    @classmethod
    def world_xy(cls, origin=(0.0, 0.0, 0.0)) -> 'Plane':
        return cls(origin, WORLD_X, WORLD_Y)

    @classmethod
    def from_rotation(cls, origin, rotation: Rotation) -> 'Plane':
        m = rotation.as_matrix()
        return cls(origin, m[:, 0], m[:, 1])

    def to_rotation(self) -> Rotation:
        return Rotation.from_matrix(self.matrix)

    def to_local(self, v: np.ndarray) -> np.ndarray:
        """Components of a global vector in this plane's frame."""
        return self.matrix.T @ v

    def to_global(self, v: np.ndarray) -> np.ndarray:
        """Global vector from components in this plane's frame."""
        return self.matrix @ v
