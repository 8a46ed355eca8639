# goalmech/goals/pressure.py
"""
PRESSURE GOAL: Gas Pressure Inside a Closed Triangle Mesh
=========================================================

Every vertex of the mesh is pushed along its area-weighted normal by

    move_i = p · A_i · n̂_i        (N, p in Pa, A_i in m²)

with weighting 1, where A_i is a third of the area of the faces around the
vertex. The enclosed volume follows from the divergence theorem (tetrahedra
to the origin):

    V = (1/6) Σ_faces A · (AB × AC)

and the gas obeys pV = nRT. Two modes:

- constant pressure: p stays at its input value, the amount of gas (moles)
  follows the volume;
- constant moles: the amount of gas is fixed at construction and the
  pressure follows the volume (an inflated, sealed cushion).
"""

from typing import Sequence

import numpy as np

from ..config import DEFAULT_TEMPERATURE, GAS_CONSTANT
from ..geometry import unitize
from ..kernel.goal import ConfigurationError, Goal, Particle
from ..results import PressureResult


def mesh_volume(vertices: np.ndarray, faces: np.ndarray) -> float:
    """Signed volume (m³) enclosed by a triangle mesh; positive for outward-facing faces."""
    a = vertices[faces[:, 0]]
    b = vertices[faces[:, 1]]
    c = vertices[faces[:, 2]]
    return float(np.einsum('ij,ij->i', a, np.cross(b - a, c - a)).sum() / 6.0)


def vertex_areas_and_normals(vertices: np.ndarray, faces: np.ndarray):
    """
    Tributary area (m²) and unit normal per vertex.

    Each face gives a third of its area to each of its vertices and adds
    its unit normal to theirs. Zero-area faces contribute nothing.
    """
    areas = np.zeros(len(vertices))
    normals = np.zeros((len(vertices), 3))
    for face in faces:
        pa, pb, pc = vertices[face]
        n = np.cross(pb - pa, pc - pb)
        nodal_area = np.linalg.norm(n) / 6.0
        unit = unitize(n)
        for v in face:
            areas[v] += nodal_area
            normals[v] += unit
    normals = np.array([unitize(n) for n in normals]).reshape(-1, 3)
    return areas, normals


class PressureGoal(Goal):
    """
    Internal pressure of a closed triangle mesh.

    Parameters:
    -----------
    vertices : array-like (n, 3)
        Mesh vertices (m)
    faces : sequence of index triples
        Faces, counter-clockwise seen from outside
    pressure_kn_m2 : float
        Initial gauge pressure (kN/m²)
    constant_pressure : bool
        True: pressure fixed, moles vary. False: moles fixed, pressure varies.
    temperature : float
        Gas temperature (K)
    """

    def __init__(self, vertices, faces, pressure_kn_m2: float,
                 constant_pressure: bool = True,
                 temperature: float = DEFAULT_TEMPERATURE):
        faces = [list(f) for f in faces]
        for i, face in enumerate(faces):
            if len(face) != 3:
                raise ConfigurationError(
                    f"Pressure mesh must be triangulated: face {i} has {len(face)} vertices"
                )
        if temperature <= 0.0:
            raise ConfigurationError(f"Temperature must be positive (K), got {temperature}")

        vertices = np.asarray(vertices, dtype=float).reshape(-1, 3)
        self.faces = np.asarray(faces, dtype=int).reshape(-1, 3)
        if self.faces.size and (self.faces.min() < 0 or self.faces.max() >= len(vertices)):
            raise ConfigurationError("Face index out of range of the vertex list")

        self._init_buffers(vertices, np.ones(len(vertices)))

        self.constant_pressure = bool(constant_pressure)
        self.temperature = float(temperature)
        self.pressure_start = float(pressure_kn_m2) * 1e3        # Pa
        self.pressure_end = self.pressure_start
        self.volume_start = mesh_volume(self.ppos, self.faces)
        self.volume_end = self.volume_start
        self.moles_start = self.pressure_start * self.volume_start / (GAS_CONSTANT * self.temperature)
        self.moles_end = self.moles_start

    def calculate(self, particles: Sequence[Particle]) -> None:
        vertices = np.array(self._positions(particles)).reshape(-1, 3)
        areas, normals = vertex_areas_and_normals(vertices, self.faces)
        self.volume_end = mesh_volume(vertices, self.faces)

        rt = GAS_CONSTANT * self.temperature
        if self.constant_pressure:
            self.moles_end = self.pressure_start * self.volume_end / rt
        elif self.volume_end != 0.0:
            self.pressure_end = self.moles_start * rt / self.volume_end
        else:
            # Collapsed mesh
            self.pressure_end = 0.0

        self.move[:] = self.pressure_end * areas[:, None] * normals

    def output(self, particles: Sequence[Particle]) -> PressureResult:
        self.calculate(particles)
        return PressureResult(
            vertices=np.array(self._positions(particles)).reshape(-1, 3),
            forces_kn=self.move * self.weighting[:, None] * 1e-3,
            pressure_start=self.pressure_start * 1e-3,
            pressure_end=self.pressure_end * 1e-3,
            volume_start=self.volume_start,
            volume_end=self.volume_end,
            moles_start=self.moles_start,
            moles_end=self.moles_end,
        )
