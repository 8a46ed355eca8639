# loads.py - Nodal load generation for bar networks and meshes

from typing import List, Sequence, Tuple

import numpy as np

from .config import GRAVITY
from .geometry import WORLD_Z, Line, cull_duplicates, unitize
from .goals.load import LoadGoal
from .kernel.goal import ConfigurationError


def nodal_lengths(lines: Sequence[Line], tol: float = 0.001) -> Tuple[List[np.ndarray], np.ndarray]:
    """
    Tributary bar length at each node of a bar network.

    Every bar gives half of its length to each of its two end nodes.

    Parameters:
    -----------
    lines : list of Line
        Bars (m)
    tol : float
        Distance (m) below which end points are the same node (1 mm default)

    Returns:
    --------
    nodes : list of np.ndarray
        Unique node positions, in order of first appearance
    lengths : np.ndarray
        Summed half-lengths (m) per node
    """
    points = []
    for ln in lines:
        points.extend([ln.start, ln.end])
    nodes = cull_duplicates(points, tol)

    lengths = np.zeros(len(nodes))
    for ln in lines:
        half = 0.5 * ln.length
        for end in (ln.start, ln.end):
            for i, node in enumerate(nodes):
                if np.linalg.norm(end - node) <= tol:
                    lengths[i] += half
                    break
    return nodes, lengths


def bar_selfweight(lengths: Sequence[float], area: float, density: float) -> np.ndarray:
    """
    Nodal self-weight (N) of bars, shape (n, 3), pointing in −z.

    lengths in m (e.g. from nodal_lengths), area in mm², density in kg/m³.
    """
    lengths = np.asarray(lengths, dtype=float)
    weight = lengths * area * 1e-6 * density * GRAVITY
    return -weight[:, None] * WORLD_Z[None, :]


def mesh_vertex_normals(vertices, faces) -> np.ndarray:
    """
    Area-scaled vertex normals of a polygon mesh.

    Each face distributes its area equally over its vertices and adds its
    unit normal to theirs. The returned vector of each vertex has the
    direction of the summed normals and a length equal to the tributary area
    (m²). Faces are fan-triangulated from their first vertex.
    """
    vertices = np.asarray(vertices, dtype=float).reshape(-1, 3)
    areas = np.zeros(len(vertices))
    normals = np.zeros((len(vertices), 3))
    for face in faces:
        face = list(face)
        if len(face) < 3:
            raise ConfigurationError(f"Mesh face needs at least 3 vertices, got {face}")
        origin = vertices[face[0]]
        n = np.zeros(3)
        for a, b in zip(face[1:-1], face[2:]):
            n += np.cross(vertices[a] - origin, vertices[b] - origin)
        area = 0.5 * np.linalg.norm(n)
        unit = unitize(n)
        for v in face:
            areas[v] += area / len(face)
            normals[v] += unit
    return np.array([unitize(n) * a for n, a in zip(normals, areas)]).reshape(-1, 3)


def mesh_selfweight(vertex_normals, thickness: float, density: float) -> np.ndarray:
    """Nodal self-weight (N) of a shell; thickness in mm, density in kg/m³."""
    areas = np.linalg.norm(np.asarray(vertex_normals, dtype=float).reshape(-1, 3), axis=1)
    weight = areas * thickness * 1e-3 * density * GRAVITY
    return -weight[:, None] * WORLD_Z[None, :]


def mesh_snow_load(vertex_normals, snow) -> np.ndarray:
    """
    Nodal snow load (N).

    snow is a load vector in kN/m² per unit surface area; only vertices
    whose normal points upwards (n·z >= 0) are loaded.
    """
    vn = np.asarray(vertex_normals, dtype=float).reshape(-1, 3)
    snow = np.asarray(snow, dtype=float)
    areas = np.linalg.norm(vn, axis=1)
    upward = vn @ WORLD_Z >= 0.0
    return np.where(upward[:, None], areas[:, None] * snow[None, :] * 1e3, 0.0)


def mesh_wind_load(vertex_normals, wind, along_normal: bool = True) -> np.ndarray:
    """
    Nodal wind load (N) from a wind vector whose length is the pressure in kN/m².

    along_normal=True applies the pressure along the vertex normal, turned
    to the side the wind blows towards. Otherwise the force follows the
    wind direction.
    """
    vn = np.asarray(vertex_normals, dtype=float).reshape(-1, 3)
    wind = np.asarray(wind, dtype=float)
    pressure = float(np.linalg.norm(wind))
    direction = unitize(wind)

    loads = np.zeros_like(vn)
    for i, n in enumerate(vn):
        magnitude = np.linalg.norm(n) * pressure * 1e3
        if along_normal:
            unit = unitize(n)
            force = unit * magnitude
            if unit @ direction < 0.0:
                force = -force
        else:
            force = direction * magnitude
        loads[i] = force
    return loads


def pretension_distribution(rest_lengths: Sequence[float], strengths: Sequence[float],
                            form_found_lengths: Sequence[float],
                            max_pretension: float) -> np.ndarray:
    """
    Pretension per cable, proportional to its form-finding force.

    The form-finding force of cable i is (L1_i − L0_i)·k_i. The forces are
    scaled so the largest equals max_pretension.
    """
    L0 = np.asarray(rest_lengths, dtype=float)
    L1 = np.asarray(form_found_lengths, dtype=float)
    k = np.broadcast_to(np.asarray(strengths, dtype=float), L0.shape)
    forces = (L1 - L0) * k
    peak = forces.max() if forces.size else 0.0
    if peak <= 0.0:
        raise ConfigurationError("No cable is in tension after form finding")
    return forces / peak * max_pretension


def load_goals(points: Sequence, forces: Sequence) -> List[LoadGoal]:
    """One LoadGoal per (point, force) pair; forces in N."""
    if len(points) != len(forces):
        raise ConfigurationError(
            f"Got {len(points)} load points but {len(forces)} forces"
        )
    return [LoadGoal(p, f) for p, f in zip(points, forces)]
