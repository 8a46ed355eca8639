# tests/test_loads.py
"""
LOAD GENERATION TESTS
=====================

Checks the nodal load helpers on shapes small enough to verify by hand:
an L-shaped pair of bars and a single 1 m × 1 m quad facing up.
"""

import numpy as np
import pytest

from goalmech.config import GRAVITY
from goalmech.geometry import Line
from goalmech.goals.load import LoadGoal
from goalmech.kernel.goal import ConfigurationError
from goalmech.loads import (
    bar_selfweight,
    load_goals,
    mesh_selfweight,
    mesh_snow_load,
    mesh_vertex_normals,
    mesh_wind_load,
    nodal_lengths,
    pretension_distribution,
)


SQUARE = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=float)


class TestBarLoads:

    def test_nodal_lengths(self):
        lines = [Line((0, 0, 0), (1, 0, 0)), Line((1, 0, 0), (1, 2, 0))]
        nodes, lengths = nodal_lengths(lines)

        assert len(nodes) == 3
        np.testing.assert_allclose(nodes[1], [1, 0, 0])
        np.testing.assert_allclose(lengths, [0.5, 1.5, 1.0])
        # Total length is conserved
        assert lengths.sum() == pytest.approx(3.0)

    def test_bar_selfweight(self):
        loads = bar_selfweight([1.0, 2.0], area=1000.0, density=7850.0)
        expected = 1.0 * 1000.0 * 1e-6 * 7850.0 * GRAVITY
        np.testing.assert_allclose(loads[0], [0, 0, -expected])
        np.testing.assert_allclose(loads[1], [0, 0, -2.0 * expected])


class TestMeshLoads:

    def test_vertex_normals_scaled_by_area(self):
        vn = mesh_vertex_normals(SQUARE, [(0, 1, 2, 3)])
        np.testing.assert_allclose(vn, np.tile([0, 0, 0.25], (4, 1)), atol=1e-12)

    def test_vertex_normals_triangulated_square(self):
        vn = mesh_vertex_normals(SQUARE, [(0, 1, 2), (0, 2, 3)])
        assert np.linalg.norm(vn, axis=1).sum() == pytest.approx(1.0)

    def test_mesh_selfweight(self):
        vn = mesh_vertex_normals(SQUARE, [(0, 1, 2, 3)])
        loads = mesh_selfweight(vn, thickness=10.0, density=1000.0)
        np.testing.assert_allclose(loads[:, 2], -0.25 * 0.01 * 1000.0 * GRAVITY)

    def test_snow_only_on_upward_faces(self):
        vn = np.array([[0, 0, 0.25], [0, 0, -0.25]])
        loads = mesh_snow_load(vn, (0, 0, -1.0))
        np.testing.assert_allclose(loads[0], [0, 0, -250.0])
        np.testing.assert_allclose(loads[1], 0.0)

    def test_wind_along_normal_turns_with_wind(self):
        vn = np.array([[0, 0, 0.25]])
        loads = mesh_wind_load(vn, (0, 0, -2.0))
        np.testing.assert_allclose(loads[0], [0, 0, -500.0])

    def test_wind_along_direction(self):
        vn = np.array([[0, 0, 0.25]])
        loads = mesh_wind_load(vn, (2.0, 0, 0), along_normal=False)
        np.testing.assert_allclose(loads[0], [500.0, 0, 0])


class TestPretension:

    def test_scaled_to_maximum(self):
        p = pretension_distribution([1.0, 1.0], [10.0, 20.0], [1.1, 1.1], max_pretension=500.0)
        np.testing.assert_allclose(p, [250.0, 500.0])

    def test_no_tension_rejected(self):
        with pytest.raises(ConfigurationError):
            pretension_distribution([1.0], [10.0], [0.9], max_pretension=500.0)


class TestLoadGoals:

    def test_one_goal_per_point(self):
        goals = load_goals([(0, 0, 0), (1, 0, 0)], [(0, 0, -1.0), (0, 0, -2.0)])
        assert all(isinstance(g, LoadGoal) for g in goals)
        np.testing.assert_allclose(goals[1].force, [0, 0, -2.0])

    def test_length_mismatch_rejected(self):
        with pytest.raises(ConfigurationError):
            load_goals([(0, 0, 0)], [])
