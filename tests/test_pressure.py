# tests/test_pressure.py
"""
PRESSURE TESTS: Closed Unit Cube
================================

A unit cube split into 12 outward-facing triangles:
- volume is 1 m³ wherever the cube sits (divergence theorem)
- the corner vertex at the origin touches 6 triangles of 0.5 m², so its
  tributary area is 6 × 0.5 / 3 = 1 m², and its normal points along
  (−1, −1, −1)/√3
"""

import numpy as np
import pytest

from goalmech.config import DEFAULT_TEMPERATURE, GAS_CONSTANT
from goalmech.goals.pressure import PressureGoal, mesh_volume
from goalmech.kernel.goal import ConfigurationError, Particle


CUBE_VERTICES = np.array([
    [0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0],
    [0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1],
], dtype=float)

CUBE_FACES = [
    (0, 2, 1), (0, 3, 2),      # bottom
    (4, 5, 6), (4, 6, 7),      # top
    (0, 1, 5), (0, 5, 4),      # front
    (3, 7, 6), (3, 6, 2),      # back
    (0, 4, 7), (0, 7, 3),      # left
    (1, 2, 6), (1, 6, 5),      # right
]


def particles_at(points):
    return [Particle(p.copy()) for p in np.asarray(points, dtype=float)]


class TestVolume:

    def test_unit_cube_volume(self):
        assert mesh_volume(CUBE_VERTICES, np.array(CUBE_FACES)) == pytest.approx(1.0)

    def test_volume_independent_of_position(self):
        shifted = CUBE_VERTICES + np.array([5.0, -3.0, 2.0])
        assert mesh_volume(shifted, np.array(CUBE_FACES)) == pytest.approx(1.0)


class TestPressureGoal:

    def test_corner_vertex_move(self):
        goal = PressureGoal(CUBE_VERTICES, CUBE_FACES, pressure_kn_m2=1.0)
        goal.calculate(particles_at(CUBE_VERTICES))

        expected = 1000.0 * 1.0 * np.array([-1.0, -1.0, -1.0]) / np.sqrt(3.0)
        np.testing.assert_allclose(goal.move[0], expected, rtol=1e-12)
        np.testing.assert_allclose(goal.weighting, 1.0)

        print(f"✓ Corner pressure force: {np.linalg.norm(goal.move[0]):.1f} N")

    def test_moles_from_ideal_gas_law(self):
        goal = PressureGoal(CUBE_VERTICES, CUBE_FACES, pressure_kn_m2=2.0)
        expected = 2000.0 * 1.0 / (GAS_CONSTANT * DEFAULT_TEMPERATURE)
        assert goal.moles_start == pytest.approx(expected)

    def test_constant_pressure_moles_follow_volume(self):
        goal = PressureGoal(CUBE_VERTICES, CUBE_FACES, pressure_kn_m2=1.0, constant_pressure=True)
        result = goal.output(particles_at(CUBE_VERTICES * 2.0))

        assert result.volume_end == pytest.approx(8.0)
        assert result.pressure_end == pytest.approx(1.0)
        assert result.moles_end == pytest.approx(8.0 * result.moles_start)

    def test_constant_moles_pressure_follows_volume(self):
        goal = PressureGoal(CUBE_VERTICES, CUBE_FACES, pressure_kn_m2=1.0, constant_pressure=False)
        result = goal.output(particles_at(CUBE_VERTICES * 2.0))

        assert result.pressure_end == pytest.approx(1.0 / 8.0)
        assert result.moles_end == pytest.approx(result.moles_start)
        # p·V stays n·R·T
        assert result.pressure_end * result.volume_end == pytest.approx(
            result.pressure_start * result.volume_start
        )

    def test_collapsed_mesh_has_no_pressure(self):
        goal = PressureGoal(CUBE_VERTICES, CUBE_FACES, pressure_kn_m2=1.0, constant_pressure=False)
        goal.calculate(particles_at(CUBE_VERTICES * 0.5))
        assert goal.pressure_end == pytest.approx(8000.0)

        flat = CUBE_VERTICES * np.array([1.0, 1.0, 0.0])
        result = goal.output(particles_at(flat))
        assert result.volume_end == pytest.approx(0.0)
        assert result.pressure_end == 0.0
        np.testing.assert_allclose(result.forces_kn, 0.0)

    def test_output_forces_in_kn(self):
        goal = PressureGoal(CUBE_VERTICES, CUBE_FACES, pressure_kn_m2=1.0)
        result = goal.output(particles_at(CUBE_VERTICES))
        np.testing.assert_allclose(result.forces_kn, goal.move * 1e-3)
        assert result.forces_kn.shape == (8, 3)

    def test_quad_face_rejected(self):
        with pytest.raises(ConfigurationError):
            PressureGoal(CUBE_VERTICES, [(0, 1, 2, 3)], pressure_kn_m2=1.0)
