# tests/test_support_load.py
"""
SUPPORT AND LOAD TESTS
======================

Supports only act along their restrained axes, warn when they restrain
nothing, and report the reaction that balances the other goals once the
particle system is in equilibrium.
"""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from goalmech.geometry import Line, Plane
from goalmech.goals.bar import BarGoal
from goalmech.goals.load import LoadGoal
from goalmech.goals.support import Support6DOFGoal, SupportGoal
from goalmech.kernel.goal import ConfigurationError, FreeSupportWarning, Particle
from goalmech.kernel.solver import ParticleSystem


class TestSupportGoal:

    def test_move_is_masked(self):
        support = SupportGoal((0, 0, 0), fixed=(True, False, True))
        support.calculate([Particle(np.array([0.1, 0.2, 0.3]))])
        np.testing.assert_allclose(support.move[0], [-0.1, 0.0, -0.3])

    def test_free_axes_have_zero_weighting(self):
        support = SupportGoal((0, 0, 0), fixed=(True, False, True), strength=1e15)
        np.testing.assert_allclose(support.axis_weighting(), [[1e15, 0.0, 1e15]])

    def test_free_support_warns(self):
        with pytest.warns(FreeSupportWarning):
            support = SupportGoal((0, 0, 0), fixed=(False, False, False))
        # Still usable
        support.calculate([Particle(np.array([1.0, 1.0, 1.0]))])
        np.testing.assert_allclose(support.move, 0.0)

    def test_wrong_flag_count_rejected(self):
        with pytest.raises(ConfigurationError):
            SupportGoal((0, 0, 0), fixed=(True, True))

    def test_reaction_balances_bar_at_equilibrium(self):
        """
        Bar along x, pinned at x = 0 and on a roller at x = 1, pulled by 1 kN.
        Expected: reaction −1 kN at the pin, bar force +1 kN,
        elongation F·L/EA = 1000 / 2e7 = 5e-5 m.
        """
        bar = BarGoal(Line((0, 0, 0), (1, 0, 0)), E=200000.0, A=100.0)
        pin = SupportGoal((0, 0, 0))
        roller = SupportGoal((1, 0, 0), fixed=(False, True, True))
        load = LoadGoal((1, 0, 0), (1000.0, 0.0, 0.0))
        goals = [bar, pin, roller, load]

        ps = ParticleSystem()
        for goal in goals:
            ps.assign_indices(goal, 0.01)
        ps.solve(goals, threshold=1e-30, max_iterations=500)

        reaction = pin.output(ps.particles).reaction_force_kn
        np.testing.assert_allclose(reaction, [-1.0, 0.0, 0.0], atol=1e-6)
        assert np.isclose(bar.output(ps.particles).force_kn, 1.0, rtol=1e-6)
        assert np.isclose(ps.positions()[1][0], 1.0 + 5e-5, rtol=1e-9)

        print(f"✓ Pin reaction {reaction[0]:.4f} kN balances the 1 kN load")


class TestSupport6DOF:

    def test_torque_restores_target_orientation(self):
        support = Support6DOFGoal(Plane.world_xy())
        particle = Particle(np.zeros(3), Rotation.from_rotvec([0.0, 0.0, 0.1]))
        support.calculate([particle])
        np.testing.assert_allclose(support.torque[0], [0.0, 0.0, -0.1], atol=1e-12)
        np.testing.assert_allclose(support.move[0], 0.0)

    def test_rotation_mask(self):
        support = Support6DOFGoal(Plane.world_xy(), fixed=(True, True, True, True, True, False))
        support.calculate([Particle(np.zeros(3), Rotation.from_rotvec([0.0, 0.0, 0.1]))])
        np.testing.assert_allclose(support.torque[0], 0.0)
        np.testing.assert_allclose(support.torque_axis_weighting(), [[1e12, 1e12, 0.0]])

    def test_initial_orientation_is_support_plane(self):
        plane = Plane((1, 2, 3), (0, 1, 0), (-1, 0, 0))
        support = Support6DOFGoal(plane)
        ps = ParticleSystem()
        ps.assign_indices(support, 0.01)
        np.testing.assert_allclose(ps.particles[0].plane.xaxis, [0, 1, 0], atol=1e-12)

    def test_reaction_moment_in_plane_axes(self):
        # Plane turned 90° about z: its x-axis is world y, its y-axis world −x
        plane = Plane((0, 0, 0), (0, 1, 0), (-1, 0, 0))
        support = Support6DOFGoal(plane, strength=1e3)
        particle = Particle(np.zeros(3), plane.to_rotation())
        # Twist the particle by −0.2 rad about world x: the support pushes back about +x
        particle.orientation = Rotation.from_rotvec([-0.2, 0.0, 0.0]) * particle.orientation

        result = support.output([particle])
        # Global reaction moment 0.2 rad × 1e3 N·m/rad = 200 N·m about +x = 0.2 kNm
        np.testing.assert_allclose(result.reaction_moment_knm, [0.0, -0.2, 0.0], atol=1e-9)

    def test_free_6dof_support_warns(self):
        with pytest.warns(FreeSupportWarning):
            Support6DOFGoal(Plane.world_xy(), fixed=(False,) * 6)


class TestLoadGoal:

    def test_move_is_force(self):
        load = LoadGoal((0, 0, 0), (0, 0, -5000.0))
        load.calculate([Particle(np.zeros(3))])
        np.testing.assert_allclose(load.move[0], [0, 0, -5000.0])
        np.testing.assert_allclose(load.weighting, [1.0])

    def test_scaled_is_a_fresh_copy(self):
        load = LoadGoal((0, 0, 0), (0, 0, -5000.0))
        bigger = load.scaled(1.5)
        np.testing.assert_allclose(bigger.force, [0, 0, -7500.0])
        np.testing.assert_allclose(load.force, [0, 0, -5000.0])
        assert bigger is not load

    def test_output_in_kn(self):
        load = LoadGoal((1, 2, 3), (0, 0, -5000.0))
        result = load.output([Particle(np.array([1.0, 2.0, 3.0]))])
        np.testing.assert_allclose(result.load_kn, [0, 0, -5.0])
