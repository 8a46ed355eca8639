# tests/test_bar_cable.py
"""
BAR AND CABLE TESTS: Axial Force From Extension
===============================================

A 1 m steel-like bar (E = 200000 MPa, A = 100 mm²) stretched by 1 mm must
carry EA/L · e = 2e7 N/m × 0.001 m = 20 kN, i.e. 200 MPa.

The cable uses the same law but ignores compression and can be pretensioned
by shortening its rest length.
"""

import numpy as np
import pytest

from goalmech.geometry import Line
from goalmech.goals.bar import BarGoal, CableGoal
from goalmech.kernel.goal import ConfigurationError, DegenerateGeometryError, Particle


E = 200000.0   # MPa
A = 100.0      # mm²


def particles_at(*points):
    return [Particle(np.array(p, dtype=float)) for p in points]


def unit_line():
    return Line((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))


class TestBar:

    def test_weighting_is_twice_axial_stiffness(self):
        bar = BarGoal(unit_line(), E, A)
        assert np.allclose(bar.weighting, [4e7, 4e7])

    def test_tension_scenario(self):
        """1 m -> 1.001 m gives 20 kN and 200 MPa."""
        bar = BarGoal(unit_line(), E, A)
        result = bar.output(particles_at((0, 0, 0), (1.001, 0, 0)))

        assert np.isclose(result.force_kn, 20.0, rtol=1e-9), f"Expected 20 kN, got {result.force_kn}"
        assert np.isclose(result.stress_mpa, 200.0, rtol=1e-9), f"Expected 200 MPa, got {result.stress_mpa}"
        assert result.start_index == 0 and result.end_index == 1

        print(f"✓ Bar force: {result.force_kn:.3f} kN, stress {result.stress_mpa:.1f} MPa")

    def test_move_pulls_ends_together_when_stretched(self):
        bar = BarGoal(unit_line(), E, A)
        bar.calculate(particles_at((0, 0, 0), (1.001, 0, 0)))

        np.testing.assert_allclose(bar.move[0], [0.0005, 0, 0], atol=1e-12)
        np.testing.assert_allclose(bar.move[1], [-0.0005, 0, 0], atol=1e-12)

    def test_compression_is_negative(self):
        bar = BarGoal(unit_line(), E, A)
        result = bar.output(particles_at((0, 0, 0), (0.999, 0, 0)))
        assert np.isclose(result.force_kn, -20.0, rtol=1e-6)
        assert result.stress_mpa < 0.0

    def test_rest_gives_zero_move(self):
        bar = BarGoal(Line((1, 2, 3), (2, 4, 5)), E, A)
        bar.calculate(particles_at((1, 2, 3), (2, 4, 5)))
        np.testing.assert_allclose(bar.move, 0.0, atol=1e-15)

    def test_moves_balance(self):
        bar = BarGoal(unit_line(), E, A)
        bar.calculate(particles_at((0.1, -0.2, 0.3), (1.2, 0.4, -0.1)))
        np.testing.assert_allclose(bar.move.sum(axis=0), 0.0, atol=1e-15)

    def test_zero_length_rejected(self):
        with pytest.raises(DegenerateGeometryError):
            BarGoal(Line((1, 1, 1), (1, 1, 1)), E, A)

    def test_non_positive_properties_rejected(self):
        with pytest.raises(ConfigurationError):
            BarGoal(unit_line(), 0.0, A)
        with pytest.raises(ConfigurationError):
            BarGoal(unit_line(), E, -1.0)


class TestCable:

    def test_compression_gives_no_move(self):
        cable = CableGoal(unit_line(), E, A)
        particles = particles_at((0, 0, 0), (0.9, 0, 0))
        cable.calculate(particles)

        np.testing.assert_allclose(cable.move, 0.0)
        assert cable.output(particles).force_kn == 0.0

        print("✓ Cable goes slack in compression")

    def test_tension_matches_bar(self):
        cable = CableGoal(unit_line(), E, A)
        bar = BarGoal(unit_line(), E, A)
        particles = particles_at((0, 0, 0), (1.002, 0, 0))
        assert np.isclose(cable.output(particles).force_kn, bar.output(particles).force_kn)

    def test_pretension_rest_length(self):
        cable = CableGoal(unit_line(), E, A, pretension=1000.0)
        ea = E * A
        assert np.isclose(cable.rest_length, ea / (1000.0 + ea))

    def test_pretension_force_at_initial_length(self):
        """Sitting at its construction length, the cable carries its pretension."""
        cable = CableGoal(unit_line(), E, A, pretension=1000.0)
        result = cable.output(particles_at((0, 0, 0), (1, 0, 0)))
        assert np.isclose(result.force_kn, 1.0, rtol=1e-9), f"Expected 1 kN, got {result.force_kn}"

    def test_pretension_below_minus_ea_rejected(self):
        with pytest.raises(ConfigurationError):
            CableGoal(unit_line(), E, A, pretension=-E * A)
