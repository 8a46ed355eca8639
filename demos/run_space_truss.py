#!/usr/bin/env python3
"""
RUN_SPACE_TRUSS: Relaxing a Tetrahedron With Bar Goals
======================================================

This demo shows the goal-based workflow on the smallest 3D structure:
1. Build a tetrahedron from 6 bar goals
2. Pin the three base nodes with support goals
3. Hang a vertical load goal on the apex
4. Relax the particle system to equilibrium
5. Read back bar forces and support reactions

Run with:
    python demos/run_space_truss.py
"""

import logging
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from goalmech import BarGoal, LoadGoal, Line, ParticleSystem, SupportGoal, setup_logging
from goalmech.catalog import get_material
from goalmech.post import nodal_displacements
from goalmech.section import circular_section


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60)


def main():
    setup_logging(logging.INFO)
    print_header("TETRAHEDRON RELAXATION")

    # =========================================================================
    # STEP 1: GEOMETRY
    # =========================================================================
    base_radius = 2.0  # m
    height = 3.0  # m
    angles = [0, 2 * np.pi / 3, 4 * np.pi / 3]
    base = [np.array([base_radius * np.cos(a), base_radius * np.sin(a), 0.0]) for a in angles]
    apex = np.array([0.0, 0.0, height])

    lines = [Line(base[i], base[(i + 1) % 3]) for i in range(3)]
    lines += [Line(b, apex) for b in base]

    # =========================================================================
    # STEP 2: GOALS
    # =========================================================================
    steel = get_material("steel")
    section = circular_section(60.0, 4.0)
    print(f"\nMaterial: {steel.name} (E = {steel.E:.0f} MPa)")
    print(f"Section:  tube 60x4, A = {section.A:.0f} mm^2")

    P = -30e3  # N
    bars = [BarGoal(ln, steel.E, section.A) for ln in lines]
    supports = [SupportGoal(b) for b in base]
    load = LoadGoal(apex, (0.0, 0.0, P))
    goals = bars + supports + [load]

    # =========================================================================
    # STEP 3: RELAX
    # =========================================================================
    ps = ParticleSystem()
    for goal in goals:
        ps.assign_indices(goal, 0.01)
    initial = ps.positions()
    steps = ps.solve(goals, threshold=1e-20, max_iterations=20000)
    print(f"\nParticles: {len(ps)}, relaxed in {steps} steps")

    # =========================================================================
    # RESULTS
    # =========================================================================
    print_header("RESULTS: Displacements (mm)")
    for i, d in enumerate(nodal_displacements(initial, ps.positions())):
        print(f"  Node {i}: ux={d[0]:8.4f}, uy={d[1]:8.4f}, uz={d[2]:8.4f}")

    print_header("RESULTS: Support Reactions (kN)")
    total = np.zeros(3)
    for s in supports:
        r = s.output(ps.particles).reaction_force_kn
        total += r
        print(f"  Rx={r[0]:8.2f}, Ry={r[1]:8.2f}, Rz={r[2]:8.2f}")
    print(f"\n  -> Sum(Rz) = {total[2]:.2f} kN, applied {P / 1e3:.2f} kN")

    print_header("RESULTS: Bar Forces (kN)")
    print("  (Positive = Tension, Negative = Compression)\n")
    for i, bar in enumerate(bars):
        r = bar.output(ps.particles)
        print(f"  Bar {i}: {r.start_index}->{r.end_index}  N = {r.force_kn:8.2f} kN  "
              f"sigma = {r.stress_mpa:7.2f} MPa")

    # Legs by statics: each leg carries P / (3 sin(alpha))
    leg = np.hypot(base_radius, height)
    print(f"\n  -> Hand calculation, legs: {P / 3.0 * leg / height / 1e3:.2f} kN")
    return ps


if __name__ == "__main__":
    main()
