#!/usr/bin/env python3
"""
RUN_BUCKLING_COLUMN: Incremental Buckling of a Pinned Column
============================================================

A 3 m pinned-pinned steel column built from bar and rod goals, with a
small sine-shaped imperfection. The axial load is increased step by step
until the lateral displacement runs away, and the buckling load factor is
compared with Euler's load:

    P_cr = π² E I / L²

Run with:
    python demos/run_buckling_column.py
"""

import logging
import sys
from pathlib import Path

import numpy as np

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from goalmech import (
    BarGoal,
    BucklingAnalysis,
    LoadGoal,
    Line,
    ParticleSystem,
    RodGoal,
    SupportGoal,
    setup_logging,
)
from goalmech.catalog import get_material
from goalmech.config import BucklingConfig
from goalmech.section import circular_section


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 60)
    print(f"  {text}")
    print("=" * 60)


def main():
    setup_logging(logging.INFO)
    print_header("PINNED COLUMN BUCKLING")

    L = 3.0  # m
    n_segments = 8
    imperfection = L / 500.0

    steel = get_material("steel")
    section = circular_section(50.0)
    EI = steel.E * section.I * 1e-6  # N·m²
    P_cr = np.pi ** 2 * EI / L ** 2
    print(f"\nEuler load: {P_cr / 1e3:.1f} kN")

    z = np.linspace(0.0, L, n_segments + 1)
    points = [np.array([imperfection * np.sin(np.pi * zi / L), 0.0, zi]) for zi in z]
    lines = [Line(points[i], points[i + 1]) for i in range(n_segments)]

    bars = [BarGoal(ln, steel.E, section.A) for ln in lines]
    # Imperfect shape as rest state, so the initial bow is stress-free
    rods = [RodGoal(lines[i], lines[i + 1], steel.E, section.I, section.z, rest="current")
            for i in range(n_segments - 1)]
    supports = [SupportGoal(points[0]), SupportGoal(points[-1], fixed=(True, True, False))]

    # Reference load at half the Euler load: expect a buckling factor near 2
    loads = [LoadGoal(points[-1], (0.0, 0.0, -0.5 * P_cr))]

    cfg = BucklingConfig(start=1.0, step=0.05, equilibrium_iterations=5000, max_increments=60)
    analysis = BucklingAnalysis(bars + rods + supports, loads, cfg)
    result = analysis.run(ParticleSystem())

    print_header("RESULTS")
    print(result.to_frame().to_string(index=False))
    print(f"\n  Status:               {result.status.value}")
    print(f"  Buckling load factor: {result.buckling_load_factor:.2f}")
    print(f"  -> Buckling load:     {result.buckling_load_factor * 0.5 * P_cr / 1e3:.1f} kN "
          f"(Euler {P_cr / 1e3:.1f} kN)")
    return result


if __name__ == "__main__":
    main()
