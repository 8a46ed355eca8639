# goalmech - Goal-based structural mechanics for particle relaxation
"""
GOALMECH: Structural Goals for Dynamic-Relaxation Style Solvers
===============================================================

This package provides:
- Element goals: bars, cables, elastic rods, 6-DOF beams, gas pressure
- Boundary conditions and point loads as goals
- A reference particle solver (weighted projection)
- Incremental-loading buckling analysis
- Post-processing: shear, stress summation, displacements, moment transforms
- Load generation for bar networks and meshes, sections and materials

ARCHITECTURE:
-------------
    kernel/         Goal contract, particle solver, buckling driver
    goals/          Element goals (bar, rod, beam, pressure, support, load)
    geometry.py     Line, Plane and vector helpers
    results.py      Output records of the goals
    post.py         Derived quantities from goal outputs
    loads.py        Nodal loads (self-weight, snow, wind, pretension)
    section.py      Cross-section properties
    catalog.py      Material catalog
    config.py       Defaults and physical constants

UNITS:
------
Geometry in m, E/G in MPa, A in mm², I/It in mm⁴, forces in N.
Results in kN, kNm and MPa.
"""

from .kernel import (
    BucklingAnalysis,
    BucklingResult,
    BucklingStatus,
    ConfigurationError,
    DegenerateGeometryError,
    FreeSupportWarning,
    ParticleSystem,
)
from .goals import (
    BarGoal,
    BeamGoal,
    CableGoal,
    LoadGoal,
    PressureGoal,
    RodGoal,
    Support6DOFGoal,
    SupportGoal,
)
from .geometry import Line, Plane
from .logging_config import setup_logging

__version__ = "0.1.0"
