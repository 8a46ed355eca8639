# goalmech/kernel - Goal contract, particle solver and buckling driver
"""
KERNEL: THE ELEMENT-AGNOSTIC FOUNDATION
=======================================

Everything that does not care which physical element a goal represents:

- goal.py      Goal base class, Particle, error types
- solver.py    ParticleSolver protocol and the reference ParticleSystem
- buckling.py  Incremental load-factor buckling driver

The element goals (bars, rods, beams, pressure, supports, loads) live in
goalmech.goals and plug into this contract.
"""

from .goal import (
    ConfigurationError,
    DegenerateGeometryError,
    FreeSupportWarning,
    Goal,
    Particle,
)
from .solver import ParticleSolver, ParticleSystem
from .buckling import BucklingAnalysis, BucklingResult, BucklingStatus, Snapshot

__all__ = [
    'ConfigurationError', 'DegenerateGeometryError', 'FreeSupportWarning',
    'Goal', 'Particle', 'ParticleSolver', 'ParticleSystem',
    'BucklingAnalysis', 'BucklingResult', 'BucklingStatus', 'Snapshot',
]
