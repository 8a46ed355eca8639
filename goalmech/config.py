# goalmech/config.py
"""
Analysis configuration and physical constants.
"""

from dataclasses import dataclass


# Physical constants
GAS_CONSTANT = 8.314472        # J/(mol·K)
DEFAULT_TEMPERATURE = 293.15   # K (20 °C)
GRAVITY = 9.82                 # m/s²


@dataclass
class BucklingConfig:
    """Settings for the incremental-loading buckling driver."""

    # Load factor schedule: LF_i = start + step * i
    start: float = 1.0
    step: float = 0.1

    # Classification
    angle_deg: float = 15.0          # tangent angle to vertical below which the structure has buckled
    max_displacement: float = 2.0    # m, any node moving further counts as buckled
    rms_decimals: int = 3            # RMS rounding (3 => mm for a model in m)

    # Equilibrium per increment
    threshold: float = 1e-15
    equilibrium_iterations: int = 100

    # Outer loop
    max_increments: int = 1000
    output_all: bool = False
    merge_tolerance: float = 0.01

    def __post_init__(self):
        if self.step <= 0.0:
            raise ValueError(f"Load factor step must be positive, got {self.step}")
        if self.equilibrium_iterations < 1 or self.max_increments < 1:
            raise ValueError("Iteration caps must be at least 1")


@dataclass
class SolverConfig:
    """Settings for the reference particle system."""

    momentum: float = 0.0            # 0 = pure projection, <1 adds inertia to the update
    merge_tolerance: float = 0.01


# Global config instances
BUCKLING = BucklingConfig()
SOLVER = SolverConfig()
