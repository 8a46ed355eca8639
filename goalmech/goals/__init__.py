# goalmech/goals - Element goals
"""Structural goals: each one turns an element law into particle corrections."""

from .bar import BarGoal, CableGoal
from .rod import RodGoal
from .beam import BeamGoal, beam_planes_from_line, stiffness_scale
from .pressure import PressureGoal, mesh_volume
from .support import SupportGoal, Support6DOFGoal
from .load import LoadGoal

__all__ = [
    'BarGoal', 'CableGoal', 'RodGoal', 'BeamGoal', 'beam_planes_from_line',
    'stiffness_scale', 'PressureGoal', 'mesh_volume', 'SupportGoal',
    'Support6DOFGoal', 'LoadGoal',
]
