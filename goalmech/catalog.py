"""
CATALOG: MATERIAL PROPERTIES
============================

PURPOSE:
--------
A short list of materials used for lightweight and form-active structures,
referenced by index or name, so scripts don't hardcode E and density.

Units: density in kg/m³, E and fy in MPa (the units the goals expect).
"""

from dataclasses import dataclass
from typing import List, Union


@dataclass(frozen=True)
class Material:
    """
    Material properties.

    Parameters:
    -----------
    name : str
        Human-readable name (e.g., "Steel (S355)")
    density : float
        Density (kg/m³)
    E : float
        Young's modulus (MPa)
    fy : float
        Yield / design strength (MPa)
    """
    name: str
    density: float
    E: float
    fy: float


MATERIALS: List[Material] = [
    Material(name="Steel (S355)", density=7850.0, E=2.1e5, fy=355.0),
    Material(name="Aluminium (6061-T6)", density=2700.0, E=70e3, fy=240.0),
    # Mean of the two grain directions
    Material(name="Birch plywood (t=6.5 mm)", density=680.0, E=(12737 + 4763) / 2.0, fy=(50.9 + 29) / 2.0),
    Material(name="ETFE", density=1750.0, E=965.0, fy=48.0),
    Material(name="GFRP", density=2100.0, E=40e3, fy=900.0),
    Material(name="Carbon fiber", density=1760.0, E=230e3, fy=3500.0),
    Material(name="Kevlar (49)", density=1440.0, E=112.4e3, fy=2800.0),
    Material(name="Dyneema", density=980.0, E=116e3, fy=3600.0),
]

DEFAULT_MATERIAL = MATERIALS[0]


def get_material(key: Union[int, str]) -> Material:
    """
    Look up a material by list index or by (case-insensitive) name prefix.

    Raises:
    -------
    KeyError
        If no material matches
    """
    if isinstance(key, int):
        if not 0 <= key < len(MATERIALS):
            raise KeyError(f"Material index {key} out of range (0-{len(MATERIALS) - 1})")
        return MATERIALS[key]
    wanted = key.strip().lower()
    for mat in MATERIALS:
        if mat.name.lower().startswith(wanted):
            return mat
    raise KeyError(f"Unknown material '{key}'")
