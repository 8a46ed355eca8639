# goalmech/section.py
"""
CROSS-SECTION PROPERTIES
========================

Solid and hollow circular and rectangular sections, in the units the goals
expect: A in mm², I and It in mm⁴, z in mm. A wall thickness t = 0 means a
solid section.

Torsion constants:
- circle: polar moment π d⁴/32 (minus the hole)
- solid rectangle: a b³ (1/3 − 0.21 (b/a)(1 − b⁴/(12 a⁴))), a >= b
- hollow rectangle: Bredt's thin-walled formula 2 t a_m² b_m² / (a_m + b_m)
"""

from dataclasses import dataclass
import math

from .kernel.goal import ConfigurationError


@dataclass(frozen=True)
class SectionProperties:
    """
    Section properties for the goals.

    Attributes:
    -----------
    A : float   area (mm²)
    I : float   second moment of area about the bending axis (mm⁴)
    z : float   distance to the extreme fibre (mm)
    It : float  torsion constant (mm⁴)
    """
    A: float
    I: float
    z: float
    It: float


def _check_wall(t: float, limit: float, what: str) -> None:
    if t < 0.0 or 2.0 * t > limit:
        raise ConfigurationError(f"Wall thickness {t} mm does not fit a {what}")


def circular_section(d: float, t: float = 0.0) -> SectionProperties:
    """Solid (t = 0) or tubular circular section of outer diameter d (mm)."""
    if d <= 0.0:
        raise ConfigurationError(f"Diameter must be positive, got {d}")
    _check_wall(t, d, f"tube of diameter {d} mm")
    inner = d - 2.0 * t if t > 0.0 else 0.0

    A = math.pi / 4.0 * (d ** 2 - inner ** 2)
    I = math.pi / 64.0 * (d ** 4 - inner ** 4)
    It = math.pi / 32.0 * (d ** 4 - inner ** 4)
    return SectionProperties(A=A, I=I, z=d / 2.0, It=It)


def rectangular_section(w: float, h: float, t: float = 0.0) -> SectionProperties:
    """Solid (t = 0) or hollow rectangular section, width w and height h (mm), bending about the width axis."""
    if w <= 0.0 or h <= 0.0:
        raise ConfigurationError(f"Width and height must be positive, got w={w}, h={h}")
    _check_wall(t, min(w, h), f"{w}x{h} mm rectangle")

    A = w * h
    I = w * h ** 3 / 12.0
    if t > 0.0:
        A -= (w - 2.0 * t) * (h - 2.0 * t)
        I -= (w - 2.0 * t) * (h - 2.0 * t) ** 3 / 12.0
        wm, hm = w - t, h - t
        It = 2.0 * t * wm ** 2 * hm ** 2 / (wm + hm)
    else:
        a, b = max(w, h), min(w, h)
        It = a * b ** 3 * (1.0 / 3.0 - 0.21 * (b / a) * (1.0 - b ** 4 / (12.0 * a ** 4)))
    return SectionProperties(A=A, I=I, z=h / 2.0, It=It)
