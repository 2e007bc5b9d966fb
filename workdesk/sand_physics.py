"""
Hourglass sand model.

Turns a progress ratio into the sand heights of the two chambers. Sand
volume is conserved: whatever has left the upper chamber is in the lower
one. Heights are not linear in volume because a bulb is wider in the
middle than at the neck.
"""

import math
from numbers import Real

import numpy as np

from workdesk.models import SandState

# Shape calibration for the bulb-shaped chambers
SAND_SHAPE_EXPONENT = 0.7

# Falling particle visual is shown while the upper chamber holds more than this
FALLING_PARTICLE_THRESHOLD = 0.01

# Peak rise of the pile above the flat level for a full-width surface.
# This 3% cap stands in for the 22 degree angle of repose of dry sand.
MAX_CENTER_BULGE = 0.03

# Half-width of the bulb at its narrowest point (fraction of the widest)
NECK_WIDTH = 0.08


class InvalidProgressError(ValueError):
    """Progress is not a finite real number."""


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _validate_ratio(value, name: str) -> float:
    # bool is a Real subclass but never a meaningful ratio
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidProgressError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if math.isnan(value):
        raise InvalidProgressError(f"{name} is NaN")
    if math.isinf(value):
        raise InvalidProgressError(f"{name} is infinite")
    return value


def compute_heights(progress: float) -> SandState:
    """
    Compute the upper and lower sand heights for a progress ratio.

    Args:
        progress: Elapsed / total time. Values outside [0, 1] are clamped.

    Returns:
        SandState with both heights in [0, 1]

    Raises:
        InvalidProgressError: If progress is NaN, infinite or not a number
    """
    lower_volume = _clamp(_validate_ratio(progress, "progress"))
    upper_volume = 1 - lower_volume

    return SandState(
        upper_height=upper_volume**SAND_SHAPE_EXPONENT,
        lower_height=lower_volume**SAND_SHAPE_EXPONENT,
        upper_volume=upper_volume,
        lower_volume=lower_volume,
    )


def is_sand_falling(
    state: SandState, threshold: float = FALLING_PARTICLE_THRESHOLD
) -> bool:
    """Whether the falling-particle stream should be drawn."""
    return state.upper_height > threshold


def container_width_at(height: float) -> float:
    """Normalized half-width of a chamber at a normalized height."""
    height = _clamp(height)
    return NECK_WIDTH + (1 - NECK_WIDTH) * math.sin(math.pi * height)


def get_sand_height_at_position(fill_height: float, position: float) -> float:
    """
    Surface height of the sand pile at a horizontal position.

    The pile is a cone spanning the chamber width at the fill level, rising
    MAX_CENTER_BULGE per unit of distance from the edge of the surface.

    Args:
        fill_height: Flat sand level in [0, 1] (clamped)
        position: Horizontal coordinate in [-1, 1], 0 at the center (clamped)

    Returns:
        Surface height in [0, 1]
    """
    fill_height = _clamp(_validate_ratio(fill_height, "fill_height"))
    position = _clamp(_validate_ratio(position, "position"), -1.0, 1.0)

    if fill_height <= 0.0 or fill_height >= 1.0:
        return fill_height

    half_width = container_width_at(fill_height)
    distance = abs(position)
    if distance >= half_width:
        return fill_height

    return min(1.0, fill_height + MAX_CENTER_BULGE * (half_width - distance))


def sand_surface_profile(fill_height: float, samples: int = 41) -> np.ndarray:
    """
    Sample the pile surface across the chamber width.

    Args:
        fill_height: Flat sand level in [0, 1]
        samples: Number of evenly spaced positions from -1 to 1

    Returns:
        Array of surface heights, one per position
    """
    if samples < 2:
        raise ValueError("samples must be at least 2")

    fill_height = _clamp(_validate_ratio(fill_height, "fill_height"))
    positions = np.linspace(-1.0, 1.0, samples)
    if fill_height <= 0.0 or fill_height >= 1.0:
        return np.full(samples, fill_height)

    half_width = container_width_at(fill_height)
    bulge = np.clip(MAX_CENTER_BULGE * (half_width - np.abs(positions)), 0.0, None)
    return np.minimum(1.0, fill_height + bulge)
