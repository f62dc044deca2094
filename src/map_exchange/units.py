"""Feet/pixel conversion on the 5-foot-per-square convention.

None of the supported formats store distances in feet at the map level;
these helpers exist for game-logic callers that work in feet.
"""

from .config import FEET_PER_SQUARE


def _check_grid_size(grid_size: float) -> None:
    if grid_size <= 0:
        raise ValueError(f"Grid size must be positive, got {grid_size}")


def feet_to_pixels(feet: float, grid_size: float) -> float:
    """Convert a distance in feet to pixels for a grid of grid_size pixels per square."""
    _check_grid_size(grid_size)
    return feet / FEET_PER_SQUARE * grid_size


def pixels_to_feet(pixels: float, grid_size: float) -> float:
    """Inverse of feet_to_pixels()."""
    _check_grid_size(grid_size)
    return pixels / grid_size * FEET_PER_SQUARE
