"""
Grid key assignment.

Maps a (latitude, longitude) pair to a fixed-size planar grid cell.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

import config.settings as settings


def to_fixed(value: float, digits: int = 3) -> str:
    """
    Render a float with exactly `digits` decimals.

    Rounds the exact binary value of the float, ties away from zero, so
    0.0625 renders as "0.063" while 1.0005 (stored slightly below the tie)
    renders as "1.000". Negative zero renders without a sign, small
    negative values keep it ("-0.000"). Magnitudes of 1e21 and above use
    exponent notation ("1e+21"); infinities render as "Infinity".

    Args:
        value: Float to render
        digits: Number of decimals

    Returns:
        Fixed-point string
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if abs(value) >= 1e21:
        return repr(float(value))
    if value == 0:
        value = 0.0
    exponent = Decimal(1).scaleb(-digits)
    with localcontext() as ctx:
        # Wide enough for any finite double
        ctx.prec = 400
        rounded = Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
    return format(rounded, "f")


def floor_to_grid(value: float, grid_size: float) -> float:
    """Floor a coordinate to its cell origin; an overflowing quotient stays infinite."""
    quotient = value / grid_size
    if not math.isfinite(quotient):
        return quotient
    return math.floor(quotient) * grid_size


def grid_key(
    lat: float,
    lng: float,
    grid_size: float = settings.GRID_SIZE_DEGREES,
    decimals: int = settings.GRID_KEY_DECIMALS
) -> str:
    """
    Compute the cell identifier for a coordinate.

    Quantizes twice: floor to the grid, then render with `decimals` digits.
    Two coordinates share a cell iff both rendered values are identical.

    Args:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
        grid_size: Cell size in degrees
        decimals: Digits kept when rendering the floored values

    Returns:
        Cell identifier, e.g. "-23.553_-46.638"
    """
    cell_lat = floor_to_grid(lat, grid_size)
    cell_lng = floor_to_grid(lng, grid_size)
    return f"{to_fixed(cell_lat, decimals)}_{to_fixed(cell_lng, decimals)}"
