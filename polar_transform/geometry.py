"""
Geometry utilities for centre-relative frames, principal angles and wraparound.

All functions are vectorised over numpy arrays and work on the first two
coordinates of a point only; the polar transforms carry any further
coordinates through untouched.
"""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

TWO_PI = 2.0 * np.pi

# Closed range accepted by the inverse mapping when NaN reporting is enabled.
# The forward mapping produces [0, 2π); the upper bound is kept closed so that
# an angle rounded up to exactly 2π is not rejected.
ANGLE_DOMAIN = (0.0, TWO_PI)


def to_center_frame(
    points: NDArray[np.floating],
    center: NDArray[np.floating]
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Offsets of the first two coordinates from a centre.

    Parameters:
        points: Array of shape (M, N) or (N,) with N >= 2
        center: Centre point of shape (N,) (only the first two entries are used)

    Returns:
        Tuple of (dx, dy), each of shape (M,) or scalar-shaped for a single point
    """
    points = np.asarray(points)
    dx = points[..., 0] - center[0]
    dy = points[..., 1] - center[1]
    return dx, dy


def principal_angle(
    dx: NDArray[np.floating],
    dy: NDArray[np.floating],
    radius: NDArray[np.floating]
) -> NDArray[np.floating]:
    """
    Angle of (dx, dy) from the positive x-axis in [0, 2π).

    Computed as acos(dx / r), reflected to 2π - acos(dx / r) in the lower
    half-plane (dy < 0). Where radius is zero the result is NaN; callers
    decide whether that is an error.

    Parameters:
        dx: x offsets from the centre
        dy: y offsets from the centre
        radius: Euclidean length of (dx, dy)

    Returns:
        Angles in radians, same shape as the inputs
    """
    with np.errstate(invalid="ignore", divide="ignore"):
        cosine = dx / radius
    # Rounding can push |dx / r| a hair past 1 for points on the x-axis
    alpha = np.arccos(np.clip(cosine, -1.0, 1.0))
    return np.where(dy < 0, TWO_PI - alpha, alpha)


def wrap_angle(angle: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Wrap angle to [0, 2π) range.

    Parameters:
        angle: Angles in radians (NaN propagates)

    Returns:
        Wrapped angles in [0, 2π)
    """
    wrapped = np.mod(angle, TWO_PI)
    # np.mod returns exactly 2π for tiny negative inputs
    return np.where(wrapped >= TWO_PI, wrapped - TWO_PI, wrapped)


def in_angle_domain(angle: NDArray[np.floating]) -> NDArray[np.bool_]:
    """
    Check which angles lie in the closed range [0, 2π].

    NaN angles are reported as outside the domain.
    """
    low, high = ANGLE_DOMAIN
    with np.errstate(invalid="ignore"):
        return (angle >= low) & (angle <= high)
