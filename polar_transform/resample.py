"""
Image resampling between Cartesian and polar space.

Unwraps an image around a centre into a polar image (rows = angle samples,
columns = radius samples) and wraps a polar image back onto a Cartesian
grid. The sampling maps come from the point transforms in
``polar_transform.transforms`` and are handed to ``cv2.remap``.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from polar_transform.config import InvalidDimensionError, ValidationError
from polar_transform.geometry import TWO_PI
from polar_transform.transforms import CartesianToPolarTransform, PolarToCartesianTransform

# Try to import cv2, set flag if not available
try:
    import cv2

    HAS_CV2 = True
except ImportError:
    HAS_CV2 = False

# Map coordinate for samples with no defined source; lands in the constant border
OUTSIDE = -1.0e4


def _ensure_cv2() -> None:
    """Raise an error if cv2 is not available."""
    if not HAS_CV2:
        raise ImportError(
            "OpenCV (cv2) is required for resampling functions. "
            "Install with: pip install opencv-python-headless"
        )


def _validate_image(image: Any, name: str = "image") -> None:
    if not isinstance(image, np.ndarray):
        raise ValidationError(f"{name} must be a numpy array, got {type(image).__name__}")
    if image.ndim not in (2, 3):
        raise ValidationError(f"{name} must be 2D or 3D, got shape {image.shape}")
    if image.size == 0:
        raise ValidationError(f"{name} cannot be empty")


def _validate_count(name: str, value: Any, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{name} must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise ValidationError(f"{name} must be at least {minimum}, got {value}")
    return int(value)


def _validate_radius(max_radius: Any) -> float:
    try:
        value = float(max_radius)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"max_radius must be a number, got {max_radius!r}") from e
    if not np.isfinite(value) or value <= 0:
        raise ValidationError(f"max_radius must be positive, got {max_radius}")
    return value


def polar_sampling_grid(
    transform: PolarToCartesianTransform,
    n_angles: int,
    n_radii: int,
    max_radius: float
) -> tuple[NDArray[np.float32], NDArray[np.float32]]:
    """
    Build remap coordinates for unwrapping an image into polar space.

    Row k of the grid samples angle channel value 2πk / n_angles; in constant
    arc increment mode it samples arc length k * (2π max_radius / n_angles)
    instead, so every row is the same physical step apart on every ring and
    rows past a ring's circumference have no source. At radius 0 only row 0
    (arc length 0) has a source, the centre. Column j samples radius
    j * max_radius / (n_radii - 1).

    Parameters:
        transform: 2D polar-to-Cartesian transform carrying centre and mode
        n_angles: Number of rows (angle samples)
        n_radii: Number of columns (radius samples), at least 2
        max_radius: Radius of the last column

    Returns:
        (map_x, map_y) float32 arrays of shape (n_angles, n_radii). Samples
        the transform reports as NaN are set to OUTSIDE.
    """
    if transform.dimension != 2:
        raise InvalidDimensionError(
            f"resampling needs a 2D transform, got dimension {transform.dimension}"
        )
    n_angles = _validate_count("n_angles", n_angles, 1)
    n_radii = _validate_count("n_radii", n_radii, 2)
    max_radius = _validate_radius(max_radius)

    if transform.get_constant_arc_increment():
        step = TWO_PI * max_radius / n_angles
    else:
        step = TWO_PI / n_angles
    channel = np.arange(n_angles, dtype=np.float64) * step
    radii = np.linspace(0.0, max_radius, n_radii)

    angle_grid, radius_grid = np.meshgrid(channel, radii, indexing="ij")
    polar_points = np.stack([angle_grid.ravel(), radius_grid.ravel()], axis=1)

    if transform.get_constant_arc_increment():
        # Arc length has no angle at zero radius; only arc 0 there is the centre
        at_origin = polar_points[:, 1] == 0
        cartesian = np.full(polar_points.shape, np.nan)
        cartesian[~at_origin] = transform.transform_points(polar_points[~at_origin])
        cartesian[at_origin & (polar_points[:, 0] == 0)] = transform.get_center()
    else:
        cartesian = transform.transform_points(polar_points)
    cartesian = np.where(np.isnan(cartesian), OUTSIDE, cartesian)

    map_x = cartesian[:, 0].reshape(n_angles, n_radii).astype(np.float32)
    map_y = cartesian[:, 1].reshape(n_angles, n_radii).astype(np.float32)
    return map_x, map_y


def warp_to_polar(
    image: NDArray[Any],
    center: tuple[float, float] | None = None,
    n_angles: int = 360,
    n_radii: int | None = None,
    max_radius: float | None = None,
    angle_offset: float = 0.0,
    constant_arc_increment: bool = False,
    interpolation: int | None = None
) -> NDArray[Any]:
    """
    Unwrap an image around a centre into polar space.

    Parameters:
        image: Input image (H, W) or (H, W, C)
        center: (x, y) centre in pixel coordinates; defaults to the image centre
        n_angles: Number of angle samples (output rows)
        n_radii: Number of radius samples (output columns); defaults to one
            per pixel of radius
        max_radius: Largest sampled radius; defaults to half the shorter side
        angle_offset: Rotation applied to the angle channel
        constant_arc_increment: Sample equal arc lengths instead of equal angles
        interpolation: cv2 interpolation flag, cv2.INTER_LINEAR by default

    Returns:
        Polar image of shape (n_angles, n_radii[, C]) and the input dtype.
        Samples without a source (outside the image, or past a ring's
        circumference in arc mode) are 0.
    """
    _ensure_cv2()
    _validate_image(image)

    height, width = image.shape[:2]
    if center is None:
        center = ((width - 1) / 2.0, (height - 1) / 2.0)
    if max_radius is None:
        max_radius = min(height, width) / 2.0
    max_radius = _validate_radius(max_radius)
    if n_radii is None:
        n_radii = int(max_radius) + 1
    if interpolation is None:
        interpolation = cv2.INTER_LINEAR

    transform = PolarToCartesianTransform(
        2,
        center=tuple(center),
        angle_offset=angle_offset,
        constant_arc_increment=constant_arc_increment,
        return_nan=True,
    )
    map_x, map_y = polar_sampling_grid(transform, n_angles, n_radii, max_radius)
    return cv2.remap(
        image, map_x, map_y, interpolation,
        borderMode=cv2.BORDER_CONSTANT, borderValue=0
    )


def warp_to_cartesian(
    polar_image: NDArray[Any],
    output_shape: tuple[int, int],
    center: tuple[float, float] | None = None,
    max_radius: float | None = None,
    angle_offset: float = 0.0,
    constant_arc_increment: bool = False,
    interpolation: int | None = None
) -> NDArray[Any]:
    """
    Wrap a polar image produced by warp_to_polar back onto a Cartesian grid.

    Each output pixel is mapped through CartesianToPolarTransform; its angle
    selects the polar row and its radius the polar column. The first polar
    row is repeated after the last one so that interpolation is continuous
    across the 2π seam. The centre pixel, whose angle is undefined, samples
    row 0 at radius 0. In arc mode a ring of radius r ends after
    n_angles * r / max_radius rows, so only the outermost ring meets the
    repeated row; on inner rings the last partial step before the seam
    blends towards 0.

    Parameters:
        polar_image: Polar image (n_angles, n_radii[, C]) from warp_to_polar
        output_shape: (height, width) of the Cartesian output
        center: (x, y) centre in output pixel coordinates; defaults to the
            output centre
        max_radius: Radius of the last polar column; defaults to half the
            shorter output side
        angle_offset: Rotation used when the polar image was produced
        constant_arc_increment: The polar rows are equal arc-length steps of
            2π max_radius / n_angles, as produced by warp_to_polar in that mode
        interpolation: cv2 interpolation flag, cv2.INTER_LINEAR by default

    Returns:
        Cartesian image of shape (height, width[, C]); pixels beyond
        max_radius are 0.
    """
    _ensure_cv2()
    _validate_image(polar_image, "polar_image")
    if len(output_shape) < 2:
        raise ValidationError(f"output_shape must be (height, width), got {output_shape}")
    height = _validate_count("output height", output_shape[0], 1)
    width = _validate_count("output width", output_shape[1], 1)

    n_angles, n_radii = polar_image.shape[:2]
    if n_radii < 2:
        raise ValidationError(f"polar_image needs at least 2 radius columns, got {n_radii}")
    if center is None:
        center = ((width - 1) / 2.0, (height - 1) / 2.0)
    if max_radius is None:
        max_radius = min(height, width) / 2.0
    max_radius = _validate_radius(max_radius)
    if interpolation is None:
        interpolation = cv2.INTER_LINEAR

    transform = CartesianToPolarTransform(
        2,
        center=tuple(center),
        angle_offset=angle_offset,
        constant_arc_increment=constant_arc_increment,
        return_nan=True,
    )
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.stack([xs.ravel(), ys.ravel()], axis=1).astype(np.float64)
    polar = transform.transform_points(pixels)

    channel = np.nan_to_num(polar[:, 0], nan=0.0)
    radius = polar[:, 1]
    if constant_arc_increment:
        row_step = TWO_PI * max_radius / n_angles
    else:
        row_step = TWO_PI / n_angles
    map_y = (channel / row_step).reshape(height, width).astype(np.float32)
    map_x = (radius * (n_radii - 1) / max_radius).reshape(height, width).astype(np.float32)

    padded = np.concatenate([polar_image, polar_image[:1]], axis=0)
    return cv2.remap(
        padded, map_x, map_y, interpolation,
        borderMode=cv2.BORDER_CONSTANT, borderValue=0
    )
