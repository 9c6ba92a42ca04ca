"""
Transform Configuration
=======================

Error taxonomy and the immutable configuration record shared by both polar
transforms:
- PolarTransformError: base class for every error raised by this package
- ValidationError: malformed configuration values or inputs
- InvalidDimensionError: dimensionality below 2 or mismatched point sizes
- DomainError: direction undefined (zero radius)
- UnsupportedOperationError: vector, covariant vector or Jacobian requests
- PolarConfig: centre, angle offset and the arc/NaN mode flags
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Real
from typing import Any

import numpy as np

MIN_DIMENSION = 2


class PolarTransformError(Exception):
    """Base class for polar transform errors."""

    pass


class ValidationError(PolarTransformError, ValueError):
    """Raised when input validation fails."""

    pass


class InvalidDimensionError(PolarTransformError, ValueError):
    """Raised when a dimensionality is below 2 or does not match the transform."""

    pass


class DomainError(PolarTransformError, ArithmeticError):
    """Raised when the angle of a point is undefined (zero radius)."""

    pass


class UnsupportedOperationError(PolarTransformError, NotImplementedError):
    """Raised for operations the polar mapping does not define."""

    pass


def validate_dimension(dimension: Any) -> int:
    """Validate a space dimension and return it as an int.

    Args:
        dimension: Number of coordinates per point

    Returns:
        The dimension as a plain int

    Raises:
        InvalidDimensionError: If dimension is not an integer >= 2
    """
    if isinstance(dimension, bool) or not isinstance(dimension, (int, np.integer)):
        raise InvalidDimensionError(
            f"dimension must be an integer, got {type(dimension).__name__}"
        )
    if dimension < MIN_DIMENSION:
        raise InvalidDimensionError(
            f"polar transforms need at least {MIN_DIMENSION} dimensions, got {dimension}"
        )
    return int(dimension)


def validate_dtype(dtype: Any) -> np.dtype:
    """Validate the scalar precision of a transform.

    Raises:
        ValidationError: If dtype is not a numpy floating type
    """
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"dtype must be a numpy floating type, got {dtype!r}") from e
    if not np.issubdtype(resolved, np.floating):
        raise ValidationError(f"dtype must be a numpy floating type, got {resolved}")
    return resolved


def _validate_flag(name: str, value: Any) -> bool:
    if not isinstance(value, (bool, np.bool_)):
        raise ValidationError(f"{name} must be a bool, got {type(value).__name__}")
    return bool(value)


def _validate_center(center: Any) -> tuple[float, ...]:
    """Validate a centre point and normalize it to an immutable tuple of floats.

    Raises:
        ValidationError: If center is not a 1-D sequence of finite numbers
    """
    if isinstance(center, np.ndarray):
        if center.ndim != 1:
            raise ValidationError(f"center must be a 1-D point, got shape {center.shape}")
        values = center.tolist()
    elif isinstance(center, Sequence) and not isinstance(center, str):
        values = list(center)
    else:
        raise ValidationError(
            f"center must be a sequence of coordinates, got {type(center).__name__}"
        )

    normalized = []
    for i, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ValidationError(
                f"center[{i}] must be a number, got {type(value).__name__}"
            )
        value_float = float(value)
        if not math.isfinite(value_float):
            raise ValidationError(f"center[{i}] must be finite, got {value}")
        normalized.append(value_float)
    return tuple(normalized)


@dataclass(frozen=True)
class PolarConfig:
    """Immutable configuration of a polar transform.

    A transform swaps in a new PolarConfig whenever one of its setters is
    called; an existing instance is never modified, so a call in flight
    always works against one consistent snapshot.

    Attributes:
        center: Origin of the polar coordinate system. None means the origin
            of whatever dimension the owning transform has.
        angle_offset: Rotation (radians) added to the forward angle and
            removed from the inverse angle.
        constant_arc_increment: If True, the angle channel carries arc length
            (angle x radius) instead of the raw angle.
        return_nan: If True, undefined or out-of-domain results are reported
            as NaN coordinates instead of raising or wrapping.

    Raises:
        ValidationError: If any field is malformed
    """

    center: tuple[float, ...] | None = None
    angle_offset: float = 0.0
    constant_arc_increment: bool = False
    return_nan: bool = False

    def __post_init__(self) -> None:
        """Validate fields and normalize them to immutable builtin types."""
        # Use object.__setattr__ because the dataclass is frozen
        if self.center is not None:
            object.__setattr__(self, "center", _validate_center(self.center))

        if isinstance(self.angle_offset, bool) or not isinstance(self.angle_offset, Real):
            raise ValidationError(
                f"angle_offset must be a number, got {type(self.angle_offset).__name__}"
            )
        offset = float(self.angle_offset)
        if not math.isfinite(offset):
            raise ValidationError(f"angle_offset must be finite, got {self.angle_offset}")
        object.__setattr__(self, "angle_offset", offset)

        object.__setattr__(
            self,
            "constant_arc_increment",
            _validate_flag("constant_arc_increment", self.constant_arc_increment),
        )
        object.__setattr__(self, "return_nan", _validate_flag("return_nan", self.return_nan))

    def for_dimension(self, dimension: int) -> PolarConfig:
        """Return a config whose centre has exactly ``dimension`` coordinates.

        A missing centre becomes the all-zero point.

        Raises:
            InvalidDimensionError: If the centre has a different length
        """
        if self.center is None:
            return PolarConfig(
                center=(0.0,) * dimension,
                angle_offset=self.angle_offset,
                constant_arc_increment=self.constant_arc_increment,
                return_nan=self.return_nan,
            )
        if len(self.center) != dimension:
            raise InvalidDimensionError(
                f"center must have {dimension} coordinates, got {len(self.center)}"
            )
        return self
