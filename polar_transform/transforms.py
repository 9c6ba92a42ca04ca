"""
Cartesian <-> polar point transforms.

Both transforms map the first two coordinates of an N-dimensional point
(N >= 2) and carry every further coordinate through unchanged:

    CartesianToPolarTransform:  (x, y, ...)      -> (angle, radius, ...)
    PolarToCartesianTransform:  (angle, radius, ...) -> (x, y, ...)

Angles are radians measured counter-clockwise from the positive x-axis
around the configured centre. The forward mapping always reports angles in
[0, 2π) after the angle offset has been applied; with constant arc increment
enabled the angle channel holds arc length (angle x radius) instead.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from polar_transform.config import (
    DomainError,
    InvalidDimensionError,
    PolarConfig,
    UnsupportedOperationError,
    ValidationError,
    validate_dimension,
    validate_dtype,
)
from polar_transform.debug import format_config
from polar_transform.geometry import (
    in_angle_domain,
    principal_angle,
    to_center_frame,
    wrap_angle,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class PointTransform(Protocol):
    """The capability both transforms offer: mapping points, nothing else."""

    @property
    def dimension(self) -> int: ...

    def transform_point(self, point: ArrayLike) -> NDArray[np.floating]: ...

    def transform_points(self, points: ArrayLike) -> NDArray[np.floating]: ...


class _PolarTransformBase:
    """Configuration plumbing shared by the two polar transforms.

    The configuration is a frozen PolarConfig that setters replace as a
    whole under a lock. transform_point reads the current reference once, so
    concurrent calls need no synchronisation.
    """

    number_of_parameters = 0

    def __init__(
        self,
        dimension: int = 2,
        dtype: Any = np.float64,
        *,
        center: ArrayLike | None = None,
        angle_offset: float = 0.0,
        constant_arc_increment: bool = False,
        return_nan: bool = False,
        config: PolarConfig | None = None,
    ) -> None:
        self._dimension = validate_dimension(dimension)
        self._dtype = validate_dtype(dtype)
        if config is None:
            config = PolarConfig(
                center=center,
                angle_offset=angle_offset,
                constant_arc_increment=constant_arc_increment,
                return_nan=return_nan,
            )
        self._lock = threading.Lock()
        self._config = config.for_dimension(self._dimension)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(dimension={self._dimension}, "
            f"dtype={self._dtype.name}, {format_config(self._config)})"
        )

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def config(self) -> PolarConfig:
        return self._config

    def set_config(self, config: PolarConfig) -> None:
        """Replace the whole configuration.

        Raises:
            InvalidDimensionError: If the config centre has the wrong length
        """
        if not isinstance(config, PolarConfig):
            raise ValidationError(
                f"config must be a PolarConfig, got {type(config).__name__}"
            )
        config = config.for_dimension(self._dimension)
        with self._lock:
            self._config = config
        logger.debug("%s reconfigured: %s", type(self).__name__, format_config(config))

    def _update(self, **changes: Any) -> None:
        with self._lock:
            config = replace(self._config, **changes).for_dimension(self._dimension)
            self._config = config
        logger.debug("%s reconfigured: %s", type(self).__name__, format_config(config))

    def get_center(self) -> NDArray[np.floating]:
        return np.array(self._config.center, dtype=self._dtype)

    def set_center(self, center: ArrayLike) -> None:
        self._update(center=center)

    def get_angle_offset(self) -> float:
        return self._config.angle_offset

    def set_angle_offset(self, angle_offset: float) -> None:
        self._update(angle_offset=angle_offset)

    def get_constant_arc_increment(self) -> bool:
        return self._config.constant_arc_increment

    def set_constant_arc_increment(self, enabled: bool) -> None:
        self._update(constant_arc_increment=enabled)

    def get_return_nan(self) -> bool:
        return self._config.return_nan

    def set_return_nan(self, enabled: bool) -> None:
        self._update(return_nan=enabled)

    center = property(get_center, set_center)
    angle_offset = property(get_angle_offset, set_angle_offset)
    constant_arc_increment = property(get_constant_arc_increment, set_constant_arc_increment)
    return_nan = property(get_return_nan, set_return_nan)

    # -------------------------------------------------------------------------
    # Point mapping
    # -------------------------------------------------------------------------

    def transform_point(self, point: ArrayLike) -> NDArray[np.floating]:
        """
        Transform a single point.

        Parameters:
            point: Sequence of ``dimension`` coordinates

        Returns:
            New array of shape (dimension,) in the transform's dtype

        Raises:
            InvalidDimensionError: If point does not have ``dimension`` coordinates
            DomainError: If the result is undefined and return_nan is off
        """
        array = self._as_array(point)
        if array.shape != (self._dimension,):
            raise InvalidDimensionError(
                f"point must have shape ({self._dimension},), got {array.shape}"
            )
        return self._map(array[np.newaxis, :], self._config)[0]

    def transform_points(self, points: ArrayLike) -> NDArray[np.floating]:
        """
        Transform a batch of points, one per row.

        Parameters:
            points: Array of shape (M, dimension)

        Returns:
            New array of shape (M, dimension) in the transform's dtype

        Raises:
            InvalidDimensionError: If points is not of shape (M, dimension)
            DomainError: If any row is undefined and return_nan is off
        """
        array = self._as_array(points)
        if array.ndim != 2 or array.shape[1] != self._dimension:
            raise InvalidDimensionError(
                f"points must have shape (M, {self._dimension}), got {array.shape}"
            )
        return self._map(array, self._config)

    def _as_array(self, values: ArrayLike) -> NDArray[np.floating]:
        try:
            # Always a copy: the caller's array is never written to or kept
            return np.array(values, dtype=self._dtype)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"points must be numeric, got {values!r}") from e

    def _map(self, points: NDArray[np.floating], config: PolarConfig) -> NDArray[np.floating]:
        raise NotImplementedError

    def inverse(self) -> _PolarTransformBase:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Operations the polar mapping does not define
    # -------------------------------------------------------------------------

    def transform_vector(self, vector: ArrayLike) -> NDArray[np.floating]:
        """Not applicable: a polar mapping has no base-point-free vector transport."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot transform vectors"
        )

    def transform_covariant_vector(self, vector: ArrayLike) -> NDArray[np.floating]:
        """Not applicable for polar transforms."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} cannot transform covariant vectors"
        )

    def jacobian(self, point: ArrayLike) -> NDArray[np.floating]:
        """Not applicable for polar transforms."""
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not provide a Jacobian"
        )


class CartesianToPolarTransform(_PolarTransformBase):
    """
    Map (x, y, ...) to (angle, radius, ...) around a centre.

    The output angle lies in [0, 2π): the angle of (x - cx, y - cy) from the
    positive x-axis is resolved over the full circle first, then rotated by
    ``angle_offset`` and wrapped. With ``constant_arc_increment`` the angle
    channel is multiplied by the radius, so equal steps along it are equal
    arc lengths on every ring.

    A point exactly at the centre has no direction. It raises DomainError,
    or with ``return_nan`` set maps to (nan, 0, ...) with trailing
    coordinates kept.

    Example:
        >>> c2p = CartesianToPolarTransform(4, center=(-1.0, 0.0, 0.0, 0.0))
        >>> c2p.transform_point([0.0, np.sqrt(3.0), 3.0, 3.0])
        array([1.04719755, 2.        , 3.        , 3.        ])
    """

    def _map(self, points: NDArray[np.floating], config: PolarConfig) -> NDArray[np.floating]:
        dx, dy = to_center_frame(points, config.center)
        # hypot does not underflow to 0 or overflow to inf on squaring
        radius = np.hypot(dx, dy)

        at_center = radius == 0
        n_undefined = int(np.count_nonzero(at_center))
        if n_undefined and not config.return_nan:
            raise DomainError(
                f"angle is undefined at the centre {config.center[:2]} "
                f"({n_undefined} point(s))"
            )

        alpha = wrap_angle(principal_angle(dx, dy, radius) + config.angle_offset)
        if config.constant_arc_increment:
            alpha = alpha * radius

        if n_undefined:
            alpha = np.where(at_center, np.nan, alpha)
            logger.debug("%d point(s) at the centre mapped to a NaN angle", n_undefined)

        result = points.copy()
        result[:, 0] = alpha
        result[:, 1] = radius
        return result

    def inverse(self) -> PolarToCartesianTransform:
        """Return the polar-to-Cartesian transform with the same configuration."""
        return PolarToCartesianTransform(self._dimension, self._dtype, config=self._config)


class PolarToCartesianTransform(_PolarTransformBase):
    """
    Map (angle, radius, ...) to (x, y, ...) around a centre.

    ``angle_offset`` is subtracted from the angle before projecting, which
    undoes the forward rotation. With ``constant_arc_increment`` the angle
    channel is read as arc length and divided by the radius; zero radius then
    raises DomainError, or gives an all-NaN point with ``return_nan``.

    With ``return_nan`` set, an angle outside [0, 2π] (the range the forward
    mapping produces) gives an all-NaN point. Without it such angles simply
    wrap around the circle. A negative radius reflects through the centre.

    Coordinates from index 2 on are passed through unchanged; they are not
    offset by the centre, mirroring the forward mapping.
    """

    def _map(self, points: NDArray[np.floating], config: PolarConfig) -> NDArray[np.floating]:
        alpha = points[:, 0]
        radius = points[:, 1]
        undefined = np.zeros(points.shape[0], dtype=bool)

        if config.constant_arc_increment:
            zero_radius = radius == 0
            if np.any(zero_radius) and not config.return_nan:
                raise DomainError(
                    f"arc length does not determine an angle at zero radius "
                    f"({int(np.count_nonzero(zero_radius))} point(s))"
                )
            with np.errstate(invalid="ignore", divide="ignore"):
                alpha = alpha / radius
            undefined |= zero_radius

        if config.return_nan:
            undefined |= ~in_angle_domain(alpha)

        theta = alpha - config.angle_offset
        result = points.copy()
        result[:, 0] = config.center[0] + radius * np.cos(theta)
        result[:, 1] = config.center[1] + radius * np.sin(theta)

        if np.any(undefined):
            result[undefined] = np.nan
            logger.debug(
                "%d point(s) outside the angle domain mapped to NaN",
                int(np.count_nonzero(undefined)),
            )
        return result

    def inverse(self) -> CartesianToPolarTransform:
        """Return the Cartesian-to-polar transform with the same configuration."""
        return CartesianToPolarTransform(self._dimension, self._dtype, config=self._config)
