"""
Polar Transforms
================

Public API for reversible Cartesian <-> polar (cylindrical) mappings of
N-dimensional points, plus image resampling built on them.
"""

from polar_transform.config import (
    PolarConfig,
    PolarTransformError,
    ValidationError,
    InvalidDimensionError,
    DomainError,
    UnsupportedOperationError,
)
from polar_transform.transforms import (
    PointTransform,
    CartesianToPolarTransform,
    PolarToCartesianTransform,
)
from polar_transform.resample import (
    polar_sampling_grid,
    warp_to_polar,
    warp_to_cartesian,
)
from polar_transform.debug import (
    format_angle,
    format_point,
    format_config,
    setup_debug_logging,
    disable_debug_logging,
)

__all__ = [
    # Transforms
    'PointTransform',
    'CartesianToPolarTransform',
    'PolarToCartesianTransform',
    'PolarConfig',
    # Errors
    'PolarTransformError',
    'ValidationError',
    'InvalidDimensionError',
    'DomainError',
    'UnsupportedOperationError',
    # Resampling
    'polar_sampling_grid',
    'warp_to_polar',
    'warp_to_cartesian',
    # Debug utilities
    'format_angle',
    'format_point',
    'format_config',
    'setup_debug_logging',
    'disable_debug_logging',
]
__version__ = '0.1.0'
