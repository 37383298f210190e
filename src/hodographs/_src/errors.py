"""Exceptions raised while building or sampling curves."""

__all__ = [
    "DegenerateBoundaryError",
    "HodographError",
    "NoValidCurveError",
    "NonPositiveSpeedError",
]


class HodographError(ValueError):
    """Base class for the errors of this package."""


class DegenerateBoundaryError(HodographError):
    """A boundary tangent has zero (or non-finite) length.

    A Hermite segment needs a direction at both ends; the quaternion square
    root of a zero vector is undefined.
    """


class NoValidCurveError(HodographError):
    """No root of the helical quartic gives positive ``k0**2`` and ``k2**2``.

    There is no helical PH quintic for the given boundary data. This is the
    usual outcome for planar or straight-line data.
    """


class NonPositiveSpeedError(HodographError):
    """The parametric speed is not positive where it needs to be."""
