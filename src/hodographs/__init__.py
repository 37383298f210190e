"""Pythagorean-hodograph curves with rotation-minimizing frames in JAX."""

__all__ = [  # noqa: RUF022
    "__version__",
    # Curves
    "HelicalPHQuinticSplineSegment",
    "HermiteQuintic",
    "EulerRodriguesFrame",
    "CatmullRom3",
    "PHSpline",
    "ControlPoint",
    "helical_candidates",
    # Frames
    "Curve",
    "FramedCurve",
    "Frame",
    "frenet_frame",
    # Resampling and meshes
    "Resampler",
    "resample",
    "RibbonMesh",
    "ribbon",
    # Interop and plotting
    "interpax_PPoly_from_CatmullRom3",
    "plot_curve",
    "plot_frames",
    # Errors
    "HodographError",
    "DegenerateBoundaryError",
    "NoValidCurveError",
    "NonPositiveSpeedError",
]

__version__ = "0.1.0"

from ._src.catmull_rom import CatmullRom3
from ._src.compat import interpax_PPoly_from_CatmullRom3
from ._src.curve import Curve, Frame, FramedCurve, Resampler, frenet_frame, resample
from ._src.errors import (
    DegenerateBoundaryError,
    HodographError,
    NonPositiveSpeedError,
    NoValidCurveError,
)
from ._src.frame import EulerRodriguesFrame
from ._src.hermite import HermiteQuintic
from ._src.plot import plot_curve, plot_frames
from ._src.ribbon import RibbonMesh, ribbon
from ._src.segment import HelicalPHQuinticSplineSegment, helical_candidates
from ._src.spline import ControlPoint, PHSpline
