"""
Shared compute infrastructure for PyMLR.

Submodules:
    timing: Solver stage timing
    tolerances: Rank tolerance and condition threshold defaults
    linalg: Linear algebra kernels (pivoted QR)
"""

from pymlr.core.compute.timing import Timer

__all__ = [
    "Timer",
]
