"""
Linear algebra kernels for PyMLR.

All functions follow these conventions:
    - NumPy/SciPy (LAPACK under the hood)
    - Each operation returns a structured result dataclass
    - Errors are raised immediately with clear messages
"""

from pymlr.core.compute.linalg.qr import (
    QRResult,
    qr_pivoted,
    qr_solve,
    condition_number,
)

__all__ = [
    "QRResult",
    "qr_pivoted",
    "qr_solve",
    "condition_number",
]
