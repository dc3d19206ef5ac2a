"""
Numerical defaults for the least-squares solver.

Both checks run on the column-equilibrated design matrix (every column
scaled to unit 2-norm), so neither depends on the units features are
measured in.
"""

import numpy as np


# Condition number of the equilibrated design above which coefficients
# lose more than ~12 significant digits and the fit is rejected.
CONDITION_THRESHOLD = 1e12


def rank_tolerance(n_rows: int, n_cols: int) -> float:
    """
    Default relative rank cutoff for an n_rows x n_cols matrix.

    max(n_rows, n_cols) * eps, the numpy.linalg.matrix_rank convention:
    a diagonal entry of R below this fraction of |R_00| is rounding noise.
    """
    return max(n_rows, n_cols) * float(np.finfo(np.float64).eps)
