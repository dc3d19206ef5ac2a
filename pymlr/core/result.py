"""
Result envelope returned by regression solvers.

A solver hands back its parameter payload together with what a caller
needs to judge it: the factorization metadata, stage timings and any
non-fatal notes about the fit. RegressionModel keeps the envelope
inside its LinearSolution.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable output of one solve.

    Attributes:
        params: Solver-specific parameters (LinearParams for OLS)
        info: Factorization metadata (method, rank, pivot, R, tol)
        timing: Seconds per solver stage, or None if not measured
        backend_name: Identifier of the solver that produced this result
        warnings: Non-fatal notes, e.g. zero residual degrees of freedom;
            printed by LinearSolution.summary()
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
