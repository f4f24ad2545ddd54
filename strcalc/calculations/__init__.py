"""
Calculation Engine

Pure functions deriving short-term rental investment metrics from a flat
input set. Nothing here performs I/O or holds state.
"""

from strcalc.calculations import amortization, display, metrics, tax
from strcalc.calculations.metrics import (
    MetricsResult,
    coerce_inputs,
    compute_metrics,
    default_inputs,
)

__all__ = [
    "amortization",
    "display",
    "metrics",
    "tax",
    "MetricsResult",
    "coerce_inputs",
    "compute_metrics",
    "default_inputs",
]
