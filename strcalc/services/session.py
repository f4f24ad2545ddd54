"""
Calculator session.

Holds the current input set, applies edits field by field, and remembers
the last computed result so unchanged inputs are not recomputed.
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from strcalc.calculations.metrics import (
    INPUT_FIELDS,
    MetricsResult,
    coerce_inputs,
    compute_metrics,
    default_inputs,
)


class CalculatorSession:
    """Mutable input set with a one-entry result cache."""

    def __init__(self, inputs: Optional[Mapping[str, Any]] = None) -> None:
        self._inputs = coerce_inputs(inputs or {}, base=default_inputs())
        self._cached: Optional[Tuple[Tuple[float, ...], MetricsResult]] = None
        self.computations = 0

    @property
    def inputs(self) -> Dict[str, float]:
        return dict(self._inputs)

    def update(self, changes: Mapping[str, Any]) -> Dict[str, float]:
        """Merge edited fields into the current inputs; unknown keys are ignored."""
        self._inputs = coerce_inputs(changes, base=self._inputs)
        return self.inputs

    def replace(self, inputs: Mapping[str, Any]) -> Dict[str, float]:
        """Replace every field; fields not given take their defaults."""
        self._inputs = coerce_inputs(inputs, base=default_inputs())
        return self.inputs

    def reset(self) -> Dict[str, float]:
        self._inputs = default_inputs()
        return self.inputs

    def metrics(self) -> MetricsResult:
        """Return metrics for the current inputs, reusing the last result if unchanged."""
        key = tuple(self._inputs[name] for name in INPUT_FIELDS)
        if self._cached is not None and self._cached[0] == key:
            return self._cached[1]

        result = compute_metrics(self._inputs)
        self.computations += 1
        self._cached = (key, result)
        return result
