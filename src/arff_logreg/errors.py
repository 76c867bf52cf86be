"""Error taxonomy for import and training failures."""

from __future__ import annotations

from pathlib import Path

import numpy as np


class ArffLogRegError(Exception):
    """Base class for every fatal condition raised by the library."""


class MalformedInputError(ArffLogRegError):
    """Raised when an ARFF file cannot be parsed.

    Carries the offending file and 1-based line number when known so the
    caller can point the user at the exact location.
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        line_number: int | None = None,
    ) -> None:
        self.reason = message
        self.path = Path(path) if path is not None else None
        self.line_number = line_number
        super().__init__(self._format())

    def _format(self) -> str:
        if self.path is None:
            return self.reason
        if self.line_number is None:
            return f'{self.path}: {self.reason}'
        return f'{self.path}:{self.line_number}: {self.reason}'


class NumericDivergenceError(ArffLogRegError):
    """Raised when training produces a non-finite cost or weight."""

    def __init__(self, message: str, iteration: int, weights: np.ndarray) -> None:
        self.iteration = iteration
        # last finite weight vector, before the failing update
        self.weights = np.array(weights, dtype=np.float64, copy=True)
        super().__init__(f'{message} (iteration {iteration})')
