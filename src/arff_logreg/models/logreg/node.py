"""Single logistic unit: weight vector plus sigmoid activation."""

from __future__ import annotations

import numpy as np

from ...config.training import WEIGHT_INIT_SCHEMES


def init_weights(
    num_features: int,
    scheme: str = 'zeros',
    value: float = 0.0,
) -> np.ndarray:
    """Return a ``num_features + 1`` weight vector; the last slot is the bias."""
    size = num_features + 1
    if scheme == 'zeros':
        return np.zeros(size, dtype=np.float64)
    if scheme == 'ones':
        return np.ones(size, dtype=np.float64)
    if scheme == 'constant':
        return np.full(size, value, dtype=np.float64)
    raise ValueError(
        f"weight_init must be one of {', '.join(WEIGHT_INIT_SCHEMES)}, got '{scheme}'"
    )


def sigmoid(z: np.ndarray | float) -> np.ndarray | float:
    # exp overflow saturates to 0.0, which is the intended limit
    with np.errstate(over='ignore'):
        return 1.0 / (1.0 + np.exp(-z))


class Node:
    """Logistic regression unit.

    ``inputs`` and ``output`` hold the most recent activation only; the
    trainer reads them straight after calling :meth:`activate`.
    """

    def __init__(self, num_features: int, weights: np.ndarray | None = None) -> None:
        if weights is None:
            weights = init_weights(num_features)
        weights = np.asarray(weights, dtype=np.float64)
        if weights.shape != (num_features + 1,):
            raise ValueError(
                f'weights must have shape ({num_features + 1},), got {weights.shape}'
            )
        self.num_features = num_features
        self.weights = weights
        self.inputs: np.ndarray | None = None
        self.output: np.ndarray | float | None = None

    @property
    def bias(self) -> float:
        return float(self.weights[self.num_features])

    def activate(self, inputs: np.ndarray) -> np.ndarray | float:
        """Sigmoid of the weighted sum plus bias.

        ``inputs`` may be one row of shape ``(num_features,)`` (returns a
        float) or a matrix of rows (returns one probability per row).
        """
        inputs = np.asarray(inputs, dtype=np.float64)
        linear = inputs @ self.weights[: self.num_features] + self.weights[self.num_features]
        self.inputs = inputs
        output = sigmoid(linear)
        self.output = float(output) if np.ndim(output) == 0 else output
        return self.output

    def predict_proba(self, features: np.ndarray) -> np.ndarray:
        """Positive-class probability for every row of ``features``."""
        return np.atleast_1d(self.activate(np.atleast_2d(features)))

    def predict(self, features: np.ndarray, threshold: float = 0.5) -> np.ndarray:
        """Class index (0 or 1) for every row of ``features``."""
        return (self.predict_proba(features) >= threshold).astype(np.intp)
