"""Training-set metrics for a fitted model."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix, log_loss


@dataclass
class TrainingMetrics:
    accuracy: float
    log_loss: float
    threshold: float
    # rows: true class, columns: predicted class
    confusion_matrix: list[list[int]] = field(default_factory=list)
    support: list[int] = field(default_factory=list)


def compute_training_metrics(
    labels: np.ndarray,
    probabilities: np.ndarray,
    threshold: float = 0.5,
) -> TrainingMetrics:
    """Evaluate positive-class probabilities against binary labels."""
    labels = np.asarray(labels)
    probabilities = np.asarray(probabilities, dtype=np.float64)
    predictions = (probabilities >= threshold).astype(int)

    cm = confusion_matrix(labels, predictions, labels=[0, 1])
    clipped = np.clip(probabilities, 1e-15, 1 - 1e-15)
    return TrainingMetrics(
        accuracy=float(accuracy_score(labels, predictions)),
        log_loss=float(log_loss(labels, clipped, labels=[0, 1])),
        threshold=threshold,
        confusion_matrix=cm.tolist(),
        support=[int(n) for n in cm.sum(axis=1)],
    )
