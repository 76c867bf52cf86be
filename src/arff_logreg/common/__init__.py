"""Common utilities shared across model implementations."""

from .metrics import TrainingMetrics, compute_training_metrics

__all__ = ['TrainingMetrics', 'compute_training_metrics']
