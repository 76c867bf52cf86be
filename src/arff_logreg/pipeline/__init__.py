"""Pipeline orchestration for arff_logreg."""

from .train import TrainingReport, run_training, train_from_config

__all__ = ['TrainingReport', 'run_training', 'train_from_config']
