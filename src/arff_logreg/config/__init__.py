"""Configuration utilities for arff_logreg."""

from .training import (
    WEIGHT_INIT_SCHEMES,
    AppConfig,
    DataConfig,
    TrainingConfig,
    load_training_config,
    validate_training_config,
)

__all__ = [
    'WEIGHT_INIT_SCHEMES',
    'AppConfig',
    'DataConfig',
    'TrainingConfig',
    'load_training_config',
    'validate_training_config',
]
