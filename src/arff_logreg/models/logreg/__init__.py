"""Logistic Regression model implementation.

This package contains:
- node.py: Weight vector and sigmoid activation
- training.py: Batch gradient-descent trainer
"""

from .node import Node, init_weights, sigmoid
from .training import (
    GradientDescentTrainer,
    IterationCallback,
    IterationStats,
    TrainerState,
    TrainResult,
)

__all__ = [
    'GradientDescentTrainer',
    'IterationCallback',
    'IterationStats',
    'Node',
    'TrainResult',
    'TrainerState',
    'init_weights',
    'sigmoid',
]
