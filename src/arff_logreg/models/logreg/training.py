"""Batch gradient descent for the logistic unit."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ...config.training import TrainingConfig
from ...errors import NumericDivergenceError
from ...utils.logging import get_logger, json_log
from .node import Node, init_weights

log = get_logger(__name__)


class TrainerState(Enum):
    ITERATING = 'iterating'
    CONVERGED = 'converged'


@dataclass(frozen=True)
class IterationStats:
    """Snapshot handed to the progress callback after each iteration.

    ``bias`` and ``weight_sample`` are the weights the iteration's cost was
    evaluated with, i.e. taken before that iteration's update.
    """

    iteration: int
    bias: float
    weight_sample: float
    cost: float
    delta_cost: float


IterationCallback = Callable[[IterationStats], None]


@dataclass
class TrainResult:
    weights: np.ndarray
    iterations: int
    cost: float
    delta_cost: float
    stop_reason: str
    cost_history: list[float] = field(default_factory=list)

    @property
    def bias(self) -> float:
        return float(self.weights[-1])


class GradientDescentTrainer:
    """Fit a :class:`Node` with full-batch gradient descent.

    Each iteration evaluates every row, accumulates the cross-entropy cost
    and the feature gradient, then applies a single weight update. The
    loop always runs the first iteration and keeps going while the cost
    drop exceeds ``convergence_threshold`` and fewer than
    ``max_iterations`` iterations have run.

    The bias is only updated when ``config.update_bias`` is set.
    """

    def __init__(
        self,
        config: TrainingConfig | None = None,
        callback: IterationCallback | None = None,
    ) -> None:
        self.config = config or TrainingConfig()
        self.callback = callback
        self.state = TrainerState.ITERATING
        self.iteration = 0
        self.node: Node | None = None

    def run(
        self,
        features: np.ndarray,
        labels: np.ndarray,
        node: Node | None = None,
    ) -> TrainResult:
        """Train until converged and return the fitted weights."""
        if self.state is TrainerState.CONVERGED:
            raise RuntimeError('trainer has already converged; create a new trainer')

        features = np.asarray(features, dtype=np.float64)
        labels = np.asarray(labels)
        _validate_inputs(features, labels)
        num_instances, num_features = features.shape

        if node is None:
            node = Node(
                num_features,
                init_weights(
                    num_features,
                    scheme=self.config.weight_init,
                    value=self.config.init_value,
                ),
            )
        elif node.num_features != num_features:
            raise ValueError(
                f'node expects {node.num_features} features, data has {num_features}'
            )
        self.node = node

        cfg = self.config
        step = cfg.learning_rate / num_instances
        positive = labels == 1
        cost_pre = 0.0
        delta_cost = 0.0
        history: list[float] = []

        log.info(
            json_log(
                'train.start',
                component='training',
                instances=num_instances,
                features=num_features,
                learning_rate=cfg.learning_rate,
                convergence_threshold=cfg.convergence_threshold,
                max_iterations=cfg.max_iterations,
                update_bias=cfg.update_bias,
            )
        )

        while True:
            h_res = node.activate(features)
            diff = h_res - labels
            with np.errstate(divide='ignore', invalid='ignore'):
                cost_terms = np.where(positive, -np.log(h_res), -np.log(1.0 - h_res))
            cost_new = float(np.sum(cost_terms))
            if not np.isfinite(cost_new):
                self._diverged('non-finite cost', node.weights)
            batch = diff @ node.inputs

            delta_cost = cost_pre - cost_new
            cost_pre = cost_new
            history.append(cost_new)

            previous = node.weights.copy()
            node.weights[:num_features] -= step * batch
            if cfg.update_bias:
                node.weights[num_features] -= step * float(np.sum(diff))
            if not np.all(np.isfinite(node.weights)):
                node.weights[:] = previous
                self._diverged('non-finite weight after update', previous)

            self.iteration += 1
            stats = IterationStats(
                iteration=self.iteration,
                bias=float(previous[num_features]),
                weight_sample=float(previous[0]),
                cost=cost_new,
                delta_cost=delta_cost,
            )
            log.debug(json_log('train.iteration', component='training', **vars(stats)))
            if self.callback is not None:
                self.callback(stats)

            if not (
                self.iteration == 1
                or (
                    delta_cost > cfg.convergence_threshold
                    and self.iteration < cfg.max_iterations
                )
            ):
                break

        self.state = TrainerState.CONVERGED
        stop_reason = (
            'converged' if delta_cost <= cfg.convergence_threshold else 'max_iterations'
        )
        log.info(
            json_log(
                'train.completed',
                component='training',
                iterations=self.iteration,
                cost=cost_pre,
                delta_cost=delta_cost,
                stop_reason=stop_reason,
            )
        )
        return TrainResult(
            weights=node.weights.copy(),
            iterations=self.iteration,
            cost=cost_pre,
            delta_cost=delta_cost,
            stop_reason=stop_reason,
            cost_history=history,
        )

    def _diverged(self, reason: str, weights: np.ndarray) -> None:
        iteration = self.iteration + 1
        log.error(
            json_log(
                'train.diverged',
                component='training',
                reason=reason,
                iteration=iteration,
            )
        )
        raise NumericDivergenceError(reason, iteration=iteration, weights=weights)


def _validate_inputs(features: np.ndarray, labels: np.ndarray) -> None:
    if features.ndim != 2:
        raise ValueError('features must be a 2-D (instances, features) array')
    if features.shape[0] == 0:
        raise ValueError('cannot train on an empty dataset')
    if labels.shape != (features.shape[0],):
        raise ValueError(
            f'labels must have shape ({features.shape[0]},), got {labels.shape}'
        )
    if not np.all((labels == 0) | (labels == 1)):
        raise ValueError('labels must be binary class indices (0 or 1)')
