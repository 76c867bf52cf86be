"""Unit tests for the batch gradient-descent trainer."""

from __future__ import annotations

import numpy as np
import pytest

from arff_logreg.config import TrainingConfig
from arff_logreg.errors import NumericDivergenceError
from arff_logreg.models.logreg import (
    GradientDescentTrainer,
    IterationStats,
    Node,
    TrainerState,
)

# 4 points, 1 feature {0,0,1,1} after mean/range normalization
SEPARABLE_X = np.array([[-0.5], [-0.5], [0.5], [0.5]])
SEPARABLE_Y = np.array([0, 0, 1, 1])


class TestConvergence:
    def test_separable_data_fits_perfectly_with_defaults(self) -> None:
        trainer = GradientDescentTrainer()

        result = trainer.run(SEPARABLE_X, SEPARABLE_Y)

        assert result.iterations <= TrainingConfig().max_iterations
        assert trainer.state is TrainerState.CONVERGED
        predictions = trainer.node.predict(SEPARABLE_X)
        np.testing.assert_array_equal(predictions, SEPARABLE_Y)

    def test_first_update_matches_hand_computation(self) -> None:
        seen: list[IterationStats] = []
        trainer = GradientDescentTrainer(callback=seen.append)

        trainer.run(SEPARABLE_X, SEPARABLE_Y)

        first = seen[0]
        assert first.cost == pytest.approx(4 * np.log(2.0))
        assert first.delta_cost == pytest.approx(-4 * np.log(2.0))
        assert first.weight_sample == 0.0
        # gradient is -1, step is 50 / 4
        assert seen[1].weight_sample == pytest.approx(12.5)

    def test_halts_on_iteration_where_delta_drops_below_threshold(self) -> None:
        result = GradientDescentTrainer().run(SEPARABLE_X, SEPARABLE_Y)

        assert result.iterations == 3
        assert result.stop_reason == 'converged'
        assert result.delta_cost <= 1.0
        assert len(result.cost_history) == 3
        assert result.cost == result.cost_history[-1]


class TestStoppingRule:
    def test_first_iteration_always_followed_by_another(self) -> None:
        config = TrainingConfig(convergence_threshold=1e9)

        result = GradientDescentTrainer(config).run(SEPARABLE_X, SEPARABLE_Y)

        assert result.iterations == 2
        assert result.stop_reason == 'converged'

    def test_iteration_one_continues_even_when_max_iterations_is_one(self) -> None:
        config = TrainingConfig(max_iterations=1)

        result = GradientDescentTrainer(config).run(SEPARABLE_X, SEPARABLE_Y)

        assert result.iterations == 2

    def test_max_iterations_caps_training(self) -> None:
        config = TrainingConfig(convergence_threshold=-1e9, max_iterations=5)

        result = GradientDescentTrainer(config).run(SEPARABLE_X, SEPARABLE_Y)

        assert result.iterations == 5
        assert result.stop_reason == 'max_iterations'

    def test_trainer_cannot_be_rerun_after_converging(self) -> None:
        trainer = GradientDescentTrainer()
        trainer.run(SEPARABLE_X, SEPARABLE_Y)

        with pytest.raises(RuntimeError, match='already converged'):
            trainer.run(SEPARABLE_X, SEPARABLE_Y)


class TestBiasUpdate:
    x = np.array([[-0.5], [-1 / 6], [1 / 6], [0.5]])
    y = np.array([0, 1, 1, 1])

    def test_bias_frozen_by_default(self) -> None:
        result = GradientDescentTrainer().run(self.x, self.y)

        assert result.bias == 0.0

    def test_bias_updated_when_enabled(self) -> None:
        seen: list[IterationStats] = []
        config = TrainingConfig(update_bias=True)

        GradientDescentTrainer(config, callback=seen.append).run(self.x, self.y)

        assert seen[0].bias == 0.0
        # first-pass residuals sum to -1, step is 50 / 4
        assert seen[1].bias == pytest.approx(12.5)

    def test_initial_weights_follow_config(self) -> None:
        seen: list[IterationStats] = []
        config = TrainingConfig(weight_init='constant', init_value=0.75)

        GradientDescentTrainer(config, callback=seen.append).run(self.x, self.y)

        assert seen[0].bias == 0.75


def test_callback_receives_every_iteration() -> None:
    seen: list[IterationStats] = []

    result = GradientDescentTrainer(callback=seen.append).run(SEPARABLE_X, SEPARABLE_Y)

    assert [s.iteration for s in seen] == list(range(1, result.iterations + 1))
    assert seen[-1].cost == result.cost


def test_progress_reports_weights_before_each_update() -> None:
    seen: list[IterationStats] = []

    result = GradientDescentTrainer(callback=seen.append).run(SEPARABLE_X, SEPARABLE_Y)

    assert seen[0].weight_sample == 0.0
    assert seen[-1].weight_sample != pytest.approx(result.weights[0])
    for before, after in zip(seen, seen[1:]):
        assert after.weight_sample > before.weight_sample


def test_non_finite_cost_raises_divergence_with_last_weights() -> None:
    features = np.array([[1.0], [-1.0]])
    labels = np.array([1, 0])
    node = Node(1, np.array([-1000.0, 0.0]))
    trainer = GradientDescentTrainer()

    with pytest.raises(NumericDivergenceError) as excinfo:
        trainer.run(features, labels, node=node)

    assert excinfo.value.iteration == 1
    np.testing.assert_array_equal(excinfo.value.weights, [-1000.0, 0.0])
    assert trainer.state is TrainerState.ITERATING


@pytest.mark.parametrize(
    ('features', 'labels', 'message'),
    [
        (np.zeros(4), np.zeros(4), '2-D'),
        (np.zeros((0, 1)), np.zeros(0), 'empty'),
        (np.zeros((3, 1)), np.zeros(2), 'labels must have shape'),
        (np.zeros((2, 1)), np.array([0, 2]), 'binary'),
    ],
)
def test_invalid_inputs_raise(features, labels, message) -> None:
    with pytest.raises(ValueError, match=message):
        GradientDescentTrainer().run(features, labels)


def test_node_feature_count_must_match() -> None:
    with pytest.raises(ValueError, match='node expects'):
        GradientDescentTrainer().run(SEPARABLE_X, SEPARABLE_Y, node=Node(2))
