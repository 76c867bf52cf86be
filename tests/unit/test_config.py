from __future__ import annotations

from pathlib import Path

import pytest

from arff_logreg.config import AppConfig, TrainingConfig, load_training_config


def test_load_training_config_resolves_relative_data_path(tmp_path: Path) -> None:
    cfg_dir = tmp_path / 'configs'
    cfg_dir.mkdir()
    cfg_file = cfg_dir / 'training.yaml'
    cfg_file.write_text(
        'data:\n'
        '  path: ../data/train.arff\n'
        'training:\n'
        '  learning_rate: 0.5\n'
        '  convergence_threshold: 0.01\n'
        '  max_iterations: 50\n'
        '  weight_init: ones\n'
        '  update_bias: true\n',
        encoding='utf-8',
    )

    cfg = load_training_config(cfg_file)

    assert cfg.data.path == (tmp_path / 'data' / 'train.arff').resolve()
    assert cfg.training == TrainingConfig(
        learning_rate=0.5,
        convergence_threshold=0.01,
        max_iterations=50,
        weight_init='ones',
        update_bias=True,
    )


def test_empty_config_uses_defaults(tmp_path: Path) -> None:
    cfg_file = tmp_path / 'empty.yaml'
    cfg_file.write_text('', encoding='utf-8')

    cfg = load_training_config(cfg_file)

    assert cfg == AppConfig()
    assert cfg.training.learning_rate == 50.0
    assert cfg.training.convergence_threshold == 1.0
    assert cfg.training.max_iterations == 200
    assert cfg.training.weight_init == 'zeros'
    assert cfg.training.update_bias is False


def test_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_training_config(tmp_path / 'missing.yaml')


@pytest.mark.parametrize(
    'overrides',
    [
        {'learning_rate': 0.0},
        {'max_iterations': 0},
        {'weight_init': 'random'},
        {'decision_threshold': 1.0},
    ],
)
def test_invalid_values_raise(overrides: dict) -> None:
    with pytest.raises(ValueError):
        TrainingConfig(**overrides)
