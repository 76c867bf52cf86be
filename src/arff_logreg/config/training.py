"""Config models and loaders for training runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

WEIGHT_INIT_SCHEMES = ('zeros', 'ones', 'constant')


@dataclass(frozen=True)
class DataConfig:
    path: Path | None = None


@dataclass(frozen=True)
class TrainingConfig:
    """Gradient-descent hyperparameters."""

    learning_rate: float = 50.0
    convergence_threshold: float = 1.0
    max_iterations: int = 200
    weight_init: str = 'zeros'
    init_value: float = 0.0
    update_bias: bool = False
    decision_threshold: float = 0.5

    def __post_init__(self) -> None:
        validate_training_config(self)


@dataclass(frozen=True)
class AppConfig:
    data: DataConfig = field(default_factory=DataConfig)
    training: TrainingConfig = field(default_factory=TrainingConfig)


def validate_training_config(config: TrainingConfig) -> None:
    """Raise ValueError when a hyperparameter is out of range."""
    if not config.learning_rate > 0:
        raise ValueError(f'learning_rate must be positive, got {config.learning_rate}')
    if config.max_iterations < 1:
        raise ValueError(f'max_iterations must be >= 1, got {config.max_iterations}')
    if config.weight_init not in WEIGHT_INIT_SCHEMES:
        raise ValueError(
            f"weight_init must be one of {', '.join(WEIGHT_INIT_SCHEMES)}, "
            f"got '{config.weight_init}'"
        )
    if not 0.0 < config.decision_threshold < 1.0:
        raise ValueError(
            f'decision_threshold must lie in (0, 1), got {config.decision_threshold}'
        )


def load_training_config(config_path: str | Path) -> AppConfig:
    """Load a training config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f'Config file not found: {cfg_path}')

    with cfg_path.open('r', encoding='utf-8') as fh:
        data = yaml.safe_load(fh) or {}

    base_dir = cfg_path.parent

    data_section = data.get('data') or {}
    training_section = data.get('training') or {}

    data_path = data_section.get('path')
    data_cfg = DataConfig(
        path=_resolve_path(base_dir, data_path) if data_path else None,
    )

    defaults = TrainingConfig()
    training = TrainingConfig(
        learning_rate=float(training_section.get('learning_rate', defaults.learning_rate)),
        convergence_threshold=float(
            training_section.get('convergence_threshold', defaults.convergence_threshold),
        ),
        max_iterations=int(training_section.get('max_iterations', defaults.max_iterations)),
        weight_init=str(training_section.get('weight_init', defaults.weight_init)),
        init_value=float(training_section.get('init_value', defaults.init_value)),
        update_bias=bool(training_section.get('update_bias', defaults.update_bias)),
        decision_threshold=float(
            training_section.get('decision_threshold', defaults.decision_threshold),
        ),
    )

    return AppConfig(data=data_cfg, training=training)


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (base / path).resolve()
    return path
