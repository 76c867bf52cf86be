"""End-to-end training: import, normalize, fit, evaluate."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path

from ..common.metrics import TrainingMetrics, compute_training_metrics
from ..config.training import TrainingConfig, load_training_config
from ..data.normalize import normalize
from ..errors import MalformedInputError
from ..io.arff import ArffImporter, FeatureDescriptor
from ..models.logreg import GradientDescentTrainer, IterationCallback, TrainResult
from ..utils.logging import get_logger, json_log

log = get_logger(__name__)


@dataclass
class TrainingReport:
    data_path: Path
    class_attr: list[str]
    features: list[FeatureDescriptor]
    result: TrainResult
    metrics: TrainingMetrics
    duration_seconds: float


def run_training(
    data_path: str | Path,
    config: TrainingConfig | None = None,
    callback: IterationCallback | None = None,
) -> TrainingReport:
    """Train a binary classifier on the ARFF file at ``data_path``."""
    config = config or TrainingConfig()
    path = Path(data_path)

    importer = ArffImporter()
    importer.read(path)
    class_attr = importer.class_attr
    if len(class_attr) != 2:
        raise MalformedInputError(
            f'expected exactly 2 class labels, found {len(class_attr)}',
            path,
        )

    features = importer.features
    feature_buff = importer.feature_buff
    labels = importer.class_index
    normalize(feature_buff, features, importer.num_instances)

    trainer = GradientDescentTrainer(config, callback=callback)
    start = time.perf_counter()
    result = trainer.run(feature_buff, labels)
    duration = time.perf_counter() - start

    probabilities = trainer.node.predict_proba(feature_buff)
    metrics = compute_training_metrics(
        labels,
        probabilities,
        threshold=config.decision_threshold,
    )

    log.info(
        json_log(
            'pipeline.train.completed',
            component='pipeline',
            data=str(path),
            iterations=result.iterations,
            stop_reason=result.stop_reason,
            accuracy=metrics.accuracy,
            duration_seconds=round(duration, 4),
        )
    )
    return TrainingReport(
        data_path=path,
        class_attr=class_attr,
        features=features,
        result=result,
        metrics=metrics,
        duration_seconds=duration,
    )


def train_from_config(
    config_path: str | Path,
    data_path: str | Path | None = None,
    callback: IterationCallback | None = None,
) -> TrainingReport:
    """Train using a YAML config; ``data_path`` overrides ``data.path``."""
    app_config = load_training_config(config_path)
    target = data_path if data_path is not None else app_config.data.path
    if target is None:
        raise ValueError('data.path must be set in config or passed explicitly')
    return run_training(target, app_config.training, callback=callback)
