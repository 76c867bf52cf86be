"""Feature scaling."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..io.arff import FeatureDescriptor


def normalize(
    feature_buff: np.ndarray,
    features: Sequence[FeatureDescriptor],
    num_instances: int | None = None,
) -> None:
    """Mean/range-normalize ``feature_buff`` in place.

    Each column becomes ``(v - mean) / (max - min)``. Columns whose range
    is zero are left untouched.
    """
    if feature_buff.ndim != 2:
        raise ValueError('feature_buff must be a 2-D (instances, features) array')
    if num_instances is None:
        num_instances = feature_buff.shape[0]
    if feature_buff.shape != (num_instances, len(features)):
        raise ValueError(
            f'feature_buff shape {feature_buff.shape} does not match '
            f'({num_instances}, {len(features)})'
        )

    for i, feature in enumerate(features):
        value_range = feature.max - feature.min
        if value_range == 0.0:
            continue
        column = feature_buff[:, i]
        column -= feature.mean
        column /= value_range
