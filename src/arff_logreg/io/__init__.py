"""Input/output helpers."""

from .arff import (
    READ_LINE_MAX,
    TOKEN_LENGTH_MAX,
    ArffImporter,
    FeatureDescriptor,
    read_arff,
)

__all__ = [
    'READ_LINE_MAX',
    'TOKEN_LENGTH_MAX',
    'ArffImporter',
    'FeatureDescriptor',
    'read_arff',
]
