"""Data processing utilities for arff_logreg."""

from .normalize import normalize

__all__ = ['normalize']
