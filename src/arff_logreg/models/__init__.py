"""Model implementations for arff_logreg."""

from . import logreg

__all__ = ['logreg']
