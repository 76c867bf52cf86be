"""CLI package for arff_logreg."""

from .main import app

__all__ = ['app']
