"""Batch gradient-descent logistic regression over ARFF datasets."""

__version__ = '0.1.0'
