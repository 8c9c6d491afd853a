"""
Input parsers.

This package turns record files into RRSet objects.
"""

from .csv import CSVParser

__all__ = ["CSVParser"]
