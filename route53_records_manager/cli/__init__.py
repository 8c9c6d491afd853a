"""
Command-line interface components.

This package contains CLI tools and entry points for the Route53 records manager.
"""

from .main import main

__all__ = ["main"]
