"""Basketball program statistics archive.

A Python package and CLI that loads a program's static JSON data files,
aggregates per-game box scores into season and career totals, computes
derived shooting and rate metrics, and builds record leaderboards.

Example:
    >>> from hoops_archive.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.program_dir)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Hoops Archive Team"

# Public API exports
from hoops_archive.config import Settings, get_settings

__all__ = [
    "Settings",
    "__author__",
    "__version__",
    "get_settings",
]
