"""
Module containing the schema definitions for the climate report.
"""

from .observation import Observation
from .state_stats import StateStats
from .file_summary import FileSummary

__all__ = [
    "Observation",
    "StateStats",
    "FileSummary",
]
