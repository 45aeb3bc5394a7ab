"""Streaming per-state aggregation of NOAA climate observation files."""

from .aggregator import StateTable
from .parser import parse_line
from .processor import Processor

__all__ = [
    "aggregator",
    "errors",
    "logger",
    "parser",
    "report",
    "schema",
    "Processor",
    "StateTable",
    "parse_line",
]
