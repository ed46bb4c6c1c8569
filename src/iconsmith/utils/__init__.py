"""Utility functions for iconsmith.

This module provides utility functions including:

- Logging setup and configuration
- Build statistics tracking
- Number formatting for path data
"""

from iconsmith.utils.logging import (
    BuildLogger,
    BuildStats,
    configure_logging,
)
from iconsmith.utils.numbers import number_formatter, round_half_up

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
    "number_formatter",
    "round_half_up",
]
