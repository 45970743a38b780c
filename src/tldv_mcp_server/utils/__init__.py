"""Utility functions for parsing and formatting.

This package includes helpers for ISO 8601 date-time parsing used to
validate meeting timestamps and list filters.
"""

from .date_parser import is_iso8601_datetime, parse_iso8601

__all__ = [
    "is_iso8601_datetime",
    "parse_iso8601",
]
