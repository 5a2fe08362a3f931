"""Durable storage: the source registry document and the report vault."""

from newsbrief.storage.registry import SourceRegistry
from newsbrief.storage.vault import (
    REPORT_EXTENSION,
    ReportWriter,
    normalize_filename,
    report_filename,
)

__all__ = [
    "SourceRegistry",
    "ReportWriter",
    "REPORT_EXTENSION",
    "normalize_filename",
    "report_filename",
]
