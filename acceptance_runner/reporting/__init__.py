"""Reporting module - result persistence."""

from .base import ResultSink
from .file_utils import flat_name, write_atomic
from .folder_repository import FolderResultRepository
from .json_reporter import JsonReporter

__all__ = [
    "FolderResultRepository",
    "JsonReporter",
    "ResultSink",
    "flat_name",
    "write_atomic",
]
