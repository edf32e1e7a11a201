"""
Domain layer - entities and value objects shared by extractors and services.
"""
from .entities import DownloadedFile, DriveFile, DriveItem, FileExtractionFailure, ItemPage
from .value_objects import (
    AttemptState,
    DetectedFormat,
    ExtractionResult,
    FormatCategory,
    FormatSignals,
    MethodAttempt,
)

__all__ = [
    "AttemptState",
    "DetectedFormat",
    "DownloadedFile",
    "DriveFile",
    "DriveItem",
    "ExtractionResult",
    "FileExtractionFailure",
    "FormatCategory",
    "FormatSignals",
    "ItemPage",
    "MethodAttempt",
]
