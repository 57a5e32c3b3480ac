"""Utility modules for logging and exceptions."""

from .logger import setup_logging, get_logger
from .exceptions import (
    InspectionError,
    InvalidInputError,
    FormValidationError,
    AuthError,
    PersistenceError,
    StorageError,
    StorageUploadError,
    StorageDownloadError,
    StorageDeleteError,
    ReportGenerationError,
    ImageProcessingError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "InspectionError",
    "InvalidInputError",
    "FormValidationError",
    "AuthError",
    "PersistenceError",
    "StorageError",
    "StorageUploadError",
    "StorageDownloadError",
    "StorageDeleteError",
    "ReportGenerationError",
    "ImageProcessingError",
]
