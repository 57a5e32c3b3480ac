"""Custom exception classes for error handling."""


class InspectionError(Exception):
    """Base exception for all inspection application errors."""

    pass


class InvalidInputError(InspectionError):
    """Invalid input data or parameters."""

    pass


class FormValidationError(InspectionError):
    """User input rejected before any external call is made."""

    pass


class AuthError(InspectionError):
    """Error signing in, signing out or acting without a session."""

    pass


class PersistenceError(InspectionError):
    """Error reading or writing database records."""

    pass


class StorageError(InspectionError):
    """Base error for object storage operations."""

    pass


class StorageUploadError(StorageError):
    """Error uploading files to object storage."""

    pass


class StorageDownloadError(StorageError):
    """Error downloading files from object storage."""

    pass


class StorageDeleteError(StorageError):
    """Error deleting files from object storage."""

    pass


class ReportGenerationError(InspectionError):
    """Error during report generation."""

    pass


class ImageProcessingError(InspectionError):
    """Error during image processing operations."""

    pass
