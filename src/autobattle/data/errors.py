"""Custom exceptions for definition loading and validation."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when definition files are missing or are not valid JSON."""


class DataValidationError(DataError):
    """Raised when definition content fails structural validation."""


class DataReferenceError(DataError):
    """Raised when definitions reference missing classes or categories."""
