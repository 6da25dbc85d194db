"""Exceptions raised by the file storage pipeline.

The router maps each of these onto an HTTP status; nothing here is retried.
"""


class FileStorageError(Exception):
    """Base class for file storage failures."""


class UnsupportedFileTypeError(FileStorageError):
    """Upload rejected by the classifier (content type or extension)."""


class InvalidFileNameError(FileStorageError):
    """Filename would address something other than a file in the upload root."""


class FileTooLargeError(FileStorageError):
    """Upload body exceeds the configured size limit."""


class MissingOriginalError(FileStorageError):
    """The original vanished between persisting it and thumbnailing it."""


class StoredFileNotFoundError(FileStorageError):
    """Requested file does not exist in the upload root."""
