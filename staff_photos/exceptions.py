"""Exceptions raised by the scanner and preview renderer."""

from typing import Optional


class StaffPhotosError(Exception):
    """
    Base class for staff photo errors.

    Attributes:
        message: Error description
        path: Filesystem path the error refers to, if any
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{message}: {path}" if path else message)


class NotFound(StaffPhotosError, FileNotFoundError):
    """Raised when a directory or image file does not exist at call time."""


class PermissionRegistrationFailed(StaffPhotosError):
    """Raised when the access scope refuses a directory or file grant."""


class DecodeError(StaffPhotosError):
    """Raised when image bytes are not a supported or valid format."""


class EncodeError(StaffPhotosError):
    """Raised when the preview cannot be re-encoded as JPEG."""
