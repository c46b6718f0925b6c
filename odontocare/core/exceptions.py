from typing import Optional


class OdontoCareError(Exception):
    """Base class for every error raised by the client."""


class ApiError(OdontoCareError):
    """A remote call failed, either at the transport level or with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class PatientProfileNotFound(ApiError):
    """A user with the patient role has no patient profile on the server."""


class FormValidationError(OdontoCareError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ViewCancelled(OdontoCareError):
    """The screen that started a load is no longer active."""


class SessionStorageError(OdontoCareError):
    """Persisted session storage could not be read or written."""
