class ServiceError(Exception):
    """Business-rule failure that should reach the user as an error response."""
    status_code = 400

    def __init__(self, message, status_code=None, errors=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors or []


class PermissionDenied(ServiceError):
    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    status_code = 409


class SamplingError(ServiceError, ValueError):
    """Raised when a QC code range cannot be turned into samples."""
