"""
Error taxonomy shared by every handler.

Handlers raise these; the gateway turns them into `{"error": message}`
responses with the matching status code. Anything else that escapes a
handler is logged and answered with a generic 500.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Missing or malformed input."""
    status_code = 400


class ConflictError(ServiceError):
    """Duplicate registration. Reported as a plain 400 to the client."""
    status_code = 400


class AuthError(ServiceError):
    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404
