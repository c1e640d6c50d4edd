from typing import Optional


class AppError(Exception):
    """Base error carrying the message and status code returned to the caller."""

    code = 500

    def __init__(self, message: str, code: Optional[int] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class DecodeError(AppError):
    code = 400


class NotFoundError(AppError):
    code = 404


class TransportReadError(AppError):
    code = 500


class MethodNotSupported(AppError):
    code = 405

    def __init__(self, message: str = "Only GET and POST are supported"):
        super().__init__(message)
