# vsm/client/errors.py
from typing import Any, Dict, Optional


class StoreError(Exception):
    """
    A Section Store call failed.

    `message` is meant for humans (toasts, CLI output). `status_code` is
    None when the request never got a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class NetworkError(StoreError):
    """Transport failure: timeout, refused connection, DNS..."""


class ServerError(StoreError):
    pass


class NotFoundError(StoreError):
    pass


class ValidationFailure(StoreError):
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None,
                 fields: Optional[Dict[str, str]] = None):
        super().__init__(message, status_code, payload)
        self.fields = dict(fields or {})


class AuthorizationError(StoreError):
    """Missing, expired or insufficient bearer token. The caller should re-authenticate."""


class ConflictError(StoreError):
    """The section changed on the server since it was loaded."""
