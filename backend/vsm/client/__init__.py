from .errors import (
    AuthorizationError,
    ConflictError,
    NetworkError,
    NotFoundError,
    ServerError,
    StoreError,
    ValidationFailure,
)
from .store import SectionStore
from .token_store import StaticTokenStore, TokenStore

__all__ = [
    "AuthorizationError",
    "ConflictError",
    "NetworkError",
    "NotFoundError",
    "SectionStore",
    "ServerError",
    "StaticTokenStore",
    "StoreError",
    "TokenStore",
    "ValidationFailure",
]
