"""Error taxonomy shared by the catalog client, caches and routes."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base exception for storefront failures."""


class ConfigurationError(StorefrontError):
    """A required setting is absent. Never retried."""


class RemoteError(StorefrontError):
    """The remote catalog answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, endpoint: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.endpoint = endpoint
        super().__init__(f"WooCommerce API error: {status_code} {reason}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class AuthorizationError(StorefrontError):
    """The revalidation caller did not present the shared secret."""

    def __init__(self, message: str = "Unauthorized") -> None:
        self.message = message
        super().__init__(message)
