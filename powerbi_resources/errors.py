"""
errors.py  –  Exceptions raised by the resource adapters

Transport failures (connection errors, non-2xx responses) and JSON decode
failures are never wrapped: they surface as the ``requests`` exceptions that
produced them.  The classes below cover the problems the adapters detect
themselves, so callers can tell a configuration problem from a service one.
"""

import requests


class PowerBIResourceError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PowerBIResourceError):
    """Raised when required settings (credentials, base URL) are missing."""


class ValidationError(PowerBIResourceError):
    """Raised when a resource configuration fails schema validation.

    Always raised before any request is sent to the service.
    """

    def __init__(self, attribute: str, message: str):
        super().__init__(f"{attribute}: {message}")
        self.attribute = attribute


class IdentityResolutionError(PowerBIResourceError):
    """Raised when the remote object behind a resource ID cannot be located."""


class IdentifierNotFoundError(IdentityResolutionError):
    def __init__(self, resource_id: str = ""):
        detail = f" (id {resource_id!r})" if resource_id else ""
        super().__init__(f"could not determine identifier{detail}")
        self.resource_id = resource_id


class WorkspaceNotFoundError(IdentityResolutionError):
    def __init__(self, workspace: str):
        super().__init__(f"workspace not found: {workspace!r}")
        self.workspace = workspace


class UnsupportedOperationError(PowerBIResourceError):
    """Raised for lifecycle operations a resource type does not offer."""


def is_not_found(exc: BaseException) -> bool:
    """Return True if *exc* is an HTTP 404 raised by ``raise_for_status``."""
    if not isinstance(exc, requests.HTTPError):
        return False
    response = exc.response
    return response is not None and response.status_code == 404
