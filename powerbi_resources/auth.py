"""Service principal authentication and session construction."""

import logging

import requests

from .config import POWERBI_SCOPE, Settings
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def get_access_token(
    session: requests.Session,
    settings: Settings,
    scope: str = POWERBI_SCOPE,
) -> str:
    """Exchange the service principal's credentials for a Power BI bearer token.

    The token request goes through *session* with the configured timeout, so
    it shares connection settings with the API calls that follow.
    """
    resp = session.post(
        settings.auth_url,
        data={
            "grant_type":    "client_credentials",
            "client_id":     settings.client_id,
            "client_secret": settings.client_secret,
            "scope":         scope,
        },
        timeout=settings.timeout,
    )
    resp.raise_for_status()
    token = resp.json().get("access_token")
    if not token:
        raise ConfigurationError(f"token endpoint for tenant {settings.tenant_id!r} returned no access_token")
    logger.debug("Acquired access token for client %s", settings.client_id)
    return token


def build_session(settings: Settings) -> requests.Session:
    """Return a session carrying the bearer header for every request."""
    session = requests.Session()
    # Headers are set after the token call, which posts a form body.
    token = settings.access_token or get_access_token(session, settings)
    session.headers.update({
        "Authorization": f"Bearer {token}",
        "Content-Type":  "application/json",
    })
    return session
