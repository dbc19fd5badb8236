"""
config.py  –  Settings read from the environment

Expected environment variables
-------------------------------
TENANT_ID             – Azure AD tenant ID
CLIENT_ID             – Service Principal application (client) ID
CLIENT_SECRET         – Service Principal client secret
POWERBI_ACCESS_TOKEN  – (optional) pre-acquired bearer token; when set the
                        three credentials above are not needed
POWERBI_BASE_URL      – (optional) REST root, defaults to the public cloud
POWERBI_TIMEOUT       – (optional) per-request timeout in seconds
"""

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigurationError

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
POWERBI_BASE    = "https://api.powerbi.com/v1.0/myorg"
POWERBI_SCOPE   = "https://analysis.windows.net/powerbi/api/.default"
AUTH_URL_FORMAT = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"

# Matches the five-minute default operation timeout of the resources.
DEFAULT_TIMEOUT = 300.0


@dataclass(frozen=True)
class Settings:
    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    access_token: str = ""
    base_url: str = POWERBI_BASE
    timeout: float = DEFAULT_TIMEOUT

    @property
    def auth_url(self) -> str:
        return AUTH_URL_FORMAT.format(tenant_id=self.tenant_id)

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.tenant_id and self.client_id and self.client_secret)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (``os.environ`` by default).

    Either ``POWERBI_ACCESS_TOKEN`` or the full set of service principal
    credentials must be present.
    """
    env = os.environ if environ is None else environ

    raw_timeout = env.get("POWERBI_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"POWERBI_TIMEOUT must be a number, got {raw_timeout!r}") from None

    settings = Settings(
        tenant_id     = env.get("TENANT_ID", "").strip(),
        client_id     = env.get("CLIENT_ID", "").strip(),
        client_secret = env.get("CLIENT_SECRET", ""),
        access_token  = env.get("POWERBI_ACCESS_TOKEN", "").strip(),
        base_url      = env.get("POWERBI_BASE_URL", "").strip().rstrip("/") or POWERBI_BASE,
        timeout       = timeout,
    )

    if not settings.access_token and not settings.has_client_credentials:
        missing = [
            name for name, value in (
                ("TENANT_ID",     settings.tenant_id),
                ("CLIENT_ID",     settings.client_id),
                ("CLIENT_SECRET", settings.client_secret),
            )
            if not value
        ]
        raise ConfigurationError(
            "Missing Power BI credentials: set POWERBI_ACCESS_TOKEN or "
            + ", ".join(missing)
        )
    return settings
