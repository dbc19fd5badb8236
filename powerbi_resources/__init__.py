"""Power BI workspaces, workspace access and gateways as declarative resources."""

from .api import PowerBIClient
from .config import Settings, load_settings
from .identity import MemberId, resolve_principal_key
from .provider import Provider

__version__ = "0.1.0"

__all__ = [
    "MemberId",
    "PowerBIClient",
    "Provider",
    "Settings",
    "load_settings",
    "resolve_principal_key",
]
