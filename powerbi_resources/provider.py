"""Registry of resource adapters sharing one API client."""

from typing import Mapping

from .api import PowerBIClient
from .config import Settings, load_settings
from .resources import RESOURCE_TYPES, Resource


class Provider:
    def __init__(self, client: PowerBIClient):
        self.client = client
        self.resources: dict[str, Resource] = {
            resource_type.type_name: resource_type(client) for resource_type in RESOURCE_TYPES
        }

    @classmethod
    def from_settings(cls, settings: Settings | None = None, environ: Mapping[str, str] | None = None) -> "Provider":
        """Build a provider with an authenticated client.

        *settings* defaults to :func:`load_settings` over *environ*.
        """
        if settings is None:
            settings = load_settings(environ)
        return cls(PowerBIClient.from_settings(settings))

    @property
    def type_names(self) -> list[str]:
        return sorted(self.resources)

    def resource(self, type_name: str) -> Resource:
        try:
            return self.resources[type_name]
        except KeyError:
            raise KeyError(
                f"Unknown resource type {type_name!r}; expected one of {', '.join(self.type_names)}"
            ) from None
