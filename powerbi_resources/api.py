"""
api.py  –  Power BI REST API client

One method per endpoint.  Path parameters are positional and required; every
path segment is percent-escaped before it is placed in the URL, so names and
identifiers containing ``/``, ``#`` or spaces cannot produce malformed
requests.

The client is a plain request/response wrapper:

  • no retries or backoff – every failure reaches the caller immediately
  • no pagination – the first page returned by the service is used as-is
  • no error classification – non-2xx responses raise ``requests.HTTPError``
    from ``raise_for_status``; undecodable bodies raise ``ValueError``
"""

import logging
from urllib.parse import quote

import requests

from .auth import build_session
from .config import DEFAULT_TIMEOUT, POWERBI_BASE, Settings
from .errors import WorkspaceNotFoundError
from .models import (
    AddDatasourceUserRequest,
    AddGroupUserRequest,
    CreateDatasourceRequest,
    CreateGroupRequest,
    Datasource,
    DatasourceStatus,
    DatasourceUser,
    Gateway,
    Group,
    GroupUser,
    UpdateGroupRequest,
    UpdateGroupUserRequest,
    to_body,
)

logger = logging.getLogger(__name__)


def _odata_literal(value: str) -> str:
    """Quote *value* as an OData string literal (single quotes doubled)."""
    return "'" + value.replace("'", "''") + "'"


class PowerBIClient:
    def __init__(
        self,
        session: requests.Session,
        base_url: str = POWERBI_BASE,
        timeout: float | None = DEFAULT_TIMEOUT,
    ):
        self.session  = session
        self.base_url = base_url.rstrip("/")
        self.timeout  = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "PowerBIClient":
        return cls(build_session(settings), settings.base_url, settings.timeout)

    # -----------------------------------------------------------------------
    # Plumbing
    # -----------------------------------------------------------------------

    def _url(self, *segments: str) -> str:
        return "/".join([self.base_url, *(quote(str(s), safe="") for s in segments)])

    def _request(
        self,
        method: str,
        url: str,
        body: dict | None = None,
        params: dict | None = None,
    ) -> dict | None:
        logger.debug("%s %s", method, url)
        resp = self.session.request(method, url, json=body, params=params, timeout=self.timeout)
        resp.raise_for_status()
        if not resp.content:
            return None
        return resp.json()

    # -----------------------------------------------------------------------
    # Workspaces (groups)
    # -----------------------------------------------------------------------

    def get_groups(self, filter_expr: str = "") -> list[Group]:
        """Return the workspaces visible to the caller (first page only)."""
        params = {"$filter": filter_expr} if filter_expr else None
        body = self._request("GET", self._url("groups"), params=params) or {}
        return [Group.model_validate(item) for item in body.get("value", [])]

    def get_group(self, group_id: str) -> Group:
        body = self._request("GET", self._url("groups", group_id)) or {}
        return Group.model_validate(body)

    def get_group_by_name(self, name: str) -> Group:
        """Look a workspace up by display name.

        Names are not unique on the service: with several matches the first
        one is returned.  Raises :class:`WorkspaceNotFoundError` when nothing
        matches.
        """
        groups = self.get_groups(f"name eq {_odata_literal(name)}")
        if not groups:
            raise WorkspaceNotFoundError(name)
        if len(groups) > 1:
            logger.warning(
                "%d workspaces are named %r; using %s", len(groups), name, groups[0].id
            )
        return groups[0]

    def create_group(self, request: CreateGroupRequest) -> Group:
        body = self._request(
            "POST", self._url("groups"), to_body(request), params={"workspaceV2": "True"}
        ) or {}
        return Group.model_validate(body)

    def update_group(self, group_id: str, request: UpdateGroupRequest) -> None:
        self._request("PATCH", self._url("groups", group_id), to_body(request))

    def delete_group(self, group_id: str) -> None:
        self._request("DELETE", self._url("groups", group_id))

    # -----------------------------------------------------------------------
    # Workspace membership
    # -----------------------------------------------------------------------

    def get_group_users(self, group_id: str) -> list[GroupUser]:
        body = self._request("GET", self._url("groups", group_id, "users")) or {}
        return [GroupUser.model_validate(item) for item in body.get("value", [])]

    def add_group_user(self, group_id: str, request: AddGroupUserRequest) -> None:
        self._request("POST", self._url("groups", group_id, "users"), to_body(request))

    def update_group_user(self, group_id: str, request: UpdateGroupUserRequest) -> None:
        self._request("PUT", self._url("groups", group_id, "users"), to_body(request))

    def delete_user_in_group(self, group_id: str, user: str) -> None:
        """Remove *user* (email address or principal identifier) from a workspace."""
        self._request("DELETE", self._url("groups", group_id, "users", user))

    # -----------------------------------------------------------------------
    # Gateways
    # -----------------------------------------------------------------------

    def get_gateways(self) -> list[Gateway]:
        """Return the gateways for which the caller is an admin."""
        body = self._request("GET", self._url("gateways")) or {}
        return [Gateway.model_validate(item) for item in body.get("value", [])]

    def get_gateway(self, gateway_id: str) -> Gateway | None:
        """Return the gateway, or None when the service answered with no body."""
        body = self._request("GET", self._url("gateways", gateway_id))
        if not body:
            return None
        return Gateway.model_validate(body)

    # -----------------------------------------------------------------------
    # Gateway datasources
    # -----------------------------------------------------------------------

    def get_datasources(self, gateway_id: str) -> list[Datasource]:
        body = self._request("GET", self._url("gateways", gateway_id, "datasources")) or {}
        return [Datasource.model_validate(item) for item in body.get("value", [])]

    def get_datasource(self, gateway_id: str, datasource_id: str) -> Datasource | None:
        body = self._request(
            "GET", self._url("gateways", gateway_id, "datasources", datasource_id)
        )
        if not body:
            return None
        return Datasource.model_validate(body)

    def create_datasource(self, gateway_id: str, request: CreateDatasourceRequest) -> Datasource:
        body = self._request(
            "POST", self._url("gateways", gateway_id, "datasources"), to_body(request)
        ) or {}
        return Datasource.model_validate(body)

    def delete_datasource(self, gateway_id: str, datasource_id: str) -> None:
        self._request("DELETE", self._url("gateways", gateway_id, "datasources", datasource_id))

    def get_datasource_status(self, gateway_id: str, datasource_id: str) -> DatasourceStatus:
        """Check connectivity of a datasource.

        A failing check comes back as a non-2xx response and therefore raises
        ``requests.HTTPError``; callers wanting the error details can decode
        the response body with ``DatasourceStatus.model_validate``.
        """
        body = self._request(
            "GET", self._url("gateways", gateway_id, "datasources", datasource_id, "status")
        )
        return DatasourceStatus.model_validate(body or {})

    def get_datasource_users(self, gateway_id: str, datasource_id: str) -> list[DatasourceUser]:
        body = self._request(
            "GET", self._url("gateways", gateway_id, "datasources", datasource_id, "users")
        ) or {}
        return [DatasourceUser.model_validate(item) for item in body.get("value", [])]

    def add_datasource_user(
        self,
        gateway_id: str,
        datasource_id: str,
        request: AddDatasourceUserRequest,
    ) -> None:
        """Grant or update the permissions a user needs to use the datasource."""
        self._request(
            "POST",
            self._url("gateways", gateway_id, "datasources", datasource_id, "users"),
            to_body(request),
        )

    def delete_datasource_user(self, gateway_id: str, datasource_id: str, email_address: str) -> None:
        self._request(
            "DELETE",
            self._url("gateways", gateway_id, "datasources", datasource_id, "users", email_address),
        )
