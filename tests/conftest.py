"""Shared pytest fixtures.

Provides:
- fake_client: in-memory stand-in for PowerBIClient holding workspaces,
  members, gateways and datasources; records every mutating call
- http_error: factory for requests.HTTPError carrying a status code
- session: MagicMock requests.Session for client-level tests
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from powerbi_resources.errors import WorkspaceNotFoundError
from powerbi_resources.models import (
    Datasource,
    DatasourceStatus,
    DatasourceUser,
    Gateway,
    Group,
    GroupUser,
)


def make_http_error(status: int, body: dict | None = None) -> requests.HTTPError:
    resp = requests.Response()
    resp.status_code = status
    resp._content = json.dumps(body or {}).encode()
    return requests.HTTPError(f"{status} Error", response=resp)


def make_response(status: int = 200, body=None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = b"" if body is None else json.dumps(body).encode()
    return resp


class FakePowerBIClient:
    def __init__(self):
        self.groups: dict[str, Group] = {}
        self.members: dict[str, list[GroupUser]] = {}
        self.gateways: dict[str, Gateway] = {}
        self.datasources: dict[tuple[str, str], Datasource] = {}
        self.datasource_status: dict[tuple[str, str], DatasourceStatus | requests.HTTPError] = {}
        self.datasource_users: dict[tuple[str, str], list[DatasourceUser]] = {}
        # email address -> identifier the service assigns when that user is added
        self.service_identifiers: dict[str, str] = {}
        self.calls: list[tuple] = []

    # -- seeding -----------------------------------------------------------

    def add_workspace(self, group_id: str, name: str) -> Group:
        group = Group(id=group_id, name=name)
        self.groups[group_id] = group
        self.members.setdefault(group_id, [])
        return group

    # -- workspaces --------------------------------------------------------

    def get_group(self, group_id):
        self.calls.append(("get_group", group_id))
        if group_id not in self.groups:
            raise make_http_error(404)
        return self.groups[group_id]

    def get_group_by_name(self, name):
        self.calls.append(("get_group_by_name", name))
        for group in self.groups.values():
            if group.name == name:
                return group
        raise WorkspaceNotFoundError(name)

    def create_group(self, request):
        self.calls.append(("create_group", request))
        group_id = f"ws-{len(self.groups) + 1}"
        return self.add_workspace(group_id, request.name)

    def update_group(self, group_id, request):
        self.calls.append(("update_group", group_id, request))
        self.groups[group_id].name = request.name

    def delete_group(self, group_id):
        self.calls.append(("delete_group", group_id))
        if group_id not in self.groups:
            raise make_http_error(404)
        del self.groups[group_id]

    # -- members -----------------------------------------------------------

    def _find_member(self, group_id, key):
        for member in self.members.get(group_id, []):
            if key.lower() in (member.identifier.lower(), member.email_address.lower()):
                return member
        return None

    def get_group_users(self, group_id):
        self.calls.append(("get_group_users", group_id))
        if group_id not in self.groups:
            raise make_http_error(404)
        return list(self.members[group_id])

    def add_group_user(self, group_id, request):
        self.calls.append(("add_group_user", group_id, request))
        if group_id not in self.groups:
            raise make_http_error(404)
        identifier = (
            self.service_identifiers.get(request.email_address)
            or request.identifier
            or request.email_address
        )
        self.members[group_id].append(GroupUser(
            group_user_access_right=request.group_user_access_right,
            display_name=f"Display {identifier}",
            email_address=request.email_address,
            identifier=identifier,
            principal_type=request.principal_type,
        ))

    def update_group_user(self, group_id, request):
        self.calls.append(("update_group_user", group_id, request))
        member = self._find_member(group_id, request.identifier or request.email_address)
        if member is None:
            raise make_http_error(404)
        member.group_user_access_right = request.group_user_access_right

    def delete_user_in_group(self, group_id, user):
        self.calls.append(("delete_user_in_group", group_id, user))
        member = self._find_member(group_id, user)
        if member is None:
            raise make_http_error(404)
        self.members[group_id].remove(member)

    # -- gateways ----------------------------------------------------------

    def get_gateway(self, gateway_id):
        self.calls.append(("get_gateway", gateway_id))
        if gateway_id not in self.gateways:
            raise make_http_error(404)
        return self.gateways[gateway_id]

    def get_datasource(self, gateway_id, datasource_id):
        self.calls.append(("get_datasource", gateway_id, datasource_id))
        key = (gateway_id, datasource_id)
        if key not in self.datasources:
            raise make_http_error(404)
        return self.datasources[key]

    def get_datasource_status(self, gateway_id, datasource_id):
        self.calls.append(("get_datasource_status", gateway_id, datasource_id))
        status = self.datasource_status.get((gateway_id, datasource_id), DatasourceStatus())
        if isinstance(status, requests.HTTPError):
            raise status
        return status

    def get_datasource_users(self, gateway_id, datasource_id):
        self.calls.append(("get_datasource_users", gateway_id, datasource_id))
        return list(self.datasource_users.get((gateway_id, datasource_id), []))

    def mutating_calls(self) -> list[str]:
        return [call[0] for call in self.calls if not call[0].startswith("get_")]


@pytest.fixture
def fake_client():
    return FakePowerBIClient()


@pytest.fixture
def http_error():
    return make_http_error


@pytest.fixture
def response():
    return make_response


@pytest.fixture
def session():
    sess = MagicMock(spec=requests.Session)
    sess.request.return_value = make_response(200, {})
    return sess
