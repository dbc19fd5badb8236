"""
workspace_access.py  –  Workspace membership (one principal's access grant)

Resource ID:  <workspace-display-name>/<principal-key>

The principal key is fixed when the member is created: its identifier when
configured, otherwise its email address.  Later operations take the key from
the resource ID, falling back to :func:`~powerbi_resources.identity.resolve_principal_key`
only when the ID carries none.  The workspace comes next: ``workspace_id``
when the state carries it, otherwise a lookup of the workspace name held in
the resource ID (the import path).

Only the access right can be changed in place.  Every other configurable
attribute forces the member to be removed and re-added.
"""

from typing import Literal

import requests

from ..errors import IdentifierNotFoundError, WorkspaceNotFoundError, is_not_found
from ..identity import MemberId, resolve_principal_key
from ..models import AddGroupUserRequest, GroupUser, UpdateGroupUserRequest
from ..schema import EmailAddress, ResourceModel, Schema, attribute
from .base import Resource, ResourceData

AccessRight   = Literal["Admin", "Contributor", "Member", "Viewer", "None"]
PrincipalType = Literal["User", "App", "Group"]


class WorkspaceAccessAttributes(ResourceModel):
    workspace_id: str = attribute(
        ..., description="Workspace ID to which access is granted.", force_new=True
    )
    group_user_access_right: AccessRight = attribute(
        ..., description="Access level of the principal in the workspace."
    )
    display_name: str = attribute(
        description="Display name of the principal.", computed=True, force_new=True
    )
    email_address: EmailAddress = attribute(
        description="Email address of the user.", force_new=True
    )
    identifier: str = attribute(
        description="Identifier of the principal.", computed=True, force_new=True
    )
    principal_type: PrincipalType = attribute(
        ..., description="The principal type.", force_new=True
    )


class WorkspaceAccess(Resource):
    type_name = "powerbi_workspace_access"
    schema = Schema(WorkspaceAccessAttributes)

    # -----------------------------------------------------------------------
    # Identity helpers
    # -----------------------------------------------------------------------

    def _principal_key(self, data: ResourceData) -> str:
        key = MemberId.parse(data.id).principal_key
        if key:
            return key
        try:
            return resolve_principal_key(data.get("identifier"), data.get("email_address"))
        except IdentifierNotFoundError:
            raise IdentifierNotFoundError(data.id) from None

    def _workspace(self, data: ResourceData) -> tuple[str, str]:
        """Return ``(workspace_id, workspace_name)`` for *data*.

        The name is only known without a request when the ID had to be
        parsed; otherwise it comes back empty.
        """
        group_id = data.get("workspace_id")
        if group_id:
            return group_id, ""

        workspace_name = MemberId.parse(data.id).workspace_name
        if not workspace_name:
            raise WorkspaceNotFoundError(workspace_name)
        group = self.client.get_group_by_name(workspace_name)
        return group.id, group.name or workspace_name

    @staticmethod
    def _matches(member: GroupUser, key: str) -> bool:
        key = key.lower()
        return any(value and value.lower() == key for value in (member.identifier, member.email_address))

    # -----------------------------------------------------------------------
    # Operations
    # -----------------------------------------------------------------------

    def create(self, data: ResourceData) -> None:
        group_id = data.get("workspace_id")
        key = self._principal_key(data)

        self.logger.info("Adding %s %s to workspace %s", data.get("principal_type"), key, group_id)
        self.client.add_group_user(group_id, AddGroupUserRequest(
            group_user_access_right = data.get("group_user_access_right"),
            principal_type          = data.get("principal_type"),
            display_name            = data.get("display_name"),
            email_address           = data.get("email_address"),
            identifier              = data.get("identifier"),
        ))

        workspace = self.client.get_group(group_id)
        data.set_id(MemberId(workspace.name, key).format())
        self.read(data)

    def read(self, data: ResourceData) -> None:
        key = self._principal_key(data)
        group_id, workspace_name = self._workspace(data)

        try:
            members = self.client.get_group_users(group_id)
        except requests.HTTPError as exc:
            if not is_not_found(exc):
                raise
            members = []
        member = next((m for m in members if self._matches(m, key)), None)
        if member is None:
            self.logger.info("%s is no longer a member of workspace %s", key, group_id)
            data.set_id("")
            return

        data.set("identifier",              member.identifier)
        data.set("group_user_access_right", member.group_user_access_right)
        data.set("display_name",            member.display_name)
        data.set("email_address",           member.email_address)
        data.set("principal_type",          member.principal_type)
        data.set("workspace_id",            group_id)

        if not workspace_name:
            workspace_name = self.client.get_group(group_id).name
        data.set_id(MemberId(workspace_name, key).format())

    def update(self, data: ResourceData) -> None:
        self.check_in_place(data)
        key = self._principal_key(data)
        group_id, _ = self._workspace(data)

        if data.has_change("group_user_access_right"):
            self.logger.info(
                "Changing access of %s in workspace %s to %s",
                key, group_id, data.get("group_user_access_right"),
            )
            self.client.update_group_user(group_id, UpdateGroupUserRequest(
                group_user_access_right = data.get("group_user_access_right"),
                email_address           = data.get("email_address"),
                identifier              = data.get("identifier") or key,
                principal_type          = data.get("principal_type"),
            ))

        self.read(data)

    def delete(self, data: ResourceData) -> None:
        key = self._principal_key(data)
        group_id, _ = self._workspace(data)

        self.logger.info("Removing %s from workspace %s", key, group_id)
        try:
            self.client.delete_user_in_group(group_id, key)
        except requests.HTTPError as exc:
            if not is_not_found(exc):
                raise
            self.logger.info("%s was already absent from workspace %s", key, group_id)
        data.set_id("")
