"""Workspace (group) resource.  The resource ID is the workspace ID."""

import requests

from ..errors import is_not_found
from ..models import CreateGroupRequest, UpdateGroupRequest
from ..schema import ResourceModel, Schema, attribute
from .base import Resource, ResourceData


class WorkspaceAttributes(ResourceModel):
    name: str = attribute(..., description="Name of the workspace.")
    is_read_only: bool = attribute(
        False, description="Whether the workspace is read-only.", read_only=True
    )
    is_on_dedicated_capacity: bool = attribute(
        False,
        description="Whether the workspace is assigned to a dedicated capacity.",
        read_only=True,
    )
    capacity_id: str = attribute(
        description="Capacity the workspace is assigned to.", read_only=True
    )


class Workspace(Resource):
    type_name = "powerbi_workspace"
    schema = Schema(WorkspaceAttributes)

    def create(self, data: ResourceData) -> None:
        self.logger.info("Creating workspace %r", data.get("name"))
        group = self.client.create_group(CreateGroupRequest(name=data.get("name")))
        data.set_id(group.id)
        self.read(data)

    def read(self, data: ResourceData) -> None:
        if not data.id:
            return

        try:
            group = self.client.get_group(data.id)
        except requests.HTTPError as exc:
            if not is_not_found(exc):
                raise
            group = None

        if group is None or not group.id:
            self.logger.info("Workspace %s no longer exists", data.id)
            data.set_id("")
            return

        data.set("name",                     group.name)
        data.set("is_read_only",             group.is_read_only)
        data.set("is_on_dedicated_capacity", group.is_on_dedicated_capacity)
        data.set("capacity_id",              group.capacity_id)

    def update(self, data: ResourceData) -> None:
        if data.has_change("name"):
            self.logger.info("Renaming workspace %s to %r", data.id, data.get("name"))
            self.client.update_group(data.id, UpdateGroupRequest(name=data.get("name")))
        self.read(data)

    def delete(self, data: ResourceData) -> None:
        self.logger.info("Deleting workspace %s", data.id)
        try:
            self.client.delete_group(data.id)
        except requests.HTTPError as exc:
            if not is_not_found(exc):
                raise
        data.set_id("")
