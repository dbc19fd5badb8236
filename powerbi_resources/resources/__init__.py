from .base import Resource, ResourceData
from .gateway import Gateway
from .gateway_datasource import GatewayDatasource
from .workspace import Workspace
from .workspace_access import WorkspaceAccess

RESOURCE_TYPES = (Workspace, WorkspaceAccess, Gateway, GatewayDatasource)

__all__ = [
    "RESOURCE_TYPES",
    "Gateway",
    "GatewayDatasource",
    "Resource",
    "ResourceData",
    "Workspace",
    "WorkspaceAccess",
]
