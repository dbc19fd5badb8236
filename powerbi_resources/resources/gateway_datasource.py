"""
gateway_datasource.py  –  Datasource on an on-premises gateway (read / import only)

Resource ID:  <gateway-id>/<datasource-id>
"""

import requests

from ..errors import is_not_found
from ..models import DatasourceStatus
from ..schema import ResourceModel, Schema, attribute
from .base import Resource, ResourceData

SEPARATOR = "/"


class GatewayDatasourceAttributes(ResourceModel):
    gateway_id: str = attribute(..., description="The gateway ID.")
    datasource_id: str = attribute(..., description="The datasource ID.")
    datasource_name: str = attribute(description="The datasource name.", read_only=True)
    datasource_type: str = attribute(description="The datasource type.", read_only=True)
    connection_details: str = attribute(description="Connection details in JSON format.", read_only=True)
    credential_type: str = attribute(description="Credential type used to connect.", read_only=True)
    status: str = attribute(description="Result of the connectivity check.", read_only=True)
    users: tuple[dict[str, str], ...] = attribute(
        (), description="Principals with access to the datasource.", read_only=True
    )


class GatewayDatasource(Resource):
    type_name = "powerbi_gateway_datasource"
    schema = Schema(GatewayDatasourceAttributes)

    def _ids(self, data: ResourceData) -> tuple[str, str]:
        gateway_id = data.get("gateway_id")
        datasource_id = data.get("datasource_id")
        if not (gateway_id and datasource_id):
            gateway_id, _, datasource_id = data.id.partition(SEPARATOR)
        return gateway_id, datasource_id

    def _status(self, gateway_id: str, datasource_id: str) -> str:
        try:
            status = self.client.get_datasource_status(gateway_id, datasource_id)
        except requests.HTTPError as exc:
            if exc.response is None or is_not_found(exc):
                raise
            # A failed connectivity check is reported as an error response.
            status = DatasourceStatus.model_validate(exc.response.json())
        return "OK" if status.ok else (status.error_code or status.message or "Error")

    def read(self, data: ResourceData) -> None:
        gateway_id, datasource_id = self._ids(data)
        if not (gateway_id and datasource_id):
            data.set_id("")
            return

        try:
            datasource = self.client.get_datasource(gateway_id, datasource_id)
        except requests.HTTPError as exc:
            if not is_not_found(exc):
                raise
            datasource = None

        if datasource is None or not datasource.id:
            self.logger.info("Datasource %s not found on gateway %s", datasource_id, gateway_id)
            data.set_id("")
            return

        users = self.client.get_datasource_users(gateway_id, datasource_id)

        data.set_id(f"{gateway_id}{SEPARATOR}{datasource.id}")
        data.set("gateway_id",         gateway_id)
        data.set("datasource_id",      datasource.id)
        data.set("datasource_name",    datasource.datasource_name)
        data.set("datasource_type",    datasource.datasource_type)
        data.set("connection_details", datasource.connection_details)
        data.set("credential_type",    datasource.credential_type)
        data.set("status",             self._status(gateway_id, datasource_id))
        data.set("users", [
            {
                "email_address":           user.email_address,
                "identifier":              user.identifier,
                "principal_type":          user.principal_type,
                "datasource_access_right": user.datasource_access_right,
            }
            for user in users
        ])
