"""
gateway.py  –  On-premises data gateway (read / import only)

Gateways are provisioned by installing the gateway software on-premises, not
through the REST API, so this resource only looks an existing gateway up by
ID.  The resource ID is the gateway ID; when the gateway cluster is used
this is the ID of its primary (first) gateway.
"""

import requests

from ..errors import is_not_found
from ..schema import ResourceModel, Schema, attribute
from .base import Resource, ResourceData


class GatewayAttributes(ResourceModel):
    gateway_id: str = attribute(..., description="The gateway ID.")
    name: str = attribute(description="The gateway name.", read_only=True)
    type: str = attribute(description="The gateway type.", read_only=True)
    gateway_status: str = attribute(description="The gateway connectivity status.", read_only=True)
    gateway_annotation: str = attribute(description="Gateway metadata in JSON format.", read_only=True)
    exponent: str = attribute(description="RSA public key exponent of the gateway.", read_only=True)
    modulus: str = attribute(description="RSA public key modulus of the gateway.", read_only=True)


class Gateway(Resource):
    type_name = "powerbi_gateway"
    schema = Schema(GatewayAttributes)

    def read(self, data: ResourceData) -> None:
        gateway_id = data.get("gateway_id") or data.id
        if not gateway_id:
            data.set_id("")
            return

        try:
            gateway = self.client.get_gateway(gateway_id)
        except requests.HTTPError as exc:
            if not is_not_found(exc):
                raise
            gateway = None

        if gateway is None or not gateway.id:
            self.logger.info("Gateway %s not found", gateway_id)
            data.set_id("")
            return

        data.set_id(gateway.id)
        data.set("gateway_id",         gateway.id)
        data.set("name",               gateway.name)
        data.set("type",               gateway.type)
        data.set("gateway_status",     gateway.gateway_status)
        data.set("gateway_annotation", gateway.gateway_annotation)
        data.set("exponent",           gateway.public_key.exponent)
        data.set("modulus",            gateway.public_key.modulus)
