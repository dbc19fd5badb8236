"""
models.py  –  Typed payloads of the Power BI REST API

Every model maps the service's camelCase keys through aliases and also
accepts the Python field names.  Responses are decoded with
``model_validate``; unknown keys are ignored and a ``null`` falls back to
the field default.  Request bodies are produced by :func:`to_body`, which
leaves out every optional field still at its default so the service applies
its own.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


def to_body(request: ApiModel) -> dict[str, Any]:
    return request.model_dump(by_alias=True, exclude_defaults=True)


# ---------------------------------------------------------------------------
# Workspaces (groups)
# ---------------------------------------------------------------------------

class Group(ApiModel):
    id: str = ""
    name: str = ""
    is_read_only: bool = False
    is_on_dedicated_capacity: bool = False
    capacity_id: str = ""


class CreateGroupRequest(ApiModel):
    name: str


class UpdateGroupRequest(ApiModel):
    name: str = ""


# ---------------------------------------------------------------------------
# Workspace membership
# ---------------------------------------------------------------------------

class GroupUser(ApiModel):
    group_user_access_right: str = ""
    display_name: str = ""
    email_address: str = ""
    identifier: str = ""
    principal_type: str = ""
    graph_id: str = ""


class AddGroupUserRequest(ApiModel):
    group_user_access_right: str
    principal_type: str
    display_name: str = ""
    email_address: str = ""
    identifier: str = ""


class UpdateGroupUserRequest(ApiModel):
    """Body of ``PUT /groups/{groupId}/users``.

    Only the access right is changed by the service; email address,
    identifier and principal type tell it which member to change.
    """

    group_user_access_right: str
    email_address: str = ""
    identifier: str = ""
    principal_type: str = ""


# ---------------------------------------------------------------------------
# Gateways and datasources
# ---------------------------------------------------------------------------

class GatewayPublicKey(ApiModel):
    exponent: str = ""
    modulus: str = ""


class Gateway(ApiModel):
    id: str = ""
    name: str = ""
    type: str = ""
    public_key: GatewayPublicKey = Field(default_factory=GatewayPublicKey)
    gateway_status: str = ""
    gateway_annotation: str = ""


class CredentialDetails(ApiModel):
    credential_type: str = ""
    credentials: str = ""
    encrypted_connection: str = ""
    encryption_algorithm: str = ""
    privacy_level: str = ""
    use_caller_aad_identity: bool | None = Field(None, alias="useCallerAADIdentity")
    use_end_user_oauth2_credentials: bool | None = Field(None, alias="useEndUserOAuth2Credentials")


class Datasource(ApiModel):
    id: str = ""
    gateway_id: str = ""
    datasource_name: str = ""
    datasource_type: str = ""
    connection_details: str = ""
    credential_type: str = ""


class CreateDatasourceRequest(ApiModel):
    datasource_name: str = Field(alias="dataSourceName")
    datasource_type: str = Field(alias="dataSourceType")
    connection_details: str
    credential_details: CredentialDetails = Field(default_factory=CredentialDetails)


class DatasourceUser(ApiModel):
    datasource_access_right: str = ""
    display_name: str = ""
    email_address: str = ""
    identifier: str = ""
    principal_type: str = ""


class AddDatasourceUserRequest(ApiModel):
    datasource_access_right: str
    email_address: str = ""
    display_name: str = ""
    identifier: str = ""
    principal_type: str = ""


class StatusError(ApiModel):
    code: str = ""
    message: str = ""


class DatasourceStatus(ApiModel):
    """Connectivity check result; ``ok`` is False when the service reported an error."""

    error: StatusError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> str:
        return self.error.code if self.error else ""

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""
