"""
schema.py  –  Resource attribute models and configuration validation

Each resource declares its attributes as a pydantic model.  Field flags set
through :func:`attribute` carry what the reconciliation engine needs beyond
the type:

  computed    the service fills the value in when it is not configured
  read_only   only the service sets the value; configuring it is an error
  force_new   a change can only be applied by recreating the remote object

Validation runs before a resource sends anything to the service: a
configuration with a missing required attribute, an unknown enum value or a
malformed email address is rejected with :class:`ValidationError`.
"""

from typing import Annotated, Any, Iterable, Mapping

import pydantic
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from .errors import ValidationError


class ResourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


def attribute(
    default: Any = "",
    *,
    description: str = "",
    computed: bool = False,
    read_only: bool = False,
    force_new: bool = False,
    **kwargs: Any,
) -> Any:
    """Declare one resource attribute; pass ``...`` as *default* for a required one."""
    flags = {"computed": computed or read_only, "read_only": read_only, "force_new": force_new}
    return Field(default, description=description, json_schema_extra=flags, **kwargs)


def _email(value: str) -> str:
    if "@" not in value:
        raise ValueError("must be an email address")
    return value


EmailAddress = Annotated[str, AfterValidator(_email)]

_MESSAGES = {
    "missing":         "is required",
    "extra_forbidden": "is not a known attribute",
}


def _message(error: dict) -> str:
    if error["type"] in _MESSAGES:
        return _MESSAGES[error["type"]]
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return error["msg"]


class Schema:
    """Attribute metadata of one resource type, read from its model."""

    def __init__(self, model: type[ResourceModel] = ResourceModel):
        self.model = model
        self.fields = model.model_fields

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def __iter__(self):
        return iter(self.fields)

    def _flag(self, name: str, flag: str) -> bool:
        return bool((self.fields[name].json_schema_extra or {}).get(flag))

    def is_computed(self, name: str) -> bool:
        return self._flag(name, "computed")

    def is_read_only(self, name: str) -> bool:
        return self._flag(name, "read_only")

    def is_force_new(self, name: str) -> bool:
        return self._flag(name, "force_new")

    def default(self, name: str) -> Any:
        field = self.fields[name]
        if field.is_required():
            return ""
        return field.get_default(call_default_factory=True)

    def defaults(self) -> dict[str, Any]:
        return {name: self.default(name) for name in self}

    def validate(self, config: Mapping[str, Any]) -> None:
        """Raise :class:`ValidationError` on the first invalid attribute.

        Empty values count as unset.
        """
        given = {key: value for key, value in config.items() if value not in (None, "")}
        for key in given:
            if key in self and self.is_read_only(key):
                raise ValidationError(key, "is computed and cannot be set")
        try:
            self.model.model_validate(given)
        except pydantic.ValidationError as exc:
            error = exc.errors()[0]
            raise ValidationError(str(error["loc"][0]), _message(error)) from None

    def replacement_fields(self, changed: Iterable[str]) -> list[str]:
        """Return the changed attributes that can only be applied by recreating."""
        return [name for name in changed if name in self and self.is_force_new(name)]
