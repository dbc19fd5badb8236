"""
base.py  –  Resource data container and the resource operation contract

The reconciliation engine driving these resources owns the plan and the
persisted state; a resource only supplies the leaf operations:

  create(data)          config  →  id + state
  read(data)            id + state  →  refreshed state (id cleared if gone)
  update(data)          id + prior state + new config  →  refreshed state
  delete(data)          id + state  →  nothing
  import_state(id)      id  →  state

Each operation receives its own :class:`ResourceData` and the API client
handed to the resource's constructor; nothing is shared between calls.
"""

import logging
from typing import Any, Mapping

from ..api import PowerBIClient
from ..errors import UnsupportedOperationError, ValidationError
from ..schema import Schema


class ResourceData:
    """State of one resource instance as seen by a single operation.

    ``prior`` is the state the engine had stored before the operation;
    :meth:`has_change` compares the current values against it.  An empty
    :attr:`id` after an operation means the object does not exist remotely.
    """

    def __init__(
        self,
        schema: Schema,
        resource_id: str = "",
        values: Mapping[str, Any] | None = None,
        prior: Mapping[str, Any] | None = None,
    ):
        self.schema = schema
        self.id     = resource_id
        self._values = schema.defaults()
        self._values.update(values or {})
        self._prior = dict(prior) if prior is not None else dict(self._values)

    @classmethod
    def for_update(
        cls,
        schema: Schema,
        resource_id: str,
        state: Mapping[str, Any],
        config: Mapping[str, Any],
    ) -> "ResourceData":
        values = dict(state)
        for key, value in config.items():
            # An unset computed attribute keeps the value last read from the service.
            if value in (None, "") and key in schema and schema.is_computed(key):
                continue
            values[key] = value
        return cls(schema, resource_id, values, prior=state)

    def get(self, key: str) -> Any:
        if key not in self.schema:
            raise KeyError(key)
        return self._values.get(key, "")

    def set(self, key: str, value: Any) -> None:
        if key not in self.schema:
            raise KeyError(key)
        self._values[key] = value

    def set_id(self, resource_id: str) -> None:
        self.id = resource_id

    @property
    def exists(self) -> bool:
        return bool(self.id)

    def has_change(self, key: str) -> bool:
        return self._values.get(key) != self._prior.get(key, self.schema.default(key))

    def changed_fields(self) -> list[str]:
        return [name for name in self.schema if self.has_change(name)]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, **self._values}


class Resource:
    """Base class for resource adapters.

    Subclasses set :attr:`type_name` and :attr:`schema` and override the
    operations they support; the others raise
    :class:`UnsupportedOperationError`.
    """

    type_name: str = ""
    schema: Schema = Schema()

    def __init__(self, client: PowerBIClient):
        self.client = client
        self.logger = logging.getLogger(f"{__package__}.{self.type_name}")

    # -- data construction -------------------------------------------------

    def new_data(self, config: Mapping[str, Any]) -> ResourceData:
        """Validate *config* and wrap it for :meth:`create`."""
        self.schema.validate(config)
        return ResourceData(self.schema, values=config)

    def update_data(
        self,
        resource_id: str,
        state: Mapping[str, Any],
        config: Mapping[str, Any],
    ) -> ResourceData:
        """Validate *config* and merge it over *state* for :meth:`update`."""
        self.schema.validate(config)
        return ResourceData.for_update(self.schema, resource_id, state, config)

    def check_in_place(self, data: ResourceData) -> None:
        """Reject an update whose changes need the resource to be recreated."""
        replace = self.schema.replacement_fields(data.changed_fields())
        if replace:
            raise ValidationError(replace[0], "cannot be changed in place; the resource must be replaced")

    # -- operations --------------------------------------------------------

    def create(self, data: ResourceData) -> None:
        raise UnsupportedOperationError(f"{self.type_name} does not support create")

    def read(self, data: ResourceData) -> None:
        raise UnsupportedOperationError(f"{self.type_name} does not support read")

    def update(self, data: ResourceData) -> None:
        raise UnsupportedOperationError(f"{self.type_name} does not support update")

    def delete(self, data: ResourceData) -> None:
        raise UnsupportedOperationError(f"{self.type_name} does not support delete")

    def import_state(self, resource_id: str) -> ResourceData:
        """Adopt an existing remote object given only its resource ID."""
        data = ResourceData(self.schema, resource_id)
        self.read(data)
        return data
