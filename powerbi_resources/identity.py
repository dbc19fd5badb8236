"""
identity.py  –  Workspace membership identity

The service has no stable ID for a membership record, so a member is
identified by the pair (workspace, principal key).  Internally the pair is
kept as a :class:`MemberId`; it is flattened to

    <workspace-display-name>/<principal-key>

only when it becomes the persisted resource ID.  That string format is part
of previously stored state and must not change.  Parsing splits on the first
separator, so principal keys may themselves contain ``/``.
"""

from dataclasses import dataclass

from .errors import IdentifierNotFoundError

SEPARATOR = "/"


@dataclass(frozen=True)
class MemberId:
    workspace_name: str
    principal_key: str

    @classmethod
    def parse(cls, raw: str) -> "MemberId":
        """Split a persisted ID; missing halves come back as empty strings."""
        workspace_name, _, principal_key = (raw or "").partition(SEPARATOR)
        return cls(workspace_name, principal_key)

    def format(self) -> str:
        return f"{self.workspace_name}{SEPARATOR}{self.principal_key}"

    def __str__(self) -> str:
        return self.format()


def resolve_principal_key(identifier: str = "", email_address: str = "", fallback: str = "") -> str:
    """Return the key used to address a principal on the service.

    The identifier wins, then the email address, then *fallback* (normally
    the principal half of a persisted :class:`MemberId`).  Raises
    :class:`IdentifierNotFoundError` when all three are empty.
    """
    for candidate in (identifier, email_address, fallback):
        if candidate:
            return candidate
    raise IdentifierNotFoundError()
