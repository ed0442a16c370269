"""
Session classification.

Decides whether a session is a main (top-level) session or a subagent
session by looking up its metadata. Lookup failures count as main so the
user is never left without a notification they should have had.
"""
from collections.abc import Mapping
from typing import Any, Protocol

import msgspec

from opencode_notify.hook_utils.commands import NotifyError
from opencode_notify.hook_utils.logging import log_event


class SessionLookupError(NotifyError):
    """Session metadata response could not be understood."""


class SessionRecord(msgspec.Struct, frozen=True):
    """The fields of a session this plugin reads."""
    id: str | None = None
    parent_id: str | None = msgspec.field(default=None, name="parentID")

    @property
    def is_main(self) -> bool:
        return not self.parent_id


class SessionLookup(Protocol):
    """Fetches session metadata by id."""

    async def get_session(self, session_id: str) -> Any:
        """Return the session record, bare or nested under "data"; raise if not found."""
        ...


class ClientSessionLookup:
    """SessionLookup over an OpenCode-style API client.

    Calls client.session.get(path={"id": session_id}); the result may be
    returned directly or as an awaitable.
    """

    def __init__(self, client: Any):
        self.client = client

    async def get_session(self, session_id: str) -> Any:
        result = self.client.session.get(path={"id": session_id})
        if hasattr(result, "__await__"):
            result = await result
        return result


def _unwrap(result: Any) -> Any:
    """Prefer the nested "data" payload when present and non-null."""
    if isinstance(result, Mapping):
        nested = result.get("data")
    else:
        nested = getattr(result, "data", None)
    return result if nested is None else nested


def normalize_session(result: Any) -> SessionRecord:
    """Normalize a lookup response into a SessionRecord.

    Accepts either shape: {"data": {...}} or the bare record, each as a
    mapping or as an object with attributes.

    Raises:
        SessionLookupError: If the response is not a session record
    """
    record = _unwrap(result)
    if isinstance(record, SessionRecord):
        return record
    if isinstance(record, Mapping):
        try:
            return msgspec.convert(dict(record), SessionRecord, strict=False)
        except msgspec.ValidationError as e:
            raise SessionLookupError(f"malformed session record: {e}") from e
    if any(hasattr(record, attr) for attr in ("id", "parentID", "parent_id")):
        parent_id = getattr(record, "parentID", None) or getattr(record, "parent_id", None)
        return SessionRecord(id=getattr(record, "id", None), parent_id=parent_id or None)
    raise SessionLookupError(f"unexpected session response: {type(result).__name__}")


class SessionClassifier:
    """Classifies sessions as main or subordinate; never raises."""

    def __init__(self, lookup: SessionLookup):
        self.lookup = lookup

    async def is_main_session(self, session_id: str) -> bool:
        try:
            result = await self.lookup.get_session(session_id)
            record = normalize_session(result)
        except Exception as e:
            # Fail open: an unknown session counts as main
            log_event("session", "lookup_failed", {
                "session_id": session_id,
                "type": type(e).__name__,
                "msg": str(e),
            }, "warning")
            return True
        return record.is_main
