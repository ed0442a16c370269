"""
OpenCode plugin event SDK - Typed event model for the notification plugin.

Provides:
- Typed event structs (SessionIdle, PermissionAsked, UnknownEvent)
- decode_event() for raw mappings, hook payloads and JSON bytes

Usage:
    from opencode_notify.hook_sdk import decode_event, SessionIdle

    event = decode_event({"type": "session.idle", "properties": {"sessionID": "ses_1"}})
    if isinstance(event, SessionIdle):
        ...
"""
from collections.abc import Mapping
from typing import Any

import msgspec

SESSION_IDLE = "session.idle"
PERMISSION_ASKED = "permission.asked"


# =============================================================================
# Event Structs
# =============================================================================

class EventEnvelope(msgspec.Struct):
    """Raw runtime event: a type tag plus free-form properties.

    properties stays untyped here; only the events the plugin acts on
    check its shape.
    """
    type: str
    properties: Any = msgspec.field(default_factory=dict)


class _SessionIdleProperties(msgspec.Struct):
    session_id: str | None = msgspec.field(default=None, name="sessionID")


class SessionIdle(msgspec.Struct, frozen=True):
    """An agent session finished its turn and is waiting for input."""
    session_id: str
    type: str = SESSION_IDLE


class PermissionAsked(msgspec.Struct, frozen=True):
    """The runtime raised a permission prompt."""
    properties: dict[str, Any] = msgspec.field(default_factory=dict)
    type: str = PERMISSION_ASKED


class UnknownEvent(msgspec.Struct, frozen=True):
    """Any other runtime event; ignored by the plugin."""
    type: str
    properties: Any = msgspec.field(default_factory=dict)


Event = SessionIdle | PermissionAsked | UnknownEvent

_json_decoder = msgspec.json.Decoder(EventEnvelope)


# =============================================================================
# Decoding
# =============================================================================

def _to_envelope(raw: Any) -> EventEnvelope:
    if isinstance(raw, (bytes, bytearray, memoryview, str)):
        return _json_decoder.decode(raw)
    if isinstance(raw, Mapping):
        # Hook payloads arrive as {"event": {...}}
        if "type" not in raw and isinstance(raw.get("event"), Mapping):
            raw = raw["event"]
        return msgspec.convert(dict(raw), EventEnvelope)
    raise TypeError(f"cannot decode event from {type(raw).__name__}")


def decode_event(raw: Any) -> Event:
    """Decode a runtime event into a typed event struct.

    Accepts an already typed event, a mapping, a {"event": {...}} hook
    payload, or JSON bytes/str.

    Raises:
        msgspec.ValidationError: If the event has no string "type", or a
            session.idle event has non-object properties
        msgspec.DecodeError: If JSON input is malformed
    """
    if isinstance(raw, (SessionIdle, PermissionAsked, UnknownEvent)):
        return raw

    envelope = _to_envelope(raw)
    if envelope.type == SESSION_IDLE:
        props = msgspec.convert(envelope.properties, _SessionIdleProperties, strict=False)
        return SessionIdle(session_id=props.session_id or "")
    if envelope.type == PERMISSION_ASKED:
        # The prompt notifies whatever its payload looks like
        props = envelope.properties
        return PermissionAsked(properties=dict(props) if isinstance(props, Mapping) else {})
    return UnknownEvent(type=envelope.type, properties=envelope.properties)
