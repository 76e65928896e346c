"""Directory sync event envelope."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

USER_CREATED = "user.created"
USER_UPDATED = "user.updated"
USER_DELETED = "user.deleted"
GROUP_CREATED = "group.created"
GROUP_UPDATED = "group.updated"
GROUP_DELETED = "group.deleted"
GROUP_USER_ADDED = "group.user_added"
GROUP_USER_REMOVED = "group.user_removed"

EVENT_KINDS = frozenset({
    USER_CREATED, USER_UPDATED, USER_DELETED,
    GROUP_CREATED, GROUP_UPDATED, GROUP_DELETED,
    GROUP_USER_ADDED, GROUP_USER_REMOVED,
})

# Only user provisioning events carry custom attributes
ATTRIBUTE_EVENT_KINDS = frozenset({USER_CREATED, USER_UPDATED})


class EventError(ValueError):
    """Raised when a payload does not have the directory sync event envelope."""


@dataclass(frozen=True)
class DirectorySyncEvent:
    """One provisioning event as delivered by the directory sync webhook.

    Only the envelope is checked here. ``raw`` is the SCIM resource
    document exactly as the identity provider sent it.
    """
    event: str
    raw: Dict[str, Any] = field(default_factory=dict)
    directory_id: Optional[str] = None
    tenant: Optional[str] = None
    product: Optional[str] = None

    @property
    def supports_attributes(self) -> bool:
        return self.event in ATTRIBUTE_EVENT_KINDS

    @classmethod
    def from_dict(cls, payload: Any) -> "DirectorySyncEvent":
        """Build an event from its webhook JSON shape.

        Example:
            >>> evt = DirectorySyncEvent.from_dict({
            ...     "event": "user.created",
            ...     "data": {"raw": {"schemas": []}},
            ... })
            >>> evt.event
            'user.created'

        Raises:
            EventError: If the envelope is not an object, has no string
                ``event`` or if ``data``/``data.raw`` are not objects
        """
        if not isinstance(payload, Mapping):
            raise EventError("Event payload must be a JSON object")

        kind = payload.get("event")
        if not isinstance(kind, str) or not kind:
            raise EventError("Event payload is missing 'event'")

        data = payload.get("data")
        if not isinstance(data, Mapping):
            raise EventError("Event payload is missing 'data' object")

        raw = data.get("raw")
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise EventError("Event 'data.raw' must be a JSON object")

        return cls(
            event=kind,
            raw=dict(raw),
            directory_id=_optional_str(payload.get("directory_id")),
            tenant=_optional_str(payload.get("tenant")),
            product=_optional_str(payload.get("product")),
        )


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None
