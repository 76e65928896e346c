"""Custom user attributes from SCIM directory sync payloads.

Identity providers push organization specific metadata (territory, segment,
...) either at the root of the SCIM User document or inside extension
namespaces declared in ``schemas``. This module flattens them into a single
attribute map.

``event.raw`` has this format::

    {
      "schemas": [
        "urn:ietf:params:scim:schemas:core:2.0:User",
        "segment",
        "territory"
      ],
      "userName": "member@samldemo.com",
      "name": {"givenName": "Member", "familyName": "Demo"},
      "emails": [{"primary": true, "value": "member@samldemo.com"}],
      "territory": {"territory": "NAM"},
      "segment": {"segment": "SMB"},
      "externalId": "00ukzk1wrsKZqofit5d7",
      "active": true
    }

and is transformed to ``{"segment": "SMB", "territory": "NAM"}``.

Usage:
    attributes = get_attributes_from_scim_payload(event, directory_id="dir_123")
"""
from __future__ import annotations
import enum
import sys
from typing import Any, Callable, Collection, Dict, Iterable, List, Mapping, Optional, Union

from dsync.core.events import DirectorySyncEvent
from dsync.core.reporting import AttributeReporter, LoggingReporter, safe_stringify

CORE_SCHEMA_URN = "urn:ietf:params:scim:schemas:core:2.0:User"

# Structural fields of the core User resource, never organization metadata
CORE_USER_ATTRIBUTES_TO_IGNORE = frozenset({
    "userName",
    "name",
    "displayName",
    "emails",
    "active",
    "externalId",
    "id",
    "groups",
    "meta",
    "locale",
    "password",
    "phoneNumbers",
    "photos",
    "profileUrl",
    "timezone",
    "title",
    "addresses",
    "entitlements",
    "ims",
    "roles",
    "x509Certificates",
})

LOG_TAG = "get_attributes_from_scim_payload"

AttributeValue = Union[str, List[str]]
AttributeMap = Dict[str, AttributeValue]


class ValueKind(enum.Enum):
    STRING = "string"
    STRING_ARRAY = "string_array"
    OTHER = "other"


def classify_attribute_value(value: Any) -> ValueKind:
    """Classify a raw SCIM value as a string, a list of strings or anything else.

    >>> classify_attribute_value("NAM")
    <ValueKind.STRING: 'string'>
    >>> classify_attribute_value(["SMB", 3])
    <ValueKind.OTHER: 'other'>
    """
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return ValueKind.STRING_ARRAY
    return ValueKind.OTHER


class AttributeExtractor:
    """Collects custom attributes from user provisioning events.

    The instance only holds read-only configuration; every call to
    :meth:`extract` builds its own result, so one extractor can be shared
    between threads.

    Args:
        ignore_list: Field names skipped in the core namespace
        reporter: Receives warnings and errors (defaults to a logging reporter)
        directory_ids_to_log: Directories whose result is dumped to ``echo``
        echo: Diagnostic text sink (defaults to ``print``)
    """

    def __init__(
        self,
        ignore_list: Iterable[str] = CORE_USER_ATTRIBUTES_TO_IGNORE,
        reporter: Optional[AttributeReporter] = None,
        directory_ids_to_log: Collection[str] = (),
        echo: Callable[[str], None] = print,
    ):
        self.ignore_list = frozenset(ignore_list)
        self.reporter = reporter if reporter is not None else LoggingReporter()
        self.directory_ids_to_log = frozenset(directory_ids_to_log)
        self.echo = echo

    def extract(self, event: DirectorySyncEvent, directory_id: str) -> AttributeMap:
        """Return the custom attributes carried by ``event``.

        Namespaces are visited in ``schemas`` order and the first namespace
        to provide a given attribute wins. Malformed input is reported and
        skipped; this method does not raise for any payload shape.

        Args:
            event: Directory sync event
            directory_id: Directory the event came from (diagnostics only)

        Returns:
            Mapping of attribute name to a string or a list of strings
        """
        attributes: AttributeMap = {}

        if not event.supports_attributes:
            self._error(f"Unsupported event: {event.event}")
            return attributes

        raw = event.raw
        if not isinstance(raw, Mapping):
            self._error(f"Payload is not an object {safe_stringify(raw)}")
            return attributes

        schemas = raw.get("schemas")
        if not isinstance(schemas, (list, tuple)):
            self._error(f"Payload schemas is not a list {safe_stringify(schemas)}")
            schemas = ()

        for schema in schemas:
            if schema == CORE_SCHEMA_URN:
                # Core schema has its payload in the root
                namespace_data = {key: value for key, value in raw.items() if key != "schemas"}
                self._collect(attributes, namespace_data, self.ignore_list)
                continue

            if not isinstance(schema, str):
                self._error(f"Namespace name is not a string {safe_stringify(schema)}")
                continue

            namespace_data = raw.get(schema)
            if not namespace_data:
                self._warn(f"Namespace data for {schema} is null. Ignoring it.")
                continue
            if not isinstance(namespace_data, Mapping):
                self._warn(f"Namespace data for {schema} is not an object. Ignoring it.")
                continue

            self._collect(attributes, namespace_data, frozenset())

        if directory_id in self.directory_ids_to_log:
            self._dump(attributes)

        return attributes

    def _collect(self, attributes: AttributeMap, data: Mapping[str, Any], ignore_list: Collection[str]) -> None:
        for name, value in data.items():
            if name in ignore_list:
                continue
            if not value:
                self._warn(f"Custom attribute {name} is null. Ignoring it.")
                continue
            if name in attributes:
                self._warn(
                    f"Custom attribute {name} already exists. "
                    "Might be coming from different namespace. Ignoring it.",
                )
                continue

            # TODO: accept numbers once attribute definitions support a number type
            kind = classify_attribute_value(value)
            if kind is ValueKind.STRING:
                attributes[name] = value
            elif kind is ValueKind.STRING_ARRAY:
                attributes[name] = list(value)

    def _dump(self, attributes: AttributeMap) -> None:
        try:
            self.echo(f"Collected Attributes: {safe_stringify(attributes)}")
        except Exception as e:  # diagnostics must not change the result
            self._warn(f"Failed to write collected attributes: {e}")

    def _warn(self, message: str) -> None:
        self._report("warn", message)

    def _error(self, message: str) -> None:
        self._report("error", message)

    def _report(self, severity: str, message: str) -> None:
        """Forward to the reporter; a failing reporter never aborts extraction."""
        try:
            getattr(self.reporter, severity)(LOG_TAG, message)
        except Exception as e:
            print(f"[scim_attributes] Warning: Failed to report {severity} {message!r}: {e}", file=sys.stderr)


def get_attributes_from_scim_payload(
    event: DirectorySyncEvent,
    directory_id: str,
    *,
    ignore_list: Iterable[str] = CORE_USER_ATTRIBUTES_TO_IGNORE,
    reporter: Optional[AttributeReporter] = None,
    directory_ids_to_log: Collection[str] = (),
    echo: Callable[[str], None] = print,
) -> AttributeMap:
    """Extract custom attributes from a user provisioning event.

    Convenience wrapper building a one-shot :class:`AttributeExtractor`.

    Example:
        >>> event = DirectorySyncEvent(
        ...     event="user.created",
        ...     raw={"schemas": ["territory"], "territory": {"territory": "NAM"}},
        ... )
        >>> get_attributes_from_scim_payload(event, "dir_1")
        {'territory': 'NAM'}
    """
    extractor = AttributeExtractor(
        ignore_list=ignore_list,
        reporter=reporter,
        directory_ids_to_log=directory_ids_to_log,
        echo=echo,
    )
    return extractor.extract(event, directory_id)
