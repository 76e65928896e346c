"""Core Business Logic Module

Framework independent logic for directory sync events (no Flask imports).

Module Structure:
    - events.py          : Directory sync event envelope and event kinds
    - reporting.py       : Warn/error reporter interface used by the extractor
    - scim_attributes.py : Custom attribute extraction from SCIM payloads

Import explicitly when needed:
    from dsync.core.events import DirectorySyncEvent, EventError
    from dsync.core.scim_attributes import AttributeExtractor, get_attributes_from_scim_payload
"""
