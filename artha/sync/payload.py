"""
Backup Payload Codec

Turns the snapshot and settings into the two JSON strings stored in a
backup document, and back.

DESIGN DECISION: Each half is an independent JSON document. A corrupt
settings string does not make the domain data unreadable, and either
half can be inspected on its own.

DESIGN DECISION: Restore checks the format version explicitly.
Only backups whose major version is supported are accepted; anything
else is rejected before local data is touched.
"""

import json
import re
from typing import Any, Optional

from artha.models.backup import (
    SECRET_SETTING_KEYS,
    SUPPORTED_PAYLOAD_MAJOR_VERSIONS,
    DomainSnapshot,
    SettingsPayload,
)
from artha.sync.errors import IncompatibleBackupVersionError, MalformedPayloadError


# Accepts "2.0.0" as well as tags with a suffix such as "2.0.0 (SQLite)"
_VERSION_PATTERN = re.compile(r"^\s*(\d+)(?:\.\d+)*")


def serialize_snapshot(snapshot: DomainSnapshot) -> str:
    try:
        return json.dumps(snapshot.data, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Local data could not be serialized: {e}")


def deserialize_snapshot(raw: str) -> DomainSnapshot:
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise MalformedPayloadError(f"Backup data is corrupted: {e}")
    if not isinstance(data, dict):
        raise MalformedPayloadError("Backup data is corrupted: expected a JSON object")
    return DomainSnapshot(data=data)


def serialize_settings(settings: SettingsPayload) -> str:
    try:
        return json.dumps(settings, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise MalformedPayloadError(f"Settings could not be serialized: {e}")


def deserialize_settings(raw: str) -> SettingsPayload:
    """Parse stored settings, dropping any credential keys."""
    try:
        settings = json.loads(raw)
    except ValueError as e:
        raise MalformedPayloadError(f"Backup settings are corrupted: {e}")
    if not isinstance(settings, dict):
        raise MalformedPayloadError("Backup settings are corrupted: expected a JSON object")
    return {
        key: value
        for key, value in settings.items()
        if key not in SECRET_SETTING_KEYS
    }


def decode_setting_value(raw: Optional[str]) -> Optional[Any]:
    """
    Interpret a raw setting string for the payload.

    Absent or empty values return None, as does the JSON text "null".
    Strings that are not JSON are kept as they are.
    """
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def encode_setting_value(value: Any) -> str:
    """Strings are written back verbatim, everything else as JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def payload_major_version(version: str) -> Optional[int]:
    match = _VERSION_PATTERN.match(version or "")
    return int(match.group(1)) if match else None


def ensure_compatible_version(version: str) -> None:
    """
    Raises:
        IncompatibleBackupVersionError: If the backup format cannot be restored
    """
    if payload_major_version(version) not in SUPPORTED_PAYLOAD_MAJOR_VERSIONS:
        raise IncompatibleBackupVersionError(version)
