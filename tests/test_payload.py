"""
Tests for the backup payload codec.
"""

import json

import pytest

from artha.models.backup import DomainSnapshot
from artha.sync.errors import IncompatibleBackupVersionError, MalformedPayloadError
from artha.sync.payload import (
    decode_setting_value,
    deserialize_settings,
    deserialize_snapshot,
    encode_setting_value,
    ensure_compatible_version,
    payload_major_version,
    serialize_settings,
    serialize_snapshot,
)


class TestSnapshotCodec:
    """Tests for the domain data half of the payload."""

    def test_non_ascii_is_preserved(self):
        """Test category names with emoji survive serialization."""
        snapshot = DomainSnapshot(data={"categories": [{"name": "Makanan 🍔"}]})
        raw = serialize_snapshot(snapshot)
        assert "🍔" in raw
        assert deserialize_snapshot(raw) == snapshot

    def test_corrupt_json_rejected(self):
        """Test that unparseable data raises MalformedPayloadError."""
        with pytest.raises(MalformedPayloadError):
            deserialize_snapshot("{not json")

    def test_non_object_rejected(self):
        """Test that a JSON array is not accepted as a snapshot."""
        with pytest.raises(MalformedPayloadError):
            deserialize_snapshot("[1, 2, 3]")

    def test_unserializable_snapshot(self):
        """Test that non-JSON values in a snapshot are reported."""
        snapshot = DomainSnapshot(data={"bad": object()})
        with pytest.raises(MalformedPayloadError):
            serialize_snapshot(snapshot)


class TestSettingsCodec:
    """Tests for the settings half of the payload."""

    def test_secret_keys_dropped_on_read(self):
        """Test that credentials in a stored payload are never applied."""
        raw = json.dumps({
            "@theme_preference": "dark",
            "@pin_hash": "abc",
            "@pin_salt": "def",
        })
        assert deserialize_settings(raw) == {"@theme_preference": "dark"}

    def test_settings_round_trip(self):
        """Test structured setting values."""
        settings = {"@notification_settings": {"budget": True, "bills": False}}
        assert deserialize_settings(serialize_settings(settings)) == settings

    def test_corrupt_settings_rejected(self):
        """Test that unparseable settings raise MalformedPayloadError."""
        with pytest.raises(MalformedPayloadError):
            deserialize_settings("nope")


class TestSettingValues:
    """Tests for raw setting value conversion."""

    @pytest.mark.parametrize("raw", [None, ""])
    def test_absent_values(self, raw):
        """Test that absent and empty values are left out."""
        assert decode_setting_value(raw) is None

    def test_json_values_parsed(self):
        """Test JSON text becomes structured data."""
        assert decode_setting_value('{"a": 1}') == {"a": 1}
        assert decode_setting_value("true") is True

    def test_plain_strings_kept(self):
        """Test non-JSON strings are kept verbatim."""
        assert decode_setting_value("dark") == "dark"

    def test_encode(self):
        """Test values are written back as the app stores them."""
        assert encode_setting_value("dark") == "dark"
        assert encode_setting_value(True) == "true"
        assert encode_setting_value({"a": 1}) == '{"a": 1}'


class TestVersionCheck:
    """Tests for payload format compatibility."""

    @pytest.mark.parametrize("version,major", [
        ("2.0.0", 2),
        ("2.0.0 (SQLite)", 2),
        ("10.1", 10),
        ("", None),
        ("beta", None),
    ])
    def test_major_version(self, version, major):
        """Test major version extraction."""
        assert payload_major_version(version) == major

    @pytest.mark.parametrize("version", ["2.0.0", "2.1.0", "2.0.0 (SQLite)"])
    def test_supported_versions(self, version):
        """Test that version 2 backups are accepted."""
        ensure_compatible_version(version)

    @pytest.mark.parametrize("version", ["1.0.0", "3.0.0", "", "unknown"])
    def test_unsupported_versions(self, version):
        """Test that other versions are rejected."""
        with pytest.raises(IncompatibleBackupVersionError) as exc_info:
            ensure_compatible_version(version)
        assert exc_info.value.code == "IncompatibleBackupVersion"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
