"""Tests for the VersionedObject envelope."""

import pytest

from noob_channel.domain.value_objects.versioned_object import VersionedObject


def test_counter_is_big_endian_uint64():
    obj = VersionedObject.from_uint64(258)
    assert obj.data == b"\x00\x00\x00\x00\x00\x00\x01\x02"
    assert obj.version == 0
    assert obj.timestamp.tzinfo is not None


def test_counter_decodes_max_value():
    assert VersionedObject(data=b"\xff" * 8).as_uint64() == 2**64 - 1


def test_wrong_length_counter_rejected():
    with pytest.raises(ValueError, match="8 bytes"):
        VersionedObject(data=b"\x01").as_uint64()
