import itertools

import pytest

from acpiparse.errors import InvalidFieldFlags
from acpiparse.flags import (
    AmlType,
    FieldAccessType,
    FieldFlags,
    FieldUpdateRule,
    MethodFlags,
    StatusObject,
)


@pytest.mark.parametrize(
    "bits, expected",
    [
        (0, FieldAccessType.ANY),
        (1, FieldAccessType.BYTE),
        (2, FieldAccessType.WORD),
        (3, FieldAccessType.DWORD),
        (4, FieldAccessType.QWORD),
        (5, FieldAccessType.BUFFER),
    ],
)
def test_access_type_decoding(bits, expected):
    assert FieldFlags(bits).access_type() is expected


@pytest.mark.parametrize("bits", range(6, 16))
def test_reserved_access_type_is_rejected(bits):
    with pytest.raises(InvalidFieldFlags):
        FieldFlags(bits).access_type()


@pytest.mark.parametrize(
    "rule_bits, expected",
    [
        (0, FieldUpdateRule.PRESERVE),
        (1, FieldUpdateRule.WRITE_AS_ONES),
        (2, FieldUpdateRule.WRITE_AS_ZEROS),
    ],
)
def test_update_rule_decoding(rule_bits, expected):
    assert FieldFlags(rule_bits << 5).field_update_rule() is expected


def test_reserved_update_rule_is_rejected():
    with pytest.raises(InvalidFieldFlags):
        FieldFlags(3 << 5).field_update_rule()


def test_lock_rule_is_bit_four():
    assert FieldFlags(0x10).lock_rule() is True
    assert FieldFlags(0xEF).lock_rule() is False


def test_field_parts_are_independent():
    flags = FieldFlags((2 << 5) | 0x10 | 3)
    assert flags.access_type() is FieldAccessType.DWORD
    assert flags.lock_rule() is True
    assert flags.field_update_rule() is FieldUpdateRule.WRITE_AS_ZEROS


@pytest.mark.parametrize(
    "arg_count, serialize, sync_level",
    list(itertools.product([0, 3, 7], [False, True], [0, 9, 15])),
)
def test_method_flags_round_trip(arg_count, serialize, sync_level):
    flags = MethodFlags.create(arg_count, serialize, sync_level)
    assert flags.arg_count() == arg_count
    assert flags.serialize() is serialize
    assert flags.sync_level() == sync_level
    assert MethodFlags(flags.value) == flags
    assert 0 <= flags.value <= 0xFF


def test_method_flags_from_raw_byte():
    flags = MethodFlags(0xFF)
    assert flags.arg_count() == 7
    assert flags.serialize() is True
    assert flags.sync_level() == 15


@pytest.mark.parametrize("arg_count, sync_level", [(8, 0), (-1, 0), (0, 16), (0, -1)])
def test_method_flags_out_of_range(arg_count, sync_level):
    with pytest.raises(ValueError):
        MethodFlags.create(arg_count, False, sync_level)


def test_status_object_default_is_all_set():
    status = StatusObject()
    assert status.present is True
    assert status.enabled is True
    assert status.show_in_ui is True
    assert status.functional is True
    assert status.battery_present is True
    assert status == StatusObject(
        present=True, enabled=True, show_in_ui=True, functional=True, battery_present=True
    )


def test_status_object_equality():
    assert StatusObject(enabled=False) == StatusObject(enabled=False)
    assert not StatusObject(enabled=False) == StatusObject()


def test_aml_type_members_are_distinct():
    values = [member.value for member in AmlType]
    assert len(values) == len(set(values)) == 19
    assert AmlType("FieldUnit") is AmlType.FIELD_UNIT