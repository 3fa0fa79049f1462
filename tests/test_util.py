import uuid

import pytest

from workflow.schema import Flow, NodeOperating, Node
from workflow.util import new_uuid, string_to_int, struct_to_map


def test_string_to_int_rejects_decimal():
    with pytest.raises(ValueError):
        string_to_int("1.0")


@pytest.mark.parametrize("text,expected", [("42", 42), ("-7", -7), ("+5", 5), ("0", 0)])
def test_string_to_int_valid(text, expected):
    assert string_to_int(text) == expected


@pytest.mark.parametrize("text", ["", " 1", "1_000", "abc", "0x10", "1 "])
def test_string_to_int_invalid_syntax(text):
    with pytest.raises(ValueError):
        string_to_int(text)


def test_string_to_int_range():
    assert string_to_int("9223372036854775807") == 9223372036854775807
    assert string_to_int("-9223372036854775808") == -9223372036854775808
    with pytest.raises(ValueError):
        string_to_int("9223372036854775808")
    with pytest.raises(ValueError):
        string_to_int("-9223372036854775809")


def test_new_uuid_is_version4_and_unique():
    a = new_uuid()
    b = new_uuid()
    assert a != b
    parsed = uuid.UUID(a)
    assert parsed.version == 4
    assert str(parsed) == a


def test_struct_to_map_round_trip():
    flow = Flow(id=1, record_id="rid", name="flow", version=2)
    data = struct_to_map(flow)
    assert data["record_id"] == "rid"
    assert Flow(**data) == flow


def test_struct_to_map_nested():
    op = NodeOperating(node_group=[Node(code="n1")])
    data = struct_to_map(op)
    assert data["node_group"][0]["code"] == "n1"
    assert data["router_group"] == []


@pytest.mark.parametrize("value", [1, "text", {"a": 1}, Flow])
def test_struct_to_map_rejects_non_records(value):
    with pytest.raises(TypeError):
        struct_to_map(value)