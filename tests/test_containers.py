from dataclasses import dataclass

import pytest

from workflow.qlang.containers import (
    UNDEFINED,
    QlangPanic,
    append,
    capacity,
    delete,
    get,
    length,
    map_from,
    panicf,
    set_index,
    set_items,
    slice_from,
    sub_slice,
)


@dataclass
class Point:
    x: int = 0
    y: int = 0


class VarHolder:
    def __init__(self):
        self.vars = {}

    def set_var(self, name, value):
        self.vars[name] = value


def test_panicf_formats_message():
    with pytest.raises(QlangPanic, match="bad value 7"):
        panicf("bad value %d", 7)


def test_map_from_empty():
    assert map_from() == {}


def test_map_from_string_keys_int_values():
    result = map_from("a", 1, "b", 2)
    assert result == {"a": 1, "b": 2}
    assert all(type(v) is int for v in result.values())


def test_map_from_promotes_to_float():
    result = map_from("a", 1, "b", 2.5)
    assert result == {"a": 1.0, "b": 2.5}
    assert all(isinstance(v, float) for v in result.values())


def test_map_from_int_keys():
    assert map_from(1, "x", 2, "y") == {1: "x", 2: "y"}


def test_map_from_mixed_values_skip_undefined():
    assert map_from("a", UNDEFINED, "b", "x", "c", [1]) == {"b": "x", "c": [1]}


def test_map_from_odd_count():
    with pytest.raises(QlangPanic):
        map_from("a", 1, "b")


@pytest.mark.parametrize("args", [(1.5, "x"), ("a", 1, 2, 2)])
def test_map_from_bad_keys(args):
    with pytest.raises(QlangPanic, match="key type only support"):
        map_from(*args)


def test_delete():
    m = {"a": 1, "b": 2}
    delete(m, "a")
    delete(m, "missing")
    assert m == {"b": 2}


def test_set_items_on_dict_and_list():
    m = {"a": 1}
    set_items(m, "b", 2, "a", UNDEFINED)
    assert m == {"b": 2}
    seq = [0, 0, 0]
    set_items(seq, 0, "x", 2, "z")
    assert seq == ["x", 0, "z"]


def test_set_items_odd_count():
    with pytest.raises(QlangPanic):
        set_items({}, "a")


def test_set_items_on_object():
    p = Point()
    set_items(p, "x", 3, "y", 4)
    assert (p.x, p.y) == (3, 4)


def test_set_index_dict_and_list():
    m = {"a": 1}
    set_index(m, "b", 5)
    set_index(m, "a", UNDEFINED)
    assert m == {"b": 5}
    seq = [1, 2]
    set_index(seq, 1, 9)
    assert seq == [1, 9]


def test_set_index_list_needs_int():
    with pytest.raises(QlangPanic, match="slice index"):
        set_index([1], "0", 2)


def test_set_index_uses_set_var():
    holder = VarHolder()
    set_index(holder, "name", "value")
    assert holder.vars == {"name": "value"}


def test_set_index_missing_member():
    with pytest.raises(QlangPanic, match="doesn't has member"):
        set_index(Point(), "z", 1)


def test_set_index_unsupported_type():
    with pytest.raises(QlangPanic, match="doesn't support"):
        set_index(5, "a", 1)


def test_get():
    assert get({"a": 1}, "a") == 1
    assert get({"a": 1}, "b") is UNDEFINED
    assert get([1, 2], 1) == 2
    assert get("abc", 0) == "a"
    assert get(5, "x") is UNDEFINED
    assert get(Point(x=8), "x") == 8


def test_get_missing_member():
    with pytest.raises(QlangPanic):
        get(Point(), "nope")


def test_length_and_capacity():
    assert length(None) == 0
    assert length("abc") == len("abc")
    assert length({"a": 1}) == 1
    assert capacity(None) == 0
    assert capacity([1, 2]) == 2


def test_capacity_of_map_fails():
    with pytest.raises(QlangPanic):
        capacity({})


def test_sub_slice():
    data = [1, 2, 3, 4]
    assert sub_slice(data, 1, None) == [2, 3, 4]
    assert sub_slice(data, None, 2) == [1, 2]
    assert sub_slice(data, None, None) == data
    assert sub_slice(data, 1, 3) + sub_slice(data, 3, None) == data[1:]


def test_sub_slice_errors():
    with pytest.raises(IndexError):
        sub_slice([1, 2], 1, 5)
    with pytest.raises(QlangPanic, match="not a integer"):
        sub_slice([1, 2], "a", None)


def test_append():
    original = [1]
    assert append(original, 2, "x") == [1, 2, "x"]
    assert original == [1]
    assert append(b"a", 98) == b"ab"


def test_append_errors():
    with pytest.raises(QlangPanic):
        append(b"a", "b")
    with pytest.raises(QlangPanic):
        append(None, 1)


def test_slice_from():
    assert slice_from() == []
    assert slice_from(1, 2) == [1, 2]
    floats = slice_from(1, 2.5)
    assert floats == [1.0, 2.5]
    assert all(isinstance(v, float) for v in floats)
    assert slice_from("a", 1) == ["a", 1]