from __future__ import annotations

import json

import pytest

from arrayfile.codec import OMIT, parse, stringify
from arrayfile.core.errors import ArrayFileError, JSONSyntaxError


def test_stringify_default_matches_indent_four():
    value = [{"id": 1, "tags": ["a", "b"]}, {"id": 2, "tags": []}]
    assert stringify(value) == json.dumps(value, indent=4)


@pytest.mark.parametrize("space", [0, -3, "", None])
def test_stringify_compact(space):
    assert stringify({"a": 1, "b": [1, 2]}, space=space) == '{"a":1,"b":[1,2]}'


def test_stringify_caps_numeric_space():
    assert stringify([1], space=20) == "[\n" + " " * 10 + "1\n]"


def test_stringify_string_space():
    assert stringify([1], space="\t") == "[\n\t1\n]"
    assert stringify([1], space="abcdefghijklmnop") == "[\nabcdefghij1\n]"


def test_stringify_rejects_bool_space():
    with pytest.raises(TypeError):
        stringify([1], space=True)


def test_stringify_keeps_non_ascii():
    assert stringify(["é", "日本"], space=0) == '["é","日本"]'


def test_stringify_non_finite_floats_become_null():
    assert stringify([float("nan"), float("inf"), -float("inf"), 1.5], space=0) == "[null,null,null,1.5]"


def test_stringify_tuples_as_arrays():
    assert stringify({"point": (1, 2)}, space=0) == '{"point":[1,2]}'


def test_stringify_replacer_called_top_down():
    calls = []

    def spy(key, value):
        calls.append(key)
        return value

    stringify({"a": [1]}, spy, 0)
    assert calls == ["", "a", "0"]


def test_stringify_replacer_output_is_descended():
    def expand(key, value):
        if value == "x":
            return {"inner": "y"}
        return value

    assert stringify(["x"], expand, 0) == '[{"inner":"y"}]'


def test_stringify_omit_drops_members():
    drop_a = lambda key, value: OMIT if key == "a" else value  # noqa: E731
    assert stringify({"a": 1, "b": 2}, drop_a, 0) == '{"b":2}'


def test_stringify_omit_in_array_becomes_null():
    drop_first = lambda key, value: OMIT if key == "0" else value  # noqa: E731
    assert stringify([1, 2], drop_first, 0) == "[null,2]"


def test_stringify_omit_root_raises():
    with pytest.raises(TypeError):
        stringify([1], lambda key, value: OMIT if key == "" else value)


def test_stringify_allow_list_filters_every_level():
    value = [{"a": {"a": 1, "c": 2}, "c": 3}]
    assert stringify(value, ["a"], 0) == '[{"a":{"a":1}}]'


def test_stringify_allow_list_orders_keys():
    assert stringify({"a": 1, "b": 2}, ["b", "a", "b"], 0) == '{"b":2,"a":1}'


def test_stringify_allow_list_numeric_keys():
    assert stringify({"1": "x", "2": "y"}, [1], 0) == '{"1":"x"}'


def test_stringify_allow_list_skips_missing_keys():
    assert stringify([{"id": 1}], ["id", "name"], 0) == '[{"id":1}]'


def test_stringify_unserialisable_raises_type_error():
    with pytest.raises(TypeError):
        stringify([object()])


def test_parse_plain():
    assert parse('[{"id": 1}]') == [{"id": 1}]


@pytest.mark.parametrize("text", ["not json", "", "[1,", "{'a': 1}"])
def test_parse_malformed_raises_syntax_error(text):
    with pytest.raises(JSONSyntaxError) as info:
        parse(text)
    err = info.value
    assert isinstance(err, json.JSONDecodeError)
    assert isinstance(err, ArrayFileError)
    assert err.doc == text
    assert isinstance(err.__cause__, json.JSONDecodeError)
    assert str(err) == str(err.__cause__)


def test_parse_reviver_called_bottom_up():
    calls = []

    def spy(key, value):
        calls.append(key)
        return value

    parse('{"a": [1]}', spy)
    assert calls == ["0", "a", ""]


def test_parse_reviver_transforms_values():
    upper = lambda key, value: value.upper() if isinstance(value, str) else value  # noqa: E731
    assert parse('[{"name": "ann"}]', upper) == [{"name": "ANN"}]


def test_parse_reviver_omit():
    drop_a = lambda key, value: OMIT if key == "a" else value  # noqa: E731
    assert parse('{"a": 1, "b": 2}', drop_a) == {"b": 2}
    drop_one = lambda key, value: OMIT if value == 1 else value  # noqa: E731
    assert parse("[1, 2]", drop_one) == [None, 2]


def test_omit_repr():
    assert repr(OMIT) == "OMIT"


def test_stringify_converts_keys_like_json():
    value = {None: 1, True: 2, False: 3, 4: 5, 1.5: 6, "s": 7}
    assert stringify(value, space=0) == json.dumps(value, separators=(",", ":"))
    assert stringify(value, space=0) == '{"null":1,"true":2,"false":3,"4":5,"1.5":6,"s":7}'


def test_stringify_allow_list_matches_converted_keys():
    assert stringify({None: 1, 2: "x", "y": 3}, ["null", 2], 0) == '{"null":1,"2":"x"}'


def test_stringify_rejects_unsupported_keys():
    with pytest.raises(TypeError, match="keys must be"):
        stringify([{(1, 2): "pair"}])


def test_stringify_rejects_colliding_keys():
    with pytest.raises(ValueError, match="duplicate key"):
        stringify({1: "a", "1": "b"})


def test_stringify_rejects_circular_list():
    value = [1]
    value.append(value)
    with pytest.raises(ValueError, match="Circular reference detected"):
        stringify(value)


def test_stringify_rejects_circular_dict():
    value = {"a": {}}
    value["a"]["back"] = value
    with pytest.raises(ValueError, match="Circular reference detected"):
        stringify([value])


def test_stringify_allows_repeated_siblings():
    shared = {"id": 1}
    assert stringify([shared, shared], space=0) == '[{"id":1},{"id":1}]'
