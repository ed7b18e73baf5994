import datetime as dt
import tomllib

import pytest

from libbuildpack.tomlwriter import dumps


def _plan(n):
    return {
        "provides": [{"name": f"test-provided-{n}{part}"} for part in "ab"],
        "requires": [
            {
                "name": f"test-required-{n}{part}",
                "version": f"test-version-{n}{part}",
                "metadata": {f"test-key-{n}{part}": f"test-value-{n}{part}"},
            }
            for part in "ab"
        ],
    }


def _plan_lines(n, prefix="", indent=""):
    lines = []
    for part in "ab":
        lines += [
            f"{indent}[[{prefix}provides]]",
            f'{indent}  name = "test-provided-{n}{part}"',
            "",
        ]
    for part in "ab":
        lines += [
            f"{indent}[[{prefix}requires]]",
            f'{indent}  name = "test-required-{n}{part}"',
            f'{indent}  version = "test-version-{n}{part}"',
            f"{indent}  [{prefix}requires.metadata]",
            f'{indent}    test-key-{n}{part} = "test-value-{n}{part}"',
            "",
        ]
    return lines


def _expected_plans_text(primary, alternatives):
    lines = _plan_lines(primary)
    for n in alternatives:
        lines += ["[[or]]", ""] + _plan_lines(n, "or.", "  ")
    return "\n".join(lines)


def test_flags_then_metadata_table_layout():
    value = {
        "build": True,
        "cache": False,
        "launch": True,
        "metadata": {"Count": 7, "Name": "sample"},
    }
    assert dumps(value) == (
        "build = true\n"
        "cache = false\n"
        "launch = true\n"
        "\n"
        "[metadata]\n"
        "  Count = 7\n"
        '  Name = "sample"\n'
    )


def test_single_table_layout():
    assert dumps({"metadata": {"Count": 7, "Name": "sample"}}) == (
        '[metadata]\n  Count = 7\n  Name = "sample"\n'
    )


def test_array_of_tables_layout():
    value = {
        "processes": [
            {"type": "worker", "command": "run-worker", "direct": False},
            {"type": "cron", "command": "run-cron", "direct": True},
        ],
        "slices": [
            {"paths": ["/a/one", "/a/two"]},
            {"paths": ["/b/one"]},
        ],
    }
    assert dumps(value) == (
        "[[processes]]\n"
        '  type = "worker"\n'
        '  command = "run-worker"\n'
        "  direct = false\n"
        "\n"
        "[[processes]]\n"
        '  type = "cron"\n'
        '  command = "run-cron"\n'
        "  direct = true\n"
        "\n"
        "[[slices]]\n"
        '  paths = ["/a/one", "/a/two"]\n'
        "\n"
        "[[slices]]\n"
        '  paths = ["/b/one"]\n'
    )


def test_nested_arrays_of_tables_layout():
    value = dict(_plan(1))
    value["or"] = [_plan(2), _plan(3)]
    assert dumps(value) == _expected_plans_text(1, [2, 3])


@pytest.mark.parametrize(
    "value",
    [
        {"text": 'quote " backslash \\ tab \t newline \n bell \x07 del \x7f'},
        {"a key with spaces": 1, "": "empty key", "dotted.key": True},
        {"ints": [1, 2, 3], "nested": [[1, 2], ["a", "b"]], "empty": []},
        {"floats": [1.0, -0.0, 1e20, 1e-7, 2.5]},
        {"when": dt.date(2019, 10, 28), "at": dt.time(8, 50, 9)},
        {"local": dt.datetime(2019, 10, 28, 8, 50, 9)},
        {"outer": {"inner": {"deepest": {"value": 1}}, "plain": "x"}},
        {"tables": [{"a": 1}, {"b": {"c": [True, False]}}]},
    ],
)
def test_round_trip(value):
    assert tomllib.loads(dumps(value)) == value


def test_aware_datetime_round_trips_as_same_instant():
    moment = dt.datetime(2019, 10, 28, 8, 50, 9, tzinfo=dt.timezone(dt.timedelta(hours=2)))
    loaded = tomllib.loads(dumps({"moment": moment}))
    assert loaded["moment"] == moment
    assert loaded["moment"].utcoffset() == dt.timedelta(0)


def test_none_values_are_left_out():
    text = dumps({"kept": "yes", "dropped": None, "table": {"gone": None}})
    assert "dropped" not in text
    assert "gone" not in text
    assert tomllib.loads(text) == {"kept": "yes", "table": {}}


def test_plain_values_come_before_tables():
    text = dumps({"table": {"x": 1}, "plain": 2})
    assert text.index("plain") < text.index("[table]")


def test_nan_and_infinity_round_trip():
    loaded = tomllib.loads(dumps({"nan": float("nan"), "inf": float("inf"), "ninf": float("-inf")}))
    assert loaded["nan"] != loaded["nan"]
    assert loaded["inf"] == float("inf")
    assert loaded["ninf"] == float("-inf")


def test_top_level_must_be_mapping():
    with pytest.raises(TypeError):
        dumps(["not", "a", "table"])


def test_mixed_array_types_rejected():
    with pytest.raises(TypeError):
        dumps({"mixed": [1, "two"]})


def test_tables_mixed_with_values_rejected():
    with pytest.raises(TypeError):
        dumps({"mixed": [{"a": 1}, 2]})


def test_none_inside_array_rejected():
    with pytest.raises(TypeError):
        dumps({"values": [1, None]})


def test_non_string_key_rejected():
    with pytest.raises(TypeError):
        dumps({1: "one"})


def test_unsupported_type_rejected():
    with pytest.raises(TypeError):
        dumps({"value": object()})