import os
import sys

import pytest

from libbuildpack.buildpackplan import Plan, Plans, default_plans, default_writer
from libbuildpack.logger import Logger

PLAN_TOML = """[[entries]]
  name = "test-entry-1a"
  version = "test-version-1a"
  [entries.metadata]
    test-key-1a = "test-value-1a"

[[entries]]
  name = "test-entry-1b"
  version = "test-version-1b"
  [entries.metadata]
    test-key-1b = "test-value-1b"
"""

EXPECTED = Plans(
    entries=[
        Plan("test-entry-1a", "test-version-1a", {"test-key-1a": "test-value-1a"}),
        Plan("test-entry-1b", "test-version-1b", {"test-key-1b": "test-value-1b"}),
    ]
)


def test_unmarshals_from_plan(tmp_path):
    path = tmp_path / "plan.toml"
    path.write_text(PLAN_TOML)

    assert default_plans(path, Logger()) == EXPECTED


def test_writer_produces_plan_document(tmp_path, monkeypatch):
    path = os.path.join(tmp_path, "out", "plan.toml")
    monkeypatch.setattr(sys, "argv", ["bin", path])

    default_writer(1)(EXPECTED)

    with open(path) as handle:
        assert handle.read() == PLAN_TOML
    assert default_plans(path, Logger()) == EXPECTED


def test_writer_requires_argument(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["bin"])
    with pytest.raises(IndexError, match="incorrect number of command line arguments"):
        default_writer(1)(EXPECTED)


def test_missing_plan_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        default_plans(tmp_path / "absent.toml", Logger())


def test_optional_fields_are_omitted():
    assert Plan("test-entry-1a").to_dict() == {"name": "test-entry-1a"}
    assert Plans().to_dict() == {}


def test_empty_file_gives_no_entries(tmp_path):
    path = tmp_path / "plan.toml"
    path.write_text("")

    assert default_plans(path, Logger()) == Plans()