import json

import pytest

from libbuildpack.logger import Logger
from libbuildpack.platform import EnvironmentVariables, Platform
from libbuildpack.services import Service, default_services

SERVICE = {
    "binding_name": "test-binding",
    "credentials": {"uri": "test-uri", "token": "token"},
    "instance_name": "test-instance",
    "label": "test-label",
    "plan": "test-plan",
    "tags": ["tag-1", "tag-2"],
}


@pytest.fixture
def platform(tmp_path):
    return Platform(str(tmp_path), EnvironmentVariables())


@pytest.fixture(autouse=True)
def _no_services(monkeypatch):
    monkeypatch.delenv("CNB_SERVICES", raising=False)


def test_no_services_when_unset(platform):
    assert default_services(platform, Logger()) == []


def test_reads_services_from_environment(platform, monkeypatch):
    monkeypatch.setenv("CNB_SERVICES", json.dumps({"test-label": [SERVICE]}))

    services = default_services(platform, Logger())

    assert services == [
        Service(
            binding_name=SERVICE["binding_name"],
            credentials=SERVICE["credentials"],
            instance_name=SERVICE["instance_name"],
            label=SERVICE["label"],
            plan=SERVICE["plan"],
            tags=SERVICE["tags"],
        )
    ]


def test_reads_services_from_platform(tmp_path):
    second = dict(SERVICE, binding_name="other-binding")
    platform = Platform(
        str(tmp_path),
        EnvironmentVariables({"CNB_SERVICES": json.dumps({"a": [SERVICE], "b": [second]})}),
    )

    services = default_services(platform, Logger())

    assert [s.binding_name for s in services] == ["test-binding", "other-binding"]


def test_environment_takes_precedence_over_platform(tmp_path, monkeypatch):
    platform = Platform(
        str(tmp_path),
        EnvironmentVariables({"CNB_SERVICES": json.dumps({"a": [SERVICE]})}),
    )
    monkeypatch.setenv("CNB_SERVICES", json.dumps({}))

    assert default_services(platform, Logger()) == []


def test_missing_fields_take_empty_values():
    assert Service.from_dict({"label": "only-label"}) == Service(label="only-label")


def test_unknown_fields_are_ignored():
    service = Service.from_dict(dict(SERVICE, extra="ignored"))
    assert service.plan == SERVICE["plan"]


def test_field_names_match_regardless_of_case():
    service = Service.from_dict({"Label": "test-label", "PLAN": "test-plan"})
    assert (service.label, service.plan) == ("test-label", "test-plan")


def test_invalid_json_raises(platform, monkeypatch):
    monkeypatch.setenv("CNB_SERVICES", "{not json")
    with pytest.raises(ValueError):
        default_services(platform, Logger())


def test_non_object_document_raises(platform, monkeypatch):
    monkeypatch.setenv("CNB_SERVICES", json.dumps([SERVICE]))
    with pytest.raises(ValueError):
        default_services(platform, Logger())


def test_non_array_services_raise(platform, monkeypatch):
    monkeypatch.setenv("CNB_SERVICES", json.dumps({"a": SERVICE}))
    with pytest.raises(ValueError):
        default_services(platform, Logger())


def test_wrongly_typed_field_raises():
    with pytest.raises(ValueError):
        Service.from_dict(dict(SERVICE, tags="not-a-list"))


def test_debug_output_lists_services(platform, monkeypatch):
    import io

    debug = io.StringIO()
    monkeypatch.setenv("CNB_SERVICES", json.dumps({"a": [SERVICE]}))

    default_services(platform, Logger(debug, None))

    assert debug.getvalue().startswith("Services: ")
    assert "test-binding" in debug.getvalue()