"""
test_settings.py — Settings parsing and URL composition.

Run:
  pytest -q tests/test_settings.py
"""
import pytest
from pydantic import ValidationError

from openapi_suite.core.settings import (
    CONTACT_RESOURCE_CLASS,
    ROUTER_APPLICATION_CLASS,
    Protocol,
    Settings,
    get_settings,
)
from openapi_suite.urls import (
    compose_default_deployment_base_url,
    compose_default_openapi_url,
    compose_management_url,
)


def test_defaults(settings):
    assert settings.server_host == "127.0.0.1"
    assert settings.http_port == 8080
    assert settings.management_port == 9990
    assert settings.protocol is Protocol.http
    assert settings.deployment_name == "localServicesRouterDeployment"
    assert settings.deployment_classes == [ROUTER_APPLICATION_CLASS, CONTACT_RESOURCE_CLASS]
    assert not settings.has_credentials


def test_env_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("MPOA_SERVER_HOST", "eap.example.com")
    monkeypatch.setenv("MPOA_HTTP_PORT", "8180")
    monkeypatch.setenv("MPOA_PROTOCOL", "https")
    monkeypatch.setenv("MPOA_DEPLOYMENT_CLASSES", "a.B, c.D ,")
    monkeypatch.setenv("MPOA_MANAGEMENT_USER", "admin")
    s = get_settings()
    assert s.server_host == "eap.example.com"
    assert s.http_port == 8180
    assert s.protocol is Protocol.https
    assert s.deployment_classes == ["a.B", "c.D"]
    assert s.has_credentials
    assert get_settings() is s


@pytest.mark.parametrize("field", ["http_port", "management_port"])
def test_port_range(clean_env, field):
    with pytest.raises(ValidationError):
        Settings(**{field: 70000})


def test_timeouts_positive(clean_env):
    with pytest.raises(ValidationError):
        Settings(http_timeout_seconds=0)


def test_urls(clean_env):
    s = Settings(server_host="10.0.0.5", http_port=8180, management_port=10090, openapi_path="openapi")
    assert compose_default_openapi_url(s) == "http://10.0.0.5:8180/openapi"
    assert (
        compose_default_deployment_base_url("/localServicesRouterDeployment/contact/1/details", s)
        == "http://10.0.0.5:8180/localServicesRouterDeployment/contact/1/details"
    )
    assert compose_management_url(s) == "http://10.0.0.5:10090/management"
    assert compose_management_url(s, upload=True) == "http://10.0.0.5:10090/management-upload"


def test_urls_use_cached_settings(clean_env, monkeypatch):
    monkeypatch.setenv("MPOA_SERVER_HOST", "node1")
    assert compose_default_openapi_url() == "http://node1:8080/openapi"
