# openapi_suite/urls.py
"""
URL composition for the target server.

    from openapi_suite.urls import compose_default_openapi_url

    compose_default_openapi_url()
    # -> "http://127.0.0.1:8080/openapi"
"""
from __future__ import annotations

from typing import Optional

from openapi_suite.core.settings import Settings, get_settings


def _origin(settings: Settings, port: int) -> str:
    return f"{settings.protocol.value}://{settings.server_host}:{port}"


def compose_default_openapi_url(settings: Optional[Settings] = None) -> str:
    s = settings or get_settings()
    return _origin(s, s.http_port) + s.openapi_path


def compose_default_deployment_base_url(path: str = "", settings: Optional[Settings] = None) -> str:
    """Public URL of `path` on the HTTP listener, e.g. "<deployment>/contact/1/details"."""
    s = settings or get_settings()
    return f"{_origin(s, s.http_port)}/{path.lstrip('/')}"


def compose_management_url(settings: Optional[Settings] = None, upload: bool = False) -> str:
    s = settings or get_settings()
    endpoint = "management-upload" if upload else "management"
    return f"{_origin(s, s.management_port)}/{endpoint}"
