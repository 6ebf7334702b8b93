# openapi_suite/management/openapi_subsystem.py
"""
Toggle the MicroProfile OpenAPI subsystem on a running server.

Typical usage:

    from openapi_suite.management.openapi_subsystem import (
        openapi_subsystem_exists, enable_openapi, disable_openapi,
    )

    if not openapi_subsystem_exists(client):
        enable_openapi(client)
    ...
    disable_openapi(client)

Both enable and disable end with a server reload so the change is active
before the call returns.
"""

from __future__ import annotations

import logging

from openapi_suite.errors import ConfigurationError, ManagementClientError
from openapi_suite.management.client import ManagementClient

logger = logging.getLogger(__name__)

OPENAPI_EXTENSION = "org.wildfly.extension.microprofile.openapi-smallrye"
OPENAPI_SUBSYSTEM = "microprofile-openapi-smallrye"

EXTENSION_ADDRESS = (("extension", OPENAPI_EXTENSION),)
SUBSYSTEM_ADDRESS = (("subsystem", OPENAPI_SUBSYSTEM),)


def openapi_extension_exists(client: ManagementClient) -> bool:
    return OPENAPI_EXTENSION in client.read_children_names("extension")


def openapi_subsystem_exists(client: ManagementClient) -> bool:
    return OPENAPI_SUBSYSTEM in client.read_children_names("subsystem")


def enable_openapi(client: ManagementClient) -> None:
    try:
        if not openapi_extension_exists(client):
            client.execute("add", EXTENSION_ADDRESS)
        if not openapi_subsystem_exists(client):
            client.execute("add", SUBSYSTEM_ADDRESS)
        client.reload()
    except ManagementClientError as e:
        raise ConfigurationError(f"cannot enable {OPENAPI_SUBSYSTEM}: {e}") from e
    logger.info("openapi subsystem enabled", extra={"extra": {"subsystem": OPENAPI_SUBSYSTEM}})


def disable_openapi(client: ManagementClient) -> None:
    try:
        if openapi_subsystem_exists(client):
            client.execute("remove", SUBSYSTEM_ADDRESS)
        if openapi_extension_exists(client):
            client.execute("remove", EXTENSION_ADDRESS)
        client.reload()
    except ManagementClientError as e:
        raise ConfigurationError(f"cannot disable {OPENAPI_SUBSYSTEM}: {e}") from e
    logger.info("openapi subsystem disabled", extra={"extra": {"subsystem": OPENAPI_SUBSYSTEM}})
