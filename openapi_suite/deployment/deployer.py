# openapi_suite/deployment/deployer.py
from __future__ import annotations

import logging
from typing import Optional

from openapi_suite.core.settings import Settings, get_settings
from openapi_suite.deployment.archive import router_deployment
from openapi_suite.errors import ConfigurationError
from openapi_suite.management.client import ManagementClient, build_operation

logger = logging.getLogger(__name__)


def archive_bytes(settings: Optional[Settings] = None) -> bytes:
    """Prebuilt archive when configured, otherwise packaged from the classes dir."""
    s = settings or get_settings()
    if s.deployment_archive is not None:
        if not s.deployment_archive.is_file():
            raise ConfigurationError(f"deployment archive {s.deployment_archive} does not exist")
        return s.deployment_archive.read_bytes()
    if s.deployment_classes_dir is None:
        raise ConfigurationError(
            "no deployment input: set MPOA_DEPLOYMENT_ARCHIVE or MPOA_DEPLOYMENT_CLASSES_DIR"
        )
    return router_deployment(s).to_bytes(s.deployment_classes_dir)


def deploy(client: ManagementClient, name: str, content: bytes) -> None:
    op = build_operation(
        "add",
        (("deployment", name),),
        content=[{"input-stream-index": 0}],
        enabled=True,
    )
    client.upload(op, name, content)
    logger.info("deployed", extra={"extra": {"deployment": name, "bytes": len(content)}})


def undeploy(client: ManagementClient, name: str) -> None:
    address = (("deployment", name),)
    client.execute(
        "composite",
        steps=[build_operation("undeploy", address), build_operation("remove", address)],
    )
    logger.info("undeployed", extra={"extra": {"deployment": name}})
