# openapi_suite/suite.py
"""
Lifecycle of the OpenAPI/CDI integration suite.

    with OpenApiSuite() as suite:
        check_contact_details(suite.deployment_base_url)
        check_constructor_param_documented(fetch_openapi_document(suite.openapi_url))

setup():    resolve URLs -> open management connection -> enable the OpenAPI
            subsystem if missing -> deploy the router archive
teardown(): undeploy -> disable the OpenAPI subsystem -> close the connection
            (always, even when disabling fails)

Setup failures propagate (the suite cannot run) after teardown has restored
the server as far as possible. Teardown failures propagate after the
connection has been released. Nothing is retried.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from openapi_suite.core.settings import Settings, get_settings
from openapi_suite.deployment import deployer
from openapi_suite.errors import SuiteError
from openapi_suite.management import openapi_subsystem
from openapi_suite.management.client import ManagementClient
from openapi_suite.urls import compose_default_deployment_base_url, compose_default_openapi_url

logger = logging.getLogger(__name__)


class OpenApiSuite:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[Callable[[Settings], ManagementClient]] = None,
        deploy: bool = True,
    ):
        self.settings = settings or get_settings()
        self.client_factory = client_factory or ManagementClient.online_standalone
        self.deploy = deploy
        self.client: Optional[ManagementClient] = None
        self.deployed = False
        self.openapi_url = ""
        self.deployment_base_url = ""

    @property
    def deployment_name(self) -> str:
        return self.settings.deployment_name

    def setup(self) -> "OpenApiSuite":
        s = self.settings
        self.openapi_url = compose_default_openapi_url(s)
        self.deployment_base_url = compose_default_deployment_base_url(self.deployment_name, s)
        # read the archive before touching the server so bad inputs fail fast
        content = deployer.archive_bytes(s) if self.deploy else b""

        self.client = self.client_factory(s)
        try:
            if not openapi_subsystem.openapi_subsystem_exists(self.client):
                openapi_subsystem.enable_openapi(self.client)
            if self.deploy:
                deployer.deploy(self.client, f"{self.deployment_name}.war", content)
                self.deployed = True
        except BaseException:
            # a half-configured server is restored the same way as after a run
            try:
                self.teardown()
            except SuiteError:
                logger.exception("teardown after failed setup also failed")
            raise
        logger.info(
            "suite ready",
            extra={"extra": {"openapi_url": self.openapi_url, "base_url": self.deployment_base_url}},
        )
        return self

    def teardown(self) -> None:
        if self.client is None:
            return
        client = self.client
        try:
            try:
                if self.deployed:
                    deployer.undeploy(client, f"{self.deployment_name}.war")
                    self.deployed = False
            finally:
                openapi_subsystem.disable_openapi(client)
        finally:
            client.close()
            self.client = None

    def __enter__(self) -> "OpenApiSuite":
        return self.setup()

    def __exit__(self, *exc) -> None:
        self.teardown()
