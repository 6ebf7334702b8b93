"""
test_integration_with_cdi.py — MicroProfile OpenAPI and CDI integration, live server.

What this does:
  - Enables the MicroProfile OpenAPI subsystem (if missing) and deploys the
    router archive once for the module, then undeploys/disables afterwards.
  - Checks that a "legacy" CDI bean turned into a request scoped JAX-RS resource
    with a JAX-RS annotated constructor answers GET /contact/{id}/details.
  - Checks that the generated OpenAPI document describes the constructor's
    @PathParam("id") argument.

Prereqs:
  - A running standalone server reachable with the MPOA_* settings.
  - MPOA_DEPLOYMENT_CLASSES_DIR (compiled router classes) or MPOA_DEPLOYMENT_ARCHIVE.

Common examples:
  MPOA_RUN_INTEGRATION=true MPOA_DEPLOYMENT_CLASSES_DIR=target/test-classes \\
    pytest -q -m integration
"""
import pytest

from openapi_suite.checks.endpoint import check_contact_details
from openapi_suite.checks.openapi_document import (
    check_constructor_param_documented,
    fetch_openapi_document,
)
from openapi_suite.core.settings import get_settings
from openapi_suite.suite import OpenApiSuite
from shared.http import close_client, get_client

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not get_settings().run_integration, reason="MPOA_RUN_INTEGRATION is not set"),
]


@pytest.fixture(scope="module")
def suite():
    with OpenApiSuite(get_settings()) as s:
        yield s


@pytest.fixture(scope="module")
def client():
    yield get_client(get_settings().http_timeout_seconds)
    close_client()


def test_app_endpoint(suite, client):
    assert check_contact_details(suite.deployment_base_url, "1", client) == "ID: 1"


def test_openapi_document_for_documented_constructor_param(suite, client):
    document = fetch_openapi_document(suite.openapi_url, client)
    param = check_constructor_param_documented(document)
    assert (param["name"], param["in"], param["required"]) == ("id", "path", True)
