# openapi_suite/checks/endpoint.py
"""
Behavior check for the legacy Contact resource of the router deployment.

The resource is a CDI bean turned into a request scoped JAX-RS resource whose
constructor takes the `@PathParam("id")`; GET /contact/{id}/details answers
with "ID: {id}".
"""
from __future__ import annotations

from typing import Optional

import httpx

from openapi_suite.core.settings import get_settings
from openapi_suite.errors import VerificationError
from shared.http import get, get_client

# RESTEasy adds the charset unless resteasy.add.charset=false
EXPECTED_CONTENT_TYPE = "text/plain;charset=UTF-8"


def contact_details_path(contact_id: str) -> str:
    return f"/contact/{contact_id}/details"


def check_contact_details(
    base_url: str,
    contact_id: str = "1",
    client: Optional[httpx.Client] = None,
) -> str:
    url = base_url.rstrip("/") + contact_details_path(contact_id)
    if client is None:
        client = get_client(get_settings().http_timeout_seconds)
    r = get(url, client)

    if r.status_code != 200:
        raise VerificationError(f"GET {url} returned HTTP {r.status_code}, expected 200")

    content_type = r.headers.get("content-type", "")
    if content_type.lower() != EXPECTED_CONTENT_TYPE.lower():
        raise VerificationError(
            f"GET {url} returned content type {content_type!r}, expected {EXPECTED_CONTENT_TYPE!r} (ignoring case)"
        )

    expected = f"ID: {contact_id}"
    if r.text != expected:
        raise VerificationError(f"GET {url} returned body {r.text!r}, expected {expected!r}")
    return r.text
