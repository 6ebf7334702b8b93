# openapi_suite/checks/openapi_document.py
"""
Shape check for the server-generated OpenAPI document.

Verifies that the endpoint backed by a JAX-RS resource whose constructor
accepts a `@PathParam` argument is documented:

    paths:
      /contact/{id}/details:
        get:
          responses:
            200:
              content:
                text/plain: ...
        parameters:
        - name: id
          in: path
          required: true

Typical usage:

    doc = fetch_openapi_document(compose_default_openapi_url())
    check_constructor_param_documented(doc)
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx
import yaml

from openapi_suite.core.settings import get_settings
from openapi_suite.errors import VerificationError
from shared.http import get, get_client

CONTACT_DETAILS_PATH = "/contact/{id}/details"
_P = f'"{CONTACT_DETAILS_PATH}"'


def fetch_openapi_document(url: str, client: Optional[httpx.Client] = None) -> dict:
    if client is None:
        client = get_client(get_settings().http_timeout_seconds)
    r = get(url, client)
    if r.status_code != 200:
        raise VerificationError(f"GET {url} returned HTTP {r.status_code}, expected 200")
    try:
        document = yaml.safe_load(r.text)
    except yaml.YAMLError as e:
        raise VerificationError(f"OpenAPI document at {url} is not valid YAML: {e}") from e
    if not isinstance(document, dict):
        raise VerificationError(f"OpenAPI document at {url} is not a mapping")
    return document


def _ok_response(responses: Mapping[Any, Any]) -> Any:
    # unquoted `200:` loads as an int, quoted `'200':` as a str
    if 200 in responses:
        return responses[200]
    return responses.get("200")


def _mapping(value: Any, message: str) -> Mapping[Any, Any]:
    if not isinstance(value, Mapping):
        raise VerificationError(message)
    return value


def check_constructor_param_documented(document: Mapping[str, Any]) -> dict:
    """Raise VerificationError naming the first missing or mismatched field; return the path param."""
    paths = _mapping(document.get("paths") or {}, '"paths" property is not a mapping')
    if not paths:
        raise VerificationError('"paths" property is empty')

    path_item = _mapping(paths.get(CONTACT_DETAILS_PATH) or {}, f"{_P} property is not a mapping")
    if not path_item:
        raise VerificationError(f"{_P} property is empty")

    get_op = _mapping(path_item.get("get") or {}, f'{_P} "get" property is not a mapping')
    if not get_op:
        raise VerificationError(f'{_P} "get" property is empty')
    if get_op.get("responses") is None:
        raise VerificationError(f'{_P} "responses" for GET verb is null')

    responses = _mapping(get_op["responses"], f'{_P} "responses" for GET verb is not a mapping')
    ok = _ok_response(responses)
    if ok is None:
        raise VerificationError(f'{_P} "response" for GET verb and HTTP status 200 is null')

    ok = _mapping(ok, f'{_P} "response" for GET verb and HTTP status 200 is not a mapping')
    if ok.get("content") is None:
        raise VerificationError(f'{_P} "response" for GET verb and HTTP status 200 has null "content" property')

    content = _mapping(ok["content"], f'{_P} "content" for GET verb and HTTP status 200 is not a mapping')
    if content.get("text/plain") is None:
        raise VerificationError(
            f'{_P} "response" for GET verb and HTTP status 200 has "content" but null "text/plain" property'
        )

    parameters = path_item.get("parameters") or []
    if not isinstance(parameters, list):
        raise VerificationError(f'{_P} "parameters" property is not a list, found {type(parameters).__name__}')
    if len(parameters) != 1:
        raise VerificationError(
            f"{_P} operation for GET verb should have exactly 1 parameters, found {len(parameters)}"
        )

    param = _mapping(parameters[0] or {}, f"Parameter [0] for {_P} operation for GET verb is not a mapping")
    if not param:
        raise VerificationError(f"Parameter [0] for {_P} operation for GET verb is empty")

    expectations = (("name", "id"), ("in", "path"), ("required", True))
    for field, expected in expectations:
        actual = param.get(field)
        if actual != expected or type(actual) is not type(expected):
            shown = "true" if expected is True else expected
            raise VerificationError(
                f'"{field}" property of parameter [0] for {_P} operation (GET verb) '
                f'should be set to "{shown}", found {actual!r}'
            )
    return dict(param)
