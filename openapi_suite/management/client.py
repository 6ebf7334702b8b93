#!/usr/bin/env python3
# openapi_suite/management/client.py
"""
Online management client for a standalone application server.

Talks to the server's HTTP management endpoint (JSON-encoded operations,
digest auth over the management realm).

Usage:
------
    from openapi_suite.management.client import ManagementClient

    with ManagementClient.online_standalone() as client:
        names = client.read_children_names("subsystem")
        client.execute("read-attribute", name="server-state")

Notes:
------
- One POST per operation, no retries.
- A response whose "outcome" is not "success" raises ManagementClientError
  carrying the server's "failure-description".
- reload() blocks until the server has left and re-entered "running"
  (a plain "running" is accepted after RELOAD_START_GRACE_SECONDS).
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import certifi
import requests
from requests.auth import HTTPDigestAuth

from openapi_suite.core.settings import Settings, get_settings
from openapi_suite.errors import ManagementClientError
from openapi_suite.urls import compose_management_url

logger = logging.getLogger(__name__)

Address = Sequence[Tuple[str, str]]

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "mp-openapi-cdi-suite/0.1",
}

RELOAD_POLL_SECONDS = 0.5
RELOAD_START_GRACE_SECONDS = 5.0


def make_session(settings: Settings) -> requests.Session:
    """Return a requests.Session configured for the management endpoint."""
    s = requests.Session()
    s.headers.update(DEFAULT_HEADERS)
    if settings.has_credentials:
        s.auth = HTTPDigestAuth(settings.management_user, settings.management_password or "")
    s.verify = certifi.where()
    return s


def dmr_address(address: Iterable[Tuple[str, str]] = ()) -> list[dict[str, str]]:
    return [{key: value} for key, value in address]


def build_operation(operation: str, address: Address = (), /, **params: Any) -> Dict[str, Any]:
    op: Dict[str, Any] = {"operation": operation, "address": dmr_address(address)}
    # management attribute names are dashed: include_runtime -> include-runtime
    op.update({k.replace("_", "-"): v for k, v in params.items()})
    return op


class ManagementClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or get_settings()
        self.session = session or make_session(self.settings)
        self.url = compose_management_url(self.settings)
        self.upload_url = compose_management_url(self.settings, upload=True)
        self.timeout = self.settings.http_timeout_seconds
        self.closed = False

    @classmethod
    def online_standalone(cls, settings: Optional[Settings] = None) -> "ManagementClient":
        """Open a client and verify the server answers before handing it out."""
        client = cls(settings)
        try:
            state = client.read_attribute("server-state")
        except ManagementClientError:
            client.close()
            raise
        logger.info("management connection open", extra={"extra": {"url": client.url, "server_state": state}})
        return client

    # ---------- transport ----------

    def _check_open(self) -> None:
        if self.closed:
            raise ManagementClientError("management client is closed")

    def _outcome(self, response: requests.Response, op: Dict[str, Any]) -> Any:
        try:
            body = response.json()
        except ValueError as e:
            raise ManagementClientError(
                f"management endpoint returned HTTP {response.status_code} with a non-JSON body",
                operation=op,
            ) from e
        if not isinstance(body, dict):
            raise ManagementClientError(
                f"management endpoint returned HTTP {response.status_code} with a JSON {type(body).__name__}, expected an object",
                operation=op,
            )
        if body.get("outcome") != "success":
            failure = body.get("failure-description", f"HTTP {response.status_code}")
            raise ManagementClientError(
                f"operation '{op.get('operation')}' failed: {failure}",
                operation=op,
                failure=failure,
            )
        return body.get("result")

    def execute_operation(self, op: Dict[str, Any]) -> Any:
        self._check_open()
        logger.debug("management operation", extra={"extra": {"op": op}})
        try:
            r = self.session.post(self.url, json=op, timeout=self.timeout)
        except requests.RequestException as e:
            raise ManagementClientError(f"cannot reach {self.url}: {e}", operation=op) from e
        return self._outcome(r, op)

    def execute(self, operation: str, address: Address = (), **params: Any) -> Any:
        return self.execute_operation(build_operation(operation, address, **params))

    def upload(self, op: Dict[str, Any], filename: str, content: bytes) -> Any:
        """Send `op` together with one attached stream (input-stream-index 0)."""
        self._check_open()
        files = {
            "file": (filename, content, "application/octet-stream"),
            "operation": (None, json.dumps(op), "application/json"),
        }
        try:
            r = self.session.post(self.upload_url, files=files, timeout=self.timeout)
        except requests.RequestException as e:
            raise ManagementClientError(f"cannot reach {self.upload_url}: {e}", operation=op) from e
        return self._outcome(r, op)

    # ---------- convenience ----------

    def read_attribute(self, name: str, address: Address = ()) -> Any:
        return self.execute("read-attribute", address, name=name)

    def read_children_names(self, child_type: str, address: Address = ()) -> list[str]:
        return list(self.execute("read-children-names", address, child_type=child_type) or [])

    def reload(self, timeout: Optional[float] = None) -> None:
        timeout = timeout if timeout is not None else self.settings.reload_timeout_seconds
        self.execute("reload")
        logger.info("server reload issued")
        started = time.monotonic()
        deadline = started + timeout
        # "running" only counts once the restart was observed (or the grace period passed)
        restart_seen = False
        while time.monotonic() < deadline:
            time.sleep(RELOAD_POLL_SECONDS)
            try:
                state = self.read_attribute("server-state")
            except ManagementClientError:
                # endpoint is down while the server restarts its services
                restart_seen = True
                continue
            if state != "running":
                restart_seen = True
            elif restart_seen or time.monotonic() - started >= RELOAD_START_GRACE_SECONDS:
                logger.info("server running after reload")
                return
        raise ManagementClientError(f"server did not report 'running' within {timeout:.0f}s after reload")

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.session.close()
            logger.info("management connection closed")

    def __enter__(self) -> "ManagementClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
