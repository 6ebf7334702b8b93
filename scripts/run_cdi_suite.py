#!/usr/bin/env python3
"""
Run the OpenAPI/CDI checks against a live server without pytest.

Steps:
  - enable the MicroProfile OpenAPI subsystem (if missing) over the management API
  - deploy the router archive (unless --skip-deploy)
  - check GET /contact/{id}/details and the generated OpenAPI document
  - undeploy, disable the subsystem, close the management connection

Connection defaults come from MPOA_* environment variables / .env
(see openapi_suite/core/settings.py); flags override them.

Examples:
  python scripts/run_cdi_suite.py
  python scripts/run_cdi_suite.py --host 10.0.0.5 --management-port 10090
  python scripts/run_cdi_suite.py --skip-deploy --id 42 --log-level DEBUG
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict

import httpx

from openapi_suite.checks.endpoint import check_contact_details
from openapi_suite.checks.openapi_document import (
    check_constructor_param_documented,
    fetch_openapi_document,
)
from openapi_suite.core.settings import Settings
from openapi_suite.errors import SuiteError, VerificationError
from openapi_suite.suite import OpenApiSuite
from shared.http import close_client, get_client
from shared.logging import setup_json_logging

logger = logging.getLogger("run_cdi_suite")


def pretty(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2)


def run(settings: Settings, contact_id: str, deploy: bool) -> Dict[str, Any]:
    results: Dict[str, Any] = {}
    client = get_client(settings.http_timeout_seconds)
    try:
        with OpenApiSuite(settings, deploy=deploy) as suite:
            results["openapi_url"] = suite.openapi_url
            results["deployment_base_url"] = suite.deployment_base_url
            for name, check in (
                ("endpoint", lambda: check_contact_details(suite.deployment_base_url, contact_id, client)),
                (
                    "openapi_document",
                    lambda: check_constructor_param_documented(fetch_openapi_document(suite.openapi_url, client)),
                ),
            ):
                try:
                    check()
                    results[name] = {"ok": True}
                except (VerificationError, httpx.HTTPError) as e:
                    logger.error("check failed", extra={"extra": {"check": name}})
                    results[name] = {"ok": False, "error": str(e)}
    finally:
        close_client()
    results["ok"] = all(r["ok"] for k, r in results.items() if isinstance(r, dict))
    return results


def main() -> int:
    ap = argparse.ArgumentParser(description="MicroProfile OpenAPI / CDI integration checks")
    ap.add_argument("--host", help="Server host (MPOA_SERVER_HOST)")
    ap.add_argument("--http-port", type=int, help="HTTP listener port (MPOA_HTTP_PORT)")
    ap.add_argument("--management-port", type=int, help="Management port (MPOA_MANAGEMENT_PORT)")
    ap.add_argument("--id", default="1", help="Contact id used for /contact/{id}/details")
    ap.add_argument("--skip-deploy", action="store_true", help="Assume the archive is already deployed")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR (MPOA_LOG_LEVEL)")
    args = ap.parse_args()

    overrides: Dict[str, Any] = {}
    if args.host:
        overrides["server_host"] = args.host
    if args.http_port:
        overrides["http_port"] = args.http_port
    if args.management_port:
        overrides["management_port"] = args.management_port
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    settings = Settings(**overrides)
    setup_json_logging(settings.log_level.value)

    try:
        results = run(settings, args.id, deploy=not args.skip_deploy)
    except SuiteError as e:
        print(pretty({"ok": False, "error": str(e)}), file=sys.stderr)
        return 1
    print(pretty(results))
    return 0 if results["ok"] else 1


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
