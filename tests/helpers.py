"""
helpers.py — Fakes shared by the unit tests.

  - FakeManagementSession: stands in for requests.Session on the management
    endpoint; answers operations from a handler and records every call.
  - FakeServer: a handler modelling the management tree (extensions,
    subsystems, deployments) well enough for the lifecycle tests.
"""
from __future__ import annotations

import json as jsonlib
from typing import Any, Callable, Dict, List, Optional


class FakeResponse:
    def __init__(self, body: Any, status_code: int = 200):
        self._body = body
        self.status_code = status_code

    def json(self) -> Any:
        if isinstance(self._body, str):
            return jsonlib.loads(self._body)
        return self._body


def success(result: Any = None) -> Dict[str, Any]:
    return {"outcome": "success", "result": result}


def failed(description: str) -> Dict[str, Any]:
    return {"outcome": "failed", "failure-description": description}


class FakeManagementSession:
    """Records posted operations; `handler(op)` returns the JSON body to answer with."""

    def __init__(self, handler: Callable[[Dict[str, Any]], Any]):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.uploads: List[Dict[str, Any]] = []
        self.closed = False

    def post(self, url, json=None, files=None, timeout=None):
        if files is not None:
            op = jsonlib.loads(files["operation"][1])
            self.uploads.append({"url": url, "op": op, "file": files["file"]})
        else:
            op = json
        self.calls.append(op)
        body = self.handler(op)
        if isinstance(body, FakeResponse):
            return body
        return FakeResponse(body, 200 if body.get("outcome") == "success" else 500)

    def close(self):
        self.closed = True

    def operations(self) -> List[str]:
        return [c["operation"] for c in self.calls]


class FakeServer:
    """Tiny model of the management tree: extensions, subsystems, deployments."""

    def __init__(self, extensions=(), subsystems=(), fail_on: Optional[str] = None):
        self.extensions = set(extensions)
        self.subsystems = set(subsystems)
        self.deployments: set[str] = set()
        self.fail_on = fail_on

    def _children(self, kind: str) -> set:
        return {"extension": self.extensions, "subsystem": self.subsystems, "deployment": self.deployments}[kind]

    def __call__(self, op: Dict[str, Any]) -> Dict[str, Any]:
        name = op["operation"]
        if name == self.fail_on:
            return failed(f"WFLYCTL0000: {name} refused")
        address = op.get("address", [])
        if name == "read-attribute" and op.get("name") == "server-state":
            return success("running")
        if name == "read-children-names":
            return success(sorted(self._children(op["child-type"])))
        if name == "reload":
            return success()
        if name in ("add", "remove") and address:
            (kind, value), = address[0].items()
            children = self._children(kind)
            if name == "add":
                children.add(value)
            else:
                children.discard(value)
            return success()
        if name == "composite":
            for step in op["steps"]:
                if step["operation"] == "remove":
                    (_, value), = step["address"][0].items()
                    self.deployments.discard(value)
            return success()
        return failed(f"unexpected operation {name}")
