# openapi_suite/errors.py
from __future__ import annotations


class SuiteError(RuntimeError):
    """Base class for setup/teardown failures of the suite."""


class ManagementClientError(SuiteError):
    """The management endpoint was unreachable or an operation did not succeed."""

    def __init__(self, message: str, operation: dict | None = None, failure: object = None):
        super().__init__(message)
        self.operation = operation
        self.failure = failure


class ConfigurationError(SuiteError):
    """The server (or the deployment inputs) could not be brought into the required state."""


class VerificationError(AssertionError):
    """A response or the OpenAPI document did not have the expected shape."""
