"""
Exceptions raised by the StatusPage node.

Parameter errors abort an invocation before any request is sent. Request
errors carry the upstream status code and body unmodified.
"""

from __future__ import annotations

from typing import Any


class StatusPageError(Exception):
    """Base class for every StatusPage node error."""


class ParameterError(StatusPageError):
    """A node parameter could not be resolved."""

    def __init__(self, parameter: str, message: str):
        super().__init__(message)
        self.parameter = parameter


class MissingParameter(ParameterError):
    def __init__(self, parameter: str):
        super().__init__(parameter, f"Missing required parameter: {parameter}")


class InvalidParameter(ParameterError):
    def __init__(self, parameter: str, reason: str):
        super().__init__(parameter, f"Invalid value for parameter '{parameter}': {reason}")


class UnknownOperation(ParameterError):
    def __init__(self, resource: str, operation: str):
        super().__init__(
            "operation",
            f"Operation '{operation}' is not supported for resource '{resource}'",
        )
        self.resource = resource
        self.operation = operation


class StatusPageRequestError(StatusPageError):
    """The StatusPage API answered with a non-2xx status, or the transport failed.

    ``status_code`` is None for transport failures. ``url`` never contains the
    API key.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        method: str | None = None,
        url: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url
