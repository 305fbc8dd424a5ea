"""
Transport exception hierarchy.
"""


class TransportError(Exception):
    """Base class for failures talking to the hosted agent."""


class ApiCallError(TransportError):
    """The HTTP request could not be completed (connection, timeout, TLS...)."""


class TransportConfigError(TransportError):
    """The transport is missing configuration required to make a call."""


__all__ = ["TransportError", "ApiCallError", "TransportConfigError"]
