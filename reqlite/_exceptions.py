"""
Exception hierarchy:

* RequestsError
  + ValidationError
    - InvalidURL
    - InvalidFormData
    - InvalidMethod
    - InvalidHeader
  + ResourceError
    - ResponseTooLarge
    - AccumulatorAllocationError
  + TransportError
    - ConnectError
    - ReadError
    - ProtocolError
  + ContextError
    - ContextInUse
    - ContextClosed
"""

from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    from ._context import RequestContext

__all__ = [
    "AccumulatorAllocationError",
    "ConnectError",
    "ContextClosed",
    "ContextError",
    "ContextInUse",
    "InvalidFormData",
    "InvalidHeader",
    "InvalidMethod",
    "InvalidURL",
    "ProtocolError",
    "ReadError",
    "RequestsError",
    "ResourceError",
    "ResponseTooLarge",
    "TransportError",
    "ValidationError",
]


class RequestsError(Exception):
    """
    Base class for every error raised by reqlite.
    """

    def __init__(
        self, message: str, *, context: RequestContext | None = None
    ) -> None:
        super().__init__(message)
        self._context = context

    @property
    def context(self) -> RequestContext:
        if self._context is None:
            raise RuntimeError("The .context property has not been set.")
        return self._context

    @context.setter
    def context(self, context: RequestContext) -> None:
        self._context = context


# Validation errors, raised before the transport is touched.


class ValidationError(RequestsError):
    """
    A call broke the dispatcher's contract.
    """


class InvalidURL(ValidationError):
    """
    The URL is empty or cannot be sent.
    """


class InvalidFormData(ValidationError):
    """
    Form data is not a list of key/value pairs.
    """


class InvalidMethod(ValidationError):
    """
    The method is not GET, POST or PUT.
    """


class InvalidHeader(ValidationError):
    """
    A header line is not of the form ``Name: Value``.
    """


# Resource errors, raised while the response body is being accumulated.


class ResourceError(RequestsError):
    """
    The response buffer could not grow. The request is aborted.
    """


class ResponseTooLarge(ResourceError):
    """
    The response body exceeded the configured ``max_response_size``.
    """


class AccumulatorAllocationError(ResourceError):
    """
    Memory ran out while growing the response buffer.
    """


# Transport errors, raised when the exchange could not complete.


class TransportError(RequestsError):
    """
    The transport failed before a status code was available.
    """


class ConnectError(TransportError):
    """
    Failed to establish a connection.
    """


class ReadError(TransportError):
    """
    Failed to send the request or receive the response.
    """


class ProtocolError(TransportError):
    """
    The peer violated the HTTP protocol.
    """


# Lifecycle errors.


class ContextError(RequestsError):
    """
    A RequestContext was used outside its lifecycle.
    """


class ContextInUse(ContextError):
    """
    The context already has a request in flight.
    """


class ContextClosed(ContextError):
    """
    The context has been closed.
    """
