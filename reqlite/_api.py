from __future__ import annotations

import logging
import typing

from ._config import ClientConfig
from ._context import RequestContext
from ._dispatch import dispatch, send_with_body
from ._encoding import FormData
from ._exceptions import ContextInUse
from ._transports import BaseTransport, HTTPXTransport

__all__ = [
    "close",
    "get",
    "init",
    "post",
    "post_with_headers",
    "put",
    "put_with_headers",
    "request",
]

logger = logging.getLogger(__name__)

HeaderLines = typing.Iterable[str]


def init(
    url: str,
    *,
    config: ClientConfig | None = None,
    transport: BaseTransport | None = None,
) -> tuple[RequestContext, BaseTransport]:
    """
    Create a context for ``url`` and the transport that will serve it.

    Both must be released with :func:`close` once the response has been read.

    **Parameters:**

    * **url** - The URL the context's requests are sent to.
    * **config** - *(optional)* A ``ClientConfig``.
    * **transport** - *(optional)* A transport to use instead of a new
    ``HTTPXTransport``.
    """
    config = ClientConfig() if config is None else config
    context = RequestContext(url, config=config)
    if transport is None:
        transport = HTTPXTransport(config)
    logger.debug("Initialized %r with %r", context, transport)
    return context, transport


def close(transport: BaseTransport, context: RequestContext) -> None:
    """
    Release the transport and the context's response buffer.

    Raises ``ContextInUse`` without touching either while a request is in
    flight on ``context``.
    """
    if context.in_flight:
        raise ContextInUse(
            "Cannot close while a request is in flight.", context=context
        )
    try:
        context.close()
    finally:
        transport.close()


def get(
    transport: BaseTransport,
    context: RequestContext,
    headers: HeaderLines | None = None,
) -> RequestContext:
    """
    Sends a `GET` request.

    **Parameters**: See `reqlite.request`.
    """
    return dispatch(transport, context, "GET", headers=headers)


def post(
    transport: BaseTransport,
    context: RequestContext,
    data: FormData | None = None,
) -> RequestContext:
    """
    Sends a `POST` request with form-encoded ``data``.

    **Parameters**: See `reqlite.request`.
    """
    return send_with_body(transport, context, data, None, 0)


def put(
    transport: BaseTransport,
    context: RequestContext,
    data: FormData | None = None,
) -> RequestContext:
    """
    Sends a `PUT` request with form-encoded ``data``.

    **Parameters**: See `reqlite.request`.
    """
    return send_with_body(transport, context, data, None, 1)


def post_with_headers(
    transport: BaseTransport,
    context: RequestContext,
    data: FormData | None,
    headers: HeaderLines | None,
) -> RequestContext:
    return send_with_body(transport, context, data, headers, 0)


def put_with_headers(
    transport: BaseTransport,
    context: RequestContext,
    data: FormData | None,
    headers: HeaderLines | None,
) -> RequestContext:
    return send_with_body(transport, context, data, headers, 1)


def request(
    method: str,
    url: str,
    *,
    data: FormData | None = None,
    headers: HeaderLines | None = None,
    config: ClientConfig | None = None,
    transport: BaseTransport | None = None,
) -> RequestContext:
    """
    Sends a single request and returns its context.

    A transport created here is closed before returning; one passed in is
    left open. The context keeps the response body until it is closed, and
    is closed if the request fails.

    **Parameters:**

    * **method** - `GET`, `POST` or `PUT`.
    * **url** - URL for the request.
    * **data** - *(optional)* Form data to send in the body of a `POST` or
    `PUT`, as a mapping, a sequence of `(key, value)` pairs, or a flat
    sequence alternating keys and values.
    * **headers** - *(optional)* Raw `Name: Value` header lines.
    * **config** - *(optional)* A ``ClientConfig``.
    * **transport** - *(optional)* A transport to send the request with.

    **Returns:** `RequestContext`

    Usage:

    ```
    >>> import reqlite
    >>> ctx = reqlite.request('GET', 'https://www.example.org/')
    >>> ctx.status_code
    200
    ```
    """
    owns_transport = transport is None
    context, transport = init(url, config=config, transport=transport)
    try:
        dispatch(transport, context, method, data, headers)
    except BaseException:
        context.close()
        raise
    finally:
        if owns_transport:
            transport.close()
    return context
