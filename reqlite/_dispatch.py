from __future__ import annotations

import logging
import re
import typing

from ._encoding import FormData, encode_form
from ._exceptions import InvalidFormData, InvalidHeader, InvalidMethod, RequestsError
from ._models import PreparedRequest
from ._urlparse import validate_url
from ._useragent import PlatformInfo, build_user_agent

if typing.TYPE_CHECKING:
    from ._context import RequestContext
    from ._transports import BaseTransport

__all__ = ["dispatch", "prepare_request", "send_with_body", "validate_headers"]

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT")

# Some servers reject a body-less POST/PUT whose length is left unset.
EMPTY_BODY_HEADER = "Content-Length: 0"

# RFC 7230 field-name token.
HEADER_NAME_REGEX = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def _normalize_method(method: typing.Any) -> str:
    if not isinstance(method, str) or method.upper() not in METHODS:
        raise InvalidMethod(
            f"Method must be one of {', '.join(METHODS)}, got {method!r}"
        )
    return method.upper()


def validate_headers(headers: typing.Iterable[str]) -> list[str]:
    """
    Check raw ``Name: Value`` header lines and return them as a list.
    """
    if isinstance(headers, (str, bytes)):
        raise InvalidHeader("Headers must be a sequence of 'Name: Value' strings")

    lines: list[str] = []
    for line in headers:
        if not isinstance(line, str):
            raise InvalidHeader(f"Header must be a string, got {type(line).__name__}")
        name, sep, _ = line.partition(":")
        if not sep or not name.strip():
            raise InvalidHeader(
                f"Invalid header format: {line!r}. Expected 'Name: Value'."
            )
        if "\r" in line or "\n" in line:
            raise InvalidHeader(f"Header may not contain line breaks: {line!r}")
        if not line.isascii():
            raise InvalidHeader(f"Header must be ASCII: {line!r}")
        if not HEADER_NAME_REGEX.match(name.strip()):
            raise InvalidHeader(f"Invalid header name: {name.strip()!r}")
        lines.append(line)
    return lines


def prepare_request(
    context: RequestContext,
    method: str,
    data: FormData | None = None,
    headers: typing.Iterable[str] | None = None,
    *,
    platform_info: PlatformInfo | None = None,
) -> PreparedRequest:
    """
    Validate a call and build the request the transport will perform.

    For POST and PUT, a call without form data gets a ``Content-Length: 0``
    header, and caller headers are appended after it in their given order.
    A call with form data sends the encoded data as the body instead.
    GET requests only carry the caller's headers.
    """
    url = validate_url(context.url)
    method = _normalize_method(method)
    config = context.config
    extra_headers = None if headers is None else validate_headers(headers)

    if method == "GET":
        if data is not None:
            raise InvalidFormData("GET requests cannot carry form data")
        user_agent = None
        if config.user_agent_on_get:
            user_agent = build_user_agent(config.product, config.version, platform_info)
        return PreparedRequest(
            url, "GET", headers=extra_headers or (), user_agent=user_agent
        )

    body = None
    header_lines: list[str] = []
    if data is not None:
        encoded = encode_form(data, escape_separators=config.escape_separators)
        body = encoded.encode("ascii")
    else:
        header_lines.append(EMPTY_BODY_HEADER)
    if extra_headers is not None:
        header_lines.extend(extra_headers)

    return PreparedRequest(
        url,
        "POST",
        # A dedicated PUT would not accept an arbitrary body.
        method_override="PUT" if method == "PUT" else None,
        headers=header_lines,
        body=body,
        user_agent=build_user_agent(config.product, config.version, platform_info),
    )


def dispatch(
    transport: BaseTransport,
    context: RequestContext,
    method: str,
    data: FormData | None = None,
    headers: typing.Iterable[str] | None = None,
    *,
    platform_info: PlatformInfo | None = None,
) -> RequestContext:
    """
    Perform one exchange and record its outcome on ``context``.

    Blocks until the transport has delivered the whole body. Validation
    errors are raised before the transport is touched. If the transport or
    the response buffer fails, the partial body is discarded and the error
    propagates; ``context.status_code`` stays ``0``.
    """
    try:
        request = prepare_request(
            context, method, data, headers, platform_info=platform_info
        )
    except RequestsError as exc:
        exc.context = context
        raise

    accumulator = context._begin()
    try:
        logger.debug("Sending %r", request)
        try:
            status_code = transport.perform(request, accumulator.feed)
        except Exception as exc:
            accumulator.reset()
            if isinstance(exc, RequestsError):
                exc.context = context
            logger.debug("%s %s failed: %s", request.effective_method, request.url, exc)
            raise
        context.status_code = status_code
        logger.debug(
            "%s %s completed with %d (%d bytes in %d chunks)",
            request.effective_method,
            request.url,
            status_code,
            accumulator.size,
            accumulator.chunk_count,
        )
    finally:
        context._finish()
    return context


def send_with_body(
    transport: BaseTransport,
    context: RequestContext,
    data: FormData | None = None,
    headers: typing.Iterable[str] | None = None,
    put_flag: int = 0,
    *,
    platform_info: PlatformInfo | None = None,
) -> RequestContext:
    """
    POST when ``put_flag`` is 0, PUT when it is 1.
    """
    if put_flag not in (0, 1):
        exc = InvalidMethod(f"Invalid PUT request flag {put_flag!r}, expected 0 or 1")
        exc.context = context
        raise exc
    method = "PUT" if put_flag else "POST"
    return dispatch(
        transport, context, method, data, headers, platform_info=platform_info
    )
