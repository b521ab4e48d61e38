from __future__ import annotations

import logging
import typing

import httpx

from ._config import ClientConfig
from ._exceptions import ConnectError, ProtocolError, ReadError, TransportError
from ._models import PreparedRequest

if typing.TYPE_CHECKING:
    from types import TracebackType

__all__ = ["BaseTransport", "HTTPXTransport", "MockTransport"]

logger = logging.getLogger(__name__)

ChunkCallback = typing.Callable[[bytes], typing.Any]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

T = typing.TypeVar("T", bound="BaseTransport")


class BaseTransport:
    """
    The engine that performs an exchange on behalf of the dispatcher.

    ``perform`` must block until the exchange is over, hand every received
    body chunk to ``on_chunk`` in arrival order, and return the numeric
    status code. Failures to complete the exchange are raised as
    ``reqlite.TransportError``.
    """

    def perform(self, request: PreparedRequest, on_chunk: ChunkCallback) -> int:
        raise NotImplementedError(
            "The 'perform' method must be implemented."
        )  # pragma: no cover

    def close(self) -> None:
        pass

    def __enter__(self: T) -> T:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        self.close()


def _map_httpx_error(exc: httpx.RequestError) -> TransportError:
    message = str(exc) or type(exc).__name__
    if isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout)):
        return ConnectError(message)
    if isinstance(exc, httpx.ProtocolError):
        return ProtocolError(message)
    if isinstance(exc, (httpx.ReadError, httpx.WriteError, httpx.TimeoutException)):
        return ReadError(message)
    return TransportError(message)


class HTTPXTransport(BaseTransport):
    """
    Performs exchanges with an ``httpx.Client``.

    Redirects, TLS verification and timeouts are configured here, through
    ``ClientConfig``, and never looked at by the dispatcher.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = ClientConfig() if config is None else config
        if client is not None:
            self._client = client
        else:
            kwargs: dict[str, typing.Any] = {
                "follow_redirects": self.config.follow_redirects,
                "verify": self.config.verify,
            }
            if self.config.timeout is not None:
                kwargs["timeout"] = self.config.timeout
            if transport is not None:
                kwargs["transport"] = transport
            self._client = httpx.Client(**kwargs)
            # A request without a User-Agent must not pick up httpx's.
            self._client.headers.pop("User-Agent", None)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def build_headers(self, request: PreparedRequest) -> list[tuple[str, str]]:
        headers = request.header_items()
        names = {name.lower() for name, _ in headers}
        if request.user_agent is not None and "user-agent" not in names:
            headers.append(("User-Agent", request.user_agent))
        if request.body is not None and "content-type" not in names:
            headers.append(("Content-Type", FORM_CONTENT_TYPE))
        return headers

    def perform(self, request: PreparedRequest, on_chunk: ChunkCallback) -> int:
        if self._client.is_closed:
            raise TransportError("Cannot perform a request, the transport is closed.")

        method = request.effective_method
        try:
            with self._client.stream(
                method,
                request.url,
                content=request.body,
                headers=self.build_headers(request),
            ) as response:
                logger.debug(
                    "%s %s -> %s %s",
                    method,
                    request.url,
                    response.status_code,
                    response.reason_phrase,
                )
                for chunk in response.iter_bytes():
                    on_chunk(chunk)
                return response.status_code
        except httpx.RequestError as exc:
            raise _map_httpx_error(exc) from exc

    def close(self) -> None:
        self._client.close()

    def __repr__(self) -> str:
        return f"<HTTPXTransport [{'closed' if self.is_closed else 'open'}]>"


Handler = typing.Callable[
    [PreparedRequest], typing.Union[int, typing.Tuple[int, typing.Iterable[bytes]]]
]


class MockTransport(BaseTransport):
    """
    In-memory transport. ``handler`` receives the ``PreparedRequest`` and
    returns a status code, or a ``(status_code, chunks)`` tuple whose chunks
    are delivered one by one, empty ones included.

    Every performed request is kept in ``requests``.
    """

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[PreparedRequest] = []
        self.is_closed = False

    def perform(self, request: PreparedRequest, on_chunk: ChunkCallback) -> int:
        if self.is_closed:
            raise TransportError("Cannot perform a request, the transport is closed.")
        self.requests.append(request)

        result = self.handler(request)
        if isinstance(result, tuple):
            status_code, chunks = result
        else:
            status_code, chunks = result, ()
        for chunk in chunks:
            on_chunk(chunk)
        return status_code

    def close(self) -> None:
        self.is_closed = True
