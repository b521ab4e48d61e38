from __future__ import annotations

import logging
import typing

from ._buffer import ResponseAccumulator
from ._config import ClientConfig
from ._exceptions import ContextClosed, ContextInUse
from ._urlparse import validate_url

if typing.TYPE_CHECKING:
    from types import TracebackType

__all__ = ["RequestContext"]

logger = logging.getLogger(__name__)


class RequestContext:
    """
    State for one request/response exchange.

    The context owns the response buffer, which the transport fills while a
    request is in flight. A context serves one request at a time; issuing a
    second request on it before the first returns raises ``ContextInUse``.
    Use a separate context for every concurrent request.
    """

    def __init__(self, url: str, config: ClientConfig | None = None) -> None:
        self._url = validate_url(url)
        self.config = ClientConfig() if config is None else config
        self.status_code = 0
        self._accumulator: ResponseAccumulator | None = ResponseAccumulator(
            max_size=self.config.max_response_size
        )
        self._in_flight = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def accumulator(self) -> ResponseAccumulator:
        if self._accumulator is None:
            raise ContextClosed("The context has been closed.", context=self)
        return self._accumulator

    @property
    def response_body(self) -> bytes:
        if self._accumulator is None:
            return b""
        return self._accumulator.body

    content = response_body

    @property
    def response_size(self) -> int:
        if self._accumulator is None:
            return 0
        return self._accumulator.size

    @property
    def text(self) -> str:
        if self._accumulator is None:
            return ""
        return self._accumulator.text()

    @property
    def closed(self) -> bool:
        return self._accumulator is None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def _begin(self) -> ResponseAccumulator:
        if self._accumulator is None:
            raise ContextClosed("Cannot send a request on a closed context.", context=self)
        if self._in_flight:
            raise ContextInUse(
                "A request is already in flight on this context.", context=self
            )
        self._in_flight = True
        self.status_code = 0
        self._accumulator.reset()
        return self._accumulator

    def _finish(self) -> None:
        self._in_flight = False

    def close(self) -> None:
        """
        Release the response buffer. Closing twice is a no-op.
        """
        if self._in_flight:
            raise ContextInUse(
                "Cannot close a context while a request is in flight.", context=self
            )
        if self._accumulator is None:
            return
        logger.debug("Closing context for %s", self._url)
        self._accumulator.reset()
        self._accumulator = None

    def __enter__(self) -> RequestContext:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: TracebackType | None = None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self.response_size} bytes"
        return f"<RequestContext [{self.status_code}] {self._url!r} {state}>"
