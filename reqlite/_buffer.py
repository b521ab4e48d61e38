from __future__ import annotations

import logging

from ._exceptions import AccumulatorAllocationError, ResponseTooLarge

__all__ = ["ResponseAccumulator"]

logger = logging.getLogger(__name__)


class ResponseAccumulator:
    """
    Growable byte buffer that assembles a response body out of the chunks
    handed over by a transport, in the order they arrive.

    >>> acc = ResponseAccumulator()
    >>> acc.feed(b"ab"), acc.feed(b""), acc.feed(b"cd")
    (2, 0, 2)
    >>> acc.body, acc.size
    (b'abcd', 4)
    """

    def __init__(self, max_size: int | None = None) -> None:
        self._buffer = bytearray()
        self._chunk_count = 0
        self.max_size = max_size

    def feed(self, chunk: bytes | bytearray | memoryview) -> int:
        """
        Append one chunk and return its length.

        Raises ``ResponseTooLarge`` or ``AccumulatorAllocationError`` after
        discarding everything accumulated so far.
        """
        length = len(chunk)
        self._chunk_count += 1
        if not length:
            return 0

        if self.max_size is not None and len(self._buffer) + length > self.max_size:
            attempted = len(self._buffer) + length
            self.reset()
            raise ResponseTooLarge(
                f"Response body exceeded {self.max_size} bytes "
                f"({attempted} bytes received)"
            )

        try:
            self._buffer += chunk
        except MemoryError:
            attempted = len(self._buffer) + length
            self.reset()
            raise AccumulatorAllocationError(
                f"Could not grow response buffer to {attempted} bytes"
            ) from None
        return length

    __call__ = feed

    def reset(self) -> None:
        if self._buffer:
            logger.debug("Discarding %d accumulated bytes", len(self._buffer))
        self._buffer = bytearray()
        self._chunk_count = 0

    @property
    def body(self) -> bytes:
        return bytes(self._buffer)

    @property
    def size(self) -> int:
        return len(self._buffer)

    @property
    def chunk_count(self) -> int:
        return self._chunk_count

    def text(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        return self._buffer.decode(encoding, errors)

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"<ResponseAccumulator [{self.size} bytes, {self._chunk_count} chunks]>"
