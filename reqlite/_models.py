from __future__ import annotations

import typing

__all__ = ["PreparedRequest", "split_header"]


def split_header(line: str) -> tuple[str, str]:
    """Split a raw ``Name: Value`` header line."""
    name, _, value = line.partition(":")
    return name.strip(), value.strip()


class PreparedRequest:
    """
    Everything a transport needs to perform one exchange.

    ``method`` is ``"GET"`` or ``"POST"``. A PUT is a POST-shaped request
    whose verb is replaced through ``method_override``.
    """

    __slots__ = ("url", "method", "method_override", "headers", "body", "user_agent")

    def __init__(
        self,
        url: str,
        method: str = "GET",
        *,
        method_override: str | None = None,
        headers: typing.Sequence[str] = (),
        body: bytes | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.url = url
        self.method = method
        self.method_override = method_override
        self.headers = tuple(headers)
        self.body = body
        self.user_agent = user_agent

    @property
    def effective_method(self) -> str:
        return self.method_override or self.method

    def header_items(self) -> list[tuple[str, str]]:
        return [split_header(line) for line in self.headers]

    def __eq__(self, other: typing.Any) -> bool:
        return isinstance(other, PreparedRequest) and all(
            getattr(self, name) == getattr(other, name) for name in self.__slots__
        )

    def __repr__(self) -> str:
        return f"<PreparedRequest({self.effective_method!r}, {self.url!r})>"
