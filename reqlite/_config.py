from __future__ import annotations

import os
import typing

from .__version__ import __title__, __version__

__all__ = ["ClientConfig"]

_FALSE_VALUES = {"0", "false", "no", "off"}


class ClientConfig:
    """
    Settings shared by every request made through a context.

    ``product`` and ``version`` form the first half of the User-Agent.
    ``follow_redirects``, ``timeout`` and ``verify`` are not interpreted here;
    they are handed to the transport untouched.
    """

    __slots__ = (
        "product",
        "version",
        "user_agent_on_get",
        "max_response_size",
        "escape_separators",
        "follow_redirects",
        "timeout",
        "verify",
    )

    def __init__(
        self,
        *,
        product: str = __title__,
        version: str = __version__,
        user_agent_on_get: bool = True,
        max_response_size: int | None = None,
        escape_separators: bool = False,
        follow_redirects: bool = False,
        timeout: typing.Any = None,
        verify: typing.Any = True,
    ) -> None:
        if not product:
            raise ValueError("product must be a non-empty string")
        if max_response_size is not None and max_response_size < 0:
            raise ValueError(
                f"max_response_size must be >= 0, got {max_response_size!r}"
            )
        self.product = product
        self.version = version
        self.user_agent_on_get = user_agent_on_get
        self.max_response_size = max_response_size
        self.escape_separators = escape_separators
        self.follow_redirects = follow_redirects
        self.timeout = timeout
        self.verify = verify

    @classmethod
    def from_env(
        cls, environ: typing.Mapping[str, str] | None = None, **kwargs: typing.Any
    ) -> ClientConfig:
        """
        Build a config from ``REQLITE_*`` environment variables.

        Explicit keyword arguments win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, typing.Any] = {}

        if env.get("REQLITE_PRODUCT"):
            values["product"] = env["REQLITE_PRODUCT"]
        if env.get("REQLITE_VERSION"):
            values["version"] = env["REQLITE_VERSION"]
        if env.get("REQLITE_MAX_RESPONSE_SIZE"):
            raw = env["REQLITE_MAX_RESPONSE_SIZE"]
            try:
                values["max_response_size"] = int(raw)
            except ValueError:
                raise ValueError(
                    f"REQLITE_MAX_RESPONSE_SIZE must be an integer, got {raw!r}"
                ) from None
        if env.get("REQLITE_USER_AGENT_ON_GET"):
            flag = env["REQLITE_USER_AGENT_ON_GET"].strip().lower()
            values["user_agent_on_get"] = flag not in _FALSE_VALUES

        values.update(kwargs)
        return cls(**values)

    def copy_with(self, **changes: typing.Any) -> ClientConfig:
        values = {name: getattr(self, name) for name in self.__slots__}
        values.update(changes)
        return ClientConfig(**values)

    def __eq__(self, other: typing.Any) -> bool:
        return isinstance(other, ClientConfig) and all(
            getattr(self, name) == getattr(other, name) for name in self.__slots__
        )

    def __repr__(self) -> str:
        return (
            f"ClientConfig(product={self.product!r}, version={self.version!r}, "
            f"max_response_size={self.max_response_size!r})"
        )
