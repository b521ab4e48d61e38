from __future__ import annotations

import platform
import typing

__all__ = [
    "PlatformInfo",
    "StaticPlatformInfo",
    "SystemPlatformInfo",
    "build_user_agent",
]


class PlatformInfo(typing.Protocol):
    def name(self) -> str: ...

    def release(self) -> str: ...


class SystemPlatformInfo:
    """Reports the running operating system, e.g. ``Linux`` / ``6.8.0``."""

    def name(self) -> str:
        return platform.system() or "Unknown"

    def release(self) -> str:
        return platform.release() or "0"


class StaticPlatformInfo:
    def __init__(self, name: str, release: str) -> None:
        self._name = name
        self._release = release

    def name(self) -> str:
        return self._name

    def release(self) -> str:
        return self._release

    def __repr__(self) -> str:
        return f"StaticPlatformInfo({self._name!r}, {self._release!r})"


def build_user_agent(
    product: str,
    version: str,
    platform_info: PlatformInfo | None = None,
) -> str:
    """
    Return ``"<product>/<version> <platform name>/<platform release>"``.

    >>> build_user_agent("reqlite", "0.1.0", StaticPlatformInfo("Linux", "6.8"))
    'reqlite/0.1.0 Linux/6.8'
    """
    info = SystemPlatformInfo() if platform_info is None else platform_info
    return f"{product}/{version} {info.name()}/{info.release()}"
