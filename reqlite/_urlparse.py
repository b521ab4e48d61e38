from __future__ import annotations

import ipaddress
import re

import idna

from ._exceptions import InvalidURL

MAX_URL_LENGTH = 65536

UNRESERVED_CHARACTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"

SUPPORTED_SCHEMES = ("http", "https")

URL_REGEX = re.compile(
    r"(?:(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*):)?"
    r"(?://(?P<authority>[^/?#]*))?"
    r"(?P<path>[^?#]*)"
    r"(?:\?(?P<query>[^#]*))?"
    r"(?:#(?P<fragment>.*))?"
)

AUTHORITY_REGEX = re.compile(
    r"(?:(?P<userinfo>.*)@)?(?P<host>(\[.*\]|[^:@]*)):?(?P<port>.*)?"
)

IPv4_STYLE_HOSTNAME = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+\.[0-9]+$")
IPv6_STYLE_HOSTNAME = re.compile(r"^\[.*\]$")


def _validate_non_printable(value: str, label: str) -> None:
    if any(char.isascii() and not char.isprintable() for char in value):
        char = next(c for c in value if c.isascii() and not c.isprintable())
        raise InvalidURL(
            f"Invalid non-printable ASCII character in {label}, "
            f"{char!r} at position {value.find(char)}."
        )


def validate_url(url: str) -> str:
    """
    Check that ``url`` can be handed to a transport and return it unchanged.
    """
    if not isinstance(url, str):
        raise InvalidURL(f"URL must be a string, got {type(url).__name__}")
    if not url:
        raise InvalidURL("No URL provided")
    if len(url) > MAX_URL_LENGTH:
        raise InvalidURL("URL too long")

    _validate_non_printable(url, "URL")

    url_dict = URL_REGEX.match(url).groupdict()  # type: ignore[union-attr]
    scheme = (url_dict["scheme"] or "").lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise InvalidURL(f"Unsupported URL scheme {scheme!r} in {url!r}")

    authority = url_dict["authority"] or ""
    authority_dict = AUTHORITY_REGEX.match(authority).groupdict()  # type: ignore[union-attr]
    host = authority_dict["host"] or ""
    if not host:
        raise InvalidURL(f"No host in URL {url!r}")

    encode_host(host)
    validate_port(authority_dict["port"])
    return url


def encode_host(host: str) -> str:
    if not host:
        return ""

    if IPv4_STYLE_HOSTNAME.match(host):
        try:
            ipaddress.IPv4Address(host)
        except ipaddress.AddressValueError:
            raise InvalidURL(f"Invalid IPv4 address: {host!r}")
        return host

    if IPv6_STYLE_HOSTNAME.match(host):
        try:
            ipaddress.IPv6Address(host[1:-1])
        except ipaddress.AddressValueError:
            raise InvalidURL(f"Invalid IPv6 address: {host!r}")
        return host[1:-1]

    if host.isascii():
        return host.lower()

    try:
        return idna.encode(host.lower()).decode("ascii")
    except idna.IDNAError:
        raise InvalidURL(f"Invalid IDNA hostname: {host!r}")


def validate_port(port: str | None) -> int | None:
    if not port:
        return None
    try:
        port_as_int = int(port)
    except ValueError:
        raise InvalidURL(f"Invalid port: {port!r}")
    if not 0 <= port_as_int <= 65535:
        raise InvalidURL(f"Invalid port: {port!r}")
    return port_as_int


def _percent_encode(string: str) -> str:
    return "".join(f"%{byte:02X}" for byte in string.encode("utf-8"))


def percent_encoded(string: str, safe: str = "") -> str:
    """
    Escape every character outside ``UNRESERVED_CHARACTERS + safe`` as
    upper-case ``%XX`` octets of its UTF-8 encoding.
    """
    non_escaped = UNRESERVED_CHARACTERS + safe
    if not string.rstrip(non_escaped):
        return string
    return "".join(c if c in non_escaped else _percent_encode(c) for c in string)

