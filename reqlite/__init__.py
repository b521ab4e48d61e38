# ruff: noqa: I001
from .__version__ import __description__, __title__, __version__
from ._api import (
    close,
    get,
    init,
    post,
    post_with_headers,
    put,
    put_with_headers,
    request,
)
from ._buffer import ResponseAccumulator
from ._config import ClientConfig
from ._context import RequestContext
from ._dispatch import dispatch, prepare_request, send_with_body
from ._encoding import encode_form, normalize_pairs
from ._exceptions import (
    AccumulatorAllocationError,
    ConnectError,
    ContextClosed,
    ContextError,
    ContextInUse,
    InvalidFormData,
    InvalidHeader,
    InvalidMethod,
    InvalidURL,
    ProtocolError,
    ReadError,
    RequestsError,
    ResourceError,
    ResponseTooLarge,
    TransportError,
    ValidationError,
)
from ._models import PreparedRequest
from ._transports import BaseTransport, HTTPXTransport, MockTransport
from ._useragent import (
    PlatformInfo,
    StaticPlatformInfo,
    SystemPlatformInfo,
    build_user_agent,
)

try:
    from .cli import main
except ImportError:  # pragma: no cover

    def main() -> None:  # type: ignore[misc]
        import sys

        print(
            'The "reqlite" command requires the CLI extra. '
            'Install it with: pip install "reqlite[cli]"',
            file=sys.stderr,
        )
        sys.exit(1)


_EXCLUDED_FROM_ALL = {"cli", "main"}

__all__ = sorted(
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
