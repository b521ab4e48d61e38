from __future__ import annotations

import typing
from collections.abc import Mapping, Sequence

from ._exceptions import InvalidFormData
from ._urlparse import percent_encoded

__all__ = ["FormData", "encode_form", "normalize_pairs"]

FormData = typing.Union[
    typing.Mapping[str, str],
    typing.Sequence[typing.Tuple[str, str]],
    typing.Sequence[str],
]


def _check_str(value: typing.Any, position: int) -> str:
    if not isinstance(value, str):
        raise InvalidFormData(
            f"Form data item {position} must be a string, "
            f"got {type(value).__name__}"
        )
    return value


def normalize_pairs(data: FormData) -> list[tuple[str, str]]:
    """
    Turn any supported form data shape into an ordered list of
    ``(key, value)`` pairs.

    Three shapes are accepted:

    * a mapping, in iteration order;
    * a sequence of ``(key, value)`` pairs;
    * a flat sequence of strings where item ``2i`` is a key and item
      ``2i + 1`` its value. An odd number of items is rejected.
    """
    if isinstance(data, Mapping):
        return [
            (_check_str(key, n), _check_str(value, n))
            for n, (key, value) in enumerate(data.items())
        ]

    if isinstance(data, (str, bytes)):
        raise InvalidFormData("Form data must be a sequence, not a single string")

    try:
        items = list(data)
    except TypeError:
        raise InvalidFormData(
            f"Form data must be a sequence or mapping, got {type(data).__name__}"
        ) from None
    if not items:
        return []

    if all(isinstance(item, str) for item in items):
        if len(items) % 2:
            raise InvalidFormData(
                f"Form data must hold an even number of items, got {len(items)}"
            )
        return [(items[i], items[i + 1]) for i in range(0, len(items), 2)]

    pairs: list[tuple[str, str]] = []
    for n, item in enumerate(items):
        if isinstance(item, str) or not isinstance(item, Sequence):
            raise InvalidFormData(
                f"Form data item {n} must be a (key, value) pair, got {item!r}"
            )
        if len(item) != 2:
            raise InvalidFormData(
                f"Form data item {n} must have exactly 2 elements, got {len(item)}"
            )
        key, value = item
        pairs.append((_check_str(key, n), _check_str(value, n)))
    return pairs


def encode_form(data: FormData, *, escape_separators: bool = False) -> str:
    """
    Percent-encode form data into a request body.

    Only ``A-Z a-z 0-9 - . _ ~`` are left as they are; everything else,
    spaces included, becomes ``%XX``.

    By default keys and values are escaped one by one and joined with
    literal ``=`` and ``&``:

    >>> encode_form([("a", "1"), ("b", "x y")])
    'a=1&b=x%20y'

    With ``escape_separators=True`` the assembled ``key=value&...`` string
    is escaped as a whole, separators included:

    >>> encode_form([("a", "1"), ("b", "2")], escape_separators=True)
    'a%3D1%26b%3D2'
    """
    pairs = normalize_pairs(data)

    if escape_separators:
        assembled = "&".join(f"{key}={value}" for key, value in pairs)
        return percent_encoded(assembled)

    return "&".join(
        f"{percent_encoded(key)}={percent_encoded(value)}" for key, value in pairs
    )
