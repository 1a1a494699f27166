"""Parsing of coordinate pairs such as ``"1024x768"`` or ``"-1.20,0.35"``."""

from __future__ import annotations

import re
import sys
from typing import Any, Callable, Optional

_UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _strict(pattern: re.Pattern, convert: Callable[[str], Any]) -> Callable[[str], Any]:
    """Wrap ``convert`` so that only text matching ``pattern`` in full is accepted.

    The built-in ``int`` and ``float`` constructors tolerate surrounding
    whitespace and digit-group underscores; a coordinate must not.
    """

    def parse(text: str) -> Any:
        if pattern.fullmatch(text) is None:
            raise ValueError(f"invalid literal: {text!r}")
        return convert(text)

    return parse


parse_unsigned = _strict(_UNSIGNED_PATTERN, int)
parse_int = _strict(_INT_PATTERN, int)
parse_float = _strict(_FLOAT_PATTERN, float)

_SCALAR_PARSERS = {int: parse_int, float: parse_float}


def parse_pair(s: str, separator: str, kind: Callable[[str], Any] = int) -> Optional[tuple[Any, Any]]:
    """Parse ``s`` as a pair ``<left><separator><right>``.

    ``kind`` converts each side; ``int`` and ``float`` select strict parsers,
    any other callable is used as is and must raise ``ValueError`` on bad
    input. Returns ``None`` unless the separator is present and both sides
    parse completely.
    """

    index = s.find(separator)
    if index < 0:
        return None

    parse = _SCALAR_PARSERS.get(kind, kind)
    try:
        return parse(s[:index]), parse(s[index + len(separator):])
    except ValueError:
        return None


def parse_complex(s: str) -> Optional[complex]:
    """Parse a ``"<re>,<im>"`` pair such as ``"-1.20,0.35"``."""

    pair = parse_pair(s, ",", float)
    if pair is None:
        return None
    return complex(*pair)


def parse_pixels(s: str) -> Optional[tuple[int, int]]:
    """Parse image dimensions such as ``"1024x768"``.

    Both dimensions must be positive, and the pixel count must fit in a
    buffer index (``sys.maxsize``).
    """

    pair = parse_pair(s, "x", parse_unsigned)
    if pair is None or 0 in pair:
        return None
    if pair[0] * pair[1] > sys.maxsize:
        return None
    return pair
