"""Opaque cursor encoding for keyset pagination.

A cursor carries the sort-key values of one boundary row. The plain form
joins the values with ``|``::

    2024-01-15T10:30:00+00:00|42

Backslashes and ``|`` inside a value are escaped with a backslash so any
value survives the round trip. An absent value is written as ``\\0`` and an
empty string as an empty segment, so the two stay distinct; absent trailing
values are left out. The encoded form applies
``rot13(base64(rot13(plain)))`` to the plain form. It only keeps cursors
opaque to casual readers and is not a security boundary.
"""

import base64
import binascii
import codecs
import logging
from datetime import date, datetime, time
from enum import Enum
from typing import Any, List, NamedTuple, Optional

from .errors import DecodeError

logger = logging.getLogger(__name__)

CURSOR_GLUE = "|"
_ESCAPE = "\\"
_NULL_CODE = "0"
_NULL = _ESCAPE + _NULL_CODE


class KeyTuple(NamedTuple):
    """Sort-key values of one row, primary first."""

    primary: Any
    backup: Any = None


class CursorMode(str, Enum):
    """Representation of emitted and accepted cursors."""

    ENCODED = "encoded"
    PLAIN = "plain"


def _stringify(value: Any) -> str:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _escape(value: str) -> str:
    return value.replace(_ESCAPE, _ESCAPE * 2).replace(CURSOR_GLUE, _ESCAPE + CURSOR_GLUE)


def _split(plain: str) -> List[Optional[str]]:
    """Split on unescaped delimiters and unescape each segment.

    A segment consisting of the null marker alone becomes None.
    """
    segments: List[Optional[str]] = []
    current: List[str] = []
    null = False
    chars = iter(plain)
    for char in chars:
        if char == _ESCAPE:
            escaped = next(chars, None)
            if escaped == _NULL_CODE and not current and not null:
                null = True
                continue
            if escaped not in (_ESCAPE, CURSOR_GLUE):
                raise DecodeError("Invalid escape sequence in cursor")
            char = escaped
        elif char == CURSOR_GLUE:
            segments.append(None if null else "".join(current))
            current = []
            null = False
            continue
        if null:
            raise DecodeError("Invalid escape sequence in cursor")
        current.append(char)
    segments.append(None if null else "".join(current))
    return segments


def _rot13(value: str) -> str:
    return codecs.encode(value, "rot13")


class CursorCodec:
    """Serialize KeyTuples to cursor strings and back.

    The mode is fixed per codec instance, so two paginators in the same
    process may use different representations.
    """

    def __init__(self, mode: CursorMode = CursorMode.ENCODED):
        self.mode = CursorMode(mode)

    def encode(self, keys: KeyTuple) -> str:
        """Encode key values into a cursor string.

        Absent trailing values are dropped; empty strings are kept.
        """
        segments = [
            _NULL if value is None else _escape(_stringify(value))
            for value in keys
        ]
        while len(segments) > 1 and segments[-1] == _NULL:
            segments.pop()
        if segments == [""]:
            # a lone empty value would read as no cursor at all
            segments.append(_NULL)

        plain = CURSOR_GLUE.join(segments)
        if self.mode is CursorMode.PLAIN:
            return plain
        return _rot13(base64.b64encode(_rot13(plain).encode("utf-8")).decode("ascii"))

    def decode(self, cursor: str) -> KeyTuple:
        """Decode a cursor string into key values.

        Decoded values are strings; absent or missing segments become None.

        Raises:
            DecodeError: If the cursor is empty or malformed
        """
        if not cursor:
            raise DecodeError("Empty cursor provided")

        plain = cursor
        if self.mode is CursorMode.ENCODED:
            try:
                raw = base64.b64decode(_rot13(cursor).encode("ascii"), validate=True)
                plain = _rot13(raw.decode("utf-8"))
            except (binascii.Error, UnicodeError, ValueError) as e:
                logger.warning(f"Rejected cursor that failed to decode: {e}")
                raise DecodeError("Failed to decode cursor") from e

        segments = _split(plain)
        if len(segments) > len(KeyTuple._fields):
            logger.warning(f"Rejected cursor with {len(segments)} segments")
            raise DecodeError(f"Cursor carries {len(segments)} values, expected at most {len(KeyTuple._fields)}")

        segments += [None] * (len(KeyTuple._fields) - len(segments))
        return KeyTuple(*segments)
