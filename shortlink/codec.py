"""Reversible id <-> chunk codec.

A record id is packed as a 4-byte little-endian signed integer and written
with the URL-safe base64 alphabet (``A-Z a-z 0-9 - _``) without padding, so
every id maps to exactly six characters::

    >>> encode(1)
    'AQAAAA'
    >>> decode('AgAAAA')
    2

The byte order is part of the link format. Changing it would invalidate every
short link already handed out.
"""

import base64
import re
import struct

from .errors import DecodeError

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# 4 bytes -> 6 base64 symbols once the "==" padding is stripped
CHUNK_LENGTH = 6

_ID_FORMAT = "<i"
_CHUNK_RE = re.compile(r"^[A-Za-z0-9_-]{%d}$" % CHUNK_LENGTH)


def encode(record_id: int) -> str:
    """Encode a record id as a URL-safe chunk.

    Args:
        record_id: Integer in the signed 32-bit range

    Returns:
        Six-character chunk

    Raises:
        ValueError: If the id is not an int32
    """
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise ValueError(f"Record id must be an integer, got {type(record_id).__name__}")
    if not INT32_MIN <= record_id <= INT32_MAX:
        raise ValueError(f"Record id {record_id} is outside the 32-bit range")

    raw = struct.pack(_ID_FORMAT, record_id)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode(chunk: str) -> int:
    """Decode a chunk back into its record id.

    Args:
        chunk: Chunk produced by :func:`encode`

    Returns:
        The record id

    Raises:
        DecodeError: If the chunk has the wrong length, uses characters
            outside the URL-safe alphabet, carries padding, or is a
            non-canonical spelling of an id
    """
    if not isinstance(chunk, str):
        raise DecodeError("Chunk must be a string")
    if len(chunk) != CHUNK_LENGTH:
        raise DecodeError(f"Chunk must be {CHUNK_LENGTH} characters, got {len(chunk)}")
    if not _CHUNK_RE.match(chunk):
        raise DecodeError("Chunk contains characters outside the URL-safe alphabet")

    try:
        raw = base64.urlsafe_b64decode(chunk + "==")
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Chunk is not valid base64: {e}") from e

    record_id = struct.unpack(_ID_FORMAT, raw)[0]

    # The last symbol carries 4 unused bits; only the all-zero spelling is valid
    if encode(record_id) != chunk:
        raise DecodeError("Chunk is not a canonical encoding")

    return record_id


def is_valid_chunk(chunk: str) -> bool:
    """Check whether a string decodes to a record id."""
    try:
        decode(chunk)
    except DecodeError:
        return False
    return True
