"""Hashing, byte and JSON helpers exposed to scripts."""

from __future__ import annotations

import hashlib
import io
import json
from typing import Any, Optional

_HASH_ARG_ERROR = "md5.Hash: invalid argument type, require []byte or string"


def _to_bytes(value: Any) -> Optional[bytes]:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    return None


def md5_hash(sep: Any, *args: Any) -> str:
    """Hex MD5 of ``args`` joined by ``sep``; exception arguments contribute nothing."""
    separator = _to_bytes(sep)
    if separator is None:
        raise TypeError(_HASH_ARG_ERROR)
    digest = hashlib.md5()
    for index, arg in enumerate(args):
        if index > 0:
            digest.update(separator)
        if isinstance(arg, BaseException):
            continue
        data = _to_bytes(arg)
        if data is None:
            raise TypeError(_HASH_ARG_ERROR)
        digest.update(data)
    return digest.hexdigest()


def md5_sumstr(data: bytes) -> str:
    """Hex MD5 of ``data``."""
    return hashlib.md5(data).hexdigest()


def sha1_sumstr(data: bytes) -> str:
    """Hex SHA-1 of ``data``."""
    return hashlib.sha1(data).hexdigest()


def bytes_from(value: Any) -> Optional[bytes]:
    """Convert a list of integers (low byte of each) or a string to bytes; ``None`` stays ``None``."""
    if value is None:
        return None
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (list, tuple)) and all(
        isinstance(item, int) and not isinstance(item, bool) for item in value
    ):
        return bytes(item & 0xFF for item in value)
    raise TypeError(f"can't convert from `{type(value).__name__}` to []byte")


def new_buffer(*args: Any) -> io.BytesIO:
    """Return a byte buffer, empty or holding the given bytes or string."""
    if not args:
        return io.BytesIO()
    data = _to_bytes(args[0])
    if data is None:
        raise TypeError("bytes.buffer() - unsupported argument type")
    return io.BytesIO(data)


def json_pretty(value: Any) -> str:
    """Encode ``value`` as indented JSON with sorted keys; on failure return the error text."""
    try:
        return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as err:
        return str(err)


def json_unmarshal(data: Any) -> Any:
    """Decode JSON from bytes (the whole input) or a string (its first value).

    Numbers decode as floats.
    """
    decoder = json.JSONDecoder(parse_int=float)
    if isinstance(data, (bytes, bytearray)):
        return decoder.decode(bytes(data).decode("utf-8"))
    if isinstance(data, str):
        value, _ = decoder.raw_decode(data.lstrip())
        return value
    raise TypeError("invalid argument")