#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/utils/encoding.py
"""Character encoding resolution and byte-order-mark handling.

Markdown input is decoded with its declared encoding, or UTF-8 when none is
declared. There is no content sniffing: a declared encoding always wins, and
a leading UTF-8 byte-order mark is removed only when the resolved codec is
UTF-8.
"""

from __future__ import annotations

import codecs
import logging
from typing import Optional

from md2dita.constants import DEFAULT_INPUT_ENCODING, UTF8_BOM
from md2dita.exceptions import AcquisitionError

logger = logging.getLogger(__name__)


def resolve_encoding(declared: Optional[str], source_name: Optional[str] = None) -> str:
    """Resolve a declared encoding to its canonical codec name.

    Parameters
    ----------
    declared : str or None
        Encoding name supplied by the caller, or None
    source_name : str, optional
        Display name of the source, used in error messages

    Returns
    -------
    str
        Canonical codec name, e.g. ``"utf-8"`` for ``"UTF8"``

    Raises
    ------
    AcquisitionError
        If the name is not known to the codec registry

    Examples
    --------
    >>> resolve_encoding(None)
    'utf-8'
    >>> resolve_encoding("Latin-1")
    'iso8859-1'

    """
    name = declared or DEFAULT_INPUT_ENCODING
    try:
        return codecs.lookup(name).name
    except LookupError as e:
        raise AcquisitionError(
            f"Unsupported encoding '{name}'", source_name=source_name, original_error=e
        ) from e


def strip_utf8_bom(data: bytes, encoding: str) -> bytes:
    """Remove a leading UTF-8 byte-order mark.

    Only the first three bytes are examined. Data that does not start with
    ``EF BB BF``, or whose encoding is not UTF-8, is returned unchanged.

    Parameters
    ----------
    data : bytes
        Raw document bytes
    encoding : str
        Resolved encoding name

    Returns
    -------
    bytes
        The data without its byte-order mark

    Examples
    --------
    >>> strip_utf8_bom(b"\\xef\\xbb\\xbf# Title", "utf-8")
    b'# Title'
    >>> strip_utf8_bom(b"\\xef\\xbb\\xbf# Title", "latin-1")
    b'\\xef\\xbb\\xbf# Title'

    """
    if codecs.lookup(encoding).name != DEFAULT_INPUT_ENCODING:
        return data
    if data[: len(UTF8_BOM)] == UTF8_BOM:
        logger.debug("Stripped UTF-8 byte-order mark")
        return data[len(UTF8_BOM) :]
    return data


def decode_document_bytes(data: bytes, declared: Optional[str] = None, source_name: Optional[str] = None) -> str:
    """Decode raw document bytes into a finalized text buffer.

    Parameters
    ----------
    data : bytes
        Raw document bytes
    declared : str or None, default None
        Declared encoding; UTF-8 when None
    source_name : str, optional
        Display name of the source, used in log and error messages

    Returns
    -------
    str
        Decoded document text

    Raises
    ------
    AcquisitionError
        If the encoding is unknown or the bytes do not decode

    """
    encoding = resolve_encoding(declared, source_name=source_name)
    payload = strip_utf8_bom(data, encoding)
    try:
        text = payload.decode(encoding)
    except UnicodeDecodeError as e:
        raise AcquisitionError(
            f"Input is not valid {encoding}: {e.reason} at byte {e.start}",
            source_name=source_name,
            original_error=e,
        ) from e
    logger.debug(f"Decoded {len(data)} bytes from {source_name or 'input'} as {encoding}")
    return text


def get_charset_from_content_type(content_type: str) -> str | None:
    """Extract charset parameter from Content-Type header.

    Parameters
    ----------
    content_type : str
        Content-Type header value (e.g., 'text/markdown; charset=utf-8')

    Returns
    -------
    str | None
        Charset value if present, None otherwise

    Examples
    --------
    >>> get_charset_from_content_type('text/markdown; charset="ISO-8859-1"')
    'ISO-8859-1'
    >>> get_charset_from_content_type('text/markdown') is None
    True

    """
    if not content_type:
        return None

    for part in content_type.split(";")[1:]:
        key, sep, value = part.partition("=")
        if sep and key.strip().lower() == "charset":
            return value.strip().strip("\"'").strip() or None

    return None


__all__ = [
    "decode_document_bytes",
    "get_charset_from_content_type",
    "resolve_encoding",
    "strip_utf8_bom",
]
