#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/utils/inputs.py
"""Input acquisition for Markdown documents.

An ``InputSource`` names where a document comes from: a byte stream, a
character stream, or a location (filesystem path, ``file://`` URI or
``http(s)://`` URL). ``read_input_source`` turns any of these into a single
decoded text buffer, applying the encoding rules in
``md2dita.utils.encoding``.

When more than one origin is set, the byte stream is read first, then the
character stream, then the location.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Optional, Union
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from md2dita.constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT, DEPS_HTTP, MARKDOWN_EXTENSIONS, MAX_PATH_LENGTH
from md2dita.exceptions import AcquisitionError, DependencyError, ValidationError
from md2dita.utils.encoding import decode_document_bytes, get_charset_from_content_type

logger = logging.getLogger(__name__)

InputType = Union["InputSource", str, Path, IO[bytes], IO[str], bytes, bytearray]

_REMOTE_SCHEMES = {"http", "https"}


def _looks_like_path(value: str) -> bool:
    """Heuristic to determine if a string appears to reference a filesystem path."""
    if not value or len(value) > MAX_PATH_LENGTH:
        return False
    if "\n" in value or "\r" in value:
        return False
    if value.startswith(("#", "-", "*", ">")) and not value.startswith(("./", "../")):
        return False
    if value.startswith((os.sep, "./", "../", "~")):
        return True
    if os.altsep and os.altsep in value:
        return True
    if os.sep in value:
        return True
    if len(value) >= 2 and value[1] == ":" and value[0].isalpha():
        return True
    return bool(Path(value).suffix)


def resolve_file_url_to_path(file_url: str) -> Path:
    """Resolve a ``file://`` URL to a filesystem path.

    Parameters
    ----------
    file_url : str
        The file:// URL to resolve

    Returns
    -------
    Path
        Absolute path for the URL

    Raises
    ------
    ValueError
        If file_url is not a file:// URL

    Examples
    --------
    >>> resolve_file_url_to_path("file:///tmp/notes.md")
    PosixPath('/tmp/notes.md')

    """
    parsed = urlparse(file_url)
    if parsed.scheme != "file":
        raise ValueError(f"Not a file:// URL: {file_url}")

    # file://./notes.md and file://../notes.md are relative to the working directory
    if parsed.netloc in (".", ".."):
        return (Path.cwd() / (parsed.netloc + unquote(parsed.path))).resolve()

    if parsed.netloc and parsed.netloc != "localhost":
        # UNC share on Windows, otherwise a bare relative name
        if os.name == "nt":
            return Path(url2pathname(f"//{parsed.netloc}{parsed.path}"))
        return (Path.cwd() / (parsed.netloc + unquote(parsed.path))).resolve()

    return Path(url2pathname(parsed.path)).resolve()


@dataclass(frozen=True)
class InputSource:
    """Description of where a Markdown document comes from.

    Parameters
    ----------
    byte_stream : IO[bytes] or None, default None
        Binary stream holding encoded document bytes
    character_stream : IO[str] or None, default None
        Text stream holding already-decoded characters
    location : str or None, default None
        Filesystem path, ``file://`` URI or ``http(s)://`` URL
    encoding : str or None, default None
        Declared encoding of byte input; UTF-8 when None

    Examples
    --------
    >>> InputSource(location="docs/intro.md")
    >>> InputSource(byte_stream=io.BytesIO(b"# Title"), encoding="utf-8")

    """

    byte_stream: Optional[IO[bytes]] = None
    character_stream: Optional[IO[str]] = None
    location: Optional[str] = None
    encoding: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Name used for the source in log and error messages."""
        if self.location:
            return self.location
        stream = self.byte_stream if self.byte_stream is not None else self.character_stream
        name = getattr(stream, "name", None)
        if isinstance(name, str) and name:
            return name
        return "<stream>"

    @classmethod
    def from_any(cls, obj: InputType, encoding: Optional[str] = None) -> InputSource:
        """Classify an arbitrary input object as an input source.

        Parameters
        ----------
        obj : InputSource, str, Path, bytes or file-like
            Input to classify. Strings naming a URL or an existing (or
            Markdown-suffixed) path become locations. Any other string is
            taken as the Markdown text itself.
        encoding : str or None, default None
            Declared encoding for byte input. An ``InputSource`` that already
            declares one keeps it.

        Returns
        -------
        InputSource
            The classified source

        Raises
        ------
        ValidationError
            If the object cannot be used as an input

        """
        if isinstance(obj, InputSource):
            if encoding is not None and obj.encoding is None:
                return cls(obj.byte_stream, obj.character_stream, obj.location, encoding)
            return obj

        if isinstance(obj, (bytes, bytearray)):
            return cls(byte_stream=io.BytesIO(bytes(obj)), encoding=encoding)

        if isinstance(obj, Path):
            return cls(location=str(obj), encoding=encoding)

        if isinstance(obj, str):
            scheme = urlparse(obj).scheme.lower() if "://" in obj else ""
            if scheme in _REMOTE_SCHEMES or scheme == "file":
                return cls(location=obj, encoding=encoding)
            if _looks_like_path(obj):
                candidate = Path(obj).expanduser()
                if candidate.exists() or candidate.suffix.lower() in MARKDOWN_EXTENSIONS:
                    return cls(location=str(candidate), encoding=encoding)
            return cls(character_stream=io.StringIO(obj), encoding=encoding)

        if hasattr(obj, "read"):
            if isinstance(obj, io.TextIOBase):
                return cls(character_stream=obj, encoding=encoding)
            return cls(byte_stream=obj, encoding=encoding)  # type: ignore[arg-type]

        raise ValidationError(
            f"Unsupported input type: {type(obj).__name__}",
            parameter_name="source",
            parameter_value=obj,
        )


def _read_stream(stream: IO[Any], source_name: str) -> Any:
    try:
        return stream.read()
    except (OSError, ValueError) as e:
        raise AcquisitionError(f"Failed to read {source_name}: {e}", source_name=source_name, original_error=e) from e


def fetch_remote_bytes(url: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> tuple[bytes, Optional[str]]:
    """Download a remote document.

    Parameters
    ----------
    url : str
        ``http://`` or ``https://`` URL
    timeout : float, default 10.0
        Network timeout in seconds

    Returns
    -------
    tuple of (bytes, str or None)
        Response body and the charset from its Content-Type header, if any

    Raises
    ------
    DependencyError
        If httpx is not installed
    AcquisitionError
        If the request fails or returns an error status

    """
    try:
        import httpx
    except ImportError as e:
        raise DependencyError(
            "Remote input", DEPS_HTTP, install_command="pip install 'md2dita[http]'", original_import_error=e
        ) from e

    logger.debug(f"Fetching remote document: {url}")
    try:
        with httpx.Client(
            timeout=timeout, follow_redirects=True, headers={"User-Agent": DEFAULT_USER_AGENT}
        ) as client:
            response = client.get(url)
            response.raise_for_status()
            content = response.content
            charset = get_charset_from_content_type(response.headers.get("content-type", ""))
    except httpx.HTTPError as e:
        raise AcquisitionError(f"Failed to fetch {url}: {e}", source_name=url, original_error=e) from e

    logger.debug(f"Fetched {len(content)} bytes from {url}")
    return content, charset


def _read_location(location: str, timeout: float) -> tuple[bytes, Optional[str]]:
    scheme = urlparse(location).scheme.lower() if "://" in location else ""
    if scheme in _REMOTE_SCHEMES:
        return fetch_remote_bytes(location, timeout=timeout)

    if scheme == "file":
        path = resolve_file_url_to_path(location)
    elif scheme:
        raise AcquisitionError(f"Unsupported URI scheme '{scheme}'", source_name=location)
    else:
        path = Path(location).expanduser()

    try:
        return path.read_bytes(), None
    except OSError as e:
        raise AcquisitionError(f"Failed to read {path}: {e}", source_name=location, original_error=e) from e


def read_input_source(source: InputSource, timeout: float = DEFAULT_HTTP_TIMEOUT) -> str:
    """Read a document into a single decoded text buffer.

    Byte input is decoded with the declared encoding, UTF-8 by default, after
    a UTF-8 byte-order mark is stripped. Character input is returned as read;
    a "character" stream that yields bytes is treated as byte input. Remote
    locations use the declared encoding, then the response charset, then
    UTF-8.

    Parameters
    ----------
    source : InputSource
        Source to read
    timeout : float, default 10.0
        Network timeout for remote locations

    Returns
    -------
    str
        Decoded document text

    Raises
    ------
    AcquisitionError
        If the source cannot be read or decoded
    DependencyError
        If a remote location is given and httpx is not installed

    """
    name = source.display_name

    if source.byte_stream is not None:
        content = _read_stream(source.byte_stream, name)
    elif source.character_stream is not None:
        content = _read_stream(source.character_stream, name)
    elif source.location is not None:
        data, charset = _read_location(source.location, timeout)
        return decode_document_bytes(data, source.encoding or charset, source_name=name)
    else:
        raise AcquisitionError("Input source has no byte stream, character stream or location")

    if isinstance(content, (bytes, bytearray)):
        return decode_document_bytes(bytes(content), source.encoding, source_name=name)
    if isinstance(content, str):
        logger.debug(f"Read {len(content)} characters from {name}")
        return content

    raise AcquisitionError(
        f"Stream read() returned unexpected type {type(content).__name__}; expected bytes or str",
        source_name=name,
    )


__all__ = [
    "InputSource",
    "InputType",
    "fetch_remote_bytes",
    "read_input_source",
    "resolve_file_url_to_path",
]
