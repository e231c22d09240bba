#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/utils/io_utils.py
"""I/O utilities for handling output destinations."""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

OutputType = Union[str, Path, IO[bytes], IO[str], None]


def _is_binary_stream(output: object) -> bool:
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def write_content(
    content: Union[str, bytes], output: OutputType, encoding: str = "utf-8"
) -> Union[StringIO, BytesIO, None]:
    """Write content to output destination or return as file-like object.

    Parameters
    ----------
    content : str or bytes
        Content to write
    output : str, Path, IO[bytes], IO[str], or None
        Output destination. None returns the content as StringIO (for str) or
        BytesIO (for bytes); a path writes a file; a stream is written to in
        its own mode.
    encoding : str, default "utf-8"
        Encoding used when text must become bytes or the reverse

    Returns
    -------
    StringIO, BytesIO, or None
        File-like object when ``output`` is None, otherwise None

    Raises
    ------
    TypeError
        If the content or output type is not supported

    Examples
    --------
        >>> buffer = BytesIO()
        >>> write_content(b"<topic/>", buffer)
        >>> buffer.getvalue()
        b'<topic/>'

    """
    if not isinstance(content, (str, bytes)):
        raise TypeError(f"Content must be str or bytes, got {type(content)}")

    if output is None:
        return StringIO(content) if isinstance(content, str) else BytesIO(content)

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        if isinstance(content, str):
            output_path.write_text(content, encoding=encoding)
        else:
            output_path.write_bytes(content)
        return None

    if hasattr(output, "write"):
        if _is_binary_stream(output):
            binary_output = cast(IO[bytes], output)
            binary_output.write(content.encode(encoding) if isinstance(content, str) else content)
        else:
            text_output = cast(IO[str], output)
            text_output.write(content.decode(encoding) if isinstance(content, bytes) else content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["OutputType", "write_content"]
