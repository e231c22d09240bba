#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/options/base.py
"""Base classes for parser and renderer options.

Options are frozen dataclasses: a configuration is fixed once constructed and
may be shared freely between parser or renderer instances. Use
``create_updated`` to derive a modified copy.
"""

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from md2dita.constants import DEFAULT_OUTPUT_ENCODING


def _check_codec(value: Optional[str], field_name: str) -> None:
    if value is None:
        return
    try:
        codecs.lookup(value)
    except LookupError as e:
        raise ValueError(f"{field_name} names an unknown encoding: {value!r}") from e


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parameters
    ----------
    encoding : str or None, default None
        Declared character encoding of byte input. When None, byte input is
        decoded as UTF-8. An unknown name is reported when the input is read.

    """

    encoding: Optional[str] = field(
        default=None,
        metadata={"help": "Character encoding of byte input (default: UTF-8)", "importance": "core"},
    )


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    output_encoding : str, default "utf-8"
        Character encoding of serialized output

    """

    output_encoding: str = field(
        default=DEFAULT_OUTPUT_ENCODING,
        metadata={"help": "Character encoding of the serialized output", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the output encoding.

        Raises
        ------
        ValueError
            If the encoding is not known to the codec registry.

        """
        _check_codec(self.output_encoding, "output_encoding")
