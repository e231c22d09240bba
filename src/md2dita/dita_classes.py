#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/dita_classes.py
"""DITA ``@class`` tokens for the elements md2dita emits.

Every DITA element carries a ``class`` attribute listing its specialization
ancestry, e.g. ``"+ topic/ph hi-d/b "`` for bold text. The element name is the
element part of the last ``module/element`` pair.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DitaClass:
    """A DITA class attribute value.

    Parameters
    ----------
    value : str
        Full class token string, including leading ``-``/``+`` marker and
        trailing space

    Examples
    --------
    >>> TOPIC_P = DitaClass("- topic/p ")
    >>> TOPIC_P.local_name
    'p'
    >>> DitaClass("+ topic/ph hi-d/b ").local_name
    'b'

    """

    value: str

    def __post_init__(self) -> None:
        """Validate the token string has at least one module/element pair."""
        tokens = self.value.split()
        if len(tokens) < 2 or "/" not in tokens[-1]:
            raise ValueError(f"Invalid DITA class value: {self.value!r}")

    @property
    def local_name(self) -> str:
        """Element name of the most specialized module/element pair."""
        return self.value.split()[-1].split("/", 1)[1]

    def __str__(self) -> str:
        """Return the raw class token string."""
        return self.value


# Topic structure
TOPIC_TOPIC = DitaClass("- topic/topic ")
TOPIC_TITLE = DitaClass("- topic/title ")
TOPIC_BODY = DitaClass("- topic/body ")

# Prolog metadata
TOPIC_PROLOG = DitaClass("- topic/prolog ")
TOPIC_AUTHOR = DitaClass("- topic/author ")
TOPIC_SOURCE = DitaClass("- topic/source ")
TOPIC_PUBLISHER = DitaClass("- topic/publisher ")
TOPIC_PERMISSIONS = DitaClass("- topic/permissions ")
TOPIC_METADATA = DitaClass("- topic/metadata ")
TOPIC_AUDIENCE = DitaClass("- topic/audience ")
TOPIC_CATEGORY = DitaClass("- topic/category ")
TOPIC_KEYWORDS = DitaClass("- topic/keywords ")
TOPIC_KEYWORD = DitaClass("- topic/keyword ")
TOPIC_RESOURCEID = DitaClass("- topic/resourceid ")
TOPIC_DATA = DitaClass("- topic/data ")

# Block elements
TOPIC_P = DitaClass("- topic/p ")
TOPIC_LQ = DitaClass("- topic/lq ")
TOPIC_UL = DitaClass("- topic/ul ")
TOPIC_OL = DitaClass("- topic/ol ")
TOPIC_LI = DitaClass("- topic/li ")
TOPIC_DL = DitaClass("- topic/dl ")
TOPIC_DLENTRY = DitaClass("- topic/dlentry ")
TOPIC_DT = DitaClass("- topic/dt ")
TOPIC_DD = DitaClass("- topic/dd ")
PR_D_CODEBLOCK = DitaClass("+ topic/pre pr-d/codeblock ")
TOPIC_SIMPLETABLE = DitaClass("- topic/simpletable ")
TOPIC_STHEAD = DitaClass("- topic/sthead ")
TOPIC_STROW = DitaClass("- topic/strow ")
TOPIC_STENTRY = DitaClass("- topic/stentry ")
TOPIC_REQUIRED_CLEANUP = DitaClass("- topic/required-cleanup ")
TOPIC_DRAFT_COMMENT = DitaClass("- topic/draft-comment ")

# Inline elements
TOPIC_XREF = DitaClass("- topic/xref ")
TOPIC_IMAGE = DitaClass("- topic/image ")
TOPIC_ALT = DitaClass("- topic/alt ")
PR_D_CODEPH = DitaClass("+ topic/ph pr-d/codeph ")
HI_D_B = DitaClass("+ topic/ph hi-d/b ")
HI_D_I = DitaClass("+ topic/ph hi-d/i ")
HI_D_U = DitaClass("+ topic/ph hi-d/u ")
HI_D_LINE_THROUGH = DitaClass("+ topic/ph hi-d/line-through ")
HI_D_SUP = DitaClass("+ topic/ph hi-d/sup ")
HI_D_SUB = DitaClass("+ topic/ph hi-d/sub ")

# Elements holding only other elements; pretty printing indents these alone
BLOCK_CONTAINERS = frozenset(
    {
        TOPIC_TOPIC,
        TOPIC_BODY,
        TOPIC_PROLOG,
        TOPIC_METADATA,
        TOPIC_KEYWORDS,
        TOPIC_UL,
        TOPIC_OL,
        TOPIC_LI,
        TOPIC_SIMPLETABLE,
        TOPIC_STHEAD,
        TOPIC_STROW,
        TOPIC_DL,
        TOPIC_DLENTRY,
    }
)

# Inline phrases; a container holding one directly is mixed content
INLINE_PHRASES = frozenset(
    {
        TOPIC_XREF,
        TOPIC_IMAGE,
        PR_D_CODEPH,
        HI_D_B,
        HI_D_I,
        HI_D_U,
        HI_D_LINE_THROUGH,
        HI_D_SUP,
        HI_D_SUB,
    }
)
