#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/utils/text.py
"""Text helpers for deriving DITA identifiers from heading text."""

from __future__ import annotations

import re
import unicodedata

from md2dita.constants import DEFAULT_TOPIC_ID


def make_unique_slug(slug: str, seen_slugs: dict[str, int], separator: str = "-") -> str:
    """Generate unique slug with duplicate handling.

    The first occurrence of a slug is returned unchanged. Later occurrences
    get a numeric suffix starting at 2. ``seen_slugs`` maps each base slug to
    its occurrence count and is mutated in place.

    Parameters
    ----------
    slug : str
        Base slug to make unique
    seen_slugs : dict[str, int]
        Occurrence counts per base slug (mutated in-place)
    separator : str, default = "-"
        Separator to use before numeric suffix

    Returns
    -------
    str
        Unique slug (with numeric suffix if needed)

    Examples
    --------
        >>> seen = {}
        >>> make_unique_slug("setup", seen)
        'setup'
        >>> make_unique_slug("setup", seen)
        'setup-2'

    """
    if slug in seen_slugs:
        seen_slugs[slug] += 1
        candidate = f"{slug}{separator}{seen_slugs[slug]}"
        # A literal heading may already have produced "setup-2"
        while candidate in seen_slugs:
            seen_slugs[slug] += 1
            candidate = f"{slug}{separator}{seen_slugs[slug]}"
        seen_slugs[candidate] = 1
        return candidate

    seen_slugs[slug] = 1
    return slug


def slugify(text: str, *, max_length: int = 100, separator: str = "-", default: str = DEFAULT_TOPIC_ID) -> str:
    """Create an identifier-safe slug from text.

    Accents are stripped through NFD decomposition, the text is lowercased,
    whitespace and underscores become the separator, and every other
    character outside ``[a-z0-9-]`` is dropped.

    Parameters
    ----------
    text : str
        Text to slugify (e.g., heading text)
    max_length : int, default = 100
        Maximum length of the slug
    separator : str, default = "-"
        The separator between words in the slug
    default : str, default = "topic"
        Value returned when nothing survives slugification

    Returns
    -------
    str
        Slug usable as an XML ID

    Examples
    --------
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Café résumé")
        'cafe-resume'
        >>> slugify("2024 Roadmap")
        'topic-2024-roadmap'

    """
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    slug = normalized.lower()
    slug = re.sub(r"[\s_]+", separator, slug)
    slug = re.sub(rf"[^a-z0-9\-{re.escape(separator)}]", "", slug)
    slug = re.sub(rf"{re.escape(separator)}+", separator, slug)
    slug = slug.strip(separator)

    if not slug:
        return default

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip(separator)

    # XML IDs cannot start with a digit or hyphen
    if not slug[0].isalpha():
        slug = f"{default}{separator}{slug}"

    return slug


__all__ = [
    "make_unique_slug",
    "slugify",
]
