#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/constants.py
"""Constants and default values for the md2dita library.

Constants are organized by category:
1. Input Acquisition - Encoding and byte-order-mark handling
2. DITA Output - Doctype, attribute names and front-matter keys
3. Command Line - Exit codes
"""

from __future__ import annotations

import codecs

# =============================================================================
# Input Acquisition
# =============================================================================

DEFAULT_INPUT_ENCODING = "utf-8"
UTF8_BOM = codecs.BOM_UTF8

# Strings longer than this are never treated as a filesystem path
MAX_PATH_LENGTH = 260

DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "md2dita-fetcher/1.0"
DEPS_HTTP = [("httpx", ">=0.28.1")]

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn")

# Link targets written with format="markdown"
MARKDOWN_LINK_EXTENSIONS = (".md", ".markdown")

# =============================================================================
# DITA Output
# =============================================================================

DITA_TOPIC_DOCTYPE = '<!DOCTYPE topic PUBLIC "-//OASIS//DTD DITA Topic//EN" "topic.dtd">'
DEFAULT_OUTPUT_ENCODING = "utf-8"
DEFAULT_TOPIC_ID = "topic"

ATTRIBUTE_NAME_CLASS = "class"
ATTRIBUTE_NAME_ID = "id"
ATTRIBUTE_NAME_NAME = "name"
ATTRIBUTE_NAME_VALUE = "value"
ATTRIBUTE_NAME_HREF = "href"
ATTRIBUTE_NAME_SCOPE = "scope"
ATTRIBUTE_NAME_FORMAT = "format"
ATTRIBUTE_NAME_OUTPUTCLASS = "outputclass"
ATTRIBUTE_NAME_AUDIENCE = "audience"
ATTRIBUTE_NAME_VIEW = "view"
ATTRIBUTE_NAME_APPID = "appid"

# Front-matter key naming the topic identifier
IDENTIFIER_KEY = ATTRIBUTE_NAME_ID

# Front-matter keys whose presence triggers the metadata group wrapper
METADATA_GROUP_KEYS = ("audience", "category", "keyword")

# =============================================================================
# Command Line
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_ACQUISITION_ERROR = 3
EXIT_RENDERING_ERROR = 4
