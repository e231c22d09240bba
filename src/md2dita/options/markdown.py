#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing."""
# src/md2dita/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from md2dita.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    parse_tables : bool, default True
        Whether to parse table syntax (GFM pipe tables).
    parse_strikethrough : bool, default True
        Whether to parse strikethrough syntax (~~text~~).
    parse_task_lists : bool, default True
        Whether to parse task list checkboxes (- [ ] and - [x]).
    parse_definition_lists : bool, default True
        Whether to parse definition lists (term : definition).
    parse_extended_inline : bool, default False
        Whether to parse ^^insert^^ (underline), ^superscript^ and ~subscript~.
    parse_frontmatter : bool, default True
        Whether to read a leading YAML front-matter block into a FrontMatter node.

    """

    parse_tables: bool = field(
        default=True,
        metadata={"help": "Parse table syntax (GFM pipe tables)", "cli_name": "no-parse-tables", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=True,
        metadata={
            "help": "Parse strikethrough syntax (~~text~~)",
            "cli_name": "no-parse-strikethrough",
            "importance": "core",
        },
    )
    parse_task_lists: bool = field(
        default=True,
        metadata={
            "help": "Parse task list checkboxes (- [ ] and - [x])",
            "cli_name": "no-parse-task-lists",
            "importance": "core",
        },
    )
    parse_definition_lists: bool = field(
        default=True,
        metadata={
            "help": "Parse definition lists (term : definition)",
            "cli_name": "no-parse-definition-lists",
            "importance": "advanced",
        },
    )
    parse_extended_inline: bool = field(
        default=False,
        metadata={
            "help": "Parse ^^insert^^, ^superscript^ and ~subscript~ inline syntax",
            "importance": "advanced",
        },
    )
    parse_frontmatter: bool = field(
        default=True,
        metadata={
            "help": "Parse a YAML front-matter block at document start",
            "cli_name": "no-parse-frontmatter",
            "importance": "core",
        },
    )
