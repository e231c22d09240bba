#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2dita/parsers/markdown.py
"""Markdown to AST converter.

This module builds md2dita document trees from Markdown text using the
mistune parser. A leading YAML front-matter block is read with PyYAML and
becomes a ``FrontMatter`` node, the first child of the document.

Front matter is loaded with ``yaml.BaseLoader``: every scalar stays the
string the author wrote (``version: 1.10`` is ``"1.10"``, not a float), so
metadata values reach the DITA prolog unchanged.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Literal

import mistune
import yaml

from md2dita.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Comment,
    CommentInline,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FrontMatter,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SourceLocation,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    Underline,
    front_matter_from_mapping,
)
from md2dita.exceptions import ParsingError
from md2dita.options.markdown import MarkdownParserOptions
from md2dita.parsers.base import BaseParser
from md2dita.utils.inputs import InputType

logger = logging.getLogger(__name__)

_FRONTMATTER_OPEN = "---"
_FRONTMATTER_CLOSE = ("---", "...")

# Code fence language identifiers: letters, digits, and a few joiners (c++, objective-c, shell_session)
_LANGUAGE_PATTERN = re.compile(r"^[A-Za-z0-9_+#.\-]{1,50}$")


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to AST representation.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")

    Without tables:

        >>> converter = MarkdownToAstConverter(MarkdownParserOptions(parse_tables=False))

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    def parse(self, input_data: InputType) -> Document:
        """Parse Markdown input into AST Document.

        Parameters
        ----------
        input_data : InputSource, str, Path, bytes or file-like
            Markdown input to parse. Strings naming a URL or Markdown file
            are read from that location; other strings are the Markdown text.

        Returns
        -------
        Document
            AST document node. ``metadata["source"]`` names the input.

        Raises
        ------
        AcquisitionError
            If the input cannot be read or decoded
        ParsingError
            If the front matter is not valid YAML or mistune fails

        """
        markdown_content, source_name = self._load_text_content(input_data)
        return self.parse_text(markdown_content, source_name=source_name)

    def parse_text(self, markdown_content: str, source_name: str | None = None) -> Document:
        """Parse already-decoded Markdown text into an AST Document.

        Parameters
        ----------
        markdown_content : str
            Markdown text
        source_name : str or None, default None
            Name recorded as ``metadata["source"]`` on the document

        Returns
        -------
        Document
            AST document node

        """
        children: list[Node] = []

        if self.options.parse_frontmatter:
            extracted = self._extract_frontmatter(markdown_content)
            if extracted is not None:
                markdown_content, front_matter = extracted
                children.append(front_matter)

        try:
            tokens, _state = self._create_markdown().parse(markdown_content)
        except Exception as e:
            raise ParsingError(f"Failed to parse Markdown: {e}", parsing_stage="tokenize", original_error=e) from e

        if isinstance(tokens, list):
            children.extend(self._process_tokens(tokens))

        metadata: dict[str, Any] = {}
        if source_name:
            metadata["source"] = source_name

        logger.debug(f"Parsed {source_name or 'markdown'} into {len(children)} top-level nodes")
        return Document(children=children, metadata=metadata)

    def _create_markdown(self) -> mistune.Markdown:
        plugins: list[Any] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_definition_lists:
            plugins.append("def_list")
        if self.options.parse_extended_inline:
            plugins.extend(["insert", "superscript", "subscript"])
        # renderer=None returns the token stream instead of HTML
        return mistune.create_markdown(plugins=plugins, renderer=None)

    def _extract_frontmatter(self, content: str) -> tuple[str, FrontMatter] | None:
        """Split a leading YAML front-matter block from the content.

        Parameters
        ----------
        content : str
            Markdown content

        Returns
        -------
        tuple[str, FrontMatter] or None
            (remaining_content, front_matter) if a block is present, None otherwise

        Raises
        ------
        ParsingError
            If the block is not valid YAML or is not a mapping

        """
        lines = content.splitlines(keepends=True)
        if not lines or lines[0].rstrip("\r\n") != _FRONTMATTER_OPEN:
            return None

        end_index = -1
        for i in range(1, len(lines)):
            if lines[i].rstrip() in _FRONTMATTER_CLOSE:
                end_index = i
                break

        if end_index <= 0:
            return None

        yaml_content = "".join(lines[1:end_index])
        remaining_content = "".join(lines[end_index + 1 :])

        try:
            data = yaml.load(yaml_content, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            raise ParsingError(
                f"Invalid YAML front matter: {e}", parsing_stage="frontmatter", original_error=e
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ParsingError(
                f"Front matter must be a mapping, got {type(data).__name__}", parsing_stage="frontmatter"
            )

        front_matter = FrontMatter(
            data=front_matter_from_mapping(data),
            metadata={"format": "yaml"},
            source_location=SourceLocation(format="markdown", line=1),
        )
        logger.debug(f"Extracted front matter with keys: {list(front_matter.data)}")
        return remaining_content, front_matter

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of mistune block tokens into AST nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single mistune block token into an AST node.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting AST node, None for tokens without content (blank lines)

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return Paragraph(content=self._process_inline_tokens(token.get("children", [])))
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return self._process_html_block(token)
        elif token_type == "def_list":
            return self._process_definition_list(token)

        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token."""
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1

        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        children = token.get("children", [])
        content = self._process_inline_tokens(children) if isinstance(children, list) else []

        return Heading(level=level, content=content)

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The first word of the fence info string is the language. A language
        containing characters outside the identifier set is dropped; the raw
        info string is kept in ``metadata["info_string"]``.

        Parameters
        ----------
        token : dict
            Code block token with 'raw' and optional 'attrs'

        Returns
        -------
        CodeBlock
            Code block AST node

        """
        code_content = token.get("raw", "")
        # mistune keeps the newline before the closing fence
        if code_content.endswith("\n"):
            code_content = code_content[:-1]
        attrs = token.get("attrs", {})
        info_string = attrs.get("info") if isinstance(attrs, dict) else None

        metadata: dict[str, Any] = {}
        language = None

        if info_string:
            info_string = info_string.strip()
            metadata["info_string"] = info_string
            parts = info_string.split(maxsplit=1)
            if parts and _LANGUAGE_PATTERN.match(parts[0]):
                language = parts[0]
            elif parts:
                logger.warning(f"Ignoring invalid code block language identifier: {parts[0][:50]!r}")

        return CodeBlock(content=code_content, language=language, metadata=metadata)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight' and 'attrs' (ordered, start)

        Returns
        -------
        List
            List AST node

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = token.get("tight", True)

        children = token.get("children", [])
        if not isinstance(children, list):
            children = []

        items = [self._process_list_item(child) for child in children if isinstance(child, dict)]

        return List(ordered=ordered, items=items, start=start, tight=tight)

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        """Process list_item and task_list_item tokens."""
        content = self._process_tokens(token.get("children", []))

        task_status: Literal["checked", "unchecked"] | None = None
        attrs = token.get("attrs", {})
        if isinstance(attrs, dict) and "checked" in attrs:
            task_status = "checked" if attrs["checked"] else "unchecked"

        return ListItem(children=content, task_status=task_status)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Parameters
        ----------
        token : dict
            Table token whose children are 'table_head' and 'table_body'

        Returns
        -------
        Table
            Table AST node

        """
        header = None
        rows = []
        alignments = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # Header cells are direct children of table_head
                cells = self._process_table_cells(section)
                alignments = [cell.alignment for cell in cells]
                header = TableRow(cells=cells, is_header=True)
            elif section_type == "table_body":
                for row_token in section.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(row_token), is_header=False))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, row_token: dict[str, Any]) -> list[TableCell]:
        cells = []
        for cell_token in row_token.get("children", []):
            if cell_token.get("type") != "table_cell":
                continue
            content = self._process_inline_tokens(cell_token.get("children", []))
            alignment = cell_token.get("attrs", {}).get("align")
            cells.append(TableCell(content=content, alignment=alignment))
        return cells

    def _process_html_block(self, token: dict[str, Any]) -> HTMLBlock | Comment:
        """Process HTML block token into a comment or raw HTML block."""
        content = token.get("raw", "")

        if self._is_html_comment(content):
            return Comment(content=self._extract_comment_text(content), metadata={"comment_type": "html"})

        return HTMLBlock(content=content)

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process definition list token.

        Parameters
        ----------
        token : dict
            Definition list token whose children alternate between term
            ('def_list_head') and description ('def_list_item') tokens

        Returns
        -------
        DefinitionList
            Definition list AST node

        """
        items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []

        current_term: DefinitionTerm | None = None
        current_descriptions: list[DefinitionDescription] = []

        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                if current_term is not None:
                    items.append((current_term, current_descriptions))
                current_term = DefinitionTerm(content=self._process_inline_tokens(child.get("children", [])))
                current_descriptions = []
            elif child_type in ("def_list_item", "def_list_content"):
                desc_content = self._process_tokens(child.get("children", []))
                current_descriptions.append(DefinitionDescription(content=desc_content))

        if current_term is not None:
            items.append((current_term, current_descriptions))

        return DefinitionList(items=items)

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens into inline AST nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is not None:
                nodes.append(node)

        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        """Handle strong token."""
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle emphasis token."""
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        children = token.get("children", [])
        if not isinstance(children, list):
            children = []
        return Link(url=attrs.get("url", ""), content=self._process_inline_tokens(children), title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; alt text is the plain text of its children."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        children = token.get("children", [])
        alt_parts = []
        if isinstance(children, list):
            for child in children:
                if isinstance(child, dict) and child.get("type") in ("text", "codespan"):
                    alt_parts.append(child.get("raw", ""))
        return Image(url=attrs.get("url", ""), alt_text="".join(alt_parts), title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle hard line break token."""
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle soft line break token."""
        return LineBreak(soft=True)

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        """Handle strikethrough token."""
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_insert_token(self, token: dict[str, Any]) -> Underline:
        """Handle insert (^^text^^) token."""
        return Underline(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_superscript_token(self, token: dict[str, Any]) -> Superscript:
        """Handle superscript token."""
        return Superscript(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_subscript_token(self, token: dict[str, Any]) -> Subscript:
        """Handle subscript token."""
        return Subscript(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_inline_html_token(self, token: dict[str, Any]) -> Node:
        """Handle inline_html token."""
        content = token.get("raw", "")

        if self._is_html_comment(content):
            return CommentInline(content=self._extract_comment_text(content), metadata={"comment_type": "html"})

        return HTMLInline(content=content)

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node or None
            Inline AST node, None for unrecognized token types

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "strikethrough": self._handle_strikethrough_token,
            "insert": self._handle_insert_token,
            "superscript": self._handle_superscript_token,
            "subscript": self._handle_subscript_token,
            "inline_html": self._handle_inline_html_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug(f"Skipping unsupported inline token type: {token_type}")
        return None

    def _is_html_comment(self, content: str) -> bool:
        stripped = content.strip()
        return stripped.startswith("<!--") and stripped.endswith("-->")

    def _extract_comment_text(self, content: str) -> str:
        """Return the text of an HTML comment without its markers."""
        return content.strip()[4:-3].strip()


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert a Markdown string to AST.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToAstConverter(options)
    return converter.parse_text(markdown_content)
