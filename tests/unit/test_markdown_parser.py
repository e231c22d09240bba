#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_markdown_parser.py
"""Unit tests for the Markdown to AST converter."""

import io

import pytest

from md2dita.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Comment,
    DefinitionDescription,
    DefinitionList,
    Document,
    Emphasis,
    FrontMatter,
    Heading,
    HTMLBlock,
    Image,
    LineBreak,
    Link,
    List,
    Paragraph,
    Strikethrough,
    Strong,
    Superscript,
    Table,
    ThematicBreak,
)
from md2dita.ast.utils import extract_text
from md2dita.exceptions import AcquisitionError, InvalidOptionsError, ParsingError
from md2dita.options import DitaRendererOptions, MarkdownParserOptions
from md2dita.parsers.markdown import MarkdownToAstConverter, markdown_to_ast


@pytest.mark.unit
class TestMarkdownBasics:
    """Test basic markdown parsing."""

    def test_simple_paragraph(self):
        """Test parsing a simple paragraph."""
        doc = markdown_to_ast("This is a paragraph.")

        assert isinstance(doc, Document)
        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Paragraph)
        assert extract_text(doc.children[0], joiner="") == "This is a paragraph."

    def test_heading_levels(self):
        """Test parsing different heading levels."""
        doc = markdown_to_ast("# H1\n## H2\n### H3\n#### H4\n##### H5\n###### H6")

        assert [child.level for child in doc.children] == [1, 2, 3, 4, 5, 6]
        assert all(isinstance(child, Heading) for child in doc.children)

    def test_blank_lines_dropped(self):
        """Test that blank lines produce no nodes."""
        doc = markdown_to_ast("First.\n\n\n\nSecond.")

        assert len(doc.children) == 2

    def test_thematic_break(self):
        """Test parsing a horizontal rule."""
        doc = markdown_to_ast("Above\n\n***\n\nBelow")

        assert isinstance(doc.children[1], ThematicBreak)

    def test_block_quote(self):
        """Test that quotes keep their block children."""
        doc = markdown_to_ast("> ## Note\n>\n> Quoted text")

        quote = doc.children[0]
        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Heading)
        assert isinstance(quote.children[1], Paragraph)


@pytest.mark.unit
class TestInlineFormatting:
    """Test inline formatting elements."""

    def test_strong_and_emphasis(self):
        """Test bold and italic text."""
        doc = markdown_to_ast("Some **bold** and *italic* text.")

        content = doc.children[0].content
        assert any(isinstance(node, Strong) for node in content)
        assert any(isinstance(node, Emphasis) for node in content)

    def test_inline_code(self):
        """Test code spans."""
        doc = markdown_to_ast("Run `md2dita --help` now.")

        code = next(node for node in doc.children[0].content if isinstance(node, Code))
        assert code.content == "md2dita --help"

    def test_strikethrough(self):
        """Test GFM strikethrough."""
        doc = markdown_to_ast("This is ~~gone~~.")

        assert any(isinstance(node, Strikethrough) for node in doc.children[0].content)

    def test_strikethrough_disabled(self):
        """Test that strikethrough can be turned off."""
        doc = markdown_to_ast("This is ~~gone~~.", MarkdownParserOptions(parse_strikethrough=False))

        assert not any(isinstance(node, Strikethrough) for node in doc.children[0].content)

    def test_link(self):
        """Test link URL, text and title."""
        doc = markdown_to_ast('See [the guide](guide.md "Guide").')

        link = next(node for node in doc.children[0].content if isinstance(node, Link))
        assert link.url == "guide.md"
        assert link.title == "Guide"
        assert extract_text(link.content, joiner="") == "the guide"

    def test_image(self):
        """Test image URL and alt text."""
        doc = markdown_to_ast("![Architecture diagram](arch.png)")

        image = next(node for node in doc.children[0].content if isinstance(node, Image))
        assert image.url == "arch.png"
        assert image.alt_text == "Architecture diagram"

    def test_soft_and_hard_breaks(self):
        """Test that both break kinds become LineBreak nodes."""
        doc = markdown_to_ast("one\ntwo  \nthree")

        breaks = [node for node in doc.children[0].content if isinstance(node, LineBreak)]
        assert [node.soft for node in breaks] == [True, False]

    def test_superscript_extension(self):
        """Test the optional superscript syntax."""
        doc = markdown_to_ast("2^10^ bytes", MarkdownParserOptions(parse_extended_inline=True))

        assert any(isinstance(node, Superscript) for node in doc.children[0].content)

    def test_superscript_off_by_default(self):
        """Test that extended inline syntax is off by default."""
        doc = markdown_to_ast("2^10^ bytes")

        assert not any(isinstance(node, Superscript) for node in doc.children[0].content)


@pytest.mark.unit
class TestBlocks:
    """Test lists, code, tables and other blocks."""

    def test_unordered_list(self):
        """Test a tight bullet list."""
        doc = markdown_to_ast("- one\n- two")

        lst = doc.children[0]
        assert isinstance(lst, List)
        assert lst.ordered is False
        assert lst.tight is True
        assert len(lst.items) == 2
        assert isinstance(lst.items[0].children[0], Paragraph)

    def test_ordered_list_start(self):
        """Test an ordered list starting at 3."""
        doc = markdown_to_ast("3. three\n4. four")

        lst = doc.children[0]
        assert lst.ordered is True
        assert lst.start == 3

    def test_loose_list(self):
        """Test that blank lines between items make the list loose."""
        doc = markdown_to_ast("- one\n\n- two")

        assert doc.children[0].tight is False

    def test_task_list(self):
        """Test task list checkbox states."""
        doc = markdown_to_ast("- [x] done\n- [ ] todo\n- plain")

        assert [item.task_status for item in doc.children[0].items] == ["checked", "unchecked", None]

    def test_task_list_disabled(self):
        """Test that checkboxes stay text when task lists are off."""
        doc = markdown_to_ast("- [x] done", MarkdownParserOptions(parse_task_lists=False))

        assert doc.children[0].items[0].task_status is None

    def test_fenced_code_with_language(self):
        """Test the language of a fenced code block."""
        doc = markdown_to_ast("```python\nprint(1)\n```")

        code = doc.children[0]
        assert isinstance(code, CodeBlock)
        assert code.language == "python"
        assert code.content == "print(1)"

    def test_fenced_code_info_string(self):
        """Test that only the first word of the info string is the language."""
        doc = markdown_to_ast("```c++ title=main.cpp\nint x;\n```")

        assert doc.children[0].language == "c++"
        assert doc.children[0].metadata["info_string"] == "c++ title=main.cpp"

    def test_invalid_language_dropped(self):
        """Test that a language with unsupported characters is ignored."""
        doc = markdown_to_ast("```<script>\nx\n```")

        assert doc.children[0].language is None

    def test_indented_code(self):
        """Test an indented code block without a language."""
        doc = markdown_to_ast("    indented\n    code")

        code = doc.children[0]
        assert isinstance(code, CodeBlock)
        assert code.language is None
        assert code.content == "indented\ncode"

    def test_table(self):
        """Test a pipe table with alignment."""
        doc = markdown_to_ast("| Key | Value |\n|:----|------:|\n| port | 8080 |\n| host | local |")

        table = doc.children[0]
        assert isinstance(table, Table)
        assert table.header is not None and table.header.is_header
        assert [extract_text(cell) for cell in table.header.cells] == ["Key", "Value"]
        assert len(table.rows) == 2
        assert table.alignments == ["left", "right"]

    def test_table_disabled(self):
        """Test that tables are paragraphs when the table syntax is off."""
        doc = markdown_to_ast("| a |\n|---|\n| b |", MarkdownParserOptions(parse_tables=False))

        assert not any(isinstance(child, Table) for child in doc.children)

    def test_definition_list(self):
        """Test a term with a definition."""
        doc = markdown_to_ast("API\n: Application programming interface\n")

        dl = doc.children[0]
        assert isinstance(dl, DefinitionList)
        term, descriptions = dl.items[0]
        assert extract_text(term) == "API"
        assert isinstance(descriptions[0], DefinitionDescription)
        assert extract_text(descriptions[0]) == "Application programming interface"

    def test_html_block_and_comment(self):
        """Test raw HTML blocks and HTML comments."""
        doc = markdown_to_ast("<div>raw</div>\n\n<!-- reviewer note -->\n")

        assert isinstance(doc.children[0], HTMLBlock)
        assert isinstance(doc.children[1], Comment)
        assert doc.children[1].content == "reviewer note"


@pytest.mark.unit
class TestFrontMatter:
    """Test YAML front-matter handling."""

    def test_front_matter_first_child(self):
        """Test that front matter becomes the first document child."""
        doc = markdown_to_ast("---\nauthor: Jane\nkeyword: [a, b]\n---\n# Title\n")

        front_matter = doc.children[0]
        assert isinstance(front_matter, FrontMatter)
        assert front_matter.data == {"author": ["Jane"], "keyword": ["a", "b"]}
        assert front_matter.source_location.line == 1
        assert isinstance(doc.children[1], Heading)

    def test_scalars_stay_strings(self):
        """Test that YAML scalars are kept as the author wrote them."""
        doc = markdown_to_ast("---\nversion: 1.10\ndraft: yes\nempty:\n---\n")

        assert doc.children[0].data == {"version": ["1.10"], "draft": ["yes"], "empty": [""]}

    def test_dot_terminator(self):
        """Test that '...' also closes the block."""
        doc = markdown_to_ast("---\nauthor: Jane\n...\nBody")

        assert isinstance(doc.children[0], FrontMatter)
        assert isinstance(doc.children[1], Paragraph)

    def test_empty_front_matter(self):
        """Test an empty block."""
        doc = markdown_to_ast("---\n---\n# Title")

        assert doc.children[0].data == {}

    def test_unclosed_block_is_markdown(self):
        """Test that an unterminated block is ordinary Markdown."""
        doc = markdown_to_ast("---\nnot front matter")

        assert not any(isinstance(child, FrontMatter) for child in doc.children)

    def test_not_at_start(self):
        """Test that a block after other content is not front matter."""
        doc = markdown_to_ast("Intro\n\n---\nauthor: Jane\n---\n")

        assert not isinstance(doc.children[0], FrontMatter)

    def test_invalid_yaml(self):
        """Test that broken YAML is a parsing error."""
        with pytest.raises(ParsingError) as exc_info:
            markdown_to_ast("---\nkey: [unclosed\n---\n")
        assert exc_info.value.parsing_stage == "frontmatter"

    def test_non_mapping_yaml(self):
        """Test that a YAML list is rejected."""
        with pytest.raises(ParsingError):
            markdown_to_ast("---\n- a\n- b\n---\n")

    def test_front_matter_disabled(self):
        """Test that the block is left to mistune when disabled."""
        doc = markdown_to_ast("---\nauthor: Jane\n---\n", MarkdownParserOptions(parse_frontmatter=False))

        assert not any(isinstance(child, FrontMatter) for child in doc.children)


@pytest.mark.unit
class TestParserInputs:
    """Test input handling of the converter."""

    def test_wrong_options_type(self):
        """Test that renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownToAstConverter(DitaRendererOptions())  # type: ignore[arg-type]

    def test_parse_bytes_with_bom(self):
        """Test that BOM-prefixed bytes parse like plain text."""
        converter = MarkdownToAstConverter()

        assert converter.parse(b"\xef\xbb\xbf# Title") == converter.parse(b"# Title")

    def test_parse_declared_encoding(self):
        """Test decoding byte input with the declared encoding."""
        converter = MarkdownToAstConverter(MarkdownParserOptions(encoding="latin-1"))
        doc = converter.parse(io.BytesIO("# Café".encode("latin-1")))

        assert extract_text(doc.children[0]) == "Café"

    def test_parse_file_records_source(self, tmp_path):
        """Test that the document records where it came from."""
        path = tmp_path / "guide.md"
        path.write_text("# Guide\n", encoding="utf-8")
        doc = MarkdownToAstConverter().parse(path)

        assert doc.metadata["source"] == str(path)

    def test_undecodable_input(self):
        """Test that invalid UTF-8 is an acquisition error."""
        with pytest.raises(AcquisitionError):
            MarkdownToAstConverter().parse(b"# Caf\xe9")

    def test_parse_text_directly(self):
        """Test parsing already-decoded text with a source name."""
        doc = MarkdownToAstConverter().parse_text("# Title", source_name="inline")

        assert doc.metadata == {"source": "inline"}
