"""Tests for MDX content sanitisation."""

from __future__ import annotations

from agentdocs.sanitize import clean_mdx_content


class TestCleanMdxContent:
    """Tests for clean_mdx_content."""

    def test_tip_admonition(self) -> None:
        """A tip block becomes a bold label line."""
        assert clean_mdx_content(":::tip\nDo X\n:::") == "**tip:** Do X"

    def test_admonition_with_title(self) -> None:
        """Inline admonition titles follow the label."""
        result = clean_mdx_content("Intro\n\n:::warning Careful\nBody\n:::\n")
        assert "**warning:** Careful" in result
        assert ":::" not in result

    def test_import_lines_removed(self) -> None:
        """MDX import statements are dropped."""
        content = "import Tabs from '@theme/Tabs';\n\n# Install"
        assert clean_mdx_content(content) == "# Install"

    def test_nested_components_unwrapped(self) -> None:
        """Nested capitalised components keep only their text."""
        content = '<Tabs><TabItem value="pip">Use pip</TabItem></Tabs>'
        assert clean_mdx_content(content) == "Use pip"

    def test_self_closing_component_removed(self) -> None:
        """Self-closing components disappear."""
        assert clean_mdx_content("Text <Diagram />") == "Text"

    def test_lowercase_html_kept(self) -> None:
        """Plain HTML tags are not touched."""
        content = "<div>x</div><br/>"
        assert clean_mdx_content(content) == content

    def test_blank_lines_collapsed(self) -> None:
        """Runs of blank lines collapse to one."""
        assert clean_mdx_content("\n\na\n\n\n\nb\n") == "a\n\nb"

    def test_plain_markdown_unchanged(self) -> None:
        """Ordinary Markdown passes through."""
        content = "# Title\n\nSome `code` and [a link](#x)."
        assert clean_mdx_content(content) == content
