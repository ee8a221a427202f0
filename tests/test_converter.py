"""Tests for HtmlToBlocksConverter and the dialect table."""

from __future__ import annotations

import pytest

from block_convert.core.context import ConversionContext
from block_convert.core.converter import ConversionResult, HtmlToBlocksConverter
from block_convert.core.dialects import DEFAULT_DIALECT, DIALECTS, resolve_dialect

NAMESPACES = {
    "generate-pro": "generateblocks",
    "greenshift": "greenshift-blocks",
}


class TestConvert:
    """Tests for the forward pipeline."""

    def test_hero_section(self, converter: HtmlToBlocksConverter, hero_html: str) -> None:
        """Test a container with a heading and a paragraph."""
        result = converter.convert(hero_html)

        assert result.success
        assert result.stats.total_blocks >= 3
        markers = [line.split()[1] for line in result.minified_markup.splitlines() if line.startswith("<!-- wp:")]
        assert markers == ["wp:generateblocks/element", "wp:generateblocks/text", "wp:generateblocks/text"]

        root = result.blocks[0]
        assert root.attrs["tagName"] == "div"
        assert root.attrs["globalClasses"] == ["hero"]
        assert [child.attrs["tagName"] for child in root.children] == ["h1", "p"]
        assert root.children[0].attrs["content"] == "Welcome"

    def test_empty_input_fails(self, converter: HtmlToBlocksConverter) -> None:
        """Test that empty and blank input produce a failure result."""
        for html in ("", "   \n"):
            result = converter.convert(html)
            assert not result.success
            assert result.error
            assert result.blocks == []

    def test_non_string_input_fails(self, converter: HtmlToBlocksConverter) -> None:
        """Test that non-string input produces a failure result."""
        assert not converter.convert(None).success  # type: ignore[arg-type]

    def test_unknown_option_fails(self, converter: HtmlToBlocksConverter, hero_html: str) -> None:
        """Test that bad options are reported, not raised."""
        result = converter.convert(hero_html, {"notAnOption": True})

        assert not result.success
        assert "notAnOption" in result.error

    def test_options_dict(self, converter: HtmlToBlocksConverter, hero_html: str) -> None:
        """Test options given as a camelCase dictionary."""
        result = converter.convert(hero_html, {"preserveClasses": False, "generateUniqueIds": False})

        root = result.blocks[0]
        assert "globalClasses" not in root.attrs
        assert "uniqueId" not in root.attrs
        assert "blockId" not in root.attrs

    def test_markup_variants(self, converter: HtmlToBlocksConverter, hero_html: str) -> None:
        """Test that markup is the minified rendering and both variants exist."""
        result = converter.convert(hero_html)

        assert result.markup == result.minified_markup
        assert result.unminified_markup.count("<!-- wp:") == 3
        assert result.minified_markup != result.unminified_markup
        assert result.original_html == hero_html

    def test_content_matches_children_everywhere(self, converter: HtmlToBlocksConverter) -> None:
        """Test the placeholder/children invariant on a varied document."""
        html = (
            "<section><h2>Title</h2>Some longer loose text inside the section"
            '<ul><li>One</li><li>Two</li></ul><img src="a.png" alt="A">'
            "<accordion><accordion-item><accordion-toggle>Q</accordion-toggle>"
            "<accordion-content><p>A</p></accordion-content></accordion-item></accordion>"
            "<blockquote><p>Quoted</p><cite>Someone</cite></blockquote></section>"
        )
        result = converter.convert(html)

        assert result.success
        assert all(block.is_consistent() for block in result.blocks)

    def test_rule_failure_becomes_failure_result(
        self, converter: HtmlToBlocksConverter, monkeypatch: pytest.MonkeyPatch, hero_html: str
    ) -> None:
        """Test that an exception inside a rule is reported as a failure."""
        rule = next(r for r in converter.registry if r.name == "generateblocks.text")

        def explode(element, context):
            raise RuntimeError("broken rule")

        monkeypatch.setattr(rule, "convert", explode)
        result = converter.convert(hero_html)

        assert not result.success
        assert "generateblocks.text" in result.error
        assert "broken rule" in result.error

    def test_context_instance(self, converter: HtmlToBlocksConverter) -> None:
        """Test passing a ConversionContext directly."""
        result = converter.convert("<p>Hi</p>", ConversionContext(generate_unique_ids=False))
        assert "uniqueId" not in result.blocks[0].attrs


class TestConversionResult:
    """Tests for ConversionResult serialization."""

    def test_success_to_dict(self, converter: HtmlToBlocksConverter, hero_html: str) -> None:
        """Test camelCase keys of a successful result."""
        data = converter.convert(hero_html).to_dict()

        assert data["success"] is True
        assert data["stats"]["totalBlocks"] == 3
        assert data["blocks"][0]["blockName"] == "generateblocks/element"
        assert {"markup", "unminifiedMarkup", "minifiedMarkup", "originalHtml", "timestamp"} <= set(data)

    def test_failure_to_dict(self) -> None:
        """Test that a failure carries only its error."""
        data = ConversionResult.failure("nope").to_dict()
        assert data["success"] is False
        assert data["error"] == "nope"
        assert "blocks" not in data


class TestDialects:
    """Tests for dialect selection."""

    def test_default_dialect(self, converter: HtmlToBlocksConverter) -> None:
        """Test that the default dialect is generate-pro."""
        assert converter.dialect == DEFAULT_DIALECT == "generate-pro"

    def test_unknown_dialect_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that unknown names resolve to the default with a warning."""
        assert resolve_dialect("wordpress-classic").name == DEFAULT_DIALECT
        assert "Unknown dialect" in caplog.text

    @pytest.mark.parametrize("name", sorted(DIALECTS))
    def test_form_first_fallback_last(self, name: str) -> None:
        """Test that every dialect brackets its rules with form and fallback."""
        rules = HtmlToBlocksConverter(name).registry.rules
        assert rules[0].name == "form"
        assert rules[-1].name == "fallback"

    def test_companion_priorities(self, converter: HtmlToBlocksConverter) -> None:
        """Test that core block rules sit below the dialect's own rules."""
        priorities = {provider["name"]: provider["priority"] for provider in converter.provider_stats()["providers"]}
        assert priorities["gutenberg.quote"] == 30
        assert priorities["gutenberg.group"] == 5
        assert priorities["generateblocks.element"] == 25

    def test_gutenberg_priorities(self, gutenberg_converter: HtmlToBlocksConverter) -> None:
        """Test the native priorities when gutenberg is the dialect."""
        priorities = {p["name"]: p["priority"] for p in gutenberg_converter.provider_stats()["providers"]}
        assert priorities["gutenberg.image"] == 80
        assert priorities["gutenberg.group"] == 25

    def test_namespaces_are_exclusive(self, hero_html: str) -> None:
        """Test that each dialect emits its own namespace and never another's."""
        for name, namespace in NAMESPACES.items():
            markup = HtmlToBlocksConverter(name).convert(hero_html).minified_markup
            assert f"wp:{namespace}/" in markup
            for other_name, other in NAMESPACES.items():
                if other_name != name:
                    assert f"wp:{other}/" not in markup

    def test_gutenberg_hero(self, gutenberg_converter: HtmlToBlocksConverter, hero_html: str) -> None:
        """Test the hero section as core blocks."""
        result = gutenberg_converter.convert(hero_html)

        root = result.blocks[0]
        assert root.block_name == "core/group"
        assert root.attrs["layout"] == {"type": "constrained"}
        assert [child.block_name for child in root.children] == ["core/heading", "core/paragraph"]
        assert "generateblocks" not in result.minified_markup

    def test_gutenberg_bare_text(self, gutenberg_converter: HtmlToBlocksConverter) -> None:
        """Test that bare text becomes a core paragraph in the gutenberg dialect."""
        result = gutenberg_converter.convert("Just words")
        assert result.blocks[0].block_name == "core/paragraph"
        assert result.blocks[0].html == "<p>Just words</p>"

    def test_bare_text_escaped(self, gutenberg_converter: HtmlToBlocksConverter) -> None:
        """Test that bare text is escaped when wrapped in a paragraph."""
        result = gutenberg_converter.convert("1 &lt; 2 &amp;&amp; 3 &gt; 2")
        assert result.blocks[0].attrs["content"] == "1 < 2 && 3 > 2"
        assert result.blocks[0].html == "<p>1 &lt; 2 &amp;&amp; 3 &gt; 2</p>"

    def test_generate_bare_text(self, converter: HtmlToBlocksConverter) -> None:
        """Test that bare text becomes a text block in the generateblocks dialects."""
        result = converter.convert("Just words")
        assert result.blocks[0].block_name == "generateblocks/text"
        assert result.blocks[0].attrs["content"] == "Just words"

    def test_generate_has_no_pro_rules(self, generate_converter: HtmlToBlocksConverter) -> None:
        """Test that the generate dialect leaves pro custom elements to the fallback."""
        result = generate_converter.convert("<accordion><accordion-item>x</accordion-item></accordion>")
        assert result.blocks[0].block_name == "core/html"
