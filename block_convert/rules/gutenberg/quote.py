"""Blockquotes to ``core/quote`` with paragraph children."""

from __future__ import annotations

import copy

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html, inner_html, text_content
from block_convert.core.rule import render_html
from block_convert.rules.gutenberg.base import GutenbergRule


class QuoteRule(GutenbergRule):
    """Converts ``<blockquote>``.

    The quote's paragraphs become ``core/paragraph`` children; a quote
    without paragraphs gets one paragraph holding its text. The citation
    comes from a ``<cite>`` descendant or the ``cite`` attribute.
    """

    name = "gutenberg.quote"
    priority = 70
    supported_elements = ("blockquote",)
    wrapper_class = "wp-block-quote"

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() == "blockquote"

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.gutenberg_attributes(element, context)
        attrs["blockId"] = self.block_id()

        # Work on a copy so the cite can be removed without touching the input tree.
        quote = copy.copy(element)
        citation = ""
        cite = quote.find("cite")
        if cite is not None:
            citation = text_content(cite).strip()
            cite.decompose()
        if not citation and element.get("cite"):
            citation = element["cite"]

        value = inner_html(quote).strip()
        if value:
            attrs["value"] = value
        if citation:
            attrs["citation"] = citation

        paragraphs = [text_content(p).strip() for p in quote.find_all("p")]
        if not paragraphs:
            text = text_content(quote).strip()
            paragraphs = [text] if text else []
        children = [self.paragraph(text) for text in paragraphs]

        content: list[str | None] = [
            self.build_gutenberg_tag("blockquote", attrs),
            *[None] * len(children),
            "</blockquote>",
        ]
        return Block(
            block_name="core/quote",
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )

    def paragraph(self, text: str) -> Block:
        html = f"<p>{escape_html(text)}</p>"
        return Block(
            block_name="core/paragraph",
            attrs={"blockId": self.block_id()},
            content=[html],
            html=html,
        )
