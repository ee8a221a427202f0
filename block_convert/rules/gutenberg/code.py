"""Preformatted and block-level code to ``core/code``."""

from __future__ import annotations

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html, text_content
from block_convert.rules.gutenberg.base import GutenbergRule

# Parents that make a <code> element inline.
INLINE_PARENTS = ("p", "span", "a", "em", "strong", "b", "i")


class CodeRule(GutenbergRule):
    """Converts ``<pre>`` and ``<code>`` outside inline text."""

    name = "gutenberg.code"
    priority = 70
    supported_elements = ("pre", "code")

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        tag_name = element.name.lower()
        if tag_name == "pre":
            return True
        if tag_name == "code":
            parent = element.parent
            return parent is None or parent.name.lower() not in INLINE_PARENTS
        return False

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.gutenberg_attributes(element, context)

        source = element
        if element.name.lower() == "pre":
            source = element.find("code") or element
        code = text_content(source)
        if code:
            attrs["content"] = code
        attrs["blockId"] = self.block_id()

        html = f'<pre class="wp-block-code"><code>{escape_html(code)}</code></pre>'
        return Block(block_name="core/code", attrs=attrs, content=[html], html=html)
