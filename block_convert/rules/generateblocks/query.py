"""Query loop custom elements to ``generateblocks`` query blocks.

Handles ``<query>``, ``<looper>``, ``<loop-item>``, ``<query-page-numbers>``
and ``<query-no-results>``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import get_attributes, parse_int
from block_convert.core.ids import short_id
from block_convert.core.rule import BaseRule, render_html


@dataclass(frozen=True)
class QueryElement:
    """How one query custom element maps to a block."""

    block_name: str
    tag_name: str


QUERY_ELEMENTS = {
    "query": QueryElement("generateblocks/query", "section"),
    "looper": QueryElement("generateblocks/looper", "div"),
    "loop-item": QueryElement("generateblocks/loop-item", "article"),
    "query-page-numbers": QueryElement("generateblocks/query-page-numbers", "nav"),
    "query-no-results": QueryElement("generateblocks/query-no-results", "div"),
}

# HTML attribute -> block attribute; "query." targets the nested query object.
QUERY_ATTRIBUTES = {
    "post-type": "query.post_type",
    "posts-per-page": "query.posts_per_page",
    "meta-query": "query.meta_query",
    "tax-query": "query.tax_query",
    "order-by": "query.orderby",
    "order": "query.order",
    "inherit-query": "inheritQuery",
    "query-id": "queryId",
}

PAGINATION_ATTRIBUTES = {
    "mid-size": "midSize",
    "show-all": "showAll",
}

_CUSTOM_ATTRIBUTES = (*QUERY_ATTRIBUTES, *PAGINATION_ATTRIBUTES, "class", "tag", "field")


def _parse_bool(value: str) -> bool:
    return value == "true"


class QueryRule(BaseRule):
    """Converts query loop custom elements."""

    name = "generateblocks.query"
    priority = 75
    supported_elements = tuple(QUERY_ELEMENTS)

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() in QUERY_ELEMENTS

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        tag = element.name.lower()
        mapping = QUERY_ELEMENTS[tag]

        if tag == "query-no-results":
            return self.convert_no_results(element, mapping, context)

        attrs = self.base_attributes(element, mapping, context)
        if tag == "query":
            attrs.update(self.query_attributes(element))
        elif tag == "query-page-numbers":
            attrs.update(self.pagination_attributes(element))

        if attrs.get("uniqueId"):
            attrs["blockId"] = f"block-{attrs['uniqueId'][:8]}-{short_id()}"
        attrs["metadata"] = {"name": f"{tag.capitalize()} Element"}
        class_name = self.defaults.class_name_for(mapping.block_name)
        if class_name:
            attrs["className"] = class_name

        opening_tag = self.build_opening_tag(mapping.tag_name, attrs, mapping.block_name)
        closing_tag = f"</{mapping.tag_name}>"

        if tag == "query-page-numbers":
            # Pagination is rendered by the editor; children are dropped.
            html = opening_tag + closing_tag
            return Block(block_name=mapping.block_name, attrs=attrs, content=[html], html=html)

        children, content = self.convert_children(element, context, promote_text=False)
        content = [opening_tag, *content, closing_tag]
        return Block(
            block_name=mapping.block_name,
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )

    def base_attributes(
        self, element: Tag, mapping: QueryElement, context: ConversionContext
    ) -> dict[str, Any]:
        """uniqueId, tagName and globalClasses."""
        attrs: dict[str, Any] = {}
        if context.generate_unique_ids:
            attrs["uniqueId"] = short_id()
        attrs["tagName"] = mapping.tag_name
        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["globalClasses"] = classes
        return attrs

    def query_attributes(self, element: Tag) -> dict[str, Any]:
        """Translate query HTML attributes, nesting post parameters under ``query``."""
        source = get_attributes(element)
        query: dict[str, Any] = {}
        top_level: dict[str, Any] = {}

        for html_attr, block_attr in QUERY_ATTRIBUTES.items():
            if html_attr not in source:
                continue
            value: Any = source[html_attr]

            if html_attr in ("meta-query", "tax-query"):
                try:
                    decoded = json.loads(value)
                except ValueError:
                    decoded = None
                if decoded is not None:
                    value = decoded
            elif html_attr == "posts-per-page":
                value = parse_int(value)
            elif html_attr == "inherit-query":
                value = _parse_bool(value)

            if block_attr.startswith("query."):
                query[block_attr[len("query."):]] = value
            else:
                top_level[block_attr] = value

        attrs = dict(top_level)
        if query:
            attrs["query"] = query
        return attrs

    def pagination_attributes(self, element: Tag) -> dict[str, Any]:
        """Translate ``mid-size`` and ``show-all``."""
        source = get_attributes(element)
        attrs: dict[str, Any] = {}
        for html_attr, block_attr in PAGINATION_ATTRIBUTES.items():
            if html_attr not in source:
                continue
            if html_attr == "mid-size":
                attrs[block_attr] = parse_int(source[html_attr])
            else:
                attrs[block_attr] = _parse_bool(source[html_attr])
        return attrs

    def convert_no_results(
        self, element: Tag, mapping: QueryElement, context: ConversionContext
    ) -> Block:
        """The no-results block has no wrapper tag of its own."""
        attrs: dict[str, Any] = {}
        if context.generate_unique_ids:
            attrs["uniqueId"] = short_id()

        classes = self.extract_css_classes(element, context)
        if classes:
            attrs["globalClasses"] = classes

        html_attrs = {
            name: value
            for name, value in get_attributes(element).items()
            if name not in _CUSTOM_ATTRIBUTES
        }
        if html_attrs:
            attrs["htmlAttributes"] = html_attrs

        if attrs.get("uniqueId"):
            attrs["blockId"] = f"block-{attrs['uniqueId'][:8]}-{short_id()}"
        attrs["metadata"] = {"name": "Query-no-results Element"}
        class_name = self.defaults.class_name_for(mapping.block_name)
        if class_name:
            attrs["className"] = class_name

        children, content = self.convert_children(element, context, promote_text=False)
        return Block(
            block_name=mapping.block_name,
            attrs=attrs,
            children=children,
            content=content,
            html=render_html(content, children),
        )
