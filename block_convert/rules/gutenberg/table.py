"""Tables to ``core/table`` with head, body and foot sections as attributes."""

from __future__ import annotations

from typing import Any

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import inner_html, parse_int
from block_convert.rules.gutenberg.base import GutenbergRule

TableRow = dict[str, list[dict[str, Any]]]


def extract_row(row: Tag) -> TableRow:
    """Cells of one row with their content, tag and spans above one."""
    cells = []
    for cell in row.select("td, th"):
        data: dict[str, Any] = {"content": inner_html(cell).strip(), "tag": cell.name.lower()}
        for span in ("colspan", "rowspan"):
            value = parse_int(cell.get(span) or "")
            if value is not None and value > 1:
                data[span] = value
        cells.append(data)
    return {"cells": cells}


def render_section(tag: str, rows: list[TableRow], default_cell: str) -> str:
    if not rows:
        return ""
    html = f"<{tag}>"
    for row in rows:
        html += "<tr>"
        for cell in row["cells"]:
            cell_tag = cell.get("tag") or default_cell
            spans = "".join(
                f' {span}="{cell[span]}"' for span in ("colspan", "rowspan") if cell.get(span)
            )
            html += f"<{cell_tag}{spans}>{cell['content']}</{cell_tag}>"
        html += "</tr>"
    return html + f"</{tag}>"


class TableRule(GutenbergRule):
    """Converts ``<table>``.

    Without a ``<thead>``, a first body row made of header cells is moved
    into the head.
    """

    name = "gutenberg.table"
    priority = 70
    supported_elements = ("table",)
    keep_html_attributes = False

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        return element.name.lower() == "table"

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        attrs = self.gutenberg_attributes(element, context)
        head, body, foot = self.extract_sections(element)
        if head:
            attrs["head"] = head
        if body:
            attrs["body"] = body
        if foot:
            attrs["foot"] = foot
        attrs["hasFixedLayout"] = False
        attrs["blockId"] = self.block_id()

        table = (
            render_section("thead", head, "th")
            + render_section("tbody", body, "td")
            + render_section("tfoot", foot, "td")
        )
        figure_classes = ["wp-block-table"]
        if attrs.get("className"):
            figure_classes.append(attrs["className"])
        html = f'<figure class="{" ".join(figure_classes)}"><table>{table}</table></figure>'
        return Block(block_name="core/table", attrs=attrs, content=[html], html=html)

    def extract_sections(self, element: Tag) -> tuple[list[TableRow], list[TableRow], list[TableRow]]:
        """Rows of the head, body and foot sections."""
        thead = element.find("thead")
        head = [extract_row(row) for row in thead.find_all("tr")] if thead else []

        tbody = element.find("tbody")
        body_rows = tbody.find_all("tr") if tbody else element.find_all("tr", recursive=False)
        body = [extract_row(row) for row in body_rows]

        tfoot = element.find("tfoot")
        foot = [extract_row(row) for row in tfoot.find_all("tr")] if tfoot else []

        if not head and body and any(cell["tag"] == "th" for cell in body[0]["cells"]):
            head.append(body.pop(0))
        return head, body, foot
