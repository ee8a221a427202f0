"""Forms and form containers to verbatim ``core/html`` blocks.

Editors have no faithful block for arbitrary forms, so a form and
everything inside it is kept as raw HTML with descriptive metadata.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass

from bs4.element import Tag

from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import outer_html
from block_convert.core.ids import generate_unique_id
from block_convert.core.rule import BaseRule

FORM_CONTAINERS = ("div", "section", "fieldset")

FORM_CONTROL_SELECTOR = (
    'input, textarea, select, button[type="submit"], button[type="button"], '
    'button[type="reset"], fieldset, legend'
)

FIELD_SELECTORS = (
    'input:not([type="hidden"])',
    "textarea",
    "select",
    'button[type="submit"]',
    'button[type="button"]',
    'button[type="reset"]',
)

# Processing attributes stripped from the kept markup.
_TRANSIENT_PREFIXES = ("data-block-", "data-convert-")


@dataclass
class FormInfo:
    """Summary of a form for block metadata."""

    form_type: str
    method: str
    action: str
    field_count: int


def count_fields(element: Tag) -> int:
    """Count user-facing form fields below an element."""
    return sum(len(element.select(selector)) for selector in FIELD_SELECTORS)


class FormRule(BaseRule):
    """Captures ``<form>`` and containers holding form controls.

    Runs ahead of every other rule so form markup is never split into blocks.
    """

    name = "form"
    priority = 150
    supported_elements = ("form", "fieldset", "div", "section")

    def matches(self, element: Tag, context: ConversionContext) -> bool:
        tag_name = element.name.lower()
        if tag_name == "form":
            return True
        if tag_name in FORM_CONTAINERS:
            return element.select_one(FORM_CONTROL_SELECTOR) is not None
        return False

    def convert(self, element: Tag, context: ConversionContext) -> Block:
        html = self.clean_form_html(element)
        info = self.extract_form_info(element)
        attrs = {
            "blockId": generate_unique_id(),
            "metadata": {
                "name": "Form Block",
                "formType": info.form_type,
                "method": info.method,
                "action": info.action,
                "containsFields": info.field_count,
            },
        }
        return Block(block_name="core/html", attrs=attrs, content=[html], html=html)

    def clean_form_html(self, element: Tag) -> str:
        """Markup of a copy of the element with transient attributes removed."""
        form = copy.copy(element)
        for tag in (form, *form.find_all(True)):
            for name in list(tag.attrs):
                if name.startswith(_TRANSIENT_PREFIXES):
                    del tag[name]
        return outer_html(form)

    def extract_form_info(self, element: Tag) -> FormInfo:
        is_form = element.name.lower() == "form"
        form = element if is_form else (element.find("form") or element)
        return FormInfo(
            form_type="form" if is_form else "form-container",
            method=form.get("method") or "GET",
            action=form.get("action") or "",
            field_count=count_fields(element),
        )
