"""Dialect table: which rules each output dialect registers.

Every dialect starts with the form rule and ends with the universal
fallback. Dialects other than ``gutenberg`` add the core block rules as
low-priority companions so elements their own rules skip still get a
native block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable

from block_convert.config import DefaultAttributes
from block_convert.core.block import Block
from block_convert.core.context import ConversionContext
from block_convert.core.html_utils import escape_html
from block_convert.core.ids import generate_unique_id
from block_convert.core.rule import Rule
from block_convert.core.transformer import TextWrapper
from block_convert.rules.fallback import FallbackRule
from block_convert.rules.form import FormRule
from block_convert.rules.generateblocks.button import ButtonRule
from block_convert.rules.generateblocks.element import ElementRule
from block_convert.rules.generateblocks.media import MediaRule
from block_convert.rules.generateblocks.query import QueryRule
from block_convert.rules.generateblocks.shape import ShapeRule
from block_convert.rules.generateblocks.text import TextRule
from block_convert.rules.generateblocks_pro.accordion import AccordionRule
from block_convert.rules.generateblocks_pro.navigation import NavigationRule
from block_convert.rules.generateblocks_pro.tabs import TabsRule
from block_convert.rules.greenshift.element import GreenshiftElementRule
from block_convert.rules.gutenberg.button import ButtonRule as CoreButtonRule
from block_convert.rules.gutenberg.code import CodeRule
from block_convert.rules.gutenberg.details import DetailsRule
from block_convert.rules.gutenberg.group import GroupRule
from block_convert.rules.gutenberg.heading import HeadingRule
from block_convert.rules.gutenberg.image import ImageRule
from block_convert.rules.gutenberg.lists import ListRule
from block_convert.rules.gutenberg.paragraph import ParagraphRule
from block_convert.rules.gutenberg.quote import QuoteRule
from block_convert.rules.gutenberg.table import TableRule

logger = logging.getLogger(__name__)

RuleFactory = Callable[[DefaultAttributes], Rule]

DEFAULT_DIALECT = "generate-pro"


def wrap_generateblocks_text(text: str, context: ConversionContext) -> Block:
    """Bare top-level text as a ``generateblocks/text`` paragraph."""
    html = f'<p class="gb-text">{escape_html(text)}</p>'
    attrs = {"uniqueId": generate_unique_id(), "tagName": "p", "content": text, "className": "gb-text"}
    return Block(block_name="generateblocks/text", attrs=attrs, content=[html], html=html)


def wrap_greenshift_text(text: str, context: ConversionContext) -> Block:
    """Bare top-level text as a Greenshift text element."""
    html = f"<p>{escape_html(text)}</p>"
    attrs = {"uniqueId": generate_unique_id(), "tagName": "p", "type": "text", "innerText": text}
    return Block(block_name="greenshift-blocks/element", attrs=attrs, content=[html], html=html)


def wrap_core_text(text: str, context: ConversionContext) -> Block:
    """Bare top-level text as a ``core/paragraph``."""
    html = f"<p>{escape_html(text)}</p>"
    attrs = {"content": text, "blockId": generate_unique_id()}
    return Block(block_name="core/paragraph", attrs=attrs, content=[html], html=html)


GUTENBERG_RULES: tuple[RuleFactory, ...] = (
    ImageRule,
    TableRule,
    ListRule,
    QuoteRule,
    CodeRule,
    DetailsRule,
    HeadingRule,
    CoreButtonRule,
    ParagraphRule,
    GroupRule,
)

# Core block rules demoted below the dialect's own rules.
GUTENBERG_COMPANIONS: tuple[RuleFactory, ...] = (
    partial(QuoteRule, priority=30),
    partial(TableRule, priority=30),
    partial(ListRule, priority=30),
    partial(CodeRule, priority=30),
    partial(DetailsRule, priority=28),
    partial(ImageRule, priority=20),
    partial(HeadingRule, priority=15),
    partial(CoreButtonRule, priority=15),
    partial(ParagraphRule, priority=15),
    partial(GroupRule, priority=5),
)

GENERATEBLOCKS_RULES: tuple[RuleFactory, ...] = (
    MediaRule,
    ShapeRule,
    QueryRule,
    ButtonRule,
    TextRule,
    ElementRule,
)

GENERATEBLOCKS_PRO_RULES: tuple[RuleFactory, ...] = (
    TabsRule,
    AccordionRule,
    NavigationRule,
)


@dataclass(frozen=True)
class Dialect:
    """An output dialect: its rules in registration order and its text wrapper."""

    name: str
    rules: tuple[RuleFactory, ...]
    wrap_text: TextWrapper
    description: str = ""

    def build_rules(self, defaults: DefaultAttributes) -> list[Rule]:
        """Instantiate the dialect's rules, form rule first and fallback last."""
        factories = (FormRule, *self.rules, FallbackRule)
        return [factory(defaults) for factory in factories]


DIALECTS: dict[str, Dialect] = {
    "gutenberg": Dialect(
        name="gutenberg",
        rules=GUTENBERG_RULES,
        wrap_text=wrap_core_text,
        description="Native core blocks",
    ),
    "generate": Dialect(
        name="generate",
        rules=GENERATEBLOCKS_RULES + GUTENBERG_COMPANIONS,
        wrap_text=wrap_generateblocks_text,
        description="GenerateBlocks with core block companions",
    ),
    "greenshift": Dialect(
        name="greenshift",
        rules=(GreenshiftElementRule, *GUTENBERG_COMPANIONS),
        wrap_text=wrap_greenshift_text,
        description="Greenshift universal element with core block companions",
    ),
    "generate-pro": Dialect(
        name="generate-pro",
        rules=GENERATEBLOCKS_RULES + GENERATEBLOCKS_PRO_RULES + GUTENBERG_COMPANIONS,
        wrap_text=wrap_generateblocks_text,
        description="GenerateBlocks and GenerateBlocks Pro with core block companions",
    ),
}


def resolve_dialect(name: str | None) -> Dialect:
    """Look up a dialect, falling back to the default for unknown names."""
    if not name:
        return DIALECTS[DEFAULT_DIALECT]
    dialect = DIALECTS.get(name)
    if dialect is None:
        logger.warning("Unknown dialect %r, using %s", name, DEFAULT_DIALECT)
        return DIALECTS[DEFAULT_DIALECT]
    return dialect
