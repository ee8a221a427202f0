"""Rules producing ``generateblocks-pro/*`` blocks from custom hyphenated tags."""

from block_convert.rules.generateblocks_pro.accordion import AccordionRule
from block_convert.rules.generateblocks_pro.navigation import NavigationRule
from block_convert.rules.generateblocks_pro.tabs import TabsRule

__all__ = ["AccordionRule", "NavigationRule", "TabsRule"]
