"""Rules producing ``greenshift-blocks/element`` blocks."""

from block_convert.rules.greenshift.element import GreenshiftElementRule

__all__ = ["GreenshiftElementRule"]
