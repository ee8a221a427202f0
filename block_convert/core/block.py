"""Block model produced by conversion rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator


def block_family(block_name: str) -> str:
    """Get the dialect family of a block name.

    ``generateblocks/text`` belongs to ``generateblocks``; names without a
    namespace belong to ``core``.
    """
    if "/" not in block_name:
        return "core"
    return block_name.split("/", 1)[0]


@dataclass
class Block:
    """A converted element.

    ``content`` interleaves literal HTML with ``None`` placeholders; each
    placeholder is replaced, in order, by the next entry of ``children``
    when the block is serialized.
    """

    block_name: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list[Block] = field(default_factory=list)
    content: list[str | None] = field(default_factory=list)
    html: str = ""

    @property
    def is_self_closing(self) -> bool:
        """Whether the block serializes as a single self-closing marker."""
        return not self.children and not self.content

    @property
    def family(self) -> str:
        """Dialect family of this block."""
        return block_family(self.block_name)

    @property
    def placeholder_count(self) -> int:
        """Number of child placeholders in ``content``."""
        return sum(1 for part in self.content if part is None)

    def is_consistent(self) -> bool:
        """Check the placeholder/children invariant for this whole subtree."""
        if self.placeholder_count != len(self.children):
            return False
        return all(child.is_consistent() for child in self.children)

    def walk(self) -> Iterator[Block]:
        """Iterate over this block and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary using the CMS parser's key names."""
        return {
            "blockName": self.block_name,
            "attrs": self.attrs,
            "innerBlocks": [child.to_dict() for child in self.children],
            "innerHTML": self.html,
            "innerContent": list(self.content),
        }


@dataclass
class BlockStats:
    """Block counts for a converted tree."""

    total_blocks: int = 0
    block_types: dict[str, int] = field(default_factory=dict)
    family_counts: dict[str, int] = field(default_factory=dict)
    html_fallback_blocks: int = 0

    @classmethod
    def from_blocks(cls, blocks: list[Block]) -> BlockStats:
        """Count blocks recursively."""
        stats = cls()
        for root in blocks:
            for block in root.walk():
                stats.total_blocks += 1
                stats.block_types[block.block_name] = stats.block_types.get(block.block_name, 0) + 1
                family = block.family
                stats.family_counts[family] = stats.family_counts.get(family, 0) + 1
                if block.block_name == "core/html":
                    stats.html_fallback_blocks += 1
        return stats

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalBlocks": self.total_blocks,
            "blockTypes": dict(self.block_types),
            "familyCounts": dict(self.family_counts),
            "htmlFallbackBlocks": self.html_fallback_blocks,
        }
