"""Block directory layout used by the conversion commands.

Each block lives in its own directory under the blocks directory and holds
a ``template.html`` source. Conversion writes ``block.html`` (minified
markup) and ``unminified.html`` next to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TEMPLATE_FILE = "template.html"
OUTPUT_FILE = "block.html"
UNMINIFIED_FILE = "unminified.html"


@dataclass
class BlockDirectory:
    """One block directory."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def template(self) -> Path:
        return self.path / TEMPLATE_FILE

    @property
    def output(self) -> Path:
        return self.path / OUTPUT_FILE

    @property
    def unminified_output(self) -> Path:
        return self.path / UNMINIFIED_FILE


def discover_blocks(blocks_dir: Path) -> list[BlockDirectory]:
    """Find block directories holding a template.

    Args:
        blocks_dir: Directory containing one subdirectory per block.

    Returns:
        Block directories sorted by name.
    """
    if not blocks_dir.is_dir():
        return []

    templates = blocks_dir.glob(f"*/{TEMPLATE_FILE}")
    return [BlockDirectory(template.parent) for template in sorted(templates)]


def format_size(size: int) -> str:
    """Human readable file size."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
