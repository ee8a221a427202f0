"""Command-line interface for block-convert."""
