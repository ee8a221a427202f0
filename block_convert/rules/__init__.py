"""Conversion rules, grouped by the block dialect they produce."""
