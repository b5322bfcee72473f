"""Helpers shared by the normalizer and renderers."""
