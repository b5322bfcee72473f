"""Command line interface for harsnip."""
