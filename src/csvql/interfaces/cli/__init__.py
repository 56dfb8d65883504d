"""Command-line interface for csvql."""
