"""Command-line interface for jotter."""
