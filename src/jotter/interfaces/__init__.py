"""User-facing interfaces for jotter."""
