"""Packaged data files (catalog and AI configuration)."""
