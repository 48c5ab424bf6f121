"""Bundled reference data (package catalog and default theme)."""
