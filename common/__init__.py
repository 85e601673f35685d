"""Shared helpers for kebab-tools (logging, config, reporting, file I/O)."""
