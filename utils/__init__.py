"""Shared utilities: logging, time helpers, validation, errors."""
