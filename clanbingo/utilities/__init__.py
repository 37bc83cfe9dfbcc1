"""Shared utilities: logging, time helpers and static matching tables."""
