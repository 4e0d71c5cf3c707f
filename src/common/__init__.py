"""Shared helpers for HTTP access and logging."""
