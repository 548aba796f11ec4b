"""Shared pytest configuration."""

pytest_plugins = ["docucache.testing.fixtures"]
