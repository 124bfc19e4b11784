"""Typed, validated site configuration from environment variables."""

__version__ = "0.1.0"
