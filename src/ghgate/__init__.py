"""Credential-gated GitHub operations."""

__version__ = "0.1.0"
