"""vaultfinder - quick path and content search for a notes vault."""

__version__ = "0.1.0"
