"""Build a consolidated ad/tracking blocking hosts file from public lists."""

__version__ = "1.0.0"
