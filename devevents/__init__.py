"""Dev Events: event listing and booking service."""

__version__ = "1.0.0"
