"""Infrastructure layer for the XPT reader.

This layer contains the stream-facing decoder and the logging adapters.
It implements the ports defined in the application layer.
"""

__all__ = []
