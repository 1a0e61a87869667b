"""Application layer for the XPT reader.

Holds the ports the decoding session talks to; concrete adapters live in
``xport_reader.infrastructure``.
"""
