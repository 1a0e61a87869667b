"""Domain layer for the XPT reader.

Value types describing a decoded transport file (columns, header tags,
destination slots) and the pure conversions applied to raw cell bytes.
Nothing here performs I/O.
"""
