"""
UML2 XMI input adapter.
"""

from .reader import XmiModelReader, parse_xmi, read_xmi

__all__ = ["XmiModelReader", "parse_xmi", "read_xmi"]
