"""
Type definitions for usbreset.

This module provides TypedDict definitions and other type aliases
for better type checking throughout the codebase.
"""
from typing import List, TypedDict


class DiskEntry(TypedDict):
    """One disk as reported by the host for the advisory listing"""
    number: int
    friendly_name: str
    size_bytes: int
    bus_type: str


# Ordered diskpart commands, one per line
DiskpartScript = List[str]
