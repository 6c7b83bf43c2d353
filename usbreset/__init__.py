"""
usbreset - Reset a removable drive to a single FAT32 partition

This package wraps the Windows diskpart utility behind a confirmation-gated
command-line flow: pick a disk, pick a wipe mode, pick a label, confirm.
"""

__version__ = "0.1.0"
