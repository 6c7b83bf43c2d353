"""
Base exceptions for usbreset.

This module defines the hierarchy of exceptions used by usbreset.
"""

class ResetError(Exception):
    """Base exception for usbreset errors"""
    pass


class InvalidDiskError(ResetError):
    """Exception raised when the disk number is not a non-negative integer"""
    pass


class InvalidModeError(ResetError):
    """Exception raised when the wipe mode is neither Fast nor Full"""
    pass


class InvalidLabelError(ResetError):
    """Exception raised when the volume label cannot be used on FAT32"""
    pass


class DiskEnumerationError(ResetError):
    """Exception raised when the disk list cannot be obtained"""
    pass


class DiskpartError(ResetError):
    """Exception raised when diskpart cannot be run or reports a failure"""
    pass
