"""printf-style formatting, byte-buffer and string operations, logging and Sv39 helpers."""

__version__ = "0.1.0"

__all__ = ["conversions", "printf", "memory", "strings", "log", "paging"]