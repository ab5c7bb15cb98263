"""Sliding-window rate limiters, bounded circular queues and an indexed skip list."""

__version__ = "0.1.0"
__all__ = ["circular", "compare", "iterator", "limit", "options", "skiplist"]