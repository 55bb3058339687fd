"""Batch persistence."""

from .json_storage import BatchStorage, write_batch

__all__ = ["BatchStorage", "write_batch"]
