"""Adapters - I/O implementations of ports."""

from .json_store import JsonTaskStore, TaskStoreError

__all__ = [
    "JsonTaskStore",
    "TaskStoreError",
]
