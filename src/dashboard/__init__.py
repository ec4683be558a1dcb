"""
Task list view synchronization.

The synchronizer refreshes the whole list from the backend, renders it through
an injected view, and routes per-row edit/delete actions back to the task
repository followed by another full refresh.
"""

from .synchronizer import Failed, ListSynchronizer, Loading, Populated, TaskRow

__all__ = ["ListSynchronizer", "TaskRow", "Loading", "Populated", "Failed"]
