"""
Common utilities for the to-do client.

Modules:
- backend: JSON-over-HTTP transport and response normalization
- tasks: Task model and the task repository (CRUD on /tasks)
- errors: error taxonomy shared by every component
- lookup: candidate-key fallback for loosely named wire fields
- config: environment-driven settings
- logging_setup: root logger configuration
"""

__all__ = [
    "backend",
    "tasks",
    "errors",
    "lookup",
    "config",
    "logging_setup",
]
