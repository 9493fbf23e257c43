"""
Todo Errors — Terminal Request Failures
========================================
The two failure kinds the service signals. Both end the request; the HTTP
layer decides which status each one becomes.

Storage failures are not modeled here; they propagate as-is.
"""

from __future__ import annotations

from typing import Optional


class TodoError(Exception):
    """Base class for failures raised by TodoService."""
    pass


class InvalidInput(TodoError):
    """Missing/unparseable item, or body id does not match the path id."""
    pass


class NotFound(TodoError):
    """No stored item has the requested id."""

    def __init__(self, todo_id: Optional[int], message: str = ""):
        self.todo_id = todo_id
        super().__init__(message or f"Todo item {todo_id} not found")
