"""
Todo Models — The Single Domain Entity
=======================================
TodoItem plus the small value types returned by TodoService.

Wire form of a TodoItem:
    {"id": 1, "name": "Item1", "isComplete": false}
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

GET_TODO_ROUTE = "GetTodo"
TODO_PREFIX = "/api/todo"


# ─────────────────────────────────────────────────────────────
#  TodoItem
# ─────────────────────────────────────────────────────────────

@dataclass
class TodoItem:
    """A todo item. ``id`` stays None until a store assigns one."""

    id: Optional[int] = None
    name: Optional[str] = None
    is_complete: bool = False

    def copy(self) -> "TodoItem":
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "isComplete": self.is_complete,
        }


# ─────────────────────────────────────────────────────────────
#  Locator / CreatedItem
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Locator:
    """Named-route reference to an item's retrieval endpoint."""

    route: str
    params: dict[str, Any] = field(default_factory=dict)

    def path(self) -> str:
        return f"{TODO_PREFIX}/{self.params['todo_id']}"


@dataclass(frozen=True)
class CreatedItem:
    """Result of TodoService.create: the stored item and where to find it."""

    item: TodoItem
    locator: Locator
