"""
Todo Store — Persistence Capability
====================================
TodoService depends only on the TodoStore interface below. Concrete stores
are registered by name so the host can pick one from configuration.

Id assignment lives in the store: ids start at 1, grow monotonically, and
are never handed out twice within a store's lifetime, even after removal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Type

from todoapi.models import TodoItem


class TodoStore(ABC):
    """Abstract persistence capability for TodoItems.

    All stores must implement:
        - append(): Assign an id and store a new item
        - find_by_id(): Look up one item
        - update(): Overwrite an existing item
        - remove(): Delete an existing item
        - count() / all(): Inspect the collection
    """

    @abstractmethod
    def append(self, item: TodoItem) -> TodoItem:
        """Store ``item`` under a fresh id, ignoring any id it carries.

        Returns:
            A copy of the stored item, with its assigned id.
        """
        ...

    @abstractmethod
    def find_by_id(self, todo_id: int) -> Optional[TodoItem]:
        ...

    @abstractmethod
    def update(self, item: TodoItem) -> None:
        """Overwrite the stored item with ``item.id``. KeyError if absent."""
        ...

    @abstractmethod
    def remove(self, todo_id: int) -> None:
        """Remove the item. KeyError if absent."""
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    @abstractmethod
    def all(self) -> list[TodoItem]:
        ...


class InMemoryTodoStore(TodoStore):
    """Dict-backed store. Lives as long as the process."""

    def __init__(self):
        self._items: dict[int, TodoItem] = {}
        self._last_id = 0

    def append(self, item: TodoItem) -> TodoItem:
        self._last_id += 1
        stored = item.copy()
        stored.id = self._last_id
        self._items[stored.id] = stored
        return stored.copy()

    def find_by_id(self, todo_id: int) -> Optional[TodoItem]:
        item = self._items.get(todo_id)
        return item.copy() if item is not None else None

    def update(self, item: TodoItem) -> None:
        if item.id not in self._items:
            raise KeyError(item.id)
        self._items[item.id] = item.copy()

    def remove(self, todo_id: int) -> None:
        del self._items[todo_id]

    def count(self) -> int:
        return len(self._items)

    def all(self) -> list[TodoItem]:
        return [item.copy() for item in self._items.values()]


# ─────────────────────────────────────────────────────────────
#  Registry
# ─────────────────────────────────────────────────────────────

_REGISTRY: dict[str, Type[TodoStore]] = {}


def register_store(name: str, store_class: Type[TodoStore]):
    """Register a store class under a name."""
    _REGISTRY[name.lower()] = store_class


def get_store(name: str = "memory") -> TodoStore:
    """Instantiate a registered store.

    Raises:
        ValueError: If no store is registered under ``name``.
    """
    key = name.lower()
    if key not in _REGISTRY:
        available = sorted(_REGISTRY) or ["(none registered)"]
        raise ValueError(f"Unknown store '{name}'. Available: {available}.")
    return _REGISTRY[key]()


def list_stores() -> list[str]:
    """List all registered store names."""
    return sorted(_REGISTRY)


register_store("memory", InMemoryTodoStore)
