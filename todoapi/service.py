"""
TodoService — CRUD Operations over the TodoItem Collection
===========================================================
Five operations plus an explicit startup routine:

    initialize()        seed "Item1" if the store is empty
    list_all()          every stored item
    get_by_id(id)       one item, or NotFound
    create(item)        fresh id + Locator, or InvalidInput
    replace(id, item)   overwrite name/is_complete, InvalidInput or NotFound
    delete(id)          remove, or NotFound

Every operation runs under the service lock, so a multi-threaded host
cannot interleave the read-then-write of replace/delete or two appends.
"""

from __future__ import annotations

import threading
from typing import Optional

from todoapi.contracts import atomic
from todoapi.errors import InvalidInput, NotFound
from todoapi.logger import TodoLogger
from todoapi.models import GET_TODO_ROUTE, CreatedItem, Locator, TodoItem
from todoapi.store import TodoStore

DEFAULT_SEED_NAME = "Item1"


class TodoService:
    """Owns the todo collection through an injected TodoStore."""

    def __init__(self, store: TodoStore, logger: Optional[TodoLogger] = None):
        self.store = store
        self.logger = logger or TodoLogger()
        self._lock = threading.RLock()

    @atomic
    def initialize(self, seed_name: str = DEFAULT_SEED_NAME) -> Optional[TodoItem]:
        """Seed one default item if the store is empty.

        Call once at startup, before serving any request.

        Returns:
            The seeded item, or None if the store already had items.
        """
        if self.store.count() > 0:
            return None
        seeded = self.store.append(TodoItem(name=seed_name, is_complete=False))
        self.logger.log_action("seed", {"id": seeded.id, "name": seeded.name})
        return seeded

    @atomic
    def list_all(self) -> list[TodoItem]:
        return self.store.all()

    @atomic
    def count(self) -> int:
        return self.store.count()

    @atomic
    def get_by_id(self, todo_id: int) -> TodoItem:
        item = self.store.find_by_id(todo_id)
        if item is None:
            self.logger.log_action("get.missing", {"id": todo_id})
            raise NotFound(todo_id)
        return item

    @atomic
    def create(self, item: Optional[TodoItem]) -> CreatedItem:
        """Store a new item under a fresh id.

        Any id the client supplied is discarded.

        Returns:
            CreatedItem with the stored item and a GetTodo locator.

        Raises:
            InvalidInput: If ``item`` is missing.
        """
        if item is None:
            self.logger.log_action("create.rejected", {"reason": "missing body"})
            raise InvalidInput("Request body is required")

        stored = self.store.append(TodoItem(name=item.name, is_complete=item.is_complete))
        self.logger.log_action("create", {"id": stored.id, "name": stored.name})
        return CreatedItem(
            item=stored,
            locator=Locator(GET_TODO_ROUTE, {"todo_id": stored.id}),
        )

    @atomic
    def replace(self, todo_id: int, item: Optional[TodoItem]) -> None:
        """Overwrite ``name`` and ``is_complete`` of an existing item.

        The body id must equal ``todo_id`` exactly; this is checked before
        existence, so a mismatch is InvalidInput even for unknown ids.

        Raises:
            InvalidInput: If ``item`` is missing or its id differs.
            NotFound: If no stored item has ``todo_id``.
        """
        if item is None or item.id != todo_id:
            self.logger.log_action("replace.rejected", {
                "id": todo_id,
                "body_id": item.id if item is not None else None,
            })
            raise InvalidInput(
                "Request body is required" if item is None
                else f"Body id {item.id} does not match path id {todo_id}"
            )

        stored = self.store.find_by_id(todo_id)
        if stored is None:
            self.logger.log_action("replace.missing", {"id": todo_id})
            raise NotFound(todo_id)

        stored.name = item.name
        stored.is_complete = item.is_complete
        self.store.update(stored)
        self.logger.log_action("replace", {
            "id": todo_id,
            "name": stored.name,
            "is_complete": stored.is_complete,
        })

    @atomic
    def delete(self, todo_id: int) -> None:
        if self.store.find_by_id(todo_id) is None:
            self.logger.log_action("delete.missing", {"id": todo_id})
            raise NotFound(todo_id)

        self.store.remove(todo_id)
        self.logger.log_action("delete", {"id": todo_id})
