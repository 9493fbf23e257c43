"""
Todo API — CRUD Service for Todo Items
=======================================
A TodoService over an injected TodoStore, hosted by a FastAPI app.

Layers:
    Core:    models, errors, contracts, store, logger, service
    Host:    server (FastAPI), config, cli
"""

__version__ = "0.1.0"

from todoapi.errors import TodoError, InvalidInput, NotFound
from todoapi.models import TodoItem, Locator, CreatedItem
from todoapi.store import TodoStore, InMemoryTodoStore, get_store, list_stores, register_store
from todoapi.logger import TodoLogger
from todoapi.service import TodoService

__all__ = [
    "TodoError", "InvalidInput", "NotFound",
    "TodoItem", "Locator", "CreatedItem",
    "TodoStore", "InMemoryTodoStore", "get_store", "list_stores", "register_store",
    "TodoLogger",
    "TodoService",
]
