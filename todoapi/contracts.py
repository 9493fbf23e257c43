"""
Todo Contracts — Runtime-Enforced Operation Guarantees
=======================================================
Decorators that turn operation guarantees into checks instead of comments.

    @atomic
    def replace(self, todo_id, item):
        ...              # runs holding self._lock

    @witness
    def log_action(self, action, details):
        ...              # must not mutate its arguments

Each decorator:
  1. Validates the function signature at decoration time where it can
  2. Wraps calls to enforce the contract at runtime
  3. Raises ContractError on violation
"""

from __future__ import annotations

import copy
import functools
import inspect
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


class ContractError(Exception):
    """Raised when an operation contract is violated."""
    pass


# ─────────────────────────────────────────────────────────────
#  Atomic — One Operation at a Time
# ─────────────────────────────────────────────────────────────

def atomic(func: F) -> F:
    """Run a method while holding its instance's ``_lock``.

    Contract:
        - Applies to methods only (first parameter is ``self``)
        - The instance must expose a re-entrant ``_lock``
        - The whole read-modify-write runs under the lock

    Usage:
        class Service:
            def __init__(self):
                self._lock = threading.RLock()

            @atomic
            def replace(self, todo_id, item):
                ...
    """
    params = list(inspect.signature(func).parameters)
    if not params or params[0] != "self":
        raise ContractError(
            f"atomic '{func.__name__}' must be a method taking 'self' first."
        )

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        lock = getattr(self, "_lock", None)
        if lock is None:
            raise ContractError(
                f"atomic '{func.__name__}' called on {type(self).__name__} "
                f"which has no '_lock'."
            )
        with lock:
            return func(self, *args, **kwargs)

    wrapper.__todo_contract__ = "atomic"
    return wrapper  # type: ignore


# ─────────────────────────────────────────────────────────────
#  Witness — Observe Without Modifying
# ─────────────────────────────────────────────────────────────

def witness(func: F) -> F:
    """Observes data without altering it.

    Contract:
        - Must NEVER modify its arguments
        - Pure observation only (logging, metrics, etc.)

    Usage:
        @witness
        def log_action(self, action, details):
            logger.info("%s %s", action, details)
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Deep-copy arguments to detect mutation
        original_args = []
        for arg in args:
            try:
                original_args.append(copy.deepcopy(arg))
            except (TypeError, copy.Error):
                original_args.append(arg)

        original_kwargs = {}
        for k, v in kwargs.items():
            try:
                original_kwargs[k] = copy.deepcopy(v)
            except (TypeError, copy.Error):
                original_kwargs[k] = v

        result = func(*args, **kwargs)

        pairs = list(enumerate(zip(original_args, args)))
        pairs += [(k, (original_kwargs[k], kwargs[k])) for k in kwargs]
        for position, (orig, current) in pairs:
            # Objects compared by identity (e.g. loggers) deep-copy to
            # unequal values; only check what compares by value.
            if type(orig).__eq__ is object.__eq__:
                continue
            if orig != current:
                raise ContractError(
                    f"witness '{func.__name__}' mutated argument {position!r}. "
                    f"Witness must observe without modifying data."
                )

        return result

    wrapper.__todo_contract__ = "witness"
    return wrapper  # type: ignore
