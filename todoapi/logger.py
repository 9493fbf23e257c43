"""
TodoLogger — Logs all service actions. Pure observation, never modifies data.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from todoapi.contracts import witness

ACTION_LOGGER = "todoapi.actions"


class TodoLogger:

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(ACTION_LOGGER)

    @witness
    def log_action(self, action: str, details: dict[str, Any]) -> None:
        """Witnesses an action. Emits ``<action> k=v ...`` with sorted keys."""
        fields = [f"{key}={details[key]!r}" for key in sorted(details)]
        self.logger.info(" ".join([action] + fields))
