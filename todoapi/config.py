"""
Server Configuration
====================
Defaults, overridden by TODOAPI_* environment variables, overridden in
turn by CLI flags.

    TODOAPI_HOST        bind address        (127.0.0.1)
    TODOAPI_PORT        bind port           (5000)
    TODOAPI_LOG_LEVEL   logging level       (info)
    TODOAPI_STORE       registered store    (memory)
    TODOAPI_SEED        seed when empty     (1; 0/false/no/off disables)
    TODOAPI_SEED_NAME   seed item name      (Item1)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from todoapi.service import DEFAULT_SEED_NAME

ENV_PREFIX = "TODOAPI_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ServerConfig:
    """Configuration for the HTTP host."""

    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "info"      # uvicorn level names: debug/info/warning/error
    store: str = "memory"        # name registered in todoapi.store
    seed: bool = True            # run TodoService.initialize at startup
    seed_name: str = DEFAULT_SEED_NAME

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build a config from TODOAPI_* variables; unset ones keep defaults.

        Raises:
            ValueError: If TODOAPI_PORT is not an integer.
        """
        env = os.environ if environ is None else environ
        config = cls()

        def get(key: str) -> Optional[str]:
            value = env.get(ENV_PREFIX + key)
            return value if value else None

        if get("HOST"):
            config.host = get("HOST")
        if get("PORT"):
            try:
                config.port = int(get("PORT"))
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}PORT must be an integer, got {get('PORT')!r}")
        if get("LOG_LEVEL"):
            config.log_level = get("LOG_LEVEL").lower()
        if get("STORE"):
            config.store = get("STORE")
        if get("SEED"):
            config.seed = get("SEED").strip().lower() not in _FALSE_VALUES
        if get("SEED_NAME"):
            config.seed_name = get("SEED_NAME")
        return config


def configure_logging(level: str = "info"):
    """Install a single root handler at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
