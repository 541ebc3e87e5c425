"""
structkit.config — process-wide settings and the shared random source.

The configuration is a small dataclass built lazily from the environment:

    STRUCTKIT_PATH_DELIMITER   segment separator for path helpers (".")
    STRUCTKIT_SEED             integer seed for the package random source
    STRUCTKIT_LOG_LEVEL        level used by structkit.logging_config

Sampling functions take an explicit ``rng`` argument; ``get_rng()`` is only
the fallback when none is passed.
"""

from __future__ import annotations

import dataclasses
import logging
import random
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Optional

from structkit.constants import env_log_level, env_path_delimiter, env_seed

_LOG = logging.getLogger(__name__)
_LOCK = RLock()


@dataclass
class ToolConfig:
    """
    Global configuration container for structkit.
    """

    path_delimiter: str = field(default_factory=env_path_delimiter)
    seed: Optional[int] = field(default_factory=env_seed)
    log_level: int = field(default_factory=env_log_level)

    def __post_init__(self) -> None:
        if not self.path_delimiter:
            raise ValueError("path_delimiter must be a non-empty string")


# Global singletons (simple and testable)
_GLOBAL: Optional[ToolConfig] = None
_RNG: Optional[random.Random] = None


def get_config() -> ToolConfig:
    """Return the global ToolConfig, creating it on first use."""
    global _GLOBAL
    with _LOCK:
        if _GLOBAL is None:
            _GLOBAL = ToolConfig()
        return _GLOBAL


def set_config(cfg: ToolConfig) -> None:
    """
    Replace the global ToolConfig with a custom instance.

    The shared random source is dropped so the next ``get_rng()`` call
    honors the new seed.
    """
    global _GLOBAL, _RNG
    with _LOCK:
        _GLOBAL = cfg
        _RNG = None
    _LOG.debug("Configuration replaced: %s", cfg)


@contextmanager
def temporary_config(**overrides: Any) -> Generator[ToolConfig, None, None]:
    """
    Temporarily override configuration fields (useful for tests).

    Example
    -------
    >>> with temporary_config(path_delimiter="/") as cfg:
    ...     cfg.path_delimiter
    '/'
    """
    prev = get_config()
    prev_rng = _RNG
    tmp = dataclasses.replace(prev, **overrides)
    set_config(tmp)
    try:
        yield tmp
    finally:
        set_config(prev)
        _restore_rng(prev_rng)


def _restore_rng(rng: Optional[random.Random]) -> None:
    global _RNG
    with _LOCK:
        _RNG = rng


def get_rng() -> random.Random:
    """
    Return the package-wide random source.

    Seeded from ``get_config().seed`` on first use; unseeded when the seed is
    None.
    """
    global _RNG
    with _LOCK:
        if _RNG is None:
            seed = get_config().seed
            _RNG = random.Random(seed)
            _LOG.debug("Random source created (seed=%r).", seed)
        return _RNG


__all__ = ["ToolConfig", "get_config", "set_config", "temporary_config", "get_rng"]
