"""
Configuration centralisée du logging.

Objectifs :
- Un seul setup idempotent (évite la duplication des handlers)
- Déduplication optionnelle des messages identiques (rafales de MODE/NAMES répétés)
- Format uniforme, niveau piloté par `core.config`
"""
from __future__ import annotations

import logging
import threading

from core import config

_INITIALIZED = False
_SEEN_LIMIT = 5000

DEFAULT_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


class DeduplicateFilter(logging.Filter):
    """Laisse passer chaque (logger, niveau, message rendu) une seule fois."""

    def __init__(self, limit: int = _SEEN_LIMIT):
        super().__init__()
        self.limit = limit
        self._lock = threading.Lock()
        self._seen: set = set()

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        key = (record.name, record.levelno, record.getMessage())
        with self._lock:
            if key in self._seen:
                return False
            # Limite la croissance mémoire (reset si trop gros)
            if len(self._seen) >= self.limit:
                self._seen.clear()
            self._seen.add(key)
        return True


def setup_logging(force: bool = False, level: str | None = None) -> None:
    global _INITIALIZED
    if _INITIALIZED and not force:
        return

    root = logging.getLogger()
    if force:
        for h in list(root.handlers):
            root.removeHandler(h)
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    for h in root.handlers:
        h.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        if config.LOG_DEDUPLICATE and not any(isinstance(f, DeduplicateFilter) for f in h.filters):
            h.addFilter(DeduplicateFilter())
    name = (level or config.LOG_LEVEL).upper()
    root.setLevel(getattr(logging, name, logging.INFO))
    _INITIALIZED = True


__all__ = ["setup_logging", "DeduplicateFilter"]
