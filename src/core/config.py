"""
Configuration centrale du modèle membre.

Ce module charge les variables d'environnement (.env) et prépare :
- Le niveau de log (LOG_LEVEL, défaut INFO)
- La déduplication des logs (LOG_DEDUPLICATE, défaut true)

Un warning est émis si LOG_LEVEL ne correspond à aucun niveau connu ; on retombe alors sur INFO.
"""
from __future__ import annotations

import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def env_flag(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name, "true" if default else "false") or "").strip().lower()
    return raw in _TRUTHY


def resolve_log_level(value: str | None) -> str:
    """Nom de niveau normalisé, INFO si absent ou inconnu."""
    name = (value or "INFO").strip().upper()
    if name not in _LEVELS:
        logger.warning("LOG_LEVEL inconnu (%s), utilisation de INFO", value)
        return "INFO"
    return name


LOG_LEVEL = resolve_log_level(os.getenv("LOG_LEVEL"))
LOG_DEDUPLICATE = env_flag("LOG_DEDUPLICATE", default=True)
