"""Salons IRC : références (connexion, salon) et registre des membres.

Les imports sont effectués de manière lazy pour éviter les cycles avec
`core.member` lors de l'initialisation.
"""
from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # aide mypy/IDE sans exécuter les imports au runtime initial
	from .manager import ChatRoomRoster  # noqa: F401
	from .models import ChatRoom, IrcConnection  # noqa: F401

__all__ = ["ChatRoomRoster", "ChatRoom", "IrcConnection"]


def __getattr__(name: str):  # lazy resolution
	if name == "ChatRoomRoster":
		mod = import_module("core.rooms.manager")
		return getattr(mod, name)
	if name in {"ChatRoom", "IrcConnection"}:
		mod = import_module("core.rooms.models")
		return getattr(mod, name)
	raise AttributeError(name)
