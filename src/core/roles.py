"""
Rôles (privilèges) d'un membre dans un salon IRC.

Ordre total par rang : le rôle le plus privilégié trie en premier.

    OWNER (~, q) > ADMIN (&, a) > OPERATOR (@, o) > HALFOP (%, h) > VOICE (+, v) > NONE

Le modèle membre n'exige que l'égalité et l'ordre ; les lettres de mode et les
préfixes NAMES ne servent qu'à la couche transport pour construire les directives.
"""
from __future__ import annotations

import enum
import functools
from typing import Dict, Optional, Tuple

from core.errors import InvalidArgumentError


@functools.total_ordering
class MemberRole(enum.Enum):
    OWNER = "owner"
    ADMIN = "admin"
    OPERATOR = "operator"
    HALFOP = "halfop"
    VOICE = "voice"
    NONE = "none"  # aucun privilège (rôle plancher)

    @property
    def rank(self) -> int:
        return _META[self][0]

    @property
    def mode(self) -> Optional[str]:
        return _META[self][1]

    @property
    def prefix(self) -> Optional[str]:
        return _META[self][2]

    def __lt__(self, other):
        if not isinstance(other, MemberRole):
            return NotImplemented
        # Rang élevé => trie en premier
        return self.rank > other.rank

    @classmethod
    def from_mode(cls, letter: str) -> Optional["MemberRole"]:
        """Rôle correspondant à une lettre de mode de canal (None si sans rapport)."""
        return _BY_MODE.get(letter)

    @classmethod
    def from_prefix(cls, symbol: str) -> Optional["MemberRole"]:
        """Rôle correspondant à un préfixe NAMES (`@`, `+`, ...)."""
        return _BY_PREFIX.get(symbol)

    @classmethod
    def from_name(cls, name: Optional[str]) -> "MemberRole":
        """Résolution insensible à la casse ; lève InvalidArgumentError si inconnu."""
        if name is None:
            raise InvalidArgumentError("role")
        key = name.strip().lower()
        for role in cls:
            if role.value == key:
                return role
        raise InvalidArgumentError("role", f"rôle inconnu: {name!r}")


# rang, lettre de mode, préfixe NAMES
_META: Dict[MemberRole, Tuple[int, Optional[str], Optional[str]]] = {
    MemberRole.OWNER: (70, "q", "~"),
    MemberRole.ADMIN: (60, "a", "&"),
    MemberRole.OPERATOR: (50, "o", "@"),
    MemberRole.HALFOP: (40, "h", "%"),
    MemberRole.VOICE: (30, "v", "+"),
    MemberRole.NONE: (10, None, None),
}

_BY_MODE = {meta[1]: role for role, meta in _META.items() if meta[1]}
_BY_PREFIX = {meta[2]: role for role, meta in _META.items() if meta[2]}


__all__ = ["MemberRole"]
