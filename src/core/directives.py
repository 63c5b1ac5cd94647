"""
Directives de changement de rôle émises par le serveur IRC.

La couche transport construit une `RoleDirective` une fois la notification MODE
authentifiée, puis l'applique au membre concerné. C'est le seul chemin légitime
de mutation des rôles après la création du membre.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from core.errors import InvalidArgumentError
from core.roles import MemberRole


class RoleChange(enum.Enum):
    GRANT = "+"
    REVOKE = "-"

    @classmethod
    def from_sign(cls, sign: str) -> "RoleChange":
        try:
            return cls(sign)
        except ValueError:
            raise InvalidArgumentError("sign", f"signe de mode invalide: {sign!r}") from None


@dataclass(frozen=True)
class RoleDirective:
    """Ordre serveur : `nickname` reçoit (GRANT) ou perd (REVOKE) `role`."""

    nickname: str
    role: MemberRole
    change: RoleChange

    @classmethod
    def from_mode(cls, sign: str, letter: str, nickname: str) -> Optional["RoleDirective"]:
        """Directive pour un mode de canal, None si le mode ne porte pas de privilège."""
        role = MemberRole.from_mode(letter)
        if role is None:
            return None
        return cls(nickname=nickname, role=role, change=RoleChange.from_sign(sign))

    def apply(self, member) -> bool:
        if self.change is RoleChange.GRANT:
            return member.grant_role(self.role)
        return member.revoke_role(self.role)


__all__ = ["RoleChange", "RoleDirective"]
