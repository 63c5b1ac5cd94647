"""
Membre d'un salon IRC : identité (nickname) et privilèges détenus.

Principes :
- Seul le serveur IRC modifie les rôles ; `request_role_change` est volontairement inerte.
- Un membre peut cumuler plusieurs rôles, le rôle effectif est le plus privilégié.
- Égalité sur (nickname, connexion) : la même personne dans deux salons d'une même
  connexion est le même membre.

Les méthodes `grant_role` / `revoke_role` sont réservées à la couche transport,
une fois la directive authentifiée comme provenant du serveur.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

from core.errors import InvalidArgumentError
from core.roles import MemberRole

logger = logging.getLogger(__name__)


@runtime_checkable
class ChatRoomMember(Protocol):
    """Contrat générique d'un membre de salon de discussion."""

    @property
    def room(self) -> Any: ...

    @property
    def connection(self) -> Any: ...

    @property
    def nickname(self) -> str: ...

    @property
    def contact_address(self) -> str: ...

    @property
    def role(self) -> MemberRole: ...

    @property
    def avatar(self) -> Optional[bytes]: ...

    @property
    def contact(self) -> Any: ...

    def set_nickname(self, new_name: str) -> None: ...

    def request_role_change(self, role: MemberRole) -> None: ...


class IrcChatRoomMember:
    """Membre d'un salon sur une connexion IRC.

    Attributs :
        room : salon contenant (référence, non possédée)
        connection : connexion d'origine (référence, non possédée)
        nickname : pseudo courant, modifiable par le serveur uniquement

    Révoquer le dernier rôle détenu le remplace par MemberRole.NONE :
    l'ensemble des rôles n'est jamais vide et ne gagne jamais de privilège.
    """

    def __init__(
        self,
        connection,
        room,
        nickname: str,
        role: MemberRole,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        if connection is None:
            raise InvalidArgumentError("connection")
        if room is None:
            raise InvalidArgumentError("room")
        if nickname is None:
            raise InvalidArgumentError("nickname")
        if role is None:
            raise InvalidArgumentError("role")
        self._connection = connection
        self._room = room
        self._nickname = nickname
        self._roles = {role}
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger(__name__)

    # ---------- identité ----------
    @property
    def room(self):
        return self._room

    @property
    def connection(self):
        return self._connection

    @property
    def nickname(self) -> str:
        with self._lock:
            return self._nickname

    @property
    def contact_address(self) -> str:
        """Pour IRC, l'adresse de contact est le pseudo lui-même."""
        return self.nickname

    def set_nickname(self, new_name: str) -> None:
        """Renomme le membre (notification NICK du serveur).

        Aucune vérification de collision ici : c'est le rôle du salon.
        """
        if new_name is None:
            raise InvalidArgumentError("new_name")
        with self._lock:
            self._nickname = new_name

    # ---------- rôles ----------
    @property
    def role(self) -> MemberRole:
        """Rôle effectif : le plus privilégié des rôles détenus."""
        with self._lock:
            return min(self._roles)

    @property
    def roles(self) -> Tuple[MemberRole, ...]:
        """Instantané des rôles détenus, du plus au moins privilégié."""
        with self._lock:
            return tuple(sorted(self._roles))

    def has_role(self, role: MemberRole) -> bool:
        with self._lock:
            return role in self._roles

    def request_role_change(self, role: MemberRole) -> None:
        # Les rôles ne changent que sur ordre du serveur IRC
        self._logger.debug(
            "Demande de changement de rôle ignorée pour %s (%s)", self.nickname, role
        )

    def grant_role(self, role: MemberRole) -> bool:
        """Ajoute un rôle (idempotent). Retourne True si l'ensemble a changé."""
        with self._lock:
            if role in self._roles:
                return False
            self._roles.add(role)
            return True

    def revoke_role(self, role: MemberRole) -> bool:
        """Retire un rôle s'il est détenu. Retourne True si l'ensemble a changé.

        Retirer le dernier rôle le remplace par NONE (aucun privilège).
        """
        with self._lock:
            if role not in self._roles:
                return False
            if self._roles == {role}:
                if role is MemberRole.NONE:
                    return False
                self._roles = {MemberRole.NONE}
                self._logger.debug(
                    "Dernier rôle %s révoqué pour %s -> %s", role, self._nickname, MemberRole.NONE.value
                )
                return True
            self._roles.discard(role)
            return True

    # ---------- attributs fixes du protocole ----------
    @property
    def avatar(self) -> Optional[bytes]:
        """Pas d'avatar sur IRC."""
        return None

    @property
    def contact(self):
        """Pas de contact durable distinct du membre sur IRC."""
        return None

    # ---------- égalité ----------
    def _identity(self):
        return (self.nickname, self._connection)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, IrcChatRoomMember):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())

    def __repr__(self):
        return f"IrcChatRoomMember(nickname={self.nickname!r}, role={self.role.value!r})"


__all__ = ["ChatRoomMember", "IrcChatRoomMember"]
