from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Sequence

from core.directives import RoleDirective
from core.errors import InvalidArgumentError
from core.member import IrcChatRoomMember
from core.roles import MemberRole
from .models import ChatRoom, IrcConnection, nick_key, room_key

logger = logging.getLogger(__name__)

# Modes de canal consommant un argument (hors privilèges) : toujours / seulement en '+'
_ARG_MODES_ALWAYS = set("beIk")
_ARG_MODES_ON_SET = set("lfjL")


class ChatRoomRoster:
    """Registre des salons et de leurs membres pour une connexion IRC.

    Responsabilités:
        - Cycle de vie des membres (JOIN, NAMES, PART, KICK, QUIT).
        - Renommage (NICK) dans tous les salons, avec gestion des collisions.
        - Application des directives de rôle issues des notifications MODE.

    Les handlers ne lèvent pas pour un salon ou un membre inconnu : log + retour None.
    Un salon ou un pseudo absent (None) lève InvalidArgumentError.
    """

    def __init__(
        self,
        connection: IrcConnection,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        if connection is None:
            raise InvalidArgumentError("connection")
        self.connection = connection
        self.logger = logger or logging.getLogger(__name__)
        self.rooms: Dict[str, ChatRoom] = {}
        self._lock = threading.RLock()

    # ---------- salons ----------
    def join_room(self, name: str) -> ChatRoom:
        key = room_key(name, "name")
        with self._lock:
            room = self.rooms.get(key)
            if room is None:
                room = ChatRoom(name=name, connection=self.connection)
                self.rooms[key] = room
                self.logger.info("Salon rejoint %s (%s)", name, self.connection.server)
            return room

    def leave_room(self, name: str) -> Optional[ChatRoom]:
        with self._lock:
            room = self.rooms.pop(room_key(name, "name"), None)
            if room is not None:
                room.members.clear()
                self.logger.info("Salon quitté %s", name)
            return room

    def get_room(self, name: str) -> Optional[ChatRoom]:
        with self._lock:
            return self.rooms.get(room_key(name, "name"))

    def _room_or_log(self, name: str) -> Optional[ChatRoom]:
        room = self.rooms.get(room_key(name))
        if room is None:
            self.logger.debug("Salon inconnu ignoré: %s", name)
        return room

    # ---------- membres ----------
    def member(self, room_name: str, nickname: str) -> Optional[IrcChatRoomMember]:
        key = nick_key(nickname)
        with self._lock:
            room = self.rooms.get(room_key(room_name))
            if room is None:
                return None
            return room.members.get(key)

    def members(self, room_name: str) -> List[IrcChatRoomMember]:
        """Membres du salon, triés par rôle effectif puis par pseudo."""
        with self._lock:
            room = self.rooms.get(room_key(room_name))
            if room is None:
                return []
            snapshot = list(room.members.values())
        return sorted(snapshot, key=lambda m: (m.role, m.nickname.lower()))

    def memberships(self, nickname: str) -> List[IrcChatRoomMember]:
        """Toutes les fiches d'une même personne, un salon par fiche."""
        key = nick_key(nickname)
        with self._lock:
            return [room.members[key] for room in self.rooms.values() if key in room.members]

    def handle_join(
        self, room_name: str, nickname: str, role: MemberRole = MemberRole.NONE
    ) -> Optional[IrcChatRoomMember]:
        key = nick_key(nickname)
        with self._lock:
            room = self._room_or_log(room_name)
            if room is None:
                return None
            existing = room.members.get(key)
            if existing is not None:
                return existing
            member = IrcChatRoomMember(
                self.connection, room, nickname, role, logger=self.logger
            )
            room.members[key] = member
            self.logger.debug("Join %s -> %s (%s)", room.name, nickname, role.value)
            return member

    def handle_names(self, room_name: str, entries: Iterable[str]) -> List[IrcChatRoomMember]:
        """Admission groupée depuis une réponse NAMES (`@alice`, `+bob`, `carol`).

        Chaque préfixe présent est accordé ; un pseudo déjà connu reçoit les rôles manquants.
        """
        admitted: List[IrcChatRoomMember] = []
        with self._lock:
            if self._room_or_log(room_name) is None:
                return admitted
            for entry in entries:
                prefixed: List[MemberRole] = []
                nickname = entry
                while nickname and MemberRole.from_prefix(nickname[0]) is not None:
                    prefixed.append(MemberRole.from_prefix(nickname[0]))
                    nickname = nickname[1:]
                if not nickname:
                    continue
                member = self.handle_join(
                    room_name, nickname, prefixed[0] if prefixed else MemberRole.NONE
                )
                for role in prefixed:
                    member.grant_role(role)
                admitted.append(member)
        return admitted

    def handle_part(self, room_name: str, nickname: str) -> Optional[IrcChatRoomMember]:
        key = nick_key(nickname)
        with self._lock:
            room = self._room_or_log(room_name)
            if room is None:
                return None
            member = room.members.pop(key, None)
            if member is not None:
                self.logger.debug("Part %s -> %s", room.name, nickname)
            return member

    def handle_kick(self, room_name: str, nickname: str) -> Optional[IrcChatRoomMember]:
        return self.handle_part(room_name, nickname)

    def handle_quit(self, nickname: str) -> List[IrcChatRoomMember]:
        key = nick_key(nickname)
        with self._lock:
            removed = [room.members.pop(key) for room in self.rooms.values() if key in room.members]
        if removed:
            self.logger.debug("Quit %s (%s salons)", nickname, len(removed))
        return removed

    def handle_nick(self, old: str, new: str) -> List[IrcChatRoomMember]:
        """Renomme un membre dans tous les salons où il est présent.

        Collision : une fiche existante sous le nouveau pseudo est obsolète (le serveur
        fait foi), elle est écartée.
        """
        old_key, new_key = nick_key(old, "old"), nick_key(new, "new")
        renamed: List[IrcChatRoomMember] = []
        with self._lock:
            for room in self.rooms.values():
                member = room.members.pop(old_key, None)
                if member is None:
                    continue
                stale = room.members.get(new_key)
                if stale is not None and stale is not member:
                    self.logger.warning(
                        "Collision de pseudo dans %s: %s -> %s, fiche obsolète écartée", room.name, old, new
                    )
                member.set_nickname(new)
                room.members[new_key] = member
                renamed.append(member)
        if renamed:
            self.logger.info("Nick %s -> %s (%s salons)", old, new, len(renamed))
        return renamed

    def handle_mode(self, room_name: str, modes: str, args: Sequence[str] = ()) -> List[RoleDirective]:
        """Applique un changement de modes de canal (`+ov-v alice bob carol`).

        Seuls les modes de privilège produisent une directive ; les arguments des autres
        modes sont consommés pour garder l'alignement.
        """
        applied: List[RoleDirective] = []
        pending = list(args)
        sign = "+"
        with self._lock:
            room = self._room_or_log(room_name)
            if room is None:
                return applied
            for letter in modes:
                if letter in "+-":
                    sign = letter
                    continue
                if MemberRole.from_mode(letter) is None:
                    if letter in _ARG_MODES_ALWAYS or (sign == "+" and letter in _ARG_MODES_ON_SET):
                        if pending:
                            pending.pop(0)
                    continue
                if not pending:
                    self.logger.debug("Mode %s%s sans argument dans %s", sign, letter, room.name)
                    continue
                directive = RoleDirective.from_mode(sign, letter, pending.pop(0))
                member = room.members.get(nick_key(directive.nickname))
                if member is None:
                    self.logger.debug("Mode %s%s pour membre inconnu %s", sign, letter, directive.nickname)
                    continue
                directive.apply(member)
                applied.append(directive)
        return applied


__all__ = ["ChatRoomRoster"]
