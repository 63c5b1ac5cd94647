from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING

from core.errors import InvalidArgumentError

if TYPE_CHECKING:
    from core.member import IrcChatRoomMember


def nick_key(nickname: str, label: str = "nickname") -> str:
    """Clé de recherche d'un pseudo (IRC ne distingue pas la casse)."""
    if nickname is None:
        raise InvalidArgumentError(label)
    return nickname.lower()


def room_key(name: str, label: str = "room_name") -> str:
    """Clé de recherche d'un salon (#Python et #python sont le même canal)."""
    if name is None:
        raise InvalidArgumentError(label)
    return name.lower()


@dataclass(eq=False)
class IrcConnection:
    """Session IRC (une connexion à un serveur sous un pseudo).

    Comparée par identité : deux sessions vers le même serveur restent distinctes.
    """

    server: str
    port: int = 6667
    nickname: Optional[str] = None


@dataclass(eq=False)
class ChatRoom:
    """État en mémoire d'un salon rejoint.

    members : pseudo (minuscules) -> membre
    """

    name: str
    connection: IrcConnection
    members: Dict[str, "IrcChatRoomMember"] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return room_key(self.name, "name")
