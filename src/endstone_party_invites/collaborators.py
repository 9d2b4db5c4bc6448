from __future__ import annotations

from typing import Any, Protocol
from uuid import UUID

from .models import GroupRank


class PlayerDirectory(Protocol):
    def online_players(self) -> list[Any]:
        ...

    def get_player(self, player_id: UUID) -> Any | None:
        ...

    def find_player(self, query: str, exclude: UUID | None = None) -> Any | None:
        ...


class MessageSink(Protocol):
    def send(self, player_id: UUID, message: str) -> None:
        ...


class GroupService(Protocol):
    def get_group_id(self, player_id: UUID) -> UUID | None:
        ...

    def create_group(self, owner_id: UUID) -> UUID | None:
        ...

    def assign_to_group(self, player_id: UUID, group_id: UUID, rank: GroupRank = GroupRank.MEMBER) -> bool:
        ...

    def clear_group(self, player_id: UUID) -> bool:
        ...


__all__ = [
    "PlayerDirectory",
    "MessageSink",
    "GroupService",
]
