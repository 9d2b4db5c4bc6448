from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable
from uuid import UUID

if TYPE_CHECKING:
    from endstone import Server


def match_player(players: Iterable[Any], query: str, exclude: UUID | None = None) -> Any | None:
    """Pick the online player a free-text query refers to.

    An exact identifier wins, then an exact (case-insensitive) name, then the
    first player whose name contains the query. The player whose identifier
    is ``exclude`` is never picked.
    """
    token = query.strip()
    if not token:
        return None
    normalized = token.lower()

    candidates = [player for player in players if player.unique_id != exclude]
    for player in candidates:
        if str(player.unique_id).lower() == normalized:
            return player
    for player in candidates:
        if player.name.lower() == normalized:
            return player
    for player in candidates:
        if normalized in player.name.lower():
            return player
    return None


class ServerPlayerDirectory:
    def __init__(self, server: "Server") -> None:
        self.server = server

    def online_players(self) -> list[Any]:
        return list(self.server.online_players)

    def get_player(self, player_id: UUID) -> Any | None:
        return self.server.get_player(player_id)

    def find_player(self, query: str, exclude: UUID | None = None) -> Any | None:
        return match_player(self.server.online_players, query, exclude)


__all__ = ["ServerPlayerDirectory", "match_player"]
