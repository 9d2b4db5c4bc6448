from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from . import PartyInvitesPlugin


class ScheduledMessageSink:
    """Delivers notifications on the next server tick.

    Delivery is best-effort: a recipient who went offline in the meantime is
    skipped, and a failing send is logged rather than raised.
    """

    def __init__(self, plugin: "PartyInvitesPlugin") -> None:
        self.plugin = plugin

    def send(self, player_id: UUID, message: str) -> None:
        def deliver() -> None:
            self._deliver(player_id, message)

        self.plugin.server.scheduler.run_task(self.plugin, deliver)

    def _deliver(self, player_id: UUID, message: str) -> None:
        player = self.plugin.server.get_player(player_id)
        if player is None:
            return
        try:
            player.send_message(message)
        except Exception as exc:
            self.plugin.logger.warning(f"Failed to notify {player.name}: {exc}")


__all__ = ["ScheduledMessageSink"]
