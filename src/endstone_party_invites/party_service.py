from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from .collaborators import GroupService, MessageSink, PlayerDirectory
from .invite_registry import InviteRegistry
from .models import GroupRank, Invite, MILLIS_PER_SECOND

if TYPE_CHECKING:
    from . import PartyInvitesPlugin


DEFAULT_INVITE_TTL_SECONDS = 60


class PartyService:
    """Runs the ``/party`` subcommands for one player.

    Every public method returns ``(success, reply)`` where ``reply`` is the
    rendered line for the acting player. Notifications for the other player go
    through the message sink and never affect the result.
    """

    def __init__(
        self,
        plugin: "PartyInvitesPlugin",
        registry: InviteRegistry,
        directory: PlayerDirectory,
        messages: MessageSink,
        groups: GroupService,
    ) -> None:
        self.plugin = plugin
        self.registry = registry
        self.directory = directory
        self.messages = messages
        self.groups = groups

    def execute(self, actor: Any, tokens: list[str]) -> tuple[bool, str]:
        if not tokens:
            return False, self.plugin.msg("wrong-usage")

        sub = tokens[0].lower()
        rest = tokens[1:]
        who = " ".join(rest).strip() or None

        if sub == "accept":
            return self.accept(actor, who)
        if sub == "deny":
            return self.deny(actor, who)
        if sub == "leave":
            return self.leave(actor)

        return self.invite(actor, " ".join(tokens))

    def invite_ttl_ms(self) -> int:
        try:
            seconds = int(self.plugin.get_config("party.invite-ttl-seconds", DEFAULT_INVITE_TTL_SECONDS))
        except (TypeError, ValueError):
            seconds = DEFAULT_INVITE_TTL_SECONDS
        if seconds <= 0:
            seconds = DEFAULT_INVITE_TTL_SECONDS
        return seconds * MILLIS_PER_SECOND

    def invite(self, actor: Any, query: str) -> tuple[bool, str]:
        target = self.directory.find_player(query, exclude=actor.unique_id)
        if target is None:
            return False, self.plugin.msg("player-not-found")

        self.registry.send(actor.unique_id, target.unique_id, self.invite_ttl_ms())
        self.messages.send(target.unique_id, self.plugin.msg("invite-received", player=actor.name))
        return True, self.plugin.msg("invite-sent", player=target.name)

    def accept(self, actor: Any, who: str | None = None) -> tuple[bool, str]:
        # The invite is retired whatever happens next.
        invite = self._claim_invite(actor.unique_id, who)
        if invite is None:
            return False, self.plugin.msg("no-matching-invite")

        inviter = self.directory.get_player(invite.inviter)
        if inviter is None:
            return False, self.plugin.msg("no-matching-invite")

        group_id = self.groups.get_group_id(inviter.unique_id)
        created = group_id is None
        if created:
            group_id = self._create_group(inviter)
            if group_id is None:
                return False, self.plugin.msg("no-matching-invite")

        if not self.groups.assign_to_group(actor.unique_id, group_id, GroupRank.MEMBER):
            if created:
                self.groups.clear_group(inviter.unique_id)
            return False, self.plugin.msg("party-full")

        self.messages.send(inviter.unique_id, self.plugin.msg("player-joined", player=actor.name))
        return True, self.plugin.msg("party-joined", player=inviter.name)

    def deny(self, actor: Any, who: str | None = None) -> tuple[bool, str]:
        invite = self._claim_invite(actor.unique_id, who)
        if invite is None:
            return False, self.plugin.msg("no-matching-invite")

        inviter = self.directory.get_player(invite.inviter)
        if inviter is not None:
            self.messages.send(inviter.unique_id, self.plugin.msg("invite-denied-notice", player=actor.name))
        return True, self.plugin.msg("invite-denied")

    def leave(self, actor: Any) -> tuple[bool, str]:
        if self.groups.get_group_id(actor.unique_id) is None:
            return False, self.plugin.msg("not-in-party")

        self.groups.clear_group(actor.unique_id)
        return True, self.plugin.msg("party-left")

    def _claim_invite(self, invitee_id: UUID, who: str | None) -> Invite | None:
        inviter_id = None
        if who is not None and who.strip():
            inviter = self.directory.find_player(who, exclude=invitee_id)
            if inviter is None:
                return None
            inviter_id = inviter.unique_id

        invite = self.registry.resolve(invitee_id, inviter_id)
        if invite is None:
            return None
        # Another command may have retired the same invite since it was resolved.
        if not self.registry.consume(invitee_id, invite):
            return None
        return invite

    def _create_group(self, owner: Any) -> UUID | None:
        try:
            group_id = self.groups.create_group(owner.unique_id)
        except Exception as exc:
            self.plugin.logger.warning(f"Failed to create a party group for {owner.name}: {exc}")
            return None

        if group_id is None:
            self.plugin.logger.warning(f"Group creation was refused for {owner.name}")
        return group_id


__all__ = ["PartyService", "DEFAULT_INVITE_TTL_SECONDS"]
