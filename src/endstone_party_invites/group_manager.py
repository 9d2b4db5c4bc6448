from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from .models import Group, GroupRank

if TYPE_CHECKING:
    from . import PartyInvitesPlugin


class GroupManager:
    def __init__(self, plugin: "PartyInvitesPlugin") -> None:
        self.plugin = plugin

        self.groups: dict[UUID, Group] = {}
        self.player_to_group: dict[UUID, UUID] = {}

    def get_group(self, group_id: UUID) -> Group | None:
        return self.groups.get(group_id)

    def get_group_id(self, player_id: UUID) -> UUID | None:
        group_id = self.player_to_group.get(player_id)
        if group_id is None:
            return None
        if group_id not in self.groups:
            self.player_to_group.pop(player_id, None)
            return None
        return group_id

    def get_player_group(self, player_id: UUID) -> Group | None:
        group_id = self.get_group_id(player_id)
        if group_id is None:
            return None
        return self.groups.get(group_id)

    def members_of(self, group_id: UUID) -> set[UUID]:
        group = self.groups.get(group_id)
        if group is None:
            return set()
        return set(group.members)

    def create_group(self, owner_id: UUID) -> UUID | None:
        self.clear_group(owner_id)

        group = Group.create(owner_id)
        self.groups[group.id] = group
        self.player_to_group[owner_id] = group.id
        return group.id

    def assign_to_group(self, player_id: UUID, group_id: UUID, rank: GroupRank = GroupRank.MEMBER) -> bool:
        group = self.groups.get(group_id)
        if group is None:
            return False

        if not group.is_member(player_id):
            max_members = int(self.plugin.get_config("party.max-members", 0))
            if max_members > 0 and len(group.members) >= max_members:
                return False
            self.clear_group(player_id)

        group.add_member(player_id, rank)
        self.player_to_group[player_id] = group.id
        return True

    def clear_group(self, player_id: UUID) -> bool:
        group = self.get_player_group(player_id)
        self.player_to_group.pop(player_id, None)
        if group is None:
            return False

        was_owner = group.is_owner(player_id)
        group.remove_member(player_id)

        if not group.members:
            self.disband_group(group.id)
            return True

        if was_owner:
            new_owner = self._pick_new_owner(group)
            if new_owner is not None:
                group.transfer_ownership(new_owner)

        return True

    def disband_group(self, group_id: UUID) -> bool:
        group = self.groups.pop(group_id, None)
        if group is None:
            return False

        for member_id in group.members:
            if self.player_to_group.get(member_id) == group_id:
                self.player_to_group.pop(member_id, None)
        return True

    def _pick_new_owner(self, group: Group) -> UUID | None:
        for member_id in group.members:
            if self.plugin.server.get_player(member_id) is not None:
                return member_id

        for member_id in sorted(group.members, key=lambda value: str(value)):
            return member_id
        return None


__all__ = ["GroupManager"]
