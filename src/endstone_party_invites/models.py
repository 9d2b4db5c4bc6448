from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import time
from uuid import UUID, uuid4


MILLIS_PER_SECOND = 1000


def now_ms() -> int:
    return int(time.time() * 1000)


class GroupRank(str, Enum):
    OWNER = "owner"
    MEMBER = "member"


@dataclass(frozen=True, slots=True, eq=False)
class Invite:
    """A pending party invitation.

    Equality is identity: two invites sent in the same millisecond by the same
    inviter are still separate entries and are consumed one at a time.
    """

    inviter: UUID
    invitee: UUID
    expires_at: int

    def is_expired(self, timestamp_ms: int | None = None) -> bool:
        now = timestamp_ms if timestamp_ms is not None else now_ms()
        return now > self.expires_at


@dataclass(slots=True)
class Group:
    id: UUID
    owner: UUID
    members: set[UUID] = field(default_factory=set)
    ranks: dict[UUID, GroupRank] = field(default_factory=dict)

    @classmethod
    def create(cls, owner_id: UUID) -> "Group":
        group = cls(id=uuid4(), owner=owner_id)
        group.members.add(owner_id)
        group.ranks[owner_id] = GroupRank.OWNER
        return group

    def is_member(self, player_id: UUID) -> bool:
        return player_id in self.members

    def is_owner(self, player_id: UUID) -> bool:
        return self.owner == player_id

    def add_member(self, player_id: UUID, rank: GroupRank = GroupRank.MEMBER) -> None:
        self.members.add(player_id)
        if rank is GroupRank.OWNER:
            self.transfer_ownership(player_id)
            return
        self.ranks[player_id] = rank if player_id != self.owner else GroupRank.OWNER

    def remove_member(self, player_id: UUID) -> None:
        self.members.discard(player_id)
        self.ranks.pop(player_id, None)

    def transfer_ownership(self, new_owner_id: UUID) -> bool:
        if new_owner_id not in self.members:
            return False
        if self.owner != new_owner_id and self.owner in self.members:
            self.ranks[self.owner] = GroupRank.MEMBER
        self.owner = new_owner_id
        self.ranks[new_owner_id] = GroupRank.OWNER
        return True
