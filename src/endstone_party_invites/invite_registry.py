from __future__ import annotations

import threading
from typing import Callable
from uuid import UUID

from .models import Invite, now_ms


class InviteRegistry:
    """Pending party invites, keyed by the invited player.

    Each invitee owns an ordered list of invites (oldest first). Expired
    entries are only evicted when that invitee's list is touched again; there
    is no background sweep. Every operation runs under one registry-wide lock.
    """

    def __init__(self, clock: Callable[[], int] = now_ms) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._pending: dict[UUID, list[Invite]] = {}

    def send(self, inviter: UUID, invitee: UUID, ttl_ms: int) -> Invite:
        if inviter == invitee:
            raise ValueError("players cannot invite themselves")

        with self._lock:
            invites = self._pending.setdefault(invitee, [])
            self._prune(invites)
            invite = Invite(inviter=inviter, invitee=invitee, expires_at=self._clock() + int(ttl_ms))
            invites.append(invite)
            return invite

    def resolve(self, invitee: UUID, inviter: UUID | None = None) -> Invite | None:
        with self._lock:
            invites = self._pending.get(invitee)
            if invites is None:
                return None
            self._prune(invites)
            if not invites:
                return None
            if inviter is None:
                return invites[-1]
            for invite in reversed(invites):
                if invite.inviter == inviter:
                    return invite
            return None

    def consume(self, invitee: UUID, invite: Invite) -> bool:
        with self._lock:
            invites = self._pending.get(invitee)
            if not invites:
                return False
            for index, candidate in enumerate(invites):
                if candidate is invite:
                    del invites[index]
                    return True
            return False

    def pending(self, invitee: UUID) -> list[Invite]:
        with self._lock:
            invites = self._pending.get(invitee)
            if invites is None:
                return []
            self._prune(invites)
            return list(invites)

    def pending_count(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(
                1
                for invites in self._pending.values()
                for invite in invites
                if not invite.is_expired(now)
            )

    def _prune(self, invites: list[Invite]) -> None:
        # Caller holds the lock.
        now = self._clock()
        invites[:] = [invite for invite in invites if not invite.is_expired(now)]


__all__ = ["InviteRegistry"]
