import sys
import unittest
from pathlib import Path
from uuid import uuid4

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from endstone_party_invites.models import Group, GroupRank, Invite


class InviteModelTests(unittest.TestCase):
    def test_expiry_is_strictly_after_deadline(self) -> None:
        invite = Invite(inviter=uuid4(), invitee=uuid4(), expires_at=60_000)

        self.assertFalse(invite.is_expired(59_999))
        self.assertFalse(invite.is_expired(60_000))
        self.assertTrue(invite.is_expired(60_001))

    def test_identical_invites_are_distinct(self) -> None:
        inviter = uuid4()
        invitee = uuid4()
        first = Invite(inviter=inviter, invitee=invitee, expires_at=1_000)
        second = Invite(inviter=inviter, invitee=invitee, expires_at=1_000)

        self.assertNotEqual(first, second)
        self.assertEqual(first, first)


class GroupModelTests(unittest.TestCase):
    def test_create_assigns_owner_rank(self) -> None:
        owner = uuid4()
        group = Group.create(owner)

        self.assertTrue(group.is_owner(owner))
        self.assertEqual(group.members, {owner})
        self.assertEqual(group.ranks[owner], GroupRank.OWNER)

    def test_transfer_ownership_demotes_previous_owner(self) -> None:
        owner = uuid4()
        member = uuid4()
        group = Group.create(owner)
        group.add_member(member)

        self.assertTrue(group.transfer_ownership(member))
        self.assertEqual(group.owner, member)
        self.assertEqual(group.ranks[member], GroupRank.OWNER)
        self.assertEqual(group.ranks[owner], GroupRank.MEMBER)

    def test_transfer_to_non_member_is_refused(self) -> None:
        owner = uuid4()
        group = Group.create(owner)

        self.assertFalse(group.transfer_ownership(uuid4()))
        self.assertEqual(group.owner, owner)


if __name__ == "__main__":
    unittest.main()
