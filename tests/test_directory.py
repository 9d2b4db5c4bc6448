import sys
import unittest
from pathlib import Path
from uuid import UUID, uuid4

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from endstone_party_invites.directory import ServerPlayerDirectory, match_player
from endstone_party_invites.messaging import ScheduledMessageSink


class DummyPlayer:
    def __init__(self, name: str, unique_id: UUID | None = None) -> None:
        self.name = name
        self.unique_id = unique_id or uuid4()
        self.messages: list[str] = []

    def send_message(self, message: str) -> None:
        self.messages.append(message)


class BrokenPlayer(DummyPlayer):
    def send_message(self, message: str) -> None:
        raise RuntimeError("connection reset")


class DummyScheduler:
    def __init__(self) -> None:
        self.tasks = []

    def run_task(self, _plugin, task, *_args, **_kwargs):
        self.tasks.append(task)

    def run_pending(self) -> None:
        tasks, self.tasks = self.tasks, []
        for task in tasks:
            task()


class DummyServer:
    def __init__(self) -> None:
        self.players: dict[UUID, DummyPlayer] = {}
        self.scheduler = DummyScheduler()

    @property
    def online_players(self) -> list[DummyPlayer]:
        return list(self.players.values())

    def add_player(self, player: DummyPlayer) -> None:
        self.players[player.unique_id] = player

    def remove_player(self, player_id: UUID) -> None:
        self.players.pop(player_id, None)

    def get_player(self, identifier):
        return self.players.get(identifier)


class DummyLogger:
    def __init__(self) -> None:
        self.warning_messages: list[str] = []

    def info(self, _msg: str) -> None:
        return None

    def warning(self, message: str) -> None:
        self.warning_messages.append(message)


class DummyPlugin:
    def __init__(self, server: DummyServer) -> None:
        self.server = server
        self.logger = DummyLogger()


class MatchPlayerTests(unittest.TestCase):
    def test_substring_match_is_case_insensitive(self) -> None:
        steve = DummyPlayer("SteveTheBuilder")
        self.assertIs(match_player([steve], "thebuild"), steve)

    def test_exact_identifier_wins_over_substring(self) -> None:
        target = DummyPlayer("Target")
        decoy = DummyPlayer(f"x{target.unique_id}")
        self.assertIs(match_player([decoy, target], str(target.unique_id)), target)

    def test_exact_name_wins_over_earlier_substring(self) -> None:
        longer = DummyPlayer("Alexander")
        exact = DummyPlayer("Alex")
        self.assertIs(match_player([longer, exact], "alex"), exact)

    def test_first_substring_match_is_used(self) -> None:
        first = DummyPlayer("Sam One")
        second = DummyPlayer("Sam Two")
        self.assertIs(match_player([first, second], "sam"), first)

    def test_excluded_player_is_never_matched(self) -> None:
        alice = DummyPlayer("Alice")
        alicia = DummyPlayer("Alicia")

        self.assertIs(match_player([alice, alicia], "ali", exclude=alice.unique_id), alicia)
        self.assertIsNone(match_player([alice], "alice", exclude=alice.unique_id))
        self.assertIsNone(match_player([alice], str(alice.unique_id), exclude=alice.unique_id))

    def test_blank_or_unknown_query_matches_nothing(self) -> None:
        players = [DummyPlayer("Someone")]
        self.assertIsNone(match_player(players, "   "))
        self.assertIsNone(match_player(players, "nobody"))


class ServerPlayerDirectoryTests(unittest.TestCase):
    def test_lookups_use_online_players(self) -> None:
        server = DummyServer()
        player = DummyPlayer("Online")
        server.add_player(player)
        directory = ServerPlayerDirectory(server)

        self.assertEqual(directory.online_players(), [player])
        self.assertIs(directory.get_player(player.unique_id), player)
        self.assertIs(directory.find_player("onl"), player)

        server.remove_player(player.unique_id)
        self.assertIsNone(directory.find_player("onl"))


class ScheduledMessageSinkTests(unittest.TestCase):
    def setUp(self) -> None:
        self.server = DummyServer()
        self.plugin = DummyPlugin(self.server)
        self.sink = ScheduledMessageSink(self.plugin)

    def test_message_is_delivered_on_next_tick(self) -> None:
        player = DummyPlayer("Recipient")
        self.server.add_player(player)

        self.sink.send(player.unique_id, "hello")
        self.assertEqual(player.messages, [])

        self.server.scheduler.run_pending()
        self.assertEqual(player.messages, ["hello"])

    def test_offline_recipient_is_skipped(self) -> None:
        player = DummyPlayer("Leaver")
        self.server.add_player(player)

        self.sink.send(player.unique_id, "hello")
        self.server.remove_player(player.unique_id)
        self.server.scheduler.run_pending()

        self.assertEqual(player.messages, [])
        self.assertEqual(self.plugin.logger.warning_messages, [])

    def test_delivery_failure_is_logged_not_raised(self) -> None:
        player = BrokenPlayer("Flaky")
        self.server.add_player(player)

        self.sink.send(player.unique_id, "hello")
        self.server.scheduler.run_pending()

        self.assertEqual(len(self.plugin.logger.warning_messages), 1)
        self.assertIn("Flaky", self.plugin.logger.warning_messages[0])


if __name__ == "__main__":
    unittest.main()
