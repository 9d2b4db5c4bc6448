import shlex
from pathlib import Path
from typing import Any

from endstone import Player
from endstone.command import Command, CommandSender
from endstone.plugin import Plugin

from .directory import ServerPlayerDirectory
from .group_manager import GroupManager
from .invite_registry import InviteRegistry
from .messaging import ScheduledMessageSink
from .party_service import PartyService

DEFAULT_CONFIG_TOML = """
[party]
invite-ttl-seconds = 60
max-members = 0

[messages]
prefix = ""
players-only = "Players only."
wrong-usage = "\u00a7cUsage: /party <player> | accept [player] | deny [player] | leave"
player-not-found = "Player not found."
no-matching-invite = "No matching invite."
not-in-party = "You're not in a party."
party-full = "That party is full."
invite-sent = "You invited {player}."
invite-received = "{player} invited you to their party. Use /party accept or /party deny."
party-joined = "You joined {player}'s party."
player-joined = "{player} joined your party."
invite-denied = "Invite denied."
invite-denied-notice = "{player} denied your party invite."
party-left = "You left the party."
""".strip()


class PartyInvitesPlugin(Plugin):
    version = "1.0.0"
    api_version = "0.10"
    description = "Invite online players to your party and join their group"

    commands = {
        "party": {
            "description": "Invite players to your party, accept/deny, or leave.",
            "usages": ["/party [args: message]"],
            "aliases": ["pt"],
            "permissions": ["partyinvites.command.party"],
        },
    }

    permissions = {
        "partyinvites.command.party": {
            "description": "Allow users to use the /party command.",
            "default": True,
        },
    }

    def __init__(self) -> None:
        super().__init__()
        self.invite_registry: InviteRegistry
        self.group_manager: GroupManager
        self.party_service: PartyService

    def on_enable(self) -> None:
        self._ensure_default_config()
        self.reload_config()

        self.invite_registry = InviteRegistry()
        self.group_manager = GroupManager(self)
        self.party_service = PartyService(
            self,
            registry=self.invite_registry,
            directory=ServerPlayerDirectory(self.server),
            messages=ScheduledMessageSink(self),
            groups=self.group_manager,
        )

        self.logger.info("PartyInvites enabled. Commands: /party <player>, /party accept, /party deny, /party leave")

    def on_disable(self) -> None:
        if hasattr(self, "invite_registry"):
            self.logger.info(f"PartyInvites disabled, dropping {self.invite_registry.pending_count()} pending invites")

    def on_command(self, sender: CommandSender, command: Command, args: list[str]) -> bool:
        if command.name.lower() == "party":
            return self._handle_party_command(sender, args)
        return False

    def get_config(self, path: str, default: Any = None) -> Any:
        cursor: Any = self.config
        for segment in path.split("."):
            try:
                if segment not in cursor:
                    return default
                cursor = cursor[segment]
            except Exception:
                return default
        return cursor

    def msg(self, key: str, **kwargs: Any) -> str:
        prefix = str(self.get_config("messages.prefix", ""))
        template = str(self.get_config(f"messages.{key}", key))
        for param_name, param_value in kwargs.items():
            template = template.replace("{" + param_name + "}", str(param_value))
        return prefix + template

    def _ensure_default_config(self) -> None:
        data_folder = Path(self.data_folder)
        data_folder.mkdir(parents=True, exist_ok=True)
        config_path = data_folder / "config.toml"
        if not config_path.exists():
            config_path.write_text(DEFAULT_CONFIG_TOML + "\n", encoding="utf-8")

    def _parse_payload(self, args: list[str]) -> list[str]:
        raw = " ".join(args).strip()
        if not raw:
            return []
        try:
            return shlex.split(raw)
        except ValueError:
            return raw.split()

    def _require_player_sender(self, sender: CommandSender) -> Player | None:
        if isinstance(sender, Player):
            return sender
        sender.send_message(self.msg("players-only"))
        return None

    def _handle_party_command(self, sender: CommandSender, args: list[str]) -> bool:
        player = self._require_player_sender(sender)
        if player is None:
            return True

        _, reply = self.party_service.execute(player, self._parse_payload(args))
        player.send_message(reply)
        return True


__all__ = ["PartyInvitesPlugin"]
