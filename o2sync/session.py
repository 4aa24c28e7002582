"""Sync-group session state: players, configuration, notifications and view models."""

from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from o2sync.decode import deserialize as _deserialize_packet
from o2sync.names import dungeon_name, overworld_name, underworld_name
from o2sync.player import Player, SyncableWRAM

log = logging.getLogger(__name__)

GAME_NAME = "ALTTP"

# Player indexes travel as uint16 on the wire; 256 is the practical limit.
MAX_PLAYERS = 256

DEFAULT_PLAYER_COLOR = 0x12EF

WRAM_SIZE = 0x20000

# SNES master clock is ~1.89e9/88 Hz; one non-interlaced frame is 262 scanlines
# of 1364 master cycles, except one scanline of 1362 cycles.
_SNES_FRAME_CLOCKS = (261 * 1364) + 1362
_SNES_FRAME_NANOCLOCKS = _SNES_FRAME_CLOCKS * 1_000_000_000
SNES_FRAME_NANOSECONDS = _SNES_FRAME_NANOCLOCKS // (1_890_000_000 // 88)

_SYNC_FLAGS: dict[str, str] = {
    "syncItems": "sync_items",
    "syncDungeonItems": "sync_dungeon_items",
    "syncProgress": "sync_progress",
    "syncHearts": "sync_hearts",
    "syncSmallKeys": "sync_small_keys",
    "syncUnderworld": "sync_underworld",
    "syncOverworld": "sync_overworld",
    "syncChests": "sync_chests",
    "syncTunicColor": "sync_tunic_color",
}

ViewNotifier = Callable[[str, Any], None]
Observer = Callable[[str], None]


def server_snes_timestamp(server_now_ns: int) -> int:
    """Quantize a server time in nanoseconds down to an idealized SNES frame boundary."""
    frames = abs(server_now_ns) // SNES_FRAME_NANOSECONDS
    if server_now_ns < 0:
        frames = -frames
    return frames * SNES_FRAME_NANOSECONDS


def _new_player() -> Player:
    return Player(index=-1, player_color=DEFAULT_PLAYER_COLOR)


def _check_color(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"playerColor must be an integer, got {type(value).__name__}")
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"playerColor {value:#x} does not fit in 16 bits")
    return value


def _check_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean, got {type(value).__name__}")
    return value


@dataclass
class PlayerViewModel:
    """What the front end shows about one active player."""

    index: int
    team: int
    name: str
    color: int
    location: int
    overworld: str
    underworld: str
    dungeon_name: str

    def to_json(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "team": self.team,
            "name": self.name,
            "color": self.color,
            "location": self.location,
            "overworld": self.overworld,
            "underworld": self.underworld,
            "dungeonName": self.dungeon_name,
        }


class Session:
    """State of the local game within a sync group."""

    name = GAME_NAME
    title = GAME_NAME

    def __init__(
        self,
        rom_title: str = "",
        view_notifier: Optional[ViewNotifier] = None,
        save_configuration: Optional[Callable[[], None]] = None,
    ) -> None:
        self.description = rom_title.rstrip(" ")
        self.view_notifier = view_notifier
        self.save_configuration = save_configuration

        self.is_created = True
        self.game_name = GAME_NAME
        self.player_color = DEFAULT_PLAYER_COLOR
        self.sync_items = True
        self.sync_dungeon_items = True
        self.sync_progress = True
        self.sync_hearts = True
        self.sync_small_keys = True
        self.sync_underworld = True
        self.sync_overworld = True
        self.sync_chests = True
        self.sync_tunic_color = False

        self.notification_history: list[str] = []
        self._observers: list[Observer] = []
        self._clean = False
        self.players_list_dirty = False

        self.players: list[Player] = []
        self.local: Player = _new_player()
        self.wram = bytearray(WRAM_SIZE)
        self.reset()

    # -- lifecycle ---------------------------------------------------------

    def reset(self) -> None:
        """Forget all players and start over with a fresh, unindexed local player."""
        self._clean = False
        previous = self.local
        self.players = [_new_player() for _ in range(MAX_PLAYERS)]
        local = _new_player()
        # keep the last name and team chosen for the local player:
        local.name = previous.name
        local.team = previous.team
        local.wram = type(local.wram)()
        self.local = local
        self.wram = bytearray(b"\xff") * WRAM_SIZE

    # -- notifications -----------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` for notifications; returns a function that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def push_notification(self, notification: str) -> None:
        """Publish a notification to observers and record it in the view history."""
        for observer in list(self._observers):
            observer(notification)
        self.notification_history.append(notification)
        self._notify_view_key("game/notification/history", list(self.notification_history))

    def _notify_view_key(self, key: str, value: Any) -> None:
        if self.view_notifier is not None:
            self.view_notifier(key, value)

    def _notify_view(self) -> None:
        if self.players_list_dirty:
            self.players_list()
            self._clean = False
        if self._clean:
            return
        self._clean = True
        self.player_color = self.local.player_color
        self._notify_view_key("game", self.configuration_model())

    # -- front-end input ---------------------------------------------------

    def notify(self, key: str, value: Any) -> None:
        """Accept a value set in the front end's root view model."""
        if key == "team":
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"team must be an integer, got {type(value).__name__}")
            self.local.team = value & 0xFF
            self.players_list()
        elif key == "playerName":
            if not isinstance(value, str):
                raise TypeError(f"playerName must be a string, got {type(value).__name__}")
            self.local.name = value
            self.players_list()

    def load_configuration(self, config: Any) -> None:
        """Apply a saved configuration (JSON text or a mapping); bad input is logged and ignored."""
        try:
            data = json.loads(config) if isinstance(config, (str, bytes, bytearray)) else config
            if not isinstance(data, Mapping):
                raise TypeError("configuration must be a JSON object")
            updates: dict[str, Any] = {}
            if "isCreated" in data:
                updates["is_created"] = _check_bool("isCreated", data["isCreated"])
            if "gameName" in data:
                if not isinstance(data["gameName"], str):
                    raise TypeError("gameName must be a string")
                updates["game_name"] = data["gameName"]
            if "playerColor" in data:
                updates["player_color"] = _check_color(data["playerColor"])
            for key, attr in _SYNC_FLAGS.items():
                if key in data:
                    updates[attr] = _check_bool(key, data[key])
        except (ValueError, TypeError) as exc:
            log.warning("alttp: load configuration: %s", exc)
            return
        for attr, value in updates.items():
            setattr(self, attr, value)
        self.is_created = True
        self.local.player_color = self.player_color

    def configuration_model(self) -> dict[str, Any]:
        """Return the serializable configuration and view model."""
        model: dict[str, Any] = {
            "isCreated": self.is_created,
            "gameName": self.game_name,
            "playerColor": self.player_color,
        }
        for key, attr in _SYNC_FLAGS.items():
            model[key] = getattr(self, attr)
        return model

    def set_fields(self, fields: Mapping[str, Any]) -> None:
        """Apply front-end changes to sync toggles and player color, then save and refresh."""
        updates: dict[str, Any] = {}
        for key, attr in _SYNC_FLAGS.items():
            if fields.get(key) is not None:
                updates[attr] = _check_bool(key, fields[key])
        color = fields.get("playerColor")
        if color is not None:
            color = _check_color(color)

        for attr, value in updates.items():
            setattr(self, attr, value)
            self._clean = False
        if color is not None:
            self.local.player_color = color
            self.players_list_dirty = True
            self._clean = False

        if self.save_configuration is not None:
            self.save_configuration()
        self._notify_view()

    # -- players -----------------------------------------------------------

    def active_players(self) -> list[Player]:
        """Return players with an assigned index and a live TTL."""
        return [p for p in self.players if p.index >= 0 and p.ttl > 0]

    def remote_players(self) -> list[Player]:
        """Return the active players other than the local one."""
        return [p for p in self.active_players() if p is not self.local]

    def set_ttl(self, player: Player, ttl: int) -> None:
        joined = player.ttl <= 0 < ttl
        player.ttl = ttl
        if joined:
            self.player_joined(player)

    def dec_ttl(self, player: Player, amount: int) -> None:
        if player.ttl <= 0:
            return
        player.ttl -= amount
        if player.ttl <= 0:
            self.player_left(player)

    def player_joined(self, player: Player) -> None:
        player.show_join_message = True
        self.players_list_dirty = True

    def player_left(self, player: Player) -> None:
        player.ttl = 0
        player.show_join_message = False
        log.info("alttp: player[%02x]: %s left", player.index & 0xFF, player.name)
        self.push_notification(f"{player.name} left")
        self.players_list_dirty = True

    def deserialize(self, data: bytes, player: Player) -> bool:
        """Apply a broadcast packet from another player; True if the players list changed."""
        changed = _deserialize_packet(io.BytesIO(data), player)
        if changed:
            self.players_list_dirty = True
        return changed

    def players_list(self) -> list[PlayerViewModel]:
        """Build the active players' view models and send them to the view."""
        self.players_list_dirty = False
        models = []
        for p in self.active_players():
            models.append(
                PlayerViewModel(
                    index=p.index,
                    team=p.team,
                    name=p.name or f"player #{p.index:02x}",
                    color=p.player_color,
                    location=p.location,
                    overworld=overworld_name(p.overworld_area),
                    underworld=underworld_name(p.dungeon_room),
                    dungeon_name=dungeon_name(p.dungeon),
                )
            )
        self._notify_view_key("game/players", [m.to_json() for m in models])
        return models

    def track_wram(self, offset: int, entry: SyncableWRAM) -> None:
        """Track a WRAM value of the local player for syncing."""
        self.local.wram[offset & 0xFFFF] = entry