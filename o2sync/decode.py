"""Decoding of broadcast packets received from other players in the sync group."""

from __future__ import annotations

import struct
from typing import BinaryIO, Callable

from o2sync.codec import (
    MAX_MESSAGE_TYPE,
    SERIALIZATION_VERSION,
    MessageType,
    SerdeError,
    read_u24,
)
from o2sync.player import Module, Player, SyncableWRAM

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_LOCATION_TAIL = struct.Struct("<HHHHHHhhHB")
_WRAM_ENTRY = struct.Struct("<IH")

_NAME_LENGTH = 20
_NAME_STRIP = " \t\n\r\x00"


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if data is None or len(data) < size:
        raise SerdeError(f"unexpected end of data deserializing {what}")
    return data


def _read_u8(stream: BinaryIO, what: str) -> int:
    return _read_exact(stream, 1, what)[0]


def _read_u16(stream: BinaryIO, what: str) -> int:
    return _U16.unpack(_read_exact(stream, 2, what))[0]


def _read_u24(stream: BinaryIO, what: str) -> int:
    try:
        return read_u24(stream)
    except SerdeError as exc:
        raise SerdeError(f"unexpected end of data deserializing {what}") from exc


def deserialize(stream: BinaryIO, player: Player) -> bool:
    """Apply a broadcast packet from ``stream`` to ``player``.

    Returns True when the change should be reflected in the players list.
    Packets older than the last frame seen from the player are discarded.
    Raises SerdeError on malformed or incompatible data.
    """
    version = _read_u8(stream, "serialization version")
    if version != SERIALIZATION_VERSION:
        raise SerdeError(
            f"serialization version mismatch: got {version:#04x}, expected {SERIALIZATION_VERSION:#04x}"
        )

    changed = False
    team = _read_u8(stream, "team")
    if team != player.team:
        changed = True
    player.team = team

    frame = _read_u8(stream, "frame")

    # discard stale frame data, allowing for the 8-bit counter wrapping:
    next_frame = frame
    last_frame = player.frame
    if last_frame - next_frame >= 128:
        last_frame -= 256
    if next_frame < last_frame:
        return changed
    player.frame = frame

    while True:
        head = stream.read(1)
        if not head:
            break
        msg_type = head[0]
        if msg_type == 0 or msg_type >= MAX_MESSAGE_TYPE:
            # there is no way to skip over a message of unknown length
            raise SerdeError(f"message type {msg_type:#04x} out of bounds")
        handler = _HANDLERS[MessageType(msg_type)]
        if handler(player, stream):
            changed = True

    return changed


def deserialize_location(player: Player, stream: BinaryIO) -> bool:
    """Read a location message into ``player``; True if the players list changed."""
    what = "location"
    module, sub_module, sub_sub_module = _read_exact(stream, 3, what)
    player.module = Module(module)
    player.sub_module = sub_module
    player.sub_sub_module = sub_sub_module

    changed = False
    last_location = player.location
    player.location = _read_u24(stream, what)
    if player.location & (1 << 16):
        player.dungeon_room = player.location & 0xFFFF
    else:
        player.overworld_area = player.location & 0xFFFF
    if player.location != last_location:
        changed = True

    (
        player.x,
        player.y,
        dungeon,
        player.dungeon_entrance,
        player.last_overworld_x,
        player.last_overworld_y,
        player.x_offs,
        player.y_offs,
        color,
        _in_other_game,
    ) = _LOCATION_TAIL.unpack(_read_exact(stream, _LOCATION_TAIL.size, what))

    if dungeon != player.dungeon:
        changed = True
    player.dungeon = dungeon

    if color != player.player_color:
        changed = True
    player.player_color = color

    return changed


def _deserialize_sfx(player: Player, stream: BinaryIO) -> bool:
    _read_exact(stream, 2, "sfx")
    return False


def _deserialize_sprites1(player: Player, stream: BinaryIO) -> bool:
    length = _read_u8(stream, "sprites")
    for i in range(length):
        spr = _read_exact(stream, 6, f"sprite {i}")
        if spr[0] & 0x80:
            # 4bpp graphics: one tile, or four for large sprites
            tiles = 4 if (spr[5] >> 1) & 1 else 1
            _read_exact(stream, 32 * tiles, f"sprite {i} gfx")
        if spr[5] & 0x80:
            _read_exact(stream, 32, f"sprite {i} palette")
    return False


def _deserialize_sprites2(player: Player, stream: BinaryIO) -> bool:
    _read_exact(stream, 1, "sprite2")
    return _deserialize_sprites1(player, stream)


def deserialize_wram(player: Player, stream: BinaryIO) -> bool:
    """Read tracked WRAM values into ``player.wram``."""
    what = "wram"
    count = _read_u8(stream, what)
    offs_start = _read_u16(stream, what)
    for i in range(count):
        timestamp, value = _WRAM_ENTRY.unpack(_read_exact(stream, _WRAM_ENTRY.size, what))
        offs = (offs_start + i) & 0xFFFF
        entry = player.wram.get(offs)
        if entry is None:
            player.wram[offs] = SyncableWRAM(
                name=f"wram[${offs:04x}]",
                size=2,
                timestamp=timestamp,
                value=value,
                value_used=value,
            )
        else:
            entry.timestamp = timestamp
            entry.value = value
            entry.value_used = value
    return False


def deserialize_sram(player: Player, stream: BinaryIO) -> bool:
    """Read a range of SRAM shadow bytes into ``player.sram``."""
    what = "sram"
    _read_exact(stream, 2, what)  # start-is-zero flag and other-game flag
    start = _read_u16(stream, what)
    count = _read_u16(stream, what)
    end = start + count
    if end > len(player.sram):
        raise SerdeError(
            f"SRAM range [{start:#x}, {end:#x}) outside shadow of {len(player.sram):#x} bytes"
        )
    player.sram[start:end] = _read_exact(stream, count, what)
    return False


def _deserialize_tilemaps(player: Player, stream: BinaryIO) -> bool:
    what = "tilemaps"
    _U32.unpack(_read_exact(stream, 4, what))  # timestamp
    _read_u24(stream, what)  # location
    _read_u8(stream, what)  # start
    length = _read_u8(stream, what)
    for _ in range(length):
        offs = _read_u16(stream, what)
        count = _read_u8(stream, what)
        tiles = 1 if offs & 0x8000 else count
        _read_exact(stream, 3 * tiles, what)
    return False


def _deserialize_objects(player: Player, stream: BinaryIO) -> bool:
    raise SerdeError("objects message is not supported")


def _deserialize_ancillae(player: Player, stream: BinaryIO) -> bool:
    what = "ancillae"
    count = _read_u8(stream, what)
    for _ in range(count):
        index = _read_u8(stream, what) & 0x7F
        _read_exact(stream, 0x20 if index < 5 else 0x16, what)
    return False


def _deserialize_torches(player: Player, stream: BinaryIO) -> bool:
    count = _read_u8(stream, "torches")
    _read_exact(stream, 2 * count, "torches")
    return False


def _deserialize_pvp(player: Player, stream: BinaryIO) -> bool:
    raise SerdeError("pvp message is not supported")


def deserialize_player_name(player: Player, stream: BinaryIO) -> bool:
    """Read the player's name; True (and a pending join message) if it changed."""
    raw = _read_exact(stream, _NAME_LENGTH, "name")
    name = raw.decode("utf-8", errors="replace").strip(_NAME_STRIP)
    if name == player.name:
        return False
    player.name = name
    player.show_join_message = True
    return True


_HANDLERS: dict[MessageType, Callable[[Player, BinaryIO], bool]] = {
    MessageType.LOCATION: deserialize_location,
    MessageType.SFX: _deserialize_sfx,
    MessageType.SPRITES1: _deserialize_sprites1,
    MessageType.SPRITES2: _deserialize_sprites2,
    MessageType.WRAM: deserialize_wram,
    MessageType.SRAM: deserialize_sram,
    MessageType.TILEMAPS: _deserialize_tilemaps,
    MessageType.OBJECTS: _deserialize_objects,
    MessageType.ANCILLAE: _deserialize_ancillae,
    MessageType.TORCHES: _deserialize_torches,
    MessageType.PVP: _deserialize_pvp,
    MessageType.PLAYER_NAME: deserialize_player_name,
}