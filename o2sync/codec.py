"""Wire encoding of the player state messages broadcast to the sync group."""

from __future__ import annotations

import enum
import struct
from typing import BinaryIO

from o2sync.player import Player

# Bump when the encoding changes in an incompatible way.
SERIALIZATION_VERSION = 0x13

_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3
_U64 = 0xFFFFFFFFFFFFFFFF

_LOCATION_TAIL = struct.Struct("<HHHHHHHHHB")
_SRAM_HEADER = struct.Struct("<BBBHH")
_WRAM_HEADER = struct.Struct("<BBH")
_WRAM_ENTRY = struct.Struct("<IH")


class MessageType(enum.IntEnum):
    """Kinds of message carried inside a broadcast packet."""

    LOCATION = 1
    SFX = 2
    SPRITES1 = 3
    SPRITES2 = 4
    WRAM = 5
    SRAM = 6
    TILEMAPS = 7
    OBJECTS = 8
    ANCILLAE = 9
    TORCHES = 10
    PVP = 11
    PLAYER_NAME = 12


# One past the highest valid message type.
MAX_MESSAGE_TYPE = 13


class SerdeError(ValueError):
    """Raised when a message cannot be encoded or decoded."""


def read_u24(stream: BinaryIO) -> int:
    """Read a little-endian 24-bit unsigned integer."""
    data = stream.read(3)
    if data is None or len(data) < 3:
        raise SerdeError("unexpected end of data reading u24")
    return int.from_bytes(data, "little")


def write_u24(stream: BinaryIO, value: int) -> None:
    """Write the low 24 bits of ``value`` little-endian."""
    stream.write((value & 0xFFFFFF).to_bytes(3, "little"))


def hash64(data: bytes) -> int:
    """Return the 64-bit FNV-1a hash of ``data``."""
    h = _FNV64_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV64_PRIME) & _U64
    return h


def broadcast_header(team: int, frame: int) -> bytes:
    """Return the header that starts every broadcast: version, team, frame."""
    return bytes((SERIALIZATION_VERSION, team & 0xFF, frame & 0xFF))


def serialize_location(player: Player) -> bytes:
    """Encode the player's location message."""
    head = bytes((
        MessageType.LOCATION,
        int(player.module) & 0xFF,
        player.sub_module & 0xFF,
        player.sub_sub_module & 0xFF,
    ))
    location = (player.location & 0xFFFFFF).to_bytes(3, "little")
    tail = _LOCATION_TAIL.pack(
        player.x & 0xFFFF,
        player.y & 0xFFFF,
        player.dungeon & 0xFFFF,
        player.dungeon_entrance & 0xFFFF,
        player.last_overworld_x & 0xFFFF,
        player.last_overworld_y & 0xFFFF,
        player.x_offs & 0xFFFF,
        player.y_offs & 0xFFFF,
        player.player_color & 0xFFFF,
        0,  # not in the other game
    )
    return head + location + tail


def serialize_sram(player: Player, start: int, end_exclusive: int) -> bytes:
    """Encode the player's SRAM shadow bytes in ``[start, end_exclusive)``."""
    if not 0 <= start <= end_exclusive <= len(player.sram):
        raise SerdeError(
            f"SRAM range [{start:#x}, {end_exclusive:#x}) outside shadow of {len(player.sram):#x} bytes"
        )
    header = _SRAM_HEADER.pack(
        MessageType.SRAM,
        1 if start == 0 else 0,
        0,  # not in the other game
        start,
        end_exclusive - start,
    )
    return header + bytes(player.sram[start:end_exclusive])


def serialize_wram(player: Player, start: int, count: int) -> bytes:
    """Encode ``count`` tracked WRAM values starting at offset ``start``."""
    if not 0 <= count <= 0xFF:
        raise SerdeError(f"WRAM count {count} does not fit in a byte")
    if not 0 <= start <= 0xFFFF:
        raise SerdeError(f"WRAM start {start:#x} does not fit in 16 bits")
    parts = [_WRAM_HEADER.pack(MessageType.WRAM, count, start)]
    for offs in range(start, start + count):
        entry = player.wram.get(offs)
        if entry is None:
            parts.append(_WRAM_ENTRY.pack(0, 0))
        else:
            parts.append(_WRAM_ENTRY.pack(entry.timestamp & 0xFFFFFFFF, entry.value_used & 0xFFFF))
    return b"".join(parts)