"""Player state and the memory views other players expose for syncing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

SRAM_SHADOW_SIZE = 0x500


class MemoryKind(enum.Enum):
    """Kinds of memory a player exposes for syncing."""

    SRAM = 0
    WRAM = 1


class Module(int):
    """Game module number (the main game state machine's mode)."""

    def is_overworld(self) -> bool:
        return self in (0x09, 0x0B)

    def is_dungeon(self) -> bool:
        return self == 0x07


@dataclass
class SyncableWRAM:
    """A tracked WRAM value with the time it last changed."""

    name: str = ""
    size: int = 0
    timestamp: int = 0
    value: int = 0
    value_used: int = 0
    is_writing: bool = False
    value_expected: int = 0


class SRAMShadow(bytearray):
    """The game's copy of SRAM kept in WRAM at $7EF000..$7EF4FF."""

    def __init__(self, data: bytes | None = None) -> None:
        if data is None:
            super().__init__(SRAM_SHADOW_SIZE)
            return
        if len(data) != SRAM_SHADOW_SIZE:
            raise ValueError(f"SRAM shadow must be {SRAM_SHADOW_SIZE:#x} bytes, got {len(data):#x}")
        super().__init__(data)

    def bus_address(self, offs: int) -> int:
        return 0x7EF000 + offs

    def read_u8(self, offs: int) -> int:
        return self[offs]

    def read_u16(self, offs: int) -> int:
        if offs >= SRAM_SHADOW_SIZE:
            return 0xFFFF
        if offs + 2 > SRAM_SHADOW_SIZE:
            raise IndexError(f"u16 read at {offs:#x} crosses end of SRAM shadow")
        return int.from_bytes(self[offs:offs + 2], "little")


class WRAMReadable(dict):
    """Tracked WRAM values keyed by 16-bit offset."""

    def bus_address(self, offs: int) -> int:
        return 0x7E0000 + offs

    def read_u8(self, offs: int) -> int:
        return self[offs & 0xFFFF].value_used & 0xFF

    def read_u16(self, offs: int) -> int:
        return self[offs & 0xFFFF].value_used


@dataclass
class Player:
    """State of one player in a sync group."""

    index: int = 0
    ttl: int = 0
    team: int = 0
    name: str = ""
    frame: int = 0
    module: Module = Module(0)
    prior_module: Module = Module(0)
    sub_module: int = 0
    sub_sub_module: int = 0
    overworld_area: int = 0
    dungeon_room: int = 0
    location: int = 0
    x: int = 0
    y: int = 0
    dungeon: int = 0
    dungeon_entrance: int = 0
    last_overworld_x: int = 0
    last_overworld_y: int = 0
    x_offs: int = 0
    y_offs: int = 0
    player_color: int = 0
    sram: SRAMShadow = field(default_factory=SRAMShadow)
    wram: WRAMReadable = field(default_factory=WRAMReadable)
    show_join_message: bool = False

    def readable_memory(self, kind: MemoryKind):
        """Return the memory view of the given kind."""
        if kind is MemoryKind.SRAM:
            return self.sram
        if kind is MemoryKind.WRAM:
            return self.wram
        raise ValueError(f"readable memory kind {kind!r} not supported")

    def is_dungeon(self) -> bool:
        return Module(self.module).is_dungeon()

    def is_in_dungeon(self) -> bool:
        if self.is_dungeon():
            return True
        return bool(self.location & (1 << 16))

    def is_in_game(self) -> bool:
        return self._is_module_in_game(Module(self.module))

    def _is_module_in_game(self, m: int) -> bool:
        # 0x00..0x06: title, file select and loading modes
        if m < 0x07:
            return False
        # 0x1B: choose starting location
        if m > 0x1A:
            return False
        # 0x14 attract mode, 0x17 save and quit
        if m in (0x14, 0x17):
            return False
        # 0x0E text/item/map screen: judge by the module it interrupted
        if m == 0x0E:
            prior = Module(self.prior_module)
            if prior != 0x0E:
                return self._is_module_in_game(prior)
            return True
        return True