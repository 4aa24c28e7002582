import io
import struct

import pytest

from o2sync.codec import (
    SERIALIZATION_VERSION,
    MessageType,
    SerdeError,
    broadcast_header,
    hash64,
    read_u24,
    serialize_location,
    serialize_sram,
    serialize_wram,
    write_u24,
)
from o2sync.player import Module, Player, SyncableWRAM


def test_message_type_bytes_on_the_wire():
    assert serialize_location(Player())[0] == 1
    assert serialize_wram(Player(), 0x0400, 1)[0] == 5
    assert serialize_sram(Player(), 0x340, 0x341)[0] == 6


@pytest.mark.parametrize("value", [0, 1, 0xFF, 0x1234, 0x10000, 0x123456, 0xFFFFFF])
def test_u24_round_trip(value):
    buf = io.BytesIO()
    write_u24(buf, value)
    assert len(buf.getvalue()) == 3
    buf.seek(0)
    assert read_u24(buf) == value


def test_write_u24_is_little_endian():
    buf = io.BytesIO()
    write_u24(buf, 0x123456)
    assert buf.getvalue() == b"\x56\x34\x12"


def test_write_u24_truncates_high_bits():
    buf = io.BytesIO()
    write_u24(buf, 0x01123456)
    buf.seek(0)
    assert read_u24(buf) == 0x123456


def test_read_u24_short_raises():
    with pytest.raises(SerdeError):
        read_u24(io.BytesIO(b"\x01\x02"))


def test_hash64_known_values():
    assert hash64(b"") == 0xCBF29CE484222325
    assert hash64(b"a") == 0xAF63DC4C8601EC8C


def test_hash64_differs_and_is_stable():
    assert hash64(b"location") == hash64(b"location")
    assert hash64(b"location") != hash64(b"locatioN")
    assert 0 <= hash64(b"\xff" * 100) < 2 ** 64


def test_broadcast_header():
    assert broadcast_header(3, 200) == bytes([SERIALIZATION_VERSION, 3, 200])
    assert broadcast_header(0, 0)[0] == 0x13


def _player():
    p = Player()
    p.module = Module(0x07)
    p.sub_module = 2
    p.sub_sub_module = 3
    p.location = 0x010012
    p.x = 0x1234
    p.y = 0x0567
    p.dungeon = 0x04
    p.dungeon_entrance = 0x22
    p.last_overworld_x = 0x0800
    p.last_overworld_y = 0x0900
    p.x_offs = -1
    p.y_offs = 5
    p.player_color = 0x12EF
    return p


def test_serialize_location_layout():
    data = serialize_location(_player())
    assert len(data) == 26
    assert data[0] == MessageType.LOCATION
    assert data[1:4] == bytes([0x07, 2, 3])
    stream = io.BytesIO(data[4:7])
    assert read_u24(stream) == 0x010012
    fields = struct.unpack("<HHHHHHhhHB", data[7:])
    assert fields == (0x1234, 0x0567, 0x04, 0x22, 0x0800, 0x0900, -1, 5, 0x12EF, 0)


def test_serialize_sram_header_and_data():
    p = Player()
    p.sram[0x340:0x343] = b"\x01\x02\x03"
    data = serialize_sram(p, 0x340, 0x343)
    assert data[0] == MessageType.SRAM
    assert data[1] == 0
    assert data[2] == 0
    assert struct.unpack("<HH", data[3:7]) == (0x340, 3)
    assert data[7:] == b"\x01\x02\x03"


def test_serialize_sram_start_zero_flag():
    p = Player()
    data = serialize_sram(p, 0, 0x250)
    assert data[1] == 1
    assert len(data) == 7 + 0x250


def test_serialize_sram_bad_range():
    with pytest.raises(SerdeError):
        serialize_sram(Player(), 0x4F0, 0x600)
    with pytest.raises(SerdeError):
        serialize_sram(Player(), 0x10, 0x8)


def test_serialize_wram_entries():
    p = Player()
    p.wram[0xF37D] = SyncableWRAM(name="keys", size=1, timestamp=0xDEADBEEF, value=2, value_used=3)
    data = serialize_wram(p, 0xF37C, 2)
    assert data[0] == MessageType.WRAM
    assert data[1] == 2
    assert struct.unpack("<H", data[2:4]) == (0xF37C,)
    assert struct.unpack("<IH", data[4:10]) == (0, 0)
    assert struct.unpack("<IH", data[10:16]) == (0xDEADBEEF, 3)
    assert len(data) == 16


def test_serialize_wram_count_limit():
    with pytest.raises(SerdeError):
        serialize_wram(Player(), 0x0400, 256)