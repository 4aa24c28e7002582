import io

import pytest

from o2sync.codec import (
    SERIALIZATION_VERSION,
    MessageType,
    SerdeError,
    broadcast_header,
    serialize_location,
    serialize_sram,
    serialize_wram,
)
from o2sync.decode import (
    deserialize,
    deserialize_location,
    deserialize_player_name,
    deserialize_sram,
    deserialize_wram,
)
from o2sync.player import Player, SyncableWRAM


def _sender() -> Player:
    p = Player(
        module=0x07,
        sub_module=0x02,
        sub_sub_module=0x01,
        location=(1 << 16) | 0x00C8,
        x=0x1234,
        y=0x0567,
        dungeon=0x04,
        dungeon_entrance=0x22,
        last_overworld_x=0x0800,
        last_overworld_y=0x0900,
        x_offs=-5,
        y_offs=7,
        player_color=0x12EF,
    )
    return p


def _name_message(name: bytes) -> bytes:
    return bytes((MessageType.PLAYER_NAME,)) + name.ljust(20, b" ")


def test_location_round_trip():
    sender = _sender()
    receiver = Player()
    data = serialize_location(sender)[1:]
    changed = deserialize_location(receiver, io.BytesIO(data))
    assert changed is True
    assert receiver.module == sender.module
    assert receiver.sub_module == sender.sub_module
    assert receiver.sub_sub_module == sender.sub_sub_module
    assert receiver.location == sender.location
    assert receiver.dungeon_room == 0x00C8
    assert receiver.x == sender.x and receiver.y == sender.y
    assert receiver.dungeon == sender.dungeon
    assert receiver.dungeon_entrance == sender.dungeon_entrance
    assert receiver.last_overworld_x == sender.last_overworld_x
    assert receiver.last_overworld_y == sender.last_overworld_y
    assert receiver.x_offs == -5
    assert receiver.y_offs == 7
    assert receiver.player_color == sender.player_color


def test_location_overworld_sets_area():
    sender = _sender()
    sender.location = 0x002C
    receiver = Player()
    deserialize_location(receiver, io.BytesIO(serialize_location(sender)[1:]))
    assert receiver.overworld_area == 0x002C
    assert receiver.dungeon_room == 0


def test_location_unchanged_reports_no_change():
    sender = _sender()
    receiver = Player()
    data = serialize_location(sender)[1:]
    deserialize_location(receiver, io.BytesIO(data))
    assert deserialize_location(receiver, io.BytesIO(data)) is False


def test_location_truncated_raises():
    data = serialize_location(_sender())[1:-3]
    with pytest.raises(SerdeError):
        deserialize_location(Player(), io.BytesIO(data))


def test_wram_round_trip_creates_entries():
    sender = Player()
    sender.wram[0xF37C] = SyncableWRAM(timestamp=1000, value=3, value_used=3)
    sender.wram[0xF37E] = SyncableWRAM(timestamp=2000, value=1, value_used=1)
    receiver = Player()
    data = serialize_wram(sender, 0xF37C, 3)[1:]
    assert deserialize_wram(receiver, io.BytesIO(data)) is False
    assert set(receiver.wram) == {0xF37C, 0xF37D, 0xF37E}
    entry = receiver.wram[0xF37C]
    assert entry.name == "wram[$f37c]"
    assert entry.size == 2
    assert (entry.timestamp, entry.value, entry.value_used) == (1000, 3, 3)
    assert receiver.wram[0xF37D].timestamp == 0
    assert receiver.wram[0xF37E].value_used == 1


def test_wram_updates_existing_entry():
    sender = Player()
    sender.wram[0x0400] = SyncableWRAM(timestamp=9, value=0xF000, value_used=0xF000)
    receiver = Player()
    existing = SyncableWRAM(name="door state", size=2, timestamp=1, value=0, value_used=0)
    receiver.wram[0x0400] = existing
    deserialize_wram(receiver, io.BytesIO(serialize_wram(sender, 0x0400, 1)[1:]))
    assert receiver.wram[0x0400] is existing
    assert existing.name == "door state"
    assert (existing.timestamp, existing.value, existing.value_used) == (9, 0xF000, 0xF000)


def test_sram_round_trip():
    sender = Player()
    sender.sram[0x340:0x345] = bytes((1, 2, 3, 4, 5))
    receiver = Player()
    deserialize_sram(receiver, io.BytesIO(serialize_sram(sender, 0x340, 0x345)[1:]))
    assert receiver.sram[0x340:0x345] == bytes((1, 2, 3, 4, 5))
    assert receiver.sram[0x33F] == 0
    assert receiver.sram[0x345] == 0


def test_sram_out_of_range_raises():
    data = bytes((0, 0)) + (0x4F0).to_bytes(2, "little") + (0x20).to_bytes(2, "little") + bytes(0x20)
    with pytest.raises(SerdeError):
        deserialize_sram(Player(), io.BytesIO(data))


def test_player_name_strips_padding():
    receiver = Player()
    raw = b"\x00 Link\t" + b" " * 13
    assert deserialize_player_name(receiver, io.BytesIO(raw)) is True
    assert receiver.name == "Link"
    assert receiver.show_join_message is True


def test_player_name_same_name_no_change():
    receiver = Player(name="Link")
    assert deserialize_player_name(receiver, io.BytesIO(b"Link".ljust(20, b" "))) is False
    assert receiver.show_join_message is False


def test_player_name_short_raises():
    with pytest.raises(SerdeError):
        deserialize_player_name(Player(), io.BytesIO(b"Link"))


def test_full_packet():
    sender = _sender()
    sender.sram[0x359] = 2
    packet = (
        broadcast_header(3, 10)
        + serialize_location(sender)
        + serialize_sram(sender, 0x340, 0x37C)
        + _name_message(b"remote")
    )
    receiver = Player()
    assert deserialize(io.BytesIO(packet), receiver) is True
    assert receiver.team == 3
    assert receiver.frame == 10
    assert receiver.location == sender.location
    assert receiver.sram[0x359] == 2
    assert receiver.name == "remote"


def test_header_only_packet_updates_frame():
    receiver = Player(team=1)
    assert deserialize(io.BytesIO(broadcast_header(1, 20)), receiver) is False
    assert receiver.frame == 20


def test_team_change_reported():
    receiver = Player(team=1)
    assert deserialize(io.BytesIO(broadcast_header(2, 0)), receiver) is True
    assert receiver.team == 2


def test_stale_frame_discarded():
    receiver = Player(frame=10)
    packet = broadcast_header(0, 5) + _name_message(b"late")
    assert deserialize(io.BytesIO(packet), receiver) is False
    assert receiver.frame == 10
    assert receiver.name == ""


def test_frame_wraparound_accepted():
    receiver = Player(frame=250)
    packet = broadcast_header(0, 3) + _name_message(b"wrapped")
    deserialize(io.BytesIO(packet), receiver)
    assert receiver.frame == 3
    assert receiver.name == "wrapped"


def test_version_mismatch_raises():
    packet = bytes((SERIALIZATION_VERSION + 1, 0, 0))
    with pytest.raises(SerdeError):
        deserialize(io.BytesIO(packet), Player())


@pytest.mark.parametrize("msg_type", [0, 13, 0xFF])
def test_message_type_out_of_bounds_raises(msg_type):
    packet = broadcast_header(0, 0) + bytes((msg_type,))
    with pytest.raises(SerdeError):
        deserialize(io.BytesIO(packet), Player())


@pytest.mark.parametrize("msg_type", [MessageType.OBJECTS, MessageType.PVP])
def test_unsupported_messages_raise(msg_type):
    packet = broadcast_header(0, 0) + bytes((msg_type,))
    with pytest.raises(SerdeError):
        deserialize(io.BytesIO(packet), Player())


def test_skipped_messages_are_consumed():
    sprites = bytes((MessageType.SPRITES1, 1)) + bytes((0x80, 0, 0, 0, 0, 0x82)) + bytes(32 * 4) + bytes(32)
    sprites2 = bytes((MessageType.SPRITES2, 0, 0))
    sfx = bytes((MessageType.SFX, 0, 0))
    tilemaps = (
        bytes((MessageType.TILEMAPS,))
        + bytes(4)
        + bytes(3)
        + bytes((0, 2))
        + (0x8001).to_bytes(2, "little") + bytes((5,)) + bytes(3)
        + (0x0002).to_bytes(2, "little") + bytes((2,)) + bytes(6)
    )
    ancillae = bytes((MessageType.ANCILLAE, 2, 0x01)) + bytes(0x20) + bytes((0x85,)) + bytes(0x16)
    torches = bytes((MessageType.TORCHES, 2)) + bytes(4)
    packet = (
        broadcast_header(0, 1)
        + sprites
        + sprites2
        + sfx
        + tilemaps
        + ancillae
        + torches
        + _name_message(b"after")
    )
    receiver = Player()
    deserialize(io.BytesIO(packet), receiver)
    assert receiver.name == "after"


def test_truncated_message_raises():
    packet = broadcast_header(0, 0) + bytes((MessageType.TORCHES, 3, 0, 0))
    with pytest.raises(SerdeError):
        deserialize(io.BytesIO(packet), Player())