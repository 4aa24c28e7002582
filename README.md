# o2sync

A small library for the game-state side of multiplayer A Link to the Past
sessions. It models the players in a sync group, encodes and decodes the
broadcast messages they exchange, and keeps track of who is active, what the
front end should show and which sync options are switched on.

It has no third-party dependencies.

## Install

```
pip install o2sync
```

To run the tests, install the `test` extra and run pytest:

```
pip install "o2sync[test]"
pytest
```

## Modules

### `o2sync.registry`

A thread-safe, process-wide registry of game factories keyed by name.

- `register(name, factory)` adds a factory. It raises `TypeError` if the
  factory is `None` and `ValueError` if the name is already taken.
- `factories()` returns the registered factories.
- `factory_names()` returns their names, sorted.
- `factory_by_name(name)` returns the factory, or `None` if none is registered
  under that name.
- `unregister_all()` empties the registry.

### `o2sync.player`

- `Player` is a dataclass for one player's state: index, TTL, team, name,
  frame, module and sub-modules, overworld area, dungeon room, location,
  position, dungeon, colour, an SRAM shadow and tracked WRAM values.
  - `readable_memory(kind)` returns the `sram` or `wram` view for a
    `MemoryKind`.
  - `is_dungeon()`, `is_in_dungeon()` and `is_in_game()` report where the
    player is. `is_in_game()` treats the title, file-select, attract, save-and-quit
    and start-location modules as out of game. While the item/map screen is
    open, it judges by the module that screen interrupted.
- `SRAMShadow` is a `0x500`-byte `bytearray` for the save-RAM copy at
  `$7EF000`. It has `bus_address`, `read_u8` and `read_u16`. `read_u16`
  returns `0xFFFF` past the end.
- `WRAMReadable` is a dict of `SyncableWRAM` entries keyed by 16-bit offset.
  It has `bus_address`, `read_u8` and `read_u16`.
- `Module` is an `int` with `is_overworld()` and `is_dungeon()`.
- `MemoryKind` is an enum with the members `SRAM` and `WRAM`.

### `o2sync.names`

Readable names for places in the game.

- `underworld_name(room)` names an underworld supertile.
- `overworld_name(area)` names an overworld area.
- `dungeon_name(dungeon)` takes the game's doubled dungeon id.

Each returns `"N/A"` when the id has no name. The tables are also available as
`UNDERWORLD_NAMES`, `OVERWORLD_NAMES` and `DUNGEON_NAMES`.

### `o2sync.codec`

The encoders for broadcast messages.

- `broadcast_header(team, frame)` returns the three bytes that start every
  packet: the serialization version, the team and the frame.
- `serialize_location(player)` encodes the location message.
- `serialize_sram(player, start, end_exclusive)` encodes a range of the SRAM
  shadow.
- `serialize_wram(player, start, count)` encodes tracked WRAM values. Offsets
  the player does not track are written as zero.
- `read_u24(stream)` and `write_u24(stream, value)` read and write 24-bit
  little-endian integers.
- `hash64(data)` is FNV-1a 64-bit.
- `MessageType` lists the message kinds.

Out-of-range arguments raise `SerdeError`, which is a subclass of `ValueError`.

### `o2sync.decode`

The decoders for broadcast messages.

`deserialize(stream, player)` reads a whole broadcast payload into a `Player`.
It returns `True` when the change should show in the players list. A packet
whose frame is older than the last one seen from that player is discarded;
the 8-bit frame counter may wrap. Truncated data, a version mismatch, an
unknown message type, or an objects or PvP message raises `SerdeError`.

The message readers `deserialize_location`, `deserialize_wram`,
`deserialize_sram` and `deserialize_player_name` can also be called on their
own.

### `o2sync.session`

`Session(rom_title="", view_notifier=None, save_configuration=None)` holds the
state of the local game within a group:

- a table of `MAX_PLAYERS` (256) players and the local player;
- the sync toggles: `sync_items`, `sync_dungeon_items`, `sync_progress`,
  `sync_hearts`, `sync_small_keys`, `sync_underworld`, `sync_overworld`,
  `sync_chests` and `sync_tunic_color`;
- a history of notifications.

Its methods:

- `reset()` clears the player table. It keeps the local player's name and team.
- `subscribe(observer)` registers a notification observer. It returns a
  function that unsubscribes it.
- `push_notification(text)` sends the text to the observers and records it in
  the history.
- `notify(key, value)` accepts `"team"` or `"playerName"` from the front end.
- `load_configuration(config)` applies saved settings from JSON text or a
  mapping. Invalid input is logged and ignored.
- `configuration_model()` returns the settings in the same JSON shape.
- `set_fields(fields)` applies front-end changes to the toggles and
  `playerColor`. It then calls `save_configuration` and refreshes the view.
- `active_players()` and `remote_players()` list the players that have an
  index and a live TTL. `remote_players()` leaves out the local player.
- `set_ttl`, `dec_ttl`, `player_joined` and `player_left` manage TTLs. A player
  whose TTL runs out produces a "<name> left" notification.
- `deserialize(data, player)` decodes a packet into a player and marks the
  players list for a refresh.
- `players_list()` builds a `PlayerViewModel` for each active player and sends
  the list to the view.
- `track_wram(offset, entry)` tracks a WRAM value for the local player.

The view receives updates through `view_notifier(key, value)` under the keys
`"game"`, `"game/players"` and `"game/notification/history"`.

`server_snes_timestamp(ns)` rounds a server time in nanoseconds down to a
whole number of SNES frames.

## Example

```python
from o2sync.codec import broadcast_header, serialize_location
from o2sync.player import Player
from o2sync.session import Session

session = Session()

sender = Player(index=1, name="link")
sender.x, sender.y = 0x0500, 0x0600

payload = broadcast_header(team=0, frame=1) + serialize_location(sender)

remote = session.players[1]
session.deserialize(payload, remote)
print(remote.x, remote.y)  # 1280 1536
```

## What it does not do

This is a library only. It has no command-line program. It does not connect
to a server or send packets; callers move the bytes themselves. It does not
talk to an SNES or a flash cartridge, and it does not read or patch ROM files.
It does not generate the code that applies synced items, keys or world state
inside the running game.