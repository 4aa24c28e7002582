"""Human-readable names for underworld rooms, overworld areas and dungeons."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

UNKNOWN = "N/A"


def _index_table(entries: Iterable[Optional[str]]) -> Mapping[int, str]:
    """Build a read-only id -> name table from names listed in id order."""
    return MappingProxyType(
        {index: name for index, name in enumerate(entries) if name is not None}
    )


_ = None

# Underworld supertiles, in room order starting at room 0; _ marks an unnamed room.
UNDERWORLD_NAMES: Mapping[int, str] = _index_table((
    "Ganon", "HC, N Corridor", "HC, Switch", "Houlihan",
    "TR, Crysta-roller", "Empty Clone", "Swamp, Arrghus[Boss]", "Hera, Moldorm[Boss]",
    "Cave, Healing Fairy", "PoD", "PoD, Stalfos Trap", "PoD, Turtle",
    "GT, Entrance", "GT, Agahnim2[Boss]", "IP, Entrance", "Empty Clone",
    "Ganon Evacuation Route", "HC, Bombable Stock", "Sanctuary",
    "TR, Hokku-Bokku Key Room 2",
    "TR, Big Key", "TR", "Swamp, Swimming Treadmill", "Hera, Moldorm Fall",
    "Cave", "PoD, Dark Maze", "PoD, Big Chest", "PoD, Mimics",
    "GT, Ice Armos", "GT, Final Hallway", "IP, Bomb Floor", "IP, Big Key",
    "ATower, Agahnim[Boss]", "HC, Key-rat", "HC, Sewer Text Trigger",
    "TR, W Exit to Balcony",
    "TR, Big chest", "Empty Clone", "Swamp, Statue", "Hera, Big Chest",
    "Swamp, Entrance", "SW, Mothula[Boss]", "PoD, Big Hub", "PoD, Fairy",
    "Cave", "Empty Clone", "IP, Compass", "Cave, Kakariko Well HP",
    "ATower, Maiden Sacrifice Chamber", "Hera, Hardhat Beetles",
    "HC, Sewer Key Chest", "DP, Lanmolas[Boss]",
    "Swamp, Pre-Big Key", "Swamp, Big Key", "Swamp, Big Chest", "Swamp, Water Fill",
    "Swamp, Key Pot", "SW, Mothula Hole", "PoD, Bombable Floor", "PoD, Conveyor",
    "Hookshot Cave", "GT, Torch Room 2", "IP, Conveyor Hellway", "IP, Map Chest",
    "ATower, Final Bridge", "HC, First Dark", "HC, 6 Ropes", "DP, Moving Wall",
    "TT, Big Chest", "TT, Jail Cells", "Swamp, Compass Chest", "Empty Clone",
    "Empty Clone", "SW, Gibdo Torch Puzzle", "PoD, Entrance", "PoD, S Mimics",
    "GT, Mini-Helmasaur Conveyor", "GT, Moldorm", "IP, Bomb-Jump",
    "IP Clone Room, Fairy",
    "HC, W Corridor", "HC, Throne", "HC, East Corridor", "DP, Popos 2",
    "Swamp, Upstairs Pits", "Secret Passage", "SW, Key Pot", "SW, Big Key",
    "SW, Big Chest", "SW, Final Section Entrance", "PoD, Helmasaur King[Boss]",
    "GT, Spike Pit",
    "GT, Ganon-Ball Z", "GT, Gauntlet 1/2/3", "IP, Lonely Firebar", "IP, Spike Floor",
    "HC, W Entrance", "HC, Main Entrance", "HC, East Entrance",
    "DP, Final Section Entrance",
    "TT, W Attic", "TT, East Attic", "Swamp, Hidden Chest", "SW, Compass Chest",
    "SW, Key Chest", "Empty Clone", "PoD, Rupee", "GT, Mimics Rooms",
    "GT, Lanmolas", "GT, Gauntlet 4/5", "IP, Pengators", "Empty Clone",
    "HC, Pre Jail Cells", "HC, Boomerang Chest", "HC, Map Chest", "DP, Big Chest",
    "DP, Map Chest", "DP, Big Key Chest", "Swamp, Water Drain", "Hera, Entrance",
    "Empty Clone", "Empty Clone", "Empty Clone", "GT",
    "GT, Exploding Wall", "GT, Warp Maze", "IP, Bombable Floor", "IP,  Big Spike Traps",
    "HC, Jail Cell", "HC", "HC, Basement Chasm", "DP, W Entrance",
    "DP, Main Entrance", "DP, East Entrance", "Empty Clone", "Hera, Tile",
    "Empty Clone", "EP, Fairy", "Empty Clone", "GT, Spike Skip",
    "GT, Big Chest", "GT, Torches 2", "IP", "Empty Clone",
    "Mire, Vitreous[Boss]", "Mire, Final Switch", "Mire, Switches",
    "Mire, Floor Switch Puzzle",
    "Empty Clone", "GT, Final Collapsing Bridge", "GT, Torches 1", "Mire, Torch Puzzle",
    "Mire, Entrance", "EP, Eyegore Key", "Empty Clone", "GT, Warp Maze",
    "GT, Invisible Floor Maze", "GT, Invisible Floor", "IP, Big Chest", "IP",
    "Mire, Pre-Vitreous", "Mire, Fish", "Mire, Bridge Key Chest", "Mire",
    "TR, Trinexx[Boss]", "GT, Wizzrobes Rooms", "GT, Moldorm Fall", "Hera, Fairy",
    "EP, Stalfos Spawn", "EP, Big Chest", "EP, Map Chest", "TT, Key Pot",
    "TT, Blind The Thief[Boss]", "Empty Clone", "IP", "IP, Ice Bridge",
    "ATower, Circle of Pots", "Mire, Hourglass", "Mire, Slug", "Mire, Spike Key Chest",
    "TR, Pre-Trinexx", "TR, Dark Maze", "TR, Chain Chomps", "TR, Roller",
    "EP, Big Key", "EP, Lobby Cannonballs", "EP, Key Pot", "TT, Hellway",
    "TT, Conveyor Toilet", "Empty Clone", "IP, Block Puzzle", "IP Clone Room, Switch",
    "ATower, Dark Bridge", "Mire, Tile", "Mire, Big Hub", "Mire, Big Chest",
    "TR, Last Switch Puzzle", "TR, Laser Bridge", "TR", "TR, Torch Puzzle",
    "EP, Armos Knights[Boss]", "EP, Entrance", "??", "TT, NW Entrance",
    "TT, NE Entrance", "Empty Clone", "IP, Hole to Kholdstare", "Empty Clone",
    "ATower, Dark Maze", "Mire, Big Key", "Mire, Mire02", "Empty Clone",
    "Empty Clone", "TR, Laser Key", "TR, Entrance", "Empty Clone",
    "EP, Zeldagamer", "EP, Canonball", "EP", "TT, Main SW Entrance",
    "TT, SE Entrance", "Empty Clone", "IP, Kholdstare[Boss]", "Cave",
    "ATower, Entrance", "Cave, Lost Woods HP", "Cave, Lumberjack's Tree HP",
    "Cave, 1/2 Magic",
    "Cave, Old Man Cave", "Cave, Old Man Cave", "Cave", "Cave",
    "Cave", "Empty Clone", "Cave, Spectacle Rock HP", "Cave",
    "Empty Clone", "Cave", "Cave, Spiral Cave", "Cave, 5 Chests",
    "Cave, Old Man Starting Cave", "Cave, Old Man Starting Cave", "House",
    "House, Old Woman",
    "House, Angry Brothers", "House, Angry Brothers", "Empty Clone", "Empty Clone",
    "Cave", "Cave", "Cave", "Cave",
    "Empty Clone", "Cave", "Cave", "Cave",
    "Forest Chest Game", "House", "Sick Kid", "Kakariko Tavern",
    "Link's House", "Sahasrahla's Hut", "Brewery or Chest Game", "Library",
    "Chicken House", "Magic Shop", "Aginah's Cave", "Floodgate",
    "Mimic Cave", "Mire Shed", "Cave, Bird Guy", "House",
    "House", "Arrow Game", "Dark Sanctuary", "King's Tomb",
    "Waterfall Fairy", "Cave, Healing Fairy", "Pyramid Fairy", "Spike Cave",
    "Chest Game", "Blind's Hideout", "House, Dark Hedge Maze",
    "Cave 45 or Graveyard Cave",
    "C-Shaped House", "Blind's Hideout Basement", "Hype Cave", "Lumberjack House",
    "Ice Rod Cave", "Dwarves House", _, "Mini Moldorm Cave",
    "Bonk Rock Cave", "Desert Cave", "Checkerboard Cave", "Peg Cave",
))

# Overworld areas, eight per row starting at area 0; _ marks an unnamed area.
OVERWORLD_NAMES: Mapping[int, str] = _index_table((
    "Lost Woods", _, "NE House", "Spectacle Rock", _, "Death Mountain East", _, "TR",
    _, _, "Death Mountain Cave", _, _, _, _, "Waterfall Near Zora's Domain",
    "Lost Woods Entrance", "Fortune Teller's House", "Teleport Lake", "Sanctuary",
    "Cemetary", "River Area", "Witch's Hut", "Another Waterfall",
    "Kakariko Village", _, "Another Forest", "HC", _, "Bridge Near Castle", "EP", _,
    _, _, "Blacksmiths' House", _, _, "Octorok Area", _, _,
    "Fencepost Maze", "Kakariko Library", "Haunted Grove", "Before Flute Area",
    "Link's House", "Bridge to HC", "S of EP", "Peg Circle",
    "Desert of Mystery", _, "Bluffs Near Desert", "Near the Swamp",
    "Great Swamp N", "Lake Hylia", _, "Ice Rod Cave",
    _, _, "Sleeping Man Area", "Great Swamp S", "Great Swamp SE", _, _, "Lake Hylia SE",
    "SW", _, "NE House", "GT", _, "Death Mountain East", _, "TR",
    _, _, "Magic Cape Cave", _, _, _, _, "Mysterious Pond",
    "Outside SW", "Fortune Teller's House", "Small Lake", "Dark Sanctuary",
    "Dark Graveyard", "Dark Waterway", "Dark Witch's Hut", "Dark Lake Hylia Shore",
    "TT", _, "House I've Never Seen", "Pyramid of Power", _, "Broken Bridge",
    "Hedge Maze", _,
    _, _, "Locked Chest House", _, _, "Octorok Area", _, _,
    "Shovel Game", "Arrow Game", "Haunted Grove", "Outside Haunted Grove",
    "Dark Link's House", "Peg Bridge", "Outside Hedge Maze", "Dark Peg Circle",
    "Mire", _, "Outside Mire", "Outside Dark Swamp",
    "Dark Swamp N", "Frozen Lake Hylia", _, "Black Ice Cave",
    _, _, "Dark Sleeping Man", "Swamp", "Dark Swamp SE", _, _, "Dark Waterfall",
    "Unknown 1, Master Sword Area", _, _, _, _, _, _, _,
    "Unknown 2", _, _, _, _, _, _, _,
    _, _, _, "Unknown 3", "Unknown 4, Master Sword Area", "Unknown 5, Zora's Domain",
    "Unknown 6", "Unknown 7",
    _, _, _, _, "Unknown 8", "Unknown 9", "Unknown 10, Lost Woods Overlay",
    "Unknown 11, Rain",
))

del _

# Indexed by dungeon number; the small-key counters live at SRAM $37C..$38B.
DUNGEON_NAMES: tuple[str, ...] = (
    "Sewer Passage",
    "Hyrule Castle",
    "Eastern Palace",
    "Desert Palace",
    "Hyrule Castle 2",
    "Swamp Palace",
    "Dark Palace",
    "Misery Mire",
    "Skull Woods",
    "Ice Palace",
    "Tower of Hera",
    "Gargoyle's Domain",
    "Turtle Rock",
    "Ganon's Tower",
    "Extra Dungeon 1",
    "Extra Dungeon 2",
)


def underworld_name(room: int) -> str:
    """Return the name of an underworld supertile, or "N/A" if unknown."""
    return UNDERWORLD_NAMES.get(room, UNKNOWN)


def overworld_name(area: int) -> str:
    """Return the name of an overworld area, or "N/A" if unknown."""
    return OVERWORLD_NAMES.get(area, UNKNOWN)


def dungeon_name(dungeon: int) -> str:
    """Return the dungeon's name for the game's dungeon id ($040C), or "N/A".

    The game stores dungeon ids doubled, so the id is halved before lookup.
    """
    number = dungeon >> 1
    if 0 <= number < len(DUNGEON_NAMES):
        return DUNGEON_NAMES[number]
    return UNKNOWN