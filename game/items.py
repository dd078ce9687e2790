# game/items.py

from game.types import Control

# Block and item ids as the server sends them, in declaration order.
ITEM_TYPES = (
    ("Air",                 0),
    ("Stone",               1),
    ("Grass",               2),
    ("Dirt",                3),
    ("Cobblestone",         4),
    ("Wood",                5),
    ("Sapling",             6),
    ("Bedrock",             7),
    ("Water",               8),
    ("StationaryWater",     9),
    ("Lava",               10),
    ("StationaryLava",     11),
    ("Sand",               12),
    ("Gravel",             13),
    ("GoldOre",            14),
    ("IronOre",            15),
    ("CoalOre",            16),
    ("Log",                17),
    ("Leaves",             18),
    ("Sponge",             19),
    ("Glass",              20),
    ("Wool",               35),
    ("YellowFlower",       37),
    ("RedRose",            38),
    ("BrownMushroom",      39),
    ("RedMushroom",        40),
    ("GoldBlock",          41),
    ("IronBlock",          42),
    ("DoubleStep",         43),
    ("Step",               44),
    ("Brick",              45),
    ("TNT",                46),
    ("Bookshelf",          47),
    ("MossyCobblestone",   48),
    ("Obsidian",           49),
    ("Torch",              50),
    ("Fire",               51),
    ("MobSpawner",         52),
    ("WoodenStairs",       53),
    ("Chest",              54),
    ("RedstoneWire",       55),
    ("DiamondOre",         56),
    ("DiamondBlock",       57),
    ("Workbench",          58),
    ("Crops",              59),
    ("Soil",               60),
    ("Furnace",            61),
    ("BurningFurnace",     62),
    ("SignPost",           63),
    ("WoodenDoor",         64),
    ("Ladder",             65),
    ("MinecartTracks",     66),
    ("CobblestoneStairs",  67),
    ("WallSign",           68),
    ("Lever",              69),
    ("StonePressurePlate", 70),
    ("IronDoor",           71),
    ("WoodenPressurePlate", 72),
    ("RedstoneOre",        73),
    ("GlowingRedstoneOre", 74),
    ("RedstoneTorchOff",   75),
    ("RedstoneTorchOn",    76),
    ("StoneButton",        77),
    ("Snow",               78),
    ("Ice",                79),
    ("SnowBlock",          80),
    ("Cactus",             81),
    ("Clay",               82),
    ("Reed",               83),
    ("Jukebox",            84),
    ("Fence",              85),
    ("IronShovel",        256),
    ("IronPickaxe",       257),
    ("IronAxe",           258),
    ("FlintAndSteel",     259),
    ("Apple",             260),
    ("Bow",               261),
    ("Arrow",             262),
    ("Coal",              263),
    ("Diamond",           264),
    ("IronIngot",         265),
    ("GoldIngot",         266),
    ("IronSword",         267),
    ("WoodenSword",       268),
    ("WoodenShovel",      269),
    ("WoodenPickaxe",     270),
    ("WoodenAxe",         271),
    ("StoneSword",        272),
    ("StoneShovel",       273),
    ("StonePickaxe",      274),
    ("StoneAxe",          275),
    ("DiamondSword",      276),
    ("DiamondShovel",     277),
    ("DiamondPickaxe",    278),
    ("DiamondAxe",        279),
    ("Stick",             280),
    ("Bowl",              281),
    ("MushroomSoup",      282),
    ("String",            287),
    ("Feather",           288),
    ("Gunpowder",         289),
    ("Seeds",             295),
    ("Wheat",             296),
    ("Bread",             297),
    ("Flint",             318),
    ("Pork",              319),
    ("GrilledPork",       320),
    ("Painting",          321),
    ("GoldenApple",       322),
    ("Sign",              323),
    ("Bucket",            325),
    ("WaterBucket",       326),
    ("LavaBucket",        327),
    ("Minecart",          328),
    ("Saddle",            329),
    ("Redstone",          331),
    ("Snowball",          332),
    ("Boat",              333),
    ("Leather",           334),
    ("MilkBucket",        335),
    ("ClayBrick",         336),
    ("ClayBalls",         337),
    ("Paper",             339),
    ("Book",              340),
    ("SlimeBall",         341),
    ("Egg",               344),
    ("Compass",           345),
    ("FishingRod",        346),
    ("Clock",             347),
    ("GlowstoneDust",     348),
    ("RawFish",           349),
    ("CookedFish",        350),
    ("GoldRecord",       2256),
    ("GreenRecord",      2257),
)

# Every enumeration scripts can see, name -> ordered (name, value) pairs.
ENUM_TABLES = {
    "ItemType": ITEM_TYPES,
    "Control":  tuple((c.name, c.value) for c in Control),
}


def enum_mapping(enum_name: str) -> dict:
    """Plain name -> value mapping for one table, in declaration order."""
    return dict(ENUM_TABLES[enum_name])
